import fnmatch

import pytest
from flask import Flask

from config import TestConfig
from extensions import db
from src.app_factory import create_app


@pytest.fixture
def app(tmp_path) -> Flask:
    app = create_app(
        TestConfig,
        {
            # Use sqlite file for stability across threads
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test_clinic.db'}",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "LOG_DIR": str(tmp_path / "logs"),
            "CLINIC_TIMEZONE": "UTC",
        },
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask):
    return app.test_client()


class FakeRedis:
    """Just enough of redis.Redis for the read cache."""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    def scan_iter(self, pattern):
        return [k for k in list(self.store) if fnmatch.fnmatch(k, pattern)]

    def delete(self, *keys):
        removed = 0
        for k in keys:
            if self.store.pop(k, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def fake_redis(app: Flask, monkeypatch):
    from src.services import cache_service

    fake = FakeRedis()
    app.config["REDIS_URL"] = "redis://fake:6379/0"
    monkeypatch.setitem(cache_service._clients, "redis://fake:6379/0", fake)
    return fake

