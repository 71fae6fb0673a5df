import logging
import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from extensions import db, migrate
from config import DevConfig, ProdConfig
from logging_setup import setup_logger


logger = logging.getLogger("app")


def create_app(config_object=None, overrides: dict | None = None) -> Flask:
    """Initialize Flask app with DB + configuration."""
    app = Flask(__name__)

    if config_object is not None:
        app.config.from_object(config_object)
    elif os.getenv("FLASK_ENV") == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)
    if overrides:
        app.config.update(overrides)

    setup_logger(app.config["LOG_DIR"])

    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so SQLAlchemy registers tables.
    with app.app_context():
        from src import models  # noqa: F401
        # Ensure tables exist (useful for SQLite/dev). For production, prefer migrations.
        db.create_all()

    _register_blueprints(app)
    _register_error_handlers(app)

    logger.info(f"App created (database={app.config['SQLALCHEMY_DATABASE_URI'].split('://')[0]})")
    return app


def _register_blueprints(app: Flask):
    from src.routes.appointments import appointments_bp
    from src.routes.dashboard import dashboard_bp
    from src.routes.files import files_bp
    from src.routes.medical_records import records_bp
    from src.routes.messages import messages_bp
    from src.routes.patients import patients_bp
    from src.routes.reviews import reviews_bp

    for bp in (patients_bp, appointments_bp, records_bp, messages_bp, reviews_bp, files_bp, dashboard_bp):
        app.register_blueprint(bp)


def _register_error_handlers(app: Flask):
    from src.routes.common import InvalidPayload
    from src.services.clinic_service import SchedulingError
    from src.services.db_context import StorageError
    from src.services.file_service import UploadError

    @app.errorhandler(InvalidPayload)
    def invalid_payload(e: InvalidPayload):
        logger.info(f"{e.message}: {e.error}")
        return jsonify({"message": e.message, "error": e.error}), 400

    @app.errorhandler(SchedulingError)
    @app.errorhandler(UploadError)
    def rejected_request(e: ValueError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(StorageError)
    def storage_error(e: StorageError):
        return jsonify({"message": f"Failed to {e.operation.replace('_', ' ')}"}), 500

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code
