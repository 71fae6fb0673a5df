import json
import logging
from typing import Callable, Optional

import redis
from flask import current_app


logger = logging.getLogger("cache_service")

KEY_PREFIX = "clinic"

# Groups of cached reads; writes invalidate whole groups.
STATS = "stats"
APPOINTMENTS = "appointments"

_clients: dict[str, redis.Redis] = {}


def _client() -> Optional[redis.Redis]:
    """Redis connection for the configured URL, or None when caching is disabled."""
    url = current_app.config.get("REDIS_URL")
    if not url:
        return None
    client = _clients.get(url)
    if client is None:
        client = redis.Redis.from_url(url, decode_responses=True)
        _clients[url] = client
    return client


# ✅ Helper for redis key formatting
def cache_key(group: str, *parts) -> str:
    return ":".join([KEY_PREFIX, group, *[str(p) for p in parts]])


def get_json(key: str):
    r = _client()
    if r is None:
        return None
    try:
        raw = r.get(key)
    except redis.RedisError as e:
        logger.warning(f"[Redis] Read failed for {key}: {e}")
        return None
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"[Redis] Corrupted entry for {key}, ignoring")
        return None


def set_json(key: str, value, ttl_sec: Optional[int] = None) -> bool:
    r = _client()
    if r is None:
        return False
    ttl = ttl_sec or current_app.config.get("CACHE_TTL_SECONDS", 60)
    try:
        return bool(r.setex(key, ttl, json.dumps(value)))
    except redis.RedisError as e:
        logger.warning(f"[Redis] Save failed for {key}: {e}")
        return False


def cached(key: str, loader: Callable[[], object]):
    """Return the cached value for ``key`` or compute, store and return it."""
    hit = get_json(key)
    if hit is not None:
        return hit
    value = loader()
    set_json(key, value)
    return value


def invalidate(*groups: str) -> int:
    """Drop every cached entry in the given groups. Returns the number of keys removed."""
    r = _client()
    if r is None:
        return 0
    removed = 0
    try:
        for group in groups:
            keys = list(r.scan_iter(f"{KEY_PREFIX}:{group}*"))
            if keys:
                removed += r.delete(*keys)
    except redis.RedisError as e:
        logger.warning(f"[Redis] Invalidation failed for {groups}: {e}")
        return removed
    if removed:
        logger.info(f"[Redis] Invalidated {removed} keys for {', '.join(groups)}")
    return removed
