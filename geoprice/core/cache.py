import json
from typing import Any
from cachetools import TTLCache
from .config import settings

# In-process store for generated insights.
_local_cache = TTLCache(maxsize=1024, ttl=settings.CACHE_TTL_SECONDS)

try:
    import redis  # Optional dependency
except ImportError:
    redis = None

class Cache:
    """
    String/JSON cache over Redis or in-memory TTLCache.
    Keys are namespaced so a shared Redis can host other apps.
    """
    def __init__(self, namespace: str = "geoprice"):
        self.namespace = namespace
        self.backend = None
        if settings.USE_REDIS and redis is not None:
            self.backend = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        if self.backend:
            return self.backend.get(self._key(key))
        return _local_cache.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        if self.backend:
            self.backend.setex(self._key(key), settings.CACHE_TTL_SECONDS, value)
        else:
            _local_cache[self._key(key)] = value

    def get_json(self, key: str) -> Any | None:
        raw = self.get(key)
        return json.loads(raw) if raw else None

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value, separators=(',',':')))

    def clear(self) -> None:
        """Drop in-process entries; Redis entries expire via TTL."""
        _local_cache.clear()

cache = Cache()
