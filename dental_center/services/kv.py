"""Key-value backends used by the clinic store."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

import redis

from dental_center.utils.config import Settings

LOGGER = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Minimal string key-value contract the store persists through."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class RedisBackend:
    """Durable backend on top of a Redis connection."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBackend":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> Optional[str]:
        """Get a value from Redis by key."""

        return self._client.get(name=key)

    def set(self, key: str, value: str) -> None:
        """Set a value in Redis without expiration."""

        self._client.set(name=key, value=value)

    def delete(self, key: str) -> None:
        """Remove a key from Redis."""

        self._client.delete(key)


class MemoryBackend:
    """Process-local backend; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def build_backend(settings: Settings) -> KeyValueBackend:
    """Construct the backend selected by configuration."""

    if settings.storage_backend == "memory":
        LOGGER.info("Using in-memory storage backend")
        return MemoryBackend()

    LOGGER.info("Using Redis storage backend at %s", settings.redis_url)
    return RedisBackend.from_url(settings.redis_url)
