# 📄 File: app/shared/infrastructure/cache.py
# 🧭 Purpose (Layman Explanation):
# A short-term memory for answers that are expensive to compute (course pages, YouTube details)
# so repeated requests are fast. If the memory is unavailable the platform still works.
#
# 🧪 Purpose (Technical Summary):
# CacheService contract with a redis.asyncio implementation (JSON values, TTLs, SCAN-based
# pattern invalidation) and an in-process implementation for tests and cache-less runs.
# Redis failures are logged and treated as cache misses.
#
# 🔗 Dependencies:
# - redis.asyncio, app.shared.config.redis (RedisUtils)
#
# 🔄 Connected Modules / Calls From:
# - CourseApplicationService, YoutubeService, ContainerBuilder

import fnmatch
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.shared.config.redis import RedisUtils

logger = logging.getLogger(__name__)


class CacheService(ABC):
    """Best-effort key/value cache."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    @abstractmethod
    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern; returns the number removed."""
        pass

    async def ping(self) -> bool:
        """True when the backing store answers."""
        return True


class RedisCacheService(CacheService):
    """Redis-backed cache storing JSON-serialized values."""

    def __init__(self, client: Redis, default_ttl: int = 300):
        self._client = client
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if raw is None:
            logger.debug(f"Cache miss: {key}")
            return None
        return RedisUtils.deserialize_value(raw)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            await self._client.set(key, RedisUtils.serialize_value(value), ex=ttl or self._default_ttl)
        except (RedisError, ValueError) as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            logger.warning(f"Cache delete failed for {key}: {e}")

    async def delete_pattern(self, pattern: str) -> int:
        deleted = 0
        try:
            async for key in self._client.scan_iter(match=pattern, count=500):
                deleted += await self._client.delete(key)
        except RedisError as e:
            logger.warning(f"Cache pattern delete failed for {pattern}: {e}")
        logger.debug(f"Invalidated {deleted} keys matching {pattern}")
        return deleted

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"Cache ping failed: {e}")
            return False


class InMemoryCacheService(CacheService):
    """Process-local cache with TTL expiry."""

    def __init__(self, default_ttl: int = 300):
        self._default_ttl = default_ttl
        self._store: Dict[str, Tuple[float, Any]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at < time.monotonic():
            self._store.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        self._store[key] = (time.monotonic() + (ttl or self._default_ttl), value)

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def delete_pattern(self, pattern: str) -> int:
        keys = [key for key in self._store if fnmatch.fnmatchcase(key, pattern)]
        for key in keys:
            del self._store[key]
        return len(keys)
