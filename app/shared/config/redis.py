# 📄 File: app/shared/config/redis.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the Redis cache that keeps the platform fast by remembering
# course details and YouTube video information we already looked up.
#
# 🧪 Purpose (Technical Summary):
# Redis connection pooling, cache key patterns with TTL mappings, and JSON
# (de)serialization helpers shared by the cache service implementations.
#
# 🔗 Dependencies:
# - redis Python package (redis.asyncio)
# - app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - app.shared.infrastructure.cache (RedisCacheService)
# - app.modules.course_management.application (course cache keys)
# - app.modules.youtube.infrastructure (metadata cache keys)

import json
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import ConnectionPool, Redis

from .settings import get_settings

settings = get_settings()


# =============================================================================
# REDIS CONFIGURATION CLASS
# =============================================================================

class RedisConfig:
    """Redis configuration class with connection management."""

    def __init__(self):
        self.settings = settings
        self._connection_pool: ConnectionPool | None = None
        self._redis_client: Redis | None = None

    @property
    def redis_url(self) -> str:
        """Get Redis connection URL."""
        return self.settings.redis_url

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        """Get Redis connection configuration."""
        base_config = {
            "encoding": "utf-8",
            "decode_responses": True,
            "retry_on_timeout": True,
            "health_check_interval": 30,
        }

        if self.settings.is_production:
            base_config.update({
                "socket_timeout": 5.0,
                "socket_connect_timeout": 5.0,
                "socket_keepalive": True,
            })
        elif self.settings.is_development:
            base_config.update({
                "socket_timeout": 10.0,
                "socket_connect_timeout": 10.0,
            })

        return base_config

    def create_connection_pool(self) -> ConnectionPool:
        """Create Redis connection pool."""
        if self._connection_pool is None:
            self._connection_pool = ConnectionPool.from_url(
                self.redis_url,
                max_connections=self.settings.REDIS_MAX_CONNECTIONS,
                **self.connection_kwargs
            )
        return self._connection_pool

    def create_redis_client(self) -> Redis:
        """Create Redis client with connection pool."""
        if self._redis_client is None:
            pool = self.create_connection_pool()
            self._redis_client = Redis(connection_pool=pool)
        return self._redis_client

    async def close_connections(self):
        """Close Redis connections and cleanup."""
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None

        if self._connection_pool:
            await self._connection_pool.disconnect()
            self._connection_pool = None


# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

class CacheConfig:
    """Cache configuration with TTL settings and key patterns."""

    DEFAULT_TTL = settings.CACHE_DEFAULT_TTL
    COURSE_TTL = settings.CACHE_COURSE_TTL
    YOUTUBE_TTL = settings.CACHE_YOUTUBE_TTL

    KEY_PATTERNS = {
        # Course catalog
        "course_detail": "course:{course_id}",
        "course_listing": "courses:{query_hash}",

        # YouTube metadata
        "youtube_video": "youtube:video:{video_id}",
        "youtube_playlist": "youtube:playlist:{playlist_id}",
    }

    # Invalidation patterns (used with SCAN MATCH)
    INVALIDATION_PATTERNS = {
        "course_listing": "courses:*",
    }

    TTL_MAPPINGS = {
        "course_detail": COURSE_TTL,
        "course_listing": COURSE_TTL // 4,
        "youtube_video": YOUTUBE_TTL,
        "youtube_playlist": YOUTUBE_TTL,
    }

    @classmethod
    def get_cache_key(cls, pattern_name: str, **kwargs) -> str:
        """
        Generate cache key from pattern and parameters.

        Args:
            pattern_name: Name of the key pattern
            **kwargs: Parameters to substitute in the pattern

        Returns:
            Formatted cache key string
        """
        if pattern_name not in cls.KEY_PATTERNS:
            raise ValueError(f"Unknown cache key pattern: {pattern_name}")

        pattern = cls.KEY_PATTERNS[pattern_name]
        try:
            return pattern.format(**kwargs)
        except KeyError as e:
            raise ValueError(f"Missing parameter {e} for pattern {pattern_name}")

    @classmethod
    def get_ttl(cls, pattern_name: str, custom_ttl: Optional[int] = None) -> int:
        """Get TTL for cache key pattern."""
        if custom_ttl is not None:
            return custom_ttl
        return cls.TTL_MAPPINGS.get(pattern_name, cls.DEFAULT_TTL)


# =============================================================================
# REDIS UTILITIES
# =============================================================================

class RedisUtils:
    """Utility functions for Redis operations."""

    @staticmethod
    def serialize_value(value: Any) -> str:
        """
        Serialize Python object to JSON string for Redis storage.

        Args:
            value: Python object to serialize

        Returns:
            JSON string representation
        """
        try:
            return json.dumps(value, default=str)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cannot serialize value: {e}")

    @staticmethod
    def deserialize_value(value: Optional[str]) -> Any:
        """Deserialize a JSON string read from Redis."""
        if not value:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value


redis_config = RedisConfig()


def get_redis_client() -> Redis:
    """Get the shared Redis client."""
    return redis_config.create_redis_client()
