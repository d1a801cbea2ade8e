"""
Infrastructure layer package for the LMS application.
Provides the SQLAlchemy unit of work, caching and external API clients.
"""

from .cache import CacheService, InMemoryCacheService, RedisCacheService

__all__ = ["CacheService", "InMemoryCacheService", "RedisCacheService"]
