"""
Cache Service Singleton - Heliolus Scoring Engine
heliolus/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability: a failed connect is remembered for
CACHE_RETRY_INTERVAL_SECONDS so requests do not each wait on the connect
timeout while Redis is down.
"""
import time
import redis
from typing import Optional
from heliolus.services.redis_cache import RedisCache
from heliolus.config import settings

# TTL constants (in seconds)
TTL_STRATEGY_MATRIX = settings.CACHE_TTL_STRATEGY_MATRIX  # 7 days by default
RETRY_INTERVAL = settings.CACHE_RETRY_INTERVAL_SECONDS

STRATEGY_MATRIX_KEY = "strategy_matrix:{assessment_id}"
STRATEGY_MATRIX_PATTERN = "strategy_matrix:*"

# Singleton instance
_cache: Optional[RedisCache] = None
_failed_at: Optional[float] = None


def strategy_matrix_key(assessment_id: str) -> str:
    return STRATEGY_MATRIX_KEY.format(assessment_id=assessment_id)


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
        After a failure, no reconnect is attempted until RETRY_INTERVAL
        seconds have passed.
    """
    global _cache, _failed_at
    if _cache is None:
        if _failed_at is not None and time.monotonic() - _failed_at < RETRY_INTERVAL:
            return None
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
            _failed_at = None
        except (redis.RedisError, ConnectionError):
            _cache = None
            _failed_at = time.monotonic()
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton and forget any recent connection failure.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache, _failed_at
    _cache = None
    _failed_at = None
