"""
Services module for the Heliolus scoring engine.
"""

from heliolus.services.cache import get_cache
from heliolus.services.redis_cache import RedisCache
from heliolus.services.strategy_matrix_service import StrategyMatrixService
