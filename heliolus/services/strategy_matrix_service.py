"""
Strategy Matrix Service
heliolus/services/strategy_matrix_service.py

Cache-aside wrapper around build_strategy_matrix():

  1. Look up strategy_matrix:{assessment_id} in Redis
  2. On a hit, return the cached matrix without reading gaps or vendors
  3. On a miss, read gaps + vendors, build the matrix, cache it for the TTL

Callers invalidate one assessment after mutating its gaps, and every
assessment after mutating the shared vendor list.
Concurrent recomputations are harmless (last write wins); cache errors are
logged and the matrix is recomputed.
"""

from typing import Optional

import redis
import structlog

from heliolus.models.strategy_matrix import StrategyMatrix
from heliolus.repositories.base import GapRepository, VendorRepository
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.strategy_matrix import build_strategy_matrix
from heliolus.services.cache import (
    STRATEGY_MATRIX_PATTERN,
    TTL_STRATEGY_MATRIX,
    strategy_matrix_key,
)
from heliolus.services.redis_cache import RedisCache

logger = structlog.get_logger(__name__)


class StrategyMatrixService:
    """Generate, cache and invalidate strategy matrices per assessment."""

    def __init__(
        self,
        gap_repository: GapRepository,
        vendor_repository: VendorRepository,
        cache: Optional[RedisCache] = None,
        ttl: int = TTL_STRATEGY_MATRIX,
        policy: ScoringPolicy = DEFAULT_POLICY,
    ) -> None:
        self.gap_repository = gap_repository
        self.vendor_repository = vendor_repository
        self.cache = cache
        self.ttl = ttl
        self.policy = policy

    def _read_cache(self, key: str) -> Optional[StrategyMatrix]:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key, StrategyMatrix)
        except (redis.RedisError, ConnectionError, ValueError) as exc:
            logger.warning("strategy_matrix_cache_read_failed", key=key, error=str(exc))
            return None

    def _write_cache(self, key: str, matrix: StrategyMatrix) -> None:
        if self.cache is None:
            return
        try:
            self.cache.set(key, matrix, self.ttl)
        except (redis.RedisError, ConnectionError) as exc:
            logger.warning("strategy_matrix_cache_write_failed", key=key, error=str(exc))

    def generate(self, assessment_id: str) -> StrategyMatrix:
        key = strategy_matrix_key(assessment_id)

        cached = self._read_cache(key)
        if cached is not None:
            logger.info("strategy_matrix_cache_hit", assessment_id=assessment_id)
            return cached

        gaps = self.gap_repository.list_by_assessment(assessment_id)
        vendors = self.vendor_repository.list_approved()
        matrix = build_strategy_matrix(assessment_id, gaps, vendors, self.policy)

        self._write_cache(key, matrix)
        logger.info(
            "strategy_matrix_generated",
            assessment_id=assessment_id,
            cached=self.cache is not None,
        )
        return matrix

    def invalidate_cache(self, assessment_id: str) -> None:
        if self.cache is None:
            return
        key = strategy_matrix_key(assessment_id)
        try:
            self.cache.delete(key)
            logger.info("strategy_matrix_cache_invalidated", assessment_id=assessment_id)
        except (redis.RedisError, ConnectionError) as exc:
            logger.warning("strategy_matrix_cache_invalidate_failed", key=key, error=str(exc))

    def invalidate_all(self) -> None:
        """Drop every cached matrix; vendors are shared by all assessments."""
        if self.cache is None:
            return
        try:
            self.cache.delete_pattern(STRATEGY_MATRIX_PATTERN)
            logger.info("strategy_matrix_cache_cleared", pattern=STRATEGY_MATRIX_PATTERN)
        except (redis.RedisError, ConnectionError) as exc:
            logger.warning(
                "strategy_matrix_cache_clear_failed",
                pattern=STRATEGY_MATRIX_PATTERN,
                error=str(exc),
            )
