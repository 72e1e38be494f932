"""
Dependencies - Heliolus Scoring Engine
heliolus/core/dependencies.py

FastAPI dependency injection for policy, repositories and services.
"""

from functools import lru_cache

from heliolus.config import settings
from heliolus.repositories.memory import InMemoryGapRepository, InMemoryVendorRepository
from heliolus.scoring.policy import ScoringPolicy, policy_from_settings
from heliolus.services.cache import TTL_STRATEGY_MATRIX, get_cache
from heliolus.services.strategy_matrix_service import StrategyMatrixService


@lru_cache()
def get_scoring_policy() -> ScoringPolicy:
    """Get cached ScoringPolicy built from settings."""
    return policy_from_settings(settings)


@lru_cache()
def get_gap_repository() -> InMemoryGapRepository:
    """Get cached gap repository instance."""
    return InMemoryGapRepository()


@lru_cache()
def get_vendor_repository() -> InMemoryVendorRepository:
    """Get cached vendor repository instance."""
    return InMemoryVendorRepository()


def get_strategy_matrix_service() -> StrategyMatrixService:
    """Strategy matrix service bound to the shared cache (None when Redis is down)."""
    return StrategyMatrixService(
        gap_repository=get_gap_repository(),
        vendor_repository=get_vendor_repository(),
        cache=get_cache(),
        ttl=TTL_STRATEGY_MATRIX,
        policy=get_scoring_policy(),
    )
