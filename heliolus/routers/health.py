"""
Health Check Router - Heliolus Scoring Engine
heliolus/routers/health.py

Returns service health, with a real Redis connection check. The scoring
engine stays healthy without Redis; caching is simply disabled.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

import redis

from heliolus.config import settings
from heliolus.services.cache import get_cache

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def check_redis() -> str:
    """Check Redis connection health."""
    cache = get_cache()
    if cache is None:
        return "unavailable (caching disabled)"
    try:
        cache.client.ping()
        return "healthy"
    except (redis.RedisError, ConnectionError) as e:
        return f"unhealthy: {e}"


#  Endpoints


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies={"redis": check_redis()},
    )
