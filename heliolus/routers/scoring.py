"""
Compliance Scoring API Router
heliolus/routers/scoring.py

Endpoints:
  POST   /api/v1/scoring/weighted                               — Evidence-weighted assessment score
  POST   /api/v1/scoring/risk                                   — Legacy gap/risk component scores
  POST   /api/v1/scoring/strategy-matrix                        — Timeline buckets (cached per assessment)
  DELETE /api/v1/scoring/strategy-matrix/{assessment_id}/cache  — Invalidate a cached matrix
  POST   /api/v1/scoring/vendor-matches                         — Ranked vendor matches

Register in main.py:
    from heliolus.routers.scoring import router as scoring_router
    app.include_router(scoring_router)
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from heliolus.config import settings
from heliolus.core.dependencies import (
    get_gap_repository,
    get_scoring_policy,
    get_strategy_matrix_service,
    get_vendor_repository,
)
from heliolus.core.exceptions import (
    DataIntegrityError,
    EntityNotFoundException,
    ScoringException,
    UnknownEnumValueError,
)
from heliolus.models.assessment import Answer, Document, Template
from heliolus.models.gap import Gap, Risk
from heliolus.models.strategy_matrix import StrategyMatrix
from heliolus.models.vendor import AssessmentPriorities, Vendor
from heliolus.repositories.memory import InMemoryGapRepository, InMemoryVendorRepository
from heliolus.scoring.policy import ScoringPolicy
from heliolus.scoring.risk_components import (
    RiskScoreCalculator,
    category_scores,
    composite_risk_index,
)
from heliolus.scoring.strategy_matrix import build_strategy_matrix
from heliolus.scoring.vendor_matcher import VendorMatcher, match_vendors_per_bucket
from heliolus.scoring.weighted_scorer import WeightedScoreCalculator
from heliolus.services.strategy_matrix_service import StrategyMatrixService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/scoring", tags=["Scoring"])


# =====================================================================
# Request Models
# =====================================================================

class WeightedScoreRequest(BaseModel):
    assessment_id: str = Field(..., min_length=1)
    template: Template
    answers: List[Answer] = Field(default_factory=list)
    documents: List[Document] = Field(default_factory=list)


class RiskScoreRequest(BaseModel):
    gaps: List[Gap] = Field(default_factory=list)
    risks: List[Risk] = Field(default_factory=list)
    include_categories: bool = False


class StrategyMatrixRequest(BaseModel):
    """
    Supplied gaps replace the assessment's stored gaps and invalidate its
    cached matrix. Supplied vendors are upserted into the shared vendor list
    and invalidate every cached matrix.
    """
    assessment_id: str = Field(..., min_length=1)
    gaps: Optional[List[Gap]] = None
    vendors: Optional[List[Vendor]] = None


class VendorMatchRequest(BaseModel):
    vendors: List[Vendor] = Field(default_factory=list)
    gaps: List[Gap] = Field(default_factory=list)
    priorities: AssessmentPriorities
    per_bucket: bool = False


# =====================================================================
# Exception handlers (registered in main.py)
# =====================================================================

def _error(status_code: int, error_code: str, message: str, details: Optional[dict] = None):
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def scoring_exception_handler(request: Request, exc: ScoringException):
    if isinstance(exc, UnknownEnumValueError):
        details = {"field": exc.field, "value": str(exc.value)}
        code = "UNKNOWN_VALUE"
    elif isinstance(exc, DataIntegrityError):
        details = {"entity_type": exc.entity_type, "entity_id": exc.entity_id}
        code = "DATA_INTEGRITY_ERROR"
    else:
        details = None
        code = "SCORING_INPUT_ERROR"
    logger.warning("scoring_request_rejected", path=request.url.path, error=str(exc))
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, code, str(exc), details)


async def not_found_exception_handler(request: Request, exc: EntityNotFoundException):
    return _error(
        status.HTTP_404_NOT_FOUND,
        "NOT_FOUND",
        str(exc),
        {"entity_type": exc.entity_type, "entity_id": exc.entity_id},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors and "json_invalid" in errors[0].get("type", ""):
        return _error(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Malformed JSON request body")
    field = ""
    if errors:
        field = ".".join(str(part) for part in errors[0].get("loc", []) if part != "body")
    return _error(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        f"Invalid value for field '{field}'" if field else "Request validation failed",
        {"field": field, "type": errors[0].get("type")} if field else None,
    )


# =====================================================================
# Endpoints
# =====================================================================

@router.post("/weighted", summary="Evidence-weighted assessment score")
async def score_weighted(
    body: WeightedScoreRequest,
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    calculator = WeightedScoreCalculator(policy)
    return calculator.calculate(body.assessment_id, body.template, body.answers, body.documents)


@router.post("/risk", summary="Legacy gap/risk component scores")
async def score_risk(
    body: RiskScoreRequest,
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    components = RiskScoreCalculator(policy).calculate(body.gaps, body.risks)
    result: Dict = {"components": components}
    if body.include_categories:
        by_category = category_scores(body.gaps, body.risks)
        result["category_scores"] = {c.value: s for c, s in by_category.items()}
        result["composite_risk_index"] = composite_risk_index(
            components.overall_risk_score, by_category
        )
    return result


@router.post(
    "/strategy-matrix",
    response_model=StrategyMatrix,
    summary="Timeline-bucketed gaps with vendor shortlist",
)
async def strategy_matrix(
    body: StrategyMatrixRequest,
    service: StrategyMatrixService = Depends(get_strategy_matrix_service),
    gap_repository: InMemoryGapRepository = Depends(get_gap_repository),
    vendor_repository: InMemoryVendorRepository = Depends(get_vendor_repository),
) -> StrategyMatrix:
    if body.vendors is not None:
        for vendor in body.vendors:
            vendor_repository.upsert(vendor)
        service.invalidate_all()
    if body.gaps is not None:
        gap_repository.replace(body.assessment_id, body.gaps)
        service.invalidate_cache(body.assessment_id)
    return service.generate(body.assessment_id)


@router.delete(
    "/strategy-matrix/{assessment_id}/cache",
    summary="Invalidate a cached strategy matrix",
)
async def invalidate_strategy_matrix(
    assessment_id: str,
    service: StrategyMatrixService = Depends(get_strategy_matrix_service),
) -> Dict:
    service.invalidate_cache(assessment_id)
    return {"assessment_id": assessment_id, "status": "invalidated"}


@router.post("/vendor-matches", summary="Ranked vendor matches")
async def vendor_matches(
    body: VendorMatchRequest,
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    if body.per_bucket:
        matrix = build_strategy_matrix(
            body.priorities.assessment_id, body.gaps, body.vendors, policy
        )
        return match_vendors_per_bucket(matrix, body.vendors, body.priorities, policy)
    return VendorMatcher(policy).match(body.vendors, body.gaps, body.priorities)
