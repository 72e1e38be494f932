from pydantic import BaseModel, Field
from typing import Optional, List

from heliolus.models.enumerations import Timeline
from heliolus.models.gap import Gap


class EffortDistribution(BaseModel):
    """Gap counts per remediation effort size."""

    small: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    large: int = Field(default=0, ge=0)


class VendorRecommendation(BaseModel):
    """Vendor suggested for a timeline bucket, ranked by category coverage."""

    vendor_id: str
    vendor_name: str = ""

    categories_covered: int = Field(
        ...,
        ge=0,
        description="Distinct bucket gap categories the vendor covers"
    )

    covered_categories: List[str] = Field(default_factory=list)

    covered_gap_ids: List[str] = Field(default_factory=list)


class TimelineBucket(BaseModel):
    """One remediation horizon of the strategy matrix."""

    timeline: Timeline

    label: str = Field(..., description="Human-readable horizon, e.g. '0-6 months'")

    gaps: List[Gap] = Field(default_factory=list)

    gap_count: int = Field(default=0, ge=0)

    effort_distribution: EffortDistribution = Field(default_factory=EffortDistribution)

    estimated_cost_range: str = Field(default="€0")

    top_vendors: List[VendorRecommendation] = Field(default_factory=list)


class ExcludedGap(BaseModel):
    """Gap left out of every bucket because its priority score is invalid."""

    gap_id: str

    priority_score: Optional[float] = None

    reason: str


class StrategyMatrix(BaseModel):
    """
    Timeline partition of an assessment's gaps.

    Cached as JSON under strategy_matrix:{assessment_id}.
    """

    assessment_id: str

    immediate: TimelineBucket

    near_term: TimelineBucket

    strategic: TimelineBucket

    excluded_gaps: List[ExcludedGap] = Field(default_factory=list)
