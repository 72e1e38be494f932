from pydantic import BaseModel, Field
from typing import Optional


class Gap(BaseModel):
    """
    Compliance gap raised for an assessment.

    Enumerated fields are kept as strings and validated by the calculators,
    so a bad value fails only the computation that consumes it.
    """

    id: str = Field(..., min_length=1)

    assessment_id: str = Field(default="")

    category: str = Field(
        ...,
        description="Gap category, matched against vendor categories"
    )

    title: str = Field(default="")

    description: str = Field(default="")

    severity: str = Field(
        ...,
        description="CRITICAL, HIGH, MEDIUM or LOW"
    )

    priority: Optional[str] = Field(
        default=None,
        description="IMMEDIATE, SHORT_TERM, MEDIUM_TERM or LONG_TERM"
    )

    priority_score: Optional[float] = Field(
        default=None,
        description="Numeric priority 1-10 used for timeline bucketing"
    )

    estimated_effort: Optional[str] = Field(
        default=None,
        description="SMALL, MEDIUM or LARGE"
    )

    estimated_cost: Optional[str] = Field(
        default=None,
        description="Cost bucket, e.g. RANGE_10K_50K"
    )

    gap_size: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Size of the gap in percent; unset means a full gap"
    )

    documentation_related: Optional[bool] = Field(
        default=None,
        description="Explicit documentation flag; None falls back to text heuristics"
    )


class Risk(BaseModel):
    """
    Identified risk exposure for an assessment.
    """

    id: str = Field(..., min_length=1)

    category: Optional[str] = Field(
        default=None,
        description="GEOGRAPHIC, TRANSACTION, GOVERNANCE, OPERATIONAL, REGULATORY or REPUTATIONAL"
    )

    title: str = Field(default="")

    risk_level: str = Field(
        ...,
        description="CRITICAL, HIGH, MEDIUM or LOW"
    )

    control_effectiveness: Optional[float] = Field(
        default=None,
        description="Percentage 0-100; None when controls are unassessed"
    )

    likelihood: Optional[str] = Field(default=None)

    impact: Optional[str] = Field(default=None)
