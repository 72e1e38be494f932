from pydantic import BaseModel, Field
from typing import Optional, List


class Vendor(BaseModel):
    """
    Approved remediation vendor, read-only input to matching.
    """

    id: str = Field(..., min_length=1)

    name: str = Field(default="")

    categories: List[str] = Field(
        default_factory=list,
        description="Coverage categories, e.g. KYC_AML"
    )

    target_segments: List[str] = Field(
        default_factory=list,
        description="Company-size segments the vendor serves"
    )

    geographic_coverage: List[str] = Field(
        default_factory=list,
        description="Jurisdictions covered; GLOBAL covers everything"
    )

    pricing_range: Optional[str] = Field(
        default=None,
        description="Price bucket; None when the vendor has not declared pricing"
    )

    features: List[str] = Field(default_factory=list)

    deployment_options: str = Field(
        default="",
        description="Free-text deployment options, e.g. 'Cloud, Hybrid'"
    )

    implementation_timeline_days: Optional[int] = Field(
        default=None,
        ge=0,
        description="Typical implementation time in days"
    )


class AssessmentPriorities(BaseModel):
    """
    Organisation's stated priorities for one assessment.
    """

    assessment_id: str = Field(default="")

    company_size: Optional[str] = Field(default=None)

    jurisdictions: List[str] = Field(default_factory=list)

    ranked_priorities: List[str] = Field(
        default_factory=list,
        max_length=3,
        description="Top-3 priorities, most important first"
    )

    budget_range: Optional[str] = Field(default=None)

    deployment_preference: Optional[str] = Field(default=None)

    implementation_urgency: Optional[str] = Field(default=None)

    must_have_features: List[str] = Field(
        default_factory=list,
        max_length=5
    )
