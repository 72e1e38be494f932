"""
Vendor Base Scorer
heliolus/scoring/vendor_base_scorer.py

Base fit of a vendor for an assessment, 0-100 over four components:

    risk-area coverage  0-40   40 × covered distinct gap categories / distinct gap categories
    size fit            0-20   20 exact segment, 15 adjacent segment
    geographic coverage 0-20   20 × covered jurisdictions / required (GLOBAL covers all)
    price fit           0-20   20 overlap or below budget, 10 unknown pricing or
                               within tolerance, else 0

Company sizes are ordered STARTUP < SMB < MIDMARKET < ENTERPRISE; adjacent
means one step apart.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Sequence

from heliolus.models.enumerations import CompanySize, CostRange
from heliolus.models.gap import Gap
from heliolus.models.vendor import AssessmentPriorities, Vendor
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import parse_enum

GLOBAL_COVERAGE = "global"
_SIZE_SCALE = list(CompanySize)


class PriceRange(NamedTuple):
    min: Decimal
    max: Decimal


_PRICE_RANGES = {
    CostRange.UNDER_10K: PriceRange(Decimal("0"), Decimal("10000")),
    CostRange.RANGE_10K_50K: PriceRange(Decimal("10000"), Decimal("50000")),
    CostRange.RANGE_50K_100K: PriceRange(Decimal("50000"), Decimal("100000")),
    CostRange.RANGE_100K_250K: PriceRange(Decimal("100000"), Decimal("250000")),
    CostRange.OVER_250K: PriceRange(Decimal("250000"), Decimal("Infinity")),
}
UNBOUNDED_BUDGET = PriceRange(Decimal("0"), Decimal("Infinity"))


@dataclass
class BaseScore:
    """Output of calculate_base_score()."""
    vendor_id: str
    risk_area_coverage: Decimal  # 0-40
    size_fit: Decimal            # 0-20
    geo_coverage: Decimal        # 0-20
    price_score: Decimal         # 0-20
    total_base: Decimal          # 0-100


def risk_area_coverage(
    vendor: Vendor,
    gaps: Sequence[Gap],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    """Full credit when there are no gaps to cover."""
    if not gaps:
        return policy.coverage_max

    gap_categories = {g.category for g in gaps}
    covered = gap_categories.intersection(vendor.categories)
    return policy.coverage_max * len(covered) / len(gap_categories)


def size_fit(
    priorities: AssessmentPriorities,
    vendor: Vendor,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    if not vendor.target_segments or priorities.company_size is None:
        return Decimal("0")

    size = parse_enum(CompanySize, priorities.company_size, "company_size")
    if size.value in vendor.target_segments:
        return policy.size_exact

    idx = _SIZE_SCALE.index(size)
    adjacent = {
        _SIZE_SCALE[i].value for i in (idx - 1, idx + 1) if 0 <= i < len(_SIZE_SCALE)
    }
    if adjacent.intersection(vendor.target_segments):
        return policy.size_adjacent
    return Decimal("0")


def geo_coverage(
    priorities: AssessmentPriorities,
    vendor: Vendor,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    """Case-insensitive; full credit when no jurisdictions are required."""
    required = priorities.jurisdictions
    if not required:
        return policy.geo_max

    covered = {j.lower() for j in vendor.geographic_coverage}
    if GLOBAL_COVERAGE in covered:
        return policy.geo_max

    matched = sum(1 for j in required if j.lower() in covered)
    return policy.geo_max * matched / len(required)


def convert_budget_range(budget: Optional[str]) -> PriceRange:
    """Numeric bounds of a budget / pricing bucket; None is unbounded."""
    if budget is None:
        return UNBOUNDED_BUDGET
    return _PRICE_RANGES[parse_enum(CostRange, budget, "budget_range")]


def price_ranges_overlap(a: PriceRange, b: PriceRange) -> bool:
    """Ranges touching at a boundary overlap."""
    return not (a.min > b.max or a.max < b.min)


def price_fit(
    priorities: AssessmentPriorities,
    vendor: Vendor,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    if vendor.pricing_range is None:
        return policy.price_partial

    budget = convert_budget_range(priorities.budget_range)
    price = convert_budget_range(vendor.pricing_range)

    if price_ranges_overlap(budget, price) or price.max < budget.min:
        return policy.price_max
    if price.min <= budget.max * policy.price_tolerance:
        return policy.price_partial
    return Decimal("0")


def calculate_base_score(
    vendor: Vendor,
    gaps: Sequence[Gap],
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> BaseScore:
    coverage = risk_area_coverage(vendor, gaps, policy).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    size = size_fit(priorities, vendor, policy)
    geo = geo_coverage(priorities, vendor, policy).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    price = price_fit(priorities, vendor, policy)
    return BaseScore(
        vendor_id=vendor.id,
        risk_area_coverage=coverage,
        size_fit=size,
        geo_coverage=geo,
        price_score=price,
        total_base=coverage + size + geo + price,
    )
