"""
Strategy Matrix Partitioner
heliolus/scoring/strategy_matrix.py

Splits an assessment's gaps into three remediation horizons by their 1-10
priority score and summarises each horizon.

    immediate   8-10   "0-6 months"
    near_term   4-7    "6-18 months"
    strategic   1-3    "18+ months"

Per bucket:
    effort_distribution   SMALL / MEDIUM / LARGE counts
    estimated_cost_range  Σ cost midpoints ± 30 %, "€{low}–€{high}K (estimated)"
    top_vendors           up to 3 vendors by distinct gap categories covered,
                          ties by vendor id

A gap whose priority score is missing, fractional or outside 1-10 is not
bucketed; it is listed under excluded_gaps.
"""
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

import structlog

from heliolus.core.exceptions import DataIntegrityError
from heliolus.models.enumerations import CostRange, EffortRange, Timeline
from heliolus.models.gap import Gap
from heliolus.models.strategy_matrix import (
    EffortDistribution,
    ExcludedGap,
    StrategyMatrix,
    TimelineBucket,
    VendorRecommendation,
)
from heliolus.models.vendor import Vendor
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import parse_enum, round_half_up

logger = structlog.get_logger(__name__)

# (timeline, label, lowest score, highest score)
BUCKETS: Tuple[Tuple[Timeline, str, int, int], ...] = (
    (Timeline.IMMEDIATE, "0-6 months", 8, 10),
    (Timeline.NEAR_TERM, "6-18 months", 4, 7),
    (Timeline.STRATEGIC, "18+ months", 1, 3),
)

EMPTY_COST_RANGE = "€0"


def assign_bucket(priority_score, gap_id: str = "") -> Timeline:
    """
    Timeline for a priority score.

    Raises DataIntegrityError for None, non-integer or out-of-range values
    rather than reclassifying them.
    """
    if priority_score is None:
        raise DataIntegrityError("Gap", gap_id, "priority_score is missing")
    value = float(priority_score)
    if not value.is_integer():
        raise DataIntegrityError("Gap", gap_id, f"priority_score {priority_score} is not an integer")
    for timeline, _, low, high in BUCKETS:
        if low <= value <= high:
            return timeline
    raise DataIntegrityError("Gap", gap_id, f"priority_score {priority_score} is outside 1-10")


def effort_distribution(gaps: Sequence[Gap]) -> EffortDistribution:
    """Count gaps per effort size; gaps with no estimate are not counted."""
    counts = {effort: 0 for effort in EffortRange}
    for gap in gaps:
        if gap.estimated_effort is None:
            continue
        counts[parse_enum(EffortRange, gap.estimated_effort, "estimated_effort")] += 1
    return EffortDistribution(
        small=counts[EffortRange.SMALL],
        medium=counts[EffortRange.MEDIUM],
        large=counts[EffortRange.LARGE],
    )


def estimate_cost_range(gaps: Sequence[Gap], policy: ScoringPolicy = DEFAULT_POLICY) -> str:
    """
    Human-readable cost range for a set of gaps.

    Gaps without a cost estimate are priced as UNDER_10K.
    """
    if not gaps:
        return EMPTY_COST_RANGE

    total = Decimal("0")
    for gap in gaps:
        bucket = parse_enum(CostRange, gap.estimated_cost or CostRange.UNDER_10K, "estimated_cost")
        total += policy.cost_midpoints[bucket.value]

    thousand = Decimal("1000")
    low = round_half_up(total * (Decimal("1") - policy.cost_uncertainty) / thousand)
    high = round_half_up(total * (Decimal("1") + policy.cost_uncertainty) / thousand)
    return f"€{low}–€{high}K (estimated)"


def rank_vendors_for_bucket(
    gaps: Sequence[Gap],
    vendors: Sequence[Vendor],
    limit: int = 3,
) -> List[VendorRecommendation]:
    """
    Vendors ordered by how many distinct gap categories of the bucket they
    cover, most first, ties broken by vendor id. Vendors covering nothing
    are left out.
    """
    if not gaps:
        return []

    bucket_categories = {g.category for g in gaps}
    ranked: List[VendorRecommendation] = []
    for vendor in vendors:
        covered = bucket_categories.intersection(vendor.categories)
        if not covered:
            continue
        ranked.append(VendorRecommendation(
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            categories_covered=len(covered),
            covered_categories=sorted(covered),
            covered_gap_ids=[g.id for g in gaps if g.category in covered],
        ))

    ranked.sort(key=lambda r: (-r.categories_covered, r.vendor_id))
    return ranked[:limit]


def _build_bucket(
    timeline: Timeline,
    label: str,
    gaps: List[Gap],
    vendors: Sequence[Vendor],
    policy: ScoringPolicy,
) -> TimelineBucket:
    return TimelineBucket(
        timeline=timeline,
        label=label,
        gaps=gaps,
        gap_count=len(gaps),
        effort_distribution=effort_distribution(gaps),
        estimated_cost_range=estimate_cost_range(gaps, policy),
        top_vendors=rank_vendors_for_bucket(gaps, vendors, policy.top_vendor_limit),
    )


def build_strategy_matrix(
    assessment_id: str,
    gaps: Sequence[Gap],
    vendors: Sequence[Vendor],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> StrategyMatrix:
    """Partition gaps into timeline buckets and summarise each one."""
    partitioned: Dict[Timeline, List[Gap]] = {timeline: [] for timeline, _, _, _ in BUCKETS}
    excluded: List[ExcludedGap] = []

    # Highest priority first within each bucket
    ordered = sorted(gaps, key=lambda g: (-(g.priority_score or 0), g.id))
    for gap in ordered:
        try:
            timeline = assign_bucket(gap.priority_score, gap.id)
        except DataIntegrityError as e:
            logger.warning(
                "gap_excluded_from_strategy_matrix",
                assessment_id=assessment_id,
                gap_id=gap.id,
                priority_score=gap.priority_score,
                reason=e.message,
            )
            excluded.append(ExcludedGap(
                gap_id=gap.id,
                priority_score=gap.priority_score,
                reason=e.message,
            ))
            continue
        partitioned[timeline].append(gap)

    buckets = {
        timeline: _build_bucket(timeline, label, partitioned[timeline], vendors, policy)
        for timeline, label, _, _ in BUCKETS
    }

    logger.info(
        "strategy_matrix_built",
        assessment_id=assessment_id,
        immediate=buckets[Timeline.IMMEDIATE].gap_count,
        near_term=buckets[Timeline.NEAR_TERM].gap_count,
        strategic=buckets[Timeline.STRATEGIC].gap_count,
        excluded=len(excluded),
    )

    return StrategyMatrix(
        assessment_id=assessment_id,
        immediate=buckets[Timeline.IMMEDIATE],
        near_term=buckets[Timeline.NEAR_TERM],
        strategic=buckets[Timeline.STRATEGIC],
        excluded_gaps=excluded,
    )
