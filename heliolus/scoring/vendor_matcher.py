"""
Vendor Matcher
heliolus/scoring/vendor_matcher.py

Ranks vendors for an assessment:

    total = base (0-100) + priority boost (0-40)

sorted by total descending, ties by vendor id. match_vendors_per_bucket()
scores each non-empty strategy-matrix bucket against its own gaps.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Sequence

import structlog

from heliolus.models.gap import Gap
from heliolus.models.strategy_matrix import StrategyMatrix
from heliolus.models.vendor import AssessmentPriorities, Vendor
from heliolus.scoring.match_reasons import generate_match_reasons, generate_match_summary
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.priority_boost import PriorityBoost, calculate_priority_boost
from heliolus.scoring.vendor_base_scorer import BaseScore, calculate_base_score

logger = structlog.get_logger(__name__)


@dataclass
class VendorMatchScore:
    """One vendor's match against an assessment."""
    vendor_id: str
    vendor_name: str
    base_score: BaseScore
    priority_boost: PriorityBoost
    total_score: Decimal          # base + boost
    summary: str
    match_reasons: List[str] = field(default_factory=list)


class VendorMatcher:
    """Score and rank vendors with base fit plus priority boost."""

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self.policy = policy

    def score_vendor(
        self,
        vendor: Vendor,
        gaps: Sequence[Gap],
        priorities: AssessmentPriorities,
    ) -> VendorMatchScore:
        base = calculate_base_score(vendor, gaps, priorities, self.policy)
        boost = calculate_priority_boost(vendor, priorities, self.policy)
        total = base.total_base + boost.total_boost
        return VendorMatchScore(
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            base_score=base,
            priority_boost=boost,
            total_score=total,
            summary=generate_match_summary(total),
            match_reasons=generate_match_reasons(base, boost, self.policy),
        )

    def match(
        self,
        vendors: Sequence[Vendor],
        gaps: Sequence[Gap],
        priorities: AssessmentPriorities,
    ) -> List[VendorMatchScore]:
        scores = [self.score_vendor(v, gaps, priorities) for v in vendors]
        scores.sort(key=lambda s: (-s.total_score, s.vendor_id))

        logger.info(
            "vendors_matched",
            assessment_id=priorities.assessment_id,
            vendors=len(scores),
            gaps=len(gaps),
            top_score=float(scores[0].total_score) if scores else 0.0,
        )
        return scores


def match_vendors_per_bucket(
    matrix: StrategyMatrix,
    vendors: Sequence[Vendor],
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Dict[str, List[VendorMatchScore]]:
    """Ranked matches keyed by timeline ('immediate', 'nearTerm', 'strategic')."""
    matcher = VendorMatcher(policy)
    results: Dict[str, List[VendorMatchScore]] = {}
    for bucket in (matrix.immediate, matrix.near_term, matrix.strategic):
        if bucket.gap_count == 0:
            continue
        results[bucket.timeline.value] = matcher.match(vendors, bucket.gaps, priorities)
    return results
