"""
Match Reasons
heliolus/scoring/match_reasons.py

Human-readable explanations of a vendor match, a one-line summary and
side-by-side differentiators between two matches. Display policy only;
nothing here changes a score.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.priority_boost import PriorityBoost
from heliolus.scoring.utils import round_half_up
from heliolus.scoring.vendor_base_scorer import BaseScore

_RANK_LABELS = ("#1", "#2", "#3")

# Summary bands on the total (base + boost) score
SUMMARY_BANDS = (
    (Decimal("120"), "Excellent match - Highly recommended"),
    (Decimal("100"), "Strong match - Recommended"),
    (Decimal("80"), "Good match - Worth considering"),
)
SUMMARY_FALLBACK = "Partial match - May require evaluation"

COVERAGE_REASON_MIN = Decimal("30")


@dataclass(frozen=True)
class InsightThresholds:
    """Minimum differences before two vendors are called out as different."""
    total_score_pct: Decimal = Decimal("10")   # % of the higher total
    coverage_points: Decimal = Decimal("5")    # risk-area coverage points


@dataclass
class ComparativeInsight:
    type: str        # overall | gaps | priority | features | budget | speed | deployment
    message: str
    advantage: str   # vendor id of the stronger match


def generate_match_reasons(
    base: BaseScore,
    boost: PriorityBoost,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> List[str]:
    reasons: List[str] = []

    if boost.matched_priority:
        rank = policy.priority_rank_boosts.index(boost.top_priority_boost)
        reasons.append(f"Covers your {_RANK_LABELS[rank]} priority: {boost.matched_priority}")

    if base.risk_area_coverage >= COVERAGE_REASON_MIN:
        pct = round_half_up(base.risk_area_coverage / policy.coverage_max * 100)
        reasons.append(f"Addresses {pct}% of your identified compliance gaps")

    if boost.feature_boost == policy.features_all_boost:
        reasons.append("Has all must-have features you specified")
    elif boost.feature_boost == policy.features_partial_boost:
        missing = ", ".join(boost.missing_features)
        if len(boost.missing_features) == 1:
            reasons.append(f"Has most features, missing: {missing}")
        else:
            reasons.append(
                f"Has most features, missing {len(boost.missing_features)}: {missing}"
            )

    if base.size_fit == policy.size_exact:
        reasons.append("Designed for companies your size")
    elif base.size_fit == policy.size_adjacent:
        reasons.append("Well-suited for companies your size")

    if base.geo_coverage == policy.geo_max:
        reasons.append("Full coverage for all your jurisdictions")
    elif base.geo_coverage >= 15:
        reasons.append("Covers most of your required jurisdictions")
    elif base.geo_coverage >= 10:
        reasons.append("Partial coverage for your jurisdictions")

    if base.price_score == policy.price_max:
        reasons.append("Within your budget range")
    elif base.price_score == policy.price_partial:
        reasons.append("Pricing unknown or slightly above budget")

    if boost.deployment_boost > 0:
        reasons.append("Supports your preferred deployment model")

    if boost.speed_boost > 0:
        reasons.append(f"Fast implementation timeline (≤{policy.speed_max_days} days)")

    return reasons


def generate_match_summary(total_score) -> str:
    total = Decimal(str(total_score))
    for floor, text in SUMMARY_BANDS:
        if total >= floor:
            return text
    return SUMMARY_FALLBACK


def _pick(a_value, b_value, a, b):
    """Stronger of two matches on one metric, None on a tie."""
    if a_value > b_value:
        return a
    if b_value > a_value:
        return b
    return None


def comparative_insights(a, b, thresholds: InsightThresholds = InsightThresholds()) -> List[ComparativeInsight]:
    """
    Differentiators between two VendorMatchScore results.

    Overall and coverage differences must clear the thresholds; the other
    metrics are reported on any difference.
    """
    insights: List[ComparativeInsight] = []

    higher = max(a.total_score, b.total_score)
    if higher > 0:
        pct = abs(a.total_score - b.total_score) / higher * 100
        winner = _pick(a.total_score, b.total_score, a, b)
        if winner is not None and pct >= thresholds.total_score_pct:
            insights.append(ComparativeInsight(
                type="overall",
                message=f"{winner.vendor_name} scores {round_half_up(pct)}% higher overall",
                advantage=winner.vendor_id,
            ))

    a_cov, b_cov = a.base_score.risk_area_coverage, b.base_score.risk_area_coverage
    winner = _pick(a_cov, b_cov, a, b)
    if winner is not None and abs(a_cov - b_cov) >= thresholds.coverage_points:
        insights.append(ComparativeInsight(
            type="gaps",
            message=f"{winner.vendor_name} addresses more of your critical compliance gaps",
            advantage=winner.vendor_id,
        ))

    winner = _pick(a.priority_boost.top_priority_boost, b.priority_boost.top_priority_boost, a, b)
    if winner is not None:
        insights.append(ComparativeInsight(
            type="priority",
            message=f"{winner.vendor_name} better aligns with your top priorities",
            advantage=winner.vendor_id,
        ))

    # Fewer missing features wins
    a_missing = len(a.priority_boost.missing_features)
    b_missing = len(b.priority_boost.missing_features)
    winner = _pick(b_missing, a_missing, a, b)
    if winner is not None:
        insights.append(ComparativeInsight(
            type="features",
            message=f"{winner.vendor_name} has {abs(a_missing - b_missing)} more of your must-have features",
            advantage=winner.vendor_id,
        ))

    winner = _pick(a.base_score.price_score, b.base_score.price_score, a, b)
    if winner is not None:
        within = winner.base_score.price_score == DEFAULT_POLICY.price_max
        insights.append(ComparativeInsight(
            type="budget",
            message=f"{winner.vendor_name} is {'within' if within else 'closer to'} your budget",
            advantage=winner.vendor_id,
        ))

    winner = _pick(a.priority_boost.speed_boost, b.priority_boost.speed_boost, a, b)
    if winner is not None:
        insights.append(ComparativeInsight(
            type="speed",
            message=f"{winner.vendor_name} offers faster implementation",
            advantage=winner.vendor_id,
        ))

    winner = _pick(a.priority_boost.deployment_boost, b.priority_boost.deployment_boost, a, b)
    if winner is not None:
        insights.append(ComparativeInsight(
            type="deployment",
            message=f"{winner.vendor_name} matches your deployment preferences",
            advantage=winner.vendor_id,
        ))

    return insights
