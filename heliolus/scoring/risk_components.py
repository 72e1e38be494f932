"""
Gap / Risk Component Scorer
heliolus/scoring/risk_components.py

Legacy 0-100 risk score built from four independent sub-scores:

    overall = round(0.30 × compliance + 0.40 × risk
                    + 0.20 × maturity + 0.10 × documentation)   clamped [0, 100]

compliance     100 − 100 × min(1, Σ(severity_w × gap_size/100) / (n × 25))
risk           100 − 100 × min(1, Σ(level_w × likelihood × impact × (1 − ctrl/100)) / (n × 25))
maturity       50 + documentation bonus + control term + critical-gap term + breadth bonus
documentation  100 − 100 × Σ(severity_w) / (n × 20) over documentation gaps

Empty inputs never divide by zero: no gaps → compliance 85 and
documentation 85; no risks → risk 75; nothing at all → overall 50.

Also provides per-category scores, the composite risk index and simple
trend analysis over historical scores.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

import structlog

from heliolus.core.exceptions import ScoringInputError
from heliolus.models.enumerations import (
    Impact,
    Likelihood,
    RiskCategory,
    RiskLevel,
    Severity,
)
from heliolus.models.gap import Gap, Risk
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import clamp, parse_enum, round_half_up

logger = structlog.get_logger(__name__)

FULL_GAP_SIZE = Decimal("100")

# Per-category severity / risk-level weights on a 0-100 scale
_CATEGORY_WEIGHTS: Dict[str, Decimal] = {
    "CRITICAL": Decimal("100"),
    "HIGH": Decimal("75"),
    "MEDIUM": Decimal("50"),
    "LOW": Decimal("25"),
}
CATEGORY_NEUTRAL_SCORE = 50

# Composite index default category weights (sum = 1.0)
COMPOSITE_CATEGORY_WEIGHTS: Dict[RiskCategory, Decimal] = {
    RiskCategory.REGULATORY: Decimal("0.25"),
    RiskCategory.OPERATIONAL: Decimal("0.20"),
    RiskCategory.GOVERNANCE: Decimal("0.15"),
    RiskCategory.REPUTATIONAL: Decimal("0.15"),
    RiskCategory.TRANSACTION: Decimal("0.15"),
    RiskCategory.GEOGRAPHIC: Decimal("0.10"),
}
COMPOSITE_OVERALL_SHARE = Decimal("0.6")
COMPOSITE_CATEGORY_SHARE = Decimal("0.4")

# Risk level thresholds for the legacy category view
LEVEL_LOW_MIN = 80
LEVEL_MEDIUM_MIN = 60
LEVEL_HIGH_MIN = 30

# Trend analysis
TREND_THRESHOLD = 2
TREND_NOISE = 1


@dataclass
class RiskComponentScores:
    """Output of RiskScoreCalculator.calculate()."""
    compliance_score: int
    risk_score: int
    maturity_score: int
    documentation_score: int
    overall_risk_score: int


@dataclass
class TrendResult:
    direction: str        # improving | declining | stable
    change_rate: float    # % change against the latest previous score
    confidence: int       # 0-100


def _gap_factor(gap: Gap) -> Decimal:
    size = FULL_GAP_SIZE if gap.gap_size is None else Decimal(str(gap.gap_size))
    return size / FULL_GAP_SIZE


def _control(risk: Risk) -> Decimal:
    if risk.control_effectiveness is None:
        return Decimal("0")
    value = Decimal(str(risk.control_effectiveness))
    if value.is_nan() or value < 0 or value > 100:
        raise ScoringInputError(
            f"control_effectiveness for risk {risk.id} must be within 0-100, "
            f"got {risk.control_effectiveness}"
        )
    return value


def _severity(gap: Gap) -> Severity:
    return parse_enum(Severity, gap.severity, "severity")


def _impact_ratio_score(total: Decimal, max_total: Decimal) -> int:
    ratio = min(Decimal("1"), total / max_total)
    return round_half_up(Decimal("100") - ratio * Decimal("100"))


def is_documentation_gap(gap: Gap) -> bool:
    """
    Explicit documentation_related flag wins; otherwise infer from text:
    category mentions documentation, title mentions a policy or procedure,
    or description mentions something documented.
    """
    if gap.documentation_related is not None:
        return gap.documentation_related
    return (
        "documentation" in gap.category.lower()
        or "policy" in gap.title.lower()
        or "procedure" in gap.title.lower()
        or "documented" in gap.description.lower()
    )


def _is_process_gap(gap: Gap) -> bool:
    if gap.documentation_related is not None:
        return gap.documentation_related
    category = gap.category.lower()
    return (
        "documentation" in category
        or "process" in category
        or "documented" in gap.description.lower()
    )


def compliance_score(gaps: Sequence[Gap], policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Fewer and smaller severe gaps → higher score."""
    if not gaps:
        return policy.compliance_empty_score

    weights = policy.compliance_severity_weights
    total = sum(
        (weights[_severity(g).value] * _gap_factor(g) for g in gaps),
        Decimal("0"),
    )
    return _impact_ratio_score(total, len(gaps) * max(weights.values()))


def risk_score(risks: Sequence[Risk], policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Fewer severe, likely, high-impact, poorly controlled risks → higher score."""
    if not risks:
        return policy.risk_empty_score

    weights = policy.risk_level_weights
    total = Decimal("0")
    for risk in risks:
        level = parse_enum(RiskLevel, risk.risk_level, "risk_level")
        if risk.likelihood is None:
            likelihood = policy.unassessed_multiplier
        else:
            likelihood = policy.likelihood_multipliers[
                parse_enum(Likelihood, risk.likelihood, "likelihood").value
            ]
        if risk.impact is None:
            impact = policy.unassessed_multiplier
        else:
            impact = policy.impact_multipliers[
                parse_enum(Impact, risk.impact, "impact").value
            ]
        residual = Decimal("1") - _control(risk) / Decimal("100")
        total += weights[level.value] * likelihood * impact * residual

    return _impact_ratio_score(total, len(risks) * max(weights.values()))


def maturity_score(
    gaps: Sequence[Gap],
    risks: Sequence[Risk],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    """
    Posture maturity from four indicators:

        process documentation  +15 with no documentation gaps, +8 with fewer than 3
        control effectiveness  round((avg_ctrl − 50) / 5), avg 70 when no risks
        critical gaps          +10 none, +5 for up to 2, −10 beyond that
        risk breadth           +10 for ≥4 distinct risk categories, +5 for ≥2
    """
    score = Decimal(policy.maturity_base)

    process_gaps = sum(1 for g in gaps if _is_process_gap(g))
    if process_gaps == 0:
        score += 15
    elif process_gaps < 3:
        score += 8

    if risks:
        avg_control = sum((_control(r) for r in risks), Decimal("0")) / len(risks)
    else:
        avg_control = policy.maturity_assumed_control
    score += round_half_up((avg_control - Decimal("50")) / Decimal("5"))

    critical = sum(1 for g in gaps if _severity(g) == Severity.CRITICAL)
    if critical == 0:
        score += 10
    elif critical <= 2:
        score += 5
    else:
        score -= 10

    categories = {
        parse_enum(RiskCategory, r.category, "risk_category")
        for r in risks
        if r.category is not None
    }
    if len(categories) >= 4:
        score += 10
    elif len(categories) >= 2:
        score += 5

    return round_half_up(clamp(score))


def documentation_score(gaps: Sequence[Gap], policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Severity-weighted penalty over documentation gaps only."""
    doc_gaps = [g for g in gaps if is_documentation_gap(g)]
    if not doc_gaps:
        return policy.documentation_empty_score

    weights = policy.documentation_severity_weights
    total = sum((weights[_severity(g).value] for g in doc_gaps), Decimal("0"))
    return _impact_ratio_score(total, len(doc_gaps) * max(weights.values()))


def _blend(c: int, r: int, m: int, d: int, policy: ScoringPolicy) -> int:
    weighted = (
        Decimal(c) * policy.w_compliance
        + Decimal(r) * policy.w_risk
        + Decimal(m) * policy.w_maturity
        + Decimal(d) * policy.w_documentation
    )
    return round_half_up(clamp(weighted))


def overall_risk_score(
    gaps: Sequence[Gap],
    risks: Sequence[Risk],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    """Blended 0-100 score; neutral empty_risk_score with no gaps and no risks."""
    if not gaps and not risks:
        return policy.empty_risk_score
    return _blend(
        compliance_score(gaps, policy),
        risk_score(risks, policy),
        maturity_score(gaps, risks, policy),
        documentation_score(gaps, policy),
        policy,
    )


class RiskScoreCalculator:
    """Compute all four component scores and their blend in one pass."""

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self.policy = policy

    def calculate(self, gaps: Sequence[Gap], risks: Sequence[Risk]) -> RiskComponentScores:
        c = compliance_score(gaps, self.policy)
        r = risk_score(risks, self.policy)
        m = maturity_score(gaps, risks, self.policy)
        d = documentation_score(gaps, self.policy)

        if not gaps and not risks:
            overall = self.policy.empty_risk_score
        else:
            overall = _blend(c, r, m, d, self.policy)

        logger.info(
            "risk_score_calculated",
            gaps=len(gaps),
            risks=len(risks),
            compliance_score=c,
            risk_score=r,
            maturity_score=m,
            documentation_score=d,
            overall_risk_score=overall,
        )

        return RiskComponentScores(
            compliance_score=c,
            risk_score=r,
            maturity_score=m,
            documentation_score=d,
            overall_risk_score=overall,
        )


# ---------------------------------------------------------------------------
# Category view
# ---------------------------------------------------------------------------

def map_gap_category(category: str) -> RiskCategory:
    """Map a free-text gap category onto a risk category (keyword match)."""
    lowered = (category or "").lower()
    if "governance" in lowered:
        return RiskCategory.GOVERNANCE
    if "regulatory" in lowered or "compliance" in lowered:
        return RiskCategory.REGULATORY
    if "reputation" in lowered or "brand" in lowered:
        return RiskCategory.REPUTATIONAL
    if "geographic" in lowered or "jurisdiction" in lowered:
        return RiskCategory.GEOGRAPHIC
    if "transaction" in lowered or "financial" in lowered:
        return RiskCategory.TRANSACTION
    return RiskCategory.OPERATIONAL


def _category_risk_score(risks: List[Risk]) -> int:
    total = Decimal("0")
    for risk in risks:
        level = parse_enum(RiskLevel, risk.risk_level, "risk_level")
        total += _CATEGORY_WEIGHTS[level.value] * (Decimal("1") - _control(risk) / Decimal("100"))
    return round_half_up(Decimal("100") - total / len(risks))


def _category_gap_score(gaps: List[Gap]) -> int:
    total = sum(
        (_CATEGORY_WEIGHTS[_severity(g).value] * _gap_factor(g) for g in gaps),
        Decimal("0"),
    )
    return round_half_up(Decimal("100") - total / len(gaps))


def category_scores(gaps: Sequence[Gap], risks: Sequence[Risk]) -> Dict[RiskCategory, int]:
    """
    0-100 score for each of the six risk categories.

    Risks count toward their own category, gaps toward map_gap_category().
    The two sides are averaged weighted by item count; a category with no
    data scores a neutral 50.
    """
    risks_by_category: Dict[RiskCategory, List[Risk]] = {c: [] for c in RiskCategory}
    for risk in risks:
        if risk.category is None:
            continue
        risks_by_category[parse_enum(RiskCategory, risk.category, "risk_category")].append(risk)

    gaps_by_category: Dict[RiskCategory, List[Gap]] = {c: [] for c in RiskCategory}
    for gap in gaps:
        gaps_by_category[map_gap_category(gap.category)].append(gap)

    scores: Dict[RiskCategory, int] = {}
    for category in RiskCategory:
        cat_risks = risks_by_category[category]
        cat_gaps = gaps_by_category[category]
        if not cat_risks and not cat_gaps:
            scores[category] = CATEGORY_NEUTRAL_SCORE
            continue

        weighted = Decimal("0")
        if cat_risks:
            weighted += Decimal(_category_risk_score(cat_risks)) * len(cat_risks)
        if cat_gaps:
            weighted += Decimal(_category_gap_score(cat_gaps)) * len(cat_gaps)
        scores[category] = round_half_up(weighted / (len(cat_risks) + len(cat_gaps)))

    return scores


def composite_risk_index(
    overall: int,
    scores_by_category: Dict[RiskCategory, int],
    weights: Optional[Dict[RiskCategory, float]] = None,
) -> int:
    """
    round(0.6 × overall + 0.4 × Σ(category_score × category_weight))

    weights overrides individual entries of COMPOSITE_CATEGORY_WEIGHTS.
    """
    effective = dict(COMPOSITE_CATEGORY_WEIGHTS)
    for category, w in (weights or {}).items():
        effective[parse_enum(RiskCategory, category, "risk_category")] = Decimal(str(w))

    category_average = sum(
        (Decimal(score) * effective.get(parse_enum(RiskCategory, cat, "risk_category"), Decimal("0"))
         for cat, score in scores_by_category.items()),
        Decimal("0"),
    )
    return round_half_up(
        Decimal(overall) * COMPOSITE_OVERALL_SHARE + category_average * COMPOSITE_CATEGORY_SHARE
    )


def risk_level_from_score(score) -> RiskLevel:
    s = Decimal(str(score))
    if s >= LEVEL_LOW_MIN:
        return RiskLevel.LOW
    if s >= LEVEL_MEDIUM_MIN:
        return RiskLevel.MEDIUM
    if s >= LEVEL_HIGH_MIN:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def _sign(x: Decimal) -> int:
    return (x > 0) - (x < 0)


def _trend_is_consistent(history: List[Decimal]) -> bool:
    last_change = Decimal("0")
    for i in range(1, len(history)):
        change = history[i] - history[i - 1]
        if i > 1 and _sign(change) != _sign(last_change) and abs(change) > TREND_NOISE:
            return False
        last_change = change
    return True


def calculate_trend(current, previous: Sequence[float]) -> TrendResult:
    """
    Direction and rate of change of the current score against history.

    A move of more than 2 points is a trend. Confidence is 80 when the
    history (3+ points) moves consistently in one direction, 40 when it
    does not, 50 with a shorter history and 0 with none.
    """
    if not previous:
        return TrendResult(direction="stable", change_rate=0.0, confidence=0)

    current_d = Decimal(str(current))
    history = [Decimal(str(p)) for p in previous]
    last = history[-1]
    change = current_d - last

    if last == 0:
        change_rate = Decimal("0")
    else:
        change_rate = abs(change) / last * Decimal("100")

    if change > TREND_THRESHOLD:
        direction = "improving"
    elif change < -TREND_THRESHOLD:
        direction = "declining"
    else:
        direction = "stable"

    if len(history) >= 3:
        confidence = 80 if _trend_is_consistent(history + [current_d]) else 40
    else:
        confidence = 50

    return TrendResult(
        direction=direction,
        change_rate=float(change_rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        confidence=confidence,
    )
