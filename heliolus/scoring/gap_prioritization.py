"""
Gap Prioritisation
heliolus/scoring/gap_prioritization.py

Derives the severity, priority, effort and cost fields of a gap raised from
a weak answer. Inputs are the answer's final score (0-5), whether the
question is foundational and the weight of its section (0-1).

    priority_score = clamp(round((5 − score) × 2 + 2·foundational + 5 × section_weight), 1, 10)

    score     < 1.5 CRITICAL | < 2.5 HIGH | < 3.5 MEDIUM | else LOW
    priority  ≥ 9 IMMEDIATE  | ≥ 6 SHORT_TERM | ≥ 3 MEDIUM_TERM | else LONG_TERM
"""
from dataclasses import dataclass
from decimal import Decimal

from heliolus.models.enumerations import CostRange, EffortRange, Priority, Severity
from heliolus.scoring.utils import clamp, round_half_up

MIN_PRIORITY = 1
MAX_PRIORITY = 10
FOUNDATIONAL_BOOST = Decimal("2")
SECTION_WEIGHT_BOOST = Decimal("5")


@dataclass
class GapPrioritization:
    """Output of prioritize_gap()."""
    severity: Severity
    priority: Priority
    priority_score: int       # 1-10
    effort: EffortRange
    cost: CostRange


def gap_severity(score: float) -> Severity:
    if score < 1.5:
        return Severity.CRITICAL
    if score < 2.5:
        return Severity.HIGH
    if score < 3.5:
        return Severity.MEDIUM
    return Severity.LOW


def priority_score(score: float, is_foundational: bool, section_weight: float) -> int:
    """Numeric priority in [1, 10]; lower answer scores are more urgent."""
    priority = (Decimal("5") - Decimal(str(score))) * 2
    if is_foundational:
        priority += FOUNDATIONAL_BOOST
    priority += Decimal(str(section_weight)) * SECTION_WEIGHT_BOOST
    return round_half_up(clamp(priority, Decimal(MIN_PRIORITY), Decimal(MAX_PRIORITY)))


def priority_from_score(score: int) -> Priority:
    if score >= 9:
        return Priority.IMMEDIATE
    if score >= 6:
        return Priority.SHORT_TERM
    if score >= 3:
        return Priority.MEDIUM_TERM
    return Priority.LONG_TERM


def estimate_effort(section_weight: float, is_foundational: bool, score: float) -> EffortRange:
    """
    LARGE   major section (>0.25), foundational and severe (score < 2)
    MEDIUM  mid-weight section (0.15-0.25) or foundational
    SMALL   everything else
    """
    if section_weight > 0.25 and is_foundational and score < 2.0:
        return EffortRange.LARGE
    if 0.15 <= section_weight <= 0.25 or is_foundational:
        return EffortRange.MEDIUM
    return EffortRange.SMALL


def estimate_cost(
    effort: EffortRange,
    severity: Severity,
    section_weight: float,
    is_foundational: bool,
) -> CostRange:
    large_critical = effort == EffortRange.LARGE and severity == Severity.CRITICAL
    if large_critical and section_weight > 0.20:
        return CostRange.OVER_250K
    if large_critical:
        return CostRange.RANGE_100K_250K
    if effort == EffortRange.LARGE or (effort == EffortRange.MEDIUM and is_foundational):
        return CostRange.RANGE_50K_100K
    if effort == EffortRange.MEDIUM or is_foundational:
        return CostRange.RANGE_10K_50K
    return CostRange.UNDER_10K


def prioritize_gap(score: float, is_foundational: bool, section_weight: float) -> GapPrioritization:
    """All prioritisation fields for one gap."""
    severity = gap_severity(score)
    numeric = priority_score(score, is_foundational, section_weight)
    effort = estimate_effort(section_weight, is_foundational, score)
    return GapPrioritization(
        severity=severity,
        priority=priority_from_score(numeric),
        priority_score=numeric,
        effort=effort,
        cost=estimate_cost(effort, severity, section_weight, is_foundational),
    )
