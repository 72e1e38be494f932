"""
Decimal Utilities
heliolus/scoring/utils.py

Provides precision-safe decimal math and small validation helpers shared by
the scoring calculators.
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional, Sequence, Type, TypeVar

from heliolus.core.exceptions import ScoringInputError, UnknownEnumValueError

E = TypeVar("E", bound=Enum)


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def parse_enum(enum_cls: Type[E], value, field: str) -> E:
    """
    Resolve a raw string (or enum member) to a member of enum_cls.

    Raises UnknownEnumValueError for anything that is not a declared value,
    including None.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownEnumValueError(field, value) from None


def weighted_mean(values: List[Decimal], weights: List[Decimal]) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns Decimal("0") if all weights are zero.
    """
    if len(values) != len(weights):
        raise ScoringInputError("values and weights must have same length")

    total_weight = sum(weights, Decimal("0"))
    if total_weight == 0:
        return Decimal("0")

    numerator = sum((v * w for v, w in zip(values, weights)), Decimal("0"))
    return (numerator / total_weight).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)


def weights_are_valid(weights: Sequence[float], tolerance: float = 0.01) -> bool:
    """True when the weights are non-negative and sum to 1.0 within tolerance."""
    if any(w < 0 for w in weights):
        return False
    total = to_decimal(sum(weights))
    return abs(total - Decimal("1")) <= Decimal(str(tolerance))


def normalize_weights(weights: Dict[str, float]) -> Dict[str, float]:
    """
    Rescale weights proportionally so they sum to 1.0.

    All-zero (or empty) input is spread evenly.
    """
    if not weights:
        return {}
    total = sum(weights.values())
    if total <= 0:
        even = 1.0 / len(weights)
        return {key: even for key in weights}
    return {key: w / total for key, w in weights.items()}


def scale_score(
    score: float,
    from_min: float = 0.0,
    from_max: float = 5.0,
    to_min: float = 0.0,
    to_max: float = 100.0,
) -> Decimal:
    """
    Linearly map a score from one range onto another.

    Default mapping is the 0-5 answer scale onto 0-100 (×20).
    """
    if from_max == from_min:
        raise ScoringInputError("source range must not be empty")
    s = Decimal(str(score))
    ratio = (s - Decimal(str(from_min))) / (Decimal(str(from_max)) - Decimal(str(from_min)))
    return Decimal(str(to_min)) + ratio * (Decimal(str(to_max)) - Decimal(str(to_min)))


def score_statistics(scores: Sequence[float]) -> Dict[str, Optional[float]]:
    """
    Summary statistics for a list of scores.

    Returns min/max/mean/median/count; the numeric fields are None when the
    list is empty.
    """
    if not scores:
        return {"min": None, "max": None, "mean": None, "median": None, "count": 0}

    ordered = sorted(Decimal(str(s)) for s in scores)
    n = len(ordered)
    mid = n // 2
    if n % 2:
        median = ordered[mid]
    else:
        median = (ordered[mid - 1] + ordered[mid]) / 2

    mean = sum(ordered, Decimal("0")) / n
    return {
        "min": float(ordered[0]),
        "max": float(ordered[-1]),
        "mean": float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        "median": float(median),
        "count": n,
    }
