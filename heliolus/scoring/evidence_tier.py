"""
Evidence Tier Multipliers
heliolus/scoring/evidence_tier.py

Maps the evidence tier of an answer's supporting documents to the
multiplier applied to its raw quality score.

    TIER_2  system-generated   1.0
    TIER_1  policy document    0.8
    TIER_0  self-declared      0.6

When an answer cites several documents, the best tier wins; a weak extra
attachment never lowers the score.
"""
from decimal import Decimal
from typing import Iterable, Optional

from heliolus.models.enumerations import EvidenceTier
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import parse_enum

# Best first
_TIER_ORDER = (EvidenceTier.TIER_2, EvidenceTier.TIER_1, EvidenceTier.TIER_0)


def tier_multiplier(tier, policy: ScoringPolicy = DEFAULT_POLICY) -> Decimal:
    """Multiplier for a tier; unknown tiers raise UnknownEnumValueError."""
    resolved = parse_enum(EvidenceTier, tier, "evidence_tier")
    return policy.tier_multipliers[resolved.value]


def best_tier(tiers: Iterable[Optional[str]]) -> EvidenceTier:
    """
    Highest tier among the given values.

    None entries (documents not yet classified) are skipped. An empty list, or
    one holding only unclassified documents, counts as self-declared (TIER_0).
    """
    seen = {parse_enum(EvidenceTier, t, "evidence_tier") for t in tiers if t is not None}
    for tier in _TIER_ORDER:
        if tier in seen:
            return tier
    return EvidenceTier.TIER_0
