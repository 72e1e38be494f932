"""
Priority Boost
heliolus/scoring/priority_boost.py

Additive bonus rewarding alignment with an organisation's stated priorities:

    top priority   20 / 15 / 10 when a vendor category matches the #1 / #2 / #3
                   ranked priority (highest rank only, no stacking)
    features       10 all must-haves present, 5 with one or two missing
    deployment      5 preference FLEXIBLE or supported by the vendor
    speed           5 urgency IMMEDIATE and implementation within 90 days
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from heliolus.models.enumerations import DeploymentPreference, ImplementationUrgency
from heliolus.models.vendor import AssessmentPriorities, Vendor
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import parse_enum


@dataclass
class PriorityBoost:
    """Output of calculate_priority_boost()."""
    vendor_id: str
    top_priority_boost: Decimal
    matched_priority: Optional[str]   # As entered by the organisation
    feature_boost: Decimal
    deployment_boost: Decimal
    speed_boost: Decimal
    total_boost: Decimal
    missing_features: List[str] = field(default_factory=list)


def normalize_priority(priority: Optional[str]) -> Optional[str]:
    """'transaction-monitoring' → 'TRANSACTION_MONITORING'; blank → None."""
    if not priority or not priority.strip():
        return None
    return priority.strip().upper().replace("-", "_")


def _normalize_option(text: str) -> str:
    return text.lower().replace("-", "_").replace(" ", "_")


def top_priority_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Tuple[Decimal, Optional[str]]:
    """Boost for the highest-ranked priority the vendor covers, and that priority."""
    categories = set(vendor.categories)
    for rank, priority in enumerate(priorities.ranked_priorities[:len(policy.priority_rank_boosts)]):
        normalized = normalize_priority(priority)
        if normalized and normalized in categories:
            return policy.priority_rank_boosts[rank], priority
    return Decimal("0"), None


def feature_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Tuple[Decimal, List[str]]:
    """Boost for must-have feature coverage, and the features missing."""
    missing = [f for f in priorities.must_have_features if f not in vendor.features]
    if not missing:
        return policy.features_all_boost, []
    if len(missing) <= policy.features_partial_max_missing:
        return policy.features_partial_boost, missing
    return Decimal("0"), missing


def deployment_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    if priorities.deployment_preference is None:
        return Decimal("0")

    preference = parse_enum(
        DeploymentPreference,
        priorities.deployment_preference.upper(),
        "deployment_preference",
    )
    if preference == DeploymentPreference.FLEXIBLE:
        return policy.deployment_boost
    if _normalize_option(preference.value) in _normalize_option(vendor.deployment_options):
        return policy.deployment_boost
    return Decimal("0")


def speed_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Decimal:
    if priorities.implementation_urgency is None:
        return Decimal("0")

    urgency = parse_enum(
        ImplementationUrgency,
        priorities.implementation_urgency.upper(),
        "implementation_urgency",
    )
    if urgency != ImplementationUrgency.IMMEDIATE:
        return Decimal("0")

    timeline = vendor.implementation_timeline_days
    if timeline is None:
        timeline = policy.default_timeline_days
    return policy.speed_boost if timeline <= policy.speed_max_days else Decimal("0")


def calculate_priority_boost(
    vendor: Vendor,
    priorities: AssessmentPriorities,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> PriorityBoost:
    top, matched = top_priority_boost(vendor, priorities, policy)
    features, missing = feature_boost(vendor, priorities, policy)
    deployment = deployment_boost(vendor, priorities, policy)
    speed = speed_boost(vendor, priorities, policy)
    return PriorityBoost(
        vendor_id=vendor.id,
        top_priority_boost=top,
        matched_priority=matched,
        feature_boost=features,
        deployment_boost=deployment,
        speed_boost=speed,
        total_boost=top + features + deployment + speed,
        missing_features=missing,
    )
