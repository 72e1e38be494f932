"""
Scoring Policy
heliolus/scoring/policy.py

Every tunable constant the calculators use, gathered in one immutable object
so callers (and tests) can swap policy values without touching formulas.

    Evidence tiers:      TIER_2 1.0 | TIER_1 0.8 | TIER_0 0.6
    Risk bands:          >=80 Low | >=60 Medium | >=40 High | else Critical
    Risk blend:          0.30 compliance + 0.40 risk + 0.20 maturity + 0.10 documentation
    Priority boost:      #1 20 | #2 15 | #3 10
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

from heliolus.config import Settings


def _d(mapping: Dict[str, str]) -> Dict[str, Decimal]:
    return {k: Decimal(v) for k, v in mapping.items()}


@dataclass(frozen=True)
class ScoringPolicy:
    """Named policy values; defaults are the production constants."""

    # Evidence tier multipliers
    tier_multipliers: Dict[str, Decimal] = field(
        default_factory=lambda: _d({"TIER_2": "1.0", "TIER_1": "0.8", "TIER_0": "0.6"})
    )

    # Risk band lower bounds on the 0-100 overall score
    risk_band_low_min: Decimal = Decimal("80")
    risk_band_medium_min: Decimal = Decimal("60")
    risk_band_high_min: Decimal = Decimal("40")

    # Template weights may drift this far from 1.0 before a warning is logged
    weight_tolerance: Decimal = Decimal("0.01")

    # Legacy risk score blend
    w_compliance: Decimal = Decimal("0.30")
    w_risk: Decimal = Decimal("0.40")
    w_maturity: Decimal = Decimal("0.20")
    w_documentation: Decimal = Decimal("0.10")
    empty_risk_score: int = 50

    # Compliance sub-score
    compliance_severity_weights: Dict[str, Decimal] = field(
        default_factory=lambda: _d({"CRITICAL": "25", "HIGH": "15", "MEDIUM": "8", "LOW": "3"})
    )
    compliance_empty_score: int = 85

    # Risk sub-score
    risk_level_weights: Dict[str, Decimal] = field(
        default_factory=lambda: _d({"CRITICAL": "25", "HIGH": "15", "MEDIUM": "8", "LOW": "3"})
    )
    likelihood_multipliers: Dict[str, Decimal] = field(
        default_factory=lambda: _d({
            "CERTAIN": "1.0", "LIKELY": "0.8", "POSSIBLE": "0.6",
            "UNLIKELY": "0.4", "RARE": "0.2",
        })
    )
    impact_multipliers: Dict[str, Decimal] = field(
        default_factory=lambda: _d({
            "CATASTROPHIC": "1.0", "MAJOR": "0.8", "MODERATE": "0.6",
            "MINOR": "0.4", "NEGLIGIBLE": "0.2",
        })
    )
    unassessed_multiplier: Decimal = Decimal("0.6")  # missing likelihood / impact
    risk_empty_score: int = 75

    # Maturity sub-score
    maturity_base: int = 50
    maturity_assumed_control: Decimal = Decimal("70")  # when no risks recorded

    # Documentation sub-score
    documentation_severity_weights: Dict[str, Decimal] = field(
        default_factory=lambda: _d({"CRITICAL": "20", "HIGH": "12", "MEDIUM": "6", "LOW": "2"})
    )
    documentation_empty_score: int = 85

    # Strategy matrix
    cost_midpoints: Dict[str, Decimal] = field(
        default_factory=lambda: _d({
            "UNDER_10K": "5000",
            "RANGE_10K_50K": "30000",
            "RANGE_50K_100K": "75000",
            "RANGE_100K_250K": "175000",
            "OVER_250K": "375000",
        })
    )
    cost_uncertainty: Decimal = Decimal("0.30")
    top_vendor_limit: int = 3

    # Vendor base score
    coverage_max: Decimal = Decimal("40")
    size_exact: Decimal = Decimal("20")
    size_adjacent: Decimal = Decimal("15")
    geo_max: Decimal = Decimal("20")
    price_max: Decimal = Decimal("20")
    price_partial: Decimal = Decimal("10")
    price_tolerance: Decimal = Decimal("1.25")

    # Priority boost
    priority_rank_boosts: tuple = (Decimal("20"), Decimal("15"), Decimal("10"))
    features_all_boost: Decimal = Decimal("10")
    features_partial_boost: Decimal = Decimal("5")
    features_partial_max_missing: int = 2
    deployment_boost: Decimal = Decimal("5")
    speed_boost: Decimal = Decimal("5")
    speed_max_days: int = 90
    default_timeline_days: int = 365

    @property
    def blend_weights(self) -> Dict[str, Decimal]:
        return {
            "compliance": self.w_compliance,
            "risk": self.w_risk,
            "maturity": self.w_maturity,
            "documentation": self.w_documentation,
        }


DEFAULT_POLICY = ScoringPolicy()


def policy_from_settings(settings: Settings) -> ScoringPolicy:
    """Build a ScoringPolicy from environment-driven settings."""
    return ScoringPolicy(
        risk_band_low_min=Decimal(str(settings.RISK_BAND_LOW_MIN)),
        risk_band_medium_min=Decimal(str(settings.RISK_BAND_MEDIUM_MIN)),
        risk_band_high_min=Decimal(str(settings.RISK_BAND_HIGH_MIN)),
        weight_tolerance=Decimal(str(settings.WEIGHT_TOLERANCE)),
        w_compliance=Decimal(str(settings.W_COMPLIANCE)),
        w_risk=Decimal(str(settings.W_RISK)),
        w_maturity=Decimal(str(settings.W_MATURITY)),
        w_documentation=Decimal(str(settings.W_DOCUMENTATION)),
        price_tolerance=Decimal(str(settings.PRICE_TOLERANCE)),
    )
