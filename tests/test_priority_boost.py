# tests/test_priority_boost.py
"""
Priority Boost Tests
"""

from decimal import Decimal

import pytest

from heliolus.core.exceptions import UnknownEnumValueError
from heliolus.scoring.priority_boost import (
    calculate_priority_boost,
    deployment_boost,
    feature_boost,
    normalize_priority,
    speed_boost,
    top_priority_boost,
)

from conftest import make_priorities, make_vendor


class TestNormalizePriority:

    @pytest.mark.parametrize("raw,expected", [
        ("transaction-monitoring", "TRANSACTION_MONITORING"),
        ("  kyc-aml ", "KYC_AML"),
        ("SANCTIONS_SCREENING", "SANCTIONS_SCREENING"),
        ("", None),
        ("   ", None),
        (None, None),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_priority(raw) == expected


class TestTopPriorityBoost:

    @pytest.mark.parametrize("categories,boost,matched", [
        (["KYC_AML"], Decimal("20"), "kyc-aml"),
        (["TRANSACTION_MONITORING"], Decimal("15"), "transaction-monitoring"),
        (["SANCTIONS_SCREENING"], Decimal("10"), "sanctions-screening"),
        (["FRAUD"], Decimal("0"), None),
    ])
    def test_rank(self, categories, boost, matched):
        result = top_priority_boost(make_vendor(categories=categories), make_priorities())
        assert result == (boost, matched)

    def test_highest_rank_only(self):
        """Covering #2 and #3 earns the #2 boost, not the sum."""
        vendor = make_vendor(categories=["SANCTIONS_SCREENING", "TRANSACTION_MONITORING"])
        assert top_priority_boost(vendor, make_priorities())[0] == Decimal("15")

    def test_no_priorities(self):
        priorities = make_priorities(ranked_priorities=[])
        assert top_priority_boost(make_vendor(), priorities) == (Decimal("0"), None)


class TestFeatureBoost:

    def test_all_present(self):
        assert feature_boost(make_vendor(), make_priorities()) == (Decimal("10"), [])

    def test_two_missing(self):
        priorities = make_priorities(must_have_features=["api", "sso", "audit"])
        boost, missing = feature_boost(make_vendor(features=["api"]), priorities)
        assert boost == Decimal("5")
        assert missing == ["sso", "audit"]

    def test_three_missing(self):
        priorities = make_priorities(must_have_features=["sso", "audit", "export"])
        boost, missing = feature_boost(make_vendor(features=["api"]), priorities)
        assert boost == Decimal("0")
        assert len(missing) == 3


class TestDeploymentBoost:

    @pytest.mark.parametrize("preference,options,expected", [
        ("CLOUD", "Cloud, Hybrid", Decimal("5")),
        ("ON_PREMISE", "On-Premise", Decimal("5")),
        ("on_premise", "on premise", Decimal("5")),
        ("HYBRID", "Cloud", Decimal("0")),
        ("FLEXIBLE", "", Decimal("5")),
        (None, "Cloud", Decimal("0")),
    ])
    def test_preferences(self, preference, options, expected):
        priorities = make_priorities(deployment_preference=preference)
        vendor = make_vendor(deployment_options=options)
        assert deployment_boost(vendor, priorities) == expected

    def test_unknown_preference_raises(self):
        with pytest.raises(UnknownEnumValueError):
            deployment_boost(make_vendor(), make_priorities(deployment_preference="SATELLITE"))


class TestSpeedBoost:

    @pytest.mark.parametrize("urgency,days,expected", [
        ("IMMEDIATE", 60, Decimal("5")),
        ("IMMEDIATE", 90, Decimal("5")),
        ("IMMEDIATE", 91, Decimal("0")),
        ("IMMEDIATE", None, Decimal("0")),
        ("PLANNED", 30, Decimal("0")),
        (None, 30, Decimal("0")),
    ])
    def test_urgency_and_timeline(self, urgency, days, expected):
        priorities = make_priorities(implementation_urgency=urgency)
        vendor = make_vendor(implementation_timeline_days=days)
        assert speed_boost(vendor, priorities) == expected


class TestCalculatePriorityBoost:

    def test_maximum_boost(self):
        boost = calculate_priority_boost(make_vendor(), make_priorities())
        assert boost.top_priority_boost == Decimal("20")
        assert boost.feature_boost == Decimal("10")
        assert boost.deployment_boost == Decimal("5")
        assert boost.speed_boost == Decimal("5")
        assert boost.total_boost == Decimal("40")
        assert boost.matched_priority == "kyc-aml"

    def test_no_alignment(self):
        vendor = make_vendor(
            categories=["FRAUD"],
            features=[],
            deployment_options="On-Premise",
            implementation_timeline_days=200,
        )
        priorities = make_priorities(must_have_features=["a", "b", "c"])
        boost = calculate_priority_boost(vendor, priorities)
        assert boost.total_boost == Decimal("0")
        assert boost.missing_features == ["a", "b", "c"]
