# tests/test_models.py

"""
Model Validation Tests - Tests for the Pydantic input and result models
"""

import pytest
from pydantic import ValidationError

from heliolus.models.assessment import Answer, QuestionWeight, SectionTemplate
from heliolus.models.enumerations import CompanySize, EvidenceTier, RiskBand, Timeline
from heliolus.models.gap import Gap, Risk
from heliolus.models.strategy_matrix import StrategyMatrix
from heliolus.models.vendor import AssessmentPriorities, Vendor
from heliolus.scoring.strategy_matrix import build_strategy_matrix

from conftest import make_gap, make_vendor


# ENUMERATION TESTS


class TestEnumerations:
    """Tests for the enumerations shared across calculators."""

    def test_evidence_tiers(self):
        assert [t.value for t in EvidenceTier] == ["TIER_0", "TIER_1", "TIER_2"]

    def test_company_sizes_are_ordered_smallest_first(self):
        expected = ["STARTUP", "SMB", "MIDMARKET", "ENTERPRISE"]
        assert [s.value for s in CompanySize] == expected

    def test_risk_band_labels(self):
        assert [b.value for b in RiskBand] == ["Low", "Medium", "High", "Critical"]

    def test_timeline_values(self):
        assert [t.value for t in Timeline] == ["immediate", "nearTerm", "strategic"]


# ASSESSMENT MODELS


class TestAssessmentModels:
    """Tests for templates and answers."""

    def test_negative_question_weight_rejected(self):
        with pytest.raises(ValidationError):
            QuestionWeight(id="q", weight=-0.1)

    def test_negative_section_weight_rejected(self):
        with pytest.raises(ValidationError):
            SectionTemplate(id="s", weight=-1)

    def test_empty_question_id_rejected(self):
        with pytest.raises(ValidationError):
            Answer(question_id="")

    def test_unscored_answer_allowed(self):
        answer = Answer(question_id="q1")
        assert answer.raw_quality_score is None
        assert answer.linked_document_ids == []

    def test_question_defaults_to_not_foundational(self):
        assert QuestionWeight(id="q", weight=0.5).is_foundational is False


# GAP / RISK MODELS


class TestGapAndRisk:
    """Tests for gap and risk inputs."""

    def test_minimal_gap(self):
        gap = Gap(id="g1", category="KYC_AML", severity="HIGH")
        assert gap.gap_size is None
        assert gap.priority_score is None
        assert gap.documentation_related is None

    @pytest.mark.parametrize("size", [-1, 100.5])
    def test_gap_size_bounds(self, size):
        with pytest.raises(ValidationError):
            make_gap(gap_size=size)

    def test_gap_requires_severity(self):
        with pytest.raises(ValidationError):
            Gap(id="g1", category="KYC_AML")

    def test_unknown_severity_accepted_by_model(self):
        """Enumerated fields are validated by the calculators, not the model."""
        assert make_gap(severity="SEVERE").severity == "SEVERE"

    def test_risk_requires_level(self):
        with pytest.raises(ValidationError):
            Risk(id="r1")


# VENDOR MODELS


class TestVendorModels:
    """Tests for vendors and assessment priorities."""

    def test_negative_timeline_rejected(self):
        with pytest.raises(ValidationError):
            make_vendor(implementation_timeline_days=-5)

    def test_vendor_defaults(self):
        vendor = Vendor(id="v1")
        assert vendor.pricing_range is None
        assert vendor.deployment_options == ""

    def test_at_most_three_ranked_priorities(self):
        with pytest.raises(ValidationError):
            AssessmentPriorities(ranked_priorities=["a", "b", "c", "d"])

    def test_at_most_five_must_have_features(self):
        with pytest.raises(ValidationError):
            AssessmentPriorities(must_have_features=["a", "b", "c", "d", "e", "f"])


# STRATEGY MATRIX MODEL


class TestStrategyMatrixModel:
    """The matrix is cached as JSON and must survive the trip."""

    def test_json_round_trip(self, sample_gaps, sample_vendors):
        matrix = build_strategy_matrix("assess-1", sample_gaps, sample_vendors)
        restored = StrategyMatrix.model_validate_json(matrix.model_dump_json())
        assert restored == matrix
        assert restored.near_term.timeline == Timeline.NEAR_TERM
