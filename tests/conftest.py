# tests/conftest.py

"""
Pytest Fixtures - Shared test data for the scoring engine and API

Builders return plain Pydantic models so each test can tweak one field
without restating the rest.
"""

import fnmatch
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from heliolus.main import app
from heliolus.models.assessment import Answer, Document, QuestionWeight, SectionTemplate, Template
from heliolus.models.gap import Gap, Risk
from heliolus.models.vendor import AssessmentPriorities, Vendor


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# BUILDERS
# =============================================================================

def make_gap(gap_id="g1", **overrides) -> Gap:
    data = {
        "id": gap_id,
        "assessment_id": "assess-1",
        "category": "KYC_AML",
        "title": "Customer screening gap",
        "description": "Screening is manual",
        "severity": "MEDIUM",
        "priority_score": 5,
        "estimated_effort": "SMALL",
        "estimated_cost": "UNDER_10K",
    }
    data.update(overrides)
    return Gap(**data)


def make_risk(risk_id="r1", **overrides) -> Risk:
    data = {
        "id": risk_id,
        "category": "OPERATIONAL",
        "risk_level": "MEDIUM",
        "control_effectiveness": 50,
        "likelihood": "POSSIBLE",
        "impact": "MODERATE",
    }
    data.update(overrides)
    return Risk(**data)


def make_vendor(vendor_id="v1", **overrides) -> Vendor:
    data = {
        "id": vendor_id,
        "name": f"Vendor {vendor_id}",
        "categories": ["KYC_AML"],
        "target_segments": ["MIDMARKET"],
        "geographic_coverage": ["US", "EU"],
        "pricing_range": "RANGE_10K_50K",
        "features": ["api", "dashboard"],
        "deployment_options": "Cloud, Hybrid",
        "implementation_timeline_days": 60,
    }
    data.update(overrides)
    return Vendor(**data)


def make_priorities(**overrides) -> AssessmentPriorities:
    data = {
        "assessment_id": "assess-1",
        "company_size": "MIDMARKET",
        "jurisdictions": ["US", "EU"],
        "ranked_priorities": ["kyc-aml", "transaction-monitoring", "sanctions-screening"],
        "budget_range": "RANGE_10K_50K",
        "deployment_preference": "CLOUD",
        "implementation_urgency": "IMMEDIATE",
        "must_have_features": ["api"],
    }
    data.update(overrides)
    return AssessmentPriorities(**data)


def make_template(sections=5, questions_per_section=10) -> Template:
    """Evenly weighted template; ids are s{i} and s{i}q{j}."""
    return Template(
        id="tmpl-1",
        name="Financial Crime Compliance",
        sections=[
            SectionTemplate(
                id=f"s{i}",
                name=f"Section {i}",
                weight=1 / sections,
                questions=[
                    QuestionWeight(id=f"s{i}q{j}", weight=1 / questions_per_section)
                    for j in range(questions_per_section)
                ],
            )
            for i in range(sections)
        ],
    )


def answer_all(template: Template, raw=4.0, tier="TIER_2"):
    """Answer every question with the same raw score and one document per answer."""
    answers, documents = [], []
    for section in template.sections:
        for q in section.questions:
            doc_id = f"doc-{q.id}"
            documents.append(Document(id=doc_id, evidence_tier=tier))
            answers.append(Answer(question_id=q.id, raw_quality_score=raw, linked_document_ids=[doc_id]))
    return answers, documents


class FakeCache:
    """Dict-backed stand-in for RedisCache."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}

    def get(self, key, model):
        data = self.store.get(key)
        return model.model_validate_json(data) if data else None

    def set(self, key, value, ttl_seconds):
        self.store[key] = value.model_dump_json()
        self.ttls[key] = ttl_seconds

    def delete(self, key):
        self.store.pop(key, None)

    def delete_pattern(self, pattern):
        for key in fnmatch.filter(list(self.store), pattern):
            self.delete(key)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def sample_template():
    return make_template()


@pytest.fixture
def sample_priorities():
    return make_priorities()


@pytest.fixture
def sample_vendors():
    return [
        make_vendor("v1", categories=["KYC_AML", "TRANSACTION_MONITORING"]),
        make_vendor("v2", categories=["SANCTIONS_SCREENING"], pricing_range=None),
        make_vendor("v3", categories=["KYC_AML"], target_segments=["ENTERPRISE"]),
    ]


@pytest.fixture
def sample_gaps():
    return [
        make_gap("g1", category="KYC_AML", priority_score=10, estimated_effort="LARGE",
                 estimated_cost="RANGE_100K_250K", severity="CRITICAL"),
        make_gap("g2", category="TRANSACTION_MONITORING", priority_score=9,
                 estimated_effort="MEDIUM", estimated_cost="RANGE_50K_100K", severity="HIGH"),
        make_gap("g3", category="KYC_AML", priority_score=8),
        make_gap("g4", category="SANCTIONS_SCREENING", priority_score=6),
        make_gap("g5", category="KYC_AML", priority_score=5),
        make_gap("g6", category="DATA_GOVERNANCE", priority_score=3, severity="LOW"),
        make_gap("g7", category="KYC_AML", priority_score=2, severity="LOW"),
    ]
