from pydantic import BaseModel, Field
from typing import Optional, List


class Document(BaseModel):
    """
    Evidence document as seen by the scorer.

    The tier is assigned upstream by the evidence classifier; it stays a plain
    string here so an unrecognised value reaches the scorer and fails there.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Document identifier"
    )

    evidence_tier: Optional[str] = Field(
        default=None,
        description="TIER_0 (self-declared), TIER_1 (policy) or TIER_2 (system-generated)"
    )


class Answer(BaseModel):
    """
    Answer to a template question, with the AI-derived quality score.
    """

    question_id: str = Field(
        ...,
        min_length=1,
        description="Foreign key reference to Question"
    )

    raw_quality_score: Optional[float] = Field(
        default=None,
        description="AI-derived quality score on the 0-5 scale; None when not yet scored"
    )

    linked_document_ids: List[str] = Field(
        default_factory=list,
        description="Documents cited as evidence for this answer"
    )


class QuestionWeight(BaseModel):
    """
    Question as configured in a template section.
    """

    id: str = Field(..., min_length=1)

    weight: float = Field(
        ...,
        ge=0.0,
        description="Fraction of the section total"
    )

    is_foundational: bool = Field(
        default=False,
        description="Foundational questions are prioritised when gaps are raised"
    )


class SectionTemplate(BaseModel):
    """
    Section of a template with its questions.
    """

    id: str = Field(..., min_length=1)

    name: str = Field(default="")

    weight: float = Field(
        ...,
        ge=0.0,
        description="Fraction of the template total"
    )

    regulatory_priority: Optional[str] = Field(
        default=None,
        description="Informational tag, not used in the arithmetic"
    )

    questions: List[QuestionWeight] = Field(default_factory=list)


class Template(BaseModel):
    """
    Assessment template: weighted sections of weighted questions.
    """

    id: str = Field(default="")

    name: str = Field(default="")

    sections: List[SectionTemplate] = Field(default_factory=list)
