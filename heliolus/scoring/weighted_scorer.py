"""
Weighted Assessment Scorer
heliolus/scoring/weighted_scorer.py

Scores an assessment bottom-up: question → section → overall.

    final_q   = raw_quality_score × tier_multiplier(best linked tier)
    section   = Σ(final_q × w_q) / Σ(w_q answered)            in [0, 5]
    scaled    = section × 20                                  in [0, 100]
    overall   = Σ(scaled_s × w_s) / Σ(w_s with ≥1 answer)     in [0, 100]

Unanswered questions and wholly unanswered sections are dropped from both
numerator and denominator, so template weights are renormalised over the
mass actually present. Any section that is not fully answered marks the
result as 'partial'.

Questions carry their weight into the average: an answered question with
weight 0 adds nothing, and a section whose only answers sit on zero-weight
questions has no answered mass and is left out like an unanswered one.

Scores are rounded only when reported. The risk band is read from the
unrounded overall, so 79.996 reports as 80.00 but bands Medium.

Risk bands (lower bounds, inclusive):
    ≥ 80 Low   ≥ 60 Medium   ≥ 40 High   else Critical
"""
import math
import time
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from heliolus.core.exceptions import ScoringInputError
from heliolus.models.assessment import Answer, Document, SectionTemplate, Template
from heliolus.models.enumerations import EvidenceTier, Methodology, RiskBand
from heliolus.scoring.evidence_tier import best_tier, tier_multiplier
from heliolus.scoring.policy import DEFAULT_POLICY, ScoringPolicy
from heliolus.scoring.utils import clamp, weights_are_valid

logger = structlog.get_logger(__name__)

MAX_RAW_SCORE = Decimal("5")
SECTION_SCALE = Decimal("20")  # 0-5 → 0-100

# Reported precision; arithmetic and banding run on unrounded values
SECTION_PLACES = Decimal("0.0001")
OVERALL_PLACES = Decimal("0.01")


@dataclass
class QuestionScore:
    """Audit record for one scored question."""
    question_id: str
    raw_quality_score: Optional[Decimal]  # None when unanswered
    evidence_tier: EvidenceTier           # Best tier among linked documents
    tier_multiplier: Decimal
    final_score: Optional[Decimal]        # raw × multiplier, in [0, 5]

    @property
    def answered(self) -> bool:
        return self.final_score is not None


@dataclass
class SectionScore:
    """Output of aggregate_section()."""
    section_id: str
    section_name: str
    score: Decimal                 # [0, 5]
    scaled_score: Decimal          # [0, 100]
    answered_weight: Decimal       # Σ weights of answered questions
    total_weight: Decimal          # Σ weights of all questions
    methodology: Methodology
    question_scores: List[QuestionScore] = field(default_factory=list)

    @property
    def answered(self) -> bool:
        return self.answered_weight > 0


@dataclass
class OverallScore:
    """Output of WeightedScoreCalculator.calculate()."""
    assessment_id: str
    overall_score: Decimal   # [0, 100]
    risk_band: RiskBand
    methodology: Methodology
    section_scores: List[SectionScore] = field(default_factory=list)


def _validate_raw(question_id: str, raw) -> Decimal:
    value = float(raw)
    if math.isnan(value) or value < 0 or value > float(MAX_RAW_SCORE):
        raise ScoringInputError(
            f"raw_quality_score for question {question_id} must be within 0-5, got {raw}"
        )
    return Decimal(str(value))


def score_question(
    answer: Optional[Answer],
    documents_by_id: Mapping[str, Document],
    policy: ScoringPolicy = DEFAULT_POLICY,
    question_id: Optional[str] = None,
) -> QuestionScore:
    """
    Score a single answer against its best linked evidence tier.

    A missing answer, or one without a raw score, is reported as unanswered.
    Linked ids absent from documents_by_id count as unclassified documents.
    """
    qid = answer.question_id if answer is not None else question_id

    linked = answer.linked_document_ids if answer is not None else []
    tiers = [
        documents_by_id[doc_id].evidence_tier if doc_id in documents_by_id else None
        for doc_id in linked
    ]
    tier = best_tier(tiers)
    multiplier = tier_multiplier(tier, policy)

    if answer is None or answer.raw_quality_score is None:
        return QuestionScore(
            question_id=qid,
            raw_quality_score=None,
            evidence_tier=tier,
            tier_multiplier=multiplier,
            final_score=None,
        )

    raw = _validate_raw(qid, answer.raw_quality_score)
    final = clamp(raw * multiplier, Decimal("0"), MAX_RAW_SCORE)

    return QuestionScore(
        question_id=qid,
        raw_quality_score=raw,
        evidence_tier=tier,
        tier_multiplier=multiplier,
        final_score=final,
    )


def aggregate_section(
    section: SectionTemplate,
    question_scores: Mapping[str, QuestionScore],
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> SectionScore:
    """
    Weighted average of the answered questions in a section.

    Args:
        section: Section template with question weights.
        question_scores: Scored questions keyed by question id; questions of
                         the section missing here are treated as unanswered.

    The returned scores are unrounded; calculate_overall() rounds them for
    reporting.
    """
    weights = [q.weight for q in section.questions]
    if weights and not weights_are_valid(weights, float(policy.weight_tolerance)):
        logger.warning(
            "question_weights_malformed",
            section_id=section.id,
            weight_sum=sum(weights),
        )

    weighted_sum = Decimal("0")
    answered_weight = Decimal("0")
    total_weight = Decimal("0")
    scored: List[QuestionScore] = []
    all_answered = True

    for question in section.questions:
        w = Decimal(str(question.weight))
        total_weight += w
        qs = question_scores.get(question.id)
        if qs is None:
            qs = score_question(None, {}, policy, question_id=question.id)
        scored.append(qs)

        if not qs.answered:
            all_answered = False
            continue
        weighted_sum += qs.final_score * w
        answered_weight += w

    if answered_weight > 0:
        score = clamp(weighted_sum / answered_weight, Decimal("0"), MAX_RAW_SCORE)
    else:
        score = Decimal("0")

    return SectionScore(
        section_id=section.id,
        section_name=section.name,
        score=score,
        scaled_score=score * SECTION_SCALE,
        answered_weight=answered_weight,
        total_weight=total_weight,
        methodology=Methodology.COMPLETE if all_answered else Methodology.PARTIAL,
        question_scores=scored,
    )


def _rounded(section: SectionScore) -> SectionScore:
    return replace(
        section,
        score=section.score.quantize(SECTION_PLACES, rounding=ROUND_HALF_UP),
        scaled_score=section.scaled_score.quantize(OVERALL_PLACES, rounding=ROUND_HALF_UP),
    )


def determine_risk_band(score, policy: ScoringPolicy = DEFAULT_POLICY) -> RiskBand:
    """Qualitative band for a 0-100 overall score."""
    s = Decimal(str(score))
    if s >= policy.risk_band_low_min:
        return RiskBand.LOW
    if s >= policy.risk_band_medium_min:
        return RiskBand.MEDIUM
    if s >= policy.risk_band_high_min:
        return RiskBand.HIGH
    return RiskBand.CRITICAL


def calculate_overall(
    section_scores: Sequence[SectionScore],
    section_weights: Mapping[str, float],
    policy: ScoringPolicy = DEFAULT_POLICY,
    assessment_id: str = "",
) -> OverallScore:
    """
    Blend section scores into the overall 0-100 score.

    Sections without a single answered question are left out of the weight
    denominator. When nothing at all is answered the score is 0 and the
    methodology is 'partial'.
    """
    weights = list(section_weights.values())
    if weights and not weights_are_valid(weights, float(policy.weight_tolerance)):
        logger.warning(
            "section_weights_malformed",
            assessment_id=assessment_id,
            weight_sum=sum(weights),
        )

    weighted_sum = Decimal("0")
    answered_weight = Decimal("0")
    complete = True

    for section in section_scores:
        if section.methodology != Methodology.COMPLETE:
            complete = False
        if not section.answered:
            continue
        w = Decimal(str(section_weights.get(section.section_id, 0)))
        weighted_sum += section.scaled_score * w
        answered_weight += w

    if answered_weight > 0:
        overall = clamp(weighted_sum / answered_weight)
    else:
        overall = Decimal("0")
        complete = False

    return OverallScore(
        assessment_id=assessment_id,
        overall_score=overall.quantize(OVERALL_PLACES, rounding=ROUND_HALF_UP),
        risk_band=determine_risk_band(overall, policy),
        methodology=Methodology.COMPLETE if complete else Methodology.PARTIAL,
        section_scores=[_rounded(s) for s in section_scores],
    )


class WeightedScoreCalculator:
    """Evidence-weighted assessment score over a template."""

    def __init__(self, policy: ScoringPolicy = DEFAULT_POLICY):
        self.policy = policy

    def calculate(
        self,
        assessment_id: str,
        template: Template,
        answers: Sequence[Answer],
        documents: Sequence[Document],
    ) -> OverallScore:
        """
        Args:
            assessment_id: Identifier echoed in the result and the log event.
            template: Sections and question weights.
            answers: Answers for the assessment; answers to questions outside
                     the template are ignored.
            documents: Every document linked by the answers, pre-fetched.

        Returns:
            OverallScore with per-section drill-down. The result carries no
            timestamps, so identical input yields an identical result.
        """
        started = time.perf_counter()

        documents_by_id: Dict[str, Document] = {d.id: d for d in documents}
        answers_by_question: Dict[str, Answer] = {a.question_id: a for a in answers}

        section_scores: List[SectionScore] = []
        for section in template.sections:
            question_scores = {
                q.id: score_question(answers_by_question.get(q.id), documents_by_id,
                                     self.policy, question_id=q.id)
                for q in section.questions
            }
            section_scores.append(aggregate_section(section, question_scores, self.policy))

        result = calculate_overall(
            section_scores,
            {s.id: s.weight for s in template.sections},
            self.policy,
            assessment_id=assessment_id,
        )

        logger.info(
            "overall_score_calculated",
            assessment_id=assessment_id,
            overall_score=float(result.overall_score),
            risk_band=result.risk_band.value,
            methodology=result.methodology.value,
            sections=len(section_scores),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result
