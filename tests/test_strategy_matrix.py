# tests/test_strategy_matrix.py
"""
Strategy Matrix Tests

Bucket assignment, per-bucket summaries (effort, cost, vendors) and the
exclusion of gaps with an invalid priority score.
"""

import pytest

from heliolus.core.exceptions import DataIntegrityError, UnknownEnumValueError
from heliolus.models.enumerations import Timeline
from heliolus.scoring.strategy_matrix import (
    assign_bucket,
    build_strategy_matrix,
    effort_distribution,
    estimate_cost_range,
    rank_vendors_for_bucket,
)

from conftest import make_gap, make_vendor


class TestAssignBucket:

    @pytest.mark.parametrize("score,timeline", [
        (10, Timeline.IMMEDIATE),
        (8, Timeline.IMMEDIATE),
        (8.0, Timeline.IMMEDIATE),
        (7, Timeline.NEAR_TERM),
        (4, Timeline.NEAR_TERM),
        (3, Timeline.STRATEGIC),
        (1, Timeline.STRATEGIC),
    ])
    def test_valid_scores(self, score, timeline):
        assert assign_bucket(score) == timeline

    @pytest.mark.parametrize("score", [None, 0, 11, -1, 7.5])
    def test_invalid_scores_raise(self, score):
        with pytest.raises(DataIntegrityError) as exc_info:
            assign_bucket(score, "g1")
        assert exc_info.value.entity_id == "g1"


class TestBucketSummaries:

    def test_effort_distribution_skips_missing(self):
        gaps = [
            make_gap("g1", estimated_effort="SMALL"),
            make_gap("g2", estimated_effort="LARGE"),
            make_gap("g3", estimated_effort="LARGE"),
            make_gap("g4", estimated_effort=None),
        ]
        dist = effort_distribution(gaps)
        assert (dist.small, dist.medium, dist.large) == (1, 0, 2)

    def test_effort_distribution_unknown_raises(self):
        with pytest.raises(UnknownEnumValueError):
            effort_distribution([make_gap(estimated_effort="HUGE")])

    def test_cost_range_from_midpoints(self):
        gaps = [
            make_gap("g1", estimated_cost="RANGE_100K_250K"),
            make_gap("g2", estimated_cost="RANGE_50K_100K"),
        ]
        assert estimate_cost_range(gaps) == "€175–€325K (estimated)"

    def test_cost_range_empty(self):
        assert estimate_cost_range([]) == "€0"

    def test_missing_cost_counts_as_smallest_bucket(self):
        # 5k ± 30 % → 3.5k / 6.5k, rounded half up
        assert estimate_cost_range([make_gap(estimated_cost=None)]) == "€4–€7K (estimated)"

    def test_unknown_cost_raises(self):
        with pytest.raises(UnknownEnumValueError):
            estimate_cost_range([make_gap(estimated_cost="PRICELESS")])


class TestRankVendors:

    def test_most_categories_first(self, sample_vendors):
        gaps = [
            make_gap("g1", category="KYC_AML"),
            make_gap("g2", category="TRANSACTION_MONITORING"),
        ]
        ranked = rank_vendors_for_bucket(gaps, sample_vendors)
        assert [r.vendor_id for r in ranked] == ["v1", "v3"]
        assert ranked[0].categories_covered == 2
        assert ranked[0].covered_gap_ids == ["g1", "g2"]

    def test_ties_break_by_vendor_id(self):
        vendors = [make_vendor(v) for v in ("v-c", "v-a", "v-b", "v-d")]
        ranked = rank_vendors_for_bucket([make_gap()], vendors)
        assert [r.vendor_id for r in ranked] == ["v-a", "v-b", "v-c"]

    def test_categories_are_counted_once(self):
        """Many gaps in one category do not outrank broader coverage."""
        gaps = [make_gap(f"k{i}", category="KYC_AML") for i in range(5)]
        gaps += [
            make_gap("t1", category="TRANSACTION_MONITORING"),
            make_gap("s1", category="SANCTIONS_SCREENING"),
        ]
        vendors = [
            make_vendor("a", categories=["KYC_AML"]),
            make_vendor("b", categories=["TRANSACTION_MONITORING", "SANCTIONS_SCREENING"]),
        ]
        ranked = rank_vendors_for_bucket(gaps, vendors)
        assert [r.vendor_id for r in ranked] == ["b", "a"]

    def test_no_gaps_no_vendors(self, sample_vendors):
        assert rank_vendors_for_bucket([], sample_vendors) == []


class TestBuildStrategyMatrix:

    def test_partition(self, sample_gaps, sample_vendors):
        matrix = build_strategy_matrix("assess-1", sample_gaps, sample_vendors)

        assert matrix.immediate.gap_count == 3
        assert matrix.near_term.gap_count == 2
        assert matrix.strategic.gap_count == 2
        assert matrix.excluded_gaps == []

        assert [g.id for g in matrix.immediate.gaps] == ["g1", "g2", "g3"]
        assert [g.id for g in matrix.near_term.gaps] == ["g4", "g5"]
        assert [g.id for g in matrix.strategic.gaps] == ["g6", "g7"]

    def test_bucket_labels(self, sample_gaps):
        matrix = build_strategy_matrix("assess-1", sample_gaps, [])
        assert matrix.immediate.label == "0-6 months"
        assert matrix.near_term.label == "6-18 months"
        assert matrix.strategic.label == "18+ months"
        assert matrix.near_term.timeline == Timeline.NEAR_TERM

    def test_immediate_bucket_summary(self, sample_gaps, sample_vendors):
        bucket = build_strategy_matrix("assess-1", sample_gaps, sample_vendors).immediate
        dist = bucket.effort_distribution
        assert (dist.small, dist.medium, dist.large) == (1, 1, 1)
        # 175k + 75k + 5k = 255k → 178.5k / 331.5k
        assert bucket.estimated_cost_range == "€179–€332K (estimated)"
        assert [v.vendor_id for v in bucket.top_vendors] == ["v1", "v3"]

    def test_empty_input(self):
        matrix = build_strategy_matrix("assess-1", [], [])
        for bucket in (matrix.immediate, matrix.near_term, matrix.strategic):
            assert bucket.gap_count == 0
            assert bucket.estimated_cost_range == "€0"
            assert bucket.top_vendors == []

    def test_invalid_priority_scores_are_excluded(self):
        gaps = [
            make_gap("zero", priority_score=0),
            make_gap("eleven", priority_score=11),
            make_gap("missing", priority_score=None),
            make_gap("fraction", priority_score=7.5),
            make_gap("ok", priority_score=9),
        ]
        matrix = build_strategy_matrix("assess-1", gaps, [])

        assert matrix.immediate.gap_count == 1
        assert matrix.near_term.gap_count == 0
        assert matrix.strategic.gap_count == 0
        excluded = {e.gap_id: e for e in matrix.excluded_gaps}
        assert set(excluded) == {"zero", "eleven", "missing", "fraction"}
        assert excluded["missing"].priority_score is None
        assert "not an integer" in excluded["fraction"].reason

    def test_equal_priority_ordered_by_id(self):
        gaps = [make_gap("b", priority_score=9), make_gap("a", priority_score=9)]
        matrix = build_strategy_matrix("assess-1", gaps, [])
        assert [g.id for g in matrix.immediate.gaps] == ["a", "b"]

    def test_matrix_is_deterministic(self, sample_gaps, sample_vendors):
        first = build_strategy_matrix("assess-1", sample_gaps, sample_vendors)
        second = build_strategy_matrix("assess-1", list(reversed(sample_gaps)), sample_vendors)
        assert first == second
