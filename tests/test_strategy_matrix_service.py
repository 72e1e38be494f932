# tests/test_strategy_matrix_service.py
"""
Strategy Matrix Service Tests

Cache-aside generation, invalidation and graceful degradation when the
cache misbehaves.
"""

from unittest.mock import MagicMock

import pytest
import redis

from heliolus.core.exceptions import EntityNotFoundException
from heliolus.models.strategy_matrix import StrategyMatrix
from heliolus.repositories.base import GapRepository, VendorRepository
from heliolus.repositories.memory import InMemoryGapRepository, InMemoryVendorRepository
from heliolus.services.cache import strategy_matrix_key
from heliolus.services.strategy_matrix_service import StrategyMatrixService

from conftest import FakeCache, make_gap, make_vendor


@pytest.fixture
def gap_repository():
    repo = MagicMock(spec=GapRepository)
    repo.list_by_assessment.return_value = [
        make_gap("g1", priority_score=9),
        make_gap("g2", priority_score=5),
    ]
    return repo


@pytest.fixture
def vendor_repository():
    repo = MagicMock(spec=VendorRepository)
    repo.list_approved.return_value = [make_vendor("v1")]
    return repo


class TestCacheAside:

    def test_miss_builds_and_stores(self, gap_repository, vendor_repository):
        cache = FakeCache()
        service = StrategyMatrixService(gap_repository, vendor_repository, cache, ttl=300)

        matrix = service.generate("assess-1")

        assert matrix.immediate.gap_count == 1
        assert matrix.near_term.gap_count == 1
        assert strategy_matrix_key("assess-1") in cache.store
        assert cache.ttls[strategy_matrix_key("assess-1")] == 300
        gap_repository.list_by_assessment.assert_called_once_with("assess-1")

    def test_hit_does_not_read_repositories(self, gap_repository, vendor_repository):
        cache = FakeCache()
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        first = service.generate("assess-1")
        second = service.generate("assess-1")

        assert first == second
        assert gap_repository.list_by_assessment.call_count == 1
        assert vendor_repository.list_approved.call_count == 1

    def test_invalidate_forces_recompute(self, gap_repository, vendor_repository):
        cache = FakeCache()
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        service.generate("assess-1")
        service.invalidate_cache("assess-1")
        assert strategy_matrix_key("assess-1") not in cache.store

        service.generate("assess-1")
        assert gap_repository.list_by_assessment.call_count == 2

    def test_keys_are_per_assessment(self, gap_repository, vendor_repository):
        cache = FakeCache()
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        service.generate("assess-1")
        service.generate("assess-2")
        assert set(cache.store) == {"strategy_matrix:assess-1", "strategy_matrix:assess-2"}

    def test_without_cache_always_recomputes(self, gap_repository, vendor_repository):
        service = StrategyMatrixService(gap_repository, vendor_repository, cache=None)
        service.generate("assess-1")
        service.generate("assess-1")
        service.invalidate_cache("assess-1")
        assert gap_repository.list_by_assessment.call_count == 2

    def test_in_memory_repositories(self):
        gaps = InMemoryGapRepository({"assess-1": [make_gap("g1", priority_score=2)]})
        vendors = InMemoryVendorRepository([make_vendor("v1")])
        matrix = StrategyMatrixService(gaps, vendors).generate("assess-1")
        assert isinstance(matrix, StrategyMatrix)
        assert matrix.strategic.gap_count == 1
        assert [v.vendor_id for v in matrix.strategic.top_vendors] == ["v1"]


class TestCacheFailures:

    def test_read_error_recomputes(self, gap_repository, vendor_repository):
        cache = MagicMock()
        cache.get.side_effect = redis.RedisError("connection lost")
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        matrix = service.generate("assess-1")

        assert matrix.immediate.gap_count == 1
        cache.set.assert_called_once()

    def test_corrupt_entry_recomputes(self, gap_repository, vendor_repository):
        cache = FakeCache()
        cache.store[strategy_matrix_key("assess-1")] = '{"assessment_id": "assess-1"}'
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        matrix = service.generate("assess-1")

        assert matrix.immediate.gap_count == 1
        gap_repository.list_by_assessment.assert_called_once()

    def test_write_error_still_returns_matrix(self, gap_repository, vendor_repository):
        cache = MagicMock()
        cache.get.return_value = None
        cache.set.side_effect = redis.ConnectionError("down")
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)

        assert service.generate("assess-1").near_term.gap_count == 1

    def test_invalidate_error_is_swallowed(self, gap_repository, vendor_repository):
        cache = MagicMock()
        cache.delete.side_effect = redis.RedisError("down")
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)
        service.invalidate_cache("assess-1")
        cache.delete.assert_called_once_with("strategy_matrix:assess-1")


class TestInMemoryRepositories:

    def test_replace_and_delete_gap(self):
        repo = InMemoryGapRepository()
        repo.replace("a1", [make_gap("g1"), make_gap("g2")])
        repo.delete("a1", "g1")
        assert [g.id for g in repo.list_by_assessment("a1")] == ["g2"]

    def test_delete_missing_gap_raises(self):
        with pytest.raises(EntityNotFoundException):
            InMemoryGapRepository().delete("a1", "nope")

    def test_vendor_upsert_and_get(self):
        repo = InMemoryVendorRepository()
        repo.upsert(make_vendor("v1", name="First"))
        repo.upsert(make_vendor("v1", name="Renamed"))
        assert repo.get("v1").name == "Renamed"
        assert len(repo.list_approved()) == 1


class TestVendorInvalidation:
    """Vendors are shared, so a vendor change must reach every cached matrix."""

    def test_invalidate_all_drops_every_matrix(self, gap_repository, vendor_repository):
        cache = FakeCache()
        cache.store["unrelated:key"] = "{}"
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)
        service.generate("assess-1")
        service.generate("assess-2")

        service.invalidate_all()

        assert set(cache.store) == {"unrelated:key"}

    def test_new_vendor_reaches_other_assessments(self):
        gaps = InMemoryGapRepository({
            "assess-a": [make_gap("ga", category="FRAUD", priority_score=2)],
            "assess-b": [make_gap("gb", category="KYC_AML", priority_score=2)],
        })
        vendors = InMemoryVendorRepository([make_vendor("v0", categories=["FRAUD"])])
        service = StrategyMatrixService(gaps, vendors, FakeCache())
        assert service.generate("assess-b").strategic.top_vendors == []

        vendors.upsert(make_vendor("v1", categories=["KYC_AML"]))
        service.invalidate_all()

        cached_b = service.generate("assess-b")
        fresh_b = StrategyMatrixService(gaps, vendors).generate("assess-b")
        assert cached_b == fresh_b
        assert [v.vendor_id for v in cached_b.strategic.top_vendors] == ["v1"]

    def test_without_cache_is_a_no_op(self, gap_repository, vendor_repository):
        StrategyMatrixService(gap_repository, vendor_repository, cache=None).invalidate_all()

    def test_clear_error_is_swallowed(self, gap_repository, vendor_repository):
        cache = MagicMock()
        cache.delete_pattern.side_effect = redis.ConnectionError("down")
        service = StrategyMatrixService(gap_repository, vendor_repository, cache)
        service.invalidate_all()
        cache.delete_pattern.assert_called_once_with("strategy_matrix:*")
