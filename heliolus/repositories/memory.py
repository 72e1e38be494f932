"""
In-Memory Repositories - Heliolus Scoring Engine
heliolus/repositories/memory.py

Dict-backed repositories used by the API and the test suite.
"""

from typing import Dict, List, Optional

from heliolus.core.exceptions import EntityNotFoundException
from heliolus.models.gap import Gap
from heliolus.models.vendor import Vendor
from heliolus.repositories.base import GapRepository, VendorRepository


class InMemoryGapRepository(GapRepository):
    """Gaps grouped by assessment id."""

    def __init__(self, gaps: Optional[Dict[str, List[Gap]]] = None):
        self._gaps: Dict[str, List[Gap]] = {k: list(v) for k, v in (gaps or {}).items()}

    def list_by_assessment(self, assessment_id: str) -> List[Gap]:
        return list(self._gaps.get(assessment_id, []))

    def replace(self, assessment_id: str, gaps: List[Gap]) -> None:
        """Replace every gap of an assessment."""
        self._gaps[assessment_id] = list(gaps)

    def delete(self, assessment_id: str, gap_id: str) -> None:
        gaps = self._gaps.get(assessment_id, [])
        remaining = [g for g in gaps if g.id != gap_id]
        if len(remaining) == len(gaps):
            raise EntityNotFoundException("gap", gap_id)
        self._gaps[assessment_id] = remaining


class InMemoryVendorRepository(VendorRepository):
    """Vendors keyed by id; every stored vendor counts as approved."""

    def __init__(self, vendors: Optional[List[Vendor]] = None):
        self._vendors: Dict[str, Vendor] = {v.id: v for v in (vendors or [])}

    def list_approved(self) -> List[Vendor]:
        return list(self._vendors.values())

    def get(self, vendor_id: str) -> Vendor:
        vendor = self._vendors.get(vendor_id)
        if vendor is None:
            raise EntityNotFoundException("vendor", vendor_id)
        return vendor

    def upsert(self, vendor: Vendor) -> None:
        self._vendors[vendor.id] = vendor
