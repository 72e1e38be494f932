"""
Base Repositories - Heliolus Scoring Engine
heliolus/repositories/base.py

Read interfaces the scoring services depend on. Storage engines implement
these; the scoring core itself never touches storage.
"""

from abc import ABC, abstractmethod
from typing import List

from heliolus.models.gap import Gap
from heliolus.models.vendor import Vendor


class GapRepository(ABC):
    """Source of an assessment's gaps."""

    @abstractmethod
    def list_by_assessment(self, assessment_id: str) -> List[Gap]:
        """All gaps of an assessment, in any order."""


class VendorRepository(ABC):
    """Source of vendors eligible for recommendation."""

    @abstractmethod
    def list_approved(self) -> List[Vendor]:
        """All approved vendors."""
