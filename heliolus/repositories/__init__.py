"""
Repositories Package - Heliolus Scoring Engine
heliolus/repositories/__init__.py

Data access interfaces and in-memory implementations.
"""

from heliolus.repositories.base import GapRepository, VendorRepository
from heliolus.repositories.memory import InMemoryGapRepository, InMemoryVendorRepository

__all__ = [
    "GapRepository",
    "VendorRepository",
    "InMemoryGapRepository",
    "InMemoryVendorRepository",
]
