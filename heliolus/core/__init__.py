"""
Core Package - Heliolus Scoring Engine
heliolus/core/__init__.py

Core infrastructure: dependencies, exceptions.
"""

from heliolus.core.exceptions import (
    DataIntegrityError,
    EntityNotFoundException,
    RepositoryException,
    ScoringException,
    ScoringInputError,
    UnknownEnumValueError,
)

__all__ = [
    "DataIntegrityError",
    "EntityNotFoundException",
    "RepositoryException",
    "ScoringException",
    "ScoringInputError",
    "UnknownEnumValueError",
]
