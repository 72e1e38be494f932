"""
Custom Exceptions - Heliolus Scoring Engine
heliolus/core/exceptions.py

Custom exception classes for scoring and storage operations.
"""


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class UnknownEnumValueError(ScoringException):
    """Enumerated input carries a value the engine does not know."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Unknown value for {field}: {value!r}")


class ScoringInputError(ScoringException):
    """Structurally invalid scoring input."""

    def __init__(self, message: str = "Invalid scoring input"):
        self.message = message
        super().__init__(message)


class DataIntegrityError(ScoringException):
    """Stored record violates a data-integrity rule."""

    def __init__(self, entity_type: str, entity_id: str, message: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.message = message
        super().__init__(f"{entity_type} {entity_id}: {message}")


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in storage."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")
