"""Error taxonomy shared by the core and adapter layers.

Domain-specific subclasses (e.g. AssessmentNotFoundError) live next to the
service that raises them. Every error carries the identifiers involved so
callers can log and respond without re-deriving context.
"""

from typing import Any


class SuitabilityError(Exception):
    """Base class for all errors raised by this service.

    Attributes:
        message: Human-readable description of the failure.
        context: Identifiers involved in the failure (assessment_id, ...).
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class NotFoundError(SuitabilityError):
    """A referenced record (assessment, question, report, application) is absent."""


class ConflictError(SuitabilityError):
    """The request conflicts with the current state of a record."""


class InvalidReferenceError(SuitabilityError):
    """An identifier does not belong where it is used (e.g. an option of another question)."""


class StorageUnavailableError(SuitabilityError):
    """The backing store could not be read or written."""
