"""Abstract interfaces (Protocol classes) for the suitability assessment service.

AssessmentService depends on these interfaces, not concrete implementations.
Concrete SQLAlchemy implementations live in ``adapters/repositories.py``;
tests substitute AsyncMock objects or the same repositories over SQLite.

Implementations raise ``StorageUnavailableError`` when the backing store
cannot be read or written, and return None for absent records.
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from kube_suitability.core.models.domain import Application, Assessment, Question, Report


@runtime_checkable
class IQuestionRepository(Protocol):
    """Read-only access to the question catalog."""

    async def list_questions(self) -> list[Question]:
        """Return the full catalog in display order."""
        ...

    async def get_question(self, question_id: str) -> Question | None:
        """Return one question by ID."""
        ...


@runtime_checkable
class IApplicationRepository(Protocol):
    """Repository interface for Application persistence."""

    async def get_application(self, application_id: str) -> Application | None:
        """Return one application by ID."""
        ...

    async def list_applications(self) -> list[Application]:
        """Return every registered application."""
        ...

    async def save_application(self, application: Application) -> Application:
        """Create or replace an application."""
        ...


@runtime_checkable
class IAssessmentRepository(Protocol):
    """Repository interface for Assessment persistence."""

    async def create_assessment(self, assessment: Assessment) -> Assessment:
        """Persist a new assessment."""
        ...

    async def get_assessment(self, assessment_id: str) -> Assessment | None:
        """Return one assessment by ID."""
        ...

    async def save_answers(
        self,
        assessment_id: str,
        answers: Mapping[str, str],
        required_status: str | None = None,
    ) -> Assessment | None:
        """Merge answers into the stored map without touching the status.

        Returns None if the assessment is absent or, when ``required_status``
        is given, no longer has that status.
        """
        ...

    async def mark_completed(self, assessment_id: str) -> Assessment | None:
        """Move an assessment to completed and return it, or None if absent."""
        ...

    async def list_assessments(self, application_id: str | None = None) -> list[Assessment]:
        """List assessments, optionally for one application."""
        ...


@runtime_checkable
class IReportRepository(Protocol):
    """Repository interface for Report persistence."""

    async def save_report(self, report: Report) -> Report:
        """Upsert a report keyed by its assessment ID."""
        ...

    async def get_report(self, assessment_id: str) -> Report | None:
        """Return the report for an assessment."""
        ...
