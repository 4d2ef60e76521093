"""SQLAlchemy async repositories for the suitability assessment data layer.

Each repository maps ORM rows to and from the core domain dataclasses so the
core layer never sees SQLAlchemy objects. Every operation translates
SQLAlchemyError into StorageUnavailableError with the identifiers involved.
"""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kube_suitability.core.models.domain import (
    STATUS_COMPLETED,
    Application,
    Assessment,
    ModernizationStep,
    Option,
    Question,
    Recommendation,
    Report,
    Risk,
)
from kube_suitability.core.models.orm import (
    ApplicationRecord,
    AssessmentRecord,
    QuestionRecord,
    ReportRecord,
)
from kube_suitability.errors import StorageUnavailableError
from kube_suitability.observability import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def _storage_errors(operation: str, **context: Any) -> AsyncGenerator[None, None]:
    """Translate SQLAlchemy failures inside the block into StorageUnavailableError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Storage operation failed", operation=operation, error=str(exc), **context)
        raise StorageUnavailableError(
            f"Storage unavailable during {operation}.",
            operation=operation,
            **context,
        ) from exc


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops the offset on round-trip)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class QuestionRepository:
    """Repository for the question catalog."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialise with an async database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def list_questions(self) -> list[Question]:
        """Return the full catalog ordered by position, then ID."""
        async with _storage_errors("list_questions"):
            result = await self._session.execute(
                select(QuestionRecord).order_by(QuestionRecord.position, QuestionRecord.id)
            )
            return [_question_to_domain(record) for record in result.scalars().all()]

    async def get_question(self, question_id: str) -> Question | None:
        """Return one question, or None if it is not in the catalog."""
        async with _storage_errors("get_question", question_id=question_id):
            record = await self._session.get(QuestionRecord, question_id)
            return _question_to_domain(record) if record is not None else None

    async def save_question(self, question: Question, position: int = 0) -> Question:
        """Create or replace a catalog question.

        Args:
            question: Question to store.
            position: Display order within the catalog.

        Returns:
            The stored Question.
        """
        async with _storage_errors("save_question", question_id=question.question_id):
            await self._session.merge(
                QuestionRecord(
                    id=question.question_id,
                    text=question.text,
                    category=question.category,
                    weight=question.weight,
                    options=[
                        {"id": option.option_id, "text": option.text, "points": option.points}
                        for option in question.options
                    ],
                    position=position,
                )
            )
            await self._session.flush()
        return question


class ApplicationRepository:
    """Repository for registered applications."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_application(self, application_id: str) -> Application | None:
        """Return one application, or None if absent."""
        async with _storage_errors("get_application", application_id=application_id):
            record = await self._session.get(ApplicationRecord, application_id)
            return _application_to_domain(record) if record is not None else None

    async def list_applications(self) -> list[Application]:
        """Return every application ordered by ID."""
        async with _storage_errors("list_applications"):
            result = await self._session.execute(
                select(ApplicationRecord).order_by(ApplicationRecord.id)
            )
            return [_application_to_domain(record) for record in result.scalars().all()]

    async def save_application(self, application: Application) -> Application:
        """Create or replace an application."""
        async with _storage_errors("save_application", application_id=application.application_id):
            await self._session.merge(
                ApplicationRecord(
                    id=application.application_id,
                    name=application.name,
                    description=application.description,
                    tags=dict(application.tags),
                )
            )
            await self._session.flush()

        logger.debug("Application persisted", application_id=application.application_id)
        return application


class AssessmentRepository:
    """Repository for assessments.

    Answers are merged per question (last write wins per question). The
    status only ever moves forward, from in_progress to completed.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_assessment(self, assessment: Assessment) -> Assessment:
        """Persist a new assessment."""
        async with _storage_errors("create_assessment", assessment_id=assessment.assessment_id):
            self._session.add(
                AssessmentRecord(
                    id=assessment.assessment_id,
                    application_id=assessment.application_id,
                    created_at=assessment.created_at,
                    answers=dict(assessment.answers),
                    status=assessment.status,
                )
            )
            await self._session.flush()

        logger.debug(
            "Assessment persisted",
            assessment_id=assessment.assessment_id,
            application_id=assessment.application_id,
        )
        return assessment

    async def get_assessment(self, assessment_id: str) -> Assessment | None:
        """Return one assessment, or None if absent."""
        async with _storage_errors("get_assessment", assessment_id=assessment_id):
            result = await self._session.execute(
                select(AssessmentRecord).where(AssessmentRecord.id == assessment_id)
            )
            record = result.scalar_one_or_none()
            return _assessment_to_domain(record) if record is not None else None

    async def save_answers(
        self,
        assessment_id: str,
        answers: Mapping[str, str],
        required_status: str | None = None,
    ) -> Assessment | None:
        """Merge answers into the stored answer map, leaving the status untouched.

        Args:
            assessment_id: Assessment to write.
            answers: Answers to add or overwrite, keyed by question ID.
            required_status: When given, the write only applies while the row
                still has this status.

        Returns:
            The updated Assessment, or None if the row is absent or its status
            no longer matches ``required_status``.

        Raises:
            StorageUnavailableError: If the read or write fails.
        """
        async with _storage_errors("save_answers", assessment_id=assessment_id):
            record = await self._session.get(
                AssessmentRecord, assessment_id, populate_existing=True
            )
            if record is None:
                return None

            statement = (
                update(AssessmentRecord)
                .where(AssessmentRecord.id == assessment_id)
                .values(answers={**(record.answers or {}), **answers})
                .execution_options(synchronize_session=False)
            )
            if required_status is not None:
                statement = statement.where(AssessmentRecord.status == required_status)
            result = await self._session.execute(statement)
            if result.rowcount == 0:
                return None

            record = await self._session.get(
                AssessmentRecord, assessment_id, populate_existing=True
            )
            return _assessment_to_domain(record) if record is not None else None

    async def mark_completed(self, assessment_id: str) -> Assessment | None:
        """Move an assessment to completed and return its stored state.

        Completed is terminal; the write is a no-op for an already completed row.

        Returns:
            The stored Assessment, or None if the row does not exist.

        Raises:
            StorageUnavailableError: If the read or write fails.
        """
        async with _storage_errors("mark_completed", assessment_id=assessment_id):
            await self._session.execute(
                update(AssessmentRecord)
                .where(
                    AssessmentRecord.id == assessment_id,
                    AssessmentRecord.status != STATUS_COMPLETED,
                )
                .values(status=STATUS_COMPLETED)
                .execution_options(synchronize_session=False)
            )
            record = await self._session.get(
                AssessmentRecord, assessment_id, populate_existing=True
            )
            return _assessment_to_domain(record) if record is not None else None

    async def list_assessments(self, application_id: str | None = None) -> list[Assessment]:
        """List assessments ordered by creation time, optionally for one application."""
        async with _storage_errors("list_assessments", application_id=application_id):
            statement = select(AssessmentRecord).order_by(
                AssessmentRecord.created_at, AssessmentRecord.id
            )
            if application_id is not None:
                statement = statement.where(AssessmentRecord.application_id == application_id)
            result = await self._session.execute(statement)
            return [_assessment_to_domain(record) for record in result.scalars().all()]


class ReportRepository:
    """Repository for generated reports, keyed by assessment ID."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save_report(self, report: Report) -> Report:
        """Upsert a report; any earlier report for the assessment is replaced."""
        async with _storage_errors("save_report", assessment_id=report.assessment_id):
            await self._session.merge(
                ReportRecord(
                    assessment_id=report.assessment_id,
                    application_id=report.application_id,
                    generated_at=report.generated_at,
                    total_score=report.total_score,
                    max_possible_score=report.max_possible_score,
                    category_scores=dict(report.category_scores),
                    recommendations=[
                        {
                            "category": item.category,
                            "description": item.description,
                            "priority": item.priority,
                        }
                        for item in report.recommendations
                    ],
                    risks=[
                        {
                            "category": item.category,
                            "description": item.description,
                            "severity": item.severity,
                        }
                        for item in report.risks
                    ],
                    modernization_plan=[
                        {"order": step.order, "description": step.description, "effort": step.effort}
                        for step in report.modernization_plan
                    ],
                )
            )
            await self._session.flush()

        logger.info(
            "Report persisted",
            assessment_id=report.assessment_id,
            total_score=report.total_score,
            max_possible_score=report.max_possible_score,
        )
        return report

    async def get_report(self, assessment_id: str) -> Report | None:
        """Return the report for an assessment, or None if not yet generated."""
        async with _storage_errors("get_report", assessment_id=assessment_id):
            record = await self._session.get(ReportRecord, assessment_id)
            return _report_to_domain(record) if record is not None else None


# ---------------------------------------------------------------------------
# Private mappers
# ---------------------------------------------------------------------------


def _question_to_domain(record: QuestionRecord) -> Question:
    return Question(
        question_id=record.id,
        text=record.text,
        category=record.category,
        weight=record.weight,
        options=tuple(
            Option(option_id=str(item["id"]), text=str(item["text"]), points=int(item["points"]))
            for item in record.options
        ),
    )


def _application_to_domain(record: ApplicationRecord) -> Application:
    return Application(
        application_id=record.id,
        name=record.name,
        description=record.description or "",
        tags=dict(record.tags or {}),
    )


def _assessment_to_domain(record: AssessmentRecord) -> Assessment:
    return Assessment(
        assessment_id=record.id,
        application_id=record.application_id,
        created_at=_as_utc(record.created_at),
        answers=dict(record.answers or {}),
        status=record.status,
    )


def _report_to_domain(record: ReportRecord) -> Report:
    return Report(
        assessment_id=record.assessment_id,
        application_id=record.application_id,
        generated_at=_as_utc(record.generated_at),
        total_score=record.total_score,
        max_possible_score=record.max_possible_score,
        category_scores={key: int(value) for key, value in (record.category_scores or {}).items()},
        recommendations=tuple(Recommendation(**item) for item in record.recommendations or []),
        risks=tuple(Risk(**item) for item in record.risks or []),
        modernization_plan=tuple(
            ModernizationStep(**item) for item in record.modernization_plan or []
        ),
    )
