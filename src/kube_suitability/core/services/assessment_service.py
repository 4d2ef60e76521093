"""Service layer orchestrating the suitability assessment workflow.

Implements the full assessment flow:
    1. start_assessment(): creates an in_progress assessment for an application
    2. save_answer(): records (or overwrites) one answer
    3. complete_assessment(): marks completed, scores, generates and stores the report
    4. get_report(): returns the stored report

All database access goes through repository interfaces. No SQLAlchemy or
FastAPI imports belong here; those live in the adapters and api layers.
"""

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone

from kube_suitability.core.interfaces import (
    IApplicationRepository,
    IAssessmentRepository,
    IQuestionRepository,
    IReportRepository,
)
from kube_suitability.core.models.domain import (
    STATUS_IN_PROGRESS,
    Application,
    Assessment,
    Question,
    Report,
    ScoreResult,
)
from kube_suitability.core.report_generator import ReportGenerator
from kube_suitability.core.scoring import AssessmentScorer
from kube_suitability.errors import ConflictError, InvalidReferenceError, NotFoundError
from kube_suitability.observability import get_logger

logger = get_logger(__name__)


class ApplicationNotFoundError(NotFoundError):
    """Raised when the referenced application does not exist."""


class AssessmentNotFoundError(NotFoundError):
    """Raised when the referenced assessment does not exist."""


class QuestionNotFoundError(NotFoundError):
    """Raised when the submitted question_id is not in the catalog."""


class ReportNotFoundError(NotFoundError):
    """Raised when no report has been generated for the assessment."""


class InvalidOptionError(InvalidReferenceError):
    """Raised when the submitted option does not belong to the question."""


class AssessmentAlreadyCompletedError(ConflictError):
    """Raised when answering an assessment that has been completed."""


class AssessmentService:
    """Orchestrates the suitability assessment workflow.

    Depends on repository instances injected at construction time.
    Contains no framework-specific code.
    """

    def __init__(
        self,
        question_repository: IQuestionRepository,
        application_repository: IApplicationRepository,
        assessment_repository: IAssessmentRepository,
        report_repository: IReportRepository,
        scorer: AssessmentScorer | None = None,
        report_generator: ReportGenerator | None = None,
        lock_completed_assessments: bool = True,
    ) -> None:
        """Initialise the service with repository dependencies.

        Args:
            question_repository: Read access to the question catalog.
            application_repository: Repository for applications.
            assessment_repository: Repository for assessments.
            report_repository: Repository for generated reports.
            scorer: Scoring engine. Defaults to a new AssessmentScorer.
            report_generator: Report builder. Defaults to a new ReportGenerator.
            lock_completed_assessments: Reject answers for completed assessments.
        """
        self._question_repo = question_repository
        self._application_repo = application_repository
        self._assessment_repo = assessment_repository
        self._report_repo = report_repository
        self._scorer = scorer or AssessmentScorer()
        self._report_generator = report_generator or ReportGenerator()
        self._lock_completed = lock_completed_assessments

    # ------------------------------------------------------------------
    # Catalog and applications
    # ------------------------------------------------------------------

    async def get_questions(self) -> list[Question]:
        """Return the full question catalog."""
        return await self._question_repo.list_questions()

    async def list_applications(self) -> list[Application]:
        """Return every registered application."""
        return await self._application_repo.list_applications()

    async def register_application(
        self,
        name: str,
        description: str = "",
        tags: Mapping[str, str] | None = None,
        application_id: str | None = None,
    ) -> Application:
        """Create or replace an application.

        Args:
            name: Display name.
            description: Free-text description.
            tags: Optional key/value labels.
            application_id: Explicit ID; a UUID is generated when omitted.

        Returns:
            The stored Application.
        """
        application = Application(
            application_id=application_id or str(uuid.uuid4()),
            name=name,
            description=description,
            tags=dict(tags or {}),
        )
        stored = await self._application_repo.save_application(application)

        logger.info(
            "Application registered",
            application_id=stored.application_id,
            name=stored.name,
        )
        return stored

    # ------------------------------------------------------------------
    # Assessment lifecycle
    # ------------------------------------------------------------------

    async def start_assessment(self, application_id: str) -> Assessment:
        """Create a new in_progress assessment for an application.

        Args:
            application_id: Application to assess.

        Returns:
            The created Assessment with an empty answer set.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        application = await self._application_repo.get_application(application_id)
        if application is None:
            raise ApplicationNotFoundError(
                f"Application {application_id!r} not found.",
                application_id=application_id,
            )

        assessment = Assessment(
            assessment_id=str(uuid.uuid4()),
            application_id=application_id,
            created_at=datetime.now(tz=timezone.utc),
            answers={},
            status=STATUS_IN_PROGRESS,
        )
        created = await self._assessment_repo.create_assessment(assessment)

        logger.info(
            "Assessment started",
            assessment_id=created.assessment_id,
            application_id=application_id,
        )
        return created

    async def get_assessment(self, assessment_id: str) -> Assessment:
        """Return an assessment by ID.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
        """
        assessment = await self._assessment_repo.get_assessment(assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError(
                f"Assessment {assessment_id!r} not found.",
                assessment_id=assessment_id,
            )
        return assessment

    async def list_assessments(self, application_id: str | None = None) -> list[Assessment]:
        """List assessments, optionally restricted to one application."""
        return await self._assessment_repo.list_assessments(application_id)

    async def save_answer(
        self,
        assessment_id: str,
        question_id: str,
        option_id: str,
    ) -> Assessment:
        """Record the selected option for a question, overwriting any earlier answer.

        Args:
            assessment_id: Assessment being answered.
            question_id: Question identifier from the catalog.
            option_id: Option identifier belonging to that question.

        Returns:
            The updated Assessment.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            AssessmentAlreadyCompletedError: If the assessment is completed and
                completed assessments are locked.
            QuestionNotFoundError: If the question is not in the catalog.
            InvalidOptionError: If the option does not belong to the question.
        """
        assessment = await self.get_assessment(assessment_id)

        if self._lock_completed and assessment.is_completed:
            raise AssessmentAlreadyCompletedError(
                f"Assessment {assessment_id!r} is already completed.",
                assessment_id=assessment_id,
            )

        question = await self._question_repo.get_question(question_id)
        if question is None:
            raise QuestionNotFoundError(
                f"Question {question_id!r} is not a valid assessment question.",
                assessment_id=assessment_id,
                question_id=question_id,
            )

        if question.find_option(option_id) is None:
            raise InvalidOptionError(
                f"Option {option_id!r} not found for question {question_id!r}.",
                assessment_id=assessment_id,
                question_id=question_id,
                option_id=option_id,
            )

        required_status = STATUS_IN_PROGRESS if self._lock_completed else None
        updated = await self._assessment_repo.save_answers(
            assessment_id,
            {question_id: option_id},
            required_status=required_status,
        )
        if updated is None:
            # Completed (or removed) between the read above and the write
            await self.get_assessment(assessment_id)
            raise AssessmentAlreadyCompletedError(
                f"Assessment {assessment_id!r} is already completed.",
                assessment_id=assessment_id,
            )

        logger.debug(
            "Answer saved",
            assessment_id=assessment_id,
            question_id=question_id,
            option_id=option_id,
            answered_count=len(updated.answers),
        )
        return updated

    async def complete_assessment(self, assessment_id: str) -> Report:
        """Complete an assessment, then compute, store, and return its report.

        Completing an already completed assessment regenerates the report and
        replaces the stored one.

        Args:
            assessment_id: Assessment to complete.

        Returns:
            The freshly generated Report.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            StorageUnavailableError: Propagated from the repositories.
        """
        assessment = await self._assessment_repo.mark_completed(assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError(
                f"Assessment {assessment_id!r} not found.",
                assessment_id=assessment_id,
            )
        questions = await self._question_repo.list_questions()

        scores = self._scorer.score(questions, assessment.answers)
        report = self._report_generator.generate(
            assessment_id=assessment.assessment_id,
            application_id=assessment.application_id,
            scores=scores,
            category_max_scores=scores.category_max_scores,
        )
        stored = await self._report_repo.save_report(report)

        logger.info(
            "Assessment completed",
            assessment_id=assessment_id,
            application_id=assessment.application_id,
            total_score=stored.total_score,
            max_possible_score=stored.max_possible_score,
            recommendation_count=len(stored.recommendations),
            risk_count=len(stored.risks),
            plan_length=len(stored.modernization_plan),
        )
        return stored

    async def get_report(self, assessment_id: str) -> Report:
        """Return the stored report for an assessment.

        Raises:
            ReportNotFoundError: If no report has been generated yet.
        """
        report = await self._report_repo.get_report(assessment_id)
        if report is None:
            raise ReportNotFoundError(
                f"Report for assessment {assessment_id!r} not found.",
                assessment_id=assessment_id,
            )
        return report

    async def preview_score(self, answers: Mapping[str, str]) -> ScoreResult:
        """Score an answer set against the current catalog without persisting anything."""
        questions = await self._question_repo.list_questions()
        return self._scorer.score(questions, answers)
