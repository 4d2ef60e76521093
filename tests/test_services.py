"""Unit tests for AssessmentService with mocked repositories."""

import asyncio
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from kube_suitability.core.models.domain import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    Application,
    Assessment,
    Question,
    Report,
)
from kube_suitability.core.services import (
    ApplicationNotFoundError,
    AssessmentAlreadyCompletedError,
    AssessmentNotFoundError,
    AssessmentService,
    InvalidOptionError,
    QuestionNotFoundError,
    ReportNotFoundError,
)
from kube_suitability.errors import ConflictError, InvalidReferenceError, NotFoundError

_CREATED_AT = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _returns_argument(value: object) -> object:
    return value


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def catalog(make_question: Callable[..., Question]) -> list[Question]:
    return [
        make_question("q1", category="Architecture", weight=5, points=(10, 7, 4, 1)),
        make_question("q2", category="Persistence", weight=4, points=(10, 7, 3, 1)),
    ]


@pytest.fixture()
def mock_question_repo(catalog: list[Question]) -> AsyncMock:
    repo = AsyncMock()
    repo.list_questions.return_value = catalog
    repo.get_question.side_effect = lambda question_id: next(
        (q for q in catalog if q.question_id == question_id), None
    )
    return repo


@pytest.fixture()
def mock_application_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.save_application.side_effect = _returns_argument
    return repo


@pytest.fixture()
def mock_assessment_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create_assessment.side_effect = _returns_argument
    return repo


@pytest.fixture()
def mock_report_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.save_report.side_effect = _returns_argument
    return repo


@pytest.fixture()
def assessment_service(
    mock_question_repo: AsyncMock,
    mock_application_repo: AsyncMock,
    mock_assessment_repo: AsyncMock,
    mock_report_repo: AsyncMock,
) -> AssessmentService:
    return AssessmentService(
        question_repository=mock_question_repo,
        application_repository=mock_application_repo,
        assessment_repository=mock_assessment_repo,
        report_repository=mock_report_repo,
    )


def _assessment(
    answers: dict[str, str] | None = None,
    status: str = STATUS_IN_PROGRESS,
) -> Assessment:
    return Assessment(
        assessment_id="assess-1",
        application_id="app1",
        created_at=_CREATED_AT,
        answers=answers or {},
        status=status,
    )


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


class TestRegisterApplication:
    @pytest.mark.asyncio()
    async def test_generates_id_when_omitted(
        self,
        assessment_service: AssessmentService,
        mock_application_repo: AsyncMock,
    ) -> None:
        application = await assessment_service.register_application(
            name="Billing",
            tags={"language": "Go"},
        )

        assert application.application_id
        assert application.name == "Billing"
        assert application.tags == {"language": "Go"}
        mock_application_repo.save_application.assert_awaited_once_with(application)

    @pytest.mark.asyncio()
    async def test_keeps_explicit_id(self, assessment_service: AssessmentService) -> None:
        application = await assessment_service.register_application(
            name="Billing",
            application_id="billing",
        )

        assert application.application_id == "billing"
        assert application.description == ""
        assert application.tags == {}


# ---------------------------------------------------------------------------
# Assessment lifecycle
# ---------------------------------------------------------------------------


class TestStartAssessment:
    @pytest.mark.asyncio()
    async def test_creates_in_progress_assessment(
        self,
        assessment_service: AssessmentService,
        mock_application_repo: AsyncMock,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_application_repo.get_application.return_value = Application(
            application_id="app1",
            name="Sample Application",
        )

        assessment = await assessment_service.start_assessment("app1")

        assert assessment.application_id == "app1"
        assert assessment.status == STATUS_IN_PROGRESS
        assert assessment.answers == {}
        assert assessment.created_at.tzinfo is not None
        mock_assessment_repo.create_assessment.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_generates_distinct_ids(
        self,
        assessment_service: AssessmentService,
        mock_application_repo: AsyncMock,
    ) -> None:
        mock_application_repo.get_application.return_value = Application(
            application_id="app1",
            name="Sample Application",
        )

        first = await assessment_service.start_assessment("app1")
        second = await assessment_service.start_assessment("app1")

        assert first.assessment_id != second.assessment_id

    @pytest.mark.asyncio()
    async def test_unknown_application_raises(
        self,
        assessment_service: AssessmentService,
        mock_application_repo: AsyncMock,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_application_repo.get_application.return_value = None

        with pytest.raises(ApplicationNotFoundError) as exc_info:
            await assessment_service.start_assessment("missing")

        assert exc_info.value.context == {"application_id": "missing"}
        mock_assessment_repo.create_assessment.assert_not_awaited()


class TestGetAssessment:
    @pytest.mark.asyncio()
    async def test_returns_assessment(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment()

        assessment = await assessment_service.get_assessment("assess-1")

        assert assessment.assessment_id == "assess-1"

    @pytest.mark.asyncio()
    async def test_missing_assessment_is_not_found(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = None

        with pytest.raises(NotFoundError):
            await assessment_service.get_assessment("nope")

    @pytest.mark.asyncio()
    async def test_list_assessments_passes_filter(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.list_assessments.return_value = [_assessment()]

        result = await assessment_service.list_assessments("app1")

        assert len(result) == 1
        mock_assessment_repo.list_assessments.assert_awaited_once_with("app1")


class TestSaveAnswer:
    @pytest.mark.asyncio()
    async def test_records_answer(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment()
        mock_assessment_repo.save_answers.return_value = _assessment(answers={"q1": "q1_a2"})

        updated = await assessment_service.save_answer("assess-1", "q1", "q1_a2")

        assert updated.answers == {"q1": "q1_a2"}
        mock_assessment_repo.save_answers.assert_awaited_once_with(
            "assess-1",
            {"q1": "q1_a2"},
            required_status=STATUS_IN_PROGRESS,
        )

    @pytest.mark.asyncio()
    async def test_writes_only_the_new_answer(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment(
            answers={"q1": "q1_a1", "q2": "q2_a1"}
        )
        mock_assessment_repo.save_answers.return_value = _assessment(
            answers={"q1": "q1_a4", "q2": "q2_a1"}
        )

        updated = await assessment_service.save_answer("assess-1", "q1", "q1_a4")

        assert updated.answers == {"q1": "q1_a4", "q2": "q2_a1"}
        assert mock_assessment_repo.save_answers.await_args.args[1] == {"q1": "q1_a4"}

    @pytest.mark.asyncio()
    async def test_unknown_assessment_raises(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = None

        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.save_answer("nope", "q1", "q1_a1")

    @pytest.mark.asyncio()
    async def test_unknown_question_raises(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment()

        with pytest.raises(QuestionNotFoundError) as exc_info:
            await assessment_service.save_answer("assess-1", "q99", "q99_a1")

        assert exc_info.value.context["question_id"] == "q99"
        mock_assessment_repo.save_answers.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_option_from_other_question_raises(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment()

        with pytest.raises(InvalidOptionError) as exc_info:
            await assessment_service.save_answer("assess-1", "q1", "q2_a1")

        assert isinstance(exc_info.value, InvalidReferenceError)
        assert not isinstance(exc_info.value, ConflictError)
        assert exc_info.value.context["option_id"] == "q2_a1"
        mock_assessment_repo.save_answers.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_completed_assessment_is_locked(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.return_value = _assessment(status=STATUS_COMPLETED)

        with pytest.raises(AssessmentAlreadyCompletedError):
            await assessment_service.save_answer("assess-1", "q1", "q1_a1")

        mock_assessment_repo.save_answers.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_rejected_conditional_write_reports_completion(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.get_assessment.side_effect = [
            _assessment(),
            _assessment(status=STATUS_COMPLETED),
        ]
        mock_assessment_repo.save_answers.return_value = None

        with pytest.raises(AssessmentAlreadyCompletedError):
            await assessment_service.save_answer("assess-1", "q1", "q1_a1")

    @pytest.mark.asyncio()
    async def test_completed_assessment_accepts_answers_when_unlocked(
        self,
        mock_question_repo: AsyncMock,
        mock_application_repo: AsyncMock,
        mock_assessment_repo: AsyncMock,
        mock_report_repo: AsyncMock,
    ) -> None:
        service = AssessmentService(
            question_repository=mock_question_repo,
            application_repository=mock_application_repo,
            assessment_repository=mock_assessment_repo,
            report_repository=mock_report_repo,
            lock_completed_assessments=False,
        )
        mock_assessment_repo.get_assessment.return_value = _assessment(status=STATUS_COMPLETED)
        mock_assessment_repo.save_answers.return_value = _assessment(
            answers={"q1": "q1_a1"},
            status=STATUS_COMPLETED,
        )

        updated = await service.save_answer("assess-1", "q1", "q1_a1")

        assert updated.answers == {"q1": "q1_a1"}
        assert updated.status == STATUS_COMPLETED
        mock_assessment_repo.save_answers.assert_awaited_once_with(
            "assess-1",
            {"q1": "q1_a1"},
            required_status=None,
        )


class TestCompleteAssessment:
    @pytest.mark.asyncio()
    async def test_marks_completed_and_stores_report(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
        mock_report_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.mark_completed.return_value = _assessment(
            answers={"q1": "q1_a1", "q2": "q2_a1"},
            status=STATUS_COMPLETED,
        )

        report = await assessment_service.complete_assessment("assess-1")

        mock_assessment_repo.mark_completed.assert_awaited_once_with("assess-1")
        assert report.assessment_id == "assess-1"
        assert report.application_id == "app1"
        assert report.total_score == 90
        assert report.max_possible_score == 90
        assert report.category_scores == {"Architecture": 50, "Persistence": 40}
        assert report.recommendations[0].priority == "Low"
        mock_report_repo.save_report.assert_awaited_once_with(report)

    @pytest.mark.asyncio()
    async def test_weak_answers_produce_category_findings(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.mark_completed.return_value = _assessment(
            answers={"q1": "q1_a4", "q2": "q2_a4"},
            status=STATUS_COMPLETED,
        )

        report = await assessment_service.complete_assessment("assess-1")

        assert [r.category for r in report.recommendations] == [
            "General",
            "Architecture",
            "Persistence",
        ]
        assert [r.category for r in report.risks] == ["Deployment", "Architecture", "Persistence"]

    @pytest.mark.asyncio()
    async def test_recompleting_regenerates_report(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
        mock_report_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.mark_completed.return_value = _assessment(
            answers={"q1": "q1_a1"},
            status=STATUS_COMPLETED,
        )

        first = await assessment_service.complete_assessment("assess-1")
        second = await assessment_service.complete_assessment("assess-1")

        assert isinstance(second, Report)
        assert second.total_score == first.total_score == 50
        assert mock_report_repo.save_report.await_count == 2

    @pytest.mark.asyncio()
    async def test_unknown_assessment_raises(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
        mock_report_repo: AsyncMock,
    ) -> None:
        mock_assessment_repo.mark_completed.return_value = None

        with pytest.raises(AssessmentNotFoundError) as exc_info:
            await assessment_service.complete_assessment("nope")

        assert exc_info.value.context == {"assessment_id": "nope"}
        mock_report_repo.save_report.assert_not_awaited()


# ---------------------------------------------------------------------------
# Interleaved save and complete
# ---------------------------------------------------------------------------


class InMemoryAssessmentRepository:
    """Assessment repository over a dict, with the same conditional-write rules."""

    def __init__(self, *assessments: Assessment) -> None:
        self.rows = {assessment.assessment_id: assessment for assessment in assessments}

    async def create_assessment(self, assessment: Assessment) -> Assessment:
        self.rows[assessment.assessment_id] = assessment
        return assessment

    async def get_assessment(self, assessment_id: str) -> Assessment | None:
        return self.rows.get(assessment_id)

    async def save_answers(
        self,
        assessment_id: str,
        answers: dict[str, str],
        required_status: str | None = None,
    ) -> Assessment | None:
        current = self.rows.get(assessment_id)
        if current is None:
            return None
        if required_status is not None and current.status != required_status:
            return None
        updated = replace(current, answers={**current.answers, **answers})
        self.rows[assessment_id] = updated
        return updated

    async def mark_completed(self, assessment_id: str) -> Assessment | None:
        current = self.rows.get(assessment_id)
        if current is None:
            return None
        updated = replace(current, status=STATUS_COMPLETED)
        self.rows[assessment_id] = updated
        return updated

    async def list_assessments(self, application_id: str | None = None) -> list[Assessment]:
        return [
            row
            for row in self.rows.values()
            if application_id is None or row.application_id == application_id
        ]


class TestInterleavedSaveAndComplete:
    """An answer whose question lookup straddles completion must not reopen it."""

    @staticmethod
    def _service(
        catalog: list[Question],
        assessment_repo: InMemoryAssessmentRepository,
        mock_report_repo: AsyncMock,
        gate: asyncio.Event,
        lock_completed_assessments: bool = True,
    ) -> AssessmentService:
        async def _gated_get_question(question_id: str) -> Question | None:
            await gate.wait()
            return next((q for q in catalog if q.question_id == question_id), None)

        question_repo = AsyncMock()
        question_repo.list_questions.return_value = catalog
        question_repo.get_question.side_effect = _gated_get_question
        return AssessmentService(
            question_repository=question_repo,
            application_repository=AsyncMock(),
            assessment_repository=assessment_repo,
            report_repository=mock_report_repo,
            lock_completed_assessments=lock_completed_assessments,
        )

    @pytest.mark.asyncio()
    async def test_late_answer_is_rejected_and_status_stays_completed(
        self,
        catalog: list[Question],
        mock_report_repo: AsyncMock,
    ) -> None:
        assessment_repo = InMemoryAssessmentRepository(_assessment())
        gate = asyncio.Event()
        service = self._service(catalog, assessment_repo, mock_report_repo, gate)

        pending_save = asyncio.create_task(service.save_answer("assess-1", "q1", "q1_a1"))
        await asyncio.sleep(0)
        await service.complete_assessment("assess-1")
        gate.set()

        with pytest.raises(AssessmentAlreadyCompletedError):
            await pending_save

        stored = await assessment_repo.get_assessment("assess-1")
        assert stored is not None
        assert stored.status == STATUS_COMPLETED
        assert stored.answers == {}
        mock_report_repo.save_report.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_late_answer_when_unlocked_keeps_completed_status(
        self,
        catalog: list[Question],
        mock_report_repo: AsyncMock,
    ) -> None:
        assessment_repo = InMemoryAssessmentRepository(_assessment())
        gate = asyncio.Event()
        service = self._service(
            catalog,
            assessment_repo,
            mock_report_repo,
            gate,
            lock_completed_assessments=False,
        )

        pending_save = asyncio.create_task(service.save_answer("assess-1", "q1", "q1_a1"))
        await asyncio.sleep(0)
        await service.complete_assessment("assess-1")
        gate.set()
        updated = await pending_save

        assert updated.status == STATUS_COMPLETED
        assert updated.answers == {"q1": "q1_a1"}


class TestReports:
    @pytest.mark.asyncio()
    async def test_missing_report_raises(
        self,
        assessment_service: AssessmentService,
        mock_report_repo: AsyncMock,
    ) -> None:
        mock_report_repo.get_report.return_value = None

        with pytest.raises(ReportNotFoundError):
            await assessment_service.get_report("assess-1")

    @pytest.mark.asyncio()
    async def test_preview_scores_without_persisting(
        self,
        assessment_service: AssessmentService,
        mock_assessment_repo: AsyncMock,
        mock_report_repo: AsyncMock,
    ) -> None:
        scores = await assessment_service.preview_score({"q1": "q1_a2", "q2": "bogus"})

        assert scores.total_score == 35
        assert scores.max_possible_score == 90
        assert scores.category_scores == {"Architecture": 35}
        mock_assessment_repo.save_answers.assert_not_awaited()
        mock_report_repo.save_report.assert_not_awaited()
