"""FastAPI router for the Kubernetes suitability assessment.

All routes are thin: they parse inputs, build dependencies, delegate to
AssessmentService, and serialise responses. No business logic lives here.

API prefix: /api
Auth: None.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from kube_suitability.adapters.database import commit_session, get_db_session
from kube_suitability.adapters.repositories import (
    ApplicationRepository,
    AssessmentRepository,
    QuestionRepository,
    ReportRepository,
)
from kube_suitability.api.schemas import (
    ApplicationSchema,
    AssessmentSchema,
    HealthResponse,
    QuestionSchema,
    RegisterApplicationRequest,
    ReportSchema,
    SaveAnswerRequest,
    SaveAnswerResponse,
    ScorePreviewRequest,
    ScoreSchema,
    StartAssessmentRequest,
)
from kube_suitability.core.services.assessment_service import (
    ApplicationNotFoundError,
    AssessmentAlreadyCompletedError,
    AssessmentNotFoundError,
    AssessmentService,
    InvalidOptionError,
    QuestionNotFoundError,
    ReportNotFoundError,
)
from kube_suitability.observability import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Kubernetes Suitability Assessment"])


# ---------------------------------------------------------------------------
# Dependency factory
# ---------------------------------------------------------------------------


def get_assessment_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AssessmentService:
    """Build AssessmentService with injected repository dependencies.

    Args:
        request: Incoming request, used to read app settings.
        session: Async SQLAlchemy session scoped to the request.

    Returns:
        Configured AssessmentService instance.
    """
    return AssessmentService(
        question_repository=QuestionRepository(session),
        application_repository=ApplicationRepository(session),
        assessment_repository=AssessmentRepository(session),
        report_repository=ReportRepository(session),
        lock_completed_assessments=request.app.state.settings.lock_completed_assessments,
    )


# ---------------------------------------------------------------------------
# Health and catalog
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health() -> HealthResponse:
    return HealthResponse(status="up")


@router.get(
    "/questions",
    response_model=list[QuestionSchema],
    summary="List the question catalog",
)
async def get_questions(
    service: AssessmentService = Depends(get_assessment_service),
) -> list[QuestionSchema]:
    """Return every catalog question with its weighted options."""
    questions = await service.get_questions()
    return [QuestionSchema.from_domain(question) for question in questions]


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


@router.get(
    "/applications",
    response_model=list[ApplicationSchema],
    summary="List registered applications",
)
async def list_applications(
    service: AssessmentService = Depends(get_assessment_service),
) -> list[ApplicationSchema]:
    applications = await service.list_applications()
    return [ApplicationSchema.from_domain(application) for application in applications]


@router.post(
    "/applications",
    response_model=ApplicationSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Register an application for assessment",
)
async def register_application(
    body: RegisterApplicationRequest,
    service: AssessmentService = Depends(get_assessment_service),
    session: AsyncSession = Depends(get_db_session),
) -> ApplicationSchema:
    """Create an application, or replace it when ``id`` names an existing one."""
    application = await service.register_application(
        name=body.name,
        description=body.description,
        tags=body.tags,
        application_id=body.id,
    )
    await commit_session(session)
    return ApplicationSchema.from_domain(application)


@router.get(
    "/applications/{application_id}/assessments",
    response_model=list[AssessmentSchema],
    summary="List assessments for an application",
)
async def list_application_assessments(
    application_id: str = Path(..., description="Application identifier"),
    service: AssessmentService = Depends(get_assessment_service),
) -> list[AssessmentSchema]:
    assessments = await service.list_assessments(application_id)
    return [AssessmentSchema.from_domain(assessment) for assessment in assessments]


# ---------------------------------------------------------------------------
# Assessment lifecycle endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/assessments",
    response_model=AssessmentSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Start a new assessment",
)
async def start_assessment(
    body: StartAssessmentRequest,
    service: AssessmentService = Depends(get_assessment_service),
    session: AsyncSession = Depends(get_db_session),
) -> AssessmentSchema:
    """Create an in_progress assessment with an empty answer set."""
    try:
        assessment = await service.start_assessment(body.application_id)
    except ApplicationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ) from exc

    await commit_session(session)
    return AssessmentSchema.from_domain(assessment)


@router.get(
    "/assessments/{assessment_id}",
    response_model=AssessmentSchema,
    summary="Retrieve an assessment",
)
async def get_assessment(
    assessment_id: str = Path(..., description="Assessment identifier"),
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentSchema:
    try:
        assessment = await service.get_assessment(assessment_id)
    except AssessmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ) from exc

    return AssessmentSchema.from_domain(assessment)


@router.post(
    "/assessments/{assessment_id}/answers",
    response_model=SaveAnswerResponse,
    status_code=status.HTTP_200_OK,
    summary="Record one answer",
)
async def save_answer(
    body: SaveAnswerRequest,
    assessment_id: str = Path(..., description="Assessment identifier"),
    service: AssessmentService = Depends(get_assessment_service),
    session: AsyncSession = Depends(get_db_session),
) -> SaveAnswerResponse:
    """Record the selected option for a question, overwriting any earlier answer."""
    try:
        await service.save_answer(
            assessment_id=assessment_id,
            question_id=body.question_id,
            option_id=body.option_id,
        )
    except (AssessmentNotFoundError, QuestionNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ) from exc
    except InvalidOptionError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.message,
        ) from exc
    except AssessmentAlreadyCompletedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=exc.message,
        ) from exc

    await commit_session(session)
    return SaveAnswerResponse(status="success")


@router.post(
    "/assessments/{assessment_id}/complete",
    response_model=ReportSchema,
    status_code=status.HTTP_200_OK,
    summary="Complete the assessment and generate its report",
)
async def complete_assessment(
    assessment_id: str = Path(..., description="Assessment identifier"),
    service: AssessmentService = Depends(get_assessment_service),
    session: AsyncSession = Depends(get_db_session),
) -> ReportSchema:
    """Mark the assessment completed and return the freshly generated report.

    Calling this again regenerates the report and replaces the stored one.
    """
    try:
        report = await service.complete_assessment(assessment_id)
    except AssessmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ) from exc

    await commit_session(session)
    logger.info(
        "Report returned",
        assessment_id=assessment_id,
        total_score=report.total_score,
        max_possible_score=report.max_possible_score,
    )
    return ReportSchema.from_domain(report)


@router.get(
    "/assessments/{assessment_id}/report",
    response_model=ReportSchema,
    summary="Retrieve the generated report",
)
async def get_report(
    assessment_id: str = Path(..., description="Assessment identifier"),
    service: AssessmentService = Depends(get_assessment_service),
) -> ReportSchema:
    try:
        report = await service.get_report(assessment_id)
    except ReportNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.message,
        ) from exc

    return ReportSchema.from_domain(report)


# ---------------------------------------------------------------------------
# Live preview
# ---------------------------------------------------------------------------


@router.post(
    "/scores/preview",
    response_model=ScoreSchema,
    summary="Score an answer set without saving it",
)
async def preview_score(
    body: ScorePreviewRequest,
    service: AssessmentService = Depends(get_assessment_service),
) -> ScoreSchema:
    """Score the given answers against the current catalog; nothing is persisted."""
    scores = await service.preview_score(body.answers)
    return ScoreSchema.from_domain(scores)
