"""Pydantic request/response schemas for the suitability assessment API.

All API inputs and outputs are strictly typed Pydantic v2 models serialised
with camelCase aliases (``totalScore``, ``modernizationPlan``, ...), the
field names existing consumers rely on. Requests accept either spelling.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kube_suitability.core.models.domain import (
    Application,
    Assessment,
    Question,
    Report,
    ScoreResult,
)


class CamelModel(BaseModel):
    """Base model emitting camelCase JSON while accepting snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class OptionSchema(CamelModel):
    id: str
    text: str
    points: int


class QuestionSchema(CamelModel):
    """A catalog question returned to the client.

    Attributes:
        id: Unique question identifier.
        text: Prompt presented to the respondent.
        category: Grouping label for per-category scoring.
        weight: Integer multiplier applied to option points.
        options: Ordered answer options.
    """

    id: str
    text: str
    category: str
    weight: int
    options: list[OptionSchema]

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionSchema":
        return cls(
            id=question.question_id,
            text=question.text,
            category=question.category,
            weight=question.weight,
            options=[
                OptionSchema(id=option.option_id, text=option.text, points=option.points)
                for option in question.options
            ],
        )


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


class RegisterApplicationRequest(CamelModel):
    """Request body to register (or replace) an application.

    Attributes:
        id: Optional explicit identifier; generated when omitted.
        name: Display name.
        description: Free-text description.
        tags: Arbitrary key/value labels.
    """

    id: str | None = Field(default=None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    tags: dict[str, str] = Field(default_factory=dict)


class ApplicationSchema(CamelModel):
    id: str
    name: str
    description: str
    tags: dict[str, str]

    @classmethod
    def from_domain(cls, application: Application) -> "ApplicationSchema":
        return cls(
            id=application.application_id,
            name=application.name,
            description=application.description,
            tags=dict(application.tags),
        )


# ---------------------------------------------------------------------------
# Assessments
# ---------------------------------------------------------------------------


class StartAssessmentRequest(CamelModel):
    """Request body to start an assessment.

    Attributes:
        application_id: Application to assess (JSON: ``applicationId``).
    """

    application_id: str = Field(..., min_length=1, max_length=64)


class SaveAnswerRequest(CamelModel):
    """Request body to record one answer.

    Attributes:
        question_id: Question being answered (JSON: ``questionId``).
        option_id: Selected option (JSON: ``optionId``).
    """

    question_id: str = Field(..., min_length=1, max_length=64)
    option_id: str = Field(..., min_length=1, max_length=64)


class SaveAnswerResponse(CamelModel):
    status: str = "success"


class AssessmentSchema(CamelModel):
    """An assessment and its answers.

    Attributes:
        id: Assessment identifier.
        application_id: Assessed application.
        created_at: Creation timestamp.
        answers: Selected option per question.
        status: in_progress | completed.
    """

    id: str
    application_id: str
    created_at: datetime
    answers: dict[str, str]
    status: str

    @classmethod
    def from_domain(cls, assessment: Assessment) -> "AssessmentSchema":
        return cls(
            id=assessment.assessment_id,
            application_id=assessment.application_id,
            created_at=assessment.created_at,
            answers=dict(assessment.answers),
            status=assessment.status,
        )


# ---------------------------------------------------------------------------
# Scores and reports
# ---------------------------------------------------------------------------


class ScorePreviewRequest(CamelModel):
    """Answer set to score without persisting anything.

    Attributes:
        answers: Selected option per question.
    """

    answers: dict[str, str] = Field(default_factory=dict)


class ScoreSchema(CamelModel):
    total_score: int
    max_possible_score: int
    category_scores: dict[str, int]

    @classmethod
    def from_domain(cls, scores: ScoreResult) -> "ScoreSchema":
        return cls(
            total_score=scores.total_score,
            max_possible_score=scores.max_possible_score,
            category_scores=dict(scores.category_scores),
        )


class RecommendationSchema(CamelModel):
    category: str
    description: str
    priority: str


class RiskSchema(CamelModel):
    category: str
    description: str
    severity: str


class ModernizationStepSchema(CamelModel):
    order: int
    description: str
    effort: str


class ReportSchema(CamelModel):
    """Suitability report for a completed assessment.

    Attributes:
        assessment_id: Source assessment.
        application_id: Assessed application.
        generated_at: When the report was generated.
        total_score: Achieved weighted score.
        max_possible_score: Ceiling for the weighted score.
        category_scores: Achieved score per category.
        recommendations: Ordered recommendations.
        risks: Ordered risks.
        modernization_plan: Ordered, 1-indexed plan steps.
    """

    assessment_id: str
    application_id: str
    generated_at: datetime
    total_score: int
    max_possible_score: int
    category_scores: dict[str, int]
    recommendations: list[RecommendationSchema]
    risks: list[RiskSchema]
    modernization_plan: list[ModernizationStepSchema]

    @classmethod
    def from_domain(cls, report: Report) -> "ReportSchema":
        return cls(
            assessment_id=report.assessment_id,
            application_id=report.application_id,
            generated_at=report.generated_at,
            total_score=report.total_score,
            max_possible_score=report.max_possible_score,
            category_scores=dict(report.category_scores),
            recommendations=[
                RecommendationSchema(
                    category=item.category,
                    description=item.description,
                    priority=item.priority,
                )
                for item in report.recommendations
            ],
            risks=[
                RiskSchema(
                    category=item.category,
                    description=item.description,
                    severity=item.severity,
                )
                for item in report.risks
            ],
            modernization_plan=[
                ModernizationStepSchema(
                    order=step.order,
                    description=step.description,
                    effort=step.effort,
                )
                for step in report.modernization_plan
            ],
        )


class HealthResponse(BaseModel):
    status: str = "up"
