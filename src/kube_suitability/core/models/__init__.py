"""Models package: domain dataclasses and SQLAlchemy ORM tables."""

from kube_suitability.core.models.domain import (
    LEVEL_HIGH,
    LEVEL_LOW,
    LEVEL_MEDIUM,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    Application,
    Assessment,
    ModernizationStep,
    Option,
    Question,
    Recommendation,
    Report,
    Risk,
    ScoreResult,
)
from kube_suitability.core.models.orm import (
    ApplicationRecord,
    AssessmentRecord,
    Base,
    QuestionRecord,
    ReportRecord,
)

__all__ = [
    # Domain
    "Application",
    "Assessment",
    "ModernizationStep",
    "Option",
    "Question",
    "Recommendation",
    "Report",
    "Risk",
    "ScoreResult",
    "LEVEL_HIGH",
    "LEVEL_LOW",
    "LEVEL_MEDIUM",
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    # ORM
    "Base",
    "ApplicationRecord",
    "AssessmentRecord",
    "QuestionRecord",
    "ReportRecord",
]
