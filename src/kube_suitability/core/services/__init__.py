"""Services package for the suitability assessment service."""

from kube_suitability.core.services.assessment_service import (
    ApplicationNotFoundError,
    AssessmentAlreadyCompletedError,
    AssessmentNotFoundError,
    AssessmentService,
    InvalidOptionError,
    QuestionNotFoundError,
    ReportNotFoundError,
)

__all__ = [
    "AssessmentService",
    "ApplicationNotFoundError",
    "AssessmentAlreadyCompletedError",
    "AssessmentNotFoundError",
    "InvalidOptionError",
    "QuestionNotFoundError",
    "ReportNotFoundError",
]
