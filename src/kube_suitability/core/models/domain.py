"""Domain types for the Kubernetes suitability assessment.

These dataclasses are what the core layer works with. They carry no
database or HTTP concerns; repositories map ORM rows to and from them.
"""

from dataclasses import dataclass, field
from datetime import datetime

# Assessment lifecycle: in_progress -> completed (one-way)
STATUS_IN_PROGRESS: str = "in_progress"
STATUS_COMPLETED: str = "completed"

# Shared level labels for priority, severity and effort
LEVEL_HIGH: str = "High"
LEVEL_MEDIUM: str = "Medium"
LEVEL_LOW: str = "Low"


@dataclass(frozen=True)
class Application:
    """An application that can be assessed.

    Attributes:
        application_id: Unique identifier (e.g., 'app1').
        name: Display name.
        description: Free-text description.
        tags: Arbitrary key/value labels (language, type, ...).
    """

    application_id: str
    name: str
    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Option:
    """A selectable answer for a question.

    Attributes:
        option_id: Identifier unique within the owning question.
        text: Label shown to the respondent.
        points: Non-negative raw score for selecting this option.
    """

    option_id: str
    text: str
    points: int


@dataclass(frozen=True)
class Question:
    """A weighted multiple-choice question in the catalog.

    Attributes:
        question_id: Unique identifier (e.g., 'q1').
        text: The prompt presented to the respondent.
        category: Grouping label used for per-category scoring.
        weight: Positive integer multiplier applied to option points.
        options: Ordered answer options.
    """

    question_id: str
    text: str
    category: str
    weight: int
    options: tuple[Option, ...] = ()

    def find_option(self, option_id: str) -> Option | None:
        """Return the option with the given identifier, or None if absent."""
        for option in self.options:
            if option.option_id == option_id:
                return option
        return None


@dataclass(frozen=True)
class Assessment:
    """One answer set for an application.

    Attributes:
        assessment_id: Unique identifier generated at creation.
        application_id: The assessed application.
        created_at: Creation timestamp (UTC).
        answers: Mapping of question_id to selected option_id.
        status: 'in_progress' or 'completed'.
    """

    assessment_id: str
    application_id: str
    created_at: datetime
    answers: dict[str, str] = field(default_factory=dict)
    status: str = STATUS_IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED


@dataclass(frozen=True)
class ScoreResult:
    """Raw scores computed from an answer set against the catalog.

    ``category_max_scores`` is not part of the published report; it is the
    per-category ceiling the report generator needs for category ratios.
    """

    total_score: int
    max_possible_score: int
    category_scores: dict[str, int]
    category_max_scores: dict[str, int]


@dataclass(frozen=True)
class Recommendation:
    category: str
    description: str
    priority: str


@dataclass(frozen=True)
class Risk:
    category: str
    description: str
    severity: str


@dataclass(frozen=True)
class ModernizationStep:
    """A single step of the modernization plan.

    Attributes:
        order: 1-based position in the plan.
        description: What to do.
        effort: Effort estimate (Low/Medium/High).
    """

    order: int
    description: str
    effort: str


@dataclass(frozen=True)
class Report:
    """Suitability report derived from a completed assessment.

    One report per assessment; regenerating replaces it wholesale.
    """

    assessment_id: str
    application_id: str
    generated_at: datetime
    total_score: int
    max_possible_score: int
    category_scores: dict[str, int]
    recommendations: tuple[Recommendation, ...] = ()
    risks: tuple[Risk, ...] = ()
    modernization_plan: tuple[ModernizationStep, ...] = ()
