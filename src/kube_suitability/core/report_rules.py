"""Threshold table driving report narrative and modernization plan.

Overall tiers (by total / max ratio, inclusive lower bound):
    >= 0.7: good candidate, no extra plan steps
    >= 0.5: moderate changes, two extra plan steps
    <  0.5: significant modifications, deployment risk, three extra plan steps

Category rules fire when a category's ratio is strictly below the rule
threshold. New categories are added by appending to CATEGORY_RULES.
"""

from dataclasses import dataclass

from kube_suitability.core.models.domain import (
    LEVEL_HIGH,
    LEVEL_LOW,
    LEVEL_MEDIUM,
    Recommendation,
    Risk,
)

GENERAL_CATEGORY: str = "General"


@dataclass(frozen=True)
class PlanStepTemplate:
    """A modernization step before its position in the plan is known.

    Attributes:
        description: What to do.
        effort: Effort estimate (Low/Medium/High).
    """

    description: str
    effort: str


@dataclass(frozen=True)
class OverallTier:
    """Narrative tier selected by the overall score ratio.

    Attributes:
        name: Short tier identifier.
        min_ratio: Inclusive lower bound of the tier.
        recommendation: The single 'General' recommendation for this tier.
        risk: Optional risk emitted alongside the recommendation.
        plan_steps: Conditional plan steps inserted after the leading step.
    """

    name: str
    min_ratio: float
    recommendation: Recommendation
    risk: Risk | None
    plan_steps: tuple[PlanStepTemplate, ...]


@dataclass(frozen=True)
class CategoryRule:
    """Category-specific recommendation/risk pair.

    Attributes:
        category: Category label the rule applies to.
        threshold: The rule fires when the category ratio is below this value.
        recommendation: Recommendation emitted when the rule fires.
        risk: Risk emitted when the rule fires.
    """

    category: str
    threshold: float
    recommendation: Recommendation
    risk: Risk


# Ordered from highest lower bound to lowest; the first match wins.
OVERALL_TIERS: tuple[OverallTier, ...] = (
    OverallTier(
        name="good",
        min_ratio=0.7,
        recommendation=Recommendation(
            category=GENERAL_CATEGORY,
            description="Application is a good candidate for Kubernetes deployment",
            priority=LEVEL_LOW,
        ),
        risk=None,
        plan_steps=(),
    ),
    OverallTier(
        name="moderate",
        min_ratio=0.5,
        recommendation=Recommendation(
            category=GENERAL_CATEGORY,
            description="Application needs moderate changes to be suitable for Kubernetes",
            priority=LEVEL_MEDIUM,
        ),
        risk=None,
        plan_steps=(
            PlanStepTemplate(
                description="Refactor specific components for containerization",
                effort=LEVEL_MEDIUM,
            ),
            PlanStepTemplate(
                description="Adapt data persistence for cloud environment",
                effort=LEVEL_MEDIUM,
            ),
        ),
    ),
    OverallTier(
        name="significant",
        min_ratio=0.0,
        recommendation=Recommendation(
            category=GENERAL_CATEGORY,
            description=(
                "Application requires significant modifications for Kubernetes deployment"
            ),
            priority=LEVEL_HIGH,
        ),
        risk=Risk(
            category="Deployment",
            description="Application architecture not suitable for containerization",
            severity=LEVEL_HIGH,
        ),
        plan_steps=(
            PlanStepTemplate(
                description="Refactor application architecture for microservices",
                effort=LEVEL_HIGH,
            ),
            PlanStepTemplate(
                description="Implement appropriate data persistence strategy",
                effort=LEVEL_HIGH,
            ),
            PlanStepTemplate(
                description="Create containerization strategy with multiple containers",
                effort=LEVEL_MEDIUM,
            ),
        ),
    ),
)

CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        category="Architecture",
        threshold=0.5,
        recommendation=Recommendation(
            category="Architecture",
            description=(
                "Consider refactoring application architecture to be more "
                "containerization-friendly"
            ),
            priority=LEVEL_HIGH,
        ),
        risk=Risk(
            category="Architecture",
            description="Complex architecture may lead to challenges in containerization",
            severity=LEVEL_HIGH,
        ),
    ),
    CategoryRule(
        category="Persistence",
        threshold=0.6,
        recommendation=Recommendation(
            category="Persistence",
            description="Review database access patterns for compatibility with Kubernetes",
            priority=LEVEL_MEDIUM,
        ),
        risk=Risk(
            category="Persistence",
            description=(
                "Data persistence implementation may cause issues in containerized environment"
            ),
            severity=LEVEL_MEDIUM,
        ),
    ),
)

LEADING_PLAN_STEPS: tuple[PlanStepTemplate, ...] = (
    PlanStepTemplate(
        description="Analyze application dependencies and external integrations",
        effort=LEVEL_LOW,
    ),
)

TRAILING_PLAN_STEPS: tuple[PlanStepTemplate, ...] = (
    PlanStepTemplate(description="Containerize application components", effort=LEVEL_MEDIUM),
    PlanStepTemplate(description="Create Kubernetes deployment manifests", effort=LEVEL_MEDIUM),
    PlanStepTemplate(
        description="Set up CI/CD pipeline for Kubernetes deployment",
        effort=LEVEL_MEDIUM,
    ),
    PlanStepTemplate(description="Implement monitoring and observability", effort=LEVEL_MEDIUM),
)


def get_overall_tier(ratio: float) -> OverallTier:
    """Select the overall tier for a score ratio.

    Args:
        ratio: Overall score ratio, nominally in [0, 1].

    Returns:
        The first tier whose lower bound the ratio reaches; the lowest tier
        for any ratio below every bound.
    """
    for tier in OVERALL_TIERS:
        if ratio >= tier.min_ratio:
            return tier
    return OVERALL_TIERS[-1]


def get_category_rules(category: str) -> list[CategoryRule]:
    """Return the rules that apply to a category, in table order."""
    return [rule for rule in CATEGORY_RULES if rule.category == category]
