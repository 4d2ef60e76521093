"""Suitability report generation from raw scores.

Turns a ScoreResult into a Report: one overall recommendation chosen by
the overall ratio, category-specific recommendation/risk pairs from
CATEGORY_RULES, and a 1-indexed modernization plan.

Categories are evaluated in sorted name order, so the recommendation and
risk lists are deterministic for a given set of scores.
"""

from collections.abc import Mapping
from datetime import datetime, timezone

from kube_suitability.core.models.domain import (
    ModernizationStep,
    Recommendation,
    Report,
    Risk,
    ScoreResult,
)
from kube_suitability.core.report_rules import (
    LEADING_PLAN_STEPS,
    TRAILING_PLAN_STEPS,
    OverallTier,
    get_category_rules,
    get_overall_tier,
)
from kube_suitability.core.scoring import safe_ratio
from kube_suitability.observability import get_logger

logger = get_logger(__name__)


class ReportGenerator:
    """Pure, deterministic report builder.

    Holds no state; the only input besides its arguments is the threshold
    table in ``report_rules``.
    """

    def generate(
        self,
        assessment_id: str,
        application_id: str,
        scores: ScoreResult,
        category_max_scores: Mapping[str, int] | None = None,
        generated_at: datetime | None = None,
    ) -> Report:
        """Build the suitability report for an assessment.

        Args:
            assessment_id: Assessment the report belongs to.
            application_id: Assessed application.
            scores: Raw scores from the AssessmentScorer.
            category_max_scores: Per-category ceilings. Defaults to the
                ceilings carried by ``scores``.
            generated_at: Report timestamp. Defaults to now (UTC).

        Returns:
            The generated Report.
        """
        if category_max_scores is None:
            category_max_scores = scores.category_max_scores

        overall_ratio = safe_ratio(scores.total_score, scores.max_possible_score)
        tier = get_overall_tier(overall_ratio)

        recommendations: list[Recommendation] = [tier.recommendation]
        risks: list[Risk] = [tier.risk] if tier.risk is not None else []

        category_recommendations, category_risks = self.build_category_findings(
            scores.category_scores,
            category_max_scores,
        )
        recommendations.extend(category_recommendations)
        risks.extend(category_risks)

        plan = self.build_modernization_plan(tier)

        logger.debug(
            "Report generated",
            assessment_id=assessment_id,
            overall_ratio=round(overall_ratio, 4),
            tier=tier.name,
            recommendation_count=len(recommendations),
            risk_count=len(risks),
            plan_length=len(plan),
        )

        return Report(
            assessment_id=assessment_id,
            application_id=application_id,
            generated_at=generated_at or datetime.now(tz=timezone.utc),
            total_score=scores.total_score,
            max_possible_score=scores.max_possible_score,
            category_scores=dict(scores.category_scores),
            recommendations=tuple(recommendations),
            risks=tuple(risks),
            modernization_plan=tuple(plan),
        )

    def build_category_findings(
        self,
        category_scores: Mapping[str, int],
        category_max_scores: Mapping[str, int],
    ) -> tuple[list[Recommendation], list[Risk]]:
        """Apply the category rules to every scored category.

        Categories without a positive maximum are skipped.

        Returns:
            Tuple of (recommendations, risks), ordered by category name and
            then by rule-table order.
        """
        recommendations: list[Recommendation] = []
        risks: list[Risk] = []

        for category in sorted(category_scores):
            category_max = category_max_scores.get(category, 0)
            if category_max == 0:
                continue

            ratio = category_scores[category] / category_max
            for rule in get_category_rules(category):
                if ratio < rule.threshold:
                    recommendations.append(rule.recommendation)
                    risks.append(rule.risk)

        return recommendations, risks

    def build_modernization_plan(self, tier: OverallTier) -> list[ModernizationStep]:
        """Concatenate leading, tier-specific, and trailing steps and number them 1..N."""
        templates = (*LEADING_PLAN_STEPS, *tier.plan_steps, *TRAILING_PLAN_STEPS)
        return [
            ModernizationStep(order=position, description=step.description, effort=step.effort)
            for position, step in enumerate(templates, start=1)
        ]
