"""Weighted scoring of an answer set against the question catalog.

Each question contributes ``weight x points`` of the selected option to the
total and to its category bucket, and ``weight x max(option points)`` to the
maximum. Aggregation is commutative, so catalog order never matters.

This module is intentionally independent of the database layer so that
the scoring logic can be unit-tested without any infrastructure.
"""

from collections.abc import Iterable, Mapping

from kube_suitability.core.models.domain import Option, Question, ScoreResult
from kube_suitability.observability import get_logger

logger = get_logger(__name__)


def max_option_points(options: Iterable[Option]) -> int:
    """Return the highest point value among the options, or 0 if there are none."""
    return max((option.points for option in options), default=0)


def safe_ratio(score: int, maximum: int) -> float:
    """Divide a score by its maximum, treating a zero maximum as ratio 0.0.

    Args:
        score: Achieved score.
        maximum: Ceiling for the score.

    Returns:
        ``score / maximum`` as a float, or 0.0 when ``maximum`` is 0.
    """
    if maximum == 0:
        return 0.0
    return score / maximum


class AssessmentScorer:
    """Stateless scorer for suitability assessments.

    Safe to share across concurrent requests; ``score`` only reads its
    arguments and allocates new output values.
    """

    def score(
        self,
        questions: Iterable[Question],
        answers: Mapping[str, str],
    ) -> ScoreResult:
        """Compute total, maximum, and per-category scores.

        Unanswered questions contribute only to the maximums. An answer whose
        option ID does not belong to its question is treated as unanswered.
        Answers for question IDs missing from the catalog are ignored.

        Args:
            questions: The full question catalog.
            answers: Mapping of question_id to selected option_id.

        Returns:
            ScoreResult with totals and per-category scores and maximums.
        """
        total_score = 0
        max_possible_score = 0
        category_scores: dict[str, int] = {}
        category_max_scores: dict[str, int] = {}
        unknown_options: list[str] = []
        seen_question_ids: set[str] = set()

        for question in questions:
            seen_question_ids.add(question.question_id)
            question_max = question.weight * max_option_points(question.options)
            max_possible_score += question_max
            category_max_scores[question.category] = (
                category_max_scores.get(question.category, 0) + question_max
            )

            option_id = answers.get(question.question_id)
            if option_id is None:
                continue

            option = question.find_option(option_id)
            if option is None:
                unknown_options.append(question.question_id)
                continue

            points = question.weight * option.points
            total_score += points
            category_scores[question.category] = (
                category_scores.get(question.category, 0) + points
            )

        stale_questions = sorted(set(answers) - seen_question_ids)
        if unknown_options or stale_questions:
            logger.debug(
                "Ignored unresolvable answers during scoring",
                unknown_option_questions=unknown_options,
                stale_question_ids=stale_questions,
            )

        return ScoreResult(
            total_score=total_score,
            max_possible_score=max_possible_score,
            category_scores=category_scores,
            category_max_scores=category_max_scores,
        )
