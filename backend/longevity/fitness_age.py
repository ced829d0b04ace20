"""Composite fitness-age aggregation.

Two strategies turn sub-scores into an adjusted age:

- ordinal sum: per-test 0-4 scores summed against the maximum (onboarding
  self-assessment);
- subsystem average: mean of three 0-100 platform scores (readiness,
  activity, sleep).

Both floor the result at 18 and keep no state between calls.
"""

import logging
import math
from collections.abc import Mapping, Sequence

from longevity.logic import evaluate_grip_strength
from longevity.models import FitnessAgeResult, GripStrengthResult

logger = logging.getLogger(__name__)

FITNESS_AGE_FLOOR = 18
MAX_TEST_SCORE = 4

# (min percentage, years added to actual age, label), best band first.
_ORDINAL_BANDS: tuple[tuple[float, int, str], ...] = (
    (80, -10, "Excellent"),
    (60, -5, "Good"),
    (40, 0, "Average"),
    (20, 5, "Below Average"),
)
_SUBSYSTEM_BANDS: tuple[tuple[float, int, str], ...] = (
    (85, -10, "Excellent"),
    (70, -5, "Good"),
    (55, 0, "Average"),
    (40, 5, "Below Average"),
)
_LOWEST_BAND = (10, "Needs Improvement")

# Onboarding self-assessment. Options are listed worst first; the index of
# the chosen option is its 0-4 score.
GRIP_STRENGTH_QUESTION = "gripStrength"
SELF_ASSESSMENT_QUESTIONS: dict[str, tuple[str, ...]] = {
    "endurance": ("20+ min", "15-20 min", "12-15 min", "10-12 min", "<10 min"),
    "flexibility": (
        "Above knees",
        "Touch knees",
        "Touch ankles",
        "Touch toes",
        "Palms flat on floor",
    ),
    "cardio": ("90+ bpm", "80-90 bpm", "70-80 bpm", "65-70 bpm", "<65 bpm"),
}


def _band(value: float, bands: Sequence[tuple[float, int, str]]) -> tuple[int, str]:
    for threshold, adjustment, label in bands:
        if value >= threshold:
            return adjustment, label
    return _LOWEST_BAND


def _apply_floor(actual_age: int, adjustment: int) -> int:
    return max(FITNESS_AGE_FLOOR, actual_age + adjustment)


def fitness_age_from_ordinal_scores(
    test_scores: Sequence[int],
    actual_age: int,
) -> FitnessAgeResult:
    """Fitness age from per-test ordinal scores.

    ``percentage = sum / (N * 4) * 100``, then >=80 -> -10 years, >=60 -> -5,
    >=40 -> 0, >=20 -> +5, else +10.

    Args:
        test_scores: One 0-4 score per test taken.
        actual_age: Chronological age in years.

    Returns:
        FitnessAgeResult with total and maximum score.

    Raises:
        ValueError: If no scores are given.
    """
    if not test_scores:
        raise ValueError("At least one test score is required")

    total = sum(test_scores)
    max_score = len(test_scores) * MAX_TEST_SCORE
    percentage = total / max_score * 100
    adjustment, label = _band(percentage, _ORDINAL_BANDS)
    return FitnessAgeResult(
        actual_age=actual_age,
        fitness_age=_apply_floor(actual_age, adjustment),
        adjustment=adjustment,
        performance_level=label,
        percentage=percentage,
        total_score=total,
        max_score=max_score,
    )


def fitness_age_from_subsystem_scores(
    readiness: float,
    activity: float,
    sleep: float,
    actual_age: int,
) -> FitnessAgeResult:
    """Fitness age from three 0-100 platform scores.

    The mean is banded >=85 -> -10 years, >=70 -> -5, >=55 -> 0, >=40 -> +5,
    else +10.
    """
    average = (readiness + activity + sleep) / 3
    adjustment, label = _band(average, _SUBSYSTEM_BANDS)
    return FitnessAgeResult(
        actual_age=actual_age,
        fitness_age=_apply_floor(actual_age, adjustment),
        adjustment=adjustment,
        performance_level=label,
        percentage=average,
    )


def _parse_grip(raw: object) -> float | None:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


def score_self_assessment(
    answers: Mapping[str, str],
    sex: str,
    age: int,
) -> tuple[dict[str, int], GripStrengthResult | None, FitnessAgeResult]:
    """Score the onboarding self-assessment and derive a fitness age.

    Grip strength (kg, free text) goes through the grip strength evaluator.
    The multiple-choice answers score by option index. Every question counts
    towards the maximum, so an unanswered or unparsable question scores 0.

    Args:
        answers: Question id to the raw answer text.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        Tuple of (per-question scores, grip strength result or None,
        fitness age from the ordinal strategy).
    """
    detailed: dict[str, int] = {}
    grip_result: GripStrengthResult | None = None

    grip_kg = _parse_grip(answers.get(GRIP_STRENGTH_QUESTION))
    if grip_kg is None:
        logger.warning("Self-assessment grip strength missing or not a number")
        detailed[GRIP_STRENGTH_QUESTION] = 0
    else:
        grip_result = evaluate_grip_strength(grip_kg, sex, age)
        detailed[GRIP_STRENGTH_QUESTION] = grip_result.score

    for question_id, options in SELF_ASSESSMENT_QUESTIONS.items():
        answer = answers.get(question_id)
        if answer in options:
            detailed[question_id] = options.index(answer)
        else:
            logger.warning(
                "Unrecognised self-assessment answer for %s: %r", question_id, answer
            )
            detailed[question_id] = 0

    fitness = fitness_age_from_ordinal_scores(list(detailed.values()), age)
    return detailed, grip_result, fitness
