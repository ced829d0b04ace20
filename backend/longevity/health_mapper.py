"""Reduce wearable health-platform records to assessment inputs.

The records are already fetched by the caller (Oura Ring daily summaries, or
Apple Health samples turned into scores with the ``estimate_*`` helpers).
Nothing here performs I/O.
"""

from collections.abc import Callable, Sequence
from statistics import fmean
from typing import TypeVar

from longevity.fitness_age import fitness_age_from_subsystem_scores
from longevity.models import (
    ActivityMetrics,
    DailyActivity,
    HealthDataInput,
    HealthSummary,
    MappedHealthData,
    ReadinessMetrics,
    SleepMetrics,
)
from longevity.rounding import round_half_up, round_half_up_to

T = TypeVar("T")

DEFAULT_RESTING_HEART_RATE = 70
_DEFAULT_ENDURANCE = "15-20 min"


def _average(records: Sequence[T], field: Callable[[T], float]) -> float:
    """Mean of a field over records, 0 for an empty period."""
    if not records:
        return 0.0
    return fmean(field(r) for r in records)


# ── Self-assessment answers ───────────────────────────────────────────────────


def map_activity_to_endurance(activities: Sequence[DailyActivity]) -> str:
    """Estimate the 2 km run/walk time answer from daily activity.

    Higher step counts and activity scores map to faster times.
    """
    if not activities:
        return _DEFAULT_ENDURANCE

    avg_steps = _average(activities, lambda a: a.steps)
    avg_score = _average(activities, lambda a: a.score)

    if avg_steps > 12000 and avg_score > 85:
        return "<10 min"
    if avg_steps > 10000 and avg_score > 75:
        return "10-12 min"
    if avg_steps > 7000 and avg_score > 65:
        return "12-15 min"
    if avg_steps > 5000:
        return "15-20 min"
    return "20+ min"


def map_heart_rate_to_cardio(resting_hr: float) -> str:
    """Map a measured resting heart rate to the cardio answer.

    The cut-offs sit one band below the option labels, crediting wearable
    readings towards the better answer.
    """
    if resting_hr < 60:
        return "<65 bpm"
    if resting_hr < 65:
        return "65-70 bpm"
    if resting_hr < 70:
        return "70-80 bpm"
    if resting_hr < 80:
        return "80-90 bpm"
    return "90+ bpm"


# ── Period summary ────────────────────────────────────────────────────────────


def summarize_health_data(data: HealthDataInput) -> MappedHealthData:
    """Average the period's records and derive the assessment inputs.

    Args:
        data: Personal info plus daily activity, sleep and readiness records.

    Returns:
        MappedHealthData with rounded period averages, pre-filled endurance
        and cardio answers, and the subsystem-average fitness age.
    """
    activity, sleep, readiness = data.activity, data.sleep, data.readiness

    avg_activity_score = _average(activity, lambda a: a.score)
    avg_sleep_score = _average(sleep, lambda s: s.score)
    avg_readiness_score = _average(readiness, lambda r: r.score)

    fitness = fitness_age_from_subsystem_scores(
        readiness=avg_readiness_score,
        activity=avg_activity_score,
        sleep=avg_sleep_score,
        actual_age=data.personal_info.age,
    )

    return MappedHealthData(
        personal_info=data.personal_info,
        activity_metrics=ActivityMetrics(
            average_steps=round_half_up(_average(activity, lambda a: a.steps)),
            active_calories=round_half_up(_average(activity, lambda a: a.active_calories)),
            activity_score=round_half_up(avg_activity_score),
            equivalent_walking_distance=round_half_up(
                _average(activity, lambda a: a.equivalent_walking_distance)
            ),
        ),
        sleep_metrics=SleepMetrics(
            average_sleep_score=round_half_up(avg_sleep_score),
            average_total_sleep=round_half_up(
                _average(sleep, lambda s: s.contributors.total_sleep)
            ),
            sleep_efficiency=round_half_up(
                _average(sleep, lambda s: s.contributors.efficiency)
            ),
            deep_sleep_percentage=round_half_up(
                _average(sleep, lambda s: s.contributors.deep_sleep)
            ),
        ),
        readiness_metrics=ReadinessMetrics(
            average_readiness_score=round_half_up(avg_readiness_score),
            resting_heart_rate=data.resting_heart_rate or 0,
            hrv_balance=round_half_up(
                _average(readiness, lambda r: r.contributors.hrv_balance)
            ),
            body_temperature_deviation=_average(
                readiness, lambda r: r.temperature_deviation
            ),
        ),
        assessment_answers={
            "endurance": map_activity_to_endurance(activity),
            "cardio": map_heart_rate_to_cardio(
                data.resting_heart_rate or DEFAULT_RESTING_HEART_RATE
            ),
        },
        fitness=fitness,
    )


def activity_level(score: float) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 55:
        return "Fair"
    return "Needs Improvement"


def sleep_quality(score: float) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 55:
        return "Fair"
    return "Poor"


def readiness_level(score: float) -> str:
    if score >= 85:
        return "Optimal"
    if score >= 70:
        return "Good"
    if score >= 55:
        return "Pay Attention"
    return "Rest Needed"


def build_health_summary(mapped: MappedHealthData) -> HealthSummary:
    """Dashboard summary: fitness age plus labelled subsystem scores."""
    actual_age = mapped.personal_info.age
    activity = mapped.activity_metrics
    sleep = mapped.sleep_metrics
    readiness = mapped.readiness_metrics
    return HealthSummary(
        fitness_age=mapped.fitness.fitness_age,
        actual_age=actual_age,
        age_difference=actual_age - mapped.fitness.fitness_age,
        activity_score=activity.activity_score,
        daily_steps=activity.average_steps,
        activity_level=activity_level(activity.activity_score),
        sleep_score=sleep.average_sleep_score,
        average_sleep_hours=round_half_up_to(sleep.average_total_sleep / 3600, 1),
        sleep_efficiency=sleep.sleep_efficiency,
        sleep_quality=sleep_quality(sleep.average_sleep_score),
        readiness_score=readiness.average_readiness_score,
        resting_heart_rate=readiness.resting_heart_rate,
        readiness_level=readiness_level(readiness.average_readiness_score),
    )


# ── Apple Health score estimation ─────────────────────────────────────────────


def estimate_activity_score(steps: float, active_calories: float) -> int:
    """Up to 50 points for 10k steps plus up to 50 for 500 active kcal."""
    step_score = min(steps / 10000 * 50, 50)
    calorie_score = min(active_calories / 500 * 50, 50)
    return round_half_up(step_score + calorie_score)


def estimate_sleep_score(sleep_hours: float, sleep_efficiency: float) -> int:
    """Up to 50 points for 8 hours plus efficiency (0-100 %) scaled to 50."""
    hours_score = min(sleep_hours / 8 * 50, 50)
    efficiency_score = sleep_efficiency / 100 * 50
    return round_half_up(hours_score + efficiency_score)


def estimate_readiness_score(resting_hr: float, hrv_balance: float, sleep_score: float) -> int:
    """Weighted readiness estimate, capped at 100.

    Resting HR contributes 30 % (60 bpm ideal), HRV balance 30 % and sleep
    score 40 %. Non-positive HR or HRV readings are treated as missing.
    """
    score = 0.0
    if resting_hr > 0:
        score += max(0, 100 - abs(resting_hr - 60)) * 0.3
    if hrv_balance > 0:
        score += min(hrv_balance, 100) * 0.3
    score += sleep_score * 0.4
    return round_half_up(min(score, 100))
