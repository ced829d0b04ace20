"""Physical performance scoring engine.

All quantitative work for the measured tests happens here: normative lookups,
tier classification, percentile estimation, the Rockport VO2Max estimate and
PerformanceResult construction. Every function is pure; the tables it reads
are immutable.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Optional, TypeVar

from longevity.age_groups import AssessmentFamily
from longevity.models import (
    AssessmentInput,
    GaitSpeedResult,
    GripStrengthResult,
    PerformanceResult,
    SingleLegStanceResult,
    TestInfo,
    VO2MaxResult,
)
from longevity.norms import PercentileNorms, TierNorms, VO2MaxNorms, lookup_norms

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=tuple)
R = TypeVar("R")

GAIT_TEST_DISTANCE_M = 4.0
KG_TO_LBS = 2.20462

# Tier keys in descending order of performance, used for top-down checking.
_TIER_ORDER = ("excellent", "good", "average", "below_average")
_VO2MAX_TIER_ORDER = (
    "superior",
    "excellent",
    "above_average",
    "average",
    "below_average",
    "poor",
)

# tier -> (level, score, risk label). Anything below the last tier is the
# "Needs Improvement" row.
_TIER_LEVELS: dict[str, tuple[str, int, str]] = {
    "excellent": ("Excellent", 4, "Very Low"),
    "good": ("Good", 3, "Low"),
    "average": ("Average", 2, "Moderate"),
    "below_average": ("Below Average", 1, "Elevated"),
    "needs_improvement": ("Needs Improvement", 0, "High"),
}

_VO2MAX_LEVELS: dict[str, tuple[str, str, int, str]] = {
    "superior": ("Superior", "Exceptional cardiovascular fitness", 4, "Very Low"),
    "excellent": ("Excellent", "Above average cardiovascular fitness", 4, "Low"),
    "above_average": ("Above Average", "Good cardiovascular fitness", 3, "Low"),
    "average": ("Average", "Average cardiovascular fitness", 2, "Moderate"),
    "below_average": (
        "Below Average",
        "Below average - improvement recommended",
        1,
        "Elevated",
    ),
    "poor": ("Poor", "Poor cardiovascular fitness", 1, "High"),
    "very_poor": (
        "Very Poor",
        "Very poor - medical consultation recommended",
        0,
        "Very High",
    ),
}

# Grip strength percentile bands: (min percentile, level, description, score).
_GRIP_LEVELS: tuple[tuple[float, str, str, int], ...] = (
    (90, "Excellent", "Top 10% - Outstanding strength", 4),
    (70, "Good", "Top 30% - Above average strength", 3),
    (40, "Average", "Middle 30% - Average strength", 2),
    (20, "Below Average", "Lower 30% - Below average strength", 1),
    (0, "Poor", "Bottom 20% - Needs improvement", 0),
)
_GRIP_RISK_BY_SCORE = {4: "Very Low", 3: "Low", 2: "Moderate", 1: "Elevated", 0: "High"}

# Midpoint percentile of the bracket a value falls into, scanned from P95 down.
_GRIP_PERCENTILE_BRACKETS: tuple[tuple[str, float], ...] = (
    ("P95", 97.5),
    ("P90", 92.5),
    ("P80", 85),
    ("P70", 75),
    ("P60", 65),
    ("P50", 55),
    ("P40", 45),
    ("P30", 35),
    ("P20", 25),
    ("P10", 15),
    ("P5", 7.5),
)
_BELOW_P5_PERCENTILE = 2.5
_MEDIAN_PERCENTILE = 50.0

# Registry of all tests in the battery.
TEST_REGISTRY: dict[str, TestInfo] = {
    "grip_strength": TestInfo(
        test_id="grip_strength",
        test_name="Handgrip Strength",
        category="strength",
        unit="kg",
        description=(
            "Maximal isometric grip force with a handgrip dynamometer at a 90° "
            "elbow angle. Compared against age and sex percentiles."
        ),
    ),
    "gait_speed": TestInfo(
        test_id="gait_speed",
        test_name="4-Metre Gait Speed",
        category="mobility",
        unit="m/s",
        description=(
            "Usual walking pace over 4 metres. Accepts speed in m/s or the time "
            "in seconds to cover the course."
        ),
    ),
    "sit_to_stand": TestInfo(
        test_id="sit_to_stand",
        test_name="Five-Times Sit-to-Stand",
        category="strength",
        unit="seconds",
        description=(
            "Time to rise from a chair five times without using the arms. "
            "Lower time = better."
        ),
        lower_is_better=True,
    ),
    "single_leg_stance": TestInfo(
        test_id="single_leg_stance",
        test_name="Single-Leg Stance",
        category="balance",
        unit="seconds",
        description=(
            "Time standing on one leg with eyes open, up to 60 seconds."
        ),
    ),
    "vo2max": TestInfo(
        test_id="vo2max",
        test_name="VO2Max",
        category="cardio",
        unit="mL/(kg·min)",
        description=(
            "Maximal oxygen uptake, measured or estimated from the Rockport "
            "1-mile walk test."
        ),
    ),
    "sarc_f": TestInfo(
        test_id="sarc_f",
        test_name="SARC-F Questionnaire",
        category="sarcopenia",
        unit="points",
        description=(
            "Five-item sarcopenia screen: strength, assistance walking, rising "
            "from a chair, climbing stairs, falls. Score 0-10, lower = better."
        ),
        lower_is_better=True,
    ),
}


# ── Shared classification ─────────────────────────────────────────────────────


def match_tier(
    value: float,
    thresholds: Mapping[str, float],
    tiers: Sequence[str],
    inverted: bool = False,
) -> Optional[str]:
    """Return the best tier whose threshold the value meets.

    For standard tests (higher = better) a tier is met when
    ``value >= threshold``; for inverted tests (lower = better, e.g.
    sit-to-stand time) when ``value <= threshold``.

    Args:
        value: The raw test result.
        thresholds: Tier key to threshold value.
        tiers: Tier keys to check, best first.
        inverted: If True, lower values are better.

    Returns:
        The matched tier key, or ``None`` if the value misses every tier.
    """
    for tier in tiers:
        threshold = thresholds[tier]
        if inverted:
            if value <= threshold:
                return tier
        elif value >= threshold:
            return tier
    return None


def with_default_on_missing_norms(
    norms: Optional[N],
    evaluate: Callable[[N], R],
    default: Callable[[], R],
    *,
    test_id: str,
    sex: str,
    age_group: Enum,
) -> R:
    """Run ``evaluate`` on the norms, or return the neutral default.

    This is the only path that tolerates missing normative data. It logs a
    warning so the degraded result is visible, and callers mark the default
    with ``norms_available=False``.
    """
    if norms is None:
        logger.warning(
            "No %s norms for sex=%r, age group %s; returning neutral default",
            test_id,
            sex,
            age_group.value,
        )
        return default()
    return evaluate(norms)


def _tiered_result(
    test_id: str,
    value: float,
    age_group: Enum,
    tier: str,
    descriptions: Mapping[str, str],
    risk_category: str,
) -> dict[str, object]:
    level, score, risk = _TIER_LEVELS[tier]
    info = TEST_REGISTRY[test_id]
    return {
        "test_id": test_id,
        "test_name": info.test_name,
        "raw_value": value,
        "unit": info.unit,
        "age_group": age_group.value,
        "level": level,
        "description": descriptions[tier],
        "score": score,
        "risk_category": risk_category,
        "risk_label": risk,
    }


def _neutral_result(
    test_id: str,
    value: float,
    age_group: Enum,
    risk_category: str,
) -> dict[str, object]:
    info = TEST_REGISTRY[test_id]
    return {
        "test_id": test_id,
        "test_name": info.test_name,
        "raw_value": value,
        "unit": info.unit,
        "age_group": age_group.value,
        "level": "Average",
        "description": "No normative data for this demographic - reported as average",
        "score": 2,
        "risk_category": risk_category,
        "risk_label": "Moderate",
        "norms_available": False,
    }


# ── Grip strength ─────────────────────────────────────────────────────────────


def grip_percentile_from_norms(grip_kg: float, norms: PercentileNorms) -> float:
    """Convert grip strength to the midpoint of its percentile bracket."""
    for field, percentile in _GRIP_PERCENTILE_BRACKETS:
        if grip_kg >= getattr(norms, field):
            return percentile
    return _BELOW_P5_PERCENTILE


def calculate_grip_strength_percentile(grip_kg: float, sex: str, age: float) -> float:
    """Estimate the percentile rank of a handgrip strength value.

    Args:
        grip_kg: Grip strength in kilograms.
        sex: ``"male"`` or ``"female"``.
        age: Age in years (below 20 uses the 20-24 band, 100+ the top band).

    Returns:
        Percentile between 2.5 and 97.5, or 50 (median) if norms are missing.
    """
    age_group, norms = lookup_norms(AssessmentFamily.GRIP_STRENGTH, sex, age)
    return with_default_on_missing_norms(
        norms,
        lambda n: grip_percentile_from_norms(grip_kg, n),
        lambda: _MEDIAN_PERCENTILE,
        test_id="grip_strength",
        sex=sex,
        age_group=age_group,
    )


def grip_strength_performance_level(percentile: float) -> tuple[str, str, int]:
    """Map a grip strength percentile to ``(level, description, score)``."""
    for min_percentile, level, description, score in _GRIP_LEVELS:
        if percentile >= min_percentile:
            return level, description, score
    _, level, description, score = _GRIP_LEVELS[-1]
    return level, description, score


def evaluate_grip_strength(grip_kg: float, sex: str, age: float) -> GripStrengthResult:
    """Classify handgrip strength against age and sex percentiles.

    Args:
        grip_kg: Grip strength in kilograms.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        GripStrengthResult with percentile, level and 0-4 score.
    """
    age_group, norms = lookup_norms(AssessmentFamily.GRIP_STRENGTH, sex, age)
    percentile = calculate_grip_strength_percentile(grip_kg, sex, age)
    level, description, score = grip_strength_performance_level(percentile)
    info = TEST_REGISTRY["grip_strength"]
    return GripStrengthResult(
        test_id=info.test_id,
        test_name=info.test_name,
        raw_value=grip_kg,
        unit=info.unit,
        age_group=age_group.value,
        level=level,
        description=description,
        score=score,
        risk_category="sarcopenia",
        risk_label=_GRIP_RISK_BY_SCORE[score],
        norms_available=norms is not None,
        percentile=percentile,
    )


# ── Gait speed ────────────────────────────────────────────────────────────────

_GAIT_DESCRIPTIONS = {
    "excellent": "Top 20% - Exceptional mobility",
    "good": "Top 40% - Above average mobility",
    "average": "Middle 20% - Average mobility",
    "below_average": "Lower 20% - Below average mobility",
    "needs_improvement": "Bottom 20% - Requires attention",
}


def time_to_speed(time_seconds: float) -> float:
    """Convert a 4 m walk time to speed in m/s.

    A zero time gives an infinite speed rather than raising.
    """
    if time_seconds == 0:
        return math.inf
    return GAIT_TEST_DISTANCE_M / time_seconds


def speed_to_time(speed_ms: float) -> float:
    """Convert a gait speed in m/s to the time needed to walk 4 m."""
    if speed_ms == 0:
        return math.inf
    return GAIT_TEST_DISTANCE_M / speed_ms


def evaluate_gait_speed(
    speed_or_time: float,
    sex: str,
    age: float,
    is_time: bool = False,
) -> GaitSpeedResult:
    """Classify 4-metre gait speed.

    Args:
        speed_or_time: Speed in m/s, or time in seconds when ``is_time``.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.
        is_time: If True, ``speed_or_time`` is converted with 4 / time.

    Returns:
        GaitSpeedResult with a mortality-risk label.
    """
    speed = time_to_speed(speed_or_time) if is_time else speed_or_time
    age_group, norms = lookup_norms(AssessmentFamily.GAIT_SPEED, sex, age)

    def _evaluate(n: TierNorms) -> GaitSpeedResult:
        tier = match_tier(speed, n._asdict(), _TIER_ORDER) or "needs_improvement"
        fields = _tiered_result(
            "gait_speed", speed_or_time, age_group, tier, _GAIT_DESCRIPTIONS, "mortality"
        )
        return GaitSpeedResult(**fields, speed_ms=speed)

    return with_default_on_missing_norms(
        norms,
        _evaluate,
        lambda: GaitSpeedResult(
            **_neutral_result("gait_speed", speed_or_time, age_group, "mortality"),
            speed_ms=speed,
        ),
        test_id="gait_speed",
        sex=sex,
        age_group=age_group,
    )


def gait_speed_clinical_interpretation(speed_ms: float) -> str:
    """Advisory text for a gait speed using fixed cross-age thresholds.

    Thresholds follow Studenski et al., JAMA 2011;305(1):50-58. Not used in
    scoring.
    """
    if speed_ms >= 1.3:
        return "Exceptional: Associated with extended survival and reduced hospitalization risk."
    elif speed_ms >= 1.0:
        return "Good: Associated with average survival and functional independence."
    elif speed_ms >= 0.8:
        return (
            "Moderate: Elevated risk of adverse health outcomes. "
            "Consider mobility intervention."
        )
    elif speed_ms >= 0.6:
        return (
            "Poor: High risk of hospitalization, disability, and mortality. "
            "Recommend comprehensive assessment."
        )
    else:
        return (
            "Critical: Very high risk. Immediate referral for geriatric or "
            "physical therapy assessment recommended."
        )


# ── Sit-to-stand ──────────────────────────────────────────────────────────────

_STS_DESCRIPTIONS = {
    "excellent": "Top 20% - Outstanding functional strength",
    "good": "Top 40% - Above average functional strength",
    "average": "Middle 20% - Average functional strength",
    "below_average": "Lower 20% - Below average functional strength",
    "needs_improvement": "Bottom 20% - Consider strength training",
}

_STS_INTERPRETATIONS = {
    "Very Low": (
        "Low risk of frailty, falls, and functional decline. "
        "Excellent lower extremity strength and power."
    ),
    "Low": "Below average risk of frailty. Good functional strength for activities of daily living.",
    "Moderate": "Average risk profile. Consider preventive strength training to maintain independence.",
    "Elevated": (
        "Elevated fall risk. Recommend structured exercise program focusing "
        "on lower body strength."
    ),
    "High": (
        "High frailty risk. Consider referral for comprehensive geriatric "
        "assessment and intervention."
    ),
}


def evaluate_sit_to_stand(time_seconds: float, sex: str, age: float) -> PerformanceResult:
    """Classify five-times sit-to-stand time (lower is better).

    Args:
        time_seconds: Time to complete five repetitions.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        PerformanceResult with a frailty-risk label.
    """
    age_group, norms = lookup_norms(AssessmentFamily.SIT_TO_STAND, sex, age)

    def _evaluate(n: TierNorms) -> PerformanceResult:
        tier = match_tier(time_seconds, n._asdict(), _TIER_ORDER, inverted=True)
        fields = _tiered_result(
            "sit_to_stand",
            time_seconds,
            age_group,
            tier or "needs_improvement",
            _STS_DESCRIPTIONS,
            "frailty",
        )
        return PerformanceResult(**fields)

    return with_default_on_missing_norms(
        norms,
        _evaluate,
        lambda: PerformanceResult(
            **_neutral_result("sit_to_stand", time_seconds, age_group, "frailty")
        ),
        test_id="sit_to_stand",
        sex=sex,
        age_group=age_group,
    )


def sit_to_stand_clinical_interpretation(time_seconds: float, sex: str, age: float) -> str:
    """Advisory text keyed on the frailty risk of the classified result."""
    result = evaluate_sit_to_stand(time_seconds, sex, age)
    return _STS_INTERPRETATIONS[result.risk_label]


# ── Single-leg stance ─────────────────────────────────────────────────────────

_SLS_DESCRIPTIONS = {
    "excellent": "Top 20% - Outstanding balance",
    "good": "Top 40% - Above average balance",
    "average": "Middle 20% - Average balance",
    "below_average": "Lower 20% - Below average balance",
    "needs_improvement": "Bottom 20% - Balance training recommended",
}

# BMJ Open 2022;12:e054612: failing a 10 s stance at 51+ predicts mortality.
SLS_MORTALITY_NOTE = (
    "Unable to stand for 10 seconds is associated with increased mortality "
    "risk in adults over 50."
)
_SLS_MORTALITY_MIN_AGE = 51
_SLS_MORTALITY_MAX_TIME = 10


def evaluate_single_leg_stance(time_seconds: float, sex: str, age: float) -> SingleLegStanceResult:
    """Classify single-leg stance time (higher is better).

    The 60 s protocol cap is not enforced. Independently of the tier, a hold
    under 10 s at age 51 or older attaches ``mortality_note``.

    Args:
        time_seconds: Balance-hold time in seconds.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        SingleLegStanceResult with a fall-risk label.
    """
    age_group, norms = lookup_norms(AssessmentFamily.SINGLE_LEG_STANCE, sex, age)
    mortality_note = (
        SLS_MORTALITY_NOTE
        if time_seconds < _SLS_MORTALITY_MAX_TIME and age >= _SLS_MORTALITY_MIN_AGE
        else None
    )

    def _evaluate(n: TierNorms) -> SingleLegStanceResult:
        tier = match_tier(time_seconds, n._asdict(), _TIER_ORDER) or "needs_improvement"
        fields = _tiered_result(
            "single_leg_stance", time_seconds, age_group, tier, _SLS_DESCRIPTIONS, "fall"
        )
        return SingleLegStanceResult(**fields, mortality_note=mortality_note)

    return with_default_on_missing_norms(
        norms,
        _evaluate,
        lambda: SingleLegStanceResult(
            **_neutral_result("single_leg_stance", time_seconds, age_group, "fall"),
            mortality_note=mortality_note,
        ),
        test_id="single_leg_stance",
        sex=sex,
        age_group=age_group,
    )


def single_leg_stance_clinical_interpretation(time_seconds: float, age: float) -> str:
    """Advisory text; from age 51 the wording includes mortality context."""
    if age < _SLS_MORTALITY_MIN_AGE:
        if time_seconds >= 30:
            return "Excellent postural control. Low fall risk."
        if time_seconds >= 20:
            return "Good balance. Appropriate for age."
        if time_seconds >= 12:
            return "Average balance. Consider balance training for improvement."
        if time_seconds >= 7:
            return "Below average. Recommend balance training program."
        return "Poor balance control. Consider comprehensive fall risk assessment."

    if time_seconds >= 20:
        return "Excellent balance for age. Associated with reduced mortality risk."
    if time_seconds >= 12:
        return "Good balance. Maintain with regular balance exercises."
    if time_seconds >= 10:
        return "Average balance. Consider structured balance training."
    if time_seconds >= 7:
        return "Below average. Elevated fall risk. Balance training recommended."
    return (
        "Poor balance. High fall risk and associated with increased mortality "
        "risk. Recommend urgent fall prevention program and medical evaluation."
    )


# ── VO2Max ────────────────────────────────────────────────────────────────────


def calculate_vo2max_from_walk(
    walk_time_minutes: float,
    weight_kg: float,
    age: float,
    sex: str,
    heart_rate_bpm: float,
) -> float:
    """Estimate VO2Max from the Rockport 1-mile walk test.

    VO2max = 132.853 - 0.0769 * weight_lbs - 0.3877 * age + 6.315 * gender
             - 3.2649 * time_min - 0.1565 * heart_rate

    with gender 1 for male and 0 otherwise.

    Args:
        walk_time_minutes: Time to walk one mile.
        weight_kg: Body weight in kilograms (converted to pounds).
        age: Age in years.
        sex: ``"male"`` or ``"female"``.
        heart_rate_bpm: Heart rate immediately after the walk.

    Returns:
        Estimated VO2Max in mL/(kg·min), never negative.
    """
    weight_lbs = weight_kg * KG_TO_LBS
    gender_factor = 1 if sex == "male" else 0
    vo2max = (
        132.853
        - 0.0769 * weight_lbs
        - 0.3877 * age
        + 6.315 * gender_factor
        - 3.2649 * walk_time_minutes
        - 0.1565 * heart_rate_bpm
    )
    return max(0.0, vo2max)


def evaluate_vo2max(vo2max: float, sex: str, age: float) -> VO2MaxResult:
    """Classify a VO2Max value against the six-tier AHA table.

    Superior and Excellent both score 4 but keep distinct labels and
    cardiovascular-risk labels. Values below ``poor`` are "Very Poor".

    Args:
        vo2max: VO2Max in mL/(kg·min).
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        VO2MaxResult with a cardiovascular-risk label.
    """
    age_group, norms = lookup_norms(AssessmentFamily.VO2MAX, sex, age)
    info = TEST_REGISTRY["vo2max"]

    def _evaluate(n: VO2MaxNorms) -> VO2MaxResult:
        tier = match_tier(vo2max, n._asdict(), _VO2MAX_TIER_ORDER) or "very_poor"
        level, description, score, risk = _VO2MAX_LEVELS[tier]
        return VO2MaxResult(
            test_id=info.test_id,
            test_name=info.test_name,
            raw_value=vo2max,
            unit=info.unit,
            age_group=age_group.value,
            level=level,
            description=description,
            score=score,
            risk_category="cardiovascular",
            risk_label=risk,
            vo2max=vo2max,
        )

    return with_default_on_missing_norms(
        norms,
        _evaluate,
        lambda: VO2MaxResult(
            **_neutral_result("vo2max", vo2max, age_group, "cardiovascular"),
            vo2max=vo2max,
        ),
        test_id="vo2max",
        sex=sex,
        age_group=age_group,
    )


def evaluate_vo2max_walk_test(
    walk_time_minutes: float,
    weight_kg: float,
    age: float,
    sex: str,
    heart_rate_bpm: float,
) -> VO2MaxResult:
    """Estimate VO2Max from a walk test and classify it."""
    vo2max = calculate_vo2max_from_walk(
        walk_time_minutes, weight_kg, age, sex, heart_rate_bpm
    )
    return evaluate_vo2max(vo2max, sex, age)


def vo2max_clinical_interpretation(vo2max: float) -> str:
    """Advisory text on absolute VO2Max, independent of age and sex."""
    if vo2max >= 45:
        return (
            "Excellent cardiorespiratory fitness. Associated with reduced risk "
            "of cardiovascular disease and all-cause mortality."
        )
    elif vo2max >= 35:
        return "Good cardiovascular fitness. Continue regular aerobic exercise to maintain."
    elif vo2max >= 28:
        return "Fair cardiovascular fitness. Increase aerobic exercise frequency and intensity."
    elif vo2max >= 20:
        return (
            "Poor cardiovascular fitness. Consult healthcare provider before "
            "starting exercise program."
        )
    else:
        return "Very poor cardiovascular fitness. Medical evaluation recommended before exercise."


# ── Battery dispatch ──────────────────────────────────────────────────────────


def evaluate_test(
    test_id: str,
    value: float,
    sex: str,
    age: float,
    is_time: bool = False,
) -> PerformanceResult:
    """Evaluate a single measured test by id.

    Args:
        test_id: One of the measured tests in ``TEST_REGISTRY``.
        value: Raw test value in the test's unit.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.
        is_time: Gait speed only; ``value`` is the 4 m walk time.

    Returns:
        The test-specific PerformanceResult.

    Raises:
        ValueError: If the test id is unknown or is not a measured test.
    """
    if test_id == "grip_strength":
        return evaluate_grip_strength(value, sex, age)
    if test_id == "gait_speed":
        return evaluate_gait_speed(value, sex, age, is_time=is_time)
    if test_id == "sit_to_stand":
        return evaluate_sit_to_stand(value, sex, age)
    if test_id == "single_leg_stance":
        return evaluate_single_leg_stance(value, sex, age)
    if test_id == "vo2max":
        return evaluate_vo2max(value, sex, age)
    if test_id in TEST_REGISTRY:
        raise ValueError(f"Test '{test_id}' is not scored from a single measurement")
    raise ValueError(f"Unknown test: '{test_id}'")


def calculate_all_tests(input: AssessmentInput) -> list[PerformanceResult]:
    """Evaluate every submitted test in an AssessmentInput.

    Raises:
        ValueError: If any test_id is unknown.
    """
    return [
        evaluate_test(
            test_id,
            value,
            sex=input.sex,
            age=input.age,
            is_time=input.gait_is_time,
        )
        for test_id, value in input.tests.items()
    ]


def get_test_battery() -> list[TestInfo]:
    """Return metadata for all registered tests."""
    return list(TEST_REGISTRY.values())
