"""Unit tests for the per-test scoring engine.

Tests cover tier matching, grip strength percentiles, gait speed, sit-to-stand,
single-leg stance, VO2Max (walk-test estimate and classification), the
missing-norms fallback and battery dispatch.

Rules:
- No network calls, no file I/O.
- Boundary values are explicitly tested.
- Both sexes and multiple age groups are covered.
"""

import logging
import math

import pytest

from longevity.logic import (
    SLS_MORTALITY_NOTE,
    calculate_all_tests,
    calculate_grip_strength_percentile,
    calculate_vo2max_from_walk,
    evaluate_gait_speed,
    evaluate_grip_strength,
    evaluate_single_leg_stance,
    evaluate_sit_to_stand,
    evaluate_test,
    evaluate_vo2max,
    evaluate_vo2max_walk_test,
    gait_speed_clinical_interpretation,
    get_test_battery,
    grip_strength_performance_level,
    match_tier,
    single_leg_stance_clinical_interpretation,
    sit_to_stand_clinical_interpretation,
    speed_to_time,
    time_to_speed,
    vo2max_clinical_interpretation,
)
from longevity.models import (
    AssessmentInput,
    GaitSpeedResult,
    GripStrengthResult,
    SingleLegStanceResult,
    VO2MaxResult,
)


# ── match_tier ───────────────────────────────────────────────────────────────

class TestMatchTier:
    THRESHOLDS = {"excellent": 36, "good": 29, "average": 22, "below_average": 17}
    TIERS = ("excellent", "good", "average", "below_average")

    def test_at_threshold(self) -> None:
        assert match_tier(29, self.THRESHOLDS, self.TIERS) == "good"

    def test_just_below_threshold(self) -> None:
        assert match_tier(28.9, self.THRESHOLDS, self.TIERS) == "average"

    def test_below_every_tier(self) -> None:
        assert match_tier(10, self.THRESHOLDS, self.TIERS) is None

    def test_inverted_lower_is_better(self) -> None:
        inverted = {"excellent": 7.0, "good": 8.5, "average": 10.5, "below_average": 12.5}
        assert match_tier(7.0, inverted, self.TIERS, inverted=True) == "excellent"
        assert match_tier(8.0, inverted, self.TIERS, inverted=True) == "good"
        assert match_tier(13.0, inverted, self.TIERS, inverted=True) is None


# ── Grip strength ────────────────────────────────────────────────────────────

class TestGripStrength:
    # Male 25-29 percentiles: P5 35.5, P20 42.1, P40 47.1, P50 49.3,
    # P70 53.9, P90 60.7, P95 64.0.

    def test_exact_median_is_percentile_55(self) -> None:
        result = evaluate_grip_strength(49.3, "male", 27)
        assert isinstance(result, GripStrengthResult)
        assert result.age_group == "25-29"
        assert result.percentile == 55
        assert result.level == "Average"
        assert result.score == 2
        assert result.risk_category == "sarcopenia"
        assert result.norms_available is True

    def test_above_p95(self) -> None:
        result = evaluate_grip_strength(70.0, "male", 27)
        assert result.percentile == 97.5
        assert result.level == "Excellent"
        assert result.score == 4

    def test_at_p90(self) -> None:
        assert calculate_grip_strength_percentile(60.7, "male", 27) == 92.5

    def test_at_p70_is_good(self) -> None:
        result = evaluate_grip_strength(53.9, "male", 27)
        assert result.percentile == 75
        assert result.level == "Good"

    def test_between_p40_and_p50(self) -> None:
        assert calculate_grip_strength_percentile(48.0, "male", 27) == 45

    def test_at_p20_is_below_average(self) -> None:
        result = evaluate_grip_strength(42.1, "male", 27)
        assert result.percentile == 25
        assert result.level == "Below Average"
        assert result.score == 1

    def test_below_p5_is_poor(self) -> None:
        result = evaluate_grip_strength(20.0, "male", 27)
        assert result.percentile == 2.5
        assert result.level == "Poor"
        assert result.score == 0
        assert result.risk_label == "High"

    def test_female_table_is_used(self) -> None:
        # Female 25-29 P50 = 29.4; the same value is far below the male median.
        assert calculate_grip_strength_percentile(29.4, "female", 27) == 55
        assert calculate_grip_strength_percentile(29.4, "male", 27) == 2.5

    def test_teenager_uses_20_24_band(self) -> None:
        assert evaluate_grip_strength(48.0, "male", 17).age_group == "20-24"

    def test_percentile_is_monotonic_in_grip(self) -> None:
        previous = 0.0
        for tenth_kg in range(0, 800, 5):
            percentile = calculate_grip_strength_percentile(tenth_kg / 10, "female", 63)
            assert percentile >= previous
            previous = percentile

    def test_performance_level_bands(self) -> None:
        assert grip_strength_performance_level(90)[0] == "Excellent"
        assert grip_strength_performance_level(89.9)[0] == "Good"
        assert grip_strength_performance_level(40)[2] == 2
        assert grip_strength_performance_level(19.9)[2] == 0

    def test_unknown_sex_falls_back_to_median(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="longevity.logic"):
            result = evaluate_grip_strength(40.0, "unknown", 35)
        assert result.percentile == 50
        assert result.level == "Average"
        assert result.norms_available is False
        assert "No grip_strength norms" in caplog.text


# ── Gait speed ───────────────────────────────────────────────────────────────

class TestGaitSpeed:
    # Male 18-39: excellent 1.50, good 1.40, average 1.30, below_average 1.20.

    def test_speed_input_excellent(self) -> None:
        result = evaluate_gait_speed(1.5, "male", 30)
        assert isinstance(result, GaitSpeedResult)
        assert result.level == "Excellent"
        assert result.score == 4
        assert result.risk_category == "mortality"
        assert result.risk_label == "Very Low"

    def test_average(self) -> None:
        result = evaluate_gait_speed(1.35, "male", 30)
        assert result.level == "Average"
        assert result.risk_label == "Moderate"

    def test_below_average(self) -> None:
        assert evaluate_gait_speed(1.25, "male", 30).level == "Below Average"

    def test_time_input_is_converted(self) -> None:
        result = evaluate_gait_speed(4.0, "male", 30, is_time=True)
        assert result.speed_ms == 1.0
        assert result.raw_value == 4.0
        assert result.level == "Needs Improvement"
        assert result.score == 0
        assert result.risk_label == "High"

    def test_zero_time_gives_infinite_speed(self) -> None:
        result = evaluate_gait_speed(0, "female", 70, is_time=True)
        assert math.isinf(result.speed_ms)
        assert result.level == "Excellent"

    def test_female_80_plus(self) -> None:
        result = evaluate_gait_speed(0.9, "female", 85)
        assert result.age_group == "80+"
        assert result.level == "Average"

    def test_conversions(self) -> None:
        assert time_to_speed(2.0) == 2.0
        assert speed_to_time(1.0) == 4.0
        assert math.isinf(time_to_speed(0))

    def test_clinical_interpretation_thresholds(self) -> None:
        assert gait_speed_clinical_interpretation(1.3).startswith("Exceptional")
        assert gait_speed_clinical_interpretation(1.0).startswith("Good")
        assert gait_speed_clinical_interpretation(0.8).startswith("Moderate")
        assert gait_speed_clinical_interpretation(0.6).startswith("Poor")
        assert gait_speed_clinical_interpretation(0.59).startswith("Critical")


# ── Sit-to-stand ─────────────────────────────────────────────────────────────

class TestSitToStand:
    # Male 18-39: excellent 7.0, good 8.5, average 10.5, below_average 12.5.

    def test_at_excellent_threshold(self) -> None:
        result = evaluate_sit_to_stand(7.0, "male", 25)
        assert result.age_group == "18-39"
        assert result.level == "Excellent"
        assert result.score == 4
        assert result.risk_category == "frailty"
        assert result.risk_label == "Very Low"

    def test_faster_than_excellent(self) -> None:
        assert evaluate_sit_to_stand(5.0, "male", 25).level == "Excellent"

    def test_good(self) -> None:
        assert evaluate_sit_to_stand(8.0, "male", 25).level == "Good"

    def test_at_below_average_threshold(self) -> None:
        assert evaluate_sit_to_stand(12.5, "male", 25).level == "Below Average"

    def test_slower_than_every_tier(self) -> None:
        result = evaluate_sit_to_stand(15.0, "male", 25)
        assert result.level == "Needs Improvement"
        assert result.risk_label == "High"

    def test_unknown_sex_uses_named_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="longevity.logic"):
            result = evaluate_sit_to_stand(9.0, "other", 45)
        assert result.level == "Average"
        assert result.score == 2
        assert result.risk_label == "Moderate"
        assert result.norms_available is False
        assert "No sit_to_stand norms" in caplog.text

    def test_clinical_interpretation_follows_risk(self) -> None:
        text = sit_to_stand_clinical_interpretation(7.0, "male", 25)
        assert text.startswith("Low risk of frailty")
        text = sit_to_stand_clinical_interpretation(30.0, "female", 75)
        assert text.startswith("High frailty risk")


# ── Single-leg stance ────────────────────────────────────────────────────────

class TestSingleLegStance:
    def test_female_excellent(self) -> None:
        result = evaluate_single_leg_stance(45, "female", 30)
        assert isinstance(result, SingleLegStanceResult)
        assert result.level == "Excellent"
        assert result.risk_category == "fall"
        assert result.mortality_note is None

    def test_no_cap_at_60_seconds(self) -> None:
        assert evaluate_single_leg_stance(120, "male", 30).level == "Excellent"

    def test_mortality_note_under_10s_at_51(self) -> None:
        result = evaluate_single_leg_stance(8, "male", 55)
        assert result.level == "Needs Improvement"
        assert result.mortality_note == SLS_MORTALITY_NOTE

    def test_no_mortality_note_at_50(self) -> None:
        assert evaluate_single_leg_stance(8, "male", 50).mortality_note is None

    def test_no_mortality_note_at_exactly_10s(self) -> None:
        assert evaluate_single_leg_stance(10, "male", 51).mortality_note is None

    def test_note_independent_of_tier(self) -> None:
        # Male 80+: 9 s is Good, but still under 10 s.
        result = evaluate_single_leg_stance(9, "male", 82)
        assert result.level == "Good"
        assert result.mortality_note == SLS_MORTALITY_NOTE

    def test_clinical_interpretation_is_age_conditioned(self) -> None:
        assert single_leg_stance_clinical_interpretation(35, 30) == (
            "Excellent postural control. Low fall risk."
        )
        assert single_leg_stance_clinical_interpretation(20, 60).startswith(
            "Excellent balance for age"
        )
        assert "mortality" in single_leg_stance_clinical_interpretation(5, 60)


# ── VO2Max ───────────────────────────────────────────────────────────────────

class TestVO2Max:
    def test_walk_test_formula(self) -> None:
        vo2max = calculate_vo2max_from_walk(12, 70, 30, "male", 130)
        assert vo2max == pytest.approx(56.14573, abs=1e-4)

    def test_walk_test_is_deterministic(self) -> None:
        first = calculate_vo2max_from_walk(15.5, 82, 47, "female", 142)
        assert calculate_vo2max_from_walk(15.5, 82, 47, "female", 142) == first

    def test_male_factor(self) -> None:
        male = calculate_vo2max_from_walk(14, 75, 40, "male", 120)
        female = calculate_vo2max_from_walk(14, 75, 40, "female", 120)
        assert male - female == pytest.approx(6.315)

    def test_clamped_at_zero(self) -> None:
        assert calculate_vo2max_from_walk(60, 200, 90, "female", 200) == 0.0

    def test_walk_test_end_to_end(self) -> None:
        result = evaluate_vo2max_walk_test(12, 70, 30, "male", 130)
        assert isinstance(result, VO2MaxResult)
        assert result.age_group == "26-35"
        assert result.level == "Superior"
        assert result.score == 4
        assert result.risk_label == "Very Low"

    def test_superior_and_excellent_share_score(self) -> None:
        excellent = evaluate_vo2max(49, "male", 30)
        assert excellent.level == "Excellent"
        assert excellent.score == 4
        assert excellent.risk_label == "Low"

    def test_poor_and_very_poor(self) -> None:
        poor = evaluate_vo2max(30, "male", 30)
        assert poor.level == "Poor"
        assert poor.score == 1
        very_poor = evaluate_vo2max(29.9, "male", 30)
        assert very_poor.level == "Very Poor"
        assert very_poor.score == 0
        assert very_poor.risk_label == "Very High"

    def test_clinical_interpretation(self) -> None:
        assert vo2max_clinical_interpretation(45).startswith("Excellent")
        assert vo2max_clinical_interpretation(19.9).startswith("Very poor")


# ── Dispatch ─────────────────────────────────────────────────────────────────

class TestDispatch:
    def test_evaluate_test_routes_by_id(self) -> None:
        assert isinstance(evaluate_test("grip_strength", 49.3, "male", 27), GripStrengthResult)
        gait = evaluate_test("gait_speed", 4.0, "male", 30, is_time=True)
        assert isinstance(gait, GaitSpeedResult)
        assert gait.speed_ms == 1.0

    def test_unknown_test_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown test"):
            evaluate_test("push_up", 30, "male", 30)

    def test_questionnaire_is_not_a_measurement(self) -> None:
        with pytest.raises(ValueError, match="not scored from a single measurement"):
            evaluate_test("sarc_f", 3, "male", 30)

    def test_calculate_all_tests(self) -> None:
        results = calculate_all_tests(
            AssessmentInput(
                sex="male",
                age=27,
                tests={"grip_strength": 49.3, "sit_to_stand": 7.0},
            )
        )
        assert [r.test_id for r in results] == ["grip_strength", "sit_to_stand"]
        assert results[1].level == "Excellent"

    def test_calculate_all_tests_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            calculate_all_tests(AssessmentInput(sex="female", age=40, tests={"plank": 60}))

    def test_battery_lists_all_tests(self) -> None:
        ids = {t.test_id for t in get_test_battery()}
        assert ids == {
            "grip_strength",
            "gait_speed",
            "sit_to_stand",
            "single_leg_stance",
            "vo2max",
            "sarc_f",
        }
