"""Unit tests for the normative tables.

Every table must be complete for its age-group enum and strictly monotonic
in the direction of its test.
"""

import pytest

from longevity.age_groups import AssessmentFamily, DecadeAgeGroup, GripAgeGroup
from longevity.norms import (
    LOWER_IS_BETTER,
    MALE_GRIP_STRENGTH_NORMS,
    NORM_TABLES,
    PercentileNorms,
    TierNorms,
    VO2MaxNorms,
    is_monotonic,
    lookup_norms,
    reference_values,
)


# ── Table integrity ──────────────────────────────────────────────────────────

class TestTableIntegrity:
    def test_all_families_have_both_sexes(self) -> None:
        for family, by_sex in NORM_TABLES.items():
            assert set(by_sex) == {"male", "female"}, family

    def test_every_threshold_is_monotonic(self) -> None:
        for family, by_sex in NORM_TABLES.items():
            lower_is_better = family in LOWER_IS_BETTER
            for sex, table in by_sex.items():
                for age_group, norms in table.items():
                    assert is_monotonic(norms, lower_is_better), (
                        family.value,
                        sex,
                        age_group.value,
                    )

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            MALE_GRIP_STRENGTH_NORMS[GripAgeGroup.AGE_20_24] = None  # type: ignore[index]


class TestIsMonotonic:
    def test_decreasing_tiers(self) -> None:
        assert is_monotonic(TierNorms(50, 40, 30, 20, 13))

    def test_tie_is_not_monotonic(self) -> None:
        assert not is_monotonic(TierNorms(50, 40, 40, 20, 13))

    def test_lower_is_better_tiers_increase(self) -> None:
        assert is_monotonic(TierNorms(7.0, 8.5, 10.5, 12.5, 14.5), lower_is_better=True)
        assert not is_monotonic(TierNorms(7.0, 8.5, 10.5, 12.5, 14.5))

    def test_percentiles_increase(self) -> None:
        norms = PercentileNorms(1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11)
        assert is_monotonic(norms)


# ── lookup_norms ─────────────────────────────────────────────────────────────

class TestLookupNorms:
    def test_grip_male_27(self) -> None:
        age_group, norms = lookup_norms(AssessmentFamily.GRIP_STRENGTH, "male", 27)
        assert age_group == GripAgeGroup.AGE_25_29
        assert isinstance(norms, PercentileNorms)
        assert norms.P50 == 49.3

    def test_sit_to_stand_male_25(self) -> None:
        age_group, norms = lookup_norms(AssessmentFamily.SIT_TO_STAND, "male", 25)
        assert age_group == DecadeAgeGroup.AGE_18_39
        assert norms == TierNorms(7.0, 8.5, 10.5, 12.5, 14.5)

    def test_vo2max_returns_six_tiers(self) -> None:
        _, norms = lookup_norms(AssessmentFamily.VO2MAX, "female", 40)
        assert isinstance(norms, VO2MaxNorms)

    def test_unknown_sex_returns_none(self) -> None:
        age_group, norms = lookup_norms(AssessmentFamily.GAIT_SPEED, "other", 45)
        assert age_group == DecadeAgeGroup.AGE_40_49
        assert norms is None

    def test_unknown_family_raises(self) -> None:
        with pytest.raises(ValueError):
            lookup_norms("push_up", "male", 30)


# ── reference_values ─────────────────────────────────────────────────────────

class TestReferenceValues:
    def test_grip_uses_p10_p50_p90(self) -> None:
        refs = reference_values(AssessmentFamily.GRIP_STRENGTH, "male", 27)
        assert refs == {"poor": 38.5, "average": 49.3, "excellent": 60.7, "age_group": "25-29"}

    def test_vo2max_uses_superior_average_poor(self) -> None:
        refs = reference_values(AssessmentFamily.VO2MAX, "male", 30)
        assert refs == {"superior": 56, "average": 40, "poor": 30, "age_group": "26-35"}

    def test_tier_test(self) -> None:
        refs = reference_values("single_leg_stance", "female", 65)
        assert refs == {"excellent": 25, "average": 12, "poor": 4, "age_group": "60-69"}

    def test_missing_norms_returns_none(self) -> None:
        assert reference_values(AssessmentFamily.GAIT_SPEED, "unknown", 30) is None
