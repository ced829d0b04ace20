"""Normative reference tables for the physical performance tests.

Tables are read-only mappings keyed by the age-group enums in
``longevity.age_groups``; every table must cover every age group of its
family, which is checked when this module is imported.

Sources:
- Handgrip strength: international percentiles of 2,405,863 adults aged
  20-100+, J Sport Health Sci 2025;14:101014.
- 4 m gait speed: JAMA 2011;305(1):50-58 and J Am Geriatr Soc
  2013;61(2):202-208.
- Five-times sit-to-stand: J Gerontol A Biol Sci Med Sci 2013;68(1):80-86 and
  Age Ageing 2019;48(5):675-681.
- Single-leg stance (eyes open, 60 s max): Arch Phys Med Rehabil
  2014;95(11):2213-2219 and BMJ Open 2022;12:e054612.
- VO2Max: American Heart Association cardiorespiratory fitness classes.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Optional, Union

from longevity.age_groups import (
    AssessmentFamily,
    DecadeAgeGroup,
    GripAgeGroup,
    VO2MaxAgeGroup,
    resolve_age_group,
)


class PercentileNorms(NamedTuple):
    """Eleven percentile breakpoints (kg) for one sex and age group."""

    P5: float
    P10: float
    P20: float
    P30: float
    P40: float
    P50: float
    P60: float
    P70: float
    P80: float
    P90: float
    P95: float


class TierNorms(NamedTuple):
    """Five-tier thresholds; direction depends on the test."""

    excellent: float
    good: float
    average: float
    below_average: float
    poor: float


class VO2MaxNorms(NamedTuple):
    """Six-tier VO2Max thresholds in mL/(kg·min)."""

    superior: float
    excellent: float
    above_average: float
    average: float
    below_average: float
    poor: float


Norms = Union[PercentileNorms, TierNorms, VO2MaxNorms]
NormTable = Mapping[Enum, Norms]

_P = PercentileNorms
_T = TierNorms
_V = VO2MaxNorms

_G = GripAgeGroup
_D = DecadeAgeGroup
_A = VO2MaxAgeGroup


# ── Grip strength (kg, higher is better) ─────────────────────────────────────

MALE_GRIP_STRENGTH_NORMS: Mapping[GripAgeGroup, PercentileNorms] = MappingProxyType({
    _G.AGE_20_24: _P(33.9, 36.8, 40.5, 43.2, 45.7, 48.0, 50.4, 52.9, 56.0, 60.1, 63.6),
    _G.AGE_25_29: _P(35.5, 38.5, 42.1, 44.8, 47.1, 49.3, 51.5, 53.9, 56.7, 60.7, 64.0),
    _G.AGE_30_34: _P(35.0, 38.3, 42.2, 45.0, 47.4, 49.7, 52.0, 54.4, 57.4, 61.5, 64.9),
    _G.AGE_35_39: _P(33.8, 37.3, 41.5, 44.5, 47.1, 49.5, 51.9, 54.4, 57.5, 61.8, 65.3),
    _G.AGE_40_44: _P(32.3, 36.0, 40.4, 43.6, 46.3, 48.8, 51.2, 53.9, 57.1, 61.5, 65.1),
    _G.AGE_45_49: _P(30.6, 34.4, 39.0, 42.3, 45.1, 47.6, 50.2, 52.9, 56.2, 60.7, 64.4),
    _G.AGE_50_54: _P(28.9, 32.8, 37.4, 40.7, 43.5, 46.2, 48.8, 51.6, 54.8, 59.4, 63.1),
    _G.AGE_55_59: _P(27.2, 31.0, 35.6, 38.9, 41.7, 44.4, 47.0, 49.8, 53.1, 57.7, 61.4),
    _G.AGE_60_64: _P(25.5, 29.1, 33.6, 36.9, 39.7, 42.4, 45.0, 47.8, 51.1, 55.6, 59.3),
    _G.AGE_65_69: _P(23.7, 27.2, 31.5, 34.7, 37.5, 40.1, 42.8, 45.6, 48.8, 53.2, 56.8),
    _G.AGE_70_74: _P(21.9, 25.2, 29.3, 32.4, 35.1, 37.7, 40.3, 43.1, 46.3, 50.6, 54.1),
    _G.AGE_75_79: _P(20.0, 23.1, 27.0, 29.9, 32.5, 35.1, 37.6, 40.3, 43.5, 47.7, 51.1),
    _G.AGE_80_84: _P(18.0, 20.8, 24.5, 27.3, 29.8, 32.3, 34.8, 37.5, 40.5, 44.7, 48.0),
    _G.AGE_85_89: _P(15.9, 18.5, 21.9, 24.6, 27.0, 29.4, 31.8, 34.4, 37.4, 41.5, 44.6),
    _G.AGE_90_94: _P(13.7, 16.1, 19.2, 21.7, 24.0, 26.3, 28.7, 31.2, 34.2, 38.1, 41.2),
    _G.AGE_95_99: _P(11.3, 13.5, 16.4, 18.8, 20.9, 23.1, 25.4, 27.9, 30.8, 34.6, 37.5),
    _G.AGE_100_PLUS: _P(8.8, 10.8, 13.5, 15.7, 17.8, 19.8, 22.0, 24.5, 27.2, 30.9, 33.8),
})

FEMALE_GRIP_STRENGTH_NORMS: Mapping[GripAgeGroup, PercentileNorms] = MappingProxyType({
    _G.AGE_20_24: _P(19.7, 21.7, 24.0, 25.7, 27.2, 28.6, 30.0, 31.6, 33.6, 36.6, 39.1),
    _G.AGE_25_29: _P(20.0, 22.0, 24.5, 26.3, 27.9, 29.4, 30.9, 32.6, 34.6, 37.4, 39.7),
    _G.AGE_30_34: _P(19.6, 21.8, 24.4, 26.4, 28.1, 29.7, 31.3, 33.1, 35.2, 38.0, 40.4),
    _G.AGE_35_39: _P(19.0, 21.3, 24.1, 26.2, 28.0, 29.7, 31.4, 33.2, 35.4, 38.4, 40.8),
    _G.AGE_40_44: _P(18.3, 20.7, 23.7, 25.8, 27.6, 29.4, 31.1, 33.0, 35.2, 38.3, 40.8),
    _G.AGE_45_49: _P(17.6, 20.1, 23.1, 25.2, 27.1, 28.9, 30.6, 32.5, 34.8, 37.9, 40.4),
    _G.AGE_50_54: _P(16.9, 19.4, 22.4, 24.5, 26.4, 28.2, 29.9, 31.8, 34.0, 37.1, 39.7),
    _G.AGE_55_59: _P(16.1, 18.5, 21.5, 23.7, 25.5, 27.3, 29.0, 30.9, 33.0, 36.1, 38.6),
    _G.AGE_60_64: _P(15.2, 17.6, 20.6, 22.7, 24.5, 26.2, 27.9, 29.7, 31.8, 34.9, 37.4),
    _G.AGE_65_69: _P(14.3, 16.6, 19.5, 21.6, 23.3, 25.0, 26.6, 28.4, 30.5, 33.4, 35.8),
    _G.AGE_70_74: _P(13.2, 15.5, 18.3, 20.3, 22.0, 23.6, 25.2, 26.9, 28.9, 31.8, 34.1),
    _G.AGE_75_79: _P(12.0, 14.3, 17.0, 18.9, 20.5, 22.1, 23.6, 25.2, 27.2, 29.9, 32.2),
    _G.AGE_80_84: _P(10.7, 12.9, 15.5, 17.4, 18.9, 20.4, 21.9, 23.5, 25.3, 28.0, 30.2),
    _G.AGE_85_89: _P(9.3, 11.4, 13.9, 15.7, 17.2, 18.6, 20.0, 21.5, 23.3, 25.9, 28.0),
    _G.AGE_90_94: _P(7.8, 9.8, 12.2, 13.9, 15.3, 16.7, 18.0, 19.5, 21.2, 23.6, 25.7),
    _G.AGE_95_99: _P(6.1, 8.0, 10.3, 11.9, 13.3, 14.6, 15.9, 17.3, 18.9, 21.2, 23.2),
    _G.AGE_100_PLUS: _P(4.2, 6.1, 8.3, 9.8, 11.2, 12.4, 13.6, 14.9, 16.5, 18.7, 20.6),
})


# ── Gait speed (m/s over 4 m, higher is better) ──────────────────────────────

MALE_GAIT_SPEED_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(1.50, 1.40, 1.30, 1.20, 1.05),
    _D.AGE_40_49: _T(1.45, 1.35, 1.25, 1.15, 1.00),
    _D.AGE_50_59: _T(1.40, 1.30, 1.20, 1.10, 0.95),
    _D.AGE_60_69: _T(1.35, 1.25, 1.15, 1.05, 0.90),
    _D.AGE_70_79: _T(1.25, 1.15, 1.05, 0.95, 0.80),
    _D.AGE_80_PLUS: _T(1.15, 1.05, 0.95, 0.85, 0.70),
})

FEMALE_GAIT_SPEED_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(1.45, 1.35, 1.25, 1.15, 1.00),
    _D.AGE_40_49: _T(1.40, 1.30, 1.20, 1.10, 0.95),
    _D.AGE_50_59: _T(1.35, 1.25, 1.15, 1.05, 0.90),
    _D.AGE_60_69: _T(1.30, 1.20, 1.10, 1.00, 0.85),
    _D.AGE_70_79: _T(1.20, 1.10, 1.00, 0.90, 0.75),
    _D.AGE_80_PLUS: _T(1.10, 1.00, 0.90, 0.80, 0.65),
})


# ── Five-times sit-to-stand (seconds, lower is better) ───────────────────────

MALE_SIT_TO_STAND_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(7.0, 8.5, 10.5, 12.5, 14.5),
    _D.AGE_40_49: _T(7.5, 9.0, 11.0, 13.0, 15.5),
    _D.AGE_50_59: _T(8.5, 10.0, 12.0, 14.5, 17.0),
    _D.AGE_60_69: _T(9.5, 11.0, 13.0, 16.0, 19.0),
    _D.AGE_70_79: _T(11.0, 13.0, 15.5, 18.5, 22.0),
    _D.AGE_80_PLUS: _T(12.5, 15.0, 18.0, 22.0, 27.0),
})

FEMALE_SIT_TO_STAND_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(7.5, 9.0, 11.0, 13.0, 15.0),
    _D.AGE_40_49: _T(8.0, 9.5, 11.5, 13.5, 16.0),
    _D.AGE_50_59: _T(9.0, 10.5, 12.5, 15.0, 18.0),
    _D.AGE_60_69: _T(10.0, 11.5, 14.0, 17.0, 20.0),
    _D.AGE_70_79: _T(11.5, 13.5, 16.0, 19.0, 23.0),
    _D.AGE_80_PLUS: _T(13.5, 16.0, 19.0, 23.0, 28.0),
})


# ── Single-leg stance (seconds, higher is better) ────────────────────────────

MALE_SINGLE_LEG_STANCE_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(50, 40, 30, 20, 13),
    _D.AGE_40_49: _T(43, 33, 25, 17, 11),
    _D.AGE_50_59: _T(37, 27, 20, 13, 8),
    _D.AGE_60_69: _T(29, 21, 14, 9, 5),
    _D.AGE_70_79: _T(21, 14, 9, 5, 3),
    _D.AGE_80_PLUS: _T(12, 8, 5, 3, 1),
})

FEMALE_SINGLE_LEG_STANCE_NORMS: Mapping[DecadeAgeGroup, TierNorms] = MappingProxyType({
    _D.AGE_18_39: _T(45, 35, 25, 18, 12),
    _D.AGE_40_49: _T(40, 30, 22, 15, 10),
    _D.AGE_50_59: _T(32, 24, 17, 11, 7),
    _D.AGE_60_69: _T(25, 18, 12, 7, 4),
    _D.AGE_70_79: _T(18, 12, 7, 4, 2),
    _D.AGE_80_PLUS: _T(10, 6, 4, 2, 1),
})


# ── VO2Max (mL/(kg·min), higher is better) ───────────────────────────────────

MALE_VO2MAX_NORMS: Mapping[VO2MaxAgeGroup, VO2MaxNorms] = MappingProxyType({
    _A.AGE_18_25: _V(60, 52, 47, 42, 37, 30),
    _A.AGE_26_35: _V(56, 49, 43, 40, 35, 30),
    _A.AGE_36_45: _V(51, 43, 39, 35, 31, 26),
    _A.AGE_46_55: _V(45, 39, 36, 32, 29, 25),
    _A.AGE_56_65: _V(41, 36, 32, 30, 26, 22),
    _A.AGE_66_100: _V(37, 33, 29, 26, 22, 20),
})

FEMALE_VO2MAX_NORMS: Mapping[VO2MaxAgeGroup, VO2MaxNorms] = MappingProxyType({
    _A.AGE_18_25: _V(56, 47, 42, 38, 33, 28),
    _A.AGE_26_35: _V(52, 45, 39, 35, 31, 26),
    _A.AGE_36_45: _V(45, 38, 34, 31, 27, 22),
    _A.AGE_46_55: _V(40, 34, 31, 28, 25, 20),
    _A.AGE_56_65: _V(37, 32, 28, 25, 22, 18),
    _A.AGE_66_100: _V(32, 28, 25, 22, 19, 17),
})


# Registry: family -> sex -> age-group table.
NORM_TABLES: Mapping[AssessmentFamily, Mapping[str, NormTable]] = MappingProxyType({
    AssessmentFamily.GRIP_STRENGTH: MappingProxyType(
        {"male": MALE_GRIP_STRENGTH_NORMS, "female": FEMALE_GRIP_STRENGTH_NORMS}
    ),
    AssessmentFamily.GAIT_SPEED: MappingProxyType(
        {"male": MALE_GAIT_SPEED_NORMS, "female": FEMALE_GAIT_SPEED_NORMS}
    ),
    AssessmentFamily.SIT_TO_STAND: MappingProxyType(
        {"male": MALE_SIT_TO_STAND_NORMS, "female": FEMALE_SIT_TO_STAND_NORMS}
    ),
    AssessmentFamily.SINGLE_LEG_STANCE: MappingProxyType(
        {"male": MALE_SINGLE_LEG_STANCE_NORMS, "female": FEMALE_SINGLE_LEG_STANCE_NORMS}
    ),
    AssessmentFamily.VO2MAX: MappingProxyType(
        {"male": MALE_VO2MAX_NORMS, "female": FEMALE_VO2MAX_NORMS}
    ),
})

# Families where a smaller raw value is the better result.
LOWER_IS_BETTER: frozenset[AssessmentFamily] = frozenset({AssessmentFamily.SIT_TO_STAND})

_AGE_GROUP_ENUMS: dict[AssessmentFamily, type[Enum]] = {
    AssessmentFamily.GRIP_STRENGTH: GripAgeGroup,
    AssessmentFamily.GAIT_SPEED: DecadeAgeGroup,
    AssessmentFamily.SIT_TO_STAND: DecadeAgeGroup,
    AssessmentFamily.SINGLE_LEG_STANCE: DecadeAgeGroup,
    AssessmentFamily.VO2MAX: VO2MaxAgeGroup,
}


def _check_complete() -> None:
    """Fail at import time if any table misses an age group of its family."""
    for family, by_sex in NORM_TABLES.items():
        groups = set(_AGE_GROUP_ENUMS[family])
        for sex, table in by_sex.items():
            missing = groups - set(table)
            if missing:
                names = sorted(g.value for g in missing)
                raise RuntimeError(
                    f"{family.value} norms for {sex} are missing age groups: {names}"
                )


_check_complete()


def lookup_norms(
    family: AssessmentFamily | str,
    sex: str,
    age: float,
) -> tuple[Enum, Optional[Norms]]:
    """Find the normative thresholds for a test, sex and age.

    Age resolution is total, so a ``None`` result can only come from a sex
    that has no table.

    Args:
        family: Test family.
        sex: ``"male"`` or ``"female"``.
        age: Age in years.

    Returns:
        Tuple of the resolved age group and its norms (``None`` when missing).

    Raises:
        ValueError: If the family is unknown or has no normative tables.
    """
    age_group = resolve_age_group(family, age)
    by_sex = NORM_TABLES[AssessmentFamily(family)]
    table = by_sex.get(sex)
    if table is None:
        return age_group, None
    return age_group, table.get(age_group)


def is_monotonic(norms: Norms, lower_is_better: bool = False) -> bool:
    """Check that thresholds move strictly in the test's direction.

    Fields are ordered best tier first (or lowest percentile first for
    ``PercentileNorms``, which must strictly increase).
    """
    values = list(norms)
    if isinstance(norms, PercentileNorms) or lower_is_better:
        return all(a < b for a, b in zip(values, values[1:]))
    return all(a > b for a, b in zip(values, values[1:]))


def reference_values(
    family: AssessmentFamily | str,
    sex: str,
    age: float,
) -> Optional[dict[str, object]]:
    """Return the display reference points for a test.

    Grip strength reports P10/P50/P90 as poor/average/excellent, VO2Max reports
    superior/average/poor, the tiered tests report excellent/average/poor.

    Returns:
        Dict of reference values plus ``age_group``, or ``None`` if norms are
        missing for the given sex.
    """
    age_group, norms = lookup_norms(family, sex, age)
    if norms is None:
        return None
    if isinstance(norms, PercentileNorms):
        refs: dict[str, object] = {
            "poor": norms.P10,
            "average": norms.P50,
            "excellent": norms.P90,
        }
    elif isinstance(norms, VO2MaxNorms):
        refs = {
            "superior": norms.superior,
            "average": norms.average,
            "poor": norms.poor,
        }
    else:
        refs = {
            "excellent": norms.excellent,
            "average": norms.average,
            "poor": norms.poor,
        }
    refs["age_group"] = age_group.value
    return refs
