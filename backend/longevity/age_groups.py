"""Age-group bucketing for the normative tables.

Each test family uses its own set of age groups. The groups are enumerated
so that every normative table can be checked for completeness, and the lower
bound of each group is read from its key ("20-24" -> 20, "100+" -> 100).
"""

import math
from collections.abc import Sequence
from enum import Enum
from typing import TypeVar

K = TypeVar("K")


class AssessmentFamily(str, Enum):
    """The physical tests (and questionnaire) the engine knows how to score."""

    GRIP_STRENGTH = "grip_strength"
    GAIT_SPEED = "gait_speed"
    SIT_TO_STAND = "sit_to_stand"
    SINGLE_LEG_STANCE = "single_leg_stance"
    VO2MAX = "vo2max"
    SARC_F = "sarc_f"


class GripAgeGroup(str, Enum):
    """Five-year bands used by the handgrip strength percentiles."""

    AGE_20_24 = "20-24"
    AGE_25_29 = "25-29"
    AGE_30_34 = "30-34"
    AGE_35_39 = "35-39"
    AGE_40_44 = "40-44"
    AGE_45_49 = "45-49"
    AGE_50_54 = "50-54"
    AGE_55_59 = "55-59"
    AGE_60_64 = "60-64"
    AGE_65_69 = "65-69"
    AGE_70_74 = "70-74"
    AGE_75_79 = "75-79"
    AGE_80_84 = "80-84"
    AGE_85_89 = "85-89"
    AGE_90_94 = "90-94"
    AGE_95_99 = "95-99"
    AGE_100_PLUS = "100+"


class DecadeAgeGroup(str, Enum):
    """Coarse bands shared by gait speed, sit-to-stand and single-leg stance."""

    AGE_18_39 = "18-39"
    AGE_40_49 = "40-49"
    AGE_50_59 = "50-59"
    AGE_60_69 = "60-69"
    AGE_70_79 = "70-79"
    AGE_80_PLUS = "80+"


class VO2MaxAgeGroup(str, Enum):
    """Bands of the AHA cardiorespiratory fitness classification."""

    AGE_18_25 = "18-25"
    AGE_26_35 = "26-35"
    AGE_36_45 = "36-45"
    AGE_46_55 = "46-55"
    AGE_56_65 = "56-65"
    AGE_66_100 = "66-100"


def lower_bound(key: str) -> int:
    """Return the lower age bound encoded in a bucket key.

    Args:
        key: Bucket key such as ``"20-24"``, ``"80+"`` or ``"66-100"``.

    Returns:
        The integer lower bound of the bucket.
    """
    return int(key.split("-")[0].rstrip("+"))


def upper_bound(key: str) -> int:
    """Return the inclusive upper age bound of a closed bucket such as ``"18-25"``."""
    return int(key.split("-")[1])


def resolve_bucket(age: float, boundaries: Sequence[tuple[float, K]]) -> K:
    """Map an age to the bucket whose lower bound is the greatest one <= age.

    The function is total: ages below every bound (including negative values
    and NaN) clamp to the first bucket, and ages past the last explicit bound
    land in the last, open-ended bucket.

    Args:
        age: Age in years. Normally a whole number, fractions are accepted.
        boundaries: ``(lower_bound, key)`` pairs in ascending order of bound.

    Returns:
        The key of the matching bucket.
    """
    selected = boundaries[0][1]
    for bound, key in boundaries:
        if age >= bound:
            selected = key
        else:
            break
    return selected


def _boundaries(groups: type[Enum]) -> tuple[tuple[float, Enum], ...]:
    return tuple((lower_bound(g.value), g) for g in groups)


def _top_inclusive_boundaries(groups: type[Enum]) -> tuple[tuple[float, Enum], ...]:
    """Boundaries for bands closed at the top, so 25.5 falls in "26-35"."""
    members = list(groups)
    bounds = [float(lower_bound(members[0].value))]
    bounds += [math.nextafter(upper_bound(g.value), math.inf) for g in members[:-1]]
    return tuple(zip(bounds, members))


GRIP_BOUNDARIES = _boundaries(GripAgeGroup)
DECADE_BOUNDARIES = _boundaries(DecadeAgeGroup)
VO2MAX_BOUNDARIES = _top_inclusive_boundaries(VO2MaxAgeGroup)

_FAMILY_BOUNDARIES: dict[AssessmentFamily, tuple[tuple[float, Enum], ...]] = {
    AssessmentFamily.GRIP_STRENGTH: GRIP_BOUNDARIES,
    AssessmentFamily.GAIT_SPEED: DECADE_BOUNDARIES,
    AssessmentFamily.SIT_TO_STAND: DECADE_BOUNDARIES,
    AssessmentFamily.SINGLE_LEG_STANCE: DECADE_BOUNDARIES,
    AssessmentFamily.VO2MAX: VO2MAX_BOUNDARIES,
}


def age_groups_for(family: AssessmentFamily | str) -> tuple[Enum, ...]:
    """Return the ordered age groups used by a test family.

    Raises:
        ValueError: If the family is unknown or has no age bucketing.
    """
    boundaries = _family_boundaries(family)
    return tuple(key for _, key in boundaries)


def resolve_age_group(family: AssessmentFamily | str, age: float) -> Enum:
    """Resolve the age group of a test family for a given age.

    Grip and the decade bands start a bucket at its lower bound (24.5 is
    "20-24"). VO2Max bands are closed at the top, so 25.5 is "26-35".

    Args:
        family: Test family (enum member or its string value).
        age: Age in years.

    Returns:
        The age-group enum member for that family.

    Raises:
        ValueError: If the family is unknown or has no age bucketing (SARC-F).
    """
    return resolve_bucket(age, _family_boundaries(family))


def _family_boundaries(family: AssessmentFamily | str) -> tuple[tuple[float, Enum], ...]:
    try:
        key = AssessmentFamily(family)
    except ValueError:
        raise ValueError(f"Unknown test family: '{family}'") from None
    boundaries = _FAMILY_BOUNDARIES.get(key)
    if boundaries is None:
        raise ValueError(f"Test family '{key.value}' is not age-bucketed")
    return boundaries
