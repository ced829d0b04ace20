"""Achievement catalog and progress engine.

Progress is a snapshot (``AchievementProgress``) passed in and returned by
every operation; none of these functions mutate their input or touch
storage. Persistence lives in ``db_service``.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Optional

from longevity.models import (
    Achievement,
    AchievementProgress,
    AchievementRequirement,
    AchievementSummary,
    UnlockedAchievement,
    UnlockResult,
    UserStats,
)
from longevity.rounding import round_half_up

logger = logging.getLogger(__name__)


def _achievement(
    id: str,
    title: str,
    description: str,
    icon: str,
    color: str,
    gradient_end: str,
    requirement: tuple[str, int],
    rarity: str,
) -> Achievement:
    req_type, req_value = requirement
    return Achievement(
        id=id,
        title=title,
        description=description,
        icon=icon,
        color=color,
        gradient=(color, gradient_end),
        requirement=AchievementRequirement(type=req_type, value=req_value),
        rarity=rarity,
    )


# Ids are the persisted identity of an unlock; never rename them.
ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Workout count
    _achievement("first_workout", "First Steps", "Complete your first workout",
                 "🌱", "#10B981", "#34D399", ("workout_count", 1), "common"),
    _achievement("10_workouts", "Getting Started", "Complete 10 workouts",
                 "🔥", "#F59E0B", "#FBBF24", ("workout_count", 10), "common"),
    _achievement("25_workouts", "Consistency Builder", "Complete 25 workouts",
                 "⭐", "#8B5CF6", "#A78BFA", ("workout_count", 25), "rare"),
    _achievement("50_workouts", "Dedicated Warrior", "Complete 50 workouts",
                 "💪", "#EC4899", "#F472B6", ("workout_count", 50), "rare"),
    _achievement("100_workouts", "Century Club", "Complete 100 workouts",
                 "💯", "#6366F1", "#818CF8", ("workout_count", 100), "epic"),
    # Streaks
    _achievement("streak_3", "Three Day Streak", "Work out for 3 days in a row",
                 "🔥", "#F97316", "#FB923C", ("streak", 3), "common"),
    _achievement("streak_7", "Week Warrior", "Work out for 7 days in a row",
                 "🎯", "#EF4444", "#F87171", ("streak", 7), "rare"),
    _achievement("streak_14", "Two Week Champion", "Work out for 14 days in a row",
                 "🏆", "#DC2626", "#EF4444", ("streak", 14), "epic"),
    _achievement("streak_30", "Unstoppable Force", "Work out for 30 days in a row",
                 "👑", "#991B1B", "#DC2626", ("streak", 30), "legendary"),
    # Levels
    _achievement("level_5", "Rising Star", "Reach Level 5",
                 "⭐", "#14B8A6", "#2DD4BF", ("level", 5), "rare"),
    _achievement("level_10", "Strength Master", "Reach Level 10",
                 "💎", "#06B6D4", "#22D3EE", ("level", 10), "epic"),
    _achievement("level_20", "Longevity Legend", "Reach Level 20",
                 "🌟", "#8B5CF6", "#A78BFA", ("level", 20), "legendary"),
    # XP
    _achievement("xp_1000", "XP Collector", "Earn 1,000 XP",
                 "💰", "#F59E0B", "#FBBF24", ("xp", 1000), "common"),
    _achievement("xp_5000", "XP Hoarder", "Earn 5,000 XP",
                 "💸", "#EC4899", "#F472B6", ("xp", 5000), "rare"),
    _achievement("xp_10000", "XP Tycoon", "Earn 10,000 XP",
                 "💵", "#8B5CF6", "#A78BFA", ("xp", 10000), "epic"),
    # Special. perfect_week is tagged workout_count 2, so it unlocks on the
    # second workout rather than from a real weekly signal.
    _achievement("perfect_week", "Perfect Week", "Complete all 7 exercises twice in a week",
                 "✨", "#10B981", "#34D399", ("workout_count", 2), "epic"),
    _achievement("200_workouts", "Double Century", "Complete 200 workouts",
                 "🎖️", "#8B5CF6", "#A78BFA", ("workout_count", 200), "legendary"),
    _achievement("xp_20000", "XP Master", "Earn 20,000 XP",
                 "💎", "#EC4899", "#F472B6", ("xp", 20000), "legendary"),
)

_BY_ID: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}

_RARITY_COLORS = {
    "common": "#6B7280",
    "rare": "#3B82F6",
    "epic": "#A855F7",
    "legendary": "#F59E0B",
}


# ── Catalog helpers ───────────────────────────────────────────────────────────


def get_rarity_color(rarity: str) -> str:
    """Badge colour for a rarity; unknown rarities render as common."""
    return _RARITY_COLORS.get(rarity, _RARITY_COLORS["common"])


def get_rarity_label(rarity: str) -> str:
    return rarity[:1].upper() + rarity[1:]


def get_achievement_by_id(achievement_id: str) -> Optional[Achievement]:
    return _BY_ID.get(achievement_id)


# ── Progress operations ───────────────────────────────────────────────────────


def _unlocked_ids(progress: AchievementProgress) -> set[str]:
    return {ua.achievement_id for ua in progress.unlocked_achievements}


def unlock(
    progress: AchievementProgress,
    achievement_id: str,
    now: Optional[datetime] = None,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> UnlockResult:
    """Record an achievement as unlocked.

    Unlocking an id that is already present is a no-op reported through
    ``already_unlocked``.

    Args:
        progress: Current snapshot.
        achievement_id: Catalog id to unlock.
        now: Unlock timestamp, defaults to the current UTC time.
        catalog: Catalog the id must belong to.

    Returns:
        UnlockResult carrying the updated snapshot.

    Raises:
        ValueError: If the id is not in the catalog.
    """
    if all(a.id != achievement_id for a in catalog):
        raise ValueError(f"Unknown achievement: '{achievement_id}'")
    if achievement_id in _unlocked_ids(progress):
        return UnlockResult(already_unlocked=True, progress=progress)

    record = UnlockedAchievement(
        achievement_id=achievement_id,
        unlocked_at=now or datetime.now(timezone.utc),
        is_new=True,
    )
    logger.info("Achievement unlocked: %s", achievement_id)
    updated = progress.model_copy(
        update={"unlocked_achievements": [*progress.unlocked_achievements, record]}
    )
    return UnlockResult(already_unlocked=False, progress=updated)


def _requirement_met(achievement: Achievement, stats: UserStats) -> bool:
    requirement = achievement.requirement
    # Count, streak and level unlock on the exact value only. A stat that
    # skips past the threshold never unlocks that tier here.
    if requirement.type == "workout_count":
        return stats.total_workouts == requirement.value
    if requirement.type == "streak":
        return stats.streak == requirement.value
    if requirement.type == "level":
        return stats.level == requirement.value
    if requirement.type == "xp":
        return stats.total_xp_earned >= requirement.value
    # perfect_week and exercise_complete need an external signal.
    return False


def evaluate_unlocks(
    stats: UserStats,
    already_unlocked: Iterable[str],
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> list[Achievement]:
    """Return the catalog entries the stats qualify for and not yet unlocked."""
    unlocked = set(already_unlocked)
    return [
        achievement
        for achievement in catalog
        if achievement.id not in unlocked and _requirement_met(achievement, stats)
    ]


def check_and_unlock(
    progress: AchievementProgress,
    stats: UserStats,
    now: Optional[datetime] = None,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> tuple[list[Achievement], AchievementProgress]:
    """Evaluate the stats and unlock everything they qualify for.

    Returns:
        Tuple of (newly unlocked achievements, updated snapshot).
    """
    newly_unlocked = evaluate_unlocks(stats, _unlocked_ids(progress), catalog)
    for achievement in newly_unlocked:
        progress = unlock(progress, achievement.id, now=now, catalog=catalog).progress
    return newly_unlocked, progress


def mark_seen(progress: AchievementProgress) -> AchievementProgress:
    """Clear the ``is_new`` flag on every unlock. Idempotent."""
    return progress.model_copy(
        update={
            "unlocked_achievements": [
                ua.model_copy(update={"is_new": False})
                for ua in progress.unlocked_achievements
            ]
        }
    )


def add_xp(progress: AchievementProgress, amount: int) -> AchievementProgress:
    """Add earned XP to the snapshot's running total."""
    if amount < 0:
        raise ValueError("XP amount must not be negative")
    return progress.model_copy(update={"total_xp": progress.total_xp + amount})


def get_unlocked_achievements(progress: AchievementProgress) -> list[Achievement]:
    """Unlocked catalog entries, in catalog order."""
    unlocked = _unlocked_ids(progress)
    return [a for a in ACHIEVEMENTS if a.id in unlocked]


def get_new_achievements(progress: AchievementProgress) -> list[Achievement]:
    """Unlocked catalog entries not yet marked as seen."""
    new_ids = {ua.achievement_id for ua in progress.unlocked_achievements if ua.is_new}
    return [a for a in ACHIEVEMENTS if a.id in new_ids]


def compute_progress(
    progress: AchievementProgress,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> AchievementSummary:
    """Unlocked count against the catalog size, as a rounded percentage.

    Unlock records whose id is no longer in the catalog are not counted.
    """
    catalog_ids = {a.id for a in catalog}
    unlocked_count = len(_unlocked_ids(progress) & catalog_ids)
    total = len(catalog)
    percentage = round_half_up(unlocked_count / total * 100) if total else 0
    return AchievementSummary(
        unlocked_count=unlocked_count,
        total_count=total,
        percentage=percentage,
    )
