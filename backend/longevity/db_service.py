"""Database service layer for achievement snapshots.

Loads and stores the ``AchievementProgress`` consumed and produced by the
pure engine in ``longevity.achievements``. Functions take an ``AsyncSession``
injected via the ``get_db`` FastAPI dependency.
"""

import json
import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from longevity.db_models import AchievementProgressRow
from longevity.models import AchievementProgress

logger = logging.getLogger(__name__)


async def load_achievement_progress(db: AsyncSession, user_id: str) -> AchievementProgress:
    """Load a user's achievement snapshot.

    Args:
        db: Active async database session.
        user_id: Caller-chosen user identifier.

    Returns:
        The stored snapshot, or an empty one if the user has none or the
        stored JSON cannot be read.
    """
    row = await db.get(AchievementProgressRow, user_id)
    if row is None:
        return AchievementProgress()
    try:
        return AchievementProgress.model_validate(json.loads(row.progress_json))
    except (json.JSONDecodeError, ValidationError):
        logger.warning("Corrupt achievement progress for user %r; starting empty", user_id)
        return AchievementProgress()


async def save_achievement_progress(
    db: AsyncSession, user_id: str, progress: AchievementProgress
) -> None:
    """Insert or overwrite a user's achievement snapshot.

    Args:
        db: Active async database session.
        user_id: Caller-chosen user identifier.
        progress: Snapshot to store.
    """
    payload = json.dumps(progress.model_dump(mode="json"))
    row = await db.get(AchievementProgressRow, user_id)
    if row is None:
        db.add(AchievementProgressRow(user_id=user_id, progress_json=payload))
    else:
        row.progress_json = payload
    await db.commit()
