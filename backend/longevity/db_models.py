"""SQLAlchemy ORM table definitions.

One table:
- ``achievement_progress``: the latest achievement snapshot per user

Import this module before calling ``database.create_tables()`` so the model
is registered with ``Base.metadata``.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from longevity.database import Base


class AchievementProgressRow(Base):
    """Achievement snapshot of one user.

    ``progress_json`` stores the full ``AchievementProgress`` as JSON. Every
    save overwrites the row (last write wins).
    """

    __tablename__ = "achievement_progress"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    progress_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
