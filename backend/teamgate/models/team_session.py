"""TeamSession ORM — server-side session storage keyed by cookie.

Invariants:
    - cookie is the primary key and the only value sent to the client
    - data holds team_id, name, csrf_token, client_ip and optionally admin
    - last_access_at is bumped on every login refresh
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from teamgate.db.base import Base


class TeamSession(Base):
    """Server-side session row."""
    __tablename__ = "team_sessions"

    cookie: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_access_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
