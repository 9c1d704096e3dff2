"""RegistrationToken ORM — single-use invitation codes for tokenized registration.

Invariants:
    - token is unique
    - used flips false -> true exactly once, together with team_id and used_at
    - tokens are created outside this service (admin tooling)

Design Decisions:
    - Consumption is a conditional UPDATE on used = false, so the row itself is
      the lock; no SELECT ... FOR UPDATE needed
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from teamgate.db.base import Base


class RegistrationToken(Base):
    """Invitation token, redeemable by one team."""
    __tablename__ = "registration_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(250), nullable=False, unique=True)
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
