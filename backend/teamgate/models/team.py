"""Team ORM — persists registered teams and their roster members.

Invariants:
    - name is unique and at most 20 characters (canonical truncated form)
    - password_hash is a bcrypt string, never the raw password
    - roster members are created only after their team exists
    - teams are never deleted by registration or login

Design Decisions:
    - Uniqueness enforced by a DB constraint: the existence check in the
      registry is advisory, the constraint decides concurrent races
    - Integer primary key: team ids travel through forms and session data as ints
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamgate.core.domain_types import TEAM_NAME_MAX_LENGTH
from teamgate.db.base import Base


class Team(Base):
    """Team account — credentials, logo and admin flag."""
    __tablename__ = "teams"
    __table_args__ = (UniqueConstraint("name", name="uq_teams_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(TEAM_NAME_MAX_LENGTH), nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    logo: Mapped[str] = mapped_column(String(100), nullable=False)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    members: Mapped[list["TeamMember"]] = relationship(
        "TeamMember", back_populates="team",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="TeamMember.id",
    )


class TeamMember(Base):
    """Roster member collected at registration time."""
    __tablename__ = "team_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    team: Mapped["Team"] = relationship("Team", back_populates="members")
