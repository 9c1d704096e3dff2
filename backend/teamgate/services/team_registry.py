"""Team Registry — team persistence with atomic name uniqueness.

Invariants:
    - exists() is advisory; create() relies on the uq_teams_name constraint and
      turns a violation into DuplicateTeamNameError
    - create() and add_roster_member() commit immediately: once a team exists
      no later registration step rolls it back
    - verify_credentials() only returns teams that are active or admin
    - Name comparison is exact (case-sensitive) in both exists() and create()

Design Decisions:
    - bcrypt runs in a worker thread: hashing cost must not stall other requests
"""

import asyncio
import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.core.domain_types import TeamId
from teamgate.core.errors import DuplicateTeamNameError
from teamgate.core.password_hashing import hash_password, verify_password
from teamgate.models.team import Team, TeamMember

logger = logging.getLogger(__name__)


class TeamRegistry:
    """Teams and roster members."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = 12):
        self.db = db
        self._rounds = bcrypt_rounds

    async def exists(self, name: str) -> bool:
        result = await self.db.execute(select(Team.id).where(Team.name == name))
        return result.scalar_one_or_none() is not None

    async def hash_password(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self._rounds)

    async def create(
        self, name: str, password_hash: str, logo_name: str,
    ) -> TeamId:
        """Insert-if-absent on name. Raises DuplicateTeamNameError."""
        team = Team(name=name, password_hash=password_hash, logo=logo_name)
        self.db.add(team)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Team name collision on create: {name!r}")
            raise DuplicateTeamNameError(name)
        logger.info(f"Team created: {name!r}", extra={"team_id": team.id})
        return TeamId(team.id)

    async def add_roster_member(
        self, name: str, email: str, team_id: TeamId,
    ) -> None:
        self.db.add(TeamMember(name=name, email=email, team_id=team_id))
        await self.db.commit()

    async def get_by_id(self, team_id: TeamId) -> Team | None:
        result = await self.db.execute(select(Team).where(Team.id == team_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Team | None:
        result = await self.db.execute(select(Team).where(Team.name == name))
        return result.scalar_one_or_none()

    async def get_login_candidate(self, team_id: TeamId) -> Team | None:
        """Team that may log in at all: active, or admin."""
        result = await self.db.execute(
            select(Team).where(
                Team.id == team_id,
                or_(Team.active.is_(True), Team.admin.is_(True)),
            ),
        )
        return result.scalar_one_or_none()

    async def verify_credentials(
        self, team_id: TeamId, password: str,
    ) -> Team | None:
        """Team if password matches its stored hash, else None."""
        team = await self.get_login_candidate(team_id)
        if team is None:
            return None
        matched = await asyncio.to_thread(
            verify_password, password, team.password_hash,
        )
        return team if matched else None
