"""Invitation Token Service — validate and consume single-use registration tokens.

Invariants:
    - check() is advisory: true iff the token exists and is unused right now
    - consume() is the only correctness boundary: one conditional UPDATE, so
      concurrent consumers of the same token see exactly one success
    - A losing consumer gets TokenAlreadyUsedError; an unknown token gets
      TokenNotFoundError
    - consume() commits its own transaction (never rolled back by later steps)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.core.domain_types import TeamId
from teamgate.core.errors import TokenAlreadyUsedError, TokenNotFoundError
from teamgate.models.registration_token import RegistrationToken

logger = logging.getLogger(__name__)


class InvitationTokenService:
    """Check-then-consume access to registration_tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def check(self, token: str) -> bool:
        result = await self.db.execute(
            select(RegistrationToken.id).where(
                RegistrationToken.token == token,
                RegistrationToken.used.is_(False),
            ),
        )
        return result.scalar_one_or_none() is not None

    async def consume(self, token: str, team_id: TeamId) -> None:
        """Atomically mark token used by team_id."""
        result = await self.db.execute(
            update(RegistrationToken)
            .where(
                RegistrationToken.token == token,
                RegistrationToken.used.is_(False),
            )
            .values(
                used=True,
                team_id=team_id,
                used_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 1:
            await self.db.commit()
            logger.info("Invitation token consumed", extra={"team_id": team_id})
            return
        await self.db.rollback()
        exists = await self.db.execute(
            select(RegistrationToken.id).where(RegistrationToken.token == token),
        )
        if exists.scalar_one_or_none() is None:
            raise TokenNotFoundError()
        raise TokenAlreadyUsedError()
