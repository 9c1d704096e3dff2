"""Session Store — server-side sessions persisted in team_sessions.

Invariants:
    - load() never returns None: unknown, missing or expired cookies yield a
      fresh, unsaved session with a new random cookie
    - refresh() bumps last_access_at of a stored session; new sessions have
      nothing to refresh
    - save() commits; afterwards the session is no longer new
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.core.server_session import ServerSession
from teamgate.models.team_session import TeamSession

logger = logging.getLogger(__name__)


def _as_utc(moment: datetime) -> datetime:
    # SQLite returns naive datetimes even for timezone-aware columns
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


class SessionStore:
    """Cookie-keyed session rows."""

    def __init__(self, db: AsyncSession, max_age_seconds: int = 86_400):
        self.db = db
        self._max_age = timedelta(seconds=max_age_seconds)

    async def load(self, cookie: str | None) -> ServerSession:
        if cookie:
            row = await self.db.get(TeamSession, cookie)
            if row is not None:
                if datetime.now(timezone.utc) - _as_utc(row.last_access_at) <= self._max_age:
                    return ServerSession(cookie=cookie, data=dict(row.data))
                await self.db.execute(
                    delete(TeamSession).where(TeamSession.cookie == cookie),
                )
                await self.db.commit()
                logger.info("Expired session discarded")
        return ServerSession(cookie=secrets.token_urlsafe(32), is_new=True)

    async def refresh(self, session: ServerSession) -> None:
        if session.is_new:
            return
        await self.db.execute(
            update(TeamSession)
            .where(TeamSession.cookie == session.cookie)
            .values(last_access_at=datetime.now(timezone.utc)),
        )
        await self.db.commit()

    async def save(self, session: ServerSession) -> None:
        now = datetime.now(timezone.utc)
        if session.is_new:
            self.db.add(TeamSession(
                cookie=session.cookie, data=dict(session.data),
                created_at=now, last_access_at=now,
            ))
        else:
            await self.db.execute(
                update(TeamSession)
                .where(TeamSession.cookie == session.cookie)
                .values(data=dict(session.data), last_access_at=now),
            )
        await self.db.commit()
        session.is_new = False

