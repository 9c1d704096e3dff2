"""Session Issuer — populate a server-side session for a verified team.

Invariants:
    - The store's freshness marker is refreshed on every issue
    - Identity fields are written only when the session is not already active;
      a second login on an active session leaves team_id and csrf_token as-is
    - csrf_token is freshly generated per populated session, never reused
    - admin is written only for admin teams
"""

from teamgate.core.domain_types import SessionKey
from teamgate.core.random_tokens import generate_secret
from teamgate.core.repository_protocols import SessionStoreLike, TeamLike
from teamgate.core.server_session import ServerSession


class SessionIssuer:
    """Binds a verified team to the caller's session."""

    def __init__(self, store: SessionStoreLike):
        self.store = store

    async def issue(
        self, session: ServerSession, team: TeamLike, client_ip: str,
    ) -> bool:
        """Returns True when identity fields were written."""
        await self.store.refresh(session)
        if session.active:
            return False
        session.set(SessionKey.TEAM_ID, str(team.id))
        session.set(SessionKey.NAME, team.name)
        session.set(SessionKey.CSRF_TOKEN, generate_secret())
        session.set(SessionKey.CLIENT_IP, client_ip)
        if team.admin:
            session.set(SessionKey.ADMIN, "1")
        await self.store.save(session)
        return True
