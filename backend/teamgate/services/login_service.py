"""Login Orchestrator — verify, gate, then issue a session.

Invariants:
    - Credentials are verified before the login flag is read, so admins can
      log in while login is globally disabled
    - With the directory service enabled, non-admin teams are verified by a
      directory bind under their team name; the local hash holds only the
      escrow secret and can never match a directory password
    - Admin teams are always verified against the local hash
    - Every failure surfaces as "Login failed" with category "login"
    - Success redirects admins to "admin", everyone else to "game"

Design Decisions:
    - The state walk lives in core/enforce_login.py; this class only performs
      the IO each state needs
"""

import logging

from teamgate.core.domain_types import ConfigKey, LoginState, TeamId
from teamgate.core.enforce_login import (
    after_verification, apply_login_gate, destination_for,
)
from teamgate.core.errors import (
    DirectoryCredentialsError, DirectoryUnavailableError,
)
from teamgate.core.flags import directory_enabled
from teamgate.core.outcomes import ActionOutcome, login_failed
from teamgate.core.repository_protocols import (
    ConfigGateLike, DirectoryAuthenticatorLike, TeamLike, TeamRegistryLike,
)
from teamgate.core.server_session import ServerSession
from teamgate.services.session_issuer import SessionIssuer

logger = logging.getLogger(__name__)


class LoginService:
    """Second entry point: login(team_id, password)."""

    def __init__(
        self,
        config: ConfigGateLike,
        teams: TeamRegistryLike,
        issuer: SessionIssuer,
        directory: DirectoryAuthenticatorLike,
    ):
        self.config = config
        self.teams = teams
        self.issuer = issuer
        self.directory = directory

    async def login(
        self,
        team_id: TeamId,
        password: str,
        session: ServerSession,
        client_ip: str,
    ) -> ActionOutcome:
        team = await self._verify(team_id, password)
        state = after_verification(team is not None)

        login_flag = await self.config.get(ConfigKey.LOGIN)
        is_admin = bool(team is not None and team.admin)
        state = apply_login_gate(state, is_admin, login_flag)

        if state == LoginState.GATE_REJECTED:
            logger.info(
                "Login rejected: login disabled",
                extra={"team_id": team_id, "client_ip": client_ip},
            )
            return login_failed("LOGIN_DISABLED")
        if state != LoginState.SESSION_ISSUED:
            logger.info(
                "Login rejected: bad credentials",
                extra={"team_id": team_id, "client_ip": client_ip},
            )
            return login_failed("BAD_CREDENTIALS")

        written = await self.issuer.issue(session, team, client_ip)
        logger.info(
            f"Login succeeded (fresh session={written})",
            extra={"team_id": team.id, "client_ip": client_ip},
        )
        return ActionOutcome.success(destination_for(is_admin))

    async def _verify(self, team_id: TeamId, password: str) -> TeamLike | None:
        if not directory_enabled(await self.config.get(ConfigKey.LDAP)):
            return await self.teams.verify_credentials(team_id, password)

        team = await self.teams.get_login_candidate(team_id)
        if team is None:
            return None
        if team.admin:
            return await self.teams.verify_credentials(team_id, password)
        try:
            await self.directory.authenticate(
                team.name, password, await self.config.directory_server(),
            )
        except (DirectoryUnavailableError, DirectoryCredentialsError) as e:
            logger.info(
                "Directory login refused",
                extra={"team_id": team_id, "error_code": e.code},
            )
            return None
        return team
