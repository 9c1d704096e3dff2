"""Action Dispatch — explicit routing from index action name to handler.

Invariants:
    - Every action -> handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown actions return "Invalid action" with category "index" (never raises)
    - Collaborators are built per dispatch around one DB session and one
      ConfigGate, so configuration is read once per request
    - Parameter validation errors propagate (pydantic ValidationError -> 400)

Design Decisions:
    - login_team resolves teamname -> id here when login-by-id is off; an unknown
      name is "Login failed", indistinguishable from a wrong password
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.config import Settings
from teamgate.core.domain_types import Action, ConfigKey, TeamId
from teamgate.core.flags import login_by_id
from teamgate.core.outcomes import ActionOutcome, invalid_action, login_failed
from teamgate.core.repository_protocols import DirectoryAuthenticatorLike
from teamgate.core.server_session import ServerSession
from teamgate.schemas.index import (
    LoginTeamParams, RegisterNamesParams, RegisterTeamParams,
)
from teamgate.services.config_gate import ConfigGate
from teamgate.services.invitation_tokens import InvitationTokenService
from teamgate.services.login_service import LoginService
from teamgate.services.logo_resolver import LogoResolver
from teamgate.services.registration_service import (
    RegistrationRequest, RegistrationService,
)
from teamgate.services.session_issuer import SessionIssuer
from teamgate.services.session_store import SessionStore
from teamgate.services.team_registry import TeamRegistry

logger = logging.getLogger(__name__)


class ActionDispatch:
    """Routes action -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self,
        db: AsyncSession,
        store: SessionStore,
        directory: DirectoryAuthenticatorLike,
        settings: Settings,
    ):
        self.config = ConfigGate(db)
        self.teams = TeamRegistry(db, settings.bcrypt_rounds)
        self.login = LoginService(
            self.config, self.teams, SessionIssuer(store), directory,
        )
        self.registration = RegistrationService(
            config=self.config,
            directory=directory,
            tokens=InvitationTokenService(db),
            logos=LogoResolver(db, settings.max_logo_bytes),
            teams=self.teams,
            login=self.login,
        )

        # Adding an action requires editing this dict
        self._handlers = {
            Action.REGISTER_TEAM.value: self.register_team,
            Action.REGISTER_NAMES.value: self.register_names,
            Action.LOGIN_TEAM.value: self.login_team,
        }

    async def execute(
        self,
        action: str,
        params: dict,
        session: ServerSession,
        client_ip: str,
    ) -> ActionOutcome:
        handler = self._handlers.get(action)
        if not handler:
            logger.info(f"Unknown action: {action}", extra={"action": action})
            return invalid_action()
        return await handler(params, session, client_ip)

    async def register_team(
        self, params: dict, session: ServerSession, client_ip: str,
    ) -> ActionOutcome:
        body = RegisterTeamParams.model_validate(params)
        return await self.registration.register(
            RegistrationRequest(
                teamname=body.teamname,
                password=body.password,
                token=body.token,
                logo=body.logo,
                is_custom_logo=body.is_custom_logo,
                logo_type=body.logo_type,
            ),
            session, client_ip,
        )

    async def register_names(
        self, params: dict, session: ServerSession, client_ip: str,
    ) -> ActionOutcome:
        body = RegisterNamesParams.model_validate(params)
        return await self.registration.register(
            RegistrationRequest(
                teamname=body.teamname,
                password=body.password,
                token=body.token,
                logo=body.logo,
                is_custom_logo=body.is_custom_logo,
                logo_type=body.logo_type,
                names=body.names,
                emails=body.emails,
            ),
            session, client_ip,
        )

    async def login_team(
        self, params: dict, session: ServerSession, client_ip: str,
    ) -> ActionOutcome:
        body = LoginTeamParams.model_validate(params)
        if login_by_id(await self.config.get(ConfigKey.LOGIN_SELECT)):
            if body.team_id is None:
                return login_failed("MISSING_TEAM_ID")
            team_id = TeamId(body.team_id)
        else:
            team = await self.teams.get_by_name(body.teamname or "")
            if team is None:
                return login_failed("UNKNOWN_TEAM")
            team_id = TeamId(team.id)
        return await self.login.login(team_id, body.password, session, client_ip)
