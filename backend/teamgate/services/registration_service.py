"""Registration Orchestrator — the ordered, short-circuiting registration pipeline.

Invariants:
    - Step order: registration flag -> password policy -> directory bind ->
      invitation token -> roster shape -> logo -> blank name -> duplicate name ->
      hash + create -> roster -> consume token -> automatic login
    - Nothing is committed before team creation; a rejection up to the
      duplicate-name check leaves no team, token or logo behind
    - Once the team is committed it is never rolled back: a failing roster
      insert propagates, a lost token race returns "Registration failed"
    - Directory-authenticated teams get the escrow secret hashed, never their
      directory password; the directory password is used for the login only
    - A directory name longer than 20 characters is rejected before the bind,
      so the completing login binds with exactly the registered username
    - Every rejection except "Password too simple" and the delegated login's
      outcome reads "Registration failed"; the real reason is only logged

Design Decisions:
    - Pure checks (core/enforce_registration.py) return ActionOutcome | None;
      collaborator errors are caught here and folded into the same shape
"""

import logging
from dataclasses import dataclass, field

from teamgate.core.domain_types import ConfigKey, TeamId
from teamgate.core.enforce_registration import (
    check_directory_name, check_invitation, check_password_policy,
    check_registration_open, check_roster_shape, check_team_name,
    normalize_team_name,
)
from teamgate.core.errors import (
    DirectoryCredentialsError, DirectoryUnavailableError, DuplicateTeamNameError,
    LogoCreationError, TokenAlreadyUsedError, TokenNotFoundError,
)
from teamgate.core.flags import (
    directory_enabled, strong_passwords_enforced, tokenized_registration,
)
from teamgate.core.outcomes import ActionOutcome, registration_failed
from teamgate.core.repository_protocols import (
    ConfigGateLike, DirectoryAuthenticatorLike, InvitationTokenServiceLike,
    LogoResolverLike, TeamRegistryLike,
)
from teamgate.core.server_session import ServerSession
from teamgate.services.login_service import LoginService

logger = logging.getLogger(__name__)


@dataclass
class RegistrationRequest:
    """Flat parameters of register_team / register_names."""
    teamname: str
    password: str = field(repr=False)
    token: str | None
    logo: str
    is_custom_logo: bool
    logo_type: str | None
    names: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)


class RegistrationService:
    """Top-level entry point: register a team, then log it in."""

    def __init__(
        self,
        config: ConfigGateLike,
        directory: DirectoryAuthenticatorLike,
        tokens: InvitationTokenServiceLike,
        logos: LogoResolverLike,
        teams: TeamRegistryLike,
        login: LoginService,
    ):
        self.config = config
        self.directory = directory
        self.tokens = tokens
        self.logos = logos
        self.teams = teams
        self.login = login

    async def register(
        self,
        request: RegistrationRequest,
        session: ServerSession,
        client_ip: str,
    ) -> ActionOutcome:
        rejection = check_registration_open(
            await self.config.get(ConfigKey.REGISTRATION),
        )
        if rejection:
            return self._reject(rejection, request)

        strong_flag = await self.config.get(ConfigKey.LOGIN_STRONGPASSWORDS)
        pattern = None
        if strong_passwords_enforced(strong_flag):
            pattern = await self.config.current_password_pattern()
        rejection = check_password_policy(strong_flag, request.password, pattern)
        if rejection:
            return self._reject(rejection, request)

        stored_secret = request.password
        login_password = request.password
        if directory_enabled(await self.config.get(ConfigKey.LDAP)):
            rejection = check_directory_name(request.teamname)
            if rejection:
                return self._reject(rejection, request)
            server = await self.config.directory_server()
            try:
                escrow = await self.directory.authenticate(
                    request.teamname, request.password, server,
                )
            except (DirectoryUnavailableError, DirectoryCredentialsError) as e:
                return self._reject(registration_failed(e.code), request)
            stored_secret = escrow.local_secret
            login_password = escrow.original_password

        registration_type = await self.config.get(ConfigKey.REGISTRATION_TYPE)
        tokenized = tokenized_registration(registration_type)
        token_valid = False
        if tokenized and request.token:
            token_valid = await self.tokens.check(request.token)
        rejection = (
            check_invitation(registration_type, request.token, token_valid)
            or check_roster_shape(request.names, request.emails)
        )
        if rejection:
            return self._reject(rejection, request)

        try:
            logo_name = await self.logos.resolve_for_registration(
                request.logo, request.is_custom_logo, request.logo_type,
            )
        except LogoCreationError as e:
            return self._reject(registration_failed(e.code), request)

        rejection = check_team_name(request.teamname)
        if rejection:
            return self._reject(rejection, request)
        name = normalize_team_name(request.teamname)
        if await self.teams.exists(name):
            return self._reject(registration_failed("DUPLICATE_NAME"), request)

        password_hash = await self.teams.hash_password(stored_secret)
        try:
            team_id = await self.teams.create(name, password_hash, logo_name)
        except DuplicateTeamNameError as e:
            return self._reject(registration_failed(e.code), request)

        for member_name, member_email in zip(request.names, request.emails):
            await self.teams.add_roster_member(member_name, member_email, team_id)

        if tokenized:
            rejection = await self._consume_token(request.token, team_id)
            if rejection:
                return rejection

        return await self.login.login(team_id, login_password, session, client_ip)

    async def _consume_token(
        self, token: str, team_id: TeamId,
    ) -> ActionOutcome | None:
        try:
            await self.tokens.consume(token, team_id)
        except (TokenNotFoundError, TokenAlreadyUsedError) as e:
            # Team stays committed: partial success is accepted
            logger.warning(
                "Token lost after team creation",
                extra={"team_id": team_id, "error_code": e.code},
            )
            return registration_failed(e.code)
        return None

    def _reject(
        self, outcome: ActionOutcome, request: RegistrationRequest,
    ) -> ActionOutcome:
        logger.warning(
            f"Registration rejected for {request.teamname.strip()[:40]!r}",
            extra={"error_code": outcome.reason},
        )
        return outcome
