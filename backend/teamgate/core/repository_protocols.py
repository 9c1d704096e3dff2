"""Boundary Protocols — contracts between core orchestration and IO collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every collaborator the orchestrators call is reached through a Protocol
    - create() and consume() are atomic at the storage layer; the separate
      exists()/check() calls are advisory and never relied on for correctness

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure checks that consume
      their results stay synchronous
"""

from typing import Protocol

from teamgate.core.domain_types import (
    ConfigKey, DirectoryServerConfig, LogoName, TeamId,
)
from teamgate.core.escrow import Escrow
from teamgate.core.server_session import ServerSession


class TeamLike(Protocol):
    """Structural contract for a persisted team."""
    id: int
    name: str
    password_hash: str
    logo: str
    admin: bool
    active: bool


class ConfigGateLike(Protocol):
    """Read-only configuration snapshot for one request."""
    async def get(self, key: ConfigKey) -> str: ...
    async def current_password_pattern(self) -> str: ...
    async def directory_server(self) -> DirectoryServerConfig: ...


class DirectoryAuthenticatorLike(Protocol):
    """Verify credentials against the external identity provider."""
    async def authenticate(
        self, username: str, password: str, server: DirectoryServerConfig,
    ) -> Escrow: ...


class InvitationTokenServiceLike(Protocol):
    """Single-use registration tokens."""
    async def check(self, token: str) -> bool: ...
    async def consume(self, token: str, team_id: TeamId) -> None: ...


class LogoResolverLike(Protocol):
    """Resolve the logo a new team will display."""
    async def resolve_for_registration(
        self, logo_value: str, is_custom: bool, logo_type: str | None,
    ) -> LogoName: ...


class TeamRegistryLike(Protocol):
    """Team persistence with atomic name uniqueness."""
    async def exists(self, name: str) -> bool: ...
    async def hash_password(self, password: str) -> str: ...
    async def create(
        self, name: str, password_hash: str, logo_name: str,
    ) -> TeamId: ...
    async def add_roster_member(
        self, name: str, email: str, team_id: TeamId,
    ) -> None: ...
    async def get_by_name(self, name: str) -> TeamLike | None: ...
    async def get_login_candidate(self, team_id: TeamId) -> TeamLike | None: ...
    async def verify_credentials(
        self, team_id: TeamId, password: str,
    ) -> TeamLike | None: ...


class SessionStoreLike(Protocol):
    """Server-side session persistence."""
    async def load(self, cookie: str | None) -> ServerSession: ...
    async def refresh(self, session: ServerSession) -> None: ...
    async def save(self, session: ServerSession) -> None: ...
