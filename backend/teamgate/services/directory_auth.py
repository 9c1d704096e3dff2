"""Directory Authenticator — verify team credentials against an LDAP server.

Invariants:
    - Connection failure -> DirectoryUnavailableError (never retried here)
    - Bind failure, or an empty password -> DirectoryCredentialsError
    - Success returns an Escrow: the directory password is kept only for the
      completing login, a fresh random secret is what gets hashed locally
    - The bind DN is trim(username) + domain suffix

Design Decisions:
    - ldap3 is synchronous; each authentication runs in a worker thread so the
      event loop is never blocked on a slow directory
    - Empty passwords are refused before binding: many servers treat them as
      an unauthenticated bind that "succeeds"
    - connection_factory is injectable so tests never open sockets
"""

import asyncio
import logging
from typing import Callable

from ldap3 import Connection, Server
from ldap3.core.exceptions import LDAPException

from teamgate.core.domain_types import DirectoryServerConfig
from teamgate.core.errors import (
    DirectoryCredentialsError, DirectoryUnavailableError,
)
from teamgate.core.escrow import Escrow

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[DirectoryServerConfig, str, str, int], Connection]


def ldap3_connection(
    server: DirectoryServerConfig, bind_dn: str, password: str, timeout: int,
) -> Connection:
    """Build an unopened ldap3 connection for a simple bind."""
    return Connection(
        Server(server.server, port=server.port, connect_timeout=timeout),
        user=bind_dn,
        password=password,
        receive_timeout=timeout,
        raise_exceptions=False,
    )


class DirectoryAuthenticator:
    """Simple-bind verification with local password escrow."""

    def __init__(
        self,
        connect_timeout: int = 5,
        connection_factory: ConnectionFactory = ldap3_connection,
    ):
        self._timeout = connect_timeout
        self._factory = connection_factory

    async def authenticate(
        self, username: str, password: str, server: DirectoryServerConfig,
    ) -> Escrow:
        bind_dn = server.bind_dn(username)
        await asyncio.to_thread(self._bind, server, bind_dn, password)
        logger.info(f"Directory bind succeeded for {bind_dn}")
        return Escrow.issue(password)

    def _bind(
        self, server: DirectoryServerConfig, bind_dn: str, password: str,
    ) -> None:
        conn = self._factory(server, bind_dn, password, self._timeout)
        try:
            conn.open()
        except LDAPException as e:
            logger.warning(
                f"Directory server {server.server}:{server.port} unreachable: {e}",
            )
            raise DirectoryUnavailableError(server.server, server.port)
        try:
            if not password or not conn.bind():
                logger.warning(f"Directory bind rejected for {bind_dn}")
                raise DirectoryCredentialsError(bind_dn)
        except LDAPException as e:
            logger.warning(f"Directory bind error for {bind_dn}: {e}")
            raise DirectoryCredentialsError(bind_dn)
        finally:
            conn.unbind()
