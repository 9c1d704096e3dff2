"""Index Actions — the single POST endpoint for registration and login.

Invariants:
    - Body is {"action": ..., ...flat params}; dispatch decides what to validate
    - Every outcome is HTTP 200 with {"result": "OK"|"ERROR", ...}; only
      malformed input (400) and infrastructure faults (5xx) use other codes
    - The session cookie is (re)issued only after the session row is saved

Design Decisions:
    - Directory authenticator is a FastAPI dependency so tests can swap it
      without touching network code
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.config import get_settings
from teamgate.core.repository_protocols import DirectoryAuthenticatorLike
from teamgate.infrastructure.database import get_db
from teamgate.schemas.index import IndexRequest
from teamgate.services.action_dispatch import ActionDispatch
from teamgate.services.directory_auth import DirectoryAuthenticator
from teamgate.services.session_store import SessionStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/index", tags=["index"])


def get_directory_authenticator() -> DirectoryAuthenticatorLike:
    """FastAPI dependency for the LDAP-backed authenticator."""
    return DirectoryAuthenticator(get_settings().ldap_connect_timeout_seconds)


@router.post("")
async def index_action(
    body: IndexRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    directory: DirectoryAuthenticatorLike = Depends(get_directory_authenticator),
):
    """Run one index action against the caller's session."""
    settings = get_settings()
    incoming_cookie = request.cookies.get(settings.session_cookie_name)
    client_ip = request.client.host if request.client else "unknown"

    store = SessionStore(db, settings.session_max_age_seconds)
    session = await store.load(incoming_cookie)
    dispatch = ActionDispatch(db, store, directory, settings)
    outcome = await dispatch.execute(
        body.action, body.params(), session, client_ip,
    )

    if not session.is_new and session.cookie != incoming_cookie:
        response.set_cookie(
            settings.session_cookie_name,
            session.cookie,
            max_age=settings.session_max_age_seconds,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
        )
    return outcome.to_response()
