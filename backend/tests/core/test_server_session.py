"""Server Session — activity and field access.

Tests cover:
    - a session is inactive until team_id is set
    - set/get use SessionKey names
"""

from teamgate.core.domain_types import SessionKey
from teamgate.core.server_session import ServerSession


def test_session_inactive_until_team_id_set():
    session = ServerSession(cookie="c")
    assert not session.active
    session.set(SessionKey.NAME, "Foo")
    assert not session.active
    session.set(SessionKey.TEAM_ID, "7")
    assert session.active


def test_session_fields_are_stored_by_key_name():
    session = ServerSession(cookie="c")
    session.set(SessionKey.CSRF_TOKEN, "abc")
    assert session.data == {"csrf_token": "abc"}
    assert session.get(SessionKey.CSRF_TOKEN) == "abc"
    assert session.get(SessionKey.ADMIN) is None
