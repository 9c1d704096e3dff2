"""Login Gate — pure state transitions of the login machine.

Invariants:
    - Credentials are verified BEFORE the gate so admins can log in while
      login is globally disabled
    - Gate rejects when login is disabled and the verified team is not admin
      (or nothing verified)
    - Start -> Verified | Failed | GateRejected; Verified -> SessionIssued
    - SessionIssued is the only state the gate returns on success, so the
      caller issues a session exactly when it sees it

Design Decisions:
    - State enum instead of nested ifs: LoginService walks the states and
      each transition is testable without a database
"""

from teamgate.core.domain_types import Destination, LoginState
from teamgate.core.flags import login_enabled


def after_verification(verified: bool) -> LoginState:
    return LoginState.VERIFIED if verified else LoginState.START


def apply_login_gate(
    state: LoginState, is_admin: bool, login_flag: str,
) -> LoginState:
    """Gate check: disabled login only lets verified admins through."""
    if not login_enabled(login_flag) and not (
        state == LoginState.VERIFIED and is_admin
    ):
        return LoginState.GATE_REJECTED
    if state != LoginState.VERIFIED:
        return LoginState.FAILED
    return LoginState.SESSION_ISSUED


def destination_for(is_admin: bool) -> Destination:
    return Destination.ADMIN if is_admin else Destination.GAME
