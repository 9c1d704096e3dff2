"""Action Outcomes — the only shapes an index action can return.

Invariants:
    - Success carries a redirect destination; failure carries a category tag
    - The internal reason code is logged, never serialized to the caller
    - Registration failures share one message regardless of cause

Design Decisions:
    - Frozen dataclass over exceptions at the boundary: every step in the
      pipeline returns ActionOutcome | None, first non-None wins
"""

from dataclasses import dataclass

from teamgate.core.domain_types import Destination, OutcomeTag

REGISTRATION_FAILED = "Registration failed"
PASSWORD_TOO_SIMPLE = "Password too simple"
LOGIN_FAILED = "Login failed"
LOGIN_SUCCESSFUL = "Login successful"
INVALID_ACTION = "Invalid action"


@dataclass(frozen=True)
class ActionOutcome:
    """Result of one index action."""
    ok: bool
    message: str
    redirect: Destination | None = None
    category: OutcomeTag | None = None
    reason: str | None = None

    @classmethod
    def success(cls, destination: Destination) -> "ActionOutcome":
        return cls(ok=True, message=LOGIN_SUCCESSFUL, redirect=destination)

    @classmethod
    def failure(
        cls, message: str, category: OutcomeTag, reason: str | None = None,
    ) -> "ActionOutcome":
        return cls(ok=False, message=message, category=category, reason=reason)

    def to_response(self) -> dict:
        if self.ok:
            return {
                "result": "OK",
                "message": self.message,
                "redirect": self.redirect.value if self.redirect else None,
            }
        return {
            "result": "ERROR",
            "message": self.message,
            "category": self.category.value if self.category else None,
        }


def registration_failed(reason: str) -> ActionOutcome:
    return ActionOutcome.failure(REGISTRATION_FAILED, OutcomeTag.REGISTRATION, reason)


def password_too_simple() -> ActionOutcome:
    return ActionOutcome.failure(
        PASSWORD_TOO_SIMPLE, OutcomeTag.REGISTRATION, "WEAK_PASSWORD",
    )


def login_failed(reason: str) -> ActionOutcome:
    return ActionOutcome.failure(LOGIN_FAILED, OutcomeTag.LOGIN, reason)


def invalid_action(reason: str = "UNKNOWN_ACTION") -> ActionOutcome:
    return ActionOutcome.failure(INVALID_ACTION, OutcomeTag.INDEX, reason)
