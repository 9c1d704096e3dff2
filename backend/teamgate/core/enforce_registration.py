"""Registration Prerequisites — pure checks run before any store mutation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return ActionOutcome on violation, None on success
    - Every failure except password strength collapses to "Registration failed"

Design Decisions:
    - Return outcomes (not exceptions): the orchestrator chains checks with `or`,
      first rejection wins, keeping the error path identical to the success path
    - Names are trimmed BEFORE truncation so the 20-char prefix never carries
      leading whitespace into the uniqueness check
    - Directory registrations never truncate: the bind username and the stored
      team name must stay identical
"""

from collections.abc import Sequence

from teamgate.core import credential_policy
from teamgate.core.domain_types import TEAM_NAME_MAX_LENGTH
from teamgate.core.flags import (
    registration_enabled, strong_passwords_enforced, tokenized_registration,
)
from teamgate.core.outcomes import (
    ActionOutcome, password_too_simple, registration_failed,
)


def check_registration_open(registration_flag: str) -> ActionOutcome | None:
    """Step 1: the registration flag must not be disabled."""
    if not registration_enabled(registration_flag):
        return registration_failed("REGISTRATION_DISABLED")
    return None


def check_password_policy(
    strong_flag: str, password: str, pattern: str | None,
) -> ActionOutcome | None:
    """Step 2: enforce the current password policy when strong passwords are on."""
    if not strong_passwords_enforced(strong_flag):
        return None
    if pattern is None or not credential_policy.validate(password, pattern):
        return password_too_simple()
    return None


def check_invitation(
    registration_type: str, token: str | None, token_valid: bool,
) -> ActionOutcome | None:
    """Step 4: tokenized registration requires a present, unused token."""
    if not tokenized_registration(registration_type):
        return None
    if not token or not token_valid:
        return registration_failed("TOKEN_INVALID")
    return None


def check_roster_shape(
    names: Sequence[str], emails: Sequence[str],
) -> ActionOutcome | None:
    """Names and emails pair positionally; unequal lengths are malformed."""
    if len(names) != len(emails):
        return registration_failed("ROSTER_MISMATCH")
    return None


def normalize_team_name(raw: str) -> str | None:
    """Trim, reject blank, truncate to the canonical 20-character name."""
    trimmed = raw.strip()
    if not trimmed:
        return None
    return trimmed[:TEAM_NAME_MAX_LENGTH]


def check_team_name(raw: str) -> ActionOutcome | None:
    """Step 6: blank-after-trim names are rejected before any lookup."""
    if normalize_team_name(raw) is None:
        return registration_failed("BLANK_NAME")
    return None


def check_directory_name(raw: str) -> ActionOutcome | None:
    """Step 3: a directory user must fit the team name untruncated.

    Later logins bind as the stored team name, so a name cut to 20
    characters would never bind again.
    """
    if len(raw.strip()) > TEAM_NAME_MAX_LENGTH:
        return registration_failed("DIRECTORY_NAME_TOO_LONG")
    return None
