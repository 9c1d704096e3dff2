"""Registration Prerequisites — pure checks before any store mutation.

Tests cover:
    - registration flag "0" rejects, anything else passes
    - password policy only applies when strong passwords are enforced
    - tokenized registration needs a present, valid token
    - roster names/emails must pair positionally
    - team names are trimmed, blank-rejected and truncated to 20 chars
    - directory names longer than 20 chars are rejected, never truncated
"""

from teamgate.core.domain_types import OutcomeTag
from teamgate.core.enforce_registration import (
    check_directory_name,
    check_invitation,
    check_password_policy,
    check_registration_open,
    check_roster_shape,
    check_team_name,
    normalize_team_name,
)
from teamgate.core.outcomes import PASSWORD_TOO_SIMPLE, REGISTRATION_FAILED

STRONG = r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}"


# ─── check_registration_open ─────────────────────────────────────

def test_registration_disabled_rejects():
    outcome = check_registration_open("0")
    assert outcome is not None
    assert outcome.message == REGISTRATION_FAILED
    assert outcome.category == OutcomeTag.REGISTRATION
    assert outcome.reason == "REGISTRATION_DISABLED"


def test_registration_enabled_passes():
    assert check_registration_open("1") is None


# ─── check_password_policy ───────────────────────────────────────

def test_weak_password_rejected_when_enforced():
    outcome = check_password_policy("1", "abc", STRONG)
    assert outcome is not None
    assert outcome.message == PASSWORD_TOO_SIMPLE
    assert outcome.reason == "WEAK_PASSWORD"


def test_weak_password_allowed_when_not_enforced():
    assert check_password_policy("0", "abc", None) is None


def test_strong_password_passes_when_enforced():
    assert check_password_policy("1", "Abcdefg1", STRONG) is None


def test_missing_pattern_rejects_when_enforced():
    assert check_password_policy("1", "Abcdefg1", None) is not None


# ─── check_invitation ────────────────────────────────────────────

def test_open_registration_ignores_token():
    assert check_invitation("1", None, False) is None


def test_tokenized_requires_token():
    outcome = check_invitation("2", None, False)
    assert outcome is not None
    assert outcome.message == REGISTRATION_FAILED


def test_tokenized_rejects_invalid_token():
    assert check_invitation("2", "tok123", False) is not None


def test_tokenized_accepts_valid_token():
    assert check_invitation("2", "tok123", True) is None


# ─── check_roster_shape ──────────────────────────────────────────

def test_roster_equal_lengths_pass():
    assert check_roster_shape(["a", "b"], ["a@x", "b@x"]) is None
    assert check_roster_shape([], []) is None


def test_roster_mismatch_rejected():
    outcome = check_roster_shape(["a", "b"], ["a@x"])
    assert outcome is not None
    assert outcome.reason == "ROSTER_MISMATCH"


# ─── team names ──────────────────────────────────────────────────

def test_normalize_trims_and_truncates():
    assert normalize_team_name("  Foo  ") == "Foo"
    long_name = "A-Team-With-A-Very-Long-Name-Indeed"
    assert normalize_team_name(long_name) == long_name[:20]
    assert len(normalize_team_name(long_name)) == 20


def test_normalize_blank_returns_none():
    assert normalize_team_name("    ") is None
    assert normalize_team_name("") is None


def test_check_team_name_blank_rejected():
    outcome = check_team_name(" \t ")
    assert outcome is not None
    assert outcome.reason == "BLANK_NAME"


def test_same_prefix_names_collide():
    a = normalize_team_name("A-Team-With-A-Very-Long-Name-Indeed")
    b = normalize_team_name("A-Team-With-A-Very-Different-Suffix")
    assert a == b


# ─── check_directory_name ────────────────────────────────────────

def test_directory_name_within_limit_passes():
    assert check_directory_name("  " + "d" * 20 + "  ") is None


def test_directory_name_over_limit_rejected():
    outcome = check_directory_name("a.very.long.directory.user")
    assert outcome.message == REGISTRATION_FAILED
    assert outcome.reason == "DIRECTORY_NAME_TOO_LONG"
