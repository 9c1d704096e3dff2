"""Credential Policy — full-match password validation.

Tests cover:
    - a matching password is accepted
    - partial matches are rejected (full match semantics)
    - lookahead policies enforce character classes
"""

import re

import pytest

from teamgate.core.credential_policy import validate

STRONG = r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}"


def test_accepts_full_match():
    assert validate("Secret123", STRONG) is True


def test_rejects_weak_password():
    assert validate("abc", STRONG) is False


def test_requires_full_match_not_prefix():
    assert validate("abc!", r"[a-z]+") is False
    assert validate("abc", r"[a-z]+") is True


def test_invalid_pattern_propagates():
    with pytest.raises(re.error):
        validate("anything", r"(unclosed")
