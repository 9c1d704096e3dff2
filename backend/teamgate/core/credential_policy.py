"""Credential Policy — password strength against the configured pattern.

Invariants:
    - Acceptance is a FULL match of the pattern against the password
    - A failed match is a WeakPassword condition, never a system fault
    - An invalid pattern is a misconfiguration and propagates as re.error
"""

import re


def validate(password: str, pattern: str) -> bool:
    """True when the whole password matches the policy pattern."""
    return re.fullmatch(pattern, password) is not None
