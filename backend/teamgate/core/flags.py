"""Flag Semantics — what each string-valued configuration flag means.

Invariants:
    - All functions are PURE: they interpret a value already fetched
    - "Disabled" checks compare against "0"; "enabled" checks compare against "1"
      (an unexpected value keeps registration/login open but directory auth off)
"""

from teamgate.core.domain_types import (
    FLAG_OFF, FLAG_ON, REGISTRATION_TYPE_TOKENIZED,
)


def registration_enabled(value: str) -> bool:
    return value != FLAG_OFF


def strong_passwords_enforced(value: str) -> bool:
    return value != FLAG_OFF


def directory_enabled(value: str) -> bool:
    return value == FLAG_ON


def tokenized_registration(value: str) -> bool:
    return value == REGISTRATION_TYPE_TOKENIZED


def login_enabled(value: str) -> bool:
    return value != FLAG_OFF


def login_by_id(value: str) -> bool:
    return value == FLAG_ON
