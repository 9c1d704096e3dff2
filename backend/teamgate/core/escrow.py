"""Password Escrow — substitute secret for directory-authenticated teams.

Invariants:
    - local_secret is freshly generated per registration, never derived from
      the directory password
    - original_password is held only for the automatic login that completes
      the registration; it is never hashed or stored

Design Decisions:
    - The local hash is built from local_secret, so a leaked teams table never
      exposes directory passwords
"""

from dataclasses import dataclass, field

from teamgate.core.random_tokens import generate_secret


@dataclass(frozen=True)
class Escrow:
    """Directory password paired with the locally stored substitute."""
    original_password: str = field(repr=False)
    local_secret: str = field(repr=False)

    @classmethod
    def issue(cls, original_password: str) -> "Escrow":
        return cls(original_password=original_password, local_secret=generate_secret())
