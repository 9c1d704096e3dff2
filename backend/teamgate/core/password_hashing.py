"""Password Hashing — bcrypt over a SHA-256 pre-hash.

Invariants:
    - The raw password is never stored; only the bcrypt hash string is
    - Pre-hash keeps every input under bcrypt's 72-byte limit, so long
      passwords are compared in full instead of being truncated
    - verify_password never raises on a malformed stored hash; it returns False
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("ascii"))
    except ValueError:
        return False
