"""Random Tokens — high-entropy secrets encoded in base 62.

Invariants:
    - Every token is drawn from 16 bytes of OS randomness (secrets module)
    - Alphabet is 0-9, A-Z, a-z (digit order of base 62), no padding
    - Zero bytes encode as "0", never as an empty string

Design Decisions:
    - Big-integer base conversion over base64: output is alphanumeric only, so
      tokens survive URLs, cookies and the ^\\w+$ input filter unchanged
"""

import secrets

from teamgate.core.domain_types import RANDOM_TOKEN_BYTES

BASE62_ALPHABET = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
)


def encode_base62(data: bytes) -> str:
    """Interpret data as a big-endian integer and render it in base 62."""
    number = int.from_bytes(data, "big")
    if number == 0:
        return BASE62_ALPHABET[0]
    digits = []
    while number:
        number, rem = divmod(number, 62)
        digits.append(BASE62_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_secret(nbytes: int = RANDOM_TOKEN_BYTES) -> str:
    """Fresh random secret: escrow passwords and CSRF tokens."""
    return encode_base62(secrets.token_bytes(nbytes))
