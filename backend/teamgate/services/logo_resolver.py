"""Logo Resolver — pick the logo a newly registered team will display.

Invariants:
    - Custom uploads: base64 payload, at most max_logo_bytes, PNG/JPEG/GIF by
      magic bytes; a declared type must agree with the sniffed one
    - Custom logo rows are flushed, not committed: they become durable only
      together with the team that references them
    - Non-custom values that name no enabled logo fall back to a uniformly
      random default (enabled, not protected, not custom)
    - An empty default catalogue is a deployment fault (LogoCatalogEmptyError)
"""

import base64
import binascii
import logging
import random

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.core.domain_types import LogoName, LogoType
from teamgate.core.errors import LogoCatalogEmptyError, LogoCreationError
from teamgate.core.random_tokens import generate_secret
from teamgate.models.logo import Logo

logger = logging.getLogger(__name__)

_MAGIC_BYTES: tuple[tuple[bytes, LogoType], ...] = (
    (b"\x89PNG\r\n\x1a\n", LogoType.PNG),
    (b"\xff\xd8\xff", LogoType.JPEG),
    (b"GIF87a", LogoType.GIF),
    (b"GIF89a", LogoType.GIF),
)

_DECLARED_TYPES = {
    "png": LogoType.PNG,
    "image/png": LogoType.PNG,
    "jpg": LogoType.JPEG,
    "jpeg": LogoType.JPEG,
    "image/jpeg": LogoType.JPEG,
    "gif": LogoType.GIF,
    "image/gif": LogoType.GIF,
}


def sniff_logo_type(payload: bytes) -> LogoType | None:
    for magic, logo_type in _MAGIC_BYTES:
        if payload.startswith(magic):
            return logo_type
    return None


def decode_custom_logo(
    logo_value: str, logo_type: str | None, max_bytes: int,
) -> tuple[bytes, LogoType]:
    """Decode and validate an uploaded logo. Raises LogoCreationError."""
    try:
        payload = base64.b64decode(logo_value, validate=True)
    except (binascii.Error, ValueError):
        raise LogoCreationError("payload is not valid base64")
    if not payload:
        raise LogoCreationError("payload is empty")
    if len(payload) > max_bytes:
        raise LogoCreationError(f"payload exceeds {max_bytes} bytes")
    sniffed = sniff_logo_type(payload)
    if sniffed is None:
        raise LogoCreationError("unsupported image format")
    if logo_type:
        declared = _DECLARED_TYPES.get(logo_type.strip().lower())
        if declared != sniffed:
            raise LogoCreationError(
                f"declared type '{logo_type}' does not match {sniffed.value}",
            )
    return payload, sniffed


class LogoResolver:
    """Resolves custom uploads, existing names and random defaults."""

    def __init__(self, db: AsyncSession, max_logo_bytes: int = 1_000_000):
        self.db = db
        self._max_bytes = max_logo_bytes

    async def resolve_for_registration(
        self, logo_value: str, is_custom: bool, logo_type: str | None,
    ) -> LogoName:
        if is_custom:
            return await self.create_custom(logo_value, logo_type)
        if await self.exists(logo_value):
            return LogoName(logo_value)
        return await self.random_default()

    async def create_custom(
        self, logo_value: str, logo_type: str | None,
    ) -> LogoName:
        payload, sniffed = decode_custom_logo(
            logo_value, logo_type, self._max_bytes,
        )
        name = f"custom-{generate_secret()}"
        self.db.add(Logo(
            name=name, logo_type=sniffed.value, payload=payload,
            enabled=True, protected=False, custom=True,
        ))
        await self.db.flush()
        logger.info(f"Custom logo staged: {name}")
        return LogoName(name)

    async def exists(self, name: str) -> bool:
        result = await self.db.execute(
            select(Logo.id).where(Logo.name == name, Logo.enabled.is_(True)),
        )
        return result.scalar_one_or_none() is not None

    async def random_default(self) -> LogoName:
        result = await self.db.execute(
            select(Logo.name).where(
                Logo.enabled.is_(True),
                Logo.protected.is_(False),
                Logo.custom.is_(False),
            ),
        )
        names = list(result.scalars().all())
        if not names:
            raise LogoCatalogEmptyError()
        return LogoName(random.choice(names))
