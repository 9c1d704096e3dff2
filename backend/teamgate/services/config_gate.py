"""Configuration Gate — per-request, read-once snapshot of runtime settings.

Invariants:
    - Each key is fetched from the store at most once per ConfigGate instance
    - Unknown keys raise ConfigNotFoundError (misconfiguration, fatal)
    - Never writes to the configuration tables

Design Decisions:
    - One ConfigGate per request: decisions inside a request never see a
      setting change half-way through, while the next request sees it
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teamgate.core.domain_types import ConfigKey, DirectoryServerConfig
from teamgate.core.errors import ConfigNotFoundError
from teamgate.models.configuration import ConfigurationSetting, PasswordType

logger = logging.getLogger(__name__)


class ConfigGate:
    """Read-only accessor for named settings, cached for one request."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._values: dict[str, str] = {}

    async def get(self, key: ConfigKey | str) -> str:
        """Return the string value of key, fetching it on first use."""
        field = key.value if isinstance(key, ConfigKey) else key
        if field in self._values:
            return self._values[field]
        result = await self.db.execute(
            select(ConfigurationSetting.value).where(
                ConfigurationSetting.field == field,
            ),
        )
        value = result.scalar_one_or_none()
        if value is None:
            logger.error(f"Configuration key missing: {field}")
            raise ConfigNotFoundError(field)
        self._values[field] = value
        return value

    async def current_password_pattern(self) -> str:
        """Regex of the password policy named by the password_type setting."""
        policy = await self.get(ConfigKey.PASSWORD_TYPE)
        cache_key = f"{ConfigKey.PASSWORD_TYPE.value}:{policy}"
        if cache_key in self._values:
            return self._values[cache_key]
        result = await self.db.execute(
            select(PasswordType.value).where(PasswordType.field == policy),
        )
        pattern = result.scalar_one_or_none()
        if pattern is None:
            logger.error(f"Password policy missing: {policy}")
            raise ConfigNotFoundError(cache_key)
        self._values[cache_key] = pattern
        return pattern

    async def directory_server(self) -> DirectoryServerConfig:
        """Host, port and bind suffix of the configured directory service."""
        return DirectoryServerConfig(
            server=await self.get(ConfigKey.LDAP_SERVER),
            port=int(await self.get(ConfigKey.LDAP_PORT)),
            domain_suffix=await self.get(ConfigKey.LDAP_DOMAIN_SUFFIX),
        )
