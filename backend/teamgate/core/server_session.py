"""Server Session — per-connection state handed explicitly to the issuer.

Invariants:
    - A session is "active" once a team_id has been written into it
    - cookie is the only identifier exposed to the client
    - data is a flat str -> str mapping (JSON column)
"""

from dataclasses import dataclass, field

from teamgate.core.domain_types import SessionKey


@dataclass
class ServerSession:
    """Server-side session bound to one client cookie."""
    cookie: str
    data: dict[str, str] = field(default_factory=dict)
    is_new: bool = False

    @property
    def active(self) -> bool:
        return SessionKey.TEAM_ID.value in self.data

    def get(self, key: SessionKey) -> str | None:
        return self.data.get(key.value)

    def set(self, key: SessionKey, value: str) -> None:
        self.data[key.value] = value
