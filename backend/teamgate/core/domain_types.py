"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TeamId wraps the integer primary key — never use bare int in domain logic
    - Configuration keys are enumerated — no raw string lookups in orchestrators
    - Flag values are strings; the "enabled" meaning of each flag lives here

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TeamId = NewType("TeamId", int)
LogoName = NewType("LogoName", str)


# ─── Limits ──────────────────────────────────────────────────────

TEAM_NAME_MAX_LENGTH = 20
RANDOM_TOKEN_BYTES = 16


# ─── Configuration ───────────────────────────────────────────────

class ConfigKey(str, Enum):
    """Configuration keys consumed by registration and login."""
    REGISTRATION = "registration"
    REGISTRATION_TYPE = "registration_type"
    LOGIN = "login"
    LOGIN_SELECT = "login_select"
    LOGIN_STRONGPASSWORDS = "login_strongpasswords"
    PASSWORD_TYPE = "password_type"
    LDAP = "ldap"
    LDAP_SERVER = "ldap_server"
    LDAP_PORT = "ldap_port"
    LDAP_DOMAIN_SUFFIX = "ldap_domain_suffix"


FLAG_OFF = "0"
FLAG_ON = "1"
REGISTRATION_TYPE_OPEN = "1"
REGISTRATION_TYPE_TOKENIZED = "2"


# ─── Outcomes ────────────────────────────────────────────────────

class OutcomeTag(str, Enum):
    """Category tag attached to every failed action."""
    REGISTRATION = "registration"
    LOGIN = "login"
    INDEX = "index"


class Destination(str, Enum):
    """Redirect hint returned on successful login."""
    ADMIN = "admin"
    GAME = "game"


class LoginState(str, Enum):
    """States of the login machine."""
    START = "start"
    VERIFIED = "verified"
    GATE_REJECTED = "gate_rejected"
    SESSION_ISSUED = "session_issued"
    FAILED = "failed"


class Action(str, Enum):
    """Actions accepted by the index endpoint."""
    REGISTER_TEAM = "register_team"
    REGISTER_NAMES = "register_names"
    LOGIN_TEAM = "login_team"


# ─── Logos ───────────────────────────────────────────────────────

class LogoType(str, Enum):
    """Image formats accepted for custom logos."""
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"


# ─── Session keys ────────────────────────────────────────────────

class SessionKey(str, Enum):
    """Fields written into a server-side session on login."""
    TEAM_ID = "team_id"
    NAME = "name"
    CSRF_TOKEN = "csrf_token"
    CLIENT_IP = "client_ip"
    ADMIN = "admin"


# ─── Directory service ───────────────────────────────────────────

@dataclass(frozen=True)
class DirectoryServerConfig:
    """Connection settings for the external directory (LDAP) service."""
    server: str
    port: int
    domain_suffix: str

    def bind_dn(self, username: str) -> str:
        return f"{username.strip()}{self.domain_suffix}"
