"""Error Hierarchy — typed, categorized exceptions for all TeamGate failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TeamGateError base: FastAPI global handler catches all
    - Orchestrators catch domain errors and collapse them into ActionOutcome;
      only ConfigNotFoundError and DatabaseError reach the global handler
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    team_id: int | None = None
    action: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class TeamGateError(Exception):
    """Base exception for all TeamGate errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "team_id": self.context.team_id,
                    "action": self.context.action,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DirectoryUnavailableError(TeamGateError):
    """Directory service could not be reached."""
    def __init__(self, server: str, port: int, context: ErrorContext | None = None):
        super().__init__(
            f"Could not connect to directory server {server}:{port}",
            "DIRECTORY_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 503,
        )
        self.server = server
        self.port = port


class DirectoryCredentialsError(TeamGateError):
    """Directory service rejected the bind credentials."""
    def __init__(self, bind_dn: str, context: ErrorContext | None = None):
        super().__init__(
            f"Directory bind rejected for '{bind_dn}'",
            "DIRECTORY_CREDENTIALS_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.bind_dn = bind_dn


class TokenNotFoundError(TeamGateError):
    """Invitation token does not exist."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invitation token not found",
            "TOKEN_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class TokenAlreadyUsedError(TeamGateError):
    """Invitation token was consumed by another registration."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invitation token already used",
            "TOKEN_ALREADY_USED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class LogoCreationError(TeamGateError):
    """Custom logo payload could not be materialized."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Custom logo rejected: {reason}",
            "LOGO_CREATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.reason = reason


class DuplicateTeamNameError(TeamGateError):
    """A team with this name already exists."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Team name '{name}' already registered",
            "DUPLICATE_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigNotFoundError(TeamGateError):
    """Configuration key (or the row it references) is missing."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Configuration '{key}' not found",
            "CONFIG_NOT_FOUND", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.key = key


class LogoCatalogEmptyError(TeamGateError):
    """No default logo is available to assign."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No default logos available",
            "LOGO_CATALOG_EMPTY", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(TeamGateError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
