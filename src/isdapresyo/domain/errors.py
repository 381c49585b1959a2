"""Error taxonomy surfaced at the HTTP edge."""

from typing import Any


class ConfigurationError(RuntimeError):
    """Startup configuration is unusable (e.g. production without a database)."""


class ValidationFailed(Exception):
    """A payload broke one or more field rules. Carries every violation found."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


class AccessDenied(Exception):
    """Any authentication or authorization failure. The reason never reaches the client."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason or "Access denied")
        self.reason = reason


class RecordNotFound(Exception):
    """The addressed fish price record (by id or type) does not exist."""
