"""Domain-specific errors for protect-automate."""

from __future__ import annotations


class ProtectAutomateError(Exception):
    """Base error for protect-automate."""


class ConfigLoadError(ProtectAutomateError):
    """Raised when the configuration file cannot be read."""


class ConfigValidationError(ProtectAutomateError):
    """Raised when the configuration does not conform to schema or semantics."""


class DiscoveryError(ProtectAutomateError):
    """Raised when the host cannot provide the accessory, service or characteristic needed."""

    def __init__(self, message: str, *, candidates: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.candidates = candidates


class ConfigurationError(DiscoveryError):
    """Raised when a strategy is missing a required option."""


class AlarmNotFoundError(ProtectAutomateError):
    """Raised when resolution produced no candidate alarm accessory."""

    def __init__(self, message: str, *, candidates: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.candidates = candidates


class DisarmError(ProtectAutomateError):
    """Base error for disarm execution."""


class DisarmCommandError(DisarmError):
    """Raised when the alarm characteristic rejects the disarm value."""


class TargetConnectionError(DisarmError):
    """Raised when the HTTP control API refuses or drops the connection."""


class ProtocolError(DisarmError):
    """Raised when the HTTP control API answers with an unexpected payload."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class HttpStatusError(DisarmError):
    """Raised when the HTTP control API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str, *, url: str) -> None:
        super().__init__(f"POST {url} returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body
        self.url = url
