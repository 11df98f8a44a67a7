"""Error taxonomy for evidence discovery."""

from enum import StrEnum
from typing import Any


class ErrorType(StrEnum):
    """Error classification types."""

    CLIENT_INPUT = "client_input"
    CONFIGURATION = "configuration"
    PROVIDER = "provider"


class EvidenceError(Exception):
    """Base exception for evidence discovery errors."""

    error_type: ErrorType = ErrorType.PROVIDER

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a response body."""
        return {"error": str(self)}


class ClientInputError(EvidenceError):
    """Missing or empty user input. Raised before any external call."""

    error_type = ErrorType.CLIENT_INPUT


class ConfigurationError(EvidenceError):
    """A required provider credential is absent."""

    error_type = ErrorType.CONFIGURATION


class ProviderError(EvidenceError):
    """A provider, scraper or oracle call failed."""

    error_type = ErrorType.PROVIDER


def require_key(value: str | None, name: str, service: str) -> str:
    """Return a credential or raise ConfigurationError naming the env var."""
    if not value:
        raise ConfigurationError(
            f"{service} key not configured. Pass it explicitly or set {name} env var.",
            details={"env_var": name},
        )
    return value
