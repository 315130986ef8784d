"""Exception hierarchy for the fare engine and booking service."""

from typing import Any


class FareEngineError(Exception):
    """Base exception for all fare engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(FareEngineError):
    """Invalid input or data format."""

    pass


class NotFoundError(FareEngineError):
    """Requested entity does not exist."""

    pass


class FareMismatchError(FareEngineError):
    """Client-displayed total disagrees with the server recomputation."""

    pass


class ConfigurationError(FareEngineError):
    """Missing or invalid configuration."""

    pass
