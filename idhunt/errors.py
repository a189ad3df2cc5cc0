"""Module errors: structured error taxonomy for idhunt."""
#
# PURPOSE:
# Gives every failure the hunter can report a stable code, a human-readable
# message and an optional details dictionary.
#
# ERROR CODE FORMAT:
# - CONFIG_XXX: Startup configuration errors (fatal)
# - TRANSPORT_XXX: Single-request network failures (recoverable)
# - SESSION_XXX: Credential lifecycle errors
#
# USAGE:
#   from idhunt.errors import ConfigurationError, ErrorCode
#
#   raise ConfigurationError(
#       ErrorCode.CONFIG_MISSING_REQUIRED,
#       "Must define URL_PATH environment variable!",
#       details={"variable": "URL_PATH"},
#   )
#
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

import httpx


class ErrorCode(Enum):
    # Config Errors
    CONFIG_MISSING_REQUIRED = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"

    # Transport Errors
    TRANSPORT_FAILED = "TRANSPORT_001"
    TRANSPORT_TIMEOUT = "TRANSPORT_002"

    # Session Errors
    SESSION_INPUT_CLOSED = "SESSION_001"


class IdHuntError(Exception):
    """
    Base exception class for idhunt with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "CONFIG_001")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a plain dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(IdHuntError):
    """Raised when required startup configuration is missing or malformed."""


class TransportError(IdHuntError):
    """Raised when a single request fails below the HTTP layer."""

    def __init__(self, code: ErrorCode, message: str, url: str, details: Optional[Dict[str, Any]] = None):
        merged = {"url": url}
        merged.update(details or {})
        super().__init__(code, message, merged)
        self.url = url


class SessionInputError(IdHuntError):
    """Raised when the operator input stream closes during a credential reprompt."""


def wrap_transport_error(error: Exception, url: str) -> TransportError:
    """
    Convert an httpx exception into a TransportError.

    Timeouts get their own code; every other failure (DNS, refused
    connection, TLS, malformed URL) is reported as TRANSPORT_FAILED.
    """
    if isinstance(error, TransportError):
        return error

    if isinstance(error, httpx.TimeoutException):
        code = ErrorCode.TRANSPORT_TIMEOUT
    else:
        code = ErrorCode.TRANSPORT_FAILED

    wrapped = TransportError(
        code,
        str(error) or type(error).__name__,
        url=url,
        details={"original_type": type(error).__name__},
    )
    wrapped.__cause__ = error
    return wrapped


__all__ = [
    "ErrorCode",
    "IdHuntError",
    "ConfigurationError",
    "TransportError",
    "SessionInputError",
    "wrap_transport_error",
]
