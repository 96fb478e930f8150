"""Typed exception hierarchy for Confluence gateway errors.

This module defines all custom exceptions used by the Confluence client library.
Every failed service call is classified into one of a small set of error kinds
(see ErrorKind) so that callers can react to a category instead of parsing
messages. All service exceptions inherit from ConfluenceError.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Classification attached to every failed operation."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"
    UNKNOWN = "unknown"


class GatewayError(Exception):
    """Base exception for all confluence-gateway errors.

    Use this to catch any application-level error from the gateway.
    """
    pass


class ConfigurationError(GatewayError):
    """Raised when required settings are missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message)


class NormalizationError(GatewayError):
    """Raised when a raw payload cannot be folded into an entity."""

    def __init__(self, message: str):
        super().__init__(message)


class ConfluenceError(GatewayError):
    """Base exception for all failures reported by the Confluence service."""

    kind = ErrorKind.UNKNOWN
    status: Optional[int] = None


class ResourceNotFoundError(ConfluenceError):
    """Raised when a content resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_id: str):
        super().__init__(f"Content not found: {resource_id}")
        self.resource_id = resource_id
        self.status = 404


class ValidationError(ConfluenceError):
    """Raised when the service rejects a request (4xx)."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, status: int):
        super().__init__(f"Confluence API Error: {message} (Status: {status})")
        self.message = message
        self.status = status


class InvalidCredentialsError(ValidationError):
    """Raised when the service refuses the configured credentials (401/403)."""

    def __init__(self, message: str, status: int = 401):
        super().__init__(message, status)


class ServerError(ConfluenceError):
    """Raised when the service fails while handling a request (5xx)."""

    kind = ErrorKind.SERVER

    def __init__(self, message: str, status: int):
        super().__init__(f"Confluence API Error: {message} (Status: {status})")
        self.message = message
        self.status = status


class NetworkError(ConfluenceError):
    """Raised when the service cannot be reached at all.

    Covers DNS failures, refused connections and timeouts. There is no
    status code because no response was received.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, cause: Exception):
        super().__init__(f"Confluence API is unreachable: {cause}")
        self.cause = cause


class UnknownError(ConfluenceError):
    """Raised for a non-success response that fits no other category."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str = "Unknown error occurred", status: Optional[int] = None):
        if status is not None:
            super().__init__(f"{message} (Status: {status})")
        else:
            super().__init__(message)
        self.message = message
        self.status = status
