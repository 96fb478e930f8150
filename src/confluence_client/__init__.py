"""Confluence client library for the gateway.

This package wraps the Confluence Cloud REST content API behind typed
operations that return canonical entities and raise classified errors.
"""

from .api_wrapper import ConfluenceAPI, EditorMode
from .auth import Authenticator, Credentials
from .errors import (
    ConfigurationError,
    ConfluenceError,
    ErrorKind,
    GatewayError,
    InvalidCredentialsError,
    NetworkError,
    NormalizationError,
    ResourceNotFoundError,
    ServerError,
    UnknownError,
    ValidationError,
)
from .http_client import AtlassianHttpClient, HttpClient

__all__ = [
    "AtlassianHttpClient",
    "Authenticator",
    "ConfigurationError",
    "ConfluenceAPI",
    "ConfluenceError",
    "Credentials",
    "EditorMode",
    "ErrorKind",
    "GatewayError",
    "HttpClient",
    "InvalidCredentialsError",
    "NetworkError",
    "NormalizationError",
    "ResourceNotFoundError",
    "ServerError",
    "UnknownError",
    "ValidationError",
]
