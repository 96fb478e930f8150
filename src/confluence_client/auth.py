"""Authentication and settings loading for the Confluence gateway.

This module handles loading Confluence Cloud credentials from environment variables
using python-dotenv. It validates that all required credentials are present and
raises ConfigurationError if any are missing.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import ConfigurationError


class Credentials(NamedTuple):
    """Confluence API credentials and client settings."""
    url: str
    user: str
    api_token: str
    request_delay: float = 0.0


class Authenticator:
    """Loads and validates Confluence credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Required environment variables:
        CONFLUENCE_BASE_URL: Confluence instance URL (e.g., https://yourinstance.atlassian.net/wiki)
        CONFLUENCE_USER_EMAIL: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    Optional environment variables:
        CONFLUENCE_REQUEST_DELAY: Seconds to wait between tool invocations

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, api_token and request_delay

        Raises:
            ConfigurationError: If any required credential is missing or the
                request delay is not a non-negative number
        """
        url = os.getenv('CONFLUENCE_BASE_URL')
        user = os.getenv('CONFLUENCE_USER_EMAIL')
        api_token = os.getenv('CONFLUENCE_API_TOKEN')

        missing = []
        if not url:
            missing.append('CONFLUENCE_BASE_URL')
        if not user:
            missing.append('CONFLUENCE_USER_EMAIL')
        if not api_token:
            missing.append('CONFLUENCE_API_TOKEN')

        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        raw_delay = os.getenv('CONFLUENCE_REQUEST_DELAY') or '0'
        try:
            request_delay = float(raw_delay)
        except ValueError:
            raise ConfigurationError(
                f"CONFLUENCE_REQUEST_DELAY must be a number of seconds, got '{raw_delay}'"
            )
        if request_delay < 0:
            raise ConfigurationError("CONFLUENCE_REQUEST_DELAY cannot be negative")

        # Type checker: these are guaranteed to be str due to validation above
        return Credentials(
            url=url,  # type: ignore[arg-type]
            user=user,  # type: ignore[arg-type]
            api_token=api_token,  # type: ignore[arg-type]
            request_delay=request_delay,
        )
