"""HTTP client abstraction consumed by the Confluence API layer.

The API layer never performs ambient HTTP calls: it is handed an object that
satisfies the HttpClient protocol. Production code uses AtlassianHttpClient,
which drives the atlassian-python-api session; tests inject a mock.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import requests
from atlassian import Confluence

from .auth import Credentials

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class HttpClient(Protocol):
    """Minimal request capability required by ConfluenceAPI.

    Implementations must return non-success responses instead of raising,
    and may raise requests.exceptions.RequestException for transport failures.
    Paths are relative to the service base URL (e.g. "rest/api/space").
    """

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        ...


class AtlassianHttpClient:
    """HttpClient backed by atlassian-python-api's Confluence client.

    The underlying client runs in advanced mode so that responses are handed
    back untouched, leaving status classification to ConfluenceAPI. Basic
    auth is derived from the configured email and API token.

    Example:
        >>> creds = Authenticator().get_credentials()
        >>> http = AtlassianHttpClient.from_credentials(creds)
        >>> response = http.request("GET", "rest/api/space", params={"limit": 10})
    """

    def __init__(self, client: Confluence):
        self._client = client

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        timeout: int = DEFAULT_TIMEOUT
    ) -> "AtlassianHttpClient":
        """Build a client from loaded credentials.

        Args:
            credentials: Base URL, email and API token
            timeout: Per-request timeout in seconds, enforced by the session

        Returns:
            AtlassianHttpClient ready to issue requests
        """
        client = Confluence(
            url=credentials.url,
            username=credentials.user,
            password=credentials.api_token,
            cloud=True,
            timeout=timeout,
            advanced_mode=True,
        )
        return cls(client)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        logger.debug(f"{method} {path} params={params}")
        # The atlassian client serializes `data` as JSON unless files are sent
        body = json if json is not None else data
        return self._client.request(
            method=method,
            path=path,
            data=body,
            params=params,
            headers=headers,
            files=files,
            advanced_mode=True,
        )
