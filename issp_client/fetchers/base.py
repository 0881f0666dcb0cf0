"""
Base fetcher utilities for async HTTP operations.

Provides URL building, auth headers and the retrying JSON request every
endpoint fetcher goes through.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from issp_client.auth import CredentialProvider, StaticCredentialProvider
from issp_client.config import ClientSettings, DEFAULT_SETTINGS
from issp_client.config.endpoints import build_url
from issp_client.errors import ApiError, AuthenticationError, NetworkError
from issp_client.utils.logging import get_logger

logger = get_logger()


def create_session(settings: ClientSettings = DEFAULT_SETTINGS) -> aiohttp.ClientSession:
    """Create a client session with connection limits and a total timeout."""
    return aiohttp.ClientSession(
        connector=aiohttp.TCPConnector(limit=settings.max_concurrent),
        timeout=aiohttp.ClientTimeout(total=settings.request_timeout),
    )


class BaseFetcher:
    """Base class for async REST fetchers."""

    def __init__(
        self,
        settings: ClientSettings = DEFAULT_SETTINGS,
        credentials: Optional[CredentialProvider] = None,
    ):
        """
        Initialize fetcher.

        Args:
            settings: Client settings (API base, retries, timeouts)
            credentials: Supplies the session token; anonymous when None
        """
        self.settings = settings
        self.credentials = credentials or StaticCredentialProvider()
        self.timeout = aiohttp.ClientTimeout(total=settings.request_timeout)

    def build_url(self, path: str) -> str:
        """Build API URL for an endpoint path."""
        return build_url(self.settings.api_base, path)

    def get_headers(self, require_auth: bool = True) -> Dict[str, str]:
        """
        Get default HTTP headers, including the auth token when available.

        Raises:
            AuthenticationError: If auth is required and no token is available
        """
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        token = self.credentials.get_token()
        if token:
            headers[self.settings.auth_header] = token
        elif require_auth:
            raise AuthenticationError(message="No session token; run 'issp login' first")
        return headers

    async def request_json(
        self,
        session: aiohttp.ClientSession,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        require_auth: bool = True,
        retry: int = 0,
    ) -> Any:
        """
        Send a request and decode the JSON response, with exponential backoff retry.

        Only timeouts and connection failures are retried; HTTP error
        statuses are raised immediately.

        Args:
            session: aiohttp session
            method: HTTP method
            path: Endpoint path
            payload: JSON body
            require_auth: Whether a session token must be sent
            retry: Current retry count

        Returns:
            Decoded JSON body (None for an empty body)

        Raises:
            AuthenticationError: On 401/403
            ApiError: On any other non-2xx status
            NetworkError: When retries are exhausted
        """
        url = self.build_url(path)
        headers = self.get_headers(require_auth)

        try:
            async with session.request(
                method,
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            ) as resp:
                data = await self._read_body(resp)
                if resp.status >= 400:
                    self._raise_for_status(resp.status, data, url)
                logger.debug(f"{method} {url} -> {resp.status}")
                return data

        except (asyncio.TimeoutError, aiohttp.ClientConnectionError) as e:
            if retry < self.settings.max_retries:
                delay = self.settings.retry_delay * (2 ** retry)
                logger.debug(f"{method} {url} failed ({e!r}), retrying in {delay}s")
                await asyncio.sleep(delay)
                return await self.request_json(session, method, path, payload, require_auth, retry + 1)
            raise NetworkError(f"{method} {url} failed after {retry + 1} attempts: {e!r}") from e

    @staticmethod
    async def _read_body(resp) -> Any:
        text = await resp.text()
        if not text:
            return None
        try:
            return await resp.json(content_type=None)
        except ValueError:
            return {"message": text.strip()}

    @staticmethod
    def _raise_for_status(status: int, data: Any, url: str) -> None:
        message = ""
        if isinstance(data, dict):
            message = str(data.get("message") or data.get("msg") or "")
        if status in (401, 403):
            raise AuthenticationError(status, message or "Not authorized", url)
        raise ApiError(status, message, url)
