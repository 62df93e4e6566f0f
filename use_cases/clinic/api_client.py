"""
HTTP Client for the Clinic Backend.

Issues authenticated JSON requests against the clinic REST API and maps
failures onto the gateway error taxonomy. Each call is one-shot: no retries,
and no timeout beyond the transport's own defaults.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import TypeAdapter

from auth import CredentialAccessor
from config import settings
from core.data import PayloadError, RemoteError, TransportError

logger = logging.getLogger(__name__)


class ClinicApiClient:
    """Client for the clinic REST backend."""

    def __init__(
        self,
        credentials: CredentialAccessor,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            credentials: Source of the bearer token, read on every request
            base_url: Backend base URL (defaults to settings.api_base_url)
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self._credentials = credentials
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            follow_redirects=True,
        )
        logger.info(f"Clinic API client initialized: {self.base_url}")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._credentials.get_token()
        # Without a token the request still goes out, just unauthenticated
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Send one request.

        Raises:
            TransportError: the request could not be sent or no response was received
            RemoteError: the response status is not 2xx
        """
        try:
            response = await self._client.request(method, path, json=json, headers=self._headers())
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        except UnicodeEncodeError as e:
            # Header values must be ASCII; a pasted token may not be
            raise TransportError(f"{method} {path} could not be encoded: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        if not response.is_success:
            raise RemoteError(response.status_code, response.text)
        return response

    @staticmethod
    def decode(response: httpx.Response, adapter: TypeAdapter) -> Any:
        """
        Decode a JSON response body with a pydantic TypeAdapter.

        Raises:
            PayloadError: the body is not JSON or does not match the type
        """
        try:
            return adapter.validate_json(response.content)
        except ValueError as e:
            raise PayloadError(response.status_code, response.text, str(e)) from e

    async def get(self, path: str, adapter: TypeAdapter) -> Any:
        response = await self.request("GET", path)
        return self.decode(response, adapter)

    async def post(self, path: str, payload: Dict[str, Any], adapter: TypeAdapter) -> Any:
        response = await self.request("POST", path, json=payload)
        return self.decode(response, adapter)

    async def put(self, path: str, payload: Dict[str, Any], adapter: TypeAdapter) -> Any:
        response = await self.request("PUT", path, json=payload)
        return self.decode(response, adapter)

    async def delete(self, path: str) -> None:
        await self.request("DELETE", path)

    async def close(self):
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "ClinicApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
