"""HTTP client for the CRUD API under test.

This module provides the async client the scenarios drive. Every call
returns an ApiResponse on 2xx and raises CrudClientError otherwise, so
negative scenarios can assert on the status code of the raised error.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

import httpx

from .shared.auth import auth_headers
from .shared.logging import get_logger

logger = get_logger(__name__)


class CrudClientError(Exception):
    """Error from the CRUD API client."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


@dataclass
class ApiResponse:
    """Successful API response."""

    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)


class CrudClient:
    """Async HTTP client for the CRUD API.

    Usage:
        async with CrudClient("http://localhost:8080") as client:
            response = await client.health()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        insecure: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Server URL (e.g., http://localhost:8080)
            timeout: Request timeout in seconds
            insecure: Skip SSL certificate verification
            transport: Optional httpx transport (in-process testing)

        Raises:
            ValueError: If base_url is not an absolute http(s) URL
        """
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid URL: {base_url!r}")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.insecure = insecure
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "CrudClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
            verify=not self.insecure,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure client is initialized."""
        if not self._client:
            raise CrudClientError("Client not initialized. Use 'async with' context.")
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """Make HTTP request to server.

        Args:
            method: HTTP method
            path: API path (e.g., /api/rooms)
            token: Bearer token, sent as Authorization header when set
            json: JSON body for POST/PUT

        Returns:
            ApiResponse with status, decoded body and headers

        Raises:
            CrudClientError: On connection errors, timeouts and non-2xx responses
        """
        client = self._ensure_client()
        try:
            response = await client.request(method, path, json=json, headers=auth_headers(token))
        except httpx.ConnectError:
            raise CrudClientError(f"Cannot connect to server at {self.base_url}")
        except httpx.TimeoutException:
            raise CrudClientError(f"Request timed out after {self.timeout}s")

        logger.debug(
            "api_request",
            method=method,
            path=path,
            authenticated=token is not None,
            status=response.status_code,
        )

        if response.is_error:
            raise CrudClientError(_error_message(response), status_code=response.status_code)

        data = response.json() if response.content else None
        return ApiResponse(
            status_code=response.status_code,
            data=data,
            headers=dict(response.headers),
        )

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    async def health(self) -> ApiResponse:
        """Check server health."""
        return await self._request("GET", "/healthz")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def create_guest_user(self) -> ApiResponse:
        """Create an anonymous guest user.

        The bearer token for the new user comes back in the
        Authorization response header, not in the body.
        """
        return await self._request("POST", "/api/auth/guest")

    async def get_current_user(self, token: str | None = None) -> ApiResponse:
        """Get the user identified by the bearer token."""
        return await self._request("GET", "/api/me", token=token)

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------

    async def list_rooms(self, token: str | None = None) -> ApiResponse:
        """List all rooms. No authentication required."""
        return await self._request("GET", "/api/rooms", token=token)

    async def list_my_rooms(self, token: str | None = None) -> ApiResponse:
        """List rooms owned by the authenticated user."""
        return await self._request("GET", "/api/rooms/my", token=token)

    async def create_room(
        self,
        name: str,
        description: str | None = None,
        token: str | None = None,
    ) -> ApiResponse:
        """Create a room.

        Args:
            name: Room name
            description: Optional room description
            token: Bearer token of the owner

        Returns:
            ApiResponse with the created room (201)
        """
        return await self._request("POST", "/api/rooms", token=token, json=_room_body(name, description))

    async def get_room(self, room_id: int, token: str | None = None) -> ApiResponse:
        """Get a room by ID. No authentication required."""
        return await self._request("GET", f"/api/rooms/{room_id}", token=token)

    async def update_room(
        self,
        room_id: int,
        name: str,
        description: str | None = None,
        token: str | None = None,
    ) -> ApiResponse:
        """Update a room. Only the owner may update it."""
        return await self._request(
            "PUT", f"/api/rooms/{room_id}", token=token, json=_room_body(name, description)
        )

    async def delete_room(self, room_id: int, token: str | None = None) -> ApiResponse:
        """Delete a room. Only the owner may delete it; returns 204."""
        return await self._request("DELETE", f"/api/rooms/{room_id}", token=token)


def _room_body(name: str, description: str | None) -> dict[str, Any]:
    body: dict[str, Any] = {"name": name}
    if description is not None:
        body["description"] = description
    return body


def _error_message(response: httpx.Response) -> str:
    """Extract an error message from an error response."""
    try:
        error_data = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(error_data, dict):
        message = error_data.get("error") or error_data.get("detail")
        if message:
            return str(message)
    return response.reason_phrase or f"HTTP {response.status_code}"
