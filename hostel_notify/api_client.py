"""
Notifications API client for server communication.

Provides an async HTTP client for the hostel notifications endpoints:
listing, mark-as-read, mark-all-read, delete, delete-all and the unread
counter. Handles authentication headers and maps transport and HTTP
failures onto a small exception hierarchy.
"""

import logging
from typing import Any, Optional

import httpx

from hostel_notify import __version__

logger = logging.getLogger("hostel_notify.api")


# ============================================================================
# Constants
# ============================================================================

NOTIFICATIONS_PATH = "/notifications"
DEFAULT_TIMEOUT = 30.0  # seconds
USER_AGENT = f"HostelNotify-Client/{__version__}"

SUCCESS_STATUSES = (200, 201, 204)


# ============================================================================
# Exceptions
# ============================================================================


class ApiError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConnectionError(ApiError):
    """Raised when connection to server fails."""

    pass


class AuthenticationError(ApiError):
    """Raised when the bearer token is missing, invalid or not allowed."""

    pass


class NotFoundError(ApiError):
    """Raised when the requested notification does not exist."""

    pass


# ============================================================================
# NotificationApiClient Class
# ============================================================================


class NotificationApiClient:
    """
    HTTP client for the hostel notifications API.

    Attributes:
        server_url: Base URL of the API, including any path prefix
        api_token: Optional bearer token for authenticated requests
    """

    def __init__(
        self,
        server_url: str,
        api_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            server_url: Base URL of the hostel API (e.g. http://localhost:8000/api)
            api_token: Optional bearer token for authenticated requests
            timeout: Request timeout in seconds

        Raises:
            ValueError: If server_url is empty
        """
        if not server_url:
            raise ValueError("server_url is required")

        self._server_url = server_url.rstrip("/")
        self._api_token = api_token
        self._timeout = timeout

        headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"

        self._client = httpx.AsyncClient(
            base_url=self._server_url,
            headers=headers,
            timeout=timeout,
        )

    @property
    def server_url(self) -> str:
        """Get the server URL."""
        return self._server_url

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    async def list_notifications(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Fetch one page of notifications.

        Args:
            params: Query parameters (page, limit, sortBy, sortOrder and the
                optional search / isRead predicates)

        Returns:
            Raw response body. The list may sit under "notifications" or
            "data"; pagination may be missing.

        Raises:
            AuthenticationError: If the token is rejected
            ConnectionError: If connection to server fails
            ApiError: If the server answers with an error status
        """
        response = await self._send("GET", NOTIFICATIONS_PATH, params=params)
        self._raise_for_status(response, "List notifications")

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                f"List notifications returned invalid JSON: {e}",
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            raise ApiError(
                "List notifications returned an unexpected payload",
                status_code=response.status_code,
            )
        return body

    async def get_unread_count(self) -> int:
        """
        Get the number of unread notifications across all pages.

        Returns:
            Unread notification count

        Raises:
            ApiError: If the request fails or the count is missing
        """
        response = await self._send("GET", f"{NOTIFICATIONS_PATH}/unread-count")
        self._raise_for_status(response, "Get unread count")

        body = self._json_or_none(response) or {}
        count = body.get("unreadCount", body.get("count"))
        if count is None and isinstance(body.get("data"), dict):
            count = body["data"].get("unreadCount", body["data"].get("count"))
        if count is None:
            raise ApiError(
                "Unread count missing from response",
                status_code=response.status_code,
            )
        return int(count)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def mark_as_read(self, notification_id: str) -> Optional[dict[str, Any]]:
        """
        Mark a single notification as read.

        Args:
            notification_id: Notification identifier

        Returns:
            Response body if the server sent one

        Raises:
            NotFoundError: If the notification does not exist
            ApiError: If the request fails
        """
        response = await self._send(
            "PATCH", f"{NOTIFICATIONS_PATH}/{notification_id}/read"
        )
        self._raise_for_status(response, "Mark as read")
        return self._json_or_none(response)

    async def mark_all_as_read(self) -> Optional[dict[str, Any]]:
        """
        Mark every notification of the current user as read.

        Raises:
            ApiError: If the request fails
        """
        response = await self._send("PATCH", f"{NOTIFICATIONS_PATH}/read-all")
        self._raise_for_status(response, "Mark all as read")
        return self._json_or_none(response)

    async def delete_notification(self, notification_id: str) -> Optional[dict[str, Any]]:
        """
        Delete a single notification.

        Args:
            notification_id: Notification identifier

        Raises:
            NotFoundError: If the notification does not exist
            ApiError: If the request fails
        """
        response = await self._send(
            "DELETE", f"{NOTIFICATIONS_PATH}/{notification_id}"
        )
        self._raise_for_status(response, "Delete notification")
        return self._json_or_none(response)

    async def delete_all_notifications(self) -> Optional[dict[str, Any]]:
        """
        Delete every notification of the current user.

        Raises:
            ApiError: If the request fails
        """
        response = await self._send("DELETE", f"{NOTIFICATIONS_PATH}/delete-all")
        self._raise_for_status(response, "Delete all notifications")
        return self._json_or_none(response)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Issue a request, translating transport failures into ConnectionError."""
        logger.debug(f"{method} {path} {kwargs.get('params') or ''}".rstrip())
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.ConnectError as e:
            raise ConnectionError(f"Failed to connect to server: {e}")
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Connection timed out: {e}")
        except httpx.HTTPError as e:
            raise ConnectionError(f"Request failed: {e}")

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        """
        Raise the matching ApiError subclass for a non-success response.

        Args:
            response: HTTP response
            action: Human-readable operation name for the error message
        """
        status = response.status_code
        if status in SUCCESS_STATUSES:
            return

        detail = ""
        try:
            body = response.json()
            if isinstance(body, dict):
                detail = body.get("message") or body.get("detail") or ""
        except ValueError:
            detail = ""

        if status == 401:
            raise AuthenticationError(detail or "Not authorized", status_code=401)
        elif status == 403:
            raise AuthenticationError(detail or "Access denied", status_code=403)
        elif status == 404:
            raise NotFoundError(detail or "Notification not found", status_code=404)
        else:
            raise ApiError(
                detail or f"{action} failed with status {status}",
                status_code=status,
            )

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Optional[dict[str, Any]]:
        """Decode a JSON object body, tolerating empty or non-JSON bodies."""
        if response.status_code == 204 or not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "NotificationApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
