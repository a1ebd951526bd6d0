"""
Unit tests for the notifications API client.

Tests request paths and methods, status handling and error mapping.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx


def _response(status_code: int, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = b"{}" if body is not None else b""
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


class TestNotificationApiClient:
    """Base class providing client fixtures."""

    @pytest.fixture
    def api_client(self, mock_server_url, mock_api_token):
        from hostel_notify.api_client import NotificationApiClient

        return NotificationApiClient(server_url=mock_server_url, api_token=mock_api_token)


class TestClientInit(TestNotificationApiClient):
    """Tests for client construction."""

    def test_empty_server_url_rejected(self):
        from hostel_notify.api_client import NotificationApiClient

        with pytest.raises(ValueError):
            NotificationApiClient(server_url="")

    def test_trailing_slash_stripped(self):
        from hostel_notify.api_client import NotificationApiClient

        client = NotificationApiClient(server_url="http://localhost:8000/api/")

        assert client.server_url == "http://localhost:8000/api"

    def test_bearer_token_header(self, api_client, mock_api_token):
        assert api_client._client.headers["Authorization"] == f"Bearer {mock_api_token}"

    def test_no_token_no_authorization_header(self, mock_server_url):
        from hostel_notify.api_client import NotificationApiClient

        client = NotificationApiClient(server_url=mock_server_url)

        assert "Authorization" not in client._client.headers


class TestListNotifications(TestNotificationApiClient):
    """Tests for the list endpoint."""

    @pytest.mark.asyncio
    async def test_list_success(self, api_client, list_response):
        body = list_response(3, total=3)
        params = {"page": 1, "limit": 12, "sortBy": "createdAt", "sortOrder": "desc"}

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, body))

            result = await api_client.list_notifications(params)

        assert result == body
        mock_client.request.assert_called_once_with("GET", "/notifications", params=params)

    @pytest.mark.asyncio
    async def test_list_unauthorized(self, api_client):
        from hostel_notify.api_client import AuthenticationError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(
                return_value=_response(401, {"message": "Not authorized, token failed"})
            )

            with pytest.raises(AuthenticationError) as exc_info:
                await api_client.list_notifications({"page": 1})

        assert exc_info.value.status_code == 401
        assert "token failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_list_server_error_uses_message(self, api_client):
        from hostel_notify.api_client import ApiError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(
                return_value=_response(500, {"success": False, "message": "Server error"})
            )

            with pytest.raises(ApiError) as exc_info:
                await api_client.list_notifications({"page": 1})

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "Server error"

    @pytest.mark.asyncio
    async def test_list_server_error_without_body(self, api_client):
        from hostel_notify.api_client import ApiError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(502))

            with pytest.raises(ApiError, match="status 502"):
                await api_client.list_notifications({"page": 1})

    @pytest.mark.asyncio
    async def test_list_invalid_json(self, api_client):
        from hostel_notify.api_client import ApiError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200))

            with pytest.raises(ApiError, match="invalid JSON"):
                await api_client.list_notifications({"page": 1})

    @pytest.mark.asyncio
    async def test_list_non_object_payload(self, api_client):
        from hostel_notify.api_client import ApiError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, ["a", "b"]))

            with pytest.raises(ApiError, match="unexpected payload"):
                await api_client.list_notifications({"page": 1})


class TestTransportErrors(TestNotificationApiClient):
    """Tests for connection failures."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("Connection refused"),
            httpx.ReadTimeout("Timed out"),
            httpx.RemoteProtocolError("Server disconnected"),
        ],
    )
    async def test_transport_errors_become_connection_error(self, api_client, error):
        from hostel_notify.api_client import ConnectionError as ClientConnectionError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(side_effect=error)

            with pytest.raises(ClientConnectionError):
                await api_client.list_notifications({"page": 1})


class TestMutations(TestNotificationApiClient):
    """Tests for mark-read and delete endpoints."""

    @pytest.mark.asyncio
    async def test_mark_as_read(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, {"success": True}))

            result = await api_client.mark_as_read("ntf_0001")

        assert result == {"success": True}
        mock_client.request.assert_called_once_with("PATCH", "/notifications/ntf_0001/read")

    @pytest.mark.asyncio
    async def test_mark_as_read_not_found(self, api_client):
        from hostel_notify.api_client import NotFoundError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(404, {"message": "Notification not found"}))

            with pytest.raises(NotFoundError):
                await api_client.mark_as_read("missing")

    @pytest.mark.asyncio
    async def test_mark_all_as_read(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(204))

            result = await api_client.mark_all_as_read()

        assert result is None
        mock_client.request.assert_called_once_with("PATCH", "/notifications/read-all")

    @pytest.mark.asyncio
    async def test_delete_notification(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, {"success": True}))

            await api_client.delete_notification("ntf_0002")

        mock_client.request.assert_called_once_with("DELETE", "/notifications/ntf_0002")

    @pytest.mark.asyncio
    async def test_delete_all_notifications(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, {"deletedCount": 5}))

            result = await api_client.delete_all_notifications()

        assert result == {"deletedCount": 5}
        mock_client.request.assert_called_once_with("DELETE", "/notifications/delete-all")

    @pytest.mark.asyncio
    async def test_delete_forbidden(self, api_client):
        from hostel_notify.api_client import AuthenticationError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(403, {}))

            with pytest.raises(AuthenticationError) as exc_info:
                await api_client.delete_notification("ntf_0002")

        assert exc_info.value.status_code == 403


class TestUnreadCount(TestNotificationApiClient):
    """Tests for the unread counter endpoint."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"success": True, "unreadCount": 7},
            {"count": 7},
            {"success": True, "data": {"count": 7}},
        ],
    )
    async def test_unread_count_shapes(self, api_client, body):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, body))

            assert await api_client.get_unread_count() == 7

        mock_client.request.assert_called_once_with("GET", "/notifications/unread-count")

    @pytest.mark.asyncio
    async def test_unread_count_missing(self, api_client):
        from hostel_notify.api_client import ApiError

        with patch.object(api_client, "_client") as mock_client:
            mock_client.request = AsyncMock(return_value=_response(200, {"success": True}))

            with pytest.raises(ApiError, match="missing"):
                await api_client.get_unread_count()


class TestClose(TestNotificationApiClient):
    """Tests for client cleanup."""

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.aclose = AsyncMock()

            async with api_client:
                pass

        mock_client.aclose.assert_called_once()
