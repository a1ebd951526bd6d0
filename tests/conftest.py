"""
Pytest configuration and fixtures for Hostel Notify tests.

Provides temporary configuration files, wire-format notification
records, list responses and a mock API client.
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for client configuration files.

    Yields:
        Path to temporary configuration directory
    """
    with tempfile.TemporaryDirectory(prefix="hostel_notify_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def client_config() -> dict:
    """Sample client configuration."""
    return {
        "server_url": "http://localhost:8000/api",
        "api_token": "tok_test_1234567890abcdef",
        "items_per_page": 12,
        "search_debounce_ms": 500,
        "notice_timeout_seconds": 4.0,
        "request_timeout_seconds": 10.0,
        "log_level": "DEBUG",
    }


@pytest.fixture
def client_config_file(temp_config_dir: Path, client_config: dict) -> Path:
    """
    Create a temporary client configuration file.

    Returns:
        Path to the configuration file
    """
    config_path = temp_config_dir / "client-config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(client_config, f)
    return config_path


@pytest.fixture
def clean_environment(monkeypatch) -> None:
    """Remove Hostel Notify environment variables for test isolation."""
    for var in [
        "HOSTEL_NOTIFY_SERVER_URL",
        "HOSTEL_NOTIFY_API_TOKEN",
        "HOSTEL_NOTIFY_LOG_LEVEL",
        "HOSTEL_NOTIFY_CONFIG_PATH",
    ]:
        monkeypatch.delenv(var, raising=False)


# ============================================================================
# Server Fixtures
# ============================================================================


@pytest.fixture
def mock_server_url() -> str:
    return "http://localhost:8000/api"


@pytest.fixture
def mock_api_token() -> str:
    return "tok_test_1234567890abcdef"


# ============================================================================
# Notification Fixtures
# ============================================================================


def make_record(
    index: int,
    is_read: bool = False,
    priority: str = "medium",
    type: str = "room_allocated",
) -> dict:
    """Build a wire-format notification record."""
    return {
        "_id": f"ntf_{index:04d}",
        "title": f"Notification {index}",
        "message": f"Message body {index}",
        "type": type,
        "priority": priority,
        "isRead": is_read,
        "createdAt": f"2024-10-{(index % 28) + 1:02d}T09:00:00.000Z",
    }


@pytest.fixture
def record_factory() -> Callable[..., dict]:
    return make_record


@pytest.fixture
def list_response() -> Callable[..., dict]:
    """
    Build a list endpoint response.

    Args (of the returned builder):
        count: Number of records on the page
        page: Current page
        total: Total matching items (pagination omitted when None)
        per_page: Page size
        key: Key holding the list ("data" like the server, or "notifications")
    """

    def build(
        count: int,
        page: int = 1,
        total: Optional[int] = None,
        per_page: int = 12,
        key: str = "data",
        start: int = 0,
        is_read: bool = False,
    ) -> dict:
        records: List[dict] = [
            make_record(start + i, is_read=is_read) for i in range(count)
        ]
        body = {"success": True, key: records}
        if total is not None:
            pages = max(1, -(-total // per_page))
            body["pagination"] = {
                "currentPage": page,
                "totalPages": pages,
                "totalItems": total,
                "itemsPerPage": per_page,
                "hasNext": page < pages,
                "hasPrev": page > 1,
            }
        return body

    return build


# ============================================================================
# Mock API Client
# ============================================================================


@pytest.fixture
def mock_api_client() -> MagicMock:
    """Create a mock notifications API client."""
    client = MagicMock()
    client.list_notifications = AsyncMock(return_value={"data": []})
    client.mark_as_read = AsyncMock(return_value={"success": True})
    client.mark_all_as_read = AsyncMock(return_value={"success": True})
    client.delete_notification = AsyncMock(return_value={"success": True})
    client.delete_all_notifications = AsyncMock(return_value={"success": True})
    client.get_unread_count = AsyncMock(return_value=0)
    client.close = AsyncMock()
    return client
