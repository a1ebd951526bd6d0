"""
Client wiring: logging setup and notification center sessions.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from hostel_notify.api_client import NotificationApiClient
from hostel_notify.center import NotificationCenter
from hostel_notify.config import ClientConfig
from hostel_notify.notices import Confirmer, NoticeBoard, NoticeListener, never_confirm


# ============================================================================
# Logging Setup
# ============================================================================


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup logging for the client.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("hostel_notify")


# ============================================================================
# Sessions
# ============================================================================


def create_api_client(config: ClientConfig) -> NotificationApiClient:
    """Build an API client from configuration."""
    return NotificationApiClient(
        server_url=config.server_url,
        api_token=config.api_token or None,
        timeout=config.request_timeout_seconds,
    )


@asynccontextmanager
async def open_center(
    config: ClientConfig,
    confirmer: Confirmer = never_confirm,
    listener: Optional[NoticeListener] = None,
) -> AsyncIterator[NotificationCenter]:
    """
    Open a notification center session.

    The API client is closed and the center torn down on exit.

    Args:
        config: Client configuration
        confirmer: Prompt for destructive actions
        listener: Callback receiving every posted notice
    """
    notices = NoticeBoard(timeout=config.notice_timeout_seconds, listener=listener)
    async with create_api_client(config) as api_client:
        center = NotificationCenter(
            api_client,
            notices=notices,
            confirmer=confirmer,
            items_per_page=config.items_per_page,
            search_debounce=config.search_debounce_seconds,
        )
        try:
            yield center
        finally:
            center.close()
