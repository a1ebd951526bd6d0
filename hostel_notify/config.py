"""
Client configuration module.

Manages the API server URL, the bearer token, list paging and timing
settings. Configuration can be loaded from a YAML file and overridden
by environment variables.
"""

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from platformdirs import user_config_dir


# ============================================================================
# Constants
# ============================================================================

APP_NAME = "hostel-notify"
APP_AUTHOR = "HostelHub"
CONFIG_FILENAME = "client-config.yaml"

# Environment variable names
ENV_SERVER_URL = "HOSTEL_NOTIFY_SERVER_URL"
ENV_API_TOKEN = "HOSTEL_NOTIFY_API_TOKEN"
ENV_LOG_LEVEL = "HOSTEL_NOTIFY_LOG_LEVEL"
ENV_CONFIG_PATH = "HOSTEL_NOTIFY_CONFIG_PATH"

# Default values
DEFAULT_SERVER_URL = "http://localhost:8000/api"
DEFAULT_ITEMS_PER_PAGE = 12
DEFAULT_SEARCH_DEBOUNCE_MS = 500
DEFAULT_NOTICE_TIMEOUT = 4.0  # seconds
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = "INFO"

# URL validation regex
URL_PATTERN = re.compile(
    r"^https?://"  # http:// or https://
    r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|"  # domain
    r"localhost|"  # localhost
    r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"  # ...or ip
    r"(?::\d+)?"  # optional port
    r"(?:/?|[/?]\S+)$",
    re.IGNORECASE,
)


# ============================================================================
# Exceptions
# ============================================================================


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    pass


# ============================================================================
# Helper Functions
# ============================================================================


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory for the current platform.

    Returns:
        Path to the platform-appropriate config directory
    """
    return Path(user_config_dir(APP_NAME, APP_AUTHOR))


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_default_config_dir() / CONFIG_FILENAME


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ============================================================================
# ClientConfig Class
# ============================================================================


class ClientConfig:
    """
    Notification client configuration manager.

    Configuration sources (in priority order):
    1. Environment variables
    2. Configuration file
    3. Default values

    Attributes:
        server_url: Base URL of the hostel API (including the /api prefix)
        api_token: Bearer token forwarded with every request
        items_per_page: Page size requested from the list endpoint
        search_debounce_ms: Quiet period before a search is sent
        notice_timeout_seconds: Lifetime of a user-visible notice
        request_timeout_seconds: HTTP request timeout
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config_dir: Optional[Path] = None,
    ):
        """
        Initialize client configuration.

        Args:
            config_path: Explicit path to config file (takes precedence)
            config_dir: Directory containing config file
        """
        if config_path:
            self._config_path = Path(config_path)
            self._config_dir = self._config_path.parent
        elif config_dir:
            self._config_dir = Path(config_dir)
            self._config_path = self._config_dir / CONFIG_FILENAME
        else:
            env_path = os.environ.get(ENV_CONFIG_PATH)
            if env_path:
                self._config_path = Path(env_path)
                self._config_dir = self._config_path.parent
            else:
                self._config_dir = get_default_config_dir()
                self._config_path = self._config_dir / CONFIG_FILENAME

        self._server_url: str = DEFAULT_SERVER_URL
        self._api_token: str = ""
        self._items_per_page: int = DEFAULT_ITEMS_PER_PAGE
        self._search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS
        self._notice_timeout_seconds: float = DEFAULT_NOTICE_TIMEOUT
        self._request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT
        self._log_level: str = DEFAULT_LOG_LEVEL

        self._load()

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self._config_path

    # -------------------------------------------------------------------------
    # Configuration Properties
    # -------------------------------------------------------------------------

    @property
    def server_url(self) -> str:
        """Get the server URL."""
        return os.environ.get(ENV_SERVER_URL, self._server_url)

    @server_url.setter
    def server_url(self, value: str) -> None:
        self._server_url = value

    @property
    def api_token(self) -> str:
        """Get the API bearer token."""
        return os.environ.get(ENV_API_TOKEN, self._api_token)

    @api_token.setter
    def api_token(self, value: str) -> None:
        self._api_token = value

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int) -> None:
        self._items_per_page = value

    @property
    def search_debounce_ms(self) -> int:
        return self._search_debounce_ms

    @search_debounce_ms.setter
    def search_debounce_ms(self, value: int) -> None:
        self._search_debounce_ms = value

    @property
    def search_debounce_seconds(self) -> float:
        """Debounce window converted to seconds for asyncio."""
        return self._search_debounce_ms / 1000.0

    @property
    def notice_timeout_seconds(self) -> float:
        return self._notice_timeout_seconds

    @notice_timeout_seconds.setter
    def notice_timeout_seconds(self, value: float) -> None:
        self._notice_timeout_seconds = value

    @property
    def request_timeout_seconds(self) -> float:
        return self._request_timeout_seconds

    @request_timeout_seconds.setter
    def request_timeout_seconds(self, value: float) -> None:
        self._request_timeout_seconds = value

    @property
    def log_level(self) -> str:
        """Get the log level."""
        return os.environ.get(ENV_LOG_LEVEL, self._log_level)

    @log_level.setter
    def log_level(self, value: str) -> None:
        self._log_level = value

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_configured(self) -> bool:
        """Check if the client has a server URL."""
        return bool(self.server_url)

    @property
    def has_token(self) -> bool:
        """Check if a bearer token is available."""
        return bool(self.api_token)

    # -------------------------------------------------------------------------
    # Configuration Management
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        """Load configuration from file."""
        if not self._config_path.exists():
            return

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}")

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping, got {type(data).__name__}"
            )

        self._server_url = data.get("server_url", DEFAULT_SERVER_URL)
        self._api_token = data.get("api_token", "")
        self._items_per_page = data.get("items_per_page", DEFAULT_ITEMS_PER_PAGE)
        self._search_debounce_ms = data.get(
            "search_debounce_ms", DEFAULT_SEARCH_DEBOUNCE_MS
        )
        self._notice_timeout_seconds = data.get(
            "notice_timeout_seconds", DEFAULT_NOTICE_TIMEOUT
        )
        self._request_timeout_seconds = data.get(
            "request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT
        )
        self._log_level = data.get("log_level", DEFAULT_LOG_LEVEL)

    def save(self) -> None:
        """Save configuration to file."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = {
            "server_url": self._server_url,
            "api_token": self._api_token,
            "items_per_page": self._items_per_page,
            "search_debounce_ms": self._search_debounce_ms,
            "notice_timeout_seconds": self._notice_timeout_seconds,
            "request_timeout_seconds": self._request_timeout_seconds,
            "log_level": self._log_level,
        }

        with open(self._config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def validate(self) -> None:
        """
        Validate the current configuration.

        Raises:
            ConfigValidationError: If configuration is invalid
        """
        if self.server_url and not URL_PATTERN.match(self.server_url):
            raise ConfigValidationError(
                f"Invalid server_url format: {self.server_url}"
            )

        if not isinstance(self.items_per_page, int) or self.items_per_page <= 0:
            raise ConfigValidationError(
                f"items_per_page must be a positive integer, got: {self.items_per_page}"
            )

        if not _is_number(self.search_debounce_ms) or self.search_debounce_ms < 0:
            raise ConfigValidationError(
                f"search_debounce_ms must be a non-negative number, got: {self.search_debounce_ms}"
            )

        if not _is_number(self.notice_timeout_seconds) or self.notice_timeout_seconds <= 0:
            raise ConfigValidationError(
                f"notice_timeout_seconds must be a positive number, got: {self.notice_timeout_seconds}"
            )

        if not _is_number(self.request_timeout_seconds) or self.request_timeout_seconds <= 0:
            raise ConfigValidationError(
                f"request_timeout_seconds must be a positive number, got: {self.request_timeout_seconds}"
            )
