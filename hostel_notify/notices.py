"""
User-visible notices and confirmation prompts.

Notices are transient, non-blocking messages that expire on their own.
Confirmation is a blocking async yes/no question; front ends supply the
confirmer (the CLI asks with click.confirm).
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional


logger = logging.getLogger("hostel_notify.notices")

DEFAULT_NOTICE_TIMEOUT = 4.0  # seconds


# ============================================================================
# Notices
# ============================================================================


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notice:
    """
    A transient message shown to the user.

    Attributes:
        level: Notice level
        message: Text shown to the user
        created_at: Monotonic timestamp of posting
    """
    level: NoticeLevel
    message: str
    created_at: float = field(default_factory=time.monotonic)


NoticeListener = Callable[[Notice], None]


class NoticeBoard:
    """
    Collects notices and expires them after a timeout.

    A listener, when set, is called for every posted notice so a front end
    can render it immediately.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_NOTICE_TIMEOUT,
        listener: Optional[NoticeListener] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._timeout = timeout
        self._listener = listener
        self._clock = clock
        self._notices: List[Notice] = []

    def post(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message, created_at=self._clock())
        self._notices.append(notice)
        if self._listener is not None:
            self._listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.post(NoticeLevel.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.post(NoticeLevel.ERROR, message)

    def info(self, message: str) -> Notice:
        return self.post(NoticeLevel.INFO, message)

    def active(self) -> List[Notice]:
        """Return notices that have not expired, dropping the expired ones."""
        now = self._clock()
        self._notices = [
            n for n in self._notices if now - n.created_at < self._timeout
        ]
        return list(self._notices)

    def dismiss(self, notice: Notice) -> None:
        """Remove a notice before it expires."""
        self._notices = [n for n in self._notices if n is not notice]

    def clear(self) -> None:
        self._notices = []

    @property
    def last(self) -> Optional[Notice]:
        """Most recently posted notice, expired or not."""
        return self._notices[-1] if self._notices else None


# ============================================================================
# Confirmation
# ============================================================================


@dataclass(frozen=True)
class ConfirmOptions:
    """
    Content of a confirmation prompt.

    Attributes:
        title: Prompt title
        message: Question shown to the user
        confirm_text: Label of the accepting action
        cancel_text: Label of the declining action
        type: Visual style (danger, warning or info)
    """
    title: str
    message: str
    confirm_text: str = "Confirm"
    cancel_text: str = "Cancel"
    type: str = "warning"


Confirmer = Callable[[ConfirmOptions], Awaitable[bool]]


async def always_confirm(options: ConfirmOptions) -> bool:
    """Confirmer that accepts every prompt (non-interactive use)."""
    logger.debug(f"Auto-confirmed: {options.title}")
    return True


async def never_confirm(options: ConfirmOptions) -> bool:
    """Confirmer that declines every prompt."""
    logger.debug(f"Auto-declined: {options.title}")
    return False
