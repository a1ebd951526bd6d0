"""
Cancellable delayed task for debounced input.

Each schedule() cancels the previously scheduled task, whether it is still
waiting out the delay or already running its callback, so a superseded
search can never write its result after a newer one.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional


logger = logging.getLogger("hostel_notify.debounce")


class Debouncer:
    """
    Runs an async callback after a quiet period.

    Attributes:
        delay: Quiet period in seconds
    """

    def __init__(self, delay: float):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self._delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a scheduled task has not finished."""
        return self._task is not None and not self._task.done()

    def schedule(self, callback: Callable[[], Awaitable[None]]) -> asyncio.Task:
        """
        Schedule callback after the delay, cancelling any earlier schedule.

        Must be called from a running event loop.

        Args:
            callback: Zero-argument coroutine function

        Returns:
            The scheduled task
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(callback))
        return self._task

    def cancel(self) -> bool:
        """
        Cancel the scheduled task if it has not finished.

        Returns:
            True if a task was cancelled
        """
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def wait(self) -> None:
        """Wait for the current task to finish (cancellation included)."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})

    async def _run(self, callback: Callable[[], Awaitable[None]]) -> None:
        try:
            await asyncio.sleep(self._delay)
            await callback()
        except asyncio.CancelledError:
            logger.debug("Debounced task cancelled")
            raise
