"""
Unit tests for the Debouncer.
"""

import asyncio

import pytest

from hostel_notify.debounce import Debouncer


class TestDebouncer:
    """Tests for scheduling and cancellation."""

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Debouncer(-0.1)

    @pytest.mark.asyncio
    async def test_runs_after_delay(self):
        calls = []

        async def callback():
            calls.append("run")

        debouncer = Debouncer(0.02)
        debouncer.schedule(callback)

        assert debouncer.pending is True
        assert calls == []

        await debouncer.wait()

        assert calls == ["run"]
        assert debouncer.pending is False

    @pytest.mark.asyncio
    async def test_reschedule_cancels_previous(self):
        calls = []

        def make(label):
            async def callback():
                calls.append(label)
            return callback

        debouncer = Debouncer(0.05)
        first = debouncer.schedule(make("a"))
        await asyncio.sleep(0.01)
        debouncer.schedule(make("ab"))
        await asyncio.sleep(0.01)
        debouncer.schedule(make("abc"))

        await debouncer.wait()

        assert calls == ["abc"]
        assert first.cancelled()

    @pytest.mark.asyncio
    async def test_reschedule_cancels_running_callback(self):
        started = asyncio.Event()
        finished = []

        async def slow():
            started.set()
            await asyncio.sleep(1)
            finished.append("slow")

        async def fast():
            finished.append("fast")

        debouncer = Debouncer(0)
        slow_task = debouncer.schedule(slow)
        await started.wait()
        debouncer.schedule(fast)
        await debouncer.wait()
        await asyncio.wait({slow_task})

        assert finished == ["fast"]
        assert slow_task.cancelled()

    @pytest.mark.asyncio
    async def test_cancel(self):
        calls = []

        async def callback():
            calls.append("run")

        debouncer = Debouncer(0.02)
        debouncer.schedule(callback)

        assert debouncer.cancel() is True
        await asyncio.sleep(0.05)

        assert calls == []
        assert debouncer.pending is False
        assert debouncer.cancel() is False

    @pytest.mark.asyncio
    async def test_wait_without_task(self):
        await Debouncer(0.01).wait()
