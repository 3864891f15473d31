"""Unit tests for debounced auto-save."""

import asyncio

import pytest

from pathwise.modules.onboarding.autosave import AutoSaveChannel, DebouncedTask
from pathwise.modules.onboarding.schemas import Step3Data

DELAY = 0.02


class Recorder:
    """Save callable that records every call in order."""

    def __init__(self, slow_first: float = 0.0, fail: bool = False):
        self.events = []
        self.saved = []
        self._slow_first = slow_first
        self._fail = fail

    async def __call__(self, step, payload):
        self.events.append(("start", payload.weekly_hours))
        if self._slow_first and len(self.saved) == 0:
            await asyncio.sleep(self._slow_first)
        if self._fail:
            raise RuntimeError("backend down")
        self.saved.append((step, payload))
        self.events.append(("end", payload.weekly_hours))


class TestDebouncedTask:
    """Test the single-slot debounce timer."""

    @pytest.mark.asyncio
    async def test_fires_once_with_latest_payload(self):
        fired = []
        task = DebouncedTask(DELAY, fired.append)

        task.arm(1)
        task.arm(2)
        task.arm(3)
        assert task.pending is True

        await asyncio.sleep(DELAY * 4)

        assert fired == [3]
        assert task.pending is False

    @pytest.mark.asyncio
    async def test_cancel_drops_payload(self):
        fired = []
        task = DebouncedTask(DELAY, fired.append)

        task.arm("x")
        task.cancel()
        await asyncio.sleep(DELAY * 3)

        assert fired == []
        assert task.payload is None

    @pytest.mark.asyncio
    async def test_flush_fires_immediately(self):
        fired = []
        task = DebouncedTask(10.0, lambda value: fired.append(value) or "sent")

        task.arm("now")
        assert task.flush() == "sent"
        assert fired == ["now"]

        # Nothing left to fire
        assert task.flush() is None
        assert fired == ["now"]


class TestAutoSaveChannel:
    """Test per-step persistence scheduling."""

    @pytest.mark.asyncio
    async def test_rapid_edits_collapse_into_one_save(self):
        recorder = Recorder()
        channel = AutoSaveChannel(recorder, DELAY)

        for hours in (11, 13, 15):
            channel.schedule(3, Step3Data(weekly_hours=hours))

        await asyncio.sleep(DELAY * 4)
        await channel.wait_idle()

        assert recorder.saved == [(3, Step3Data(weekly_hours=15))]

    @pytest.mark.asyncio
    async def test_flush_sends_without_waiting(self):
        recorder = Recorder()
        channel = AutoSaveChannel(recorder, 10.0)

        channel.schedule(3, Step3Data(weekly_hours=12))
        assert channel.has_pending(3) is True

        await channel.flush()

        assert recorder.saved == [(3, Step3Data(weekly_hours=12))]
        assert channel.has_pending() is False

    @pytest.mark.asyncio
    async def test_sends_for_a_step_stay_in_order(self):
        recorder = Recorder(slow_first=DELAY * 3)
        channel = AutoSaveChannel(recorder, DELAY)

        channel.schedule(3, Step3Data(weekly_hours=8))
        # Let the timer fire so the slow first save is in flight
        await asyncio.sleep(DELAY * 2)
        channel.schedule(3, Step3Data(weekly_hours=16))
        await channel.flush(3)

        assert recorder.events == [
            ("start", 8), ("end", 8), ("start", 16), ("end", 16),
        ]

    @pytest.mark.asyncio
    async def test_steps_are_independent(self):
        recorder = Recorder()
        channel = AutoSaveChannel(recorder, 10.0)

        channel.schedule(3, Step3Data(weekly_hours=12))
        channel.schedule(1, Step3Data(weekly_hours=6))
        await channel.flush(1)

        assert recorder.saved == [(1, Step3Data(weekly_hours=6))]
        assert channel.has_pending(3) is True
        channel.cancel_all()
        assert channel.has_pending() is False

    @pytest.mark.asyncio
    async def test_send_now_supersedes_pending(self):
        recorder = Recorder()
        channel = AutoSaveChannel(recorder, 10.0)

        channel.schedule(3, Step3Data(weekly_hours=9))
        await channel.send_now(3, Step3Data(weekly_hours=14))
        await channel.close()

        assert recorder.saved == [(3, Step3Data(weekly_hours=14))]

    @pytest.mark.asyncio
    async def test_saving_flag_follows_in_flight_sends(self):
        changes = []
        channel = AutoSaveChannel(Recorder(), 10.0, on_saving_changed=changes.append)

        channel.schedule(3, Step3Data(weekly_hours=10))
        assert channel.is_saving is False
        await channel.flush()

        assert changes == [True, False]
        assert channel.is_saving is False

    @pytest.mark.asyncio
    async def test_failed_save_does_not_raise(self, caplog):
        channel = AutoSaveChannel(Recorder(fail=True), 10.0)

        channel.schedule(3, Step3Data(weekly_hours=10))
        await channel.close()

        assert "Auto-save for step 3 failed" in caplog.text
        assert channel.is_saving is False

    @pytest.mark.asyncio
    async def test_cancel_all_skips_queued_sends(self):
        recorder = Recorder(slow_first=DELAY * 3)
        channel = AutoSaveChannel(recorder, DELAY)

        channel.schedule(3, Step3Data(weekly_hours=8))
        await asyncio.sleep(DELAY * 2)
        channel.schedule(3, Step3Data(weekly_hours=16))
        await asyncio.sleep(DELAY * 2)
        channel.cancel_all()
        await channel.close()

        assert recorder.saved == [(3, Step3Data(weekly_hours=8))]
