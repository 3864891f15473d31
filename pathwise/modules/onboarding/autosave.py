"""Debounced auto-save for wizard step payloads.

Rapid edits (slider drags, checkbox toggles) are collapsed into a single
persistence call per step. Sends for the same step are chained in the
order they were dispatched, so the backend never receives an older payload
after a newer one.
"""

import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, Generic, TypeVar

from pathwise.modules.onboarding.schemas import StepData

logger = logging.getLogger(__name__)

T = TypeVar("T")

SaveCallable = Callable[[int, StepData], Awaitable[None]]


class DebouncedTask(Generic[T]):
    """A single-slot timer that fires with the latest armed payload.

    Arming replaces the pending payload and restarts the quiet interval.
    Flushing fires immediately instead of waiting for the timer.
    """

    def __init__(
        self,
        delay: float,
        on_fire: Callable[[T], object],
        *,
        name: str = "",
    ) -> None:
        self._delay = delay
        self._on_fire = on_fire
        self._name = name
        self._timer: asyncio.TimerHandle | None = None
        self._payload: T | None = None
        self._has_payload = False

    @property
    def pending(self) -> bool:
        """True while a payload is waiting for the timer."""
        return self._has_payload

    @property
    def payload(self) -> T | None:
        return self._payload

    def arm(self, payload: T) -> None:
        """Store payload and (re)start the timer.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._payload = payload
        self._has_payload = True
        self._timer = loop.call_later(self._delay, self._expire)

    def cancel(self) -> None:
        """Drop the pending payload without firing."""
        self._cancel_timer()
        self._take()

    def flush(self) -> object:
        """Fire now if a payload is pending.

        Returns:
            Whatever on_fire returned, or None when nothing was pending
        """
        self._cancel_timer()
        if not self._has_payload:
            return None
        return self._on_fire(self._take())

    def _expire(self) -> None:
        self._timer = None
        if self._has_payload:
            logger.debug(f"Debounce window elapsed for {self._name or 'task'}")
            self._on_fire(self._take())

    def _take(self) -> T | None:
        payload = self._payload
        self._payload = None
        self._has_payload = False
        return payload

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class AutoSaveChannel:
    """Per-step debounced persistence.

    Features:
    - One DebouncedTask per step, re-armed on every edit
    - Sends chained per step so payloads reach the backend in order
    - In-flight counter exposed as is_saving
    """

    def __init__(
        self,
        save: SaveCallable,
        delay: float,
        on_saving_changed: Callable[[bool], None] | None = None,
    ) -> None:
        self._save = save
        self._delay = delay
        self._on_saving_changed = on_saving_changed
        self._tasks: dict[int, DebouncedTask[StepData]] = {}
        self._tails: dict[int, asyncio.Task] = {}
        self._in_flight = 0
        self._generation = 0

    @property
    def is_saving(self) -> bool:
        return self._in_flight > 0

    def has_pending(self, step: int | None = None) -> bool:
        """Check for payloads still waiting on a timer."""
        if step is not None:
            task = self._tasks.get(step)
            return bool(task and task.pending)
        return any(task.pending for task in self._tasks.values())

    def schedule(self, step: int, payload: StepData) -> None:
        """Queue payload for step, replacing any earlier pending payload."""
        task = self._tasks.get(step)
        if task is None:
            task = DebouncedTask(
                self._delay,
                partial(self._dispatch, step),
                name=f"step {step}",
            )
            self._tasks[step] = task
        task.arm(payload)

    async def flush(self, step: int | None = None) -> None:
        """Send pending payloads now and wait for them to finish.

        Args:
            step: Only flush this step; all steps when None
        """
        steps = [step] if step is not None else list(self._tasks)
        for key in steps:
            task = self._tasks.get(key)
            if task is not None:
                task.flush()
        await self._wait([self._tails[key] for key in steps if key in self._tails])

    async def send_now(self, step: int, payload: StepData) -> None:
        """Bypass the debounce window for one payload.

        Any pending payload for the step is superseded.
        """
        task = self._tasks.get(step)
        if task is not None:
            task.cancel()
        await self._wait([self._dispatch(step, payload)])

    def cancel_all(self) -> None:
        """Drop every pending payload.

        Sends already talking to the backend still complete. Sends queued
        behind them are skipped.
        """
        self._generation += 1
        for task in self._tasks.values():
            task.cancel()

    async def wait_idle(self) -> None:
        """Wait for every dispatched send to finish."""
        await self._wait(list(self._tails.values()))

    async def close(self) -> None:
        """Flush everything; used on teardown."""
        await self.flush()
        await self.wait_idle()

    def _dispatch(self, step: int, payload: StepData) -> asyncio.Task:
        previous = self._tails.get(step)
        send = asyncio.ensure_future(
            self._send_after(previous, step, payload, self._generation)
        )
        self._tails[step] = send
        send.add_done_callback(partial(self._forget, step))
        return send

    async def _send_after(
        self,
        previous: asyncio.Task | None,
        step: int,
        payload: StepData,
        generation: int,
    ) -> None:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        if generation != self._generation:
            logger.debug(f"Dropping queued save for step {step} after cancel")
            return

        self._set_in_flight(self._in_flight + 1)
        try:
            await self._save(step, payload)
        finally:
            self._set_in_flight(self._in_flight - 1)

    def _forget(self, step: int, send: asyncio.Task) -> None:
        if self._tails.get(step) is send:
            del self._tails[step]
        if send.cancelled():
            return
        error = send.exception()
        if error is not None:
            logger.error(f"Auto-save for step {step} failed: {error}")

    def _set_in_flight(self, value: int) -> None:
        was_saving = self.is_saving
        self._in_flight = value
        if self._on_saving_changed is not None and was_saving != self.is_saving:
            self._on_saving_changed(self.is_saving)

    @staticmethod
    async def _wait(sends: list[asyncio.Task]) -> None:
        pending = [send for send in sends if not send.done()]
        if pending:
            await asyncio.wait(pending)
