"""Tick sources driving the engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]
ErrorCallback = Callable[[BaseException], None]


class Clock(Protocol):
    """Recurring timer the engine starts and stops.

    Changing the interval is always a stop followed by a fresh start.
    *on_error* is called if a tick raises; the clock is stopped by then.
    """

    def start_ticking(
        self,
        interval_ms: int,
        on_tick: TickCallback,
        on_error: ErrorCallback | None = None,
    ) -> None: ...

    def stop_ticking(self) -> None: ...


class ManualClock:
    """Clock that only ticks when told to.

    Used for headless runs and tests; records every start so interval
    changes can be inspected.
    """

    def __init__(self) -> None:
        self.interval_ms: int | None = None
        self.starts: list[int] = []
        self._on_tick: TickCallback | None = None
        self._on_error: ErrorCallback | None = None

    @property
    def running(self) -> bool:
        return self._on_tick is not None

    def start_ticking(
        self,
        interval_ms: int,
        on_tick: TickCallback,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.interval_ms = interval_ms
        self.starts.append(interval_ms)
        self._on_tick = on_tick
        self._on_error = on_error

    def stop_ticking(self) -> None:
        self._on_tick = None
        self._on_error = None

    def advance(self, ticks: int = 1) -> int:
        """Fire up to *ticks* callbacks; returns how many fired.

        Stops early if a callback stops the clock. A callback that raises
        stops the clock, is reported to ``on_error`` and re-raised.
        """
        fired = 0
        for _ in range(ticks):
            if self._on_tick is None:
                break
            try:
                self._on_tick()
            except Exception as exc:
                on_error = self._on_error
                self.stop_ticking()
                if on_error is not None:
                    on_error(exc)
                raise
            fired += 1
        return fired


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class AsyncioClock:
    """Clock backed by an asyncio task that sleeps between ticks.

    *after_tick*, if given, is awaited after every tick (the server uses
    it to broadcast state). Stopping from inside a tick lets the running
    iteration finish instead of cancelling it mid-broadcast.
    """

    def __init__(
        self,
        after_tick: Callable[[], Awaitable[None]] | None = None,
        name: str = "clock",
    ) -> None:
        self.after_tick = after_tick
        self._name = name
        self._task: asyncio.Task | None = None
        self._stopped: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start_ticking(
        self,
        interval_ms: int,
        on_tick: TickCallback,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.stop_ticking()
        self._task = asyncio.create_task(
            self._tick_loop(interval_ms, on_tick, on_error),
        )

    def stop_ticking(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        self._stopped = task
        if task is not _current_task():
            task.cancel()

    async def _tick_loop(
        self,
        interval_ms: int,
        on_tick: TickCallback,
        on_error: ErrorCallback | None,
    ) -> None:
        me = asyncio.current_task()
        interval = interval_ms / 1000.0
        try:
            while self._task is me:
                await asyncio.sleep(interval)
                if self._task is not me:
                    break
                on_tick()
                if self.after_tick is not None:
                    await self.after_tick()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled for %s.", self._name)
        except Exception as exc:
            logger.exception("Tick loop error in %s.", self._name)
            if self._task is me:
                self._task = None
                if on_error is not None:
                    on_error(exc)

    async def wait_stopped(self) -> None:
        """Cancel the loop and wait for the last one to finish."""
        self.stop_ticking()
        task, self._stopped = self._stopped, None
        if task is not None and not task.done() and task is not _current_task():
            await asyncio.gather(task, return_exceptions=True)
