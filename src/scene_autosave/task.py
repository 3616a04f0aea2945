"""Periodic guarded save loop with cooperative cancellation."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime
from typing import Any, NamedTuple

from scene_autosave.locator import ConfigHandle
from scene_autosave.models import DEFAULT_INTERVAL_MINUTES, AutoSaveConfig

logger = logging.getLogger(__name__)

WaitFn = Callable[[asyncio.Event, float], Awaitable[bool]]


class Guard(NamedTuple):
    """A named condition that must hold for a save to run this cycle."""

    name: str
    check: Callable[[], bool]


async def wait_or_cancel(cancel: asyncio.Event, seconds: float) -> bool:
    """Sleep for *seconds* unless *cancel* is set first.

    Returns True if the wait ended because of cancellation.
    """
    try:
        async with asyncio.timeout(seconds):
            await cancel.wait()
    except TimeoutError:
        return False
    return True


class PeriodicGuardedTask:
    """Runs *work* every ``interval_minutes`` while all guards pass.

    Only one loop is ever active: ``start`` cancels and joins the previous
    loop before creating a new one, and ``stop`` blocks until the loop has
    exited.
    """

    def __init__(
        self,
        handle: ConfigHandle,
        work: Callable[[], Any],
        guards: Sequence[Guard] = (),
        wait: WaitFn = wait_or_cancel,
    ) -> None:
        self._handle = handle
        self._work = work
        self._guards = list(guards)
        self._wait = wait
        self._cancel: asyncio.Event | None = None
        self._task: asyncio.Task[None] | None = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the loop, replacing any loop that is already running."""
        async with self._lock:
            await self._stop_current()
            self._cancel = asyncio.Event()
            self._task = asyncio.create_task(self._run(self._cancel))
            self._task.add_done_callback(self._on_done)
        logger.info("Autosave loop started")

    async def stop(self) -> None:
        """Signal cancellation and wait for the loop to exit."""
        async with self._lock:
            await self._stop_current()

    async def _stop_current(self) -> None:
        if self._task is None:
            return
        self._cancel.set()
        # Joins without re-raising; a crashed loop was already reported.
        await asyncio.wait({self._task})
        self._task = None
        self._cancel = None
        logger.info("Autosave loop stopped")

    def _next_interval(self) -> float:
        config = self._handle.config
        minutes = config.interval_minutes if config else DEFAULT_INTERVAL_MINUTES
        return minutes * 60

    def _failed_guard(self, config: AutoSaveConfig) -> str | None:
        if not config.enabled:
            return "enabled"
        for guard in self._guards:
            if not guard.check():
                return guard.name
        return None

    async def _run(self, cancel: asyncio.Event) -> None:
        while not cancel.is_set():
            if await self._wait(cancel, self._next_interval()):
                break

            config = self._handle.refresh()
            if config is None:
                continue

            failed = self._failed_guard(config)
            if failed is not None:
                logger.debug(f"Skipping autosave, guard failed: {failed}")
                continue

            result = self._work()
            if inspect.isawaitable(result):
                await result

            if config.verbose:
                logger.info(f"Scenes auto-saved at {datetime.now():%H:%M:%S}")

    def _on_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Autosave loop crashed", exc_info=exc)
