"""Background task management for scheduled and out-of-band rotations."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from ..constants import TOKEN_ROTATION_DRIFT_TOLERANCE_SECONDS
from ..errors.handling import log_error
from ..utils import format_duration

if TYPE_CHECKING:
    from .manager import CredentialManager


class BackgroundTaskManager:
    """Runs the periodic rotation loop and retains one-shot background tasks."""

    def __init__(
        self,
        manager: CredentialManager,
        drift_tolerance: float = TOKEN_ROTATION_DRIFT_TOLERANCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.manager = manager
        self.drift_tolerance = drift_tolerance
        self._clock = clock
        self.task: asyncio.Task[Any] | None = None
        self.running = False
        # Retained one-shot tasks (startup generation, manual rotations) to prevent premature GC.
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def start(self) -> None:
        """Start the periodic rotation loop."""
        if self.running:
            return
        if self.task and not self.task.done():
            logging.debug("Cancelling stale rotation loop before restart")
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            finally:
                self.task = None
        self.running = True
        self.task = asyncio.create_task(self._rotation_loop())
        logging.debug(
            f"▶️ Started token rotation loop interval={format_duration(self._interval_seconds())}"
        )

    async def stop(self) -> None:
        """Stop the loop and cancel any retained task still in flight."""
        if not self.running and not self._tasks:
            return
        self.running = False
        tasks = list(self._tasks)
        if self.task:
            tasks.append(self.task)
            self.task = None
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def spawn(
        self, coro: Coroutine[Any, Any, Any], *, category: str
    ) -> asyncio.Task[Any]:
        """Create and retain a background task with exception logging.

        Ensures the task handle is stored and any exception is surfaced via
        structured logging instead of being lost with the task.
        """
        task: asyncio.Task[Any] = asyncio.create_task(coro)
        self._tasks.add(task)

        def _done(t: asyncio.Task[Any]) -> None:
            self._tasks.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                log_error(
                    f"Background task failed category={category}",
                    exc,  # type: ignore[arg-type]
                    context={"category": category},
                )

        task.add_done_callback(_done)
        return task

    def _interval_seconds(self) -> float:
        return self.manager.state.rotation_interval.total_seconds()

    async def _rotation_loop(self) -> None:
        """Call ``manager.rotate()`` once per rotation interval until stopped.

        Reports wake-ups that arrive later than the drift tolerance and keeps
        running after any error except cancellation.
        """
        while self.running:
            interval = self._interval_seconds()
            scheduled = self._clock() + interval
            try:
                await asyncio.sleep(interval)
                drift = self._clock() - scheduled
                if drift > self.drift_tolerance:
                    logging.warning(
                        f"⏱️ Token rotation loop drift detected drift={int(drift)}s interval={int(interval)}s"
                    )
                await self.manager.rotate(trigger="scheduled")
            except asyncio.CancelledError:
                logging.debug("Token rotation loop cancelled")
                raise
            except Exception as e:  # noqa: BLE001
                log_error("Token rotation loop error", e)
