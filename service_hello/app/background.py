"""
Background work bound to the service lifetime.

Tasks spawned here are fire-and-forget for the request that starts them, but
the scope keeps a reference to each one and cancels whatever is still running
when the service shuts down.
"""

import asyncio
from typing import Coroutine, Optional, Set

from shared.logging import get_logger
from shared.metrics import MetricsCollector


class BackgroundTaskScope:
    """Tracks spawned asyncio tasks and cancels them on shutdown."""

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.metrics = metrics
        self.logger = get_logger("hello.background")
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def active(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    @property
    def closed(self) -> bool:
        return self._closed

    def spawn(self, coro: Coroutine, name: str) -> Optional[asyncio.Task]:
        """Schedule ``coro`` on the running loop and track it."""
        if self._closed:
            coro.close()
            self.logger.warning("Background scope closed, task dropped", task=name)
            return None

        task = asyncio.get_running_loop().create_task(self._guard(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        self._update_gauge()
        return task

    async def _guard(self, coro: Coroutine, name: str):
        try:
            return await coro
        except asyncio.CancelledError:
            self.logger.info("Background task cancelled", task=name)
            raise
        except Exception as e:
            # Failures end here; the request that spawned the task has already answered
            self.logger.error("Background task failed", task=name, error=str(e), exc_info=e)
            return None

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        self._update_gauge()

    def _update_gauge(self) -> None:
        if self.metrics is not None:
            self.metrics.set_gauge("background_tasks_active", len(self._tasks))

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Refuse new work, cancel pending tasks and wait for them to finish."""
        self._closed = True
        pending = [task for task in self._tasks if not task.done()]
        if not pending:
            return

        self.logger.info("Cancelling background tasks", count=len(pending))
        for task in pending:
            task.cancel()
        _, still_running = await asyncio.wait(pending, timeout=timeout)
        if still_running:
            self.logger.warning("Background tasks did not stop in time", count=len(still_running))
