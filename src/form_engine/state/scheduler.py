"""
Debounced validation scheduling.

Rapid edits to a field should be validated once, after the user pauses.
Each field has at most one pending asyncio task; scheduling again cancels
the previous task first, so only the latest scheduled callback ever runs.
"""

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ValidationScheduler:
    """
    Per-field debounce timers on the running event loop.

    Usage:
        scheduler = ValidationScheduler(delay=0.3)
        scheduler.schedule("email", lambda: session.validate_field("email"))
    """

    def __init__(self, delay: float = 0.3):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._tasks: dict[str, asyncio.Task] = {}
        self._callbacks: dict[str, Callable[[], None]] = {}

    def schedule(self, field_id: str, callback: Callable[[], None]) -> asyncio.Task:
        """
        Run ``callback`` after the delay unless superseded or cancelled.

        Must be called from a coroutine or callback on a running loop.

        Raises:
            RuntimeError: If there is no running event loop.
        """
        self.cancel(field_id)

        async def delayed() -> None:
            try:
                await asyncio.sleep(self.delay)
                # Forget the task before running so the callback may reschedule
                self._forget(field_id)
                callback()
            except asyncio.CancelledError:
                logger.debug("Validation for '%s' superseded", field_id)
                raise

        task = asyncio.get_running_loop().create_task(delayed())
        self._tasks[field_id] = task
        self._callbacks[field_id] = callback
        return task

    def cancel(self, field_id: str) -> bool:
        """Cancel a field's pending validation. Returns True if one was pending."""
        task = self._tasks.pop(field_id, None)
        self._callbacks.pop(field_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def cancel_all(self) -> None:
        for field_id in list(self._tasks):
            self.cancel(field_id)

    def flush(self, field_id: str) -> bool:
        """Run a field's pending callback now instead of waiting."""
        callback = self._callbacks.get(field_id)
        if not self.cancel(field_id) or callback is None:
            return False
        callback()
        return True

    def pending(self, field_id: str) -> bool:
        task = self._tasks.get(field_id)
        return task is not None and not task.done()

    @property
    def pending_count(self) -> int:
        return sum(1 for field_id in self._tasks if self.pending(field_id))

    def _forget(self, field_id: str) -> None:
        self._tasks.pop(field_id, None)
        self._callbacks.pop(field_id, None)
