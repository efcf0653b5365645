"""Fire-and-forget timers for redirects and notification auto-hide."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, TypeAlias

logger = logging.getLogger(__name__)

SleepFunc: TypeAlias = Callable[[float], Awaitable[Any]]
ActionCallback: TypeAlias = Callable[[], Any]


class DelayedAction:
    """Run a callback once after a delay, unless cancelled first.

    The callback may be a plain function or a coroutine function. Errors
    raised by the callback are logged and kept on the action rather than
    surfacing as "Task exception was never retrieved" warnings.

    Usage:
        action = DelayedAction.schedule(1000, go_home, name="login.redirect")
        ...
        action.cancel()
    """

    def __init__(
        self,
        delay_ms: int,
        callback: ActionCallback,
        *,
        name: str = "delayed-action",
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.delay_ms = delay_ms
        self.name = name
        self._callback = callback
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self.error: Optional[BaseException] = None
        self.fired = False

    @classmethod
    def schedule(
        cls,
        delay_ms: int,
        callback: ActionCallback,
        *,
        name: str = "delayed-action",
        sleep: SleepFunc = asyncio.sleep,
    ) -> "DelayedAction":
        """Create and start an action on the running loop."""
        action = cls(delay_ms, callback, name=name, sleep=sleep)
        action.start()
        return action

    def start(self) -> None:
        """Start the timer.

        Raises:
            RuntimeError: If already started or no event loop is running
        """
        if self._task is not None:
            raise RuntimeError(f"{self.name} already started")
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug(f"{self.name}: scheduled in {self.delay_ms}ms")

    async def _run(self) -> None:
        await self._sleep(self.delay_ms / 1000)
        self.fired = True
        try:
            result = self._callback()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            self.error = exc
            logger.exception(f"{self.name}: callback failed", exc_info=exc)

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def cancel(self) -> bool:
        """Cancel the action if it has not fired yet.

        Returns:
            True if a pending action was cancelled
        """
        if self._task is None or self._task.done() or self.fired:
            return False
        logger.debug(f"{self.name}: cancelled")
        return self._task.cancel()

    async def wait(self) -> None:
        """Wait until the action has fired or been cancelled."""
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
