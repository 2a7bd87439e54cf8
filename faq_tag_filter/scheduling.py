"""Bounded retry and debouncing helpers for the asyncio event loop."""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

RetryAction = Callable[[], Union[bool, Awaitable[bool]]]


@dataclass
class RetryOutcome:
    """Result of a bounded retry loop."""

    succeeded: bool
    attempts_used: int


async def retry(action: RetryAction, interval: float, max_attempts: int) -> RetryOutcome:
    """
    Call `action` until it returns a truthy value or attempts run out.

    Args:
        action: Sync or async callable returning True on success
        interval: Seconds to wait between attempts
        max_attempts: Upper bound on calls to `action`

    Returns:
        RetryOutcome; running out of attempts is not an error
    """
    attempts = 0
    while attempts < max_attempts:
        attempts += 1
        result = action()
        if inspect.isawaitable(result):
            result = await result
        if result:
            return RetryOutcome(succeeded=True, attempts_used=attempts)
        if attempts < max_attempts:
            await asyncio.sleep(interval)

    logger.debug(f"Retry gave up after {attempts} attempts")
    return RetryOutcome(succeeded=False, attempts_used=attempts)


class Debouncer:
    """
    Coalesce rapid calls into one, fired after `delay` seconds of quiet.

    Each trigger cancels the pending timer and schedules a new one on the
    running loop. Async callbacks are run as tasks.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self.last_task: Optional[asyncio.Future] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        """
        Schedule the callback, replacing any pending call.

        Without a running loop there is nothing to wait on, so the
        callback runs right away.
        """
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            result = self.callback(*args)
            if inspect.isawaitable(result):
                asyncio.run(result)
            return
        self._handle = loop.call_later(self.delay, self._fire, args)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()

    def _fire(self, args: tuple) -> None:
        self._handle = None
        result = self.callback(*args)
        if inspect.isawaitable(result):
            self.last_task = asyncio.ensure_future(result)
            self.last_task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Future) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced callback failed: {task.exception()}", exc_info=task.exception())
