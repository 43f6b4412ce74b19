"""
Async debounce helper.

Coalesces bursts of calls (e.g. one per keystroke) so only the last call
in a burst runs, after a quiet period.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger("debounce")


class Debouncer:
    """
    Runs the most recently submitted coroutine function once no new
    submission has arrived for `delay` seconds.

    Usage:
        debouncer = Debouncer(delay=0.5)
        task = debouncer.submit(client.analyze, text, platform)
        result = await task  # raises CancelledError if superseded
    """

    def __init__(self, delay: Optional[float] = None):
        self.delay = settings.analyze_debounce_seconds if delay is None else delay
        self._pending: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any
    ) -> asyncio.Task:
        """
        Schedule func(*args, **kwargs) after the quiet period.

        An earlier call that has not finished yet is cancelled.

        Returns:
            Task resolving to func's result
        """
        if self.pending:
            self._pending.cancel()
            logger.debug("Superseded pending call")

        self._pending = asyncio.ensure_future(self._run_later(func, *args, **kwargs))
        return self._pending

    async def _run_later(self, func, *args, **kwargs):
        await asyncio.sleep(self.delay)
        return await func(*args, **kwargs)

    def cancel(self) -> None:
        """Cancel the unfinished call, if any."""
        if self.pending:
            self._pending.cancel()
        self._pending = None
