"""Recurring tick drivers for the global stopwatch.

The store never sleeps or schedules on its own. While the stopwatch runs
it asks a ``Ticker`` to call ``TaskTimerStore.tick`` once per interval,
and cancels it explicitly on stop.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class Ticker(ABC):
    """Schedules a callback at a fixed interval until cancelled."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether a callback is currently scheduled."""
        pass

    @abstractmethod
    def start(self, callback: Callable[[], None]) -> None:
        """Begin invoking the callback once per interval.

        Args:
            callback: Zero-argument function to invoke.
        """
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Stop invoking the callback. Safe to call when inactive."""
        pass


class AsyncTicker(Ticker):
    """Ticker backed by an asyncio task on the running event loop.

    Example:
        ticker = AsyncTicker(interval=1.0)
        store = TaskTimerStore(storage, ticker=ticker)
        store.start_global_timer()   # must run inside an event loop
    """

    def __init__(self, interval: float = 1.0) -> None:
        """Initialize the ticker.

        Args:
            interval: Seconds between callback invocations.
        """
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def interval(self) -> float:
        """Get the tick interval in seconds."""
        return self._interval

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run_loop(self, callback: Callable[[], None]) -> None:
        """Invoke the callback every interval until cancelled."""
        while True:
            await asyncio.sleep(self._interval)
            try:
                callback()
            except Exception as e:
                logger.exception(f"Error in tick callback: {e}")

    def start(self, callback: Callable[[], None]) -> None:
        """Begin ticking on the running event loop.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        if self.is_active:
            logger.warning("Ticker is already running")
            return

        self._task = asyncio.get_running_loop().create_task(
            self._run_loop(callback),
            name="stopwatch_ticker",
        )
        logger.debug(f"Ticker started (interval={self._interval}s)")

    def cancel(self) -> None:
        if self._task is None:
            return

        self._task.cancel()
        self._task = None
        logger.debug("Ticker cancelled")
