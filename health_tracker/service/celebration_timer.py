import asyncio
from typing import Callable, Optional

from loguru import logger


class CelebrationTimer:
    """
    Cancellable one-shot timer for dismissing the achievement celebration.

    Scheduling again replaces the pending callback. Once closed (the owning view is gone)
    no further callbacks are scheduled.
    """

    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None
        self._is_closed = False

    @property
    def is_pending(self) -> bool:
        return self._handle is not None and not self._handle.cancelled()

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> bool:
        """
        Run callback after delay_s seconds on the running event loop.

        Args:
            delay_s: Delay in seconds.
            callback: Function to call once the delay elapses.

        Returns:
            True if the callback was scheduled, False if the timer is closed or no event loop is running.
        """
        if self._is_closed:
            logger.debug("Celebration timer is closed, not scheduling")
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, celebration must be dismissed explicitly")
            return False

        self.cancel()

        def _fire() -> None:
            self._handle = None
            try:
                callback()
            except Exception as e:
                logger.exception(f"Exception in celebration callback {getattr(callback, '__name__', callback)}: {e}")

        self._handle = loop.call_later(delay_s, _fire)
        logger.debug(f"Scheduled celebration dismissal in {delay_s}s")
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending celebration dismissal")

    def close(self) -> None:
        self.cancel()
        self._is_closed = True
