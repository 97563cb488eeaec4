"""Cancellable scheduled tasks for the event loop"""

import asyncio
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the latest submitted value once input has been quiet for `delay` seconds.

    Each `submit` cancels the pending call and restarts the timer, so a burst of
    edits produces exactly one callback carrying the last value. Must be used
    from inside a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[T], Any]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, value: T) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, value)

    def cancel(self) -> bool:
        """Cancel the pending call, if any. Returns True if one was cancelled."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, value: T) -> None:
        self._handle = None
        self.callback(value)
