"""Coalesce bursts of update requests into a single deferred call."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from medbill import config

logger = logging.getLogger(__name__)


class CoalescingScheduler:
    """Run ``callback`` once after ``wait_ms`` without further requests.

    ``timer`` is any object with ``start(ms, fn)`` and ``stop()``; every
    ``request()`` restarts it, so only the last request in a burst fires.
    """

    def __init__(self, callback: Callable[[], None], timer, wait_ms: Optional[int] = None) -> None:
        self.callback = callback
        self.timer = timer
        self.wait_ms = config.DEBOUNCE_MS if wait_ms is None else wait_ms
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self) -> None:
        self.timer.stop()
        self._pending = True
        self.timer.start(self.wait_ms, self._fire)

    def flush(self) -> None:
        """Run a pending callback now instead of waiting for the timer."""
        if self._pending:
            self.timer.stop()
            self._fire()

    def cancel(self) -> None:
        self.timer.stop()
        self._pending = False

    def _fire(self) -> None:
        if not self._pending:
            return
        self._pending = False
        logger.debug("Running coalesced %s", getattr(self.callback, "__name__", self.callback))
        self.callback()
