# scheduler.py
from typing import Any, Callable, Optional
import logging

from .config import TICK_MS

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    Cancellable fixed-interval tick driver, polled by the host loop.

    The host passes its own millisecond clock (``pygame.time.get_ticks()``
    in the window, a plain counter in tests). Only one driver exists at a
    time: ``arm()`` cancels the previous one and bumps ``generation``.
    """

    def __init__(
        self,
        tick: Callable[[], Any],
        interval_ms: int = TICK_MS,
        is_active: Optional[Callable[[], bool]] = None,
    ):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._tick = tick
        self._interval_ms = interval_ms
        self._is_active = is_active or (lambda: True)
        self._generation = 0
        self._armed = False
        self._next_due = 0

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active(self) -> bool:
        return self._armed

    @property
    def next_due(self) -> Optional[int]:
        return self._next_due if self._armed else None

    def arm(self, now_ms: int) -> int:
        """Replace any running driver with a new one; first tick at now + interval."""
        self.cancel()
        self._generation += 1
        self._armed = True
        self._next_due = now_ms + self._interval_ms
        logger.debug("Armed tick driver #%d every %d ms", self._generation, self._interval_ms)
        return self._generation

    def cancel(self) -> None:
        if self._armed:
            logger.debug("Cancelled tick driver #%d", self._generation)
        self._armed = False

    def poll(self, now_ms: int) -> Any:
        """
        Fire at most one tick if it is due. Returns the tick's result, or
        None if nothing fired. The driver stops itself once ``is_active``
        turns false.
        """
        if not self._armed:
            return None
        if not self._is_active():
            self.cancel()
            return None
        if now_ms < self._next_due:
            return None  # not time to move yet

        self._next_due = now_ms + self._interval_ms
        result = self._tick()
        if not self._is_active():
            self.cancel()
        return result
