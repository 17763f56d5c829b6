"""Injectable sources of the current time.

Code that resolves ``NOW`` takes a Clock argument instead of reading the
system clock directly, so tests can pin the current time.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from typing_extensions import override

from caltime.instant import HasTime, Instant

logger = logging.getLogger(__name__)


@runtime_checkable
class Clock(Protocol):
    def now(self) -> Instant: ...


class SystemClock:
    """Clock backed by the system wall clock, always in UTC."""

    def now(self) -> Instant:
        return Instant.now()


class ClockFunc:
    """Adapt a plain callable returning an Instant to the Clock protocol."""

    def __init__(self, func: Callable[[], Instant]):
        self.func: Callable[[], Instant] = func

    def now(self) -> Instant:
        return self.func()


class CurrentTime(SystemClock):
    """Clock whose reading can be overridden, for deterministic tests.

    Example:
        >>> clock = CurrentTime()
        >>> clock.set_now(Instant.from_unix(1686419205))
        >>> parse_time("NOW-1h", clock=clock).unix()
        1686415605
    """

    def __init__(self, now: HasTime | None = None):
        self._lock: threading.Lock = threading.Lock()
        self._now: Instant | None = now.as_instant() if now is not None else None

    @override
    def now(self) -> Instant:
        with self._lock:
            if self._now is not None:
                return self._now
        return super().now()

    def set_now(self, now: HasTime) -> None:
        instant = now.as_instant()
        with self._lock:
            self._now = instant
        logger.debug("current time overridden to %s", instant)

    def reset(self) -> None:
        """Drop the override and follow the system clock again."""
        with self._lock:
            self._now = None


SYSTEM_CLOCK: Clock = SystemClock()
