"""Coroutines that sleep for a duration or until a point in time.

Cancellation of the awaiting task propagates as asyncio.CancelledError.
"""

import asyncio
import logging

from caltime.clock import SYSTEM_CLOCK, Clock
from caltime.duration import Duration, HasDuration
from caltime.instant import HasTime
from caltime.util import SECOND

logger = logging.getLogger(__name__)

# Added to wait_until so the caller wakes up after, never before, the target
UNTIL_MARGIN = Duration(10 * SECOND)


async def wait_for(duration: HasDuration) -> None:
    """Sleep for duration; zero or negative durations return immediately."""
    length = duration.as_duration()
    if length.nanoseconds <= 0:
        logger.debug("duration %s <= 0, skip wait", length)
        return
    logger.debug("wait for %s started", length)
    await asyncio.sleep(length.seconds())
    logger.debug("wait for %s completed", length)


async def wait_until(until: HasTime, clock: Clock | None = None) -> None:
    """Sleep until the given time (plus UNTIL_MARGIN) as read from clock.

    Returns immediately when until is already in the past.
    """
    now = (clock or SYSTEM_CLOCK).now()
    target = until.as_instant()
    if target.before(now):
        logger.debug("until %s already past, skip wait", target)
        return
    logger.debug("now: %s wait until: %s", now, target)
    await wait_for(target.sub(now) + UNTIL_MARGIN)
