"""Minimum-interval pacing between consecutive external calls."""

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class PacingPolicy:
    """Keeps at least ``min_interval`` seconds between successive calls to ``wait``.

    The first call returns immediately; later calls sleep only for whatever is left
    of the interval since the previous one.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    async def wait(self) -> None:
        if self._last is not None:
            remaining = self.min_interval - (self._clock() - self._last)
            if remaining > 0:
                logger.info("Waiting %.1fs before next call...", remaining)
                await self._sleep(remaining)
        self._last = self._clock()
