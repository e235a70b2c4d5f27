"""
Client-side throttle for the analysis service.

Not a token bucket: it only keeps one process from firing calls back to
back. Each pipeline is handed a limiter; share one instance to throttle
several pipelines together.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from analysis.config import MIN_CALL_INTERVAL

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        min_interval: float = MIN_CALL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait_until_permitted(self) -> None:
        """Suspend until ``min_interval`` has passed since the last permit."""
        async with self._lock:
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug("Throttling analysis call for %.3fs", delay)
                    await self._sleep(delay)
            self._last_call = self._clock()
