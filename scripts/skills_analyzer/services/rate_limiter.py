#------------------------------------------------------------
#                       rate_limiter.py
#          Tracks remaining API quota and blocks when
#                    the quota runs out.

import time
from typing import Callable, Mapping, Optional
from ..config import RATE_LIMIT_DEFAULT_QUOTA, RATE_LIMIT_WAIT_SECONDS
from ..logger import get_logger

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"
RATE_LIMIT_WAIT_MESSAGE = "Rate limit reached, waiting %.0fs..."

logger = get_logger(__name__)

class RateLimiter:

    # This function does initialize quota state.
    # The sleep and clock callables are injectable for tests.
    def __init__(
        self,
        limit: int = RATE_LIMIT_DEFAULT_QUOTA,
        wait_seconds: float = RATE_LIMIT_WAIT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.limit = limit
        self.wait_seconds = wait_seconds
        self._sleep = sleep
        self._clock = clock
        self._remaining = limit
        self._reset_at: Optional[float] = None

    @property
    def remaining(self) -> int:
        return self._remaining

    # This function does block until at least one call is available.
    # It consumes one unit of quota for the call about to be made.
    def wait_if_needed(self) -> None:
        if self._remaining <= 1:
            delay = self._seconds_until_reset()
            logger.warning(RATE_LIMIT_WAIT_MESSAGE, delay)
            self._sleep(delay)
            self._remaining = self.limit
            self._reset_at = None
        self._remaining -= 1

    # This function does sync quota state with server response headers.
    # Missing or malformed headers leave the local counter untouched.
    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        if not headers:
            return
        remaining = headers.get(REMAINING_HEADER)
        reset = headers.get(RESET_HEADER)
        try:
            if remaining is not None:
                self._remaining = max(0, int(remaining))
            if reset is not None:
                self._reset_at = float(reset)
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed rate limit headers: %r / %r", remaining, reset)

    def _seconds_until_reset(self) -> float:
        if self._reset_at is None:
            return self.wait_seconds
        return max(0.0, min(self.wait_seconds, self._reset_at - self._clock()))
