"""Rate limiting for key events."""

import time
from typing import Callable, Optional


class Debouncer:
    """Accept an event only if more than `delay` seconds passed since the last accepted one.

    Rejected events are not queued; the caller simply drops them.
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self._clock = clock
        self.last_call: Optional[float] = None

    def should_call(self) -> bool:
        now = self._clock()
        if self.last_call is None or now - self.last_call > self.delay:
            self.last_call = now
            return True
        return False
