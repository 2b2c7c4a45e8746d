from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Optional

from swms_risk.config import DEFAULT_MIN_CALL_INTERVAL


class MinIntervalPacer:
    """Keeps at least ``min_interval`` seconds between consecutive external calls.

    The interval runs from the end of one call (``mark_done``) to the start of
    the next (``wait``). The first call after construction or ``reset`` goes
    straight through.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_CALL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = max(0.0, float(min_interval))
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    async def wait(self) -> float:
        """Sleep as needed, mark the call, and return the seconds waited."""
        waited = 0.0
        if self._last_call is not None and self.min_interval > 0:
            elapsed = self._clock() - self._last_call
            remaining = self.min_interval - elapsed
            if remaining > 0:
                print(f"[batch] pacing external call: waiting {remaining:.3f}s")
                await self._sleep(remaining)
                waited = remaining
        self._last_call = self._clock()
        return waited

    async def mark_done(self) -> None:
        """Record that the external call finished; the next wait counts from here."""
        self._last_call = self._clock()

    def reset(self) -> None:
        self._last_call = None


__all__ = ["MinIntervalPacer"]
