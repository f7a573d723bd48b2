"""Clock used for every wait of the monitor."""

import asyncio
from typing import Protocol

from tracker.errors import MonitorStopped


class Clock(Protocol):
    """Anything that can suspend the monitor for a number of seconds."""

    async def sleep(self, seconds: float) -> None:
        ...


class AsyncioClock:
    """
    Real clock with a stop token.

    `stop()` wakes up a pending sleep; that sleep and every later one raise
    MonitorStopped so the loop unwinds at its next suspension point.
    """

    def __init__(self):
        self._stopped = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def stop(self):
        self._stopped.set()

    async def sleep(self, seconds: float) -> None:
        if self._stopped.is_set():
            raise MonitorStopped()
        if seconds <= 0:
            await asyncio.sleep(0)
        else:
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                return
        if self._stopped.is_set():
            raise MonitorStopped()
