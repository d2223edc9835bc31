"""Background one-second tick for a running session."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional


TickCallback = Callable[[], None]


class SessionTicker:
    def __init__(self, on_tick: TickCallback, interval_sec: float = 1.0) -> None:
        self._on_tick = on_tick
        self._interval_sec = interval_sec
        self._task: Optional[asyncio.Task[None]] = None
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError("Ticker already running")

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if not self.is_running:
            return

        self._stop_event.set()
        assert self._task is not None
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_sec)
            except asyncio.TimeoutError:
                self._on_tick()
