"""Rest-period countdown between sets."""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Called with True when the countdown ran out, False when it was skipped.
RestFinishCallback = Callable[[bool], None]


class RestTimer:
    def __init__(self, on_finish: Optional[RestFinishCallback] = None) -> None:
        self._on_finish = on_finish
        self.configured_sec = 0
        self.remaining_sec = 0
        self.is_active = False

    def start(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("Rest duration must be >= 0")
        self.configured_sec = seconds
        self.remaining_sec = seconds
        self.is_active = True
        logger.debug("Rest started for %ss", seconds)
        if seconds == 0:
            self._finish(completed=True)

    def tick(self) -> None:
        if not self.is_active:
            return
        self.remaining_sec = max(0, self.remaining_sec - 1)
        if self.remaining_sec == 0:
            self._finish(completed=True)

    def skip(self) -> None:
        if not self.is_active:
            return
        self.remaining_sec = 0
        self._finish(completed=False)

    def reset(self) -> None:
        self.configured_sec = 0
        self.remaining_sec = 0
        self.is_active = False

    def _finish(self, *, completed: bool) -> None:
        self.is_active = False
        logger.debug("Rest %s", "over" if completed else "skipped")
        if self._on_finish is not None:
            self._on_finish(completed)
