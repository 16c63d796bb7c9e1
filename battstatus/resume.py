from __future__ import annotations

import logging
from typing import Optional

log = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
DEFAULT_SPAN_MINUTES = 3


class ResumeSuppressor:
    """Distrust the remaining lifetime for a short while after a wake.

    The first wake time seen predates the process and becomes the ignored
    baseline. Notices are deduplicated by wake time since the same value is
    observed on many consecutive ticks.
    """

    def __init__(self, *, span_minutes: float = DEFAULT_SPAN_MINUTES) -> None:
        self.span_seconds = span_minutes * SECONDS_PER_MINUTE
        self.ignore_this_waketime: Optional[float] = None
        self.prev_lastwake: Optional[float] = None
        self.recently_resumed = False
        self.suppress_lifetime = False
        self._baseline_seen = False

    def _settle(self) -> bool:
        self.recently_resumed = False
        self.suppress_lifetime = False
        return False

    def update(self, wake_tick: Optional[float], now: float) -> bool:
        """Run one tick. Return True the first time a fresh wake is seen."""
        if wake_tick is None:
            return self._settle()

        if not self._baseline_seen:
            self._baseline_seen = True
            self.ignore_this_waketime = wake_tick
            return self._settle()

        if wake_tick == self.ignore_this_waketime:
            return self._settle()

        if now - wake_tick >= self.span_seconds:
            self.ignore_this_waketime = wake_tick
            return self._settle()

        self.recently_resumed = True
        self.suppress_lifetime = True
        if wake_tick == self.prev_lastwake:
            return False
        self.prev_lastwake = wake_tick
        log.info("System recently resumed; ignoring battery lifetime for now")
        return True
