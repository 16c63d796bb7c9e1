from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60


@dataclass
class LifetimeEntry:
    seconds: int
    tick: float


class LifetimeAverager:
    """Smooth the OS remaining-lifetime estimate over the trailing N minutes.

    The window holds roughly one entry per minute. Each entry's value is aged
    by the seconds elapsed since it was recorded before the entries are
    averaged uniformly. A span of 0 disables averaging.
    """

    def __init__(self, span_minutes: int = 0) -> None:
        self.span_minutes = span_minutes
        self.entries: list[LifetimeEntry] = []

    @property
    def enabled(self) -> bool:
        return self.span_minutes > 0

    def clear(self) -> None:
        if self.entries:
            log.debug("Lifetime window cleared (%d entries)", len(self.entries))
        self.entries.clear()

    def _purge(self, now: float) -> None:
        span_seconds = self.span_minutes * SECONDS_PER_MINUTE
        self.entries = [e for e in self.entries if now - e.tick <= span_seconds]

    def _fill_gap(self, now: float) -> None:
        last = self.entries[-1]
        gap_minutes = int((now - last.tick) // SECONDS_PER_MINUTE)
        seconds = last.seconds
        for minute in range(1, gap_minutes):
            seconds = max(1, seconds - SECONDS_PER_MINUTE)
            self.entries.append(
                LifetimeEntry(seconds=seconds, tick=last.tick + minute * SECONDS_PER_MINUTE)
            )

    def update(
        self, lifetime_seconds: Optional[int], now: float, *, resumed: bool = False
    ) -> Optional[int]:
        """Record a reading and return the smoothed lifetime, or None."""
        if not self.enabled:
            return None

        if not lifetime_seconds or resumed:
            # Blending values from both sides of a discontinuity corrupts the average.
            self.clear()
            return None

        self._purge(now)

        if self.entries and now - self.entries[-1].tick < SECONDS_PER_MINUTE:
            last = self.entries[-1]
            last.seconds = max(1, (last.seconds + lifetime_seconds) // 2)
        else:
            if self.entries:
                self._fill_gap(now)
            self.entries.append(LifetimeEntry(seconds=lifetime_seconds, tick=now))

        return self.average(now)

    def average(self, now: float) -> Optional[int]:
        if not self.entries:
            return None
        total = 0
        for entry in self.entries:
            elapsed = int(now - entry.tick)
            total += max(1, entry.seconds - elapsed)
        return max(1, total // len(self.entries))
