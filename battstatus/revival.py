from __future__ import annotations

import logging
from collections import deque
from typing import Optional

log = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
DEFAULT_MAX_CHANGES = 20
DEFAULT_SPAN_MINUTES = 30


class RevivalSuppressor:
    """Detect a battery flapping between charging and not charging.

    A revival is in progress once ``max_changes`` charge-state toggles have
    been seen within ``span_minutes``. The threshold is a count, not a rate:
    one toggle fewer never triggers no matter how fast they arrive.
    """

    def __init__(
        self,
        *,
        max_changes: int = DEFAULT_MAX_CHANGES,
        span_minutes: float = DEFAULT_SPAN_MINUTES,
        verbose: bool = False,
    ) -> None:
        self.max_changes = max_changes
        self.span_seconds = span_minutes * SECONDS_PER_MINUTE
        self.verbose = verbose
        self.toggles: deque[float] = deque(maxlen=max_changes)
        self.in_progress = False
        self.suppress_charge_state = False

    def update(
        self, prev_charging: Optional[bool], curr_charging: bool, now: float
    ) -> Optional[bool]:
        """Run one tick. Return True/False when a revival starts/ends, else None."""
        if self.toggles and now - self.toggles[-1] >= self.span_seconds:
            log.debug("No charge toggles for %.0fs; clearing window", now - self.toggles[-1])
            self.toggles.clear()

        if prev_charging is not None and prev_charging != curr_charging:
            self.toggles.append(now)

        active = (
            len(self.toggles) == self.max_changes
            and self.toggles[-1] - self.toggles[0] < self.span_seconds
        )
        # Verbose output wants every detail, so the state is tracked but not suppressed.
        self.suppress_charge_state = active and not self.verbose

        if active == self.in_progress:
            return None
        self.in_progress = active
        if active:
            log.warning(
                "Battery revival detected: %d charge state changes in under %d minutes",
                self.max_changes,
                self.span_seconds // SECONDS_PER_MINUTE,
            )
        else:
            log.info("Battery revival ended")
        return active
