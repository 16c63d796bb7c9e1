from __future__ import annotations

import logging
from typing import Optional

from .config import MonitorConfig
from .decision import Notice, Report, battery_saver_toggled, choose_status
from .detector import Verdict, decide, sample_changed
from .lifetime import LifetimeAverager
from .resume import ResumeSuppressor
from .revival import RevivalSuppressor
from .sample import PowerSample

log = logging.getLogger(__name__)


class Monitor:
    """Owns all per-process state and turns one sample into one report.

    Samples must be fed in the order they were taken; every suppressor
    depends on ticks being monotonic.
    """

    def __init__(self, config: Optional[MonitorConfig] = None) -> None:
        self.config = config or MonitorConfig()
        self.revival = RevivalSuppressor(
            max_changes=self.config.revival_max_changes,
            span_minutes=self.config.revival_span_minutes,
            verbose=self.config.verbose,
        )
        self.resume = ResumeSuppressor(span_minutes=self.config.resume_span_minutes)
        self.lifetime = LifetimeAverager(self.config.lifetime_span_minutes)
        self.prev: Optional[PowerSample] = None

    def step(self, sample: PowerSample, wake_tick: Optional[float] = None) -> Report:
        prev = self.prev
        now = sample.timestamp
        notices: list[Notice] = []

        revival = self.revival.update(
            prev.charging if prev is not None else None, sample.charging, now
        )
        if revival is True:
            notices.append(Notice.REVIVAL_STARTED)
        elif revival is False:
            notices.append(Notice.REVIVAL_ENDED)

        if self.resume.update(wake_tick, now):
            notices.append(Notice.RECENTLY_RESUMED)

        average = self.lifetime.update(
            sample.lifetime_seconds, now, resumed=self.resume.recently_resumed
        )

        suppress_charge = self.revival.suppress_charge_state
        suppress_lifetime = self.resume.suppress_lifetime
        report = Report(
            sample=sample,
            battery_saver=battery_saver_toggled(prev, sample),
            notices=notices,
            suppress_charge_state=suppress_charge,
            suppress_lifetime=suppress_lifetime,
            recently_resumed=self.resume.recently_resumed,
        )
        if self.config.verbose:
            report.dump = sample_changed(prev, sample)

        if decide(prev, sample, suppress_charge) is Verdict.EMIT:
            report.status = choose_status(
                sample,
                suppress_charge_state=suppress_charge,
                suppress_lifetime=suppress_lifetime,
                average_lifetime=average,
            )
            log.debug("Status changed: %s", report.status.category.value)

        self.prev = sample
        return report
