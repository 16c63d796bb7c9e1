from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, Iterator, Optional, Protocol

from .decision import Report
from .monitor import Monitor
from .sample import PowerSample, from_system_power_status

log = logging.getLogger(__name__)

TRACE_KEYS = (
    "tick",
    "ac_line_status",
    "battery_flag",
    "battery_life_percent",
    "battery_life_time",
    "rate_mw",
)


class SampleError(Exception):
    """A power status reading could not be taken."""


class PowerSource(Protocol):
    def next_sample(self) -> PowerSample: ...

    def last_wake_tick(self) -> Optional[float]: ...


def sample_from_record(record: dict) -> tuple[PowerSample, Optional[float]]:
    missing = [key for key in TRACE_KEYS if key not in record]
    if missing:
        raise SampleError(f"missing keys: {', '.join(missing)}")
    sample = from_system_power_status(
        ac_line_status=int(record["ac_line_status"]),
        battery_flag=int(record["battery_flag"]),
        battery_life_percent=int(record["battery_life_percent"]),
        battery_life_time=int(record["battery_life_time"]),
        system_status_flag=record.get("system_status_flag"),
        rate_mw=int(record["rate_mw"]),
        tick=float(record["tick"]),
    )
    wake = record.get("last_wake")
    return sample, (float(wake) if wake is not None else None)


class TraceSource:
    """Serve a recorded JSON-lines trace through the PowerSource protocol."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lines = self._read_lines(path)
        self._wake: Optional[float] = None

    @staticmethod
    def _read_lines(path: Path) -> Iterator[tuple[int, str]]:
        with path.open() as handle:
            for number, line in enumerate(handle, start=1):
                if line.strip():
                    yield number, line

    def next_sample(self) -> PowerSample:
        number, line = next(self._lines)
        try:
            record = json.loads(line)
            sample, self._wake = sample_from_record(record)
        except (json.JSONDecodeError, TypeError, ValueError, SampleError) as exc:
            raise SampleError(f"{self.path}:{number}: {exc}") from exc
        return sample

    def last_wake_tick(self) -> Optional[float]:
        return self._wake


def watch(
    source: PowerSource,
    monitor: Monitor,
    *,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
    limit: Optional[int] = None,
) -> Iterator[Report]:
    """Poll ``source`` and yield one report per tick, in sampling order."""
    previous: Optional[PowerSample] = None
    ticks = 0
    while limit is None or ticks < limit:
        ticks += 1
        try:
            sample = source.next_sample()
        except StopIteration:
            return
        except SampleError as exc:
            log.warning("Failed to read power status: %s", exc)
            sample = previous
        if sample is not None:
            yield monitor.step(sample, source.last_wake_tick())
            previous = sample
        if interval:
            sleep(interval)
