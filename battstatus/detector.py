from __future__ import annotations

from enum import Enum
from typing import Optional

from .sample import PowerSample


class Verdict(Enum):
    EMIT = "emit"
    SKIP = "skip"


def decide(
    prev: Optional[PowerSample], curr: PowerSample, suppress_charge: bool
) -> Verdict:
    """Decide whether the status line should be re-emitted.

    Lifetime and power rate are ignored; they move on nearly every tick even
    when nothing material changed. The charging flag is ignored while charge
    state reporting is suppressed.
    """
    if prev is None:
        return Verdict.EMIT
    if prev.on_ac != curr.on_ac:
        return Verdict.EMIT
    if prev.battery_present != curr.battery_present:
        return Verdict.EMIT
    if prev.percent != curr.percent:
        return Verdict.EMIT
    if not suppress_charge and prev.charging != curr.charging:
        return Verdict.EMIT
    return Verdict.SKIP


def sample_changed(prev: Optional[PowerSample], curr: PowerSample) -> bool:
    """Compare every reported field, as the verbose dump does."""
    if prev is None:
        return True
    return (
        prev.on_ac,
        prev.battery_present,
        prev.charging,
        prev.percent,
        prev.lifetime_seconds,
        prev.battery_saver_on,
    ) != (
        curr.on_ac,
        curr.battery_present,
        curr.charging,
        curr.percent,
        curr.lifetime_seconds,
        curr.battery_saver_on,
    )
