from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .sample import PowerSample


class Category(Enum):
    NO_BATTERY = "no_battery"
    PERCENT_ONLY = "percent_only"
    FULLY_CHARGED = "fully_charged"
    PLUGGED_IN = "plugged_in"
    TIME_REMAINING = "time_remaining"
    PERCENT_REMAINING = "percent_remaining"


class Notice(Enum):
    REVIVAL_STARTED = "revival_started"
    REVIVAL_ENDED = "revival_ended"
    RECENTLY_RESUMED = "recently_resumed"


@dataclass(frozen=True)
class StatusLine:
    category: Category
    percent: Optional[int]
    seconds: Optional[int] = None
    charging: bool = False
    plugged_in: bool = False


@dataclass
class Report:
    sample: PowerSample
    status: Optional[StatusLine] = None
    battery_saver: Optional[bool] = None
    notices: list[Notice] = field(default_factory=list)
    dump: bool = False
    suppress_charge_state: bool = False
    suppress_lifetime: bool = False
    recently_resumed: bool = False

    @property
    def changed(self) -> bool:
        return bool(
            self.status is not None
            or self.battery_saver is not None
            or self.notices
            or self.dump
        )


def choose_status(
    curr: PowerSample,
    *,
    suppress_charge_state: bool,
    suppress_lifetime: bool,
    average_lifetime: Optional[int] = None,
) -> StatusLine:
    """Pick the status line category. The first matching rule wins."""
    percent = curr.percent
    if not curr.battery_present:
        return StatusLine(Category.NO_BATTERY, percent)

    if suppress_charge_state:
        return StatusLine(Category.PERCENT_ONLY, percent, plugged_in=curr.on_ac)

    lifetime_known = curr.lifetime_seconds is not None and not suppress_lifetime
    if (
        percent == 100
        and not lifetime_known
        and curr.on_ac
        and not curr.charging
        and curr.power_rate_mw == 0
    ):
        return StatusLine(Category.FULLY_CHARGED, percent, plugged_in=True)

    if curr.charging or curr.on_ac:
        return StatusLine(
            Category.PLUGGED_IN,
            percent,
            charging=curr.charging,
            plugged_in=curr.on_ac,
        )

    if lifetime_known:
        seconds = average_lifetime if average_lifetime is not None else curr.lifetime_seconds
        return StatusLine(Category.TIME_REMAINING, percent, seconds=seconds)

    return StatusLine(Category.PERCENT_REMAINING, percent)


def battery_saver_toggled(
    prev: Optional[PowerSample], curr: PowerSample
) -> Optional[bool]:
    """Return the new battery saver state when it changed, else None."""
    if curr.battery_saver_on is None:
        return None
    previous = bool(prev.battery_saver_on) if prev is not None else False
    if curr.battery_saver_on == previous:
        return None
    return curr.battery_saver_on
