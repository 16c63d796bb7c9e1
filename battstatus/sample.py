from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

AC_ONLINE = 1
FLAG_CHARGING = 8
FLAG_NO_BATTERY = 128
FLAG_UNKNOWN = 255
PERCENT_UNKNOWN = 255
LIFETIME_UNKNOWN = 0xFFFFFFFF
RATE_INVALID = 0x80000000


@dataclass(frozen=True)
class PowerSample:
    on_ac: bool
    battery_present: bool
    charging: bool
    percent: Optional[int]
    lifetime_seconds: Optional[int]
    battery_saver_on: Optional[bool]
    power_rate_mw: int
    timestamp: float


def _signed_rate(rate_mw: int) -> int:
    rate_mw &= 0xFFFFFFFF
    if rate_mw == RATE_INVALID:
        # Some batteries report this while charging; treat it as no reading.
        return 0
    if rate_mw & 0x80000000:
        return rate_mw - 0x100000000
    return rate_mw


def _battery_flags(battery_flag: int) -> tuple[bool, bool]:
    if battery_flag == FLAG_UNKNOWN:
        return False, False
    charging = bool(battery_flag & FLAG_CHARGING)
    no_battery = bool(battery_flag & FLAG_NO_BATTERY)
    return charging, no_battery


def from_system_power_status(
    *,
    ac_line_status: int,
    battery_flag: int,
    battery_life_percent: int,
    battery_life_time: int,
    system_status_flag: Optional[int],
    rate_mw: int,
    tick: float,
) -> PowerSample:
    """Translate a raw OS power status record, mapping sentinels to None."""
    charging, no_battery = _battery_flags(battery_flag)

    percent: Optional[int] = None
    if 0 <= battery_life_percent <= 100:
        percent = battery_life_percent
    elif battery_life_percent != PERCENT_UNKNOWN:
        log.debug("Undocumented battery percent value: %s", battery_life_percent)

    lifetime: Optional[int] = None
    if battery_life_time != LIFETIME_UNKNOWN and battery_life_time >= 0:
        lifetime = battery_life_time

    saver: Optional[bool] = None
    if system_status_flag is not None:
        if system_status_flag not in (0, 1):
            log.debug("Undocumented system status flag: %s", system_status_flag)
        saver = system_status_flag == 1

    return PowerSample(
        on_ac=ac_line_status == AC_ONLINE,
        battery_present=not no_battery,
        charging=charging,
        percent=percent,
        lifetime_seconds=lifetime,
        battery_saver_on=saver,
        power_rate_mw=_signed_rate(rate_mw),
        timestamp=tick,
    )
