from dataclasses import replace

from battstatus.decision import (
    Category,
    StatusLine,
    battery_saver_toggled,
    choose_status,
)
from battstatus.sample import PowerSample


def _sample(**overrides) -> PowerSample:
    base = PowerSample(
        on_ac=False,
        battery_present=True,
        charging=False,
        percent=15,
        lifetime_seconds=1620,
        battery_saver_on=None,
        power_rate_mw=-11433,
        timestamp=0.0,
    )
    return replace(base, **overrides)


def _choose(sample: PowerSample, **kwargs) -> StatusLine:
    kwargs.setdefault("suppress_charge_state", False)
    kwargs.setdefault("suppress_lifetime", False)
    return choose_status(sample, **kwargs)


def test_no_battery_wins_over_everything():
    sample = _sample(battery_present=False, charging=True, on_ac=True)

    status = _choose(sample, suppress_charge_state=True)

    assert status.category is Category.NO_BATTERY


def test_charge_suppression_reports_percent_only():
    status = _choose(_sample(charging=True, on_ac=True), suppress_charge_state=True)

    assert status == StatusLine(Category.PERCENT_ONLY, 15, plugged_in=True)


def test_fully_charged():
    sample = _sample(
        percent=100, on_ac=True, lifetime_seconds=None, power_rate_mw=0
    )

    assert _choose(sample).category is Category.FULLY_CHARGED


def test_fully_charged_when_lifetime_suppressed():
    sample = _sample(percent=100, on_ac=True, power_rate_mw=0)

    assert _choose(sample).category is Category.PLUGGED_IN
    assert _choose(sample, suppress_lifetime=True).category is Category.FULLY_CHARGED


def test_full_with_power_flowing_is_plugged_in():
    sample = _sample(percent=100, on_ac=True, lifetime_seconds=None, power_rate_mw=5)

    status = _choose(sample)

    assert status == StatusLine(
        Category.PLUGGED_IN, 100, charging=False, plugged_in=True
    )


def test_charging_is_plugged_in():
    status = _choose(_sample(charging=True, on_ac=True, percent=80))

    assert status == StatusLine(Category.PLUGGED_IN, 80, charging=True, plugged_in=True)


def test_time_remaining_prefers_average():
    assert _choose(_sample()) == StatusLine(Category.TIME_REMAINING, 15, seconds=1620)
    assert _choose(_sample(), average_lifetime=1500).seconds == 1500


def test_suppressed_lifetime_falls_back_to_percent():
    status = _choose(_sample(), suppress_lifetime=True, average_lifetime=1500)

    assert status == StatusLine(Category.PERCENT_REMAINING, 15)


def test_unknown_lifetime_falls_back_to_percent():
    status = _choose(_sample(lifetime_seconds=None))

    assert status.category is Category.PERCENT_REMAINING


def test_battery_saver_toggle():
    off = _sample(battery_saver_on=False)
    on = _sample(battery_saver_on=True)

    assert battery_saver_toggled(off, on) is True
    assert battery_saver_toggled(on, off) is False
    assert battery_saver_toggled(on, on) is None
    assert battery_saver_toggled(None, on) is True
    assert battery_saver_toggled(None, off) is None
    assert battery_saver_toggled(on, _sample()) is None
