from battstatus.revival import RevivalSuppressor

MINUTE = 60.0


def _toggle(suppressor: RevivalSuppressor, count: int, *, start: float, step: float):
    """Feed ``count`` charge state flips, one per tick, ``step`` seconds apart."""
    transitions = []
    charging = False
    now = start
    for _ in range(count):
        transitions.append(suppressor.update(charging, not charging, now))
        charging = not charging
        now += step
    return transitions, now - step


def test_twenty_quick_toggles_start_a_revival():
    suppressor = RevivalSuppressor()

    transitions, _ = _toggle(suppressor, 20, start=0.0, step=10.0)

    assert suppressor.in_progress is True
    assert suppressor.suppress_charge_state is True
    assert transitions[-1] is True
    assert transitions[:-1] == [None] * 19


def test_nineteen_toggles_never_trigger():
    suppressor = RevivalSuppressor()

    _toggle(suppressor, 19, start=0.0, step=0.1)

    assert suppressor.suppress_charge_state is False
    assert len(suppressor.toggles) == 19


def test_twenty_toggles_over_more_than_span_do_not_trigger():
    suppressor = RevivalSuppressor()

    # 19 gaps of 2 minutes = 38 minutes between first and last toggle.
    _toggle(suppressor, 20, start=0.0, step=2 * MINUTE)

    assert len(suppressor.toggles) == 20
    assert suppressor.suppress_charge_state is False


def test_quiet_period_ends_the_revival():
    suppressor = RevivalSuppressor()
    _, last = _toggle(suppressor, 20, start=0.0, step=5.0)
    assert suppressor.suppress_charge_state is True

    assert suppressor.update(True, True, last + 29 * MINUTE) is None
    assert suppressor.suppress_charge_state is True

    assert suppressor.update(True, True, last + 30 * MINUTE) is False
    assert suppressor.suppress_charge_state is False
    assert len(suppressor.toggles) == 0


def test_window_is_bounded_and_evicts_oldest():
    suppressor = RevivalSuppressor()

    _toggle(suppressor, 25, start=0.0, step=1.0)

    assert len(suppressor.toggles) == 20
    assert suppressor.toggles[0] == 5.0


def test_steady_charging_is_not_a_toggle():
    suppressor = RevivalSuppressor()

    for tick in range(50):
        suppressor.update(True, True, float(tick))
    suppressor.update(None, True, 50.0)

    assert len(suppressor.toggles) == 0


def test_verbose_tracks_without_suppressing():
    suppressor = RevivalSuppressor(verbose=True)

    transitions, _ = _toggle(suppressor, 20, start=0.0, step=1.0)

    assert suppressor.in_progress is True
    assert suppressor.suppress_charge_state is False
    assert transitions[-1] is True
