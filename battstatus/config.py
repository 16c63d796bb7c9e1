from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from typer.models import OptionInfo

from .resume import DEFAULT_SPAN_MINUTES as DEFAULT_RESUME_SPAN_MINUTES
from .revival import DEFAULT_MAX_CHANGES as DEFAULT_REVIVAL_MAX_CHANGES
from .revival import DEFAULT_SPAN_MINUTES as DEFAULT_REVIVAL_SPAN_MINUTES

LIFETIME_SPAN_ENV = "BATTSTATUS_LIFETIME_SPAN"


@dataclass(frozen=True)
class MonitorConfig:
    lifetime_span_minutes: int = 0
    verbose: bool = False
    revival_max_changes: int = DEFAULT_REVIVAL_MAX_CHANGES
    revival_span_minutes: int = DEFAULT_REVIVAL_SPAN_MINUTES
    resume_span_minutes: int = DEFAULT_RESUME_SPAN_MINUTES


def _validate_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must be zero or greater")


def _validate_at_least(value: int, minimum: int, name: str) -> None:
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}")


def build_config(
    *,
    lifetime_span_minutes: int = 0,
    verbose: bool = False,
    revival_max_changes: int = DEFAULT_REVIVAL_MAX_CHANGES,
    revival_span_minutes: int = DEFAULT_REVIVAL_SPAN_MINUTES,
    resume_span_minutes: int = DEFAULT_RESUME_SPAN_MINUTES,
) -> MonitorConfig:
    """Build a validated monitor configuration."""
    _validate_non_negative(lifetime_span_minutes, "lifetime_span_minutes")
    _validate_at_least(revival_max_changes, 2, "revival_max_changes")
    _validate_at_least(revival_span_minutes, 1, "revival_span_minutes")
    _validate_at_least(resume_span_minutes, 1, "resume_span_minutes")
    return MonitorConfig(
        lifetime_span_minutes=lifetime_span_minutes,
        verbose=verbose,
        revival_max_changes=revival_max_changes,
        revival_span_minutes=revival_span_minutes,
        resume_span_minutes=resume_span_minutes,
    )


def resolve_lifetime_span(value: Optional[int]) -> int:
    if isinstance(value, OptionInfo):
        value = value.default

    if isinstance(value, int):
        return value
    env = os.environ.get(LIFETIME_SPAN_ENV)
    if env:
        try:
            return int(env)
        except ValueError:
            raise ValueError(
                f"{LIFETIME_SPAN_ENV} must be a whole number of minutes, got {env!r}"
            ) from None
    return 0
