"""Shared fixtures."""

import os
import time
from datetime import datetime, timedelta, tzinfo

import pytest

from lingua_educate.models.progress import LearnerState
from lingua_educate.progress.clock import SystemClock
from lingua_educate.progress.tracker import ProgressTracker
from lingua_educate.reference.tables import LANGUAGES


class FrozenClock(SystemClock):
    """SystemClock pinned to a settable instant."""

    def __init__(self, now: datetime, tz: tzinfo | None = None):
        super().__init__(tz)
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 3, 10, 9, 30, 0))


@pytest.fixture
def tracker(clock):
    return ProgressTracker(LearnerState(languages=list(LANGUAGES)), clock=clock)


@pytest.fixture
def new_york_local_time():
    """Make America/New_York the process-local timezone for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()
