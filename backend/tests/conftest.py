"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Deterministic UTC clock — returns ``now`` until advanced."""

    def __init__(self, start: datetime):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc))
