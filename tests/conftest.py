"""Shared fixtures for the Wing Planner tests."""

from datetime import datetime, timedelta, timezone

import pytest

from models.sauce import Sauce, SauceCategory
from models.wings import WingDistribution


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 11, 3, 18, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, hours):
        self.now = self.now + timedelta(hours=hours)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def buffalo():
    return Sauce(id="buffalo", name="Buffalo", category=SauceCategory.SIGNATURE_SAUCE, heat_level=3)


@pytest.fixture
def bbq():
    return Sauce(id="bbq", name="BBQ", category=SauceCategory.SIGNATURE_SAUCE, heat_level=1)


@pytest.fixture
def lemon_pepper():
    return Sauce(
        id="lemon-pepper",
        name="Lemon Pepper",
        category=SauceCategory.DRY_RUB,
        is_dry_rub=True,
    )


@pytest.fixture
def distribution_50_30():
    """50 boneless, 30 bone-in, no cauliflower."""
    return WingDistribution(boneless=50, bone_in=30, cauliflower=0)
