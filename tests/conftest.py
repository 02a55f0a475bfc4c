"""
Pytest configuration and shared fixtures for testing
"""

import pytest
from datetime import date, timedelta
from typing import List
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from emacraft import QUOTE_DIVIDER, PricePoint, DisplayInterval, Security
from emacraft.utils.config import reset_config


def make_prices(start: date, closes: List[float], step: int = 1) -> List[PricePoint]:
    """Build PricePoints from display-unit closes, one every ``step`` days."""
    return [
        PricePoint(start + timedelta(days=i * step), round(close * QUOTE_DIVIDER))
        for i, close in enumerate(closes)
    ]


class CountingSecurity(Security):
    """Security that records how often the price history is read."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = 0

    def prices_including_latest(self):
        self.reads += 1
        return super().prices_including_latest()


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate tests from the caller's environment and cached config."""
    for variable in ("EMA_DEFAULT_PERIOD", "EMA_PERIODS", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(variable, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def four_day_security() -> Security:
    """Closes 100, 110, 90, 105 on four consecutive days from 2024-01-01."""
    return Security(
        "FOUR",
        "EUR",
        prices=make_prices(date(2024, 1, 1), [100.0, 110.0, 90.0, 105.0]),
    )


@pytest.fixture
def weekday_security() -> CountingSecurity:
    """Sixty weekday closes (weekends missing) starting Monday 2024-01-01."""
    prices = []
    day = date(2024, 1, 1)
    i = 0
    while len(prices) < 60:
        if day.weekday() < 5:
            close = 100.0 + (i % 10) * 0.5 - (i % 7) * 0.25
            prices.append(PricePoint(day, round(close * QUOTE_DIVIDER)))
            i += 1
        day += timedelta(days=1)
    return CountingSecurity("WEEKDAY", "EUR", prices=prices)


@pytest.fixture
def feb_interval() -> DisplayInterval:
    return DisplayInterval(date(2024, 2, 1), date(2024, 2, 29))
