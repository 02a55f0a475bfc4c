"""
Tests for the public convenience API.
"""

from datetime import date

import pytest

from emacraft import DisplayInterval, FixedRateConverter, calculate_ema, ema_lines
from emacraft.utils.exceptions import ConfigurationError

INTERVAL = DisplayInterval(date(2024, 1, 2), date(2024, 1, 4))


def test_calculate_ema(four_day_security):
    result = calculate_ema(four_day_security, INTERVAL, period=3)
    assert result.values == pytest.approx((107.5, 98.75, 101.875))


def test_calculate_ema_uses_configured_default_period(four_day_security, monkeypatch):
    monkeypatch.setenv("EMA_DEFAULT_PERIOD", "3")
    result = calculate_ema(four_day_security, INTERVAL)
    assert result.values == pytest.approx((107.5, 98.75, 101.875))


def test_calculate_ema_with_converter(four_day_security):
    result = calculate_ema(four_day_security, INTERVAL, period=3, converter=FixedRateConverter("USD", {"EUR": 2.0}))
    assert result.values == pytest.approx((215.0, 197.5, 203.75))


def test_calculate_ema_rejects_bad_period(four_day_security):
    with pytest.raises(ConfigurationError):
        calculate_ema(four_day_security, INTERVAL, period=0)


def test_ema_lines_are_lazy(weekday_security, feb_interval):
    lines = ema_lines(weekday_security, feb_interval, periods=[5, 20, 50])

    assert list(lines) == [5, 20, 50]
    assert weekday_security.reads == 0

    lines[20].get_ema()
    assert weekday_security.reads == 1
    assert not lines[5].is_calculated


def test_ema_lines_default_periods(weekday_security, feb_interval):
    lines = ema_lines(weekday_security, feb_interval)
    assert list(lines) == [5, 10, 20, 30, 38, 50, 90, 100, 200]


def test_longer_range_is_smoother(weekday_security, feb_interval):
    lines = ema_lines(weekday_security, feb_interval, periods=[2, 30])

    def spread(values):
        return max(values) - min(values)

    assert spread(lines[30].get_ema().values) < spread(lines[2].get_ema().values)
