"""
Tests for the price, interval and result models.
"""

from datetime import date

import pytest

from emacraft import DisplayInterval, EMAResult, PricePoint, QUOTE_DIVIDER


def test_price_point_as_float():
    assert PricePoint(date(2024, 1, 1), 12_345 * QUOTE_DIVIDER // 100).as_float() == pytest.approx(123.45)
    assert PricePoint(date(2024, 1, 1), 250).as_float(divider=100) == 2.5


def test_price_point_dict_conversion():
    point = PricePoint(date(2024, 3, 15), 4_200_000_000)
    assert point.to_dict() == {"date": "2024-03-15", "value": 4_200_000_000}
    assert PricePoint.from_dict(point.to_dict()) == point
    assert PricePoint.from_dict({"date": date(2024, 3, 15), "value": "4200000000"}) == point


def test_interval_contains_is_inclusive():
    interval = DisplayInterval(date(2024, 1, 1), date(2024, 1, 31))
    assert interval.contains(date(2024, 1, 1))
    assert interval.contains(date(2024, 1, 31))
    assert not interval.contains(date(2023, 12, 31))
    assert not interval.contains(date(2024, 2, 1))


def test_interval_from_strings():
    interval = DisplayInterval.from_strings("2024-01-01", "2024-06-30")
    assert interval == DisplayInterval(date(2024, 1, 1), date(2024, 6, 30))

    with pytest.raises(ValueError):
        DisplayInterval.from_strings("2024/01/01", "2024-06-30")


def test_empty_result():
    result = EMAResult.empty()
    assert result.is_empty
    assert len(result) == 0
    assert result.last is None
    assert result.to_records() == []


def test_result_accessors():
    result = EMAResult((date(2024, 1, 2), date(2024, 1, 3)), (107.5, 98.75))
    assert not result.is_empty
    assert len(result) == 2
    assert result.last == (date(2024, 1, 3), 98.75)
    assert result.to_records() == [
        {"date": "2024-01-02", "ema": 107.5},
        {"date": "2024-01-03", "ema": 98.75},
    ]


def test_result_requires_aligned_sequences():
    with pytest.raises(ValueError):
        EMAResult((date(2024, 1, 2),), ())
