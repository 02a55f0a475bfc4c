"""
emacraft - Exponential Moving Average lines for price charts.

Computes the EMA of a security's price history for a display interval,
warming the average up on the history before the interval and optionally
converting prices into another currency first.
"""

from emacraft.models import QUOTE_DIVIDER, PricePoint, DisplayInterval, EMAResult
from emacraft.converter import CurrencyConverter, FixedRateConverter
from emacraft.security import Security
from emacraft.ema import ExponentialMovingAverage
from emacraft.api import calculate_ema, ema_lines

__version__ = "0.1.0"
__all__ = [
    "QUOTE_DIVIDER",
    "PricePoint",
    "DisplayInterval",
    "EMAResult",
    "CurrencyConverter",
    "FixedRateConverter",
    "Security",
    "ExponentialMovingAverage",
    "calculate_ema",
    "ema_lines",
]
