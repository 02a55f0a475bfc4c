"""
Public API for emacraft library.
"""

from typing import Dict, Iterable, Optional

from .converter import CurrencyConverter
from .ema import ExponentialMovingAverage
from .models import DisplayInterval, EMAResult, QUOTE_DIVIDER
from .security import Security
from .utils.config import get_config


def calculate_ema(
    security: Optional[Security],
    interval: DisplayInterval,
    period: Optional[int] = None,
    converter: Optional[CurrencyConverter] = None,
    divider: int = QUOTE_DIVIDER,
) -> EMAResult:
    """
    Compute a single EMA line.
    
    Args:
        security: Price source
        interval: Display interval
        period: EMA range (defaults to the configured default period)
        converter: If given, prices are converted to its term currency first
        divider: Raw stored price units per display unit
    
    Returns:
        EMAResult clipped to the interval
    
    Raises:
        ConfigurationError: For an invalid period
        ConversionError: If a price cannot be converted
    """
    if period is None:
        period = get_config().default_period
    return ExponentialMovingAverage(
        period,
        security,
        interval,
        use_base_currency=converter is not None,
        converter=converter,
        divider=divider,
    ).get_ema()


def ema_lines(
    security: Optional[Security],
    interval: DisplayInterval,
    periods: Optional[Iterable[int]] = None,
    converter: Optional[CurrencyConverter] = None,
    divider: int = QUOTE_DIVIDER,
) -> Dict[int, ExponentialMovingAverage]:
    """
    Build one lazily evaluated EMA calculator per period.

    Nothing is computed until a calculator's ``get_ema()`` is called, so
    lines that are never drawn cost nothing.
    
    Args:
        security: Price source
        interval: Display interval
        periods: EMA ranges (defaults to the configured chart periods)
        converter: If given, prices are converted to its term currency first
        divider: Raw stored price units per display unit
    
    Returns:
        Dict of period -> calculator, in the order given
    """
    if periods is None:
        periods = get_config().periods
    return {
        period: ExponentialMovingAverage(
            period,
            security,
            interval,
            use_base_currency=converter is not None,
            converter=converter,
            divider=divider,
        )
        for period in periods
    }
