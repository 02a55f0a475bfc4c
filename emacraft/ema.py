"""
Exponential Moving Average over a security's price history.

Compared to the Simple Moving Average, the EMA puts more emphasis on recent
values and discounts older values faster. Each step needs only the previous
EMA and a smoothing factor derived from the number of periods in the range::

    smoothing_factor = 2 / (range + 1)
    EMA(t) = value(t) * smoothing_factor + EMA(t-1) * (1 - smoothing_factor)
"""

import threading
from bisect import bisect_left
from datetime import date
from typing import List, Optional

from .converter import CurrencyConverter
from .models import DisplayInterval, EMAResult, PricePoint, QUOTE_DIVIDER
from .security import Security
from .utils.exceptions import ConfigurationError
from .utils.logger import get_logger

logger = get_logger("ema")


class ExponentialMovingAverage:
    """
    EMA line of a security, clipped to a display interval.

    Construction only stores the configuration. The curve is computed on the
    first call to ``get_ema()`` and cached for the lifetime of the instance.
    The recurrence runs over the whole history up to ``interval.end``, so
    prices before ``interval.start`` warm it up without being returned.
    """

    def __init__(
        self,
        range_ema: int,
        security: Optional[Security],
        interval: DisplayInterval,
        use_base_currency: bool = False,
        converter: Optional[CurrencyConverter] = None,
        divider: int = QUOTE_DIVIDER,
    ):
        """
        Args:
            range_ema: Number of periods to average, must be >= 1
            security: Price source; None yields an empty result
            interval: Dates for which EMA values are returned
            use_base_currency: Convert prices with ``converter`` first
            converter: Currency converter passed to the security
            divider: Raw stored price units per display unit

        Raises:
            ConfigurationError: If range_ema < 1, divider is not a positive integer or interval is None
        """
        if isinstance(range_ema, bool) or not isinstance(range_ema, int) or range_ema < 1:
            raise ConfigurationError(f"EMA range must be a positive integer, got {range_ema!r}")
        if interval is None:
            raise ConfigurationError("EMA requires a display interval")
        if isinstance(divider, bool) or not isinstance(divider, int) or divider < 1:
            raise ConfigurationError(f"Quote divider must be a positive integer, got {divider!r}")

        self.range_ema = range_ema
        self.smoothing_factor = 2.0 / (range_ema + 1)
        self.security = security
        self.interval = interval
        self.use_base_currency = use_base_currency
        self.converter = converter
        self.divider = divider

        self._result: Optional[EMAResult] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"ExponentialMovingAverage(range_ema={self.range_ema}, "
            f"security={self.security!r}, interval={self.interval!r})"
        )

    def get_ema(self) -> EMAResult:
        """
        Return the EMA curve, computing it on first access.

        Repeated and concurrent calls return the same EMAResult object.
        """
        result = self._result
        if result is None:
            with self._lock:
                if self._result is None:
                    self._result = self._calculate()
                result = self._result
        return result

    @property
    def result(self) -> EMAResult:
        return self.get_ema()

    @property
    def is_calculated(self) -> bool:
        return self._result is not None

    def _load_prices(self) -> List[PricePoint]:
        prices = self.security.prices_including_latest()
        if not prices:
            return []
        if self.use_base_currency:
            prices = self.security.maybe_convert_currency(self.converter, prices)
        return prices

    def _calculate(self) -> EMAResult:
        if self.security is None:
            return EMAResult.empty()

        prices = self._load_prices()
        start, end = self.interval.start, self.interval.end

        index = bisect_left(prices, start, key=lambda p: p.date)
        if index >= len(prices):
            logger.debug(f"No prices for {self.security.name} on or after {start}")
            return EMAResult.empty()

        # seed the running EMA with the first value inside the interval
        ema = prices[index].value / self.divider
        factor = self.smoothing_factor

        dates: List[date] = []
        values: List[float] = []
        for price in prices:
            if price.date > end:
                break

            ema = (price.value / self.divider * factor) + (ema * (1 - factor))

            if price.date < start:
                continue

            dates.append(price.date)
            values.append(ema)

        logger.debug(
            f"EMA({self.range_ema}) for {self.security.name} "
            f"[{start} .. {end}]: {len(dates)} points"
        )
        return EMAResult(tuple(dates), tuple(values))
