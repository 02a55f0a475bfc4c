"""
Currency conversion collaborators.

The EMA calculator never interprets a converter; it only hands it to
``Security.maybe_convert_currency``.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict

from .utils.exceptions import ConversionError


class CurrencyConverter(ABC):
    """
    Converts fixed-point amounts into ``term_currency``.

    Implementations must be pure reads: converting the same amount on the
    same date twice gives the same result.
    """

    def __init__(self, term_currency: str):
        self.term_currency = term_currency

    @abstractmethod
    def convert(self, on_date: date, amount: int, currency_code: str) -> int:
        """
        Convert ``amount`` (raw units of ``currency_code``) into the term currency.

        Raises:
            ConversionError: If no rate is available
        """
        pass


class FixedRateConverter(CurrencyConverter):
    """Converter with one constant rate per source currency."""

    def __init__(self, term_currency: str, rates: Dict[str, float]):
        super().__init__(term_currency)
        self.rates = dict(rates)

    def convert(self, on_date: date, amount: int, currency_code: str) -> int:
        if currency_code == self.term_currency:
            return amount
        rate = self.rates.get(currency_code)
        if rate is None:
            raise ConversionError(
                f"No exchange rate from {currency_code} to {self.term_currency} "
                f"for {on_date.isoformat()}"
            )
        return round(amount * rate)
