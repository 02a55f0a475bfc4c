"""
Security: an instrument with a dated price history.

The history is kept sorted by date with at most one price per date. A separate
``latest`` quote (e.g. today's live price) is merged in on read.
"""

import csv
from bisect import bisect_left
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional, Union

from .converter import CurrencyConverter
from .models import PricePoint, QUOTE_DIVIDER
from .utils.exceptions import PriceDataError
from .utils.logger import get_logger

logger = get_logger("security")


def _by_date(point: PricePoint) -> date:
    return point.date


class Security:
    """
    A tradable instrument and its price history.
    
    Attributes:
        name: Display name (e.g. 'ACME Corp')
        currency_code: ISO currency of the prices, or None if unknown
        latest: Most recent live quote, possibly newer than the history
    """

    def __init__(
        self,
        name: str,
        currency_code: Optional[str] = None,
        prices: Optional[List[PricePoint]] = None,
        latest: Optional[PricePoint] = None,
    ):
        self.name = name
        self.currency_code = currency_code
        self.latest = latest
        self._prices: List[PricePoint] = []
        for point in prices or []:
            self.add_price(point)

    def __repr__(self) -> str:
        return f"Security({self.name!r}, {self.currency_code!r}, {len(self._prices)} prices)"

    @property
    def prices(self) -> List[PricePoint]:
        """Historic prices ordered by date (a copy)."""
        return list(self._prices)

    def add_price(self, point: PricePoint) -> bool:
        """
        Insert a price, replacing any existing price for the same date.

        Returns:
            True if the history changed
        """
        index = bisect_left(self._prices, point.date, key=_by_date)
        if index < len(self._prices) and self._prices[index].date == point.date:
            if self._prices[index] == point:
                return False
            self._prices[index] = point
            return True
        self._prices.insert(index, point)
        return True

    def set_latest(self, point: Optional[PricePoint]) -> None:
        self.latest = point

    def prices_including_latest(self) -> List[PricePoint]:
        """
        Historic prices plus the latest quote.

        The latest quote is inserted in date order only if no historic price
        exists for its date.
        """
        if self.latest is None:
            return self.prices

        index = bisect_left(self._prices, self.latest.date, key=_by_date)
        if index < len(self._prices) and self._prices[index].date == self.latest.date:
            return self.prices

        prices = self.prices
        prices.insert(index, self.latest)
        return prices

    def maybe_convert_currency(
        self,
        converter: Optional[CurrencyConverter],
        prices: List[PricePoint],
    ) -> List[PricePoint]:
        """
        Convert ``prices`` into the converter's term currency.

        Returns ``prices`` unchanged when there is no converter, the security
        has no currency, or it is already quoted in the term currency.
        Otherwise returns a new list of the same length and dates.

        Raises:
            ConversionError: If the converter has no rate for a date
        """
        if converter is None or self.currency_code is None:
            return prices
        if converter.term_currency == self.currency_code:
            return prices

        return [
            PricePoint(p.date, converter.convert(p.date, p.value, self.currency_code))
            for p in prices
        ]

    @classmethod
    def from_csv(
        cls,
        path: Union[str, Path],
        name: Optional[str] = None,
        currency_code: Optional[str] = None,
        divider: int = QUOTE_DIVIDER,
    ) -> "Security":
        """
        Load a security from a CSV file with a ``date`` column and a
        ``close`` (or ``value``) column in display units.

        Args:
            path: CSV file path
            name: Security name (defaults to the file stem)
            currency_code: Currency of the prices
            divider: Raw stored units per display unit

        Returns:
            Security with the loaded history

        Raises:
            PriceDataError: If the file is missing or a row cannot be parsed
        """
        path = Path(path)
        security = cls(name or path.stem, currency_code)

        try:
            with path.open(newline="", encoding="utf-8") as handle:
                reader = csv.DictReader(handle)
                fields = reader.fieldnames or []
                if "date" not in fields:
                    raise PriceDataError(f"{path}: missing 'date' column")
                column = "close" if "close" in fields else "value"
                if column not in fields:
                    raise PriceDataError(f"{path}: missing 'close' or 'value' column")

                for line_no, row in enumerate(reader, start=2):
                    try:
                        day = datetime.strptime(row["date"].strip(), "%Y-%m-%d").date()
                        amount = Decimal(row[column].strip())
                        if not amount.is_finite():
                            raise ValueError(f"non-finite price {amount}")
                        value = int(amount * divider)
                    except (ValueError, InvalidOperation, AttributeError) as e:
                        raise PriceDataError(f"{path}:{line_no}: invalid price row {row}: {e}") from e
                    security.add_price(PricePoint(day, value))
        except OSError as e:
            raise PriceDataError(f"Cannot read price file {path}: {e}") from e
        except (UnicodeDecodeError, csv.Error) as e:
            raise PriceDataError(f"Malformed price file {path}: {e}") from e

        logger.info(f"Loaded {len(security.prices)} prices for {security.name} from {path}")
        return security
