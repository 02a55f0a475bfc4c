"""
Data models for emacraft.

Prices are stored as fixed-point integers: a raw value of ``QUOTE_DIVIDER``
represents one unit of the instrument's currency.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

# Raw stored price units per displayed unit (8 implied decimals)
QUOTE_DIVIDER = 100_000_000


@dataclass(frozen=True)
class PricePoint:
    """A single quote: the price of an instrument on a calendar date."""
    date: date
    value: int

    def as_float(self, divider: int = QUOTE_DIVIDER) -> float:
        """Return the value in display units."""
        return self.value / divider

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PricePoint":
        day = data["date"]
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return cls(date=day, value=int(data["value"]))


@dataclass(frozen=True)
class DisplayInterval:
    """
    Inclusive date window a chart shows.

    ``start <= end`` is the caller's responsibility and is not checked.
    """
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def from_strings(cls, start: str, end: str) -> "DisplayInterval":
        """
        Build an interval from two ``YYYY-MM-DD`` strings.

        Raises:
            ValueError: If either string is not a valid date
        """
        return cls(
            start=datetime.strptime(start, "%Y-%m-%d").date(),
            end=datetime.strptime(end, "%Y-%m-%d").date(),
        )


@dataclass(frozen=True)
class EMAResult:
    """
    EMA curve clipped to a display interval.

    ``dates`` and ``values`` are index-aligned; ``values[i]`` is the EMA as of
    ``dates[i]``. An empty result means there is nothing to draw.
    """
    dates: Tuple[date, ...] = ()
    values: Tuple[float, ...] = ()

    def __post_init__(self):
        if len(self.dates) != len(self.values):
            raise ValueError(
                f"dates and values must have the same length "
                f"({len(self.dates)} != {len(self.values)})"
            )

    @classmethod
    def empty(cls) -> "EMAResult":
        return cls()

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def is_empty(self) -> bool:
        return not self.dates

    @property
    def last(self) -> Optional[Tuple[date, float]]:
        """The most recent (date, value) pair, or None when empty."""
        if self.is_empty:
            return None
        return self.dates[-1], self.values[-1]

    def to_records(self) -> List[Dict[str, Any]]:
        return [
            {"date": day.isoformat(), "ema": value}
            for day, value in zip(self.dates, self.values)
        ]
