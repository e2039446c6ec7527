"""Month-keyed climate reference bands used by the seasonal rules."""

from __future__ import annotations

from datetime import date
from types import MappingProxyType

from .models import SeasonalRange

SEASONAL_RANGES: MappingProxyType[int, SeasonalRange] = MappingProxyType(
    {
        1: SeasonalRange(high=19, low=12),
        2: SeasonalRange(high=20, low=13),
        3: SeasonalRange(high=23, low=16),
        4: SeasonalRange(high=26, low=19),
        5: SeasonalRange(high=29, low=22),
        6: SeasonalRange(high=31, low=24),
        7: SeasonalRange(high=33, low=26),
        8: SeasonalRange(high=32, low=26),
        9: SeasonalRange(high=31, low=24),
        10: SeasonalRange(high=28, low=22),
        11: SeasonalRange(high=24, low=18),
        12: SeasonalRange(high=20, low=14),
    }
)


def seasonal_range(month: int) -> SeasonalRange:
    """Return the reference band for a month number (1-12)."""
    try:
        return SEASONAL_RANGES[month]
    except KeyError as exc:
        raise ValueError(f"Month must be between 1 and 12, got {month!r}.") from exc


def seasonal_range_for(day: date) -> SeasonalRange:
    """Return the reference band for the month containing `day`."""
    return seasonal_range(day.month)
