"""
Calendar arithmetic on ISO ``YYYY-MM-DD`` strings.

Dates are converted to proleptic Gregorian day ordinals, shifted, and
formatted back, so month lengths, leap years (divisible by 4 and not by 100,
or divisible by 400) and year rollover are always correct. The output is
zero-padded and fixed-width, which keeps string comparison equal to
chronological comparison.

Malformed input never raises. Each component that cannot be read falls back
to a fixed value (year 2024, month 1, day 1) and a warning is logged.
"""

import logging
from datetime import date

from lexis.domain.constants import FALLBACK_DAY, FALLBACK_MONTH, FALLBACK_YEAR

logger = logging.getLogger(__name__)

FALLBACK_DATE = date(FALLBACK_YEAR, FALLBACK_MONTH, FALLBACK_DAY)

_MIN_ORDINAL = date.min.toordinal()
_MAX_ORDINAL = date.max.toordinal()


def _parse_component(raw: str, fallback: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= 0 else fallback


def to_ordinal(text: str) -> int:
    """
    Convert a date string to a day ordinal.

    A day past the end of its month rolls into the following month(s), e.g.
    ``2024-02-31`` is read as ``2024-03-02``. Months outside 1-12 are clamped.
    """
    parts = text.strip().split("-")
    if len(parts) != 3:
        logger.warning(f"Malformed date '{text}', using {FALLBACK_DATE.isoformat()}")
        return FALLBACK_DATE.toordinal()

    year = _parse_component(parts[0], FALLBACK_YEAR)
    month = _parse_component(parts[1], FALLBACK_MONTH)
    day = _parse_component(parts[2], FALLBACK_DAY)

    if not (date.min.year <= year <= date.max.year):
        logger.warning(f"Year out of range in '{text}', using {FALLBACK_YEAR}")
        year = FALLBACK_YEAR
    month = min(max(month, 1), 12)

    ordinal = date(year, month, 1).toordinal() + (day - 1)
    return min(max(ordinal, _MIN_ORDINAL), _MAX_ORDINAL)


def from_ordinal(ordinal: int) -> str:
    ordinal = min(max(ordinal, _MIN_ORDINAL), _MAX_ORDINAL)
    return date.fromordinal(ordinal).isoformat()


def parse_iso_date(text: str) -> date:
    """Parse a date string, applying the documented fallbacks."""
    return date.fromordinal(to_ordinal(text))


def format_iso_date(value: date) -> str:
    return value.isoformat()


def add_days(text: str, days: int) -> str:
    """Return ``text`` shifted by ``days`` calendar days.

    >>> add_days("2024-02-28", 1)
    '2024-02-29'
    >>> add_days("2023-12-31", 1)
    '2024-01-01'
    """
    return from_ordinal(to_ordinal(text) + days)


def days_between(start: str, end: str) -> int:
    """Signed number of days from ``start`` to ``end``."""
    return to_ordinal(end) - to_ordinal(start)
