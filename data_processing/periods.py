# phl_dashboard/data_processing/periods.py
# PHL DASHBOARD - PERIOD AXIS & URL STATE RESOLUTION

"""
The period axis of a pivot table (calendar month or calendar year) and the
tolerant parsers that turn raw query-string values into filter state. A bad
value in the URL never raises; it falls back to the documented default.
"""

import logging
import re
from datetime import date
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from config import settings

logger = logging.getLogger(__name__)

TH_MONTHS: Tuple[str, ...] = tuple(settings.TH_MONTHS)
MONTHS: Tuple[int, ...] = tuple(range(1, 13))

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class PeriodAxis(str, Enum):
    MONTH = "month"
    YEAR = "year"


def parse_int(value: Any) -> Optional[int]:
    """Parses the leading integer of a query-string value, like `parseInt`."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def resolve_view(value: Any) -> PeriodAxis:
    return PeriodAxis.YEAR if str(value or "").strip().lower() == PeriodAxis.YEAR.value else PeriodAxis.MONTH


def resolve_year(value: Any, years: Sequence[int], today: Optional[date] = None) -> int:
    """The requested year, else the most recent year with data, else the current year."""
    parsed = parse_int(value)
    if parsed is not None:
        return parsed
    if years:
        return int(max(years))
    return (today or date.today()).year


def resolve_month(value: Any) -> Optional[int]:
    month = parse_int(value)
    return month if month in MONTHS else None


def resolve_choice(value: Any, choices: Sequence[str], default: Optional[str] = None) -> str:
    """Returns `value` when it is one of `choices`, otherwise the default (or the first choice)."""
    text = str(value).strip() if value is not None else ""
    if text in choices:
        return text
    return default if default is not None else choices[0]


def resolve_date(value: Any, default: date) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except (TypeError, ValueError):
        return default


def resolve_hos(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


def to_buddhist_year(year: int) -> int:
    return int(year) + settings.DISPLAY.buddhist_era_offset


def month_label(month: int) -> str:
    return TH_MONTHS[int(month) - 1] if int(month) in MONTHS else str(month)


def period_labels(axis: PeriodAxis, years: Sequence[int] = (), buddhist: bool = False) -> List[Tuple[int, str]]:
    """
    Column keys and header labels for a period axis.

    Month: the twelve calendar months with their fixed Thai abbreviations.
    Year: the given years in ascending order.
    """
    if axis == PeriodAxis.MONTH:
        return [(m, TH_MONTHS[m - 1]) for m in MONTHS]
    ordered = sorted({int(y) for y in years})
    return [(y, f"ปี {to_buddhist_year(y)}" if buddhist else str(y)) for y in ordered]
