# phl_dashboard/data_processing/formatting.py
# PHL DASHBOARD - NULL-SAFE DISPLAY FORMATTING

import math
import re
from typing import Any, Optional

from config import settings

MISSING = "-"

_HOSPITAL_PREFIX = re.compile(r"^โรงพยาบาล\s*")


def _finite(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def fmt_number(value: Any, digits: int = 0) -> str:
    """th-TH number format: comma grouping and a fixed number of decimals; '-' when missing."""
    number = _finite(value)
    if number is None:
        return MISSING
    return f"{number:,.{digits}f}"


def fmt_pct(value: Any, digits: int = 1, scale: float = 1.0) -> str:
    """
    Percent display that never shows NaN% or Infinity%.

    `scale=100` turns a 0..1 ratio into a percentage.
    """
    number = _finite(value)
    if number is None:
        return MISSING
    scaled = number * scale
    if not math.isfinite(scaled):
        return MISSING
    return f"{scaled:,.{digits}f}%"


def fmt_hour_minute(total_minutes: Any) -> str:
    """Minutes rendered as 'X ชม Y นาที'."""
    minutes_total = _finite(total_minutes)
    if minutes_total is None:
        return MISSING
    hours = math.floor(minutes_total / 60)
    minutes = math.floor(minutes_total - hours * 60 + 0.5)
    if minutes == 60:
        hours, minutes = hours + 1, 0
    return f"{hours} ชม {minutes} นาที"


def display_hos_name(name: Any = None, short_name: Any = None, fallback: Optional[str] = None) -> str:
    """
    Facility display name: the short name when present, then the known
    special cases, then the full name with 'โรงพยาบาล' shortened to 'รพ.'.
    """
    short = str(short_name).strip() if isinstance(short_name, str) else ""
    if short:
        return short
    if not isinstance(name, str) or not name.strip():
        return fallback if fallback else MISSING
    raw = name.strip()
    for needle, alias in settings.HOSPITAL_NAME_ALIASES.items():
        if needle in raw:
            return alias
    return _HOSPITAL_PREFIX.sub("รพ.", raw, count=1)


def format_bed_code(code: Any) -> str:
    """Standard bed codes are shown by their last six characters."""
    if not isinstance(code, str) or not code:
        return MISSING
    return code[-6:]


def level_color(level: Any) -> str:
    if not isinstance(level, str):
        return settings.SP_LEVEL_FALLBACK_COLOR
    return settings.SP_LEVEL_COLORS.get(level.strip().upper(), settings.SP_LEVEL_FALLBACK_COLOR)


def rate_band(value: Any, good: float, warning: float, higher_is_better: bool = True) -> Optional[str]:
    """Classifies a value as 'good', 'warning' or 'poor'; None when missing."""
    number = _finite(value)
    if number is None:
        return None
    if higher_is_better:
        if number >= good:
            return "good"
        return "warning" if number >= warning else "poor"
    if number <= good:
        return "good"
    return "warning" if number <= warning else "poor"
