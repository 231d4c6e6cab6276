# phl_dashboard/data_processing/rates.py
# PHL DASHBOARD - NULL-SAFE DERIVED RATES

"""
Derived rates used across the dashboards. A rate only exists when its
denominator is strictly positive; otherwise the result is None (scalars) or
NaN (Series), never zero and never infinite.
"""

import calendar
import logging
import math
from typing import Any, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def safe_rate(numerator: Any, denominator: Any) -> Optional[float]:
    """Returns numerator / denominator when the denominator is > 0, else None."""
    num, den = _as_float(numerator), _as_float(denominator)
    if num is None or den is None or den <= 0:
        return None
    return num / den


def safe_rate_series(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Vectorized safe_rate; cells with a missing or non-positive denominator become NaN."""
    num = pd.to_numeric(numerator, errors="coerce").astype(float)
    den = pd.to_numeric(denominator, errors="coerce").astype(float)
    rate = num / den.where(den > 0)
    return rate.replace([np.inf, -np.inf], np.nan)


def case_mix_index(sum_adjrw: Any, cases: Any) -> Optional[float]:
    """CMI = sum of adjusted relative weights / number of cases."""
    return safe_rate(sum_adjrw, cases)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(int(year), int(month))[1]


def available_bed_days(bed_count: Any, year: int, month: int) -> Optional[float]:
    beds = _as_float(bed_count)
    if beds is None:
        return None
    return beds * days_in_month(year, month)


def occupancy_rate(patient_days: Any, bed_count: Any, year: int, month: int) -> Optional[float]:
    """Bed occupancy % = patient days / (beds x days in month) x 100."""
    rate = safe_rate(patient_days, available_bed_days(bed_count, year, month))
    return None if rate is None else rate * 100.0
