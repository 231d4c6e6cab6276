# phl_dashboard/data_processing/__init__.py
# PHL DASHBOARD - DATA PROCESSING PACKAGE API

"""
Initializes the data_processing package, defining its public API.

Pure pandas reshaping only: pivoting, rates, ordering, period resolution,
formatting and the per-dashboard pipelines built on them. Nothing in this
package imports Streamlit or talks to the database.
"""

# --- Pivoting from pivot.py ---
from .pivot import (
    build_lookup,
    column_totals,
    count_matrix,
    pivot_metrics,
)

# --- Null-safe rates from rates.py ---
from .rates import (
    available_bed_days,
    case_mix_index,
    days_in_month,
    occupancy_rate,
    safe_rate,
    safe_rate_series,
)

# --- Facility ordering from ordering.py ---
from .ordering import (
    facility_presence,
    sort_facilities_by_volume,
    sort_facilities_by_year_presence,
    sort_rows_nulls_last,
    thai_sort_key,
)

# --- Period axis & URL state from periods.py ---
from .periods import (
    MONTHS,
    PeriodAxis,
    month_label,
    parse_int,
    period_labels,
    resolve_choice,
    resolve_date,
    resolve_hos,
    resolve_month,
    resolve_view,
    resolve_year,
    to_buddhist_year,
)

# --- Display formatting from formatting.py ---
from .formatting import (
    MISSING,
    display_hos_name,
    fmt_hour_minute,
    fmt_number,
    fmt_pct,
    format_bed_code,
    level_color,
    rate_band,
)


__all__ = [
    # pivot.py
    "build_lookup",
    "column_totals",
    "count_matrix",
    "pivot_metrics",

    # rates.py
    "available_bed_days",
    "case_mix_index",
    "days_in_month",
    "occupancy_rate",
    "safe_rate",
    "safe_rate_series",

    # ordering.py
    "facility_presence",
    "sort_facilities_by_volume",
    "sort_facilities_by_year_presence",
    "sort_rows_nulls_last",
    "thai_sort_key",

    # periods.py
    "MONTHS",
    "PeriodAxis",
    "month_label",
    "parse_int",
    "period_labels",
    "resolve_choice",
    "resolve_date",
    "resolve_hos",
    "resolve_month",
    "resolve_view",
    "resolve_year",
    "to_buddhist_year",

    # formatting.py
    "MISSING",
    "display_hos_name",
    "fmt_hour_minute",
    "fmt_number",
    "fmt_pct",
    "format_bed_code",
    "level_color",
    "rate_band",
]
