# phl_dashboard/data_processing/pivot.py
# PHL DASHBOARD - ROW-TO-PIVOT RESHAPING

"""
Turns flat query rows of (facility, period, metrics...) into dense
facility x period matrices.

Every facility passed in appears as a row and every period passed in appears
as a column group, whether or not the query returned anything for it. Cells
with no source row are NaN ("no data"), never zero.
"""

import logging
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

MetricBag = Dict[str, Any]


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def build_lookup(
    df: pd.DataFrame,
    key: str = "hoscode",
    subkey: str = "m",
    metrics: Optional[Sequence[str]] = None,
) -> Dict[Any, Dict[Any, MetricBag]]:
    """
    Groups rows into `{facility: {period: {metric: value}}}`.

    Rows with a null period are skipped. When two rows share a key, the later
    row wins.
    """
    lookup: Dict[Any, Dict[Any, MetricBag]] = {}
    if not isinstance(df, pd.DataFrame) or df.empty or key not in df.columns or subkey not in df.columns:
        return lookup
    fields = list(metrics) if metrics is not None else [c for c in df.columns if c not in (key, subkey)]
    for record in df.to_dict("records"):
        period = record.get(subkey)
        if _is_missing(period):
            continue
        if isinstance(period, float) and period.is_integer():
            period = int(period)
        lookup.setdefault(record[key], {})[period] = {f: record.get(f) for f in fields}
    return lookup


def pivot_metrics(
    df: pd.DataFrame,
    facilities: Sequence[Any],
    periods: Sequence[Any],
    metrics: Sequence[str],
    key: str = "hoscode",
    period_col: str = "m",
) -> pd.DataFrame:
    """
    Dense facility x (period, metric) matrix.

    The index is exactly `facilities` in the given order; the columns are a
    MultiIndex of (period, metric) over exactly `periods` x `metrics`.
    """
    columns = pd.MultiIndex.from_product([list(periods), list(metrics)], names=["period", "metric"])
    index = pd.Index(list(facilities), name=key)
    empty = pd.DataFrame(np.nan, index=index, columns=columns)

    if not isinstance(df, pd.DataFrame) or df.empty:
        return empty
    missing_cols = {key, period_col, *metrics} - set(df.columns)
    if missing_cols:
        logger.warning(f"pivot_metrics: source rows lack columns {sorted(missing_cols)}; returning an empty matrix.")
        return empty

    data = df.dropna(subset=[period_col]).copy()
    if data.empty:
        return empty
    if periods and all(isinstance(p, (int, np.integer)) for p in periods):
        data[period_col] = data[period_col].astype("int64")
    data = data.drop_duplicates(subset=[key, period_col], keep="last")

    wide = data.set_index([key, period_col])[list(metrics)].unstack(period_col)
    wide.columns = wide.columns.swaplevel(0, 1)
    wide = wide.reindex(index=index, columns=columns)
    return wide.apply(pd.to_numeric, errors="coerce")


def count_matrix(
    df: pd.DataFrame,
    facilities: Sequence[Any],
    categories: Sequence[Any],
    key: str = "hoscode",
    category_col: str = "grp",
    value_col: str = "count",
    total_col: str = "total",
) -> pd.DataFrame:
    """
    Facility x category count matrix with a row-total column.

    Counts for repeated (facility, category) pairs are summed. Categories with
    no rows stay NaN; the row total is NaN only when the whole row is empty.
    """
    index = pd.Index(list(facilities), name=key)
    cats = list(categories)
    matrix = pd.DataFrame(np.nan, index=index, columns=cats)
    if isinstance(df, pd.DataFrame) and not df.empty and {key, category_col, value_col} <= set(df.columns):
        data = df[df[category_col].isin(cats)].copy()
        if not data.empty:
            data[value_col] = pd.to_numeric(data[value_col], errors="coerce")
            summed = data.groupby([key, category_col])[value_col].sum(min_count=1).unstack(category_col)
            matrix = summed.reindex(index=index, columns=cats).astype(float)
    matrix.columns.name = None
    matrix[total_col] = matrix[cats].sum(axis=1, min_count=1)
    return matrix


def column_totals(matrix: pd.DataFrame) -> pd.Series:
    """Column sums of a count matrix, NaN for columns without any data."""
    return matrix.sum(axis=0, min_count=1)
