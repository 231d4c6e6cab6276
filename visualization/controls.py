# phl_dashboard/visualization/controls.py
# PHL DASHBOARD - URL-BACKED FILTER WIDGETS

"""
Filter widgets whose state lives in the page URL (`st.query_params`), so a
copied link reopens the same view. Each control reads its initial value from
the query string through the tolerant resolvers in `data_processing.periods`
and writes the chosen value back; values equal to the default are removed
from the URL instead of being written.
"""

import logging
from datetime import date
from typing import Any, Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from data_processing.formatting import display_hos_name
from data_processing.periods import (MONTHS, PeriodAxis, month_label, resolve_choice,
                                     resolve_date, resolve_hos, resolve_month,
                                     resolve_view, resolve_year, to_buddhist_year)

logger = logging.getLogger(__name__)

ALL_HOSPITALS_LABEL = "ทุกโรงพยาบาล"
ALL_MONTHS_LABEL = "ทุกเดือน"
VIEW_LABELS = {PeriodAxis.MONTH.value: "รายเดือน", PeriodAxis.YEAR.value: "รายปี"}


def _read_param(name: str) -> Optional[str]:
    return st.query_params.get(name)


def _write_param(name: str, value: Any, default: Any = None) -> None:
    """Stores `value` in the URL, or removes the key when it is empty or the default."""
    if value is None or value == "" or value == default:
        if name in st.query_params:
            del st.query_params[name]
        return
    text = value.isoformat() if isinstance(value, date) else str(value)
    if st.query_params.get(name) != text:
        st.query_params[name] = text


def view_tabs(name: str = "view") -> PeriodAxis:
    """Month/year toggle; a missing or unknown `view` parameter means month."""
    current = resolve_view(_read_param(name))
    options = [PeriodAxis.MONTH.value, PeriodAxis.YEAR.value]
    choice = st.radio(
        "มุมมอง", options, index=options.index(current.value), horizontal=True,
        format_func=lambda v: VIEW_LABELS[v], key=f"ctl_{name}",
    )
    axis = resolve_view(choice)
    _write_param(name, axis.value, default=PeriodAxis.MONTH.value)
    return axis


def year_select(years: Sequence[int], name: str = "year", label: str = "ปี", buddhist: bool = True) -> int:
    """Year picker; defaults to the latest year with data, else the current year."""
    current = resolve_year(_read_param(name), years)
    options = sorted({int(y) for y in years} | {current}, reverse=True)
    fmt = (lambda y: f"{to_buddhist_year(y)}") if buddhist else str
    choice = st.selectbox(label, options, index=options.index(current), format_func=fmt, key=f"ctl_{name}")
    year = int(choice) if choice is not None else current
    _write_param(name, year, default=max(years) if years else None)
    return year


def hospital_select(hospitals: pd.DataFrame, name: str = "hos", label: str = "โรงพยาบาล") -> Optional[str]:
    """Single-facility filter; the empty choice means all facilities."""
    codes = hospitals["hoscode"].tolist() if not hospitals.empty else []
    names = {
        row["hoscode"]: display_hos_name(row.get("hosname"), row.get("hosname_short"), fallback=row["hoscode"])
        for row in hospitals.to_dict("records")
    } if codes else {}
    current = resolve_hos(_read_param(name))
    options = [""] + codes
    index = options.index(current) if current in options else 0
    choice = st.selectbox(
        label, options, index=index, key=f"ctl_{name}",
        format_func=lambda c: names.get(c, c) if c else ALL_HOSPITALS_LABEL,
    )
    hos = resolve_hos(choice)
    _write_param(name, hos)
    return hos


def month_select(name: str = "month", label: str = "เดือน") -> Optional[int]:
    current = resolve_month(_read_param(name))
    options = [0] + list(MONTHS)
    choice = st.selectbox(
        label, options, index=options.index(current or 0), key=f"ctl_{name}",
        format_func=lambda m: month_label(m) if m else ALL_MONTHS_LABEL,
    )
    month = resolve_month(choice)
    _write_param(name, month)
    return month


def date_range_select(
    default_start: date,
    default_end: date,
    min_value: Optional[date] = None,
    max_value: Optional[date] = None,
    start_name: str = "start",
    end_name: str = "end",
) -> Tuple[date, date]:
    """Inclusive date range; an inverted range is swapped rather than rejected."""
    start = resolve_date(_read_param(start_name), default_start)
    end = resolve_date(_read_param(end_name), default_end)
    col1, col2 = st.columns(2)
    with col1:
        start = st.date_input("ตั้งแต่วันที่", value=start, min_value=min_value, max_value=max_value, key=f"ctl_{start_name}")
    with col2:
        end = st.date_input("ถึงวันที่", value=end, min_value=min_value, max_value=max_value, key=f"ctl_{end_name}")
    if start > end:
        start, end = end, start
    _write_param(start_name, start, default=default_start)
    _write_param(end_name, end, default=default_end)
    return start, end


def tab_select(options: Sequence[Tuple[str, str]], name: str = "tab", label: str = "") -> str:
    """Horizontal tab strip over (key, label) pairs; defaults to the first key."""
    keys = [k for k, _ in options]
    labels = dict(options)
    current = resolve_choice(_read_param(name), keys)
    choice = st.radio(
        label or " ", keys, index=keys.index(current), horizontal=True,
        format_func=lambda k: labels[k], key=f"ctl_{name}",
        label_visibility="collapsed" if not label else "visible",
    )
    selected = resolve_choice(choice, keys)
    _write_param(name, selected, default=keys[0])
    return selected


def sort_select(options: Sequence[Tuple[str, str]], default: str, name: str = "sort", dir_name: str = "dir") -> Tuple[str, bool]:
    """Sort column plus direction; returns (column, ascending)."""
    keys = [k for k, _ in options]
    labels = dict(options)
    current = resolve_choice(_read_param(name), keys, default=default)
    ascending = str(_read_param(dir_name) or "asc").lower() != "desc"
    col1, col2 = st.columns([3, 1])
    with col1:
        choice = st.selectbox("เรียงตาม", keys, index=keys.index(current), format_func=lambda k: labels[k], key=f"ctl_{name}")
    with col2:
        direction = st.radio("ลำดับ", ["asc", "desc"], index=0 if ascending else 1, horizontal=True,
                             format_func=lambda d: "น้อย→มาก" if d == "asc" else "มาก→น้อย", key=f"ctl_{dir_name}")
    column = resolve_choice(choice, keys, default=default)
    _write_param(name, column, default=default)
    _write_param(dir_name, direction, default="asc")
    return column, direction != "desc"


def choice_select(options: Sequence[str], name: str, label: str) -> str:
    """Dropdown over plain string options; defaults to the first option."""
    current = resolve_choice(_read_param(name), options)
    choice = st.selectbox(label, list(options), index=list(options).index(current), key=f"ctl_{name}")
    selected = resolve_choice(choice, options)
    _write_param(name, selected, default=options[0])
    return selected
