# phl_dashboard/tests/test_controls.py
# PHL DASHBOARD - URL-BACKED FILTER CONTROL TESTS

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from data_processing import PeriodAxis
from visualization import (choice_select, date_range_select, hospital_select, month_select,
                           sort_select, view_tabs, year_select)

# Fixtures are sourced from conftest.py


def _pick_indexed(label, options, index=0, **kwargs):
    return list(options)[index]


def _columns(spec):
    count = spec if isinstance(spec, int) else len(spec)
    return tuple(MagicMock() for _ in range(count))


@pytest.fixture
def mock_st():
    """Streamlit stand-in whose widgets return their initial selection and whose URL is a plain dict."""
    with patch("visualization.controls.st") as st_mock:
        st_mock.query_params = {}
        st_mock.selectbox.side_effect = _pick_indexed
        st_mock.radio.side_effect = _pick_indexed
        st_mock.date_input.side_effect = lambda label, value=None, **kwargs: value
        st_mock.columns.side_effect = _columns
        yield st_mock


# --- View Toggle ---
def test_view_toggle_reads_year_from_url(mock_st):
    mock_st.query_params["view"] = "year"
    assert view_tabs() == PeriodAxis.YEAR
    assert mock_st.query_params["view"] == "year"


@pytest.mark.parametrize("raw", [None, "month", "weekly"])
def test_view_toggle_defaults_to_month_and_cleans_url(mock_st, raw):
    if raw is not None:
        mock_st.query_params["view"] = raw
    assert view_tabs() == PeriodAxis.MONTH
    assert "view" not in mock_st.query_params


# --- Year / Facility / Month ---
def test_year_select_keeps_requested_year(mock_st):
    mock_st.query_params["year"] = "2023"
    assert year_select([2023, 2024]) == 2023
    assert mock_st.query_params["year"] == "2023"


def test_year_select_defaults_to_latest_year(mock_st):
    assert year_select([2023, 2024]) == 2024
    assert "year" not in mock_st.query_params


def test_hospital_select(mock_st, hospitals_df):
    assert hospital_select(hospitals_df) is None
    mock_st.query_params["hos"] = "11251"
    assert hospital_select(hospitals_df) == "11251"
    assert mock_st.query_params["hos"] == "11251"


def test_hospital_select_ignores_unknown_code(mock_st, hospitals_df):
    mock_st.query_params["hos"] = "00000"
    assert hospital_select(hospitals_df) is None
    assert "hos" not in mock_st.query_params


def test_month_select_drops_out_of_range_month(mock_st):
    mock_st.query_params["month"] = "13"
    assert month_select() is None
    assert "month" not in mock_st.query_params
    mock_st.query_params["month"] = "4"
    assert month_select() == 4


# --- Date Range ---
def test_date_range_swaps_inverted_bounds(mock_st):
    mock_st.query_params.update({"start": "2026-03-10", "end": "2026-03-01"})
    start, end = date_range_select(date(2026, 1, 1), date(2026, 1, 31))
    assert (start, end) == (date(2026, 3, 1), date(2026, 3, 10))
    assert mock_st.query_params == {"start": "2026-03-01", "end": "2026-03-10"}


def test_date_range_defaults_are_not_written(mock_st):
    assert date_range_select(date(2026, 1, 1), date(2026, 1, 31)) == (date(2026, 1, 1), date(2026, 1, 31))
    assert mock_st.query_params == {}


# --- Sort & Choice ---
def test_sort_select_reads_column_and_direction(mock_st):
    options = [("hosname", "ชื่อ"), ("total_cases", "จำนวน"), ("avg_admit_wait_min", "รอเตียง")]
    assert sort_select(options, default="avg_admit_wait_min") == ("avg_admit_wait_min", True)
    mock_st.query_params.update({"sort": "total_cases", "dir": "desc"})
    assert sort_select(options, default="avg_admit_wait_min") == ("total_cases", False)


def test_choice_select_rejects_unlisted_values(mock_st):
    mock_st.query_params["table"] = "pg_user"
    assert choice_select(["c_hos", "transform_log"], name="table", label="ตาราง") == "c_hos"
    assert "table" not in mock_st.query_params
