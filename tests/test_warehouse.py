# phl_dashboard/tests/test_warehouse.py
# PHL DASHBOARD - WAREHOUSE ENGINE & QUERY TESTS

from datetime import date
from unittest.mock import patch

import pandas as pd
import pytest
from sqlalchemy import create_engine
from sqlalchemy.sql.elements import TextClause

from config import settings
from warehouse import (WarehouseConfigError, WarehouseQueryError, build_where, checked_table,
                       dispose_engine, get_engine, normalize_database_url, run_query)
from warehouse import engine as engine_module
from warehouse import queries


@pytest.fixture
def sqlite_engine():
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def fresh_engine_slot(monkeypatch):
    """Clears the cached process-wide engine for the duration of a test."""
    monkeypatch.setattr(engine_module, "_engine", None)
    yield
    dispose_engine()


# --- Engine ---
@pytest.mark.parametrize("url, expected", [
    ("postgres://u:p@db:5432/dc", "postgresql+psycopg2://u:p@db:5432/dc"),
    ("postgresql://u:p@db/dc", "postgresql+psycopg2://u:p@db/dc"),
    ("postgresql+psycopg2://u:p@db/dc", "postgresql+psycopg2://u:p@db/dc"),
    ("  sqlite://  ", "sqlite://"),
])
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_get_engine_requires_database_url(monkeypatch, fresh_engine_slot):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    with pytest.raises(WarehouseConfigError):
        get_engine()


def test_get_engine_is_built_once(monkeypatch, fresh_engine_slot):
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")
    engine = get_engine()
    assert engine.dialect.name == "sqlite"
    assert get_engine() is engine


def test_run_query_binds_named_parameters(sqlite_engine):
    df = run_query("select :year as y, :hos as hoscode", {"year": 2024, "hos": "11251"}, engine=sqlite_engine)
    assert df.to_dict("records") == [{"y": 2024, "hoscode": "11251"}]


def test_run_query_wraps_database_errors(sqlite_engine):
    with pytest.raises(WarehouseQueryError):
        run_query("select * from table_that_does_not_exist", engine=sqlite_engine)


def test_run_query_wraps_pandas_database_errors(sqlite_engine):
    wrapped = pd.errors.DatabaseError("Execution failed on sql")
    wrapped.__cause__ = RuntimeError("no such table: c_hos")
    with patch("warehouse.engine.pd.read_sql", side_effect=wrapped):
        with pytest.raises(WarehouseQueryError, match="no such table"):
            run_query("select * from c_hos", engine=sqlite_engine)


def test_build_where_skips_empty_filters():
    sql, params = build_where([("s.y", "year", 2024), ("s.hoscode", "hos", ""), ("s.m", "month", 3)])
    assert sql == "where s.y = :year and s.m = :month"
    assert params == {"year": 2024, "month": 3}
    assert build_where([("s.hoscode", "hos", None)]) == ("", {})


# --- Table Whitelists ---
def test_checked_table_rejects_unknown_names():
    assert checked_table(settings.ADMIN_TABLES[0], settings.ADMIN_TABLES) == settings.ADMIN_TABLES[0]
    with pytest.raises(ValueError):
        checked_table("pg_user", settings.ADMIN_TABLES)


def test_mortality_query_only_reads_whitelisted_tables():
    with patch("warehouse.queries.run_query") as mock_run:
        with pytest.raises(ValueError):
            queries.load_mortality("c_hos; drop table c_hos")
        mock_run.assert_not_called()


# --- Query Composition ---
def test_top_adjrw_query_includes_only_given_filters():
    with patch("warehouse.queries.run_query", return_value=pd.DataFrame()) as mock_run:
        queries.load_top_adjrw(2024, hos="11251")
    sql, params = mock_run.call_args[0]
    assert "where s.y = :year and s.hoscode = :hos" in sql
    assert ":month" not in sql
    assert params == {"year": 2024, "hos": "11251"}


def test_table_rows_query_applies_default_limit():
    table = settings.ADMIN_TABLES[0]
    with patch("warehouse.queries.run_query", return_value=pd.DataFrame()) as mock_run:
        queries.load_table_rows(table)
    sql, params = mock_run.call_args[0]
    assert sql.startswith(f"select * from {settings.DB_SCHEMA}.{table}")
    assert "where" not in sql
    assert params == {"limit": settings.DISPLAY.admin_row_limit}


def test_icu_occupancy_query_expands_bed_codes():
    with patch("warehouse.queries.run_query", return_value=pd.DataFrame()) as mock_run:
        queries.load_icu_occupancy(date(2026, 1, 1), date(2026, 1, 31), settings.ICU_CODES)
    statement, params = mock_run.call_args[0]
    assert isinstance(statement, TextClause)
    assert params["codes"] == list(settings.ICU_CODES)
    assert params["start_date"] == date(2026, 1, 1)


def test_table_meta_handles_null_counts():
    row = pd.DataFrame({"row_count": [None], "last_update": [None]})
    with patch("warehouse.queries.run_query", return_value=row):
        meta = queries.load_table_meta(settings.ADMIN_TABLES[0])
    assert meta == {"row_count": 0, "last_update": None}
