# phl_dashboard/warehouse/__init__.py
# PHL DASHBOARD - WAREHOUSE PACKAGE API

"""
Initializes the warehouse package: the pooled engine, the query runner and
the per-dataset read-only queries. Streamlit-cached wrappers live in
`warehouse.cached` and are imported explicitly by the pages.
"""

from .engine import (
    WarehouseError,
    WarehouseConfigError,
    WarehouseQueryError,
    build_where,
    dispose_engine,
    get_engine,
    normalize_database_url,
    run_query,
)

from .queries import checked_table

__all__ = [
    # engine.py
    "WarehouseError",
    "WarehouseConfigError",
    "WarehouseQueryError",
    "build_where",
    "dispose_engine",
    "get_engine",
    "normalize_database_url",
    "run_query",

    # queries.py
    "checked_table",
]
