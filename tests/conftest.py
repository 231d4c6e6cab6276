# phl_dashboard/tests/conftest.py
# PHL DASHBOARD - PYTEST FIXTURES

import sys
from pathlib import Path

# --- Path Setup for Module Imports ---
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import numpy as np
import pandas as pd
import pytest

# --- Core Data Fixtures ---
# Thai collation order of the names below: เนินมะปราง < บางระกำ < พุทธชินราช < วังทอง.
# A plain code-point sort would put เนินมะปราง last.

@pytest.fixture(scope="session")
def hospitals_df() -> pd.DataFrame:
    """Facility master list as returned by the c_hos query."""
    return pd.DataFrame({
        "hoscode": ["10676", "11251", "11252", "11253"],
        "hosname": ["โรงพยาบาลพุทธชินราช พิษณุโลก", "โรงพยาบาลวังทอง", "โรงพยาบาลบางระกำ", "โรงพยาบาลเนินมะปราง"],
        "hosname_short": [None, None, None, None],
        "size_level": ["A", "M2", "F2", "F2"],
        "sp_level": ["A", "M2", "F2", "F2"],
    })


@pytest.fixture(scope="session")
def drg_monthly_df() -> pd.DataFrame:
    """DRG monthly sums for one year; 11251 and 11253 have no rows at all."""
    return pd.DataFrame({
        "hoscode": ["10676", "10676", "11252"],
        "hosname": ["โรงพยาบาลพุทธชินราช พิษณุโลก", "โรงพยาบาลพุทธชินราช พิษณุโลก", "โรงพยาบาลบางระกำ"],
        "y": [2024, 2024, 2024],
        "m": [1, 2, 2],
        "cases": [100, 120, 10],
        "sum_adjrw": [150.5, 180.0, 8.0],
        "cmi": [1.505, 1.5, 0.8],
    })


@pytest.fixture(scope="session")
def drg_year_summary_df(hospitals_df) -> pd.DataFrame:
    return pd.DataFrame({
        "hoscode": hospitals_df["hoscode"],
        "hosname": hospitals_df["hosname"],
        "cases": [220, 0, 10, 0],
        "sum_adjrw": [330.5, 0.0, 8.0, 0.0],
        "cmi": [1.5023, None, 0.8, None],
    })


@pytest.fixture(scope="session")
def drg_year_pivot_df() -> pd.DataFrame:
    """Year totals; facilities without data come back once with a null year."""
    return pd.DataFrame({
        "hoscode": ["10676", "10676", "11251", "11252", "11253"],
        "y": [2023, 2024, None, 2024, None],
        "cases": [80, 220, 0, 10, 0],
        "sum_adjrw": [100.0, 330.5, 0.0, 8.0, 0.0],
        "cmi": [1.25, 1.5023, None, 0.8, None],
    })


@pytest.fixture(scope="session")
def bed_counts_df() -> pd.DataFrame:
    return pd.DataFrame({
        "hoscode": ["10676", "10676", "11251", "11252"],
        "grp": ["1", "2", "1", "7"],
        "beds": [300, 20, 30, 1],
    })


@pytest.fixture(scope="session")
def mortality_df() -> pd.DataFrame:
    """Left join of c_hos onto a mortality table: 11253 has a single all-null row."""
    rows = [("10676", y, 100 + y - 2020, 10, 10.0) for y in range(2020, 2026)]
    rows += [("11251", 2025, 20, 1, 5.0), ("11252", 2021, 8, 0, 0.0), ("11253", None, None, None, None)]
    df = pd.DataFrame(rows, columns=["hoscode", "discharge_year", "total_admissions", "deaths", "mortality_rate_pct"])
    names = {"10676": "โรงพยาบาลพุทธชินราช พิษณุโลก", "11251": "โรงพยาบาลวังทอง",
             "11252": "โรงพยาบาลบางระกำ", "11253": "โรงพยาบาลเนินมะปราง"}
    df.insert(1, "hosname", df["hoscode"].map(names))
    df.insert(2, "hosname_short", None)
    return df


@pytest.fixture(scope="session")
def icu_wait_df() -> pd.DataFrame:
    return pd.DataFrame({
        "hoscode": ["10676", "11251", "11252"],
        "hosname": ["โรงพยาบาลพุทธชินราช พิษณุโลก", "โรงพยาบาลวังทอง", "โรงพยาบาลบางระกำ"],
        "hosname_short": [None, None, None],
        "total_cases": [40, 3, 12],
        "admitted_cases": [30, 0, 10],
        "refer_out_cases": [10, 3, 2],
        "avg_admit_wait_min": [120.0, np.nan, 45.0],
        "avg_refer_wait_min": [200.0, 95.5, np.nan],
        "pct_over_4hr": [12.5, np.nan, 0.0],
    })
