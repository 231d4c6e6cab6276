# phl_dashboard/warehouse/cached.py
# PHL DASHBOARD - STREAMLIT CACHING LAYER

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from config import settings
from . import queries

CACHE_TTL_SECONDS = settings.WEB_CACHE_TTL_SECONDS


@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_hospitals() -> pd.DataFrame:
    return queries.load_hospitals()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_hospital_directory() -> pd.DataFrame:
    return queries.load_hospital_directory()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_bed_counts() -> pd.DataFrame:
    return queries.load_bed_counts()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_bed_occupancy_years() -> List[int]:
    return queries.load_bed_occupancy_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading bed occupancy...")
def get_bed_occupancy(year: int, group: str) -> pd.DataFrame:
    return queries.load_bed_occupancy(year, group)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_table_meta(table: str, filters: Tuple = ()) -> Dict[str, Any]:
    """Cached wrapper for load_table_meta. Filters must be a tuple of tuples to stay hashable."""
    return queries.load_table_meta(table, filters)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_drg_years() -> List[int]:
    return queries.load_drg_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading DRG data...")
def get_drg_monthly(year: int) -> pd.DataFrame:
    return queries.load_drg_monthly(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_drg_year_summary(year: int) -> pd.DataFrame:
    return queries.load_drg_year_summary(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading DRG data...")
def get_drg_year_pivot() -> pd.DataFrame:
    return queries.load_drg_year_pivot()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_drg_meta(year: int) -> Dict[str, Any]:
    return queries.load_drg_meta(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_top_adjrw_years() -> List[int]:
    return queries.load_top_adjrw_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading top adjRW...")
def get_top_adjrw(year: int, hos: Optional[str], month: Optional[int]) -> pd.DataFrame:
    return queries.load_top_adjrw(year, hos, month)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_top_adjrw_meta(year: int, hos: Optional[str], month: Optional[int]) -> Dict[str, Any]:
    return queries.load_top_adjrw_meta(year, hos, month)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_paperless_years() -> List[int]:
    return queries.load_paperless_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading referrals...")
def get_paperless(year: int, hos: Optional[str]) -> pd.DataFrame:
    return queries.load_paperless(year, hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_paperless_meta(year: int, hos: Optional[str]) -> Dict[str, Any]:
    return queries.load_paperless_meta(year, hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading referrals...")
def get_refer_top10(hos: Optional[str]) -> pd.DataFrame:
    return queries.load_refer_top10(hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_refer_top10_meta(hos: Optional[str]) -> Dict[str, Any]:
    return queries.load_refer_top10_meta(hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_icu_date_bounds() -> Dict[str, Optional[date]]:
    return queries.load_icu_date_bounds()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading ICU occupancy...")
def get_icu_occupancy(start: date, end: date, codes: Tuple[str, ...]) -> pd.DataFrame:
    return queries.load_icu_occupancy(start, end, codes)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_icu_occupancy_meta(codes: Tuple[str, ...]) -> Dict[str, Any]:
    return queries.load_icu_occupancy_meta(codes)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading mortality...")
def get_mortality(table: str) -> pd.DataFrame:
    return queries.load_mortality(table)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_icu_wait_years() -> List[int]:
    return queries.load_icu_wait_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading ICU wait times...")
def get_icu_wait(year: int, hos: Optional[str]) -> pd.DataFrame:
    return queries.load_icu_wait(year, hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_icu_wait_meta(year: int, hos: Optional[str]) -> Dict[str, Any]:
    return queries.load_icu_wait_meta(year, hos)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_ward_death_years() -> List[int]:
    return queries.load_ward_death_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading ward deaths...")
def get_ward_death_top(year: int) -> pd.DataFrame:
    return queries.load_ward_death_top(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading ward deaths...")
def get_ward_death_rows(year: int) -> pd.DataFrame:
    return queries.load_ward_death_rows(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_ward_death_meta(year: int) -> Dict[str, Any]:
    return queries.load_ward_death_meta(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_or_utilization_years() -> List[int]:
    return queries.load_or_utilization_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading OR utilization...")
def get_or_utilization(year: int) -> pd.DataFrame:
    return queries.load_or_utilization(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_or_utilization_meta(year: int) -> Dict[str, Any]:
    return queries.load_or_utilization_meta(year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_or_wait_years() -> List[int]:
    return queries.load_or_wait_years()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading waiting times...")
def get_or_wait(table: str, year: int) -> pd.DataFrame:
    return queries.load_or_wait(table, year)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_or_wait_meta(table: str, year: int) -> Dict[str, Any]:
    return queries.load_or_wait_meta(table, year)

@st.cache_data(ttl=60, show_spinner=False)
def get_transform_log() -> pd.DataFrame:
    return queries.load_transform_log()

@st.cache_data(ttl=60, show_spinner=False)
def get_connection_status() -> pd.DataFrame:
    return queries.load_connection_status()

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def get_table_columns(table: str) -> List[str]:
    return queries.load_table_columns(table)

@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Loading table...")
def get_table_rows(table: str, hos: Optional[str]) -> pd.DataFrame:
    return queries.load_table_rows(table, hos)
