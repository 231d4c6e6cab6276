# phl_dashboard/warehouse/queries.py
# PHL DASHBOARD - READ-ONLY DATASET QUERIES

"""
One function per dataset read by the dashboards. Every statement is read-only
and parameterized with named binds; table names that vary at runtime are only
ever taken from the whitelists in settings.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
from sqlalchemy import bindparam, text

from config import settings
from .engine import build_where, run_query

logger = logging.getLogger(__name__)


# --- Helpers ---
def _t(name: str) -> str:
    return f"{settings.DB_SCHEMA}.{name}"


def checked_table(name: str, allowed: Iterable[str]) -> str:
    """Returns `name` if it is whitelisted, otherwise raises ValueError."""
    if name not in set(allowed):
        logger.warning(f"Rejected request for non-whitelisted table '{name}'.")
        raise ValueError(f"Table '{name}' is not an allowed warehouse table.")
    return name


def _distinct_years(table: str, column: str) -> List[int]:
    df = run_query(
        f"select distinct {column} as yr from {_t(table)} where {column} is not null order by yr desc"
    )
    return [int(y) for y in df["yr"].tolist()] if not df.empty else []


def load_table_meta(table: str, filters: Sequence = ()) -> Dict[str, Any]:
    """Row count and latest `d_update` of a whitelisted table under optional filters."""
    table = checked_table(table, settings.ADMIN_TABLES)
    where_sql, params = build_where(filters)
    df = run_query(
        f"""
        select
          (select count(*) from {_t(table)} s {where_sql}) as row_count,
          (select max(d_update)::text from {_t(table)} s {where_sql}) as last_update
        """,
        params,
    )
    if df.empty:
        return {"row_count": 0, "last_update": None}
    row = df.iloc[0]
    return {
        "row_count": int(row["row_count"]) if pd.notna(row["row_count"]) else 0,
        "last_update": row["last_update"] if pd.notna(row["last_update"]) else None,
    }


# --- Facility Master ---
def load_hospitals() -> pd.DataFrame:
    return run_query(
        f"select hoscode, hosname, hosname_short, size_level, sp_level from {_t('c_hos')} order by hosname asc"
    )


def load_hospital_directory() -> pd.DataFrame:
    return run_query(
        f"""
        select hoscode, hosname, hosname_short, sp_level, gps, amp_code, beds
        from {_t('c_hos')}
        order by amp_code asc nulls last, hoscode asc
        """
    )


# --- Beds ---
def load_bed_counts() -> pd.DataFrame:
    """Bed count per facility and bed group (4th character of the standard bed code)."""
    return run_query(
        f"""
        select hoscode, substring(export_code, 4, 1) as grp, count(*)::int as beds
        from {_t('transform_sync_bed_type_all')}
        group by hoscode, substring(export_code, 4, 1)
        order by hoscode, grp
        """
    )


def load_bed_occupancy_years() -> List[int]:
    df = run_query(
        f"""
        select distinct extract(year from calc_start)::int as yr
        from {_t('transform_sync_bed_an_occupancy')}
        where calc_start is not null
        order by yr desc
        """
    )
    return [int(y) for y in df["yr"].tolist()] if not df.empty else []


def load_bed_occupancy(year: int, group: str) -> pd.DataFrame:
    """Monthly patient days and bed count per facility for one bed group."""
    return run_query(
        f"""
        with bed_counts as (
          select hoscode, substring(export_code, 4, 1) as bed_group, count(*) as bed_count
          from {_t('transform_sync_bed_type_all')}
          where substring(export_code, 4, 1) = :grp
          group by hoscode, substring(export_code, 4, 1)
        ),
        occ as (
          select hoscode,
                 substring(export_code, 4, 1) as bed_group,
                 extract(year from calc_start)::int as yr,
                 extract(month from calc_start)::int as m,
                 sum(overlap_days)::int as patient_days
          from {_t('transform_sync_bed_an_occupancy')}
          where extract(year from calc_start) = :year
            and substring(export_code, 4, 1) = :grp
          group by hoscode, substring(export_code, 4, 1), extract(year from calc_start), extract(month from calc_start)
        )
        select o.hoscode, o.bed_group, o.yr, o.m, o.patient_days,
               coalesce(b.bed_count, 0)::int as bed_count
        from occ o
        left join bed_counts b on b.hoscode = o.hoscode
        order by o.hoscode, o.m
        """,
        {"year": int(year), "grp": str(group)},
    )


# --- DRGs / RW / CMI ---
def load_drg_years() -> List[int]:
    return _distinct_years("transform_sync_drgs_sum", "y")


def load_drg_monthly(year: int) -> pd.DataFrame:
    return run_query(
        f"""
        select
          s.hoscode,
          h.hosname,
          s.y,
          s.m,
          sum(s.num_pt)::int as cases,
          sum(s.sum_adjrw)::float8 as sum_adjrw,
          case when sum(s.num_pt) > 0 then (sum(s.sum_adjrw) / sum(s.num_pt))::float8 else null end as cmi
        from {_t('transform_sync_drgs_sum')} s
        left join {_t('c_hos')} h on h.hoscode = s.hoscode
        where s.y = :year
        group by s.hoscode, h.hosname, s.y, s.m
        order by h.hosname asc nulls last, s.hoscode asc, s.m asc
        """,
        {"year": int(year)},
    )


def load_drg_year_summary(year: int) -> pd.DataFrame:
    """One row per facility in the master list, zero-filled for the selected year."""
    return run_query(
        f"""
        select
          h.hoscode,
          h.hosname,
          coalesce(sum(s.num_pt), 0)::int as cases,
          coalesce(sum(s.sum_adjrw), 0)::float8 as sum_adjrw,
          case when sum(s.num_pt) > 0 then (sum(s.sum_adjrw) / sum(s.num_pt))::float8 else null end as cmi
        from {_t('c_hos')} h
        left join {_t('transform_sync_drgs_sum')} s
          on s.hoscode = h.hoscode
         and s.y = :year
        group by h.hoscode, h.hosname
        order by h.hosname asc
        """,
        {"year": int(year)},
    )


def load_drg_year_pivot() -> pd.DataFrame:
    """Per facility and year totals; facilities without data yield a single row with null `y`."""
    return run_query(
        f"""
        select
          h.hoscode,
          h.hosname,
          s.y,
          coalesce(sum(s.num_pt), 0)::int as cases,
          coalesce(sum(s.sum_adjrw), 0)::float8 as sum_adjrw,
          case when sum(s.num_pt) > 0 then (sum(s.sum_adjrw) / sum(s.num_pt))::float8 else null end as cmi
        from {_t('c_hos')} h
        left join {_t('transform_sync_drgs_sum')} s on s.hoscode = h.hoscode
        group by h.hoscode, h.hosname, s.y
        order by h.hosname asc, s.y asc
        """
    )


def load_drg_meta(year: int) -> Dict[str, Any]:
    df = run_query(
        f"""
        select
          (select count(*)::int from {_t('transform_sync_drgs_sum')} where y = :year) as row_count_selected,
          (select count(*)::int from {_t('transform_sync_drgs_sum')}) as row_count_all,
          (select max(d_update)::text from {_t('transform_sync_drgs_sum')}) as last_update
        """,
        {"year": int(year)},
    )
    if df.empty:
        return {"row_count_selected": 0, "row_count_all": 0, "last_update": None}
    row = df.iloc[0]
    return {
        "row_count_selected": int(row["row_count_selected"] or 0),
        "row_count_all": int(row["row_count_all"] or 0),
        "last_update": row["last_update"] if pd.notna(row["last_update"]) else None,
    }


def load_top_adjrw_years() -> List[int]:
    return _distinct_years("transform_sync_drgs_rw_top10", "y")


def _top_adjrw_filters(year: int, hos: Optional[str], month: Optional[int]) -> list:
    return [("s.y", "year", int(year)), ("s.hoscode", "hos", hos), ("s.m", "month", month)]


def load_top_adjrw(year: int, hos: Optional[str] = None, month: Optional[int] = None) -> pd.DataFrame:
    """Top DRGs by sum adjRW, ranked within each facility and month."""
    where_sql, params = build_where(_top_adjrw_filters(year, hos, month))
    return run_query(
        f"""
        select
          s.hoscode,
          h.hosname,
          s.y,
          s.m,
          s.drgs_code,
          s.sum_adj_rw::float8 as sum_adj_rw,
          row_number() over (
            partition by s.hoscode, s.y, s.m
            order by s.sum_adj_rw desc, s.drgs_code asc
          )::int as rank
        from {_t('transform_sync_drgs_rw_top10')} s
        left join {_t('c_hos')} h on h.hoscode = s.hoscode
        {where_sql}
        order by h.hosname asc nulls last, s.hoscode asc, s.m asc, rank asc
        """,
        params,
    )


def load_top_adjrw_meta(year: int, hos: Optional[str] = None, month: Optional[int] = None) -> Dict[str, Any]:
    return load_table_meta("transform_sync_drgs_rw_top10", _top_adjrw_filters(year, hos, month))


# --- ER / Refer ---
def load_paperless_years() -> List[int]:
    return _distinct_years("transform_sync_refer_paperless", "y")


def load_paperless(year: int, hos: Optional[str] = None) -> pd.DataFrame:
    where_sql, params = build_where([("s.y", "year", int(year)), ("s.hoscode", "hos", hos)])
    return run_query(
        f"""
        select
          s.hoscode,
          h.hosname,
          h.hosname_short,
          s.y,
          s.m,
          s.refer_out_count,
          s.moph_refer_count,
          case when s.refer_out_count > 0
               then (s.moph_refer_count::float8 / s.refer_out_count::float8)
               else null end as rate
        from {_t('transform_sync_refer_paperless')} s
        left join {_t('c_hos')} h on h.hoscode = s.hoscode
        {where_sql}
        order by h.hosname asc nulls last, s.hoscode asc, s.m asc
        """,
        params,
    )


def load_paperless_meta(year: int, hos: Optional[str] = None) -> Dict[str, Any]:
    return load_table_meta("transform_sync_refer_paperless", [("s.y", "year", int(year)), ("s.hoscode", "hos", hos)])


def load_refer_top10(hos: Optional[str] = None) -> pd.DataFrame:
    where_sql, params = build_where([("s.hoscode", "hos", hos)])
    return run_query(
        f"""
        select
          s.hoscode,
          h.hosname,
          h.hosname_short,
          s.icd10,
          s.icd10_name,
          s.total_refer
        from {_t('transform_sync_refer_top10')} s
        left join {_t('c_hos')} h on h.hoscode = s.hoscode
        {where_sql}
        order by s.total_refer desc, s.icd10 asc
        """,
        params,
    )


def load_refer_top10_meta(hos: Optional[str] = None) -> Dict[str, Any]:
    return load_table_meta("transform_sync_refer_top10", [("s.hoscode", "hos", hos)])


# --- ICU ---
def load_icu_date_bounds() -> Dict[str, Optional[date]]:
    df = run_query(
        f"""
        select min(calc_start)::date as min_date, max(calc_end)::date as max_date
        from {_t('transform_sync_bed_an_occupancy')}
        """
    )
    if df.empty:
        return {"min_date": None, "max_date": None}
    row = df.iloc[0]
    return {
        "min_date": pd.Timestamp(row["min_date"]).date() if pd.notna(row["min_date"]) else None,
        "max_date": pd.Timestamp(row["max_date"]).date() if pd.notna(row["max_date"]) else None,
    }


_ICU_OCCUPANCY_SQL = """
with bed_counts as (
  select hoscode, export_code, count(*)::int as total_beds
  from {bed_type_all}
  where right(export_code, 3) in :codes
  group by hoscode, export_code
),
occ_counts as (
  select
    hoscode,
    export_code,
    sum(
      greatest(0, least(calc_end, cast(:end_date as date)) - greatest(calc_start, cast(:start_date as date)) + 1)
    )::int as total_patient_days
  from {occupancy}
  where calc_end >= cast(:start_date as date)
    and calc_start <= cast(:end_date as date)
    and right(export_code, 3) in :codes
  group by hoscode, export_code
),
all_combos as (
  select h.hoscode, h.hosname, h.hosname_short, h.sp_level, bc.export_code
  from {c_hos} h
  cross join (select distinct export_code from bed_counts) bc
)
select
  ac.hoscode,
  ac.hosname,
  ac.hosname_short,
  ac.sp_level,
  ac.export_code,
  cb.name as bed_type_name,
  coalesce(bc.total_beds, 0)::int as total_beds,
  (cast(:end_date as date) - cast(:start_date as date) + 1)::int as days_in_period,
  (coalesce(bc.total_beds, 0) * (cast(:end_date as date) - cast(:start_date as date) + 1))::int as available_bed_days,
  coalesce(oc.total_patient_days, 0)::int as total_patient_days,
  round(
    coalesce(oc.total_patient_days, 0) * 100.0
    / nullif(coalesce(bc.total_beds, 0) * (cast(:end_date as date) - cast(:start_date as date) + 1), 0),
    2
  )::float8 as occupancy_rate_pct
from all_combos ac
left join bed_counts bc on bc.hoscode = ac.hoscode and bc.export_code = ac.export_code
left join occ_counts oc on oc.hoscode = ac.hoscode and oc.export_code = ac.export_code
left join {bed_type_std} cb on cb.code = right(ac.export_code, 3)
order by (coalesce(bc.total_beds, 0) > 0) desc, ac.hosname asc nulls last, ac.hoscode asc, ac.export_code asc
"""


def load_icu_occupancy(start: date, end: date, codes: Sequence[str]) -> pd.DataFrame:
    """Occupancy per facility and ICU bed code over an inclusive date range."""
    statement = text(
        _ICU_OCCUPANCY_SQL.format(
            bed_type_all=_t("transform_sync_bed_type_all"),
            occupancy=_t("transform_sync_bed_an_occupancy"),
            c_hos=_t("c_hos"),
            bed_type_std=_t("c_bed_type_std"),
        )
    ).bindparams(bindparam("codes", expanding=True))
    return run_query(statement, {"start_date": start, "end_date": end, "codes": list(codes)})


def load_icu_occupancy_meta(codes: Sequence[str]) -> Dict[str, Any]:
    statement = text(
        f"""
        select
          (select count(*)::int from {_t('transform_sync_bed_type_all')}
           where right(export_code, 3) in :codes) as row_count,
          (select max(d_update)::text from {_t('transform_sync_bed_an_occupancy')}) as last_update
        """
    ).bindparams(bindparam("codes", expanding=True))
    df = run_query(statement, {"codes": list(codes)})
    if df.empty:
        return {"row_count": 0, "last_update": None}
    row = df.iloc[0]
    return {
        "row_count": int(row["row_count"] or 0),
        "last_update": row["last_update"] if pd.notna(row["last_update"]) else None,
    }


def load_mortality(table: str) -> pd.DataFrame:
    """Yearly admissions, deaths and mortality % for one critical disease, joined onto every facility."""
    table = checked_table(table, [tab.table for tab in settings.MORTALITY_TABS])
    return run_query(
        f"""
        select
          h.hoscode,
          h.hosname,
          h.hosname_short,
          s.discharge_year,
          s.total_admissions,
          s.deaths,
          s.mortality_rate_pct::float8 as mortality_rate_pct
        from {_t('c_hos')} h
        left join {_t(table)} s on s.hoscode = h.hoscode
        order by h.hosname asc nulls last, h.hoscode asc, s.discharge_year asc
        """
    )


def load_icu_wait_years() -> List[int]:
    return _distinct_years("transform_sync_critical_wait_bed", "yr")


def load_icu_wait(year: int, hos: Optional[str] = None) -> pd.DataFrame:
    where_sql, params = build_where([("s.yr", "year", int(year)), ("s.hoscode", "hos", hos)])
    return run_query(
        f"""
        select
          s.hoscode,
          h.hosname,
          h.hosname_short,
          s.yr,
          s.yr_be,
          s.total_cases,
          s.admitted_cases,
          s.refer_out_cases,
          s.avg_wait_min::float8 as avg_wait_min,
          s.avg_wait_hours::float8 as avg_wait_hours,
          s.avg_admit_wait_min::float8 as avg_admit_wait_min,
          s.avg_admit_wait_hr::float8 as avg_admit_wait_hr,
          s.avg_refer_wait_min::float8 as avg_refer_wait_min,
          s.avg_refer_wait_hr::float8 as avg_refer_wait_hr,
          s.pct_over_4hr::float8 as pct_over_4hr
        from {_t('transform_sync_critical_wait_bed')} s
        left join {_t('c_hos')} h on h.hoscode = s.hoscode
        {where_sql}
        order by h.hosname asc nulls last, s.hoscode asc
        """,
        params,
    )


def load_icu_wait_meta(year: int, hos: Optional[str] = None) -> Dict[str, Any]:
    return load_table_meta("transform_sync_critical_wait_bed", [("s.yr", "year", int(year)), ("s.hoscode", "hos", hos)])


def load_ward_death_years() -> List[int]:
    return _distinct_years("transform_sync_normal_ward_death", "y")


def load_ward_death_top(year: int, limit: Optional[int] = None) -> pd.DataFrame:
    """Principal diagnoses with the most normal-ward deaths in a year, ranked network-wide."""
    return run_query(
        f"""
        select d.pdx, ic.name as pdx_name, sum(d.death_count)::int as total_death,
               rank() over (order by sum(d.death_count) desc)::int as rank
        from {_t('transform_sync_normal_ward_death')} d
        left join {_t('c_icd10')} ic on ic.code = d.pdx
        where d.y = :year
        group by d.pdx, ic.name
        order by total_death desc, d.pdx asc
        limit :limit
        """,
        {"year": int(year), "limit": int(limit or settings.DISPLAY.ward_death_top_n)},
    )


def load_ward_death_rows(year: int) -> pd.DataFrame:
    return run_query(
        f"""
        select h.hoscode, h.hosname, h.hosname_short, h.sp_level,
               d.pdx, ic.name as pdx_name, d.death_count
        from {_t('transform_sync_normal_ward_death')} d
        join {_t('c_hos')} h on h.hoscode = d.hoscode
        left join {_t('c_icd10')} ic on ic.code = d.pdx
        where d.y = :year
        order by h.hosname asc, d.death_count desc
        """,
        {"year": int(year)},
    )


def load_ward_death_meta(year: int) -> Dict[str, Any]:
    return load_table_meta("transform_sync_normal_ward_death", [("s.y", "year", int(year))])


# --- OR ---
def load_or_utilization_years() -> List[int]:
    return _distinct_years("transform_sync_or_utilization_rate", "op_year")


def load_or_utilization(year: int) -> pd.DataFrame:
    return run_query(
        f"""
        select
          s.hoscode,
          s.op_year,
          s.total_cases,
          s.total_or_hours::float8 as total_or_hours,
          s.avg_min_per_case::float8 as avg_min_per_case,
          s.actual_or_days,
          s.util_pct::float8 as util_pct,
          s.d_update::text as d_update
        from {_t('transform_sync_or_utilization_rate')} s
        where s.op_year = :year
        order by s.util_pct desc nulls last
        """,
        {"year": int(year)},
    )


def load_or_utilization_meta(year: int) -> Dict[str, Any]:
    return load_table_meta("transform_sync_or_utilization_rate", [("s.op_year", "year", int(year))])


def _waiting_tables() -> List[str]:
    return [tab.table for tab in settings.WAITING_TIME_TABS]


def load_or_wait_years() -> List[int]:
    """Visit years present in any of the target-disease waiting-time tables."""
    union_sql = "\nunion\n".join(
        f"select distinct visit_year from {_t(table)} where visit_year is not null" for table in _waiting_tables()
    )
    df = run_query(f"{union_sql}\norder by visit_year desc")
    return [int(y) for y in df["visit_year"].tolist()] if not df.empty else []


def load_or_wait(table: str, year: int) -> pd.DataFrame:
    table = checked_table(table, _waiting_tables())
    return run_query(
        f"""
        select
          s.hoscode,
          s.visit_year,
          s.total_appointments,
          s.avg_wait_days::float8 as avg_wait_days,
          s.min_wait_days,
          s.max_wait_days,
          s.avg_wait_weeks::float8 as avg_wait_weeks,
          s.d_update::text as d_update
        from {_t(table)} s
        where s.visit_year = :year
        order by s.avg_wait_days asc nulls last
        """,
        {"year": int(year)},
    )


def load_or_wait_meta(table: str, year: int) -> Dict[str, Any]:
    table = checked_table(table, _waiting_tables())
    return load_table_meta(table, [("s.visit_year", "year", int(year))])


# --- System ---
def load_transform_log(limit: Optional[int] = None) -> pd.DataFrame:
    return run_query(
        f"""
        select id, to_char(transform_datetime, 'YYYY-MM-DD HH24:MI:SS') as transform_datetime, note
        from {_t('transform_log')}
        order by id desc
        limit :limit
        """,
        {"limit": int(limit or settings.DISPLAY.transform_log_limit)},
    )


def load_connection_status() -> pd.DataFrame:
    return run_query(
        f"""
        select t.hoscode, h.hosname, t.version, t.d_update::text as d_update
        from {_t('transform_sync_test')} t
        left join {_t('c_hos')} h on h.hoscode = t.hoscode
        order by t.hoscode asc nulls last
        """
    )


def load_table_columns(table: str) -> List[str]:
    table = checked_table(table, settings.ADMIN_TABLES)
    df = run_query(
        """
        select column_name from information_schema.columns
        where table_schema = :schema and table_name = :table
        order by ordinal_position
        """,
        {"schema": settings.DB_SCHEMA, "table": table},
    )
    return df["column_name"].tolist() if not df.empty else []


def load_table_rows(table: str, hos: Optional[str] = None, limit: Optional[int] = None) -> pd.DataFrame:
    """Raw rows of a whitelisted table; `hos` must only be passed for tables with a hoscode column."""
    table = checked_table(table, settings.ADMIN_TABLES)
    where_sql, params = build_where([("hoscode", "hos", hos)])
    params["limit"] = int(limit or settings.DISPLAY.admin_row_limit)
    return run_query(f"select * from {_t(table)} {where_sql} limit :limit", params)
