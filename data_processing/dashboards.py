# phl_dashboard/data_processing/dashboards.py
# PHL DASHBOARD - PER-DASHBOARD RESHAPING PIPELINES

"""
Builders that combine query rows, the facility master list, the pivot layer,
the rate helpers and the ordering rules into display-ready frames, one group
of functions per dashboard page. Nothing here touches Streamlit or the
database, so every page's shaping logic is testable with plain DataFrames.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from config import settings
from .formatting import (MISSING, display_hos_name, fmt_hour_minute, fmt_number,
                         fmt_pct, format_bed_code, level_color, rate_band)
from .ordering import (facility_presence, sort_facilities_by_volume,
                       sort_facilities_by_year_presence, sort_rows_nulls_last)
from .periods import MONTHS, month_label
from .pivot import column_totals, count_matrix, pivot_metrics
from .rates import case_mix_index, days_in_month, safe_rate, safe_rate_series

logger = logging.getLogger(__name__)

CMI_METRICS: Tuple[str, ...] = ("cases", "sum_adjrw", "cmi")
CMI_TABLE_DIGITS: Dict[str, int] = {"cases": 0, "sum_adjrw": 4, "cmi": 4}
CMI_CHART_DIGITS: Dict[str, int] = {"cases": 0, "sum_adjrw": 4, "cmi": 2}
OCCUPANCY_METRICS: Tuple[str, ...] = ("bed_days", "patient_days", "rate")
MORTALITY_METRICS: Tuple[str, ...] = ("total_admissions", "deaths", "mortality_rate_pct")
WAIT_SORT_KEYS: Tuple[str, ...] = ("hosname", "total_cases", "avg_admit_wait_min")
OTHER_BED_GROUP = "other"


# --- Shared Helpers ---
def with_display_names(hospitals: pd.DataFrame) -> pd.DataFrame:
    """Adds `display_name` and `level` columns to a facility frame."""
    if not isinstance(hospitals, pd.DataFrame) or hospitals.empty:
        return pd.DataFrame(columns=["hoscode", "hosname", "display_name", "level"])
    df = hospitals.copy()
    short = df["hosname_short"] if "hosname_short" in df.columns else pd.Series(None, index=df.index, dtype=object)
    names = df["hosname"] if "hosname" in df.columns else pd.Series(None, index=df.index, dtype=object)
    df["display_name"] = [
        display_hos_name(n, s, fallback=str(code)) for n, s, code in zip(names, short, df["hoscode"])
    ]
    level = pd.Series(None, index=df.index, dtype=object)
    for col in ("sp_level", "size_level"):
        if col in df.columns:
            level = df[col].where(df[col].notna() & (df[col].astype(str).str.strip() != ""), level)
    df["level"] = level
    return df


def _numbered(df: pd.DataFrame) -> pd.DataFrame:
    out = df.reset_index(drop=True)
    out.insert(0, "ลำดับ", range(1, len(out) + 1))
    return out


def _volume(df: pd.DataFrame, key: str, value_col: str) -> pd.Series:
    if df.empty or value_col not in df.columns:
        return pd.Series(dtype=float)
    return pd.to_numeric(df[value_col], errors="coerce").groupby(df[key]).sum()


def _raw_name(row: Dict[str, Any]) -> str:
    for col in ("hosname_short", "hosname"):
        value = row.get(col)
        if isinstance(value, str) and value.strip():
            return value
    return str(row.get("hoscode"))


def format_matrix(values: pd.DataFrame, digits: Dict[str, int]) -> pd.DataFrame:
    """Formats a (period, metric) matrix cell by cell; percent metrics end in 'rate' or 'pct'."""
    out = pd.DataFrame(index=values.index, columns=values.columns, dtype=object)
    for col in values.columns:
        metric = col[-1] if isinstance(col, tuple) else col
        d = digits.get(metric, 0)
        if str(metric).endswith(("rate", "pct")):
            out[col] = values[col].map(lambda v, d=d: fmt_pct(v, d))
        else:
            out[col] = values[col].map(lambda v, d=d: fmt_number(v, d))
    return out


# --- Beds: Bed Count ---
def build_bed_count(hospitals: pd.DataFrame, bed_counts: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Facility x bed-group bed counts with row totals, limited to facilities that
    have at least one bed, plus the column totals (last entry is the grand total).

    Beds whose group digit is not one of the standard groups are counted under
    `OTHER_BED_GROUP`, so row and grand totals cover every bed.
    """
    groups = [g.code for g in settings.BED_GROUPS]
    categories = [*groups, OTHER_BED_GROUP]
    hos = with_display_names(hospitals)
    if hos.empty:
        return pd.DataFrame(columns=["hoscode", "display_name", "level", *categories, "total"]), pd.Series(dtype=float)

    beds = bed_counts
    if isinstance(bed_counts, pd.DataFrame) and "grp" in bed_counts.columns:
        beds = bed_counts.copy()
        grp = beds["grp"].astype(object).map(lambda g: None if pd.isna(g) else str(g).strip())
        beds["grp"] = grp.where(grp.isin(groups), OTHER_BED_GROUP)

    matrix = count_matrix(beds, hos["hoscode"], categories, category_col="grp", value_col="beds")
    active = matrix[matrix["total"].fillna(0) > 0]
    ordered = sort_facilities_by_volume(hos[hos["hoscode"].isin(active.index)], active["total"])
    table = ordered[["hoscode", "display_name", "level"]].merge(
        active.reset_index(), on="hoscode", how="left"
    )
    return table, column_totals(active)


# --- Beds: Monthly Occupancy ---
def build_bed_occupancy(
    hospitals: pd.DataFrame, rows: pd.DataFrame, year: int
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Monthly bed days, patient days and occupancy % for one bed group.

    Only facilities with occupancy rows are listed. `beds` is the bed count of
    the first month with data.
    """
    hos = with_display_names(hospitals)
    columns = pd.MultiIndex.from_product([list(MONTHS), list(OCCUPANCY_METRICS)], names=["period", "metric"])
    if hos.empty or rows.empty:
        empty_hos = pd.DataFrame(columns=["hoscode", "display_name", "level", "beds"])
        return empty_hos, pd.DataFrame(columns=columns, dtype=float)

    active = hos[hos["hoscode"].isin(set(rows["hoscode"]))]
    ordered = sort_facilities_by_volume(active, _volume(rows, "hoscode", "patient_days"))
    raw = pivot_metrics(rows, ordered["hoscode"], MONTHS, ["patient_days", "bed_count"], period_col="m")

    data: Dict[Tuple[int, str], pd.Series] = {}
    for m in MONTHS:
        patient_days = raw[(m, "patient_days")]
        bed_days = raw[(m, "bed_count")] * days_in_month(year, m)
        data[(m, "bed_days")] = bed_days
        data[(m, "patient_days")] = patient_days
        data[(m, "rate")] = safe_rate_series(patient_days, bed_days) * 100.0
    values = pd.DataFrame(data, index=raw.index)
    values.columns = pd.MultiIndex.from_tuples(values.columns, names=["period", "metric"])

    beds = raw.xs("bed_count", level="metric", axis=1).bfill(axis=1).iloc[:, 0]
    ordered = ordered[["hoscode", "display_name", "level"]].copy()
    ordered["beds"] = beds.reindex(ordered["hoscode"]).to_numpy()
    return ordered, values


def occupancy_bands(values: pd.DataFrame) -> pd.DataFrame:
    """Threshold band of every occupancy-rate cell; other cells are None."""
    th = settings.THRESHOLDS
    bands = pd.DataFrame(np.full(values.shape, None, dtype=object), index=values.index, columns=values.columns)
    for col in values.columns:
        if col[-1] == "rate":
            bands[col] = pd.Series(
                [rate_band(v, th.occupancy_good_pct, th.occupancy_warning_pct) for v in values[col]],
                index=values.index, dtype=object,
            )
    return bands


# --- RW / CMI ---
def build_cmi_month_table(
    hospitals: pd.DataFrame, monthly: pd.DataFrame, year_summary: pd.DataFrame
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Every facility x 12 months of (cases, sum adjRW, CMI), ordered by the selected year's cases."""
    hos = with_display_names(hospitals)
    ordered = sort_facilities_by_volume(hos, _volume(year_summary, "hoscode", "cases"))
    codes = ordered["hoscode"] if not ordered.empty else []
    values = pivot_metrics(monthly, codes, MONTHS, CMI_METRICS, period_col="m")
    return ordered, values


def build_cmi_year_table(
    hospitals: pd.DataFrame, year_pivot: pd.DataFrame
) -> Tuple[pd.DataFrame, List[int], pd.DataFrame]:
    """Every facility x each year with data, ordered by total cases across all years."""
    hos = with_display_names(hospitals)
    data = year_pivot.dropna(subset=["y"]) if "y" in year_pivot.columns else pd.DataFrame()
    years = sorted({int(y) for y in data["y"]}) if not data.empty else []
    ordered = sort_facilities_by_volume(hos, _volume(data, "hoscode", "cases"))
    codes = ordered["hoscode"] if not ordered.empty else []
    values = pivot_metrics(data, codes, years, CMI_METRICS, period_col="y")
    return ordered, years, values


def summarize_cmi(year_summary: pd.DataFrame) -> Dict[str, Any]:
    if year_summary.empty:
        return {"cases": 0, "sum_adjrw": 0.0, "cmi": None, "active_hospitals": 0}
    cases = pd.to_numeric(year_summary["cases"], errors="coerce").fillna(0)
    adjrw = pd.to_numeric(year_summary["sum_adjrw"], errors="coerce").fillna(0)
    return {
        "cases": int(cases.sum()),
        "sum_adjrw": float(adjrw.sum()),
        "cmi": case_mix_index(adjrw.sum(), cases.sum()),
        "active_hospitals": int((cases > 0).sum()),
    }


def build_trend_chart_data(
    ordered: pd.DataFrame,
    values: pd.DataFrame,
    metric: str,
    periods: Sequence[Tuple[Any, str]],
    top_n: Optional[int] = None,
) -> pd.DataFrame:
    """
    Long-format rows (period, hoscode, label, value) for the first `top_n`
    facilities; missing cells stay NaN so the chart shows a gap.
    """
    top_n = top_n or settings.DISPLAY.chart_top_n_hospitals
    top = ordered.head(top_n)
    records = []
    for period_key, period_label in periods:
        for code, label in zip(top["hoscode"], top["display_name"]):
            col = (period_key, metric)
            value = values.loc[code, col] if col in values.columns and code in values.index else np.nan
            records.append({"period": period_label, "hoscode": code, "label": label, "value": value})
    return pd.DataFrame(records, columns=["period", "hoscode", "label", "value"])


# --- RW / CMI: Top AdjRW ---
def build_top_adjrw_table(rows: pd.DataFrame) -> pd.DataFrame:
    if rows.empty:
        return pd.DataFrame(columns=["อันดับ", "โรงพยาบาล", "เดือน", "DRG", "sum adjRW"])
    return pd.DataFrame({
        "อันดับ": rows["rank"].astype(int).to_numpy(),
        "โรงพยาบาล": [display_hos_name(n, fallback=str(c)) for n, c in zip(rows["hosname"], rows["hoscode"])],
        "เดือน": [month_label(m) for m in rows["m"]],
        "DRG": rows["drgs_code"].to_numpy(),
        "sum adjRW": rows["sum_adj_rw"].map(lambda v: fmt_number(v, 4)).to_numpy(),
    })


# --- ER / Refer ---
def build_paperless_table(rows: pd.DataFrame) -> pd.DataFrame:
    cols = ["ลำดับ", "โรงพยาบาล", "เดือน", "Refer Out", "ส่งผ่าน MOPH Refer", "ร้อยละ"]
    if rows.empty:
        return pd.DataFrame(columns=cols)
    short = rows["hosname_short"] if "hosname_short" in rows.columns else [None] * len(rows)
    table = pd.DataFrame({
        "โรงพยาบาล": [display_hos_name(n, s, fallback=str(c)) for n, s, c in zip(rows["hosname"], short, rows["hoscode"])],
        "เดือน": [month_label(m) for m in rows["m"]],
        "Refer Out": rows["refer_out_count"].map(fmt_number).to_numpy(),
        "ส่งผ่าน MOPH Refer": rows["moph_refer_count"].map(fmt_number).to_numpy(),
        "ร้อยละ": rows["rate"].map(lambda v: fmt_pct(v, 2, scale=100)).to_numpy(),
    })
    return _numbered(table)[cols]


def summarize_paperless(rows: pd.DataFrame) -> Dict[str, Any]:
    refer_out = pd.to_numeric(rows.get("refer_out_count", pd.Series(dtype=float)), errors="coerce").sum()
    moph = pd.to_numeric(rows.get("moph_refer_count", pd.Series(dtype=float)), errors="coerce").sum()
    rate = safe_rate(moph, refer_out)
    return {
        "refer_out": int(refer_out),
        "moph_refer": int(moph),
        "rate_pct": None if rate is None else rate * 100.0,
    }


def build_refer_top10_table(rows: pd.DataFrame) -> pd.DataFrame:
    cols = ["ลำดับ", "โรงพยาบาล", "ICD10", "ชื่อโรค", "จำนวน Refer"]
    if rows.empty:
        return pd.DataFrame(columns=cols)
    short = rows["hosname_short"] if "hosname_short" in rows.columns else [None] * len(rows)
    table = pd.DataFrame({
        "โรงพยาบาล": [display_hos_name(n, s, fallback=str(c)) for n, s, c in zip(rows["hosname"], short, rows["hoscode"])],
        "ICD10": rows["icd10"].to_numpy(),
        "ชื่อโรค": rows["icd10_name"].fillna(MISSING).to_numpy(),
        "จำนวน Refer": rows["total_refer"].map(fmt_number).to_numpy(),
    })
    return _numbered(table)[cols]


# --- ICU: Occupancy ---
def build_icu_occupancy_table(rows: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    """Display rows for ICU / semi-ICU occupancy and the occupancy band of each row."""
    cols = ["ลำดับ", "ระดับ", "โรงพยาบาล", "รหัสเตียง", "ประเภทเตียง", "จำนวนเตียง",
            "จำนวนวัน", "วันเตียงทั้งหมด", "วันนอนผู้ป่วย", "อัตราครองเตียง"]
    if rows.empty:
        return pd.DataFrame(columns=cols), pd.Series(dtype=object)
    named = with_display_names(rows)
    th = settings.THRESHOLDS
    table = pd.DataFrame({
        "ระดับ": named["level"].fillna(MISSING).to_numpy(),
        "โรงพยาบาล": named["display_name"].to_numpy(),
        "รหัสเตียง": named["export_code"].map(format_bed_code).to_numpy(),
        "ประเภทเตียง": named["bed_type_name"].fillna(MISSING).to_numpy(),
        "จำนวนเตียง": named["total_beds"].map(fmt_number).to_numpy(),
        "จำนวนวัน": named["days_in_period"].map(fmt_number).to_numpy(),
        "วันเตียงทั้งหมด": named["available_bed_days"].map(fmt_number).to_numpy(),
        "วันนอนผู้ป่วย": named["total_patient_days"].map(fmt_number).to_numpy(),
        "อัตราครองเตียง": named["occupancy_rate_pct"].map(lambda v: fmt_pct(v, 2)).to_numpy(),
    })
    bands = pd.Series(
        [rate_band(v, th.occupancy_good_pct, th.occupancy_warning_pct) for v in named["occupancy_rate_pct"]],
        dtype=object,
    )
    return _numbered(table)[cols], bands


# --- ICU: Critical Mortality ---
def build_mortality_table(
    hospitals: pd.DataFrame, rows: pd.DataFrame, lookback: Optional[int] = None
) -> Tuple[List[int], pd.DataFrame, pd.DataFrame]:
    """
    The latest `lookback` discharge years (most recent first) for every facility.

    Facilities are ordered by whether they have data in each year, most recent
    year first, then by Thai name.
    """
    lookback = lookback or settings.DISPLAY.mortality_lookback_years
    hos = with_display_names(hospitals)
    data = rows.dropna(subset=["discharge_year"]).copy() if "discharge_year" in rows.columns else pd.DataFrame()
    if not data.empty:
        data["discharge_year"] = data["discharge_year"].astype(int)
    years = sorted({int(y) for y in data["discharge_year"]}, reverse=True)[:lookback] if not data.empty else []
    presence = facility_presence(data, "hoscode", "discharge_year")
    ordered = sort_facilities_by_year_presence(hos, presence, years) if not hos.empty else hos
    codes = ordered["hoscode"] if not ordered.empty else []
    values = pivot_metrics(data, codes, years, MORTALITY_METRICS, period_col="discharge_year")
    return years, ordered, values


# --- ICU: Normal-Ward Deaths ---
def build_ward_death_overview(top: pd.DataFrame) -> pd.DataFrame:
    cols = ["อันดับ", "รหัสโรค (PDX)", "ชื่อโรค", "จำนวนเสียชีวิต"]
    if top.empty:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame({
        "อันดับ": top["rank"].astype(int).to_numpy(),
        "รหัสโรค (PDX)": top["pdx"].to_numpy(),
        "ชื่อโรค": top["pdx_name"].fillna(MISSING).to_numpy(),
        "จำนวนเสียชีวิต": top["total_death"].map(fmt_number).to_numpy(),
    })


def build_ward_death_matrix(rows: pd.DataFrame, top: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Facility x top-10 diagnosis death counts. `total` is each facility's deaths
    across all diagnoses; zero cells are reported as missing.
    """
    pdx_codes = top["pdx"].tolist() if not top.empty else []
    if rows.empty:
        return pd.DataFrame(columns=["hoscode", "display_name", "level", "total_death"]), pd.DataFrame(columns=pdx_codes)

    hos = with_display_names(rows.drop_duplicates("hoscode")[[c for c in ("hoscode", "hosname", "hosname_short", "sp_level") if c in rows.columns]])
    totals = _volume(rows, "hoscode", "death_count")
    ordered = sort_facilities_by_volume(hos, totals)
    matrix = count_matrix(rows, ordered["hoscode"], pdx_codes, category_col="pdx", value_col="death_count")
    matrix = matrix[pdx_codes]
    matrix = matrix.where(matrix > 0)
    ordered = ordered[["hoscode", "display_name", "level"]].copy()
    ordered["total_death"] = totals.reindex(ordered["hoscode"]).to_numpy()
    return ordered, matrix


# --- ICU: Wait for Bed ---
def build_icu_wait_table(rows: pd.DataFrame, sort_by: str = "avg_admit_wait_min", ascending: bool = True) -> pd.DataFrame:
    """Wait-for-ICU-bed grid sortable by name, cases or admit wait; missing values stay last."""
    cols = ["ลำดับ", "โรงพยาบาล", "จำนวน case", "Admit", "Refer out",
            "ระยะเวลารอเตียงเฉลี่ย", "รอเฉลี่ย (Refer)", "รอเกิน 4 ชม."]
    if rows.empty:
        return pd.DataFrame(columns=cols)
    named = with_display_names(rows)
    key = sort_by if sort_by in WAIT_SORT_KEYS else "avg_admit_wait_min"
    if key == "hosname":
        named["sort_name"] = [_raw_name(r) for r in named.to_dict("records")]
        named = sort_rows_nulls_last(named, "sort_name", ascending=ascending, text=True)
    else:
        named = sort_rows_nulls_last(named, key, ascending=ascending, text=False)
    table = pd.DataFrame({
        "โรงพยาบาล": named["display_name"].to_numpy(),
        "จำนวน case": named["total_cases"].map(fmt_number).to_numpy(),
        "Admit": named["admitted_cases"].map(fmt_number).to_numpy(),
        "Refer out": named["refer_out_cases"].map(fmt_number).to_numpy(),
        "ระยะเวลารอเตียงเฉลี่ย": named["avg_admit_wait_min"].map(fmt_hour_minute).to_numpy(),
        "รอเฉลี่ย (Refer)": named["avg_refer_wait_min"].map(fmt_hour_minute).to_numpy(),
        "รอเกิน 4 ชม.": named["pct_over_4hr"].map(lambda v: fmt_pct(v, 1)).to_numpy(),
    })
    return _numbered(table)[cols]


# --- OR ---
def _rows_for_known_hospitals(hospitals: pd.DataFrame, rows: pd.DataFrame) -> pd.DataFrame:
    hos = with_display_names(hospitals)
    if hos.empty or rows.empty:
        return pd.DataFrame()
    keep = [c for c in ("hoscode", "display_name", "level") if c in hos.columns]
    merged = rows.merge(hos[keep], on="hoscode", how="inner")
    return merged.reset_index(drop=True)


def build_or_utilization_table(hospitals: pd.DataFrame, rows: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    cols = ["ลำดับ", "ระดับ", "โรงพยาบาล", "จำนวนเคส", "ชั่วโมงผ่าตัดรวม", "นาที/เคส", "วันเปิดห้องผ่าตัด", "อัตราการใช้ห้องผ่าตัด"]
    merged = _rows_for_known_hospitals(hospitals, rows)
    if merged.empty:
        return pd.DataFrame(columns=cols), pd.Series(dtype=object)
    merged = sort_rows_nulls_last(merged, "util_pct", ascending=False, text=False)
    th = settings.THRESHOLDS
    table = pd.DataFrame({
        "ระดับ": merged["level"].fillna(MISSING).to_numpy(),
        "โรงพยาบาล": merged["display_name"].to_numpy(),
        "จำนวนเคส": merged["total_cases"].map(fmt_number).to_numpy(),
        "ชั่วโมงผ่าตัดรวม": merged["total_or_hours"].map(lambda v: fmt_number(v, 1)).to_numpy(),
        "นาที/เคส": merged["avg_min_per_case"].map(lambda v: fmt_number(v, 1)).to_numpy(),
        "วันเปิดห้องผ่าตัด": merged["actual_or_days"].map(fmt_number).to_numpy(),
        "อัตราการใช้ห้องผ่าตัด": merged["util_pct"].map(lambda v: fmt_pct(v, 1)).to_numpy(),
    })
    bands = pd.Series(
        [rate_band(v, th.or_util_good_pct, th.or_util_warning_pct) for v in merged["util_pct"]], dtype=object
    )
    return _numbered(table)[cols], bands


def build_or_wait_table(hospitals: pd.DataFrame, rows: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    cols = ["ลำดับ", "ระดับ", "โรงพยาบาล", "จำนวนนัด", "รอเฉลี่ย (วัน)", "ต่ำสุด (วัน)", "สูงสุด (วัน)", "รอเฉลี่ย (สัปดาห์)"]
    merged = _rows_for_known_hospitals(hospitals, rows)
    if merged.empty:
        return pd.DataFrame(columns=cols), pd.Series(dtype=object)
    merged = sort_rows_nulls_last(merged, "avg_wait_days", ascending=True, text=False)
    th = settings.THRESHOLDS
    table = pd.DataFrame({
        "ระดับ": merged["level"].fillna(MISSING).to_numpy(),
        "โรงพยาบาล": merged["display_name"].to_numpy(),
        "จำนวนนัด": merged["total_appointments"].map(fmt_number).to_numpy(),
        "รอเฉลี่ย (วัน)": merged["avg_wait_days"].map(lambda v: fmt_number(v, 1)).to_numpy(),
        "ต่ำสุด (วัน)": merged["min_wait_days"].map(fmt_number).to_numpy(),
        "สูงสุด (วัน)": merged["max_wait_days"].map(fmt_number).to_numpy(),
        "รอเฉลี่ย (สัปดาห์)": merged["avg_wait_weeks"].map(lambda v: fmt_number(v, 1)).to_numpy(),
    })
    bands = pd.Series([
        rate_band(v, th.or_wait_good_days, th.or_wait_warning_days, higher_is_better=False)
        for v in merged["avg_wait_days"]
    ], dtype=object)
    return _numbered(table)[cols], bands


# --- Info: Hospital Directory & Map ---
def parse_gps(gps: Any) -> Optional[Tuple[float, float]]:
    """Parses a 'lat,lng' string; anything unparsable yields None."""
    if not isinstance(gps, str) or "," not in gps:
        return None
    lat_str, lng_str = gps.split(",", 1)
    try:
        lat, lng = float(lat_str.strip()), float(lng_str.strip())
    except ValueError:
        return None
    if not (np.isfinite(lat) and np.isfinite(lng)) or not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def build_hospital_directory(directory: pd.DataFrame) -> pd.DataFrame:
    """Directory rows with display name, parsed coordinates and service-plan colour."""
    if directory.empty:
        return pd.DataFrame(columns=["hoscode", "display_name", "level", "amp_code", "beds", "lat", "lng", "color"])
    df = with_display_names(directory)
    coords = df["gps"].map(parse_gps) if "gps" in df.columns else pd.Series(None, index=df.index)
    df["lat"] = [c[0] if c else np.nan for c in coords]
    df["lng"] = [c[1] if c else np.nan for c in coords]
    df["color"] = df["level"].map(level_color)
    return df


# --- System ---
def build_connection_status(rows: pd.DataFrame) -> pd.DataFrame:
    cols = ["hos", "hosname", "sync_version", "connected_at", "status"]
    if rows.empty:
        return pd.DataFrame(columns=cols)
    versions = rows["version"]
    return pd.DataFrame({
        "hos": rows["hoscode"].to_numpy(),
        "hosname": rows["hosname"].to_numpy(),
        "sync_version": versions.to_numpy(),
        "connected_at": rows["d_update"].to_numpy(),
        "status": pd.Series(["online" if isinstance(v, str) and v.strip() else None for v in versions], dtype=object),
    })


def build_admin_view(rows: pd.DataFrame, hospitals: pd.DataFrame) -> pd.DataFrame:
    """Raw table rows with the facility name placed next to `hoscode` when the table has one."""
    if rows.empty or "hoscode" not in rows.columns or hospitals.empty:
        return rows
    names = dict(zip(hospitals["hoscode"], hospitals["hosname"]))
    view = rows.copy()
    view.insert(list(view.columns).index("hoscode") + 1, "hosname", view["hoscode"].map(names))
    return view
