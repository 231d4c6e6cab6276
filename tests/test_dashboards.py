# phl_dashboard/tests/test_dashboards.py
# PHL DASHBOARD - PER-DASHBOARD PIPELINE TESTS

import numpy as np
import pandas as pd
import pytest

from data_processing.dashboards import (
    build_admin_view,
    build_bed_count,
    build_bed_occupancy,
    build_cmi_month_table,
    build_connection_status,
    build_hospital_directory,
    build_icu_wait_table,
    build_mortality_table,
    build_or_utilization_table,
    build_or_wait_table,
    build_paperless_table,
    build_trend_chart_data,
    build_ward_death_matrix,
    occupancy_bands,
    parse_gps,
    summarize_cmi,
    summarize_paperless,
    with_display_names,
)
from data_processing.periods import PeriodAxis, period_labels

# Fixtures are sourced from conftest.py


def test_with_display_names_shortens_and_sets_level(hospitals_df):
    named = with_display_names(hospitals_df)
    assert named.loc[named["hoscode"] == "11251", "display_name"].iloc[0] == "รพ.วังทอง"
    assert named["level"].tolist() == ["A", "M2", "F2", "F2"]


# --- Beds ---
def test_bed_count_lists_only_facilities_with_beds(hospitals_df, bed_counts_df):
    table, totals = build_bed_count(hospitals_df, bed_counts_df)
    assert table["hoscode"].tolist() == ["10676", "11251", "11252"]
    assert table["total"].tolist() == [320, 30, 1]
    assert np.isnan(table.loc[table["hoscode"] == "11251", "2"].iloc[0])
    assert totals["total"] == 351


def test_bed_count_totals_include_beds_outside_standard_groups(hospitals_df, bed_counts_df):
    extra = pd.DataFrame({"hoscode": ["11253", "11251"], "grp": ["9", None], "beds": [4, 2]})
    table, totals = build_bed_count(hospitals_df, pd.concat([bed_counts_df, extra], ignore_index=True))
    assert table["hoscode"].tolist() == ["10676", "11251", "11253", "11252"]
    row = table.set_index("hoscode").loc["11251"]
    assert row["other"] == 2 and row["total"] == 32
    assert totals["other"] == 6
    assert totals["total"] == 357


def test_bed_occupancy_monthly_rates(hospitals_df):
    rows = pd.DataFrame({
        "hoscode": ["11251", "11251", "11252"],
        "m": [2, 4, 2],
        "patient_days": [58, 30, 10],
        "bed_count": [10, 10, 0],
    })
    ordered, values = build_bed_occupancy(hospitals_df, rows, 2024)
    assert ordered["hoscode"].tolist() == ["11251", "11252"]
    assert ordered["beds"].tolist() == [10, 0]
    assert values.loc["11251", (2, "bed_days")] == 290
    assert values.loc["11251", (2, "rate")] == pytest.approx(20.0)
    assert values.loc["11251", (4, "rate")] == pytest.approx(10.0)
    # No row for March, and zero beds give no rate.
    assert np.isnan(values.loc["11251", (3, "rate")])
    assert np.isnan(values.loc["11252", (2, "rate")])

    bands = occupancy_bands(values)
    assert bands.loc["11251", (2, "rate")] == "poor"
    assert bands.loc["11251", (2, "bed_days")] is None


# --- RW / CMI ---
def test_cmi_month_table_orders_by_year_cases(hospitals_df, drg_monthly_df, drg_year_summary_df):
    ordered, values = build_cmi_month_table(hospitals_df, drg_monthly_df, drg_year_summary_df)
    assert ordered["hoscode"].tolist() == ["10676", "11252", "11253", "11251"]
    assert values.loc["11252", (2, "cmi")] == pytest.approx(0.8)


def test_trend_chart_data_limits_to_top_n(hospitals_df, drg_monthly_df, drg_year_summary_df):
    ordered, values = build_cmi_month_table(hospitals_df, drg_monthly_df, drg_year_summary_df)
    chart = build_trend_chart_data(ordered, values, "cases", period_labels(PeriodAxis.MONTH), top_n=2)
    assert len(chart) == 24
    assert set(chart["hoscode"]) == {"10676", "11252"}
    jan = chart[(chart["period"] == "มค") & (chart["hoscode"] == "11252")]["value"].iloc[0]
    assert np.isnan(jan)


def test_summarize_cmi(drg_year_summary_df):
    summary = summarize_cmi(drg_year_summary_df)
    assert summary["cases"] == 230
    assert summary["active_hospitals"] == 2
    assert summary["cmi"] == pytest.approx(338.5 / 230)
    assert summarize_cmi(pd.DataFrame())["cmi"] is None


# --- ER / Refer ---
def test_paperless_rate_is_null_safe():
    rows = pd.DataFrame({
        "hoscode": ["11251", "11252"],
        "hosname": ["โรงพยาบาลวังทอง", "โรงพยาบาลบางระกำ"],
        "hosname_short": [None, None],
        "m": [1, 1],
        "refer_out_count": [20, 0],
        "moph_refer_count": [15, 0],
        "rate": [0.75, None],
    })
    table = build_paperless_table(rows)
    assert table["ร้อยละ"].tolist() == ["75.00%", "-"]
    assert table["เดือน"].tolist() == ["มค", "มค"]
    assert summarize_paperless(rows)["rate_pct"] == pytest.approx(75.0)
    assert summarize_paperless(rows.iloc[1:])["rate_pct"] is None


# --- ICU ---
def test_mortality_keeps_latest_years_and_orders_by_presence(hospitals_df, mortality_df):
    years, ordered, values = build_mortality_table(hospitals_df, mortality_df, lookback=5)
    assert years == [2025, 2024, 2023, 2022, 2021]
    assert ordered["hoscode"].tolist() == ["10676", "11251", "11252", "11253"]
    assert values.loc["11251", (2025, "mortality_rate_pct")] == 5.0
    assert values.loc["11253"].isna().all()
    assert 2020 not in values.columns.get_level_values("period")


def test_ward_death_matrix_totals_cover_all_diagnoses():
    top = pd.DataFrame({"pdx": ["J189", "I219"], "pdx_name": ["Pneumonia", "AMI"], "total_death": [12, 5], "rank": [1, 2]})
    rows = pd.DataFrame({
        "hoscode": ["10676", "10676", "10676", "11251"],
        "hosname": ["โรงพยาบาลพุทธชินราช พิษณุโลก"] * 3 + ["โรงพยาบาลวังทอง"],
        "hosname_short": [None] * 4,
        "sp_level": ["A", "A", "A", "M2"],
        "pdx": ["J189", "I219", "A419", "J189"],
        "death_count": [8, 5, 3, 4],
    })
    ordered, matrix = build_ward_death_matrix(rows, top)
    assert ordered["hoscode"].tolist() == ["10676", "11251"]
    assert ordered["total_death"].tolist() == [16, 4]
    assert list(matrix.columns) == ["J189", "I219"]
    assert matrix.loc["10676", "J189"] == 8
    assert np.isnan(matrix.loc["11251", "I219"])


def test_icu_wait_sort_keeps_missing_waits_last(icu_wait_df):
    asc = build_icu_wait_table(icu_wait_df, sort_by="avg_admit_wait_min", ascending=True)
    assert asc["โรงพยาบาล"].tolist() == ["รพ.บางระกำ", "รพศ.พุทธชินราช", "รพ.วังทอง"]
    assert asc["ระยะเวลารอเตียงเฉลี่ย"].tolist() == ["0 ชม 45 นาที", "2 ชม 0 นาที", "-"]
    desc = build_icu_wait_table(icu_wait_df, sort_by="avg_admit_wait_min", ascending=False)
    assert desc["โรงพยาบาล"].tolist()[-1] == "รพ.วังทอง"
    by_cases = build_icu_wait_table(icu_wait_df, sort_by="total_cases", ascending=False)
    assert by_cases["ลำดับ"].tolist() == [1, 2, 3]
    assert by_cases["โรงพยาบาล"].tolist()[0] == "รพศ.พุทธชินราช"


def test_icu_wait_name_sort_uses_names_not_display_aliases(icu_wait_df):
    # Full names order บางระกำ < พุทธชินราช < วังทอง; the "รพศ." alias plays no part.
    asc = build_icu_wait_table(icu_wait_df, sort_by="hosname", ascending=True)
    assert asc["โรงพยาบาล"].tolist() == ["รพ.บางระกำ", "รพศ.พุทธชินราช", "รพ.วังทอง"]
    desc = build_icu_wait_table(icu_wait_df, sort_by="hosname", ascending=False)
    assert desc["โรงพยาบาล"].tolist() == ["รพ.วังทอง", "รพศ.พุทธชินราช", "รพ.บางระกำ"]


def test_icu_wait_name_sort_prefers_short_names_and_skips_punctuation():
    shorts = ["รพ.วังทอง", "รพศ.พุทธชินราช", "รพร.นครไทย", "รพ.บางระกำ"]
    rows = pd.DataFrame({
        "hoscode": ["11251", "10676", "11257", "11252"],
        "hosname": [None] * 4,
        "hosname_short": shorts,
        **{col: [1, 2, 3, 4] for col in ("total_cases", "admitted_cases", "refer_out_cases")},
        **{col: [10.0, 20.0, 30.0, 40.0] for col in ("avg_admit_wait_min", "avg_refer_wait_min", "pct_over_4hr")},
    })
    table = build_icu_wait_table(rows, sort_by="hosname", ascending=True)
    assert table["โรงพยาบาล"].tolist() == ["รพ.บางระกำ", "รพร.นครไทย", "รพ.วังทอง", "รพศ.พุทธชินราช"]


# --- OR ---
def test_or_utilization_drops_unknown_facilities_and_bands_rates(hospitals_df):
    rows = pd.DataFrame({
        "hoscode": ["99999", "10676", "11251", "11252"],
        "total_cases": [1, 500, 40, 2],
        "total_or_hours": [1.0, 900.0, 50.0, 1.5],
        "avg_min_per_case": [60.0, 108.0, 75.0, 45.0],
        "actual_or_days": [1, 240, 100, 2],
        "util_pct": [90.0, 85.0, 50.0, None],
    })
    table, bands = build_or_utilization_table(hospitals_df, rows)
    assert table["อัตราการใช้ห้องผ่าตัด"].tolist() == ["85.0%", "50.0%", "-"]
    assert bands.tolist() == ["good", "poor", None]


def test_or_wait_sorted_by_shortest_wait(hospitals_df):
    rows = pd.DataFrame({
        "hoscode": ["10676", "11251"],
        "total_appointments": [50, 10],
        "avg_wait_days": [120.0, 20.0],
        "min_wait_days": [10, 5],
        "max_wait_days": [300, 40],
        "avg_wait_weeks": [17.1, 2.9],
    })
    table, bands = build_or_wait_table(hospitals_df, rows)
    assert table["โรงพยาบาล"].tolist() == ["รพ.วังทอง", "รพศ.พุทธชินราช"]
    assert bands.tolist() == ["good", "poor"]


# --- Info & System ---
@pytest.mark.parametrize("gps, expected", [
    ("16.8211,100.2659", (16.8211, 100.2659)),
    (" 16.5 , 100.1 ", (16.5, 100.1)),
    ("", None), (None, None), ("abc,def", None), ("200,100", None),
])
def test_parse_gps(gps, expected):
    assert parse_gps(gps) == expected


def test_hospital_directory_adds_coordinates_and_colours():
    directory = pd.DataFrame({
        "hoscode": ["10676", "11251"],
        "hosname": ["โรงพยาบาลพุทธชินราช พิษณุโลก", "โรงพยาบาลวังทอง"],
        "hosname_short": [None, None],
        "sp_level": ["A", None],
        "gps": ["16.8211,100.2659", None],
        "amp_code": ["01", "09"],
        "beds": [1000, 90],
    })
    df = build_hospital_directory(directory)
    assert df["lat"].iloc[0] == pytest.approx(16.8211)
    assert np.isnan(df["lat"].iloc[1])
    assert df["color"].tolist()[0] != df["color"].tolist()[1]


def test_connection_status_online_only_with_version():
    rows = pd.DataFrame({
        "hoscode": ["11251", "11252"],
        "hosname": ["โรงพยาบาลวังทอง", "โรงพยาบาลบางระกำ"],
        "version": ["2.4.1", None],
        "d_update": ["2026-10-01 08:00:00", None],
    })
    status = build_connection_status(rows)
    assert list(status.columns) == ["hos", "hosname", "sync_version", "connected_at", "status"]
    assert status["status"].tolist() == ["online", None]


def test_admin_view_inserts_facility_name_after_code(hospitals_df):
    rows = pd.DataFrame({"id": [1], "hoscode": ["11251"], "d_update": ["2026-10-01"]})
    view = build_admin_view(rows, hospitals_df)
    assert list(view.columns) == ["id", "hoscode", "hosname", "d_update"]
    assert view["hosname"].iloc[0] == "โรงพยาบาลวังทอง"
    no_code = pd.DataFrame({"id": [1], "note": ["ok"]})
    assert list(build_admin_view(no_code, hospitals_df).columns) == ["id", "note"]
