# phl_dashboard/pages/17_Bed_Occupancy.py
# PHL DASHBOARD - MONTHLY BED OCCUPANCY BY BED GROUP

import logging

import streamlit as st

from config import settings
from data_processing import PeriodAxis, fmt_number, period_labels, to_buddhist_year
from data_processing.dashboards import build_bed_occupancy, format_matrix, occupancy_bands
from visualization import (load_and_inject_css, render_footer, render_page_header, render_pivot_table,
                           set_plotly_theme, tab_select, year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Bed Occupancy | {settings.APP_NAME}", page_icon="📅", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)

METRIC_LABELS = {"bed_days": "วันเตียง", "patient_days": "วันนอน", "rate": "%"}


def main():
    render_page_header("📅 อัตราครองเตียงรายเดือน", "วันนอนผู้ป่วย / (จำนวนเตียง x จำนวนวันในเดือน)")
    group = tab_select([(g.code, g.display_name) for g in settings.BED_GROUPS], name="grp")
    try:
        year = year_select(cached.get_bed_occupancy_years())
        hospitals = cached.get_hospitals()
        rows = cached.get_bed_occupancy(year, group)
    except WarehouseError as e:
        logger.error(f"Bed occupancy page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    ordered, values = build_bed_occupancy(hospitals, rows, year)
    st.subheader(f"{settings.BED_GROUP_LABELS.get(group, group)} ปี {to_buddhist_year(year)}")
    ordered = ordered.assign(beds_label=ordered["beds"].map(fmt_number))
    render_pivot_table(
        ordered, format_matrix(values, {"rate": 1}), period_labels(PeriodAxis.MONTH),
        metric_labels=METRIC_LABELS, lead_columns=[("beds_label", "เตียง")], bands=occupancy_bands(values),
    )
    render_footer()


if __name__ == "__main__":
    main()
