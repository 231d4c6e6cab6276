# phl_dashboard/pages/07_Critical_Mortality.py
# PHL DASHBOARD - CRITICAL DISEASE MORTALITY (SEPSIS / AMI)

import logging

import streamlit as st

from config import settings
from data_processing import to_buddhist_year
from data_processing.dashboards import build_mortality_table, format_matrix
from visualization import (load_and_inject_css, render_footer, render_page_header, render_pivot_table,
                           set_plotly_theme, tab_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Critical Mortality | {settings.APP_NAME}", page_icon="💔", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)

METRIC_LABELS = {"total_admissions": "Admit", "deaths": "เสียชีวิต", "mortality_rate_pct": "อัตราตาย"}


def main():
    render_page_header("💔 อัตราตายโรควิกฤต", f"ย้อนหลัง {settings.DISPLAY.mortality_lookback_years} ปีล่าสุด")
    tabs = settings.MORTALITY_TABS
    tab_key = tab_select([(t.key, t.label) for t in tabs], name="disease")
    table = next(t.table for t in tabs if t.key == tab_key)
    try:
        hospitals = cached.get_hospitals()
        rows = cached.get_mortality(table)
    except WarehouseError as e:
        logger.error(f"Mortality page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    years, ordered, values = build_mortality_table(hospitals, rows)
    if not years:
        st.info("ไม่มีข้อมูล")
    else:
        headers = [(y, f"ปี {to_buddhist_year(y)}") for y in years]
        cells = format_matrix(values, {"mortality_rate_pct": 2})
        render_pivot_table(ordered, cells, headers, metric_labels=METRIC_LABELS)
    render_footer()


if __name__ == "__main__":
    main()
