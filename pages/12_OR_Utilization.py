# phl_dashboard/pages/12_OR_Utilization.py
# PHL DASHBOARD - OPERATING ROOM UTILIZATION

import logging

import streamlit as st

from config import settings
from data_processing.dashboards import build_or_utilization_table
from visualization import (load_and_inject_css, render_data_table, render_footer, render_meta_bar,
                           render_page_header, set_plotly_theme, year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"OR Utilization | {settings.APP_NAME}", page_icon="🏥", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🏥 อัตราการใช้ห้องผ่าตัด", "ชั่วโมงผ่าตัดจริงเทียบกับเวลาเปิดห้องผ่าตัด")
    try:
        year = year_select(cached.get_or_utilization_years())
        hospitals = cached.get_hospitals()
        rows = cached.get_or_utilization(year)
        meta = cached.get_or_utilization_meta(year)
    except WarehouseError as e:
        logger.error(f"OR utilization page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    table, bands = build_or_utilization_table(hospitals, rows)
    render_data_table(table, band_column="อัตราการใช้ห้องผ่าตัด", bands=bands)
    th = settings.THRESHOLDS
    st.caption(f"เกณฑ์สี: ≥ {th.or_util_good_pct:.0f}% เขียว, ≥ {th.or_util_warning_pct:.0f}% ส้ม, ต่ำกว่านั้นแดง")
    render_footer()


if __name__ == "__main__":
    main()
