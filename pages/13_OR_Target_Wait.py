# phl_dashboard/pages/13_OR_Target_Wait.py
# PHL DASHBOARD - WAITING TIME FOR TARGET ELECTIVE SURGERY

import logging

import streamlit as st

from config import settings
from data_processing.dashboards import build_or_wait_table
from visualization import (load_and_inject_css, render_data_table, render_footer, render_meta_bar,
                           render_page_header, set_plotly_theme, tab_select, year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"OR Target Wait | {settings.APP_NAME}", page_icon="⏳", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("⏳ ระยะเวลารอผ่าตัดโรคเป้าหมาย", "จำนวนวันตั้งแต่นัดจนได้รับการผ่าตัด")
    tabs = settings.WAITING_TIME_TABS
    tab_key = tab_select([(t.key, t.label) for t in tabs], name="disease")
    table_name = next(t.table for t in tabs if t.key == tab_key)
    try:
        year = year_select(cached.get_or_wait_years())
        hospitals = cached.get_hospitals()
        rows = cached.get_or_wait(table_name, year)
        meta = cached.get_or_wait_meta(table_name, year)
    except WarehouseError as e:
        logger.error(f"OR target wait page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    table, bands = build_or_wait_table(hospitals, rows)
    render_data_table(table, band_column="รอเฉลี่ย (วัน)", bands=bands)
    th = settings.THRESHOLDS
    st.caption(f"เกณฑ์สี: ≤ {th.or_wait_good_days:.0f} วัน เขียว, ≤ {th.or_wait_warning_days:.0f} วัน ส้ม, มากกว่านั้นแดง")
    render_footer()


if __name__ == "__main__":
    main()
