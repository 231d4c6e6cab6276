# phl_dashboard/pages/05_ICU_Bed_Occupancy.py
# PHL DASHBOARD - ICU / SEMI-ICU BED OCCUPANCY OVER A DATE RANGE

import logging
from datetime import date

import streamlit as st

from config import settings
from data_processing import resolve_date
from data_processing.dashboards import build_icu_occupancy_table
from visualization import (date_range_select, load_and_inject_css, render_data_table, render_footer,
                           render_meta_bar, render_page_header, set_plotly_theme, tab_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"ICU Occupancy | {settings.APP_NAME}", page_icon="🛏️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🛏️ อัตราครองเตียง ICU", "วันนอนผู้ป่วยเทียบกับวันเตียงทั้งหมดในช่วงวันที่ที่เลือก")
    tabs = settings.ICU_TABS
    tab_key = tab_select([(t.key, t.label) for t in tabs], name="type")
    codes = tuple(next(t.codes for t in tabs if t.key == tab_key))

    try:
        bounds = cached.get_icu_date_bounds()
        default_start = resolve_date(settings.DISPLAY.icu_default_start_date, date.today())
        default_end = bounds["max_date"] or date.today()
        start, end = date_range_select(default_start, default_end)
        rows = cached.get_icu_occupancy(start, end, codes)
        meta = cached.get_icu_occupancy_meta(codes)
    except WarehouseError as e:
        logger.error(f"ICU occupancy page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    if st.checkbox("แสดงเฉพาะโรงพยาบาลที่มีเตียง", value=True) and not rows.empty:
        rows = rows[rows["total_beds"] > 0].reset_index(drop=True)
    table, bands = build_icu_occupancy_table(rows)
    render_data_table(table, band_column="อัตราครองเตียง", bands=bands)
    th = settings.THRESHOLDS
    st.caption(f"เกณฑ์สี: ≥ {th.occupancy_good_pct:.0f}% เขียว, ≥ {th.occupancy_warning_pct:.0f}% ส้ม, ต่ำกว่านั้นแดง")
    render_footer()


if __name__ == "__main__":
    main()
