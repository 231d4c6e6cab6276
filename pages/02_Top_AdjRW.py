# phl_dashboard/pages/02_Top_AdjRW.py
# PHL DASHBOARD - TOP DRGs BY SUM ADJRW

import logging

import streamlit as st

from config import settings
from data_processing.dashboards import build_top_adjrw_table
from visualization import (hospital_select, load_and_inject_css, month_select, render_data_table,
                           render_footer, render_meta_bar, render_page_header, set_plotly_theme,
                           year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Top AdjRW | {settings.APP_NAME}", page_icon="🏆", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🏆 Top AdjRW", "DRG ที่มีผลรวม AdjRW สูงสุด จัดอันดับรายโรงพยาบาลและรายเดือน")
    try:
        hospitals = cached.get_hospitals()
        cols = st.columns(3)
        with cols[0]: year = year_select(cached.get_top_adjrw_years())
        with cols[1]: hos = hospital_select(hospitals)
        with cols[2]: month = month_select()
        rows = cached.get_top_adjrw(year, hos, month)
        meta = cached.get_top_adjrw_meta(year, hos, month)
    except WarehouseError as e:
        logger.error(f"Top AdjRW page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    render_data_table(build_top_adjrw_table(rows))
    render_footer()


if __name__ == "__main__":
    main()
