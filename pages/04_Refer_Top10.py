# phl_dashboard/pages/04_Refer_Top10.py
# PHL DASHBOARD - TOP 10 REFERRED DIAGNOSES

import logging

import streamlit as st

from config import settings
from data_processing.dashboards import build_refer_top10_table
from visualization import (hospital_select, load_and_inject_css, render_data_table, render_footer,
                           render_meta_bar, render_page_header, set_plotly_theme)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Refer Top 10 | {settings.APP_NAME}", page_icon="🔟", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🔟 Refer Top 10", "โรคที่มีการส่งต่อมากที่สุด 10 อันดับ")
    try:
        hos = hospital_select(cached.get_hospitals())
        rows = cached.get_refer_top10(hos)
        meta = cached.get_refer_top10_meta(hos)
    except WarehouseError as e:
        logger.error(f"Refer top-10 page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    render_data_table(build_refer_top10_table(rows))
    render_footer()


if __name__ == "__main__":
    main()
