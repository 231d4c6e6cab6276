# phl_dashboard/pages/16_Bed_Count.py
# PHL DASHBOARD - BED COUNT BY FACILITY AND BED GROUP

import logging

import pandas as pd
import streamlit as st

from config import settings
from data_processing import fmt_number
from data_processing.dashboards import OTHER_BED_GROUP, build_bed_count
from visualization import (load_and_inject_css, render_footer, render_kpi_card, render_page_header,
                           render_pivot_table, set_plotly_theme)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Bed Count | {settings.APP_NAME}", page_icon="🛏️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🛏️ จำนวนเตียง", "จำนวนเตียงตามกลุ่มเตียงมาตรฐาน (หลักที่ 4 ของรหัสเตียง)")
    try:
        table, totals = build_bed_count(cached.get_hospitals(), cached.get_bed_counts())
    except WarehouseError as e:
        logger.error(f"Bed count page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    cols = st.columns(2)
    with cols[0]: render_kpi_card("เตียงทั้งหมด", totals.get("total"), unit="เตียง", icon="🛏️")
    with cols[1]: render_kpi_card("โรงพยาบาลที่มีเตียง", len(table), unit="แห่ง", icon="🏥")

    groups = settings.BED_GROUPS
    headers = [(g.code, g.display_name) for g in groups]
    if pd.notna(totals.get(OTHER_BED_GROUP)):
        headers.append((OTHER_BED_GROUP, "อื่นๆ"))
    headers.append(("total", "รวม"))
    cells = table.set_index("hoscode")[[code for code, _ in headers]].apply(lambda col: col.map(fmt_number))
    footer = [fmt_number(totals.get(code)) for code, _ in headers]
    render_pivot_table(table, cells, headers, footer=footer)
    render_footer()


if __name__ == "__main__":
    main()
