# phl_dashboard/pages/06_ICU_Wait_Bed.py
# PHL DASHBOARD - WAITING TIME FOR AN ICU BED

import logging

import streamlit as st

from config import settings
from data_processing import fmt_hour_minute, fmt_number, safe_rate
from data_processing.dashboards import WAIT_SORT_KEYS, build_icu_wait_table
from visualization import (hospital_select, load_and_inject_css, render_data_table, render_footer,
                           render_kpi_card, render_meta_bar, render_page_header, set_plotly_theme,
                           sort_select, year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"ICU Wait Bed | {settings.APP_NAME}", page_icon="⏱️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)

SORT_LABELS = dict(zip(WAIT_SORT_KEYS, ["ชื่อโรงพยาบาล", "จำนวน case", "ระยะเวลารอเตียงเฉลี่ย"]))


def main():
    render_page_header("⏱️ ระยะเวลารอเตียง ICU", "เวลาเฉลี่ยตั้งแต่ตัดสินใจรับไว้จนได้เตียง ICU")
    try:
        cols = st.columns(2)
        with cols[0]: year = year_select(cached.get_icu_wait_years())
        with cols[1]: hos = hospital_select(cached.get_hospitals())
        rows = cached.get_icu_wait(year, hos)
        meta = cached.get_icu_wait_meta(year, hos)
    except WarehouseError as e:
        logger.error(f"ICU wait page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    if not rows.empty:
        total_cases = rows["total_cases"].sum()
        timed = rows[rows["avg_admit_wait_min"].notna()]
        weighted = (timed["avg_admit_wait_min"] * timed["admitted_cases"]).sum()
        kpi_cols = st.columns(2)
        with kpi_cols[0]: render_kpi_card("ผู้ป่วยรอเตียงทั้งหมด", fmt_number(total_cases), unit="ราย", icon="🧍")
        with kpi_cols[1]:
            render_kpi_card("รอเตียงเฉลี่ย (ถ่วงน้ำหนัก)",
                            fmt_hour_minute(safe_rate(weighted, timed["admitted_cases"].sum())), icon="⏱️")

    sort_by, ascending = sort_select(list(SORT_LABELS.items()), default="avg_admit_wait_min")
    render_data_table(build_icu_wait_table(rows, sort_by=sort_by, ascending=ascending))
    render_footer()


if __name__ == "__main__":
    main()
