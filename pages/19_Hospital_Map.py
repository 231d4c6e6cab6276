# phl_dashboard/pages/19_Hospital_Map.py
# PHL DASHBOARD - FACILITY DIRECTORY & MAP

import logging

import streamlit as st

from config import settings
from data_processing import MISSING, fmt_number
from data_processing.dashboards import build_hospital_directory
from visualization import (load_and_inject_css, plot_hospital_map, render_data_table, render_footer,
                           render_page_header, set_plotly_theme)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Hospital Map | {settings.APP_NAME}", page_icon="🗺️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    render_page_header("🗺️ แผนที่โรงพยาบาล", "ที่ตั้งโรงพยาบาลในเครือข่ายตามระดับ Service Plan")
    try:
        directory = build_hospital_directory(cached.get_hospital_directory())
    except WarehouseError as e:
        logger.error(f"Hospital map page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    st.plotly_chart(plot_hospital_map(directory, "โรงพยาบาลในเครือข่าย"), use_container_width=True)
    missing_gps = int(directory["lat"].isna().sum()) if not directory.empty else 0
    if missing_gps:
        st.caption(f"ไม่มีพิกัด {missing_gps} แห่ง")

    if not directory.empty:
        render_data_table(directory.assign(
            beds=directory["beds"].map(fmt_number),
            level=directory["level"].fillna(MISSING),
        )[["hoscode", "display_name", "level", "amp_code", "beds"]].rename(columns={
            "hoscode": "รหัส", "display_name": "โรงพยาบาล", "level": "ระดับ", "amp_code": "อำเภอ", "beds": "เตียง",
        }))
    render_footer()


if __name__ == "__main__":
    main()
