# phl_dashboard/pages/20_Transform_Log.py
# PHL DASHBOARD - ETL TRANSFORM LOG

import logging

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_page_header
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Transform Log | {settings.APP_NAME}", page_icon="📜", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
logger = logging.getLogger(__name__)


def main():
    render_page_header("📜 Transform Log", f"{settings.DISPLAY.transform_log_limit} รายการล่าสุด")
    try:
        log = cached.get_transform_log()
    except WarehouseError as e:
        logger.error(f"Transform log page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    if log.empty:
        st.info("ไม่มีข้อมูล")
    else:
        st.dataframe(log, hide_index=True, use_container_width=True)
    render_footer()


if __name__ == "__main__":
    main()
