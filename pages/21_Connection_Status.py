# phl_dashboard/pages/21_Connection_Status.py
# PHL DASHBOARD - SYNC AGENT CONNECTION STATUS

import logging

import streamlit as st

from config import settings
from data_processing.dashboards import build_connection_status
from visualization import load_and_inject_css, render_data_table, render_footer, render_kpi_card, render_page_header
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Connection Status | {settings.APP_NAME}", page_icon="🔌", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
logger = logging.getLogger(__name__)


def main():
    render_page_header("🔌 สถานะการเชื่อมต่อ", "เวอร์ชันและเวลาเชื่อมต่อล่าสุดของโปรแกรม sync แต่ละโรงพยาบาล")
    try:
        status = build_connection_status(cached.get_connection_status())
    except WarehouseError as e:
        logger.error(f"Connection status page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    online = int((status["status"] == "online").sum()) if not status.empty else 0
    cols = st.columns(2)
    with cols[0]: render_kpi_card("Online", online, unit="แห่ง", status_level="good", icon="🟢")
    with cols[1]: render_kpi_card("ไม่มีเวอร์ชัน", len(status) - online, unit="แห่ง", status_level="poor", icon="⚪")
    render_data_table(status)
    render_footer()


if __name__ == "__main__":
    main()
