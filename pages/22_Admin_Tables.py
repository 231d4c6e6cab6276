# phl_dashboard/pages/22_Admin_Tables.py
# PHL DASHBOARD - RAW WAREHOUSE TABLE BROWSER

import logging

import streamlit as st

from config import settings
from data_processing import fmt_number
from data_processing.dashboards import build_admin_view
from visualization import (choice_select, hospital_select, load_and_inject_css, render_footer,
                           render_meta_bar, render_page_header)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Admin Tables | {settings.APP_NAME}", page_icon="🗄️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
logger = logging.getLogger(__name__)


def main():
    render_page_header("🗄️ ตารางข้อมูล", "ข้อมูลดิบจากตาราง transform_sync_* (อ่านอย่างเดียว)")
    limit = settings.DISPLAY.admin_row_limit
    try:
        table = choice_select(settings.ADMIN_TABLES, name="table", label="ตาราง")
        columns = cached.get_table_columns(table)
        hospitals = cached.get_hospitals()
        hos = hospital_select(hospitals) if "hoscode" in columns else None
        rows = cached.get_table_rows(table, hos)
        meta = cached.get_table_meta(table, (("hoscode", "hos", hos),) if hos else ())
    except WarehouseError as e:
        logger.error(f"Admin tables page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    note = f"(จำกัด {fmt_number(limit)})" if len(rows) >= limit else None
    render_meta_bar(meta, note=note)
    if rows.empty:
        st.info("ไม่มีข้อมูล")
    else:
        st.dataframe(build_admin_view(rows, hospitals), hide_index=True, use_container_width=True)
    render_footer()


if __name__ == "__main__":
    main()
