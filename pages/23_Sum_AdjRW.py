# phl_dashboard/pages/23_Sum_AdjRW.py
# PHL DASHBOARD - SUM ADJRW (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Sum adjRW | {settings.APP_NAME}", page_icon="➕", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "➕ DRGs: sum adjRW",
    description="ผลรวม Adjusted Relative Weight (adjRW) เพื่อสะท้อนภาระงานและความซับซ้อน",
    notes=[
        "แนะนำแสดง sum adjRW รายเดือน + แยกตามโรงพยาบาล",
        "ควรมีตัวกรองช่วงวันที่ และแหล่งข้อมูลการเข้ารหัส",
    ],
)
render_footer()
