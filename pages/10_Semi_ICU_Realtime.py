# phl_dashboard/pages/10_Semi_ICU_Realtime.py
# PHL DASHBOARD - SEMI-ICU REALTIME CASES (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Semi ICU Realtime | {settings.APP_NAME}", page_icon="📡", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "📡 Semi ICU Realtime",
    description="จำนวนเคสใน ward semi icu - icu แบบ real time",
    notes=[
        "แนะนำแสดงจำนวนผู้ป่วยปัจจุบัน + queue/risk category",
        "ต้องมี refresh interval และแหล่งข้อมูลแบบ near real-time",
    ],
)
render_footer()
