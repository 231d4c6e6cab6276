# phl_dashboard/pages/11_OR_Realtime_Cases.py
# PHL DASHBOARD - OR REALTIME CASES (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"OR Realtime | {settings.APP_NAME}", page_icon="📡", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "📡 OR Realtime",
    description="จำนวนเคสผ่าตัดในห้อง OR แบบ real time",
    notes=[
        "แนะนำแสดงสถานะห้อง/คิวผ่าตัด + refresh ทุก 1-5 นาที",
        "ตัวกรอง: โรงพยาบาล, ประเภทห้อง, elective/emergency",
    ],
)
render_footer()
