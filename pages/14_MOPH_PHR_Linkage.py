# phl_dashboard/pages/14_MOPH_PHR_Linkage.py
# PHL DASHBOARD - MOPH PHR LINKAGE (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"MOPH PHR Linkage | {settings.APP_NAME}", page_icon="🔗", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🔗 MOPH PHR Linkage",
    description="การเชื่อมโยงข้อมูลยาผ่านระบบ Moph-PHR",
    notes=[
        "แนะนำแสดงจำนวนรายการยาที่ sync ได้สำเร็จ + error rate",
        "ควรมีตัวกรอง: โรงพยาบาล, ช่วงวันที่, ประเภทยา",
    ],
)
render_footer()
