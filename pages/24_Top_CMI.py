# phl_dashboard/pages/24_Top_CMI.py
# PHL DASHBOARD - TOP 10 DIAGNOSIS GROUPS BY CMI (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Top CMI | {settings.APP_NAME}", page_icon="🥇", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🥇 DRGs: Top 10 กลุ่มโรค (CMI สูงสุด)",
    description="แสดง 10 อันดับกลุ่มโรคของแต่ละโรงพยาบาลที่มี CMI สูงสุด",
    notes=[
        "รูปแบบแนะนำ: ตาราง + bar chart (Top 10) ต่อโรงพยาบาล",
        "ควรมีตัวกรอง: โรงพยาบาล, ช่วงวันที่, กลุ่ม DRG/หมวด ICD",
    ],
)
render_footer()
