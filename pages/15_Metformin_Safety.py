# phl_dashboard/pages/15_Metformin_Safety.py
# PHL DASHBOARD - METFORMIN SAFETY (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Metformin Safety | {settings.APP_NAME}", page_icon="💊", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "💊 Metformin Safety",
    description="การจัดการความปลอดภัยในการใช้ยา Metformin (MALA Prevention)",
    notes=[
        "แนะนำตัวชี้วัด: eGFR ก่อนสั่งยา/การปรับขนาด/การหยุดยาในภาวะเสี่ยง",
        "ควรมี alert rule และรายงานผู้ป่วยเข้าเกณฑ์เสี่ยง",
    ],
)
render_footer()
