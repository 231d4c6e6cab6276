# phl_dashboard/pages/25_Avoidable_Refer.py
# PHL DASHBOARD - AVOIDABLE REFERRALS (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Avoidable Refer | {settings.APP_NAME}", page_icon="↩️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "↩️ ER/Refer: เคสที่ศักยภาพ รพช.เดิมทำได้",
    description='จำนวนเคสที่ส่งมาแล้วพบว่า "ศักยภาพ รพช. เดิมทำได้" (avoidable refer)',
    notes=[
        "แนะนำแสดงจำนวน/อัตรา ต่อเดือน + รายสาเหตุหลัก",
        "ต้องกำหนดเกณฑ์ประเมินศักยภาพ/แนวทาง clinical pathway",
    ],
)
render_footer()
