# phl_dashboard/pages/26_Consult_Response_Time.py
# PHL DASHBOARD - CONSULT RESPONSE TIME (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Consult Response Time | {settings.APP_NAME}", page_icon="☎️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "☎️ ER/Refer: เวลา Consult → ตอบรับแผนการรักษา",
    description="ระยะเวลาตั้งแต่ ER รพช. กดปุ่ม Consult จนถึงแพทย์เฉพาะทาง รพ.พุทธชินราช/รพ.แม่ข่าย ตอบรับแผน",
    notes=[
        "แนะนำแสดง median / p90 และแจกแจงตามช่วงเวลา (กะ/วันหยุด)",
        "ตัวกรอง: โรงพยาบาลต้นทาง, ปลายทาง, ประเภทโรค, triage",
    ],
)
render_footer()
