# phl_dashboard/pages/27_Red_Bypass_ER.py
# PHL DASHBOARD - RED-TRIAGE ER BYPASS (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Red Bypass ER | {settings.APP_NAME}", page_icon="🚨", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🚨 ER/Refer: วิกฤตสีแดง เข้าเฉพาะทางได้ทันที",
    description=(
        'อัตราผู้ป่วยวิกฤตสีแดง (เช่น STEMI, Stroke, Trauma) ที่เมื่อถึง ER ปลายทางแล้ว "ไม่ต้องแวะพักที่ ER" '
        "และเข้าห้องฉุกเฉินเฉพาะทาง (Cath Lab, Stroke Unit, OR) ได้ทันที"
    ),
    notes=[
        "แนะนำแสดง % ตามชนิดโรค + เหตุผลที่ไม่ผ่าน (ถ้ามี)",
        "ต้องนิยาม event timestamp: arrival → cath/OR/stroke unit",
    ],
)
render_footer()
