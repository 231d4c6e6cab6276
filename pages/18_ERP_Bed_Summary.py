# phl_dashboard/pages/18_ERP_Bed_Summary.py
# PHL DASHBOARD - ERP BED SUMMARY (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"สรุปเตียง ERP | {settings.APP_NAME}", page_icon="🧾", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🧾 สรุปเตียง ERP",
    description="เตียงประเภท: รวม / แยกชาย-หญิง / ทั่วไป / พิเศษ / ICU / semi ICU + การครองเตียง และอัตราการครองเตียง (อิงรูปแบบ ERP)",
    notes=[
        "แนะนำมีตัวกรองช่วงวันที่: ตั้งแต่วันที่…ถึงวันที่…",
        "รูปแบบ: ตารางสรุป + chart occupancy ต่อประเภทเตียง",
    ],
)
render_footer()
