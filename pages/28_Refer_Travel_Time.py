# phl_dashboard/pages/28_Refer_Travel_Time.py
# PHL DASHBOARD - REFERRAL TRAVEL TIME (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"Refer Travel Time | {settings.APP_NAME}", page_icon="🚑", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🚑 ER/Refer: เวลา Refer ต้นทาง → ปลายทาง",
    description="ระยะเวลาในการ refer จาก รพ.ต้นทาง ถึง รพ.ปลายทาง (เฉพาะรถ ambulance เคสฉุกเฉินสีเหลือง/ชมพู/แดง)",
    notes=[
        "แนะนำแสดง median / p90 + แผนที่/ระยะทาง (ถ้ามี)",
        "ต้องมีการคัดกรองเฉพาะเคส ambulance + color code",
    ],
)
render_footer()
