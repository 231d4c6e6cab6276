# phl_dashboard/pages/09_ICU_Death_Analysis.py
# PHL DASHBOARD - ICU DEATH ANALYSIS (AWAITING DATA)

import streamlit as st

from config import settings
from visualization import load_and_inject_css, render_footer, render_placeholder

st.set_page_config(page_title=f"วิเคราะห์การเสียชีวิตใน ICU | {settings.APP_NAME}", page_icon="🔎", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)

render_placeholder(
    "🔎 วิเคราะห์การเสียชีวิตใน ICU",
    description="สาเหตุการตาย 10 อันดับ + อัตราการตายรวม + อัตราการตายแยกโรค (Top 10)",
    notes=[
        "แนะนำมี: Top 10 cause table + mortality rate summary card",
        "ต้องนิยามการตาย: death in ICU vs semi ICU และช่วงเวลา",
    ],
)
render_footer()
