# phl_dashboard/pages/03_Paperless_Refer.py
# PHL DASHBOARD - PAPERLESS REFER (MOPH REFER ADOPTION)

import logging

import pandas as pd
import streamlit as st

from config import settings
from data_processing import fmt_pct, month_label
from data_processing.dashboards import build_paperless_table, summarize_paperless
from visualization import (hospital_select, load_and_inject_css, plot_bar_chart, render_data_table,
                           render_footer, render_kpi_card, render_meta_bar, render_page_header,
                           set_plotly_theme, year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Paperless Refer | {settings.APP_NAME}", page_icon="📨", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def monthly_totals(rows: pd.DataFrame) -> pd.DataFrame:
    if rows.empty:
        return pd.DataFrame(columns=["เดือน", "Refer Out", "MOPH Refer"])
    totals = rows.groupby("m")[["refer_out_count", "moph_refer_count"]].sum().reset_index().sort_values("m")
    return pd.DataFrame({
        "เดือน": [month_label(m) for m in totals["m"]],
        "Refer Out": totals["refer_out_count"].to_numpy(),
        "MOPH Refer": totals["moph_refer_count"].to_numpy(),
    })


def main():
    render_page_header("📨 Paperless Refer", "สัดส่วนการส่งต่อผู้ป่วยผ่านระบบ MOPH Refer")
    try:
        hospitals = cached.get_hospitals()
        cols = st.columns(2)
        with cols[0]: year = year_select(cached.get_paperless_years())
        with cols[1]: hos = hospital_select(hospitals)
        rows = cached.get_paperless(year, hos)
        meta = cached.get_paperless_meta(year, hos)
    except WarehouseError as e:
        logger.error(f"Paperless page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    kpis = summarize_paperless(rows)
    cols = st.columns(3)
    with cols[0]: render_kpi_card("Refer Out ทั้งหมด", kpis["refer_out"], unit="ครั้ง", icon="🚑")
    with cols[1]: render_kpi_card("ส่งผ่าน MOPH Refer", kpis["moph_refer"], unit="ครั้ง", icon="📨")
    with cols[2]: render_kpi_card("ร้อยละ Paperless", fmt_pct(kpis["rate_pct"], 2), icon="✅")

    chart_df = monthly_totals(rows).melt(id_vars="เดือน", var_name="ประเภท", value_name="จำนวน")
    st.plotly_chart(
        plot_bar_chart(chart_df, "เดือน", "จำนวน", "จำนวนการส่งต่อรายเดือน", color="ประเภท", barmode="group"),
        use_container_width=True,
    )
    render_data_table(build_paperless_table(rows))
    render_footer()


if __name__ == "__main__":
    main()
