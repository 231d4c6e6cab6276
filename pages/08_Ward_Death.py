# phl_dashboard/pages/08_Ward_Death.py
# PHL DASHBOARD - DEATHS IN NORMAL WARDS BY PRINCIPAL DIAGNOSIS

import logging

import streamlit as st

from config import settings
from data_processing import fmt_number
from data_processing.dashboards import build_ward_death_matrix, build_ward_death_overview
from visualization import (load_and_inject_css, plot_bar_chart, render_data_table, render_footer,
                           render_meta_bar, render_page_header, render_pivot_table, set_plotly_theme,
                           year_select)
from warehouse import WarehouseError
from warehouse import cached

st.set_page_config(page_title=f"Ward Death | {settings.APP_NAME}", page_icon="🕯️", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)


def main():
    top_n = settings.DISPLAY.ward_death_top_n
    render_page_header("🕯️ เสียชีวิตในหอผู้ป่วยสามัญ", f"{top_n} อันดับโรคหลัก (PDX) ที่มีผู้เสียชีวิตมากที่สุด")
    try:
        year = year_select(cached.get_ward_death_years())
        top = cached.get_ward_death_top(year)
        rows = cached.get_ward_death_rows(year)
        meta = cached.get_ward_death_meta(year)
    except WarehouseError as e:
        logger.error(f"Ward death page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    render_meta_bar(meta)
    overview_tab, matrix_tab = st.tabs(["ภาพรวมเครือข่าย", "รายโรงพยาบาล"])
    with overview_tab:
        if not top.empty:
            st.plotly_chart(
                plot_bar_chart(top.sort_values("total_death"), "total_death", "pdx", f"{top_n} อันดับโรคหลัก",
                               x_title="จำนวนเสียชีวิต", y_title="PDX", orientation="h", hover_name="pdx_name"),
                use_container_width=True,
            )
        render_data_table(build_ward_death_overview(top))
    with matrix_tab:
        ordered, matrix = build_ward_death_matrix(rows, top)
        headers = [(code, code) for code in matrix.columns]
        cells = matrix.apply(lambda col: col.map(fmt_number))
        ordered = ordered.assign(total_label=ordered["total_death"].map(fmt_number))
        render_pivot_table(ordered, cells, headers, lead_columns=[("total_label", "รวมทุกโรค")])
    render_footer()


if __name__ == "__main__":
    main()
