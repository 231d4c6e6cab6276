# phl_dashboard/pages/01_RW_CMI.py
# PHL DASHBOARD - RW / CMI BY FACILITY (MONTH & YEAR VIEWS)

import logging

import streamlit as st

from config import settings
from data_processing import PeriodAxis, fmt_number, period_labels, to_buddhist_year
from data_processing.dashboards import (CMI_CHART_DIGITS, CMI_TABLE_DIGITS, build_cmi_month_table,
                                        build_cmi_year_table, build_trend_chart_data, format_matrix,
                                        summarize_cmi)
from visualization import (load_and_inject_css, plot_trend_chart, render_footer, render_kpi_card,
                           render_meta_bar, render_page_header, render_pivot_table, set_plotly_theme,
                           tab_select, view_tabs, year_select)
from warehouse import WarehouseError
from warehouse import cached

# --- Page Setup ---
st.set_page_config(page_title=f"RW / CMI | {settings.APP_NAME}", page_icon="📈", layout="wide")
load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()
logger = logging.getLogger(__name__)

METRIC_LABELS = {"cases": "ผู้ป่วย", "sum_adjrw": "AdjRW", "cmi": "CMI"}
CHART_METRICS = [("cmi", "CMI"), ("sum_adjrw", "Sum AdjRW"), ("cases", "จำนวนผู้ป่วย")]


def render_kpis(year: int) -> None:
    summary = summarize_cmi(cached.get_drg_year_summary(year))
    cols = st.columns(4)
    with cols[0]: render_kpi_card("ผู้ป่วยในทั้งหมด", summary["cases"], unit="ราย", icon="🧑‍⚕️")
    with cols[1]: render_kpi_card("Sum AdjRW", fmt_number(summary["sum_adjrw"], 4), icon="⚖️")
    with cols[2]: render_kpi_card("CMI เครือข่าย", fmt_number(summary["cmi"], 4), icon="📈")
    with cols[3]: render_kpi_card("โรงพยาบาลที่มีข้อมูล", summary["active_hospitals"], unit="แห่ง", icon="🏥")


def main():
    render_page_header("📈 RW / CMI รายโรงพยาบาล", "ผลรวม AdjRW และ Case Mix Index รายเดือนและรายปี")
    try:
        hospitals = cached.get_hospitals()
        years = cached.get_drg_years()
        axis = view_tabs()

        if axis == PeriodAxis.MONTH:
            year = year_select(years)
            ordered, values = build_cmi_month_table(
                hospitals, cached.get_drg_monthly(year), cached.get_drg_year_summary(year)
            )
            headers = period_labels(PeriodAxis.MONTH)
            meta = cached.get_drg_meta(year)
            render_meta_bar(meta, row_key="row_count_selected", note=f"ทั้งหมด {fmt_number(meta['row_count_all'])} แถว")
            render_kpis(year)
            chart_title = f"แนวโน้มรายเดือน ปี {to_buddhist_year(year)}"
        else:
            ordered, data_years, values = build_cmi_year_table(hospitals, cached.get_drg_year_pivot())
            headers = period_labels(PeriodAxis.YEAR, data_years)
            chart_title = "แนวโน้มรายปี"
    except WarehouseError as e:
        logger.error(f"RW/CMI page failed to load data: {e}")
        st.error(f"ไม่สามารถโหลดข้อมูลได้: {e}")
        st.stop()

    st.divider()
    metric = tab_select(CHART_METRICS, name="metric")
    top_n = settings.DISPLAY.chart_top_n_hospitals
    chart_df = build_trend_chart_data(ordered, values, metric, headers, top_n=top_n)
    st.plotly_chart(
        plot_trend_chart(chart_df, f"{chart_title} ({top_n} อันดับแรก)", dict(CHART_METRICS)[metric], digits=CMI_CHART_DIGITS[metric]),
        use_container_width=True,
    )

    st.subheader("ตารางรายโรงพยาบาล")
    render_pivot_table(ordered, format_matrix(values, CMI_TABLE_DIGITS), headers, metric_labels=METRIC_LABELS)
    render_footer()


if __name__ == "__main__":
    main()
