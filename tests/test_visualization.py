# phl_dashboard/tests/test_visualization.py
# PHL DASHBOARD - CHART FACTORY & TABLE RENDERING TESTS

import html
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import pytest

from visualization import (create_empty_figure, pivot_table_html, plot_bar_chart,
                           plot_hospital_map, plot_trend_chart, render_kpi_card,
                           render_placeholder, set_plotly_theme)

# Fixtures are sourced from conftest.py

@pytest.fixture(scope="module", autouse=True)
def apply_theme():
    """Apply the custom Plotly theme for all tests in this module."""
    set_plotly_theme()


# --- Plotting Tests ---
def test_create_empty_figure_carries_message():
    fig = create_empty_figure("Test", "ไม่มีข้อมูล")
    assert isinstance(fig, go.Figure)
    assert not fig.data
    assert fig.layout.annotations[0].text == "ไม่มีข้อมูล"


def test_plot_bar_chart_structure():
    """Tests that bar charts are generated with the correct structure."""
    df = pd.DataFrame({"month": ["มค", "กพ"], "rate": [75.0, 80.5]})
    fig = plot_bar_chart(df, x_col="month", y_col="rate", title="Paperless Refer", digits=1)
    assert isinstance(fig, go.Figure)
    assert len(fig.data) > 0 and fig.data[0].type == "bar"
    assert "Paperless Refer" in fig.layout.title.text
    assert fig.data[0].texttemplate == "%{y:,.1f}"


def test_bar_chart_with_empty_frame_is_placeholder():
    fig = plot_bar_chart(pd.DataFrame(), "m", "rate", "Paperless")
    assert not fig.data
    assert fig.layout.annotations


def test_trend_chart_draws_one_line_per_facility():
    chart = pd.DataFrame({
        "period": ["มค", "กพ", "มค", "กพ"],
        "hoscode": ["10676", "10676", "11252", "11252"],
        "label": ["รพศ.พุทธชินราช", "รพศ.พุทธชินราช", "รพ.บางระกำ", "รพ.บางระกำ"],
        "value": [100, 120, np.nan, 10],
    })
    fig = plot_trend_chart(chart, "Cases", "cases")
    assert len(fig.data) == 2
    assert all(trace.connectgaps is False for trace in fig.data)


def test_trend_chart_with_only_missing_values_is_placeholder():
    chart = pd.DataFrame({"period": ["มค"], "hoscode": ["11251"], "label": ["รพ.วังทอง"], "value": [np.nan]})
    fig = plot_trend_chart(chart, "Cases", "cases")
    assert not fig.data


def test_hospital_map_needs_coordinates():
    no_coords = pd.DataFrame({"hoscode": ["11251"], "display_name": ["รพ.วังทอง"], "level": ["M2"],
                              "color": ["#000000"], "lat": [np.nan], "lng": [np.nan]})
    assert not plot_hospital_map(no_coords, "Map").data

    with_coords = no_coords.assign(lat=[16.82], lng=[100.43])
    fig = plot_hospital_map(with_coords, "Map")
    assert len(fig.data) == 1


# --- Pivot Table Tests ---
def _rows():
    return pd.DataFrame({
        "hoscode": ["10676", "11251"],
        "display_name": ["รพศ.พุทธชินราช", "รพ.วังทอง"],
        "level": ["A", None],
    })


def test_pivot_table_html_fills_missing_cells_with_sentinel():
    cells = pd.DataFrame({1: ["100"], 2: ["120"]}, index=["10676"])
    html_out = pivot_table_html(_rows(), cells, [(1, "มค"), (2, "กพ")])
    assert html_out.count("<tr>") == 3
    assert "<td>100</td>" in html_out
    # 11251 has no cells at all; both its period cells show the sentinel.
    last_row = html_out.split("<tr>")[-1]
    assert "รพ.วังทอง" in last_row
    assert last_row.count("<td>-</td>") == 2
    assert "level-none" in last_row


def test_pivot_table_html_two_row_header_bands_and_footer():
    columns = pd.MultiIndex.from_product([[1], ["patient_days", "rate"]], names=["period", "metric"])
    cells = pd.DataFrame([["58", "20.00%"], ["-", "-"]], index=["10676", "11251"], columns=columns)
    bands = pd.DataFrame([[None, "poor"], [None, None]], index=["10676", "11251"], columns=columns)
    html_out = pivot_table_html(
        _rows(), cells, [(1, "มค")],
        metric_labels={"patient_days": "วันนอน", "rate": "อัตรา"},
        bands=bands, footer=["58", "-"],
    )
    assert 'rowspan="2"' in html_out
    assert '<th colspan="2">มค</th>' in html_out
    assert '<td class="band-poor">20.00%</td>' in html_out
    assert "<tfoot>" in html_out and "รวม" in html_out


def test_pivot_table_html_escapes_names():
    rows = pd.DataFrame({"hoscode": ["1"], "display_name": ["<script>"], "level": ["A"]})
    html_out = pivot_table_html(rows, pd.DataFrame(index=["1"]), [])
    assert "<script>" not in html_out
    assert "&lt;script&gt;" in html_out


# --- KPI Card Tests ---
@patch('visualization.ui_elements.st')
def test_render_kpi_card_formats_values(mock_st):
    render_kpi_card("CMI", 1.46957, status_level="good")
    markup = mock_st.markdown.call_args[0][0]
    assert "1.47" in markup and "status-good" in markup

    render_kpi_card("Cases", 12345, unit="ราย")
    markup = mock_st.markdown.call_args[0][0]
    assert "12,345" in markup and "ราย" in markup

    render_kpi_card("Rate", None, unit="%")
    markup = mock_st.markdown.call_args[0][0]
    assert ">-<" in markup and "kpi-units" not in markup


@patch('visualization.ui_elements.st')
def test_render_kpi_card_html(mock_st):
    """Tests that KPI cards render with the correct HTML structure and classes."""
    mock_st.markdown = MagicMock()
    render_kpi_card(
        title="Test KPI", value=123.45, unit="tests",
        status_level="warning", help_text="A test tooltip."
    )

    html_out, kwargs = mock_st.markdown.call_args
    html_content = html_out[0]

    assert 'class="kpi-card status-warning"' in html_content
    assert f'title="{html.escape("A test tooltip.")}"' in html_content
    assert '<div class="kpi-title">Test KPI</div>' in html_content
    assert '<p class="kpi-value">123.45' in html_content
    assert '<span class="kpi-units">tests</span>' in html_content
    assert kwargs['unsafe_allow_html'] is True


# --- Placeholder Pages ---
@patch('visualization.ui_elements.st')
def test_render_placeholder_shows_description_and_notes(mock_st):
    render_placeholder("DRGs: sum adjRW", description="ผลรวม adjRW",
                       notes=["แสดงรายเดือน", "แยกตามโรงพยาบาล"])
    mock_st.title.assert_called_once_with("DRGs: sum adjRW")
    mock_st.caption.assert_called_once_with("ผลรวม adjRW")
    assert mock_st.info.call_args[0][0] == "อยู่ระหว่างจัดเตรียมข้อมูล"
    assert mock_st.markdown.call_args[0][0] == "- แสดงรายเดือน\n- แยกตามโรงพยาบาล"


@patch('visualization.ui_elements.st')
def test_render_placeholder_without_details(mock_st):
    render_placeholder("OR Realtime")
    mock_st.caption.assert_not_called()
    mock_st.markdown.assert_not_called()
    mock_st.info.assert_called_once()
