# phl_dashboard/visualization/__init__.py
# PHL DASHBOARD - VISUALIZATION PACKAGE API

"""
Initializes the visualization package, defining its public API.
This file explicitly exports all public-facing functions from its submodules,
providing a single, consistent import point for the pages.
"""

# --- Core Plotting Functions from plots.py ---
from .plots import (
    set_plotly_theme,
    create_empty_figure,
    plot_bar_chart,
    plot_trend_chart,
    plot_hospital_map,
)

# --- Custom UI Element Renderers from ui_elements.py ---
from .ui_elements import (
    load_and_inject_css,
    render_page_header,
    render_kpi_card,
    sp_level_badge_html,
    render_meta_bar,
    pivot_table_html,
    render_pivot_table,
    render_data_table,
    render_placeholder,
    render_footer,
)

# --- URL-backed Filter Controls from controls.py ---
from .controls import (
    view_tabs,
    year_select,
    hospital_select,
    month_select,
    date_range_select,
    tab_select,
    sort_select,
    choice_select,
)

# --- Define the canonical public API for the package ---
__all__ = [
    # from plots.py
    "set_plotly_theme",
    "create_empty_figure",
    "plot_bar_chart",
    "plot_trend_chart",
    "plot_hospital_map",

    # from ui_elements.py
    "load_and_inject_css",
    "render_page_header",
    "render_kpi_card",
    "sp_level_badge_html",
    "render_meta_bar",
    "pivot_table_html",
    "render_pivot_table",
    "render_data_table",
    "render_placeholder",
    "render_footer",

    # from controls.py
    "view_tabs",
    "year_select",
    "hospital_select",
    "month_select",
    "date_range_select",
    "tab_select",
    "sort_select",
    "choice_select",
]
