# phl_dashboard/visualization/plots.py
# PHL DASHBOARD - CENTRALIZED PLOTTING FACTORY

import html
import logging
from typing import Any, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import plotly.io as pio

from config import settings

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "ไม่มีข้อมูล"


# --- Theme Setup ---
def set_plotly_theme():
    """Sets the custom PHL theme as the default for all Plotly charts."""
    base_layout = {
        'font': {'family': "Sarabun, sans-serif", 'size': 12, 'color': settings.COLOR_TEXT_PRIMARY},
        'title': {'x': 0.5, 'xanchor': 'center', 'font': {'size': 16, 'color': settings.COLOR_TEXT_HEADINGS}},
        'paper_bgcolor': settings.COLOR_BACKGROUND_CONTENT,
        'plot_bgcolor': settings.COLOR_BACKGROUND_CONTENT,
        'margin': dict(l=60, r=30, t=60, b=50),
        'legend': dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1, font={'size': 10}),
        'xaxis': {'showgrid': False, 'zeroline': False},
        'yaxis': {'gridcolor': settings.COLOR_BORDER, 'zeroline': False},
    }
    phl_template = go.layout.Template(layout=base_layout)
    phl_template.layout.colorway = settings.PLOTLY_COLORWAY
    pio.templates['phl'] = phl_template
    pio.templates.default = 'phl'
    logger.debug("Custom 'phl' Plotly theme applied.")


# --- Factory Functions for Charts ---
def create_empty_figure(title: str, message: str = NO_DATA_MESSAGE) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        title_text=f"<b>{html.escape(title)}</b>",
        xaxis={"visible": False}, yaxis={"visible": False},
        annotations=[{"text": html.escape(message), "xref": "paper", "yref": "paper", "showarrow": False, "font": {"size": 14, "color": settings.COLOR_TEXT_MUTED}}]
    )
    return fig


def plot_bar_chart(
    df: pd.DataFrame, x_col: str, y_col: str, title: str,
    x_title: Optional[str] = None, y_title: Optional[str] = None, digits: int = 0, **px_kwargs: Any
) -> go.Figure:
    """Creates a themed bar chart; count axes start at zero."""
    if not isinstance(df, pd.DataFrame) or df.empty:
        return create_empty_figure(title)

    try:
        axis_labels = {x_col: x_title or x_col, y_col: y_title or y_col}
        orientation = px_kwargs.get('orientation', 'v')
        axis = 'x' if orientation == 'h' else 'y'

        fig = px.bar(df, x=x_col, y=y_col, title=f"<b>{html.escape(title)}</b>", labels=axis_labels, **px_kwargs)
        fig.update_traces(texttemplate=f'%{{{axis}:,.{digits}f}}', textposition='outside')
        if digits == 0:
            if orientation == 'h':
                fig.update_xaxes(tickformat=',d', rangemode='tozero')
            else:
                fig.update_yaxes(tickformat=',d', rangemode='tozero')
        return fig
    except Exception as e:
        logger.error(f"Failed to create bar chart '{title}': {e}", exc_info=True)
        return create_empty_figure(title, "เกิดข้อผิดพลาดในการสร้างกราฟ")


def plot_trend_chart(chart_df: pd.DataFrame, title: str, y_title: str, digits: int = 0) -> go.Figure:
    """
    One line per facility over the period axis.

    `chart_df` is the long (period, label, value) frame from the dashboard
    builders. Missing values are left as gaps rather than drawn as zero.
    """
    if not isinstance(chart_df, pd.DataFrame) or chart_df.empty or chart_df["value"].isna().all():
        return create_empty_figure(title)
    try:
        fig = px.line(
            chart_df, x="period", y="value", color="label", markers=True,
            title=f"<b>{html.escape(title)}</b>",
            labels={"period": "", "value": y_title, "label": "โรงพยาบาล"},
            category_orders={"period": list(dict.fromkeys(chart_df["period"]))},
        )
        fig.update_traces(
            connectgaps=False,
            hovertemplate=f"<b>%{{fullData.name}}</b><br>%{{x}}: %{{y:,.{digits}f}}<extra></extra>",
        )
        fig.update_yaxes(tickformat=f",.{digits}f", rangemode='tozero')
        return fig
    except Exception as e:
        logger.error(f"Failed to create trend chart '{title}': {e}", exc_info=True)
        return create_empty_figure(title, "เกิดข้อผิดพลาดในการสร้างกราฟ")


def plot_hospital_map(df: pd.DataFrame, title: str) -> go.Figure:
    """Facility markers on an OpenStreetMap base, coloured by service-plan level."""
    points = df.dropna(subset=["lat", "lng"]) if isinstance(df, pd.DataFrame) and {"lat", "lng"} <= set(df.columns) else pd.DataFrame()
    if points.empty:
        return create_empty_figure(title, "ไม่มีพิกัดโรงพยาบาล")
    try:
        points = points.assign(level=points["level"].fillna("-"))
        color_map = {lvl: c for lvl, c in zip(points["level"], points["color"])}
        fig = px.scatter_map(
            points, lat="lat", lon="lng", color="level", color_discrete_map=color_map,
            hover_name="display_name", hover_data={"hoscode": True, "lat": False, "lng": False, "level": True},
            zoom=settings.MAP_DEFAULT_ZOOM,
            center={"lat": settings.MAP_DEFAULT_CENTER[0], "lon": settings.MAP_DEFAULT_CENTER[1]},
            map_style=settings.MAP_STYLE, title=f"<b>{html.escape(title)}</b>", height=620,
        )
        fig.update_traces(marker={"size": 13})
        fig.update_layout(margin={"r": 0, "t": 50, "l": 0, "b": 0}, legend_title_text="ระดับ")
        return fig
    except Exception as e:
        logger.error(f"Failed to create hospital map '{title}': {e}", exc_info=True)
        return create_empty_figure(title, "เกิดข้อผิดพลาดในการสร้างแผนที่")
