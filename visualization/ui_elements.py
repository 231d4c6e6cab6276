# phl_dashboard/visualization/ui_elements.py
# PHL DASHBOARD - THEME-AWARE UI COMPONENTS

import html
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
import streamlit as st

from config import settings
from data_processing.formatting import MISSING, fmt_number, level_color

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "อยู่ระหว่างจัดเตรียมข้อมูล"
BAND_COLORS = {
    "good": settings.COLOR_RATE_GOOD,
    "warning": settings.COLOR_RATE_WARNING,
    "poor": settings.COLOR_RATE_POOR,
}


def load_and_inject_css(css_path: Union[str, Path]):
    """Loads a CSS file and injects it into the current page."""
    path = Path(css_path)
    if not path.is_file():
        logger.warning(f"CSS file not found at: {path}. UI may not be styled correctly.")
        return
    try:
        with path.open("r", encoding="utf-8") as f:
            st.markdown(f'<style>{f.read()}</style>', unsafe_allow_html=True)
        logger.debug(f"Successfully loaded and injected CSS from {path}.")
    except OSError as e:
        logger.error(f"Error loading CSS from {path}: {e}", exc_info=True)


def render_page_header(title: str, subtitle: Optional[str] = None) -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def render_kpi_card(
    title: str,
    value: Any,
    unit: str = "",
    status_level: Optional[str] = None,
    help_text: Optional[str] = None,
    icon: str = "📊"
) -> None:
    """
    Renders a custom HTML KPI card. Pre-formatted strings are shown as-is;
    numbers get comma grouping; missing values show the '-' sentinel.
    """
    if isinstance(value, str):
        value_str = value
    elif isinstance(value, float) and not value.is_integer():
        value_str = fmt_number(value, 2)
    else:
        value_str = fmt_number(value)

    status_class = f"status-{status_level}" if status_level else ""
    tooltip_attr = f'title="{html.escape(help_text)}"' if help_text else ""
    unit_html = f'<span class="kpi-units">{html.escape(unit)}</span>' if unit and value_str != MISSING else ""

    card_html = f"""
    <div class="kpi-card {status_class}" {tooltip_attr}>
        <div class="kpi-header">
            <span class="kpi-icon">{html.escape(icon)}</span>
            <div class="kpi-title">{html.escape(title)}</div>
        </div>
        <div class="kpi-body">
            <p class="kpi-value">{html.escape(value_str)}{unit_html}</p>
        </div>
    </div>
    """
    st.markdown(card_html, unsafe_allow_html=True)


def sp_level_badge_html(level: Any) -> str:
    """Coloured service-plan level badge; '-' when the facility has no level."""
    if not isinstance(level, str) or not level.strip():
        return f'<span class="level-badge level-none">{MISSING}</span>'
    color = level_color(level)
    return f'<span class="level-badge" style="background-color:{color}">{html.escape(level.strip())}</span>'


def render_meta_bar(meta: Mapping[str, Any], row_key: str = "row_count", note: Optional[str] = None) -> None:
    """One-line data freshness summary: row count and last update of the source table."""
    rows = fmt_number(meta.get(row_key))
    last_update = meta.get("last_update") or MISSING
    parts = [f"จำนวนแถว: {rows}", f"อัปเดตล่าสุด: {last_update}"]
    if note:
        parts.append(note)
    st.caption(" | ".join(parts))


def pivot_table_html(
    rows: pd.DataFrame,
    cells: pd.DataFrame,
    headers: Sequence[Tuple[Any, str]],
    metric_labels: Optional[Mapping[str, str]] = None,
    lead_columns: Sequence[Tuple[str, str]] = (),
    bands: Optional[pd.DataFrame] = None,
    footer: Optional[Sequence[str]] = None,
    key: str = "hoscode",
) -> str:
    """
    HTML for a facility pivot table.

    `rows` gives the facility order and the leading columns (display name,
    level, any `lead_columns`). `cells` holds pre-formatted strings indexed by
    facility. With `metric_labels`, the columns of `cells` are (period, metric)
    pairs and the header spans two rows; otherwise `headers` are plain columns.
    Cells with no value render as the '-' sentinel.
    """
    two_row = metric_labels is not None
    metrics = list(metric_labels.keys()) if two_row else []
    span = len(metrics) if two_row else 1
    rowspan = ' rowspan="2"' if two_row else ""

    head = [f'<th{rowspan}>#</th>', f'<th{rowspan}>ระดับ</th>', f'<th{rowspan} class="name">โรงพยาบาล</th>']
    head += [f'<th{rowspan}>{html.escape(label)}</th>' for _, label in lead_columns]
    head += [f'<th colspan="{span}">{html.escape(str(label))}</th>' if two_row else f'<th>{html.escape(str(label))}</th>'
             for _, label in headers]
    thead = f"<tr>{''.join(head)}</tr>"
    if two_row:
        sub = "".join(f"<th>{html.escape(metric_labels[m])}</th>" for _ in headers for m in metrics)
        thead += f"<tr>{sub}</tr>"

    columns: List[Any] = [(p, m) for p, _ in headers for m in metrics] if two_row else [p for p, _ in headers]
    body = []
    for i, record in enumerate(rows.to_dict("records"), start=1):
        code = record.get(key)
        tds = [
            f"<td>{i}</td>",
            f"<td>{sp_level_badge_html(record.get('level'))}</td>",
            f'<td class="name">{html.escape(str(record.get("display_name", MISSING)))}</td>',
        ]
        for col, _ in lead_columns:
            tds.append(f"<td>{html.escape(str(record.get(col, MISSING)))}</td>")
        for col in columns:
            text = cells.loc[code, col] if code in cells.index and col in cells.columns else MISSING
            text = MISSING if text is None or (isinstance(text, float) and pd.isna(text)) else str(text)
            band = bands.loc[code, col] if bands is not None and code in bands.index and col in bands.columns else None
            cls = f' class="band-{band}"' if isinstance(band, str) else ""
            tds.append(f"<td{cls}>{html.escape(text)}</td>")
        body.append(f"<tr>{''.join(tds)}</tr>")

    tfoot = ""
    if footer is not None:
        lead = 3 + len(lead_columns)
        tfoot_cells = "".join(f"<td>{html.escape(str(v))}</td>" for v in footer)
        tfoot = f'<tfoot><tr><td colspan="{lead}" class="name">รวม</td>{tfoot_cells}</tr></tfoot>'

    return (
        '<div class="pivot-wrap"><table class="pivot-table">'
        f"<thead>{thead}</thead><tbody>{''.join(body)}</tbody>{tfoot}</table></div>"
    )


def render_pivot_table(rows: pd.DataFrame, cells: pd.DataFrame, headers: Sequence[Tuple[Any, str]], **kwargs: Any) -> None:
    if rows.empty:
        st.info("ไม่มีข้อมูล")
        return
    st.markdown(pivot_table_html(rows, cells, headers, **kwargs), unsafe_allow_html=True)


def band_styles(df: pd.DataFrame, column: str, bands: pd.Series) -> pd.DataFrame:
    """CSS for a Styler: colours `column` of each row by its band; other cells unstyled."""
    styles = pd.DataFrame("", index=df.index, columns=df.columns)
    if column in df.columns:
        colors = [BAND_COLORS.get(b, "") for b in bands.reindex(df.index)]
        styles[column] = [f"color: {c}; font-weight: 600" if c else "" for c in colors]
    return styles


def render_data_table(df: pd.DataFrame, band_column: Optional[str] = None, bands: Optional[pd.Series] = None) -> None:
    """Flat table via st.dataframe, optionally colouring one column by threshold band."""
    if df.empty:
        st.info("ไม่มีข้อมูล")
        return
    data: Any = df
    if band_column and bands is not None and not bands.empty:
        data = df.style.apply(lambda frame: band_styles(frame, band_column, bands), axis=None)
    st.dataframe(data, hide_index=True, use_container_width=True)


def render_placeholder(title: str, description: Optional[str] = None, notes: Optional[Sequence[str]] = None) -> None:
    """Shell for a dashboard whose data feed is not ready: title, what it will show and planning notes."""
    st.title(title)
    if description:
        st.caption(description)
    st.info(PLACEHOLDER_TEXT, icon="🚧")
    if notes:
        st.markdown("\n".join(f"- {note}" for note in notes))


def render_footer() -> None:
    st.divider()
    st.caption(settings.APP_FOOTER_TEXT)
