# phl_dashboard/app.py
# PHL DASHBOARD - APPLICATION ENTRY POINT

import html
import logging
import sys
from pathlib import Path

try:
    _project_root = Path(__file__).resolve().parent
    if str(_project_root) not in sys.path:
        sys.path.insert(0, str(_project_root))

    import streamlit as st
    from config import settings
    from visualization import load_and_inject_css, set_plotly_theme

except ImportError as e:
    print("FATAL ERROR in app.py: A core module failed to import.", file=sys.stderr)
    print("1. Install the project with `pip install -e .`.", file=sys.stderr)
    print("2. Run the app from the project root: `streamlit run app.py`", file=sys.stderr)
    print(f"\nPython Path: {sys.path}\nOriginal ImportError: {e}", file=sys.stderr)
    sys.exit(1)

# --- Global Configuration ---
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.LOG_FORMAT,
    datefmt=settings.LOG_DATE_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True
)
logger = logging.getLogger(__name__)

# Statement echo and pool chatter stay at WARNING.
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)


st.set_page_config(
    page_title=f"{settings.APP_NAME} - หน้าหลัก",
    page_icon="🏥",
    layout="wide", initial_sidebar_state="expanded",
    menu_items={
        "Get Help": f"mailto:{settings.SUPPORT_CONTACT_INFO}",
        "Report a bug": f"mailto:{settings.SUPPORT_CONTACT_INFO}?subject=Bug Report - {settings.APP_NAME} v{settings.APP_VERSION}",
        "About": f"### {settings.APP_NAME} (v{settings.APP_VERSION})\n{settings.APP_FOOTER_TEXT}"
    }
)

load_and_inject_css(settings.STYLE_CSS_PATH)
set_plotly_theme()

# --- Application Header and Body ---
st.title(f"🏥 {settings.APP_NAME}")
st.subheader(settings.ORGANIZATION_NAME)
st.divider()

if not settings.DATABASE_URL:
    st.warning("ยังไม่ได้ตั้งค่าการเชื่อมต่อฐานข้อมูล กรุณากำหนด `PHL_DATABASE_URL` ในไฟล์ `.env` หรือ environment", icon="⚠️")

nav_cols = st.columns(3)
for i, group in enumerate(settings.NAV_GROUPS):
    with nav_cols[i % len(nav_cols)]:
        with st.container(border=True):
            st.subheader(group.label)
            for item in group.items:
                if (_project_root / item.page).is_file():
                    st.page_link(item.page, label=item.label, icon=item.icon, use_container_width=True)
                else:
                    logger.warning(f"Navigation target missing: {item.page}")

with st.sidebar:
    st.header(f"{settings.APP_NAME}")
    st.caption(f"v{settings.APP_VERSION}")
    st.divider()
    st.markdown(f"**{html.escape(settings.ORGANIZATION_NAME)}**")
    st.markdown(f"Contact: <a href='mailto:{settings.SUPPORT_CONTACT_INFO}'>{settings.SUPPORT_CONTACT_INFO}</a>", unsafe_allow_html=True)
    st.caption(settings.APP_FOOTER_TEXT)

logger.info("Main application page loaded successfully.")
