# app.py
from __future__ import annotations
import logging
import os

import streamlit as st

from core.config import API_BASE
from core.errors import PortfolioError
from core.portfolio import load_portfolio
from core.ui import setup_theme, inject_css
from views.page_portfolio import render

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="MF Portfolio Tracker", layout="wide")

# ---- theme + css ----
setup_theme()
inject_css()

# ---- api base resolution ----
def _resolve_api_base() -> str:
    try:
        if "mfapi_base" in st.secrets:
            return str(st.secrets["mfapi_base"])
    except Exception:
        pass
    return os.environ.get("MFAPI_BASE") or API_BASE

# ---- data boot (fresh every page run; nothing is cached across loads) ----
report = None
try:
    with st.spinner("Fetching NAVs…"):
        report = load_portfolio(api_base=_resolve_api_base())
except (PortfolioError, ValueError) as e:
    logging.getLogger(__name__).exception("Portfolio load failed")
    st.error(f"Portfolio load failed: {e}")

if report is not None:
    render(report)
