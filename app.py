"""Streamlit entry point for the balance sheet composition dashboard."""
from __future__ import annotations

import logging

import streamlit as st

from config import LOG_FORMAT, LOG_LEVEL
from state import ensure_session_defaults
from theme import inject_theme
from views import render_dashboard_page

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

st.set_page_config(
    page_title="データ可視化ダッシュボード",
    page_icon=":bar_chart:",
    layout="wide",
)

ensure_session_defaults()
inject_theme()
render_dashboard_page()
