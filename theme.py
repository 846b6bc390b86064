"""Centralised colour scheme and page styling for the dashboard."""
from __future__ import annotations

from typing import Dict

import streamlit as st

from state import COLOR_BLIND_KEY

THEME_COLORS: Dict[str, str] = {
    "background": "#F9FAFB",
    "surface": "#FFFFFF",
    "primary": "#1F2937",
    "accent": "#4F46E5",
    "negative": "#B91C1C",
    "negative_surface": "#FEE2E2",
    "neutral": "#E5E7EB",
    "text": "#374151",
    "text_subtle": "#6B7280",
}

BUCKET_COLORS: Dict[str, str] = {
    "current_assets": "#a0c4ff",
    "fixed_assets": "#8ecae6",
    "current_liabilities": "#ffd6a5",
    "fixed_liabilities": "#ffb347",
    "equity": "#b2d8d8",
}

# Okabe-Ito palette, distinguishable for common colour vision deficiencies.
COLOR_BLIND_BUCKET_COLORS: Dict[str, str] = {
    "current_assets": "#56B4E9",
    "fixed_assets": "#0173B2",
    "current_liabilities": "#F0E442",
    "fixed_liabilities": "#DE8F05",
    "equity": "#029E73",
}

LABEL_TEXT_COLOR = "#333333"

CUSTOM_STYLE_TEMPLATE = """
<style>
:root {{
    --base-bg: {background};
    --surface: {surface};
    --primary: {primary};
    --accent: {accent};
    --negative: {negative};
    --negative-surface: {negative_surface};
    --neutral: {neutral};
    --text-color: {text};
    --text-subtle: {text_subtle};
}}

html, body, [data-testid="stAppViewContainer"] {{
    background-color: var(--base-bg);
    color: var(--text-color);
    font-family: "Noto Sans JP", "Hiragino Sans", "Yu Gothic", sans-serif;
    font-variant-numeric: tabular-nums;
}}

h1, h2, h3, .stMarkdown h1, .stMarkdown h2, .stMarkdown h3 {{
    color: var(--primary);
    font-weight: 700;
}}

.year-heading {{
    text-align: center;
    color: var(--accent);
    font-size: 1.5rem;
    font-weight: 700;
    margin: 0.5rem 0 1rem 0;
}}

.callout {{
    display: flex;
    gap: 0.75rem;
    padding: 1rem;
    border-radius: 8px;
    border: 1px solid var(--neutral);
    background: var(--surface);
}}

.callout--negative {{
    background: var(--negative-surface);
    border-color: var(--negative);
    color: var(--negative);
}}

.callout__body p {{
    margin: 0.25rem 0 0 0;
    white-space: pre-wrap;
}}

.metric-card {{
    border: 1px solid var(--neutral);
    border-radius: 8px;
    background: var(--surface);
    padding: 0.75rem 1rem;
}}

.metric-card__label {{ color: var(--text-subtle); font-size: 0.85rem; }}
.metric-card__value {{ font-size: 1.4rem; font-weight: 700; margin: 0.25rem 0 0 0; }}

.responsive-card-grid {{
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(10rem, 1fr));
    gap: 0.75rem;
    margin-bottom: 0.75rem;
}}
</style>
"""


def bucket_colors(*, color_blind: bool = False) -> Dict[str, str]:
    return COLOR_BLIND_BUCKET_COLORS if color_blind else BUCKET_COLORS


def active_bucket_colors() -> Dict[str, str]:
    """Return the bucket palette chosen in the current session."""

    return bucket_colors(color_blind=bool(st.session_state.get(COLOR_BLIND_KEY, False)))


def build_custom_style() -> str:
    return CUSTOM_STYLE_TEMPLATE.format(**THEME_COLORS)


def inject_theme() -> None:
    """Apply the shared CSS theme to the current page."""

    st.markdown(build_custom_style(), unsafe_allow_html=True)


__all__ = [
    "BUCKET_COLORS",
    "COLOR_BLIND_BUCKET_COLORS",
    "LABEL_TEXT_COLOR",
    "THEME_COLORS",
    "active_bucket_colors",
    "bucket_colors",
    "build_custom_style",
    "inject_theme",
]
