"""Runtime configuration read from environment variables."""
from __future__ import annotations

import os
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent

BUNDLED_SAMPLE_NAME = "sample_balance_sheet.csv"

SAMPLE_DATA_URL = os.getenv("SAMPLE_DATA_URL", "")
SAMPLE_DATA_PATH = Path(
    os.getenv("SAMPLE_DATA_PATH", str(PROJECT_ROOT / "static" / BUNDLED_SAMPLE_NAME))
)
SAMPLE_FETCH_TIMEOUT = float(os.getenv("SAMPLE_FETCH_TIMEOUT", "10"))

MAX_UPLOAD_BYTES = int(float(os.getenv("MAX_UPLOAD_MB", "5")) * 1024 * 1024)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def base_path() -> str:
    """Return the URL prefix set by ``server.baseUrlPath``.

    Streamlit resolves the option from .streamlit/config.toml or the
    ``STREAMLIT_SERVER_BASE_URL_PATH`` environment variable.
    """

    stripped = str(st.get_option("server.baseUrlPath") or "").strip("/")
    return f"/{stripped}" if stripped else ""


def asset_url(relative_path: str) -> str:
    """Return *relative_path* prefixed with the served base path."""

    return f"{base_path()}/{relative_path.lstrip('/')}"


__all__ = [
    "PROJECT_ROOT",
    "base_path",
    "BUNDLED_SAMPLE_NAME",
    "SAMPLE_DATA_URL",
    "SAMPLE_DATA_PATH",
    "SAMPLE_FETCH_TIMEOUT",
    "MAX_UPLOAD_BYTES",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "asset_url",
]
