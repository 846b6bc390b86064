"""Calculation helpers for balance sheet composition outputs."""

from .composition import (
    SECTION_HEADERS,
    SUBJECT_COLUMNS,
    TOTAL_ROW_LABELS,
    build_compositions,
    build_year_composition,
    clean_year_label,
    composition_frame,
    detect_year_columns,
    percentage,
    subject_of,
)

__all__ = [
    "SECTION_HEADERS",
    "SUBJECT_COLUMNS",
    "TOTAL_ROW_LABELS",
    "build_compositions",
    "build_year_composition",
    "clean_year_label",
    "composition_frame",
    "detect_year_columns",
    "percentage",
    "subject_of",
]
