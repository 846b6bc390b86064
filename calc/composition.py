"""Classify balance sheet rows into buckets and compute composition ratios."""
from __future__ import annotations

import math
import numbers
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import pandas as pd

from models import (
    ASSETS_CATEGORY,
    BUCKET_LABELS,
    LIABILITIES_CATEGORY,
    CompositionBar,
    DetailItem,
    YearComposition,
)

Row = Mapping[str, object]

SUBJECT_COLUMNS: Tuple[str, ...] = ("科目", "subject")

CURRENT_ASSETS = "流動資産"
FIXED_ASSETS = "固定資産"
TOTAL_ASSETS = "資産合計"
CURRENT_LIABILITIES = "流動負債"
FIXED_LIABILITIES = "固定負債"
TOTAL_LIABILITIES = "負債合計"
TOTAL_LIABILITIES_AND_EQUITY = "負債純資産合計"

TOTAL_ROW_LABELS = frozenset({TOTAL_ASSETS, TOTAL_LIABILITIES, TOTAL_LIABILITIES_AND_EQUITY})

# Section header label -> bucket receiving the rows that follow it.
SECTION_HEADERS: Dict[str, str] = {
    CURRENT_ASSETS: "current_assets",
    FIXED_ASSETS: "fixed_assets",
    CURRENT_LIABILITIES: "current_liabilities",
    FIXED_LIABILITIES: "fixed_liabilities",
    "純資産": "equity",
    "株主資本": "equity",
    "純資産合計": "equity",
}

ASSET_BUCKETS = frozenset({"current_assets", "fixed_assets"})

YEAR_LABEL_SUFFIXES: Tuple[str, ...] = ("年度末残高(百万円)", "残高(百万円)")
MAX_YEARS = 2

_ONE_DECIMAL = Decimal("0.1")


def _to_number(value: object) -> float | None:
    """Return *value* as a float, or ``None`` when it is not numeric.

    Text such as ``"1,520"`` is accepted; pandas leaves it unconverted when the
    column also holds placeholders like ``-``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text.replace(",", ""))
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def percentage(part: float, total: float) -> float:
    """Return ``part / total`` in percent, rounded half-up to one decimal."""

    if total == 0:
        return 0.0
    ratio = Decimal(str(part)) / Decimal(str(total)) * Decimal("100")
    return float(ratio.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def subject_of(row: Row) -> str:
    for column in SUBJECT_COLUMNS:
        if column in row:
            value = row[column]
            return "" if value is None else str(value).strip()
    return ""


def clean_year_label(column: str) -> str:
    label = str(column)
    for suffix in YEAR_LABEL_SUFFIXES:
        label = label.replace(suffix, "")
    return label.strip()


def detect_year_columns(rows: Sequence[Row]) -> List[str]:
    """Return the fiscal-year columns judged from the first row."""

    if not rows:
        return []
    first = rows[0]
    columns: List[str] = []
    for key, value in first.items():
        if key in SUBJECT_COLUMNS:
            continue
        if "年度" in str(key) or _to_number(value) is not None:
            columns.append(key)
    return columns


def _year_values(rows: Iterable[Row], column: str) -> Tuple[Dict[str, float], List[Tuple[str, float]]]:
    values: Dict[str, float] = {}
    line_items: List[Tuple[str, float]] = []
    for row in rows:
        amount = _to_number(row.get(column))
        if amount is None:
            continue
        name = subject_of(row)
        values[name] = amount
        if name not in TOTAL_ROW_LABELS:
            line_items.append((name, amount))
    return values, line_items


def _classify_details(
    line_items: Iterable[Tuple[str, float]],
    *,
    total_assets: float,
    total_liabilities_and_equity: float,
) -> Dict[str, List[DetailItem]]:
    details: Dict[str, List[DetailItem]] = {key: [] for key in BUCKET_LABELS}
    section: str | None = None
    for name, amount in line_items:
        if name in SECTION_HEADERS:
            section = SECTION_HEADERS[name]
            continue
        if section is None:
            continue
        base = total_assets if section in ASSET_BUCKETS else total_liabilities_and_equity
        details[section].append(
            DetailItem(name=name, value=amount, percentage=percentage(amount, base))
        )
    return details


def build_year_composition(rows: Sequence[Row], column: str) -> YearComposition | None:
    """Compose a single year column, or ``None`` when its totals are zero."""

    values, line_items = _year_values(rows, column)

    current_assets = values.get(CURRENT_ASSETS, 0.0)
    fixed_assets = values.get(FIXED_ASSETS, 0.0)
    total_assets = values.get(TOTAL_ASSETS) or (current_assets + fixed_assets)

    current_liabilities = values.get(CURRENT_LIABILITIES, 0.0)
    fixed_liabilities = values.get(FIXED_LIABILITIES, 0.0)
    total_liabilities = values.get(TOTAL_LIABILITIES) or (current_liabilities + fixed_liabilities)

    equity = total_assets - total_liabilities
    total_liabilities_and_equity = total_liabilities + equity

    if total_assets == 0 or total_liabilities_and_equity == 0:
        return None

    details = _classify_details(
        line_items,
        total_assets=total_assets,
        total_liabilities_and_equity=total_liabilities_and_equity,
    )

    assets_bar = CompositionBar(
        category=ASSETS_CATEGORY,
        total=total_assets,
        percentages={
            "current_assets": percentage(current_assets, total_assets),
            "fixed_assets": percentage(fixed_assets, total_assets),
        },
        amounts={"current_assets": current_assets, "fixed_assets": fixed_assets},
        details={
            "current_assets": details["current_assets"],
            "fixed_assets": details["fixed_assets"],
        },
    )
    liabilities_bar = CompositionBar(
        category=LIABILITIES_CATEGORY,
        total=total_liabilities_and_equity,
        percentages={
            "current_liabilities": percentage(current_liabilities, total_liabilities_and_equity),
            "fixed_liabilities": percentage(fixed_liabilities, total_liabilities_and_equity),
            "equity": percentage(equity, total_liabilities_and_equity),
        },
        amounts={
            "current_liabilities": current_liabilities,
            "fixed_liabilities": fixed_liabilities,
            "equity": equity,
        },
        details={
            "current_liabilities": details["current_liabilities"],
            "fixed_liabilities": details["fixed_liabilities"],
            "equity": details["equity"],
        },
    )
    return YearComposition(
        year=clean_year_label(column),
        column=str(column),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        equity=equity,
        bars=[assets_bar, liabilities_bar],
    )


def build_compositions(rows: Sequence[Row], *, max_years: int = MAX_YEARS) -> List[YearComposition]:
    """Return compositions for up to *max_years* year columns, latest first."""

    results: List[YearComposition] = []
    for column in detect_year_columns(rows)[:max_years]:
        composition = build_year_composition(rows, column)
        if composition is not None:
            results.append(composition)
    return sorted(results, key=lambda item: item.year, reverse=True)


def composition_frame(compositions: Iterable[YearComposition]) -> pd.DataFrame:
    """Flatten compositions into a tidy table for display and CSV export."""

    records: List[Dict[str, object]] = []
    for composition in compositions:
        for bar in composition.bars:
            for bucket in bar.stacked_buckets():
                records.append(
                    {
                        "年度": composition.year,
                        "区分": bar.category,
                        "項目": BUCKET_LABELS[bucket],
                        "金額(百万円)": bar.amounts[bucket],
                        "構成比(%)": bar.percentages[bucket],
                    }
                )
    return pd.DataFrame(records, columns=["年度", "区分", "項目", "金額(百万円)", "構成比(%)"])


__all__ = [
    "SUBJECT_COLUMNS",
    "SECTION_HEADERS",
    "TOTAL_ROW_LABELS",
    "build_compositions",
    "build_year_composition",
    "clean_year_label",
    "composition_frame",
    "detect_year_columns",
    "percentage",
    "subject_of",
]
