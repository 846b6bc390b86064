"""Pydantic models describing the balance sheet composition of a fiscal year."""
from __future__ import annotations

from typing import Dict, List, Literal, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

BucketKey = Literal[
    "current_assets",
    "fixed_assets",
    "current_liabilities",
    "fixed_liabilities",
    "equity",
]

BUCKET_KEYS: Sequence[BucketKey] = (
    "current_assets",
    "fixed_assets",
    "current_liabilities",
    "fixed_liabilities",
    "equity",
)

BUCKET_LABELS: Dict[str, str] = {
    "current_assets": "流動資産",
    "fixed_assets": "固定資産",
    "current_liabilities": "流動負債",
    "fixed_liabilities": "固定負債",
    "equity": "純資産",
}

ASSETS_CATEGORY = "資産"
LIABILITIES_CATEGORY = "負債・純資産"

StackCategory = Literal["資産", "負債・純資産"]

# Buckets in bottom-to-top stacking order for each bar.
STACK_BUCKETS: Dict[str, Sequence[BucketKey]] = {
    ASSETS_CATEGORY: ("fixed_assets", "current_assets"),
    LIABILITIES_CATEGORY: ("equity", "fixed_liabilities", "current_liabilities"),
}


class DetailItem(BaseModel):
    """A single line item listed in the tooltip of a bucket."""

    name: str
    value: float
    percentage: float


class CompositionBar(BaseModel):
    """One stacked bar: the assets side or the liabilities+equity side."""

    category: StackCategory
    total: float
    percentages: Dict[str, float] = Field(default_factory=dict, validate_default=True)
    amounts: Dict[str, float] = Field(default_factory=dict, validate_default=True)
    details: Dict[str, List[DetailItem]] = Field(default_factory=dict, validate_default=True)

    @field_validator("percentages", "amounts", mode="before")
    @classmethod
    def _fill_buckets(cls, value: Dict[str, float] | None) -> Dict[str, float]:
        filled = {key: 0.0 for key in BUCKET_KEYS}
        for key, amount in (value or {}).items():
            if key not in filled:
                raise ValueError(f"未知の区分です: {key}")
            filled[key] = float(amount)
        return filled

    @field_validator("details", mode="before")
    @classmethod
    def _fill_details(cls, value: Dict[str, list] | None) -> Dict[str, list]:
        filled: Dict[str, list] = {key: [] for key in BUCKET_KEYS}
        for key, items in (value or {}).items():
            if key not in filled:
                raise ValueError(f"未知の区分です: {key}")
            filled[key] = list(items)
        return filled

    def stacked_buckets(self) -> Sequence[BucketKey]:
        return STACK_BUCKETS[self.category]

    def stack_percentage(self) -> float:
        return sum(self.percentages[key] for key in self.stacked_buckets())


class YearComposition(BaseModel):
    """Composition of one fiscal-year column."""

    year: str
    column: str
    total_assets: float
    total_liabilities: float
    equity: float
    bars: List[CompositionBar]

    @model_validator(mode="after")
    def _check_bars(self) -> "YearComposition":
        categories = [bar.category for bar in self.bars]
        if categories != [ASSETS_CATEGORY, LIABILITIES_CATEGORY]:
            raise ValueError("資産と負債・純資産の2本の棒が必要です。")
        return self

    @property
    def assets_bar(self) -> CompositionBar:
        return self.bars[0]

    @property
    def liabilities_bar(self) -> CompositionBar:
        return self.bars[1]

    @property
    def total_liabilities_and_equity(self) -> float:
        return self.total_liabilities + self.equity

    @property
    def equity_ratio(self) -> float:
        if self.total_assets == 0:
            return float("nan")
        return self.equity / self.total_assets


__all__ = [
    "ASSETS_CATEGORY",
    "BUCKET_KEYS",
    "BUCKET_LABELS",
    "BucketKey",
    "CompositionBar",
    "DetailItem",
    "LIABILITIES_CATEGORY",
    "STACK_BUCKETS",
    "StackCategory",
    "YearComposition",
]
