"""Model package exports."""

from .balance_sheet import (
    ASSETS_CATEGORY,
    BUCKET_KEYS,
    BUCKET_LABELS,
    LIABILITIES_CATEGORY,
    STACK_BUCKETS,
    BucketKey,
    CompositionBar,
    DetailItem,
    StackCategory,
    YearComposition,
)

__all__ = [
    "ASSETS_CATEGORY",
    "BUCKET_KEYS",
    "BUCKET_LABELS",
    "LIABILITIES_CATEGORY",
    "STACK_BUCKETS",
    "BucketKey",
    "CompositionBar",
    "DetailItem",
    "StackCategory",
    "YearComposition",
]
