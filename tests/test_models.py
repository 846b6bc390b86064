import unittest

from pydantic import ValidationError

from models import CompositionBar, DetailItem, YearComposition


def _bar(category: str) -> CompositionBar:
    return CompositionBar(category=category, total=100, percentages={}, amounts={}, details={})


class CompositionBarTests(unittest.TestCase):
    def test_missing_buckets_are_filled_with_zero(self) -> None:
        bar = CompositionBar(
            category="資産",
            total=100,
            percentages={"current_assets": 60, "fixed_assets": 40},
            details={"current_assets": [{"name": "現金", "value": 60, "percentage": 60}]},
        )

        self.assertEqual(bar.percentages["equity"], 0.0)
        self.assertEqual(bar.amounts["current_assets"], 0.0)
        self.assertIsInstance(bar.details["current_assets"][0], DetailItem)
        self.assertEqual(bar.details["fixed_assets"], [])
        self.assertEqual(bar.stack_percentage(), 100.0)

    def test_unknown_bucket_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            CompositionBar(category="資産", total=1, percentages={"goodwill": 1})


class YearCompositionTests(unittest.TestCase):
    def test_requires_assets_then_liabilities_bar(self) -> None:
        with self.assertRaises(ValidationError):
            YearComposition(
                year="2023",
                column="2023",
                total_assets=100,
                total_liabilities=40,
                equity=60,
                bars=[_bar("負債・純資産"), _bar("資産")],
            )

    def test_equity_ratio(self) -> None:
        composition = YearComposition(
            year="2023",
            column="2023",
            total_assets=200,
            total_liabilities=150,
            equity=50,
            bars=[_bar("資産"), _bar("負債・純資産")],
        )
        self.assertEqual(composition.equity_ratio, 0.25)
        self.assertEqual(composition.total_liabilities_and_equity, 200)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
