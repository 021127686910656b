import unittest

from domain.models import SavedBuild
from domain.catalog import CATALOG
from domain.enums import ModelKey
from services.configuration_service import create_default, select_color
from ui.formatters import (
    build_summary_rows,
    build_title,
    format_horsepower,
    format_price,
    format_price_compact,
    paint_name,
)


class TestFormatters(unittest.TestCase):
    def test_format_price_whole_dollars(self):
        self.assertEqual(format_price(17_000_000), "$170,000")
        self.assertEqual(format_price(42_000_000), "$420,000")

    def test_format_price_with_cents(self):
        self.assertEqual(format_price(199), "$1.99")
        self.assertEqual(format_price(100_05), "$100.05")

    def test_format_price_none(self):
        self.assertEqual(format_price(None), "N/A")

    def test_format_price_compact(self):
        self.assertEqual(format_price_compact(17_000_000), "$170k")
        self.assertEqual(format_price_compact(0), "N/A")

    def test_format_horsepower(self):
        self.assertEqual(format_horsepower(CATALOG[ModelKey.MUSCLE]), "797 HP")

    def test_paint_name(self):
        self.assertEqual(paint_name("#ff3b30"), "Racing Red")
        self.assertEqual(paint_name("#007aff"), "Ocean Blue")
        self.assertEqual(paint_name("#abcdef"), "#abcdef")

    def test_build_title(self):
        config = select_color(create_default(), "#32D74B")
        self.assertEqual(build_title(config), "Porsche 911 GT3 in Lime Green")

    def test_build_summary_rows(self):
        build = SavedBuild.from_document(
            "rec-1",
            {"modelKey": "supercar", "colorValue": "#f8f9fa", "trimSlots": {"spoiler": "Wing"}, "ownerId": "o"},
        )
        (row,) = build_summary_rows([build])

        self.assertEqual(row["Model"], "Lamborghini Aventador")
        self.assertEqual(row["Color"], "Pearl White")
        self.assertEqual(row["Wheel"], "Classic")
        self.assertEqual(row["Spoiler"], "Wing")
        self.assertEqual(row["Price"], "$420,000")
        self.assertEqual(row["Record"], "rec-1")


if __name__ == "__main__":
    unittest.main()
