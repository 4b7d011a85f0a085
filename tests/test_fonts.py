import unittest
from pathlib import Path

import reportlab
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth

from fonts import (
    DEFAULT_FONT_NAME,
    FontRegistry,
    TextStyle,
    resolve_font_name,
    resolve_specified_font_size,
)

VERA_PATH = Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


class SpecifiedFontSizeTests(unittest.TestCase):
    def test_explicit_size_wins(self) -> None:
        self.assertEqual(resolve_specified_font_size(20, TextStyle(font_size=12)), 20)

    def test_falls_back_to_style(self) -> None:
        self.assertEqual(resolve_specified_font_size(None, TextStyle(font_size=12)), 12)

    def test_unspecified(self) -> None:
        self.assertIsNone(resolve_specified_font_size(None, TextStyle()))


class ResolveFontNameTests(unittest.TestCase):
    def test_standard_font(self) -> None:
        self.assertEqual(resolve_font_name("Helvetica-Bold"), "Helvetica-Bold")

    def test_blank_uses_default(self) -> None:
        self.assertEqual(resolve_font_name("  "), DEFAULT_FONT_NAME)

    def test_unknown_font(self) -> None:
        with self.assertRaises(ValueError):
            resolve_font_name("NoSuchFont")

    def test_missing_font_file(self) -> None:
        with self.assertRaises(ValueError):
            resolve_font_name("/nonexistent/font.ttf")

    @unittest.skipUnless(VERA_PATH.exists(), "ReportLab sample font not installed")
    def test_registers_font_file(self) -> None:
        font_name = resolve_font_name(str(VERA_PATH))
        self.assertIn(font_name, pdfmetrics.getRegisteredFontNames())
        self.assertGreater(stringWidth("Hello", font_name, 12), 0)
        # Registered names resolve directly afterwards.
        self.assertEqual(resolve_font_name(font_name), font_name)

    @unittest.skipUnless(VERA_PATH.exists(), "ReportLab sample font not installed")
    def test_registry_caches_registrations(self) -> None:
        registry = FontRegistry()
        first = registry.register_file(VERA_PATH)
        second = registry.register_file(VERA_PATH)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
