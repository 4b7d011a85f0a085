import unittest

from reportlab.pdfbase.pdfmetrics import getAscent, getDescent, stringWidth

from text_layout import (
    center_baseline,
    intrinsic_text_width,
    measure_text,
    wrap_text_to_width,
)


class WrapTextTests(unittest.TestCase):
    def test_wrap_text_to_width_empty(self) -> None:
        self.assertEqual(wrap_text_to_width("", "Helvetica", 12, 100), [])
        self.assertEqual(wrap_text_to_width("Hello", "Helvetica", 12, 0), [])

    def test_wrap_text_to_width_single_line(self) -> None:
        lines = wrap_text_to_width("Hello world", "Helvetica", 12, 1000)
        self.assertEqual(lines, ["Hello world"])

    def test_wrap_text_to_width_enforces_width(self) -> None:
        max_width = 30
        lines = wrap_text_to_width("Hello world", "Helvetica", 12, max_width)
        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(stringWidth(line, "Helvetica", 12), max_width)

    def test_wrap_keeps_explicit_line_breaks(self) -> None:
        lines = wrap_text_to_width("Shelf A\nBin 3", "Helvetica", 12, 1000)
        self.assertEqual(lines, ["Shelf A", "Bin 3"])

    def test_wrap_breaks_long_words_by_default(self) -> None:
        lines = wrap_text_to_width("Supercalifragilistic", "Helvetica", 12, 30)
        self.assertGreater(len(lines), 1)
        for line in lines:
            self.assertLessEqual(stringWidth(line, "Helvetica", 12), 30)

    def test_wrap_keeps_long_words_whole_when_asked(self) -> None:
        lines = wrap_text_to_width(
            "Supercalifragilistic",
            "Helvetica",
            12,
            30,
            break_words=False,
        )
        self.assertEqual(lines, ["Supercalifragilistic"])


class MeasureTextTests(unittest.TestCase):
    def test_fitting_text_has_no_overflow(self) -> None:
        result = measure_text("Hello", "Helvetica", 12, 100, 100)
        self.assertEqual(result.lines, ["Hello"])
        self.assertFalse(result.has_visual_overflow)
        self.assertAlmostEqual(result.width, stringWidth("Hello", "Helvetica", 12))
        self.assertAlmostEqual(result.line_height, 12 * 1.2)

    def test_exceeding_max_lines_overflows(self) -> None:
        result = measure_text(
            "one two three four",
            "Helvetica",
            12,
            30,
            1000,
            max_lines=1,
        )
        self.assertTrue(result.did_exceed_max_lines)
        self.assertEqual(len(result.lines), 1)
        self.assertTrue(result.has_visual_overflow)

    def test_short_box_overflows_height(self) -> None:
        result = measure_text("Hello", "Helvetica", 12, 100, 10)
        self.assertTrue(result.did_overflow_height)
        self.assertTrue(result.has_visual_overflow)

    def test_without_soft_wrap_text_overflows_width(self) -> None:
        result = measure_text(
            "Hello world",
            "Helvetica",
            12,
            30,
            100,
            soft_wrap=False,
        )
        self.assertEqual(result.lines, ["Hello world"])
        self.assertTrue(result.did_overflow_width)

    def test_zero_width_box_overflows(self) -> None:
        result = measure_text("Hello", "Helvetica", 12, 0, 100)
        self.assertTrue(result.has_visual_overflow)

    def test_intrinsic_width_ignores_wrapping(self) -> None:
        result = measure_text("Hello world", "Helvetica", 12, 30, 1000)
        self.assertAlmostEqual(
            result.intrinsic_width,
            stringWidth("Hello world", "Helvetica", 12),
        )
        self.assertAlmostEqual(
            intrinsic_text_width("ab\nabcd", "Helvetica", 12),
            stringWidth("abcd", "Helvetica", 12),
        )

    def test_to_outcome(self) -> None:
        result = measure_text("Hello", "Helvetica", 12, 100, 10)
        outcome = result.to_outcome()
        self.assertTrue(outcome.overflowed)
        self.assertEqual(outcome.box_width, 100)
        self.assertIsNone(outcome.intrinsic_width)
        self.assertAlmostEqual(
            result.to_outcome(include_intrinsic_width=True).intrinsic_width,
            result.intrinsic_width,
        )


class CenterBaselineTests(unittest.TestCase):
    def test_center_baseline_within_area(self) -> None:
        ascent = getAscent("Helvetica", 12)
        descent = getDescent("Helvetica", 12)
        baseline = center_baseline(2, 14.4, ascent, descent, 100, 0)
        self.assertLess(baseline, 100)
        self.assertGreater(baseline, 0)

    def test_center_baseline_single_line_is_centred(self) -> None:
        ascent = getAscent("Helvetica", 12)
        descent = getDescent("Helvetica", 12)
        baseline = center_baseline(1, 12 * 1.2, ascent, descent, 100, 0)
        glyph_middle = baseline + (ascent + descent) / 2.0
        self.assertAlmostEqual(glyph_middle, 50, delta=0.01)

    def test_center_baseline_without_lines(self) -> None:
        ascent = getAscent("Helvetica", 12)
        descent = getDescent("Helvetica", 12)
        self.assertLess(center_baseline(0, 14.4, ascent, descent, 100, 0), 100)


if __name__ == "__main__":
    unittest.main()
