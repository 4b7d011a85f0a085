import os
import unittest
from io import BytesIO
from tempfile import TemporaryDirectory

from PIL import Image

from label_generation import clipped_labels, render, summarize_fits
from label_templates import get_template, list_templates
from label_templates.avery5163 import LABEL_H, LABEL_W, SLOTS
from label_templates.ptouch import MAX_WIDTH, MIN_WIDTH
from label_types import FitReport, LabelContent, LabelStyle

PNG_MAGIC = b"\x89PNG"


class TemplateLoaderTests(unittest.TestCase):
    def test_list_templates(self) -> None:
        self.assertEqual(list(list_templates()), ["avery5163", "ptouch"])

    def test_unknown_template(self) -> None:
        with self.assertRaises(SystemExit):
            get_template("nope")

    def test_style_is_passed_to_template(self) -> None:
        style = LabelStyle(font_name="Courier", font_size=18)
        template = get_template("PTOUCH", style)
        self.assertIs(template.style, style)
        self.assertEqual(template.body_font_size(24), 18)
        self.assertEqual(template.min_font_size(8), 8)


class Avery5163Tests(unittest.TestCase):
    def setUp(self) -> None:
        self.template = get_template("avery5163")

    def test_geometry_paginates(self) -> None:
        geometries = [self.template.next_label_geometry() for _ in range(SLOTS + 1)]
        self.assertTrue(geometries[0].on_new_page)
        self.assertFalse(any(g.on_new_page for g in geometries[1:SLOTS]))
        self.assertTrue(geometries[SLOTS].on_new_page)
        self.assertAlmostEqual(geometries[0].width, LABEL_W)
        self.assertAlmostEqual(geometries[0].height, LABEL_H)

    def test_render_label_returns_png(self) -> None:
        png = self.template.render_label(
            LabelContent(
                text="Winter clothes and spare blankets",
                caption="Attic shelf 2",
                url="http://example.com/box/1",
            )
        )
        self.assertTrue(png.startswith(PNG_MAGIC))
        with Image.open(BytesIO(png)) as img:
            self.assertGreater(img.width, img.height)

    def test_vertical_label_is_rotated_to_landscape(self) -> None:
        png = self.template.render_label(
            LabelContent(
                text="Cables",
                url="http://example.com/box/2",
                template_options={"orientation": "vertical", "outline": "on"},
            )
        )
        with Image.open(BytesIO(png)) as img:
            self.assertGreater(img.width, img.height)

    def test_available_options(self) -> None:
        names = [option.name for option in self.template.available_options()]
        self.assertEqual(names, ["orientation", "outline"])


class PTouchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.template = get_template("ptouch")

    def test_width_is_clamped(self) -> None:
        self.assertEqual(self.template.compute_width(LabelContent(text="A")), MIN_WIDTH)
        long_text = LabelContent(text="A very long label text " * 10)
        self.assertEqual(self.template.compute_width(long_text), MAX_WIDTH)

    def test_render_label_returns_png(self) -> None:
        png = self.template.render_label(
            LabelContent(text="A very long label text " * 4, caption="Garage")
        )
        self.assertTrue(png.startswith(PNG_MAGIC))

    def test_style_max_caps_starting_size(self) -> None:
        template = get_template("ptouch", LabelStyle(max_font_size=12))
        self.assertEqual(template.body_font_size(24), 12)
        template.render_label(LabelContent(text="Box"))
        body = [r for r in template.take_fit_reports() if r.role == "body"]
        self.assertEqual(len(body), 1)
        self.assertLessEqual(body[0].font_size, 12)
        self.assertEqual(template.fit_reports, [])

    def test_style_min_raises_starting_size(self) -> None:
        template = get_template("ptouch", LabelStyle(font_size=4, min_font_size=9))
        self.assertEqual(template.body_font_size(24), 9)
        self.assertEqual(template.min_font_size(8), 9)

    def test_records_fit_for_caption_and_body(self) -> None:
        self.template.render_label(LabelContent(text="Box", caption="Garage"))
        roles = [report.role for report in self.template.take_fit_reports()]
        self.assertEqual(roles, ["caption", "body"])

    def test_geometry_not_supported(self) -> None:
        with self.assertRaises(SystemError):
            self.template.next_label_geometry()


class RenderTests(unittest.TestCase):
    def test_render_pdf(self) -> None:
        labels = [LabelContent(text=f"Box {i}") for i in range(3)]
        with TemporaryDirectory() as tmp:
            output = os.path.join(tmp, "labels.pdf")
            message = render(output, get_template("avery5163"), labels, 1, True)
            self.assertTrue(message.startswith(f"Wrote 3 labels to {output}."))
            self.assertIn("Body text", message)
            with open(output, "rb") as handle:
                self.assertTrue(handle.read().startswith(b"%PDF"))

    def test_render_png(self) -> None:
        labels = [LabelContent(text="Box 1"), LabelContent(text="Box 2")]
        with TemporaryDirectory() as tmp:
            prefix = os.path.join(tmp, "tape")
            message = render(prefix, get_template("ptouch"), labels, 0, False)
            self.assertIn("Wrote 2 PNG files", message)
            self.assertTrue(os.path.exists(f"{prefix}_01.png"))
            self.assertTrue(os.path.exists(f"{prefix}_02.png"))

    def test_render_reports_clipped_labels(self) -> None:
        labels = [
            LabelContent(text="Box 1"),
            LabelContent(text="A very long label text " * 10),
        ]
        with TemporaryDirectory() as tmp:
            prefix = os.path.join(tmp, "tape")
            with self.assertLogs("label_generation", level="WARNING"):
                message = render(prefix, get_template("ptouch"), labels, 0, False)
        self.assertIn("1 label(s) clipped at minimum size", message)
        self.assertIn("A very long label text", message)

    def test_render_without_labels(self) -> None:
        message = render(None, get_template("ptouch"), [], 0, False)
        self.assertEqual(message, "No labels to render; no output generated.")

    def test_png_templates_reject_pdf_flags(self) -> None:
        labels = [LabelContent(text="Box 1")]
        with self.assertRaises(SystemExit):
            render(None, get_template("ptouch"), labels, 1, False)
        with self.assertRaises(SystemExit):
            render(None, get_template("ptouch"), labels, 0, True)


class FitSummaryTests(unittest.TestCase):
    def test_no_body_reports(self) -> None:
        self.assertEqual(summarize_fits([]), "")
        caption_only = [FitReport("Box", "caption", 10, False)]
        self.assertEqual(summarize_fits(caption_only), "")

    def test_single_size(self) -> None:
        reports = [FitReport("A", "body", 12, False), FitReport("B", "body", 12, False)]
        self.assertEqual(summarize_fits(reports), "Body text at 12.0 pt.")

    def test_size_range_and_clipped(self) -> None:
        reports = [
            FitReport("A", "body", 24, False),
            FitReport("B", "caption", 6, True),
            FitReport("B", "body", 8, True),
            FitReport("C", "body", 15.25, False),
        ]
        self.assertEqual(
            summarize_fits(reports),
            "Body text between 8.0 and 24.0 pt. 1 label(s) clipped at minimum size: 'B'.",
        )

    def test_clipped_labels_keep_order(self) -> None:
        reports = [
            FitReport("Z", "body", 8, True),
            FitReport("A", "body", 8, True),
            FitReport("Z", "caption", 6, True),
        ]
        self.assertEqual(clipped_labels(reports), ["Z", "A"])


if __name__ == "__main__":
    unittest.main()
