"""Rendering of auto-sized labels to PDF sheets or PNG files.

Every run ends with a short summary of the font sizes the labels settled
on, so text that could only be drawn clipped at its minimum size is
reported instead of silently printed.
"""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from label_templates.base import LabelTemplate
from label_types import FitReport, LabelContent, LabelGeometry
from log_utils import get_logger

logger = get_logger(__name__)

SLOT_OUTLINE_WIDTH = 0.5


def render(
    output_path: str | None,
    template: LabelTemplate,
    labels: Sequence[LabelContent],
    skip: int,
    draw_outline: bool,
) -> str:
    """Render ``labels`` and return a message describing the output."""

    if not template.page_size:
        if draw_outline:
            raise SystemExit("--draw-outline is not compatible with non-PDF templates.")
        if skip > 0:
            raise SystemExit("--skip is not compatible with non-PDF templates.")

    if len(labels) == 0:
        return "No labels to render; no output generated."

    if template.page_size:
        message = render_pdf(output_path, template, labels, skip, draw_outline)
    else:
        message = render_png(output_path, template, labels)
    return " ".join(filter(None, [message, summarize_fits(template.take_fit_reports())]))


def render_png(
    output_path: str | None,
    template: LabelTemplate,
    labels: Sequence[LabelContent],
) -> str:
    """Write each label to its own ``<prefix>_NN.png``."""

    prefix = output_path or "labels"
    _start_run(template)

    for index, label in enumerate(labels, start=1):
        png_name = f"{prefix}_{index:02d}.png"
        with open(png_name, "wb") as handle:
            handle.write(_render_one(template, label))
        logger.debug("Wrote %s", png_name)

    logger.info("Rendered %d PNG labels", len(labels))
    return f"Wrote {len(labels)} PNG files with prefix '{prefix}_'."


def render_pdf(
    output_path: str | None,
    template: LabelTemplate,
    labels: Sequence[LabelContent],
    skip: int,
    draw_outline: bool,
) -> str:
    """Place labels into the template's slots on a multi-page PDF."""

    output_path = output_path or "labels.pdf"
    _start_run(template)
    canvas_obj = canvas.Canvas(output_path, pagesize=template.page_size)

    for _ in range(skip):
        template.next_label_geometry()

    pages = 0
    for label in labels:
        geometry = template.next_label_geometry()
        if geometry.on_new_page:
            if pages:
                canvas_obj.showPage()
            pages += 1
        _place_label(canvas_obj, geometry, _render_one(template, label), draw_outline)

    canvas_obj.showPage()
    canvas_obj.save()
    logger.info(
        "Rendered %d labels on %d page(s) into %s",
        len(labels),
        max(pages, 1),
        output_path,
    )
    return f"Wrote {len(labels)} labels to {output_path}."


def summarize_fits(reports: Sequence[FitReport]) -> str:
    """Describe the body sizes chosen and list labels clipped at their floor."""

    body_sizes = [report.font_size for report in reports if report.role == "body"]
    if not body_sizes:
        return ""

    smallest, largest = min(body_sizes), max(body_sizes)
    if smallest == largest:
        summary = f"Body text at {smallest:.1f} pt."
    else:
        summary = f"Body text between {smallest:.1f} and {largest:.1f} pt."

    clipped = clipped_labels(reports)
    if clipped:
        names = ", ".join(repr(text) for text in clipped)
        summary += f" {len(clipped)} label(s) clipped at minimum size: {names}."
    return summary


def clipped_labels(reports: Sequence[FitReport]) -> list[str]:
    """Return the label texts, in order, that still overflow."""

    seen: list[str] = []
    for report in reports:
        if report.overflowed and report.text not in seen:
            seen.append(report.text)
    return seen


def _start_run(template: LabelTemplate) -> None:
    template.reset()
    template.take_fit_reports()


def _render_one(template: LabelTemplate, label: LabelContent) -> bytes:
    already = len(template.fit_reports)
    png_bytes = template.render_label(label)
    for report in template.fit_reports[already:]:
        if report.overflowed:
            logger.warning(
                "%s of %r still overflows at %.2f pt",
                report.role,
                label.text,
                report.font_size,
            )
        else:
            logger.debug("%s of %r fitted at %.2f pt", report.role, label.text, report.font_size)
    return png_bytes


def _place_label(
    canvas_obj: canvas.Canvas,
    geometry: LabelGeometry,
    png_bytes: bytes,
    draw_outline: bool,
) -> None:
    if geometry.width <= 0 or geometry.height <= 0:
        raise SystemError("Template produced non-positive geometry dimensions.")

    canvas_obj.drawImage(
        ImageReader(BytesIO(png_bytes)),
        geometry.left,
        geometry.bottom,
        width=geometry.width,
        height=geometry.height,
        mask="auto",
    )
    if draw_outline:
        canvas_obj.saveState()
        canvas_obj.setLineWidth(SLOT_OUTLINE_WIDTH)
        canvas_obj.rect(geometry.left, geometry.bottom, geometry.width, geometry.height)
        canvas_obj.restoreState()
