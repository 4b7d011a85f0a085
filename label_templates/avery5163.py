"""Avery 5163 sheet template with auto-sized label text."""

from __future__ import annotations

from enum import StrEnum
from io import BytesIO

from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from auto_sized_text import Align, AutoSizedText
from fonts import TextStyle
from label_types import LabelContent, LabelGeometry
from .base import LabelTemplate, TemplateOption
from .utils import draw_outline, draw_qr_code, rasterize_pdf

PAGE_SIZE = letter

LABEL_W = 4.00 * inch
LABEL_H = 2.00 * inch

COLS = 2
ROWS = 5
SLOTS = COLS * ROWS

MARGIN_LEFT = 0.17 * inch
MARGIN_TOP = 0.50 * inch
H_GAP = 0.16 * inch
V_GAP = 0.00 * inch

LABEL_PADDING = 0.1 * inch
QR_COLUMN_W = 1.5 * inch
CAPTION_H = 0.3 * inch

BODY_FONT_SIZE = 28.0
BODY_MIN_FONT_SIZE = 8.0
BODY_MAX_LINES = 3
CAPTION_FONT_SIZE = 11.0
CAPTION_MIN_FONT_SIZE = 6.0


class Orientation(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Outline(StrEnum):
    OFF = "off"
    ON = "on"


class Template(LabelTemplate):
    """Avery 5163 (2x4 inch, 10 per letter sheet) with per-label options."""

    _DEFAULT_ORIENTATION = Orientation.HORIZONTAL
    _DEFAULT_OUTLINE = Outline.OFF
    _slot_index: int

    def available_options(self) -> list[TemplateOption]:
        return [
            TemplateOption(
                name="orientation",
                possible_values=[m.value for m in Orientation],
            ),
            TemplateOption(
                name="outline",
                possible_values=[t.value for t in Outline],
            ),
        ]

    @property
    def page_size(self) -> tuple[float, float]:
        return PAGE_SIZE

    def reset(self) -> None:
        self._slot_index = 0

    def next_label_geometry(self) -> LabelGeometry:
        row = self._slot_index // COLS
        col = self._slot_index % COLS

        _, page_height = PAGE_SIZE

        bottom = page_height - MARGIN_TOP - LABEL_H - row * (LABEL_H + V_GAP)
        top = bottom + LABEL_H
        left = MARGIN_LEFT + col * (LABEL_W + H_GAP)
        right = left + LABEL_W
        on_new_page = self._slot_index == 0
        self._slot_index = (self._slot_index + 1) % SLOTS

        return LabelGeometry(left, bottom, right, top, on_new_page)

    def render_label(self, content: LabelContent) -> bytes:
        vertical = self._orientation_for_label(content) is Orientation.VERTICAL
        width, height = (LABEL_H, LABEL_W) if vertical else (LABEL_W, LABEL_H)

        buffer = BytesIO()
        canvas_obj = canvas.Canvas(buffer, pagesize=(width, height))
        if vertical:
            self._draw_vertical(canvas_obj, content)
        else:
            self._draw_horizontal(canvas_obj, content)
        if self._outline_for_label(content):
            draw_outline(canvas_obj, width, height)
        canvas_obj.showPage()
        canvas_obj.save()

        png = rasterize_pdf(buffer.getvalue(), self.raster_dpi)
        if not vertical:
            return png

        with Image.open(BytesIO(png)) as img:
            rotated = img.rotate(90, expand=True)
            output = BytesIO()
            rotated.save(output, format="PNG")
            return output.getvalue()

    def _draw_horizontal(self, canvas_obj: canvas.Canvas, content: LabelContent) -> None:
        text_left = LABEL_PADDING
        if content.url:
            qr_size = QR_COLUMN_W - 2 * LABEL_PADDING
            draw_qr_code(
                canvas_obj,
                content.url,
                LABEL_PADDING,
                (LABEL_H - qr_size) / 2.0,
                qr_size,
            )
            canvas_obj.line(QR_COLUMN_W, 0, QR_COLUMN_W, LABEL_H)
            text_left = QR_COLUMN_W + LABEL_PADDING

        self._draw_text_column(
            canvas_obj,
            content,
            left=text_left,
            right=LABEL_W - LABEL_PADDING,
            bottom=LABEL_PADDING,
            top=LABEL_H - LABEL_PADDING,
            align=Align.LEFT,
        )

    def _draw_vertical(self, canvas_obj: canvas.Canvas, content: LabelContent) -> None:
        width, height = LABEL_H, LABEL_W
        text_top = height - LABEL_PADDING
        if content.url:
            qr_size = width - 2 * LABEL_PADDING
            qr_bottom = height - LABEL_PADDING - qr_size
            draw_qr_code(canvas_obj, content.url, LABEL_PADDING, qr_bottom, qr_size)
            text_top = qr_bottom - LABEL_PADDING

        self._draw_text_column(
            canvas_obj,
            content,
            left=LABEL_PADDING,
            right=width - LABEL_PADDING,
            bottom=LABEL_PADDING,
            top=text_top,
            align=Align.CENTER,
        )

    def _draw_text_column(
        self,
        canvas_obj: canvas.Canvas,
        content: LabelContent,
        *,
        left: float,
        right: float,
        bottom: float,
        top: float,
        align: Align,
    ) -> None:
        width = right - left
        caption = content.caption.strip()
        body_bottom = bottom
        if caption:
            caption_text = AutoSizedText(
                caption,
                font_size=CAPTION_FONT_SIZE,
                min_font_size=min(CAPTION_MIN_FONT_SIZE, CAPTION_FONT_SIZE),
                style=TextStyle(font_name=self.style.font_name),
                max_lines=1,
                soft_wrap=False,
            )
            caption_result = caption_text.draw(
                canvas_obj,
                left,
                bottom,
                width,
                CAPTION_H,
                align=align,
                max_passes=self.style.max_passes,
            )
            self.record_fit(content, "caption", caption_result)
            body_bottom = bottom + CAPTION_H

        body = content.text.strip() or "N/A"
        body_size = self.body_font_size(BODY_FONT_SIZE)
        body_text = AutoSizedText(
            body,
            font_size=body_size,
            min_font_size=min(self.min_font_size(BODY_MIN_FONT_SIZE), body_size),
            max_font_size=self.style.max_font_size,
            style=TextStyle(font_name=self.style.font_name),
            max_lines=BODY_MAX_LINES,
        )
        body_result = body_text.draw(
            canvas_obj,
            left,
            body_bottom,
            width,
            top - body_bottom,
            align=align,
            max_passes=self.style.max_passes,
        )
        self.record_fit(content, "body", body_result)

    def _orientation_for_label(self, content: LabelContent) -> Orientation:
        options = content.template_options or {}
        value = (options.get("orientation") or self._DEFAULT_ORIENTATION.value).lower()
        if value in Orientation._value2member_map_:
            return Orientation(value)
        return self._DEFAULT_ORIENTATION

    def _outline_for_label(self, content: LabelContent) -> bool:
        options = content.template_options or {}
        value = (options.get("outline") or self._DEFAULT_OUTLINE.value).lower()
        if value in Outline._value2member_map_:
            return Outline(value) is Outline.ON
        return self._DEFAULT_OUTLINE is Outline.ON
