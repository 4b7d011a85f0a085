"""Brother P-Touch 18 mm tape template with single-line auto-sized text."""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from auto_sized_text import AutoSizedText
from fonts import TextStyle
from label_types import LabelContent, LabelGeometry
from .base import LabelTemplate
from .utils import draw_qr_code, rasterize_pdf

LABEL_HEIGHT = 18 * mm
QR_TEXT_GAP = 1 * mm
LABEL_MARGIN_LEFT = 3 * mm
LABEL_MARGIN_RIGHT = 3 * mm

MAX_WIDTH = 75 * mm
MIN_WIDTH = 30 * mm

CAPTION_SHARE = 0.35

FONT_SIZE_BODY = 24.0
MIN_FONT_SIZE_BODY = 8.0
FONT_SIZE_CAPTION = 10.0
MIN_FONT_SIZE_CAPTION = 6.0


class Template(LabelTemplate):
    """Stateless template for Brother P-Touch continuous tape."""

    @property
    def raster_dpi(self) -> int:
        return 180

    def reset(self) -> None:
        pass

    def next_label_geometry(self) -> LabelGeometry:
        raise SystemError("Not supported")

    def render_label(
        self,
        content: LabelContent,
    ) -> bytes:
        width = self.compute_width(content)

        buffer = BytesIO()
        canvas_obj = canvas.Canvas(buffer, pagesize=(width, LABEL_HEIGHT))

        text_left = LABEL_MARGIN_LEFT
        if content.url:
            draw_qr_code(canvas_obj, content.url, LABEL_MARGIN_LEFT, 0, LABEL_HEIGHT)
            text_left += LABEL_HEIGHT + QR_TEXT_GAP
        text_width = width - text_left - LABEL_MARGIN_RIGHT

        body_bottom = 0.0
        caption = content.caption.strip()
        if caption:
            caption_height = LABEL_HEIGHT * CAPTION_SHARE
            caption_result = AutoSizedText(
                caption,
                font_size=FONT_SIZE_CAPTION,
                min_font_size=MIN_FONT_SIZE_CAPTION,
                style=TextStyle(font_name=self.style.font_name),
                max_lines=1,
                soft_wrap=False,
            ).draw(
                canvas_obj,
                text_left,
                0,
                text_width,
                caption_height,
                max_passes=self.style.max_passes,
            )
            self.record_fit(content, "caption", caption_result)
            body_bottom = caption_height

        body_size = self.body_font_size(FONT_SIZE_BODY)
        body_result = AutoSizedText(
            content.text.strip() or "Unnamed",
            font_size=body_size,
            min_font_size=min(self.min_font_size(MIN_FONT_SIZE_BODY), body_size),
            max_font_size=self.style.max_font_size,
            style=TextStyle(font_name=self.style.font_name),
            max_lines=1,
            soft_wrap=False,
        ).draw(
            canvas_obj,
            text_left,
            body_bottom,
            text_width,
            LABEL_HEIGHT - body_bottom,
            max_passes=self.style.max_passes,
        )
        self.record_fit(content, "body", body_result)

        canvas_obj.showPage()
        canvas_obj.save()
        return rasterize_pdf(buffer.getvalue(), self.raster_dpi)

    def compute_width(self, content: LabelContent) -> float:
        """Return the tape length needed for the text at its starting sizes."""

        qr_width = LABEL_HEIGHT + QR_TEXT_GAP if content.url else 0.0
        text_widths = [
            stringWidth(
                content.text.strip(),
                self.style.font_name,
                self.body_font_size(FONT_SIZE_BODY),
            ),
            stringWidth(
                content.caption.strip(),
                self.style.font_name,
                FONT_SIZE_CAPTION,
            ),
        ]
        required = (
            LABEL_MARGIN_LEFT
            + qr_width
            + max(text_widths)
            + LABEL_MARGIN_RIGHT
        )
        return min(max(required, MIN_WIDTH), MAX_WIDTH)
