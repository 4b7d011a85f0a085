"""Shared drawing helpers for label templates."""

from __future__ import annotations

from io import BytesIO

import fitz
import qrcode
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


def draw_qr_code(
    canvas_obj: canvas.Canvas,
    url: str,
    left: float,
    bottom: float,
    size: float,
) -> None:
    """Draw a square QR code for ``url`` with its lower-left corner at ``left, bottom``."""

    buffer = BytesIO()
    qr = qrcode.QRCode(border=0)
    qr.add_data(url)
    qr_img = qr.make_image()
    qr_img.save(buffer, kind="PNG")
    buffer.seek(0)

    canvas_obj.drawImage(
        ImageReader(buffer),
        left,
        bottom,
        width=size,
        height=size,
        preserveAspectRatio=True,
        mask="auto",
    )


def draw_outline(canvas_obj: canvas.Canvas, width: float, height: float) -> None:
    canvas_obj.saveState()
    canvas_obj.setLineWidth(0.75)
    canvas_obj.rect(0, 0, width, height)
    canvas_obj.restoreState()


def rasterize_pdf(pdf_bytes: bytes, dpi: int) -> bytes:
    """Return the first page of ``pdf_bytes`` as PNG bytes."""

    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page = doc.load_page(0)
        pix = page.get_pixmap(dpi=dpi)
        return pix.tobytes("png")
