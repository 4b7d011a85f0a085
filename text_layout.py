"""Text measurement for auto-sized labels, backed by ReportLab font metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from reportlab.pdfbase.pdfmetrics import getAscent, getDescent, stringWidth

from fit_types import MeasurementOutcome

DEFAULT_LINE_SPACING = 1.2


@dataclass(frozen=True)
class TextLayoutResult:
    """Outcome of laying out text once at a given font size."""

    lines: List[str]
    font_name: str
    font_size: float
    line_height: float
    width: float
    height: float
    intrinsic_width: float
    box_width: float
    box_height: float
    did_exceed_max_lines: bool

    @property
    def did_overflow_width(self) -> bool:
        return self.width > self.box_width

    @property
    def did_overflow_height(self) -> bool:
        return self.height > self.box_height

    @property
    def has_visual_overflow(self) -> bool:
        return (
            self.did_exceed_max_lines
            or self.did_overflow_width
            or self.did_overflow_height
        )

    @property
    def ascent(self) -> float:
        return getAscent(self.font_name, self.font_size)

    @property
    def descent(self) -> float:
        return getDescent(self.font_name, self.font_size)

    def to_outcome(self, include_intrinsic_width: bool = False) -> MeasurementOutcome:
        return MeasurementOutcome(
            overflowed=self.has_visual_overflow,
            box_width=self.box_width,
            intrinsic_width=self.intrinsic_width if include_intrinsic_width else None,
        )


def wrap_text_to_width(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
    *,
    break_words: bool = True,
) -> List[str]:
    """Wrap text into lines that fit within the specified width.

    Newlines start a new paragraph. A word wider than ``max_width_pt`` is
    split at character level when ``break_words`` is set, otherwise it is
    kept whole on its own line.
    """

    if not text or max_width_pt <= 0:
        return []

    lines: List[str] = []
    for paragraph in text.splitlines():
        lines.extend(
            _wrap_paragraph(
                paragraph,
                font_name,
                font_size,
                max_width_pt,
                break_words,
            )
        )
    return lines


def _wrap_paragraph(
    paragraph: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
    break_words: bool,
) -> List[str]:
    words = paragraph.split()
    if not words:
        return [""]

    lines: List[str] = []
    current: List[str] = []
    for word in words:
        tentative = " ".join(current + [word]) if current else word
        if stringWidth(tentative, font_name, font_size) <= max_width_pt:
            current.append(word)
            continue

        if current:
            lines.append(" ".join(current))
            current = []

        if stringWidth(word, font_name, font_size) <= max_width_pt or not break_words:
            current = [word]
            continue

        # single word exceeds width; perform character-level wrap
        partial = ""
        for ch in word:
            candidate = partial + ch
            if stringWidth(candidate, font_name, font_size) > max_width_pt and partial:
                lines.append(partial)
                partial = ch
            else:
                partial = candidate
        if partial:
            current = [partial]

    if current:
        lines.append(" ".join(current))
    return lines


def intrinsic_text_width(text: str, font_name: str, font_size: float) -> float:
    """Return the width of the widest line when laid out without wrapping."""

    if not text:
        return 0.0
    return max(
        stringWidth(line, font_name, font_size) for line in text.splitlines() or [""]
    )


def measure_text(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
    max_height_pt: float,
    *,
    max_lines: int | None = None,
    soft_wrap: bool = True,
    line_spacing: float = DEFAULT_LINE_SPACING,
) -> TextLayoutResult:
    """Lay out ``text`` inside a box and report whether it overflowed."""

    if soft_wrap and max_width_pt > 0:
        lines = wrap_text_to_width(
            text,
            font_name,
            font_size,
            max_width_pt,
            break_words=False,
        )
    else:
        lines = text.splitlines() if text else []

    exceeded = max_lines is not None and len(lines) > max_lines
    visible = lines[:max_lines] if max_lines is not None else lines

    line_height = font_size * line_spacing
    width = max((stringWidth(line, font_name, font_size) for line in visible), default=0.0)
    height = len(visible) * line_height

    return TextLayoutResult(
        lines=visible,
        font_name=font_name,
        font_size=font_size,
        line_height=line_height,
        width=width,
        height=height,
        intrinsic_width=intrinsic_text_width(text, font_name, font_size),
        box_width=max_width_pt,
        box_height=max_height_pt,
        did_exceed_max_lines=exceeded,
    )


def center_baseline(
    line_count: int,
    line_height: float,
    ascent: float,
    descent: float,
    area_top: float,
    area_bottom: float,
) -> float:
    """Return the first baseline that vertically centers a block of lines.

    ``descent`` is negative, as reported by ReportLab. Lines that end up
    below ``area_bottom`` are clipped by the caller.
    """

    half_leading = max(line_height - (ascent - descent), 0) / 2.0
    if line_count <= 0 or area_top <= area_bottom:
        return area_top - half_leading - ascent

    area_height = area_top - area_bottom
    block_height = line_count * line_height
    offset = max((area_height - block_height) / 2.0, 0)
    # drawString treats y as the baseline, not the top of the glyphs.
    return area_top - offset - half_leading - ascent
