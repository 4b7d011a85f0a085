"""A text label that re-sizes its font until the text fits its box."""

from __future__ import annotations

from enum import StrEnum
from typing import Callable

from reportlab.pdfgen import canvas

from fit_controller import FitSizeController
from fit_types import FitConfig
from fonts import TextStyle, resolve_specified_font_size
from log_utils import get_logger
from text_layout import (
    DEFAULT_LINE_SPACING,
    TextLayoutResult,
    center_baseline,
    measure_text,
)

logger = get_logger(__name__)

# Upper bound on layout passes for a single fit() call.
DEFAULT_MAX_PASSES = 64


class Align(StrEnum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class AutoSizedText:
    """Text whose font size shrinks on overflow and grows back when it fits.

    The label owns one :class:`FitSizeController`. Every :meth:`layout`
    call measures the text at the current size, feeds the outcome to the
    controller and then hands the untouched measurement to
    ``on_text_layout``. :meth:`fit` repeats that until a pass leaves the
    size unchanged.

    ``font_size`` (or ``style.font_size`` when omitted) is both the starting
    size and a ceiling for growth. ``min_font_size``/``max_font_size`` are
    absolute bounds; ``scale_down_until``/``scale_up_until`` are the same
    bounds expressed as logical sizes, compared after dividing by
    ``font_scale``.
    """

    def __init__(
        self,
        text: str,
        *,
        font_size: float | None = None,
        min_font_size: float | None = None,
        max_font_size: float | None = None,
        scale_down_until: float | None = None,
        scale_up_until: float | None = None,
        font_scale: float = 1.0,
        style: TextStyle = TextStyle(),
        max_lines: int | None = None,
        soft_wrap: bool = True,
        line_spacing: float = DEFAULT_LINE_SPACING,
        intrinsic_width_guard: bool = False,
        on_text_layout: Callable[[TextLayoutResult], None] | None = None,
    ) -> None:
        if max_lines is not None and max_lines < 1:
            raise ValueError(f"max_lines must be at least 1, got {max_lines}")

        logical = scale_down_until is not None or scale_up_until is not None
        if logical and (min_font_size is not None or max_font_size is not None):
            raise ValueError(
                "Use either min/max_font_size or scale_down/up_until, not both."
            )

        specified = resolve_specified_font_size(font_size, style)
        if logical:
            config = FitConfig.logical(
                scale_down_until=scale_down_until,
                scale_up_until=scale_up_until,
                font_scale=font_scale,
                base_font_size=specified,
                base_is_specified=specified is not None,
            )
        else:
            config = FitConfig(
                base_font_size=specified,
                min_font_size=min_font_size,
                max_font_size=max_font_size,
                base_is_specified=specified is not None,
                font_scale=font_scale,
            )

        self.text = text
        self.style = style
        self.max_lines = max_lines
        self.soft_wrap = soft_wrap
        self.line_spacing = line_spacing
        self.intrinsic_width_guard = intrinsic_width_guard
        self.on_text_layout = on_text_layout
        self.controller = FitSizeController(config)
        self.last_layout: TextLayoutResult | None = None

    @property
    def font_size(self) -> float:
        return self.controller.current_font_size

    def measure(self, width: float, height: float) -> TextLayoutResult:
        """Measure at the current size without advancing the controller."""

        return measure_text(
            self.text,
            self.style.font_name,
            self.font_size,
            width,
            height,
            max_lines=self.max_lines,
            soft_wrap=self.soft_wrap,
            line_spacing=self.line_spacing,
        )

    def layout(self, width: float, height: float) -> TextLayoutResult:
        """Run one measure pass and one sizing decision."""

        result = self.measure(width, height)
        self.controller.step(result.to_outcome(self.intrinsic_width_guard))
        self._publish(result)
        return result

    def _publish(self, result: TextLayoutResult) -> None:
        self.last_layout = result
        if self.on_text_layout is not None:
            self.on_text_layout(result)

    def fit(
        self,
        width: float,
        height: float,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> TextLayoutResult:
        """Repeat layout passes until the font size settles.

        The size has settled when a pass leaves it unchanged, or when the
        text fits again after an earlier pass overflowed. In the latter case
        no further growth step is taken, since the shrink and growth factors
        would otherwise keep bouncing around the best fit.

        If ``max_passes`` runs out first, the latest measurement that fit is
        returned, or a fresh measurement at the current size when none did.
        """

        last_fitting: TextLayoutResult | None = None
        seen_overflow = False
        for _ in range(max_passes):
            result = self.measure(width, height)
            if seen_overflow and not result.has_visual_overflow:
                self._publish(result)
                return result
            seen_overflow = seen_overflow or result.has_visual_overflow
            if not result.has_visual_overflow:
                last_fitting = result

            changed = self.controller.step(
                result.to_outcome(self.intrinsic_width_guard)
            )
            self._publish(result)
            if not changed:
                return result

        logger.warning(
            "Text %r did not settle within %d passes (size %.2f)",
            self.text[:40],
            max_passes,
            self.font_size,
        )
        return last_fitting or self.measure(width, height)

    def draw(
        self,
        canvas_obj: canvas.Canvas,
        left: float,
        bottom: float,
        width: float,
        height: float,
        *,
        align: str = Align.LEFT,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> TextLayoutResult:
        """Fit the text to the box and draw it, clipped and vertically centred."""

        alignment = Align(align)
        result = self.fit(width, height, max_passes=max_passes)
        if not result.lines:
            return result

        canvas_obj.saveState()
        clip = canvas_obj.beginPath()
        clip.rect(left, bottom, width, height)
        canvas_obj.clipPath(clip, stroke=0, fill=0)
        canvas_obj.setFont(result.font_name, result.font_size)

        baseline = center_baseline(
            len(result.lines),
            result.line_height,
            result.ascent,
            result.descent,
            bottom + height,
            bottom,
        )
        for line in result.lines:
            if alignment is Align.CENTER:
                canvas_obj.drawCentredString(left + width / 2.0, baseline, line)
            elif alignment is Align.RIGHT:
                canvas_obj.drawRightString(left + width, baseline, line)
            else:
                canvas_obj.drawString(left, baseline, line)
            baseline -= result.line_height
        canvas_obj.restoreState()
        return result


__all__ = ["Align", "AutoSizedText", "DEFAULT_MAX_PASSES"]
