"""Abstract base class for label templates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from label_types import FitReport, LabelContent, LabelGeometry, LabelStyle
from text_layout import TextLayoutResult


@dataclass(frozen=True)
class TemplateOption:
    """Represents a configurable option exposed by a label template."""

    name: str
    possible_values: list[str]


class LabelTemplate(ABC):
    """Defines the stateful interface all label templates must implement."""

    def __init__(self, style: LabelStyle | None = None) -> None:
        self.style = style or LabelStyle()
        self.fit_reports: list[FitReport] = []
        self.reset()

    @property
    def page_size(self) -> tuple[float, float] | None:
        """Return the page size in points or ``None`` for dynamic sizing."""

        return None

    @property
    def raster_dpi(self) -> int:
        """Return DPI for rasterized outputs (PNG), defaults to 300."""

        return 300

    @abstractmethod
    def reset(self) -> None:
        """Clear any pagination state before a new rendering run."""

    @abstractmethod
    def next_label_geometry(self) -> LabelGeometry:
        """Return the geometry for the next label slot."""

    @abstractmethod
    def render_label(
        self,
        content: LabelContent,
    ) -> bytes:
        """Return PNG bytes for ``content`` with its text fitted to the label."""

    def available_options(self) -> list[TemplateOption]:
        """Return user-tunable options supported by the template."""

        return []

    def body_font_size(self, default: float) -> float:
        """Return the starting body size, kept inside the style's min/max."""

        size = self.style.font_size if self.style.font_size is not None else default
        if self.style.max_font_size is not None:
            size = min(size, self.style.max_font_size)
        if self.style.min_font_size is not None:
            size = max(size, self.style.min_font_size)
        return size

    def min_font_size(self, default: float) -> float:
        return (
            self.style.min_font_size
            if self.style.min_font_size is not None
            else default
        )

    def record_fit(
        self,
        content: LabelContent,
        role: str,
        result: TextLayoutResult,
    ) -> None:
        """Remember the size a text block of ``content`` settled on."""

        self.fit_reports.append(
            FitReport(
                text=content.text,
                role=role,
                font_size=result.font_size,
                overflowed=result.has_visual_overflow,
            )
        )

    def take_fit_reports(self) -> list[FitReport]:
        reports, self.fit_reports = self.fit_reports, []
        return reports
