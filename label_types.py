from __future__ import annotations

from dataclasses import dataclass

from auto_sized_text import DEFAULT_MAX_PASSES
from fonts import DEFAULT_FONT_NAME


@dataclass(frozen=True)
class LabelContent:
    """Textual payload to render into a label."""

    text: str
    caption: str = ""
    url: str = ""
    template_options: dict[str, str] | None = None


@dataclass(frozen=True)
class LabelStyle:
    """Font settings shared by every label of a rendering run.

    ``font_size=None`` lets each template use its own starting size.
    """

    font_name: str = DEFAULT_FONT_NAME
    font_size: float | None = None
    min_font_size: float | None = None
    max_font_size: float | None = None
    max_passes: int = DEFAULT_MAX_PASSES


@dataclass(frozen=True)
class LabelGeometry:
    left: float
    bottom: float
    right: float
    top: float

    on_new_page: bool

    @property
    def width(self) -> float:
        return max(self.right - self.left, 0.0)

    @property
    def height(self) -> float:
        return max(self.top - self.bottom, 0.0)


@dataclass(frozen=True)
class FitReport:
    """Font size one text block of a label settled on.

    ``overflowed`` means the text still did not fit at its smallest size
    and is clipped.
    """

    text: str
    role: str
    font_size: float
    overflowed: bool
