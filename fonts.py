# pyright: reportUnknownVariableType=false, reportUnknownMemberType=false
# pyright: reportUnknownArgumentType=false, reportAttributeAccessIssue=false
# pyright: reportMissingImports=false
# pyright: reportMissingTypeStubs=false

"""Font resolution and the ambient text style for auto-sized labels."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
import re

from fontTools.ttLib import TTFont as FontFile
from fontTools.varLib import instancer
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont as ReportLabTTFont

# Ambient defaults used when neither the caller nor the style sets a value.
DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_FONT_SIZE = 14.0

FONT_FILE_SUFFIXES = (".ttf", ".otf")


@dataclass(frozen=True)
class TextStyle:
    """Inherited text style; ``font_size=None`` leaves the size unspecified."""

    font_name: str = DEFAULT_FONT_NAME
    font_size: float | None = None


def resolve_specified_font_size(
    font_size: float | None,
    style: TextStyle,
) -> float | None:
    """Return the explicit size, else the style size, else ``None``."""

    if font_size is not None:
        return font_size
    if style.font_size is not None:
        return style.font_size
    return None


def _safe_ps_name(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9-]", "", name)[:63]


class FontRegistry:
    """Register TrueType files with ReportLab, instancing variable fonts."""

    def __init__(self) -> None:
        # (resolved path, weight key) -> registered font name
        self._registered: dict[tuple[str, str], str] = {}

    def register_file(self, font_path: Path, weight: float | None = None) -> str:
        path = Path(font_path).expanduser().resolve()
        if not path.exists():
            raise ValueError(f"Font file '{path}' does not exist.")

        weight_key = "" if weight is None else f"{float(weight):.1f}"
        cached = self._registered.get((str(path), weight_key))
        if cached:
            return cached

        font_bytes = path.read_bytes()
        font = FontFile(BytesIO(font_bytes))
        base_name = self._postscript_name(font, path)

        if "fvar" in font:
            font_name, buffer = self._instantiate(font, base_name, weight)
            pdfmetrics.registerFont(ReportLabTTFont(font_name, buffer))
        else:
            font_name = base_name
            pdfmetrics.registerFont(ReportLabTTFont(font_name, str(path)))

        self._registered[(str(path), weight_key)] = font_name
        return font_name

    def _postscript_name(self, font: FontFile, path: Path) -> str:
        record = font["name"].getDebugName(6) or font["name"].getDebugName(4)
        return _safe_ps_name(record or path.stem) or _safe_ps_name(path.stem)

    def _instantiate(
        self,
        font: FontFile,
        base_name: str,
        weight: float | None,
    ) -> tuple[str, BytesIO]:
        try:
            axis = next(ax for ax in font["fvar"].axes if ax.axisTag == "wght")
        except StopIteration as exc:
            raise ValueError(
                f"Variable font '{base_name}' does not expose a wght axis."
            ) from exc

        target = float(axis.defaultValue if weight is None else weight)
        if not axis.minValue <= target <= axis.maxValue:
            raise ValueError(
                f"Font weight {target} outside supported range "
                f"{axis.minValue:.0f}-{axis.maxValue:.0f}"
            )

        instancer.instantiateVariableFont(font, {"wght": target}, inplace=True)
        font_name = _safe_ps_name(f"{base_name}-W{int(round(target))}")
        font["name"].setName(font_name, 6, 3, 1, 0x409)
        buffer = BytesIO()
        font.save(buffer)
        buffer.seek(0)
        return font_name, buffer


_REGISTRY = FontRegistry()


def resolve_font_name(name_or_path: str, weight: float | None = None) -> str:
    """Return a ReportLab font name for a font name or a font file path."""

    candidate = (name_or_path or "").strip()
    if not candidate:
        return DEFAULT_FONT_NAME

    if candidate.lower().endswith(FONT_FILE_SUFFIXES):
        return _REGISTRY.register_file(Path(candidate), weight)

    if candidate in pdfmetrics.standardFonts:
        return candidate
    if candidate in pdfmetrics.getRegisteredFontNames():
        return candidate

    available = ", ".join(sorted(pdfmetrics.standardFonts))
    raise ValueError(
        f"Unknown font '{candidate}'. Use a .ttf/.otf path or one of: {available}"
    )


__all__ = [
    "DEFAULT_FONT_NAME",
    "DEFAULT_FONT_SIZE",
    "FontRegistry",
    "TextStyle",
    "resolve_font_name",
    "resolve_specified_font_size",
]
