#!/usr/bin/env python3
"""Render label sheets or tape labels whose text auto-sizes to fit."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from dotenv import load_dotenv

from auto_sized_text import DEFAULT_MAX_PASSES
from fonts import DEFAULT_FONT_NAME, resolve_font_name
from label_generation import render
from label_templates import get_template, list_templates
from label_types import LabelContent, LabelStyle
from log_utils import get_logger

logger = get_logger(__name__)


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise SystemExit(f"Environment variable {name}={raw!r} is not a number.") from exc


def _parse_template_options(option_pairs: Sequence[str]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for pair in option_pairs:
        if "=" not in pair:
            raise SystemExit(
                f"Invalid --template-option '{pair}'. Expected format NAME=VALUE."
            )
        key, value = pair.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if not key:
            raise SystemExit("Template option name cannot be empty.")
        parsed[key] = value
    return parsed


def parse_label_line(line: str) -> Optional[LabelContent]:
    """Parse ``text<TAB>url<TAB>caption``; blank and ``#`` lines yield ``None``."""

    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    parts = [part.strip() for part in line.rstrip("\r\n").split("\t")]
    text = parts[0].replace("\\n", "\n")
    url = parts[1] if len(parts) > 1 else ""
    caption = parts[2] if len(parts) > 2 else ""
    if not text:
        return None
    return LabelContent(text=text, url=url, caption=caption)


def collect_label_contents(
    texts: Sequence[str],
    input_path: Optional[str],
    template_options: Optional[Dict[str, str]] = None,
) -> List[LabelContent]:
    """Build label payloads from positional texts and an optional input file."""

    sources: List[LabelContent] = [
        LabelContent(text=text.replace("\\n", "\n"))
        for text in texts
        if text.strip()
    ]
    if input_path:
        path = Path(input_path)
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise SystemExit(f"Cannot read label file '{path}': {exc}") from exc
        for line in lines:
            content = parse_label_line(line)
            if content is not None:
                sources.append(content)

    options = template_options or None
    return [
        LabelContent(
            text=content.text,
            caption=content.caption,
            url=content.url,
            template_options=dict(options) if options else None,
        )
        for content in sources
    ]


def build_style(args: argparse.Namespace) -> LabelStyle:
    try:
        font_name = resolve_font_name(args.font)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if args.max_passes < 1:
        raise SystemExit("--max-passes must be at least 1.")
    return LabelStyle(
        font_name=font_name,
        font_size=args.font_size,
        min_font_size=args.min_font_size,
        max_font_size=args.max_font_size,
        max_passes=args.max_passes,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render labels whose text shrinks or grows to fit the label."
    )
    parser.add_argument(
        "texts",
        nargs="*",
        help="Label texts (use \\n for an explicit line break).",
    )
    parser.add_argument(
        "-i", "--input",
        help="File with one label per line: TEXT[<TAB>URL[<TAB>CAPTION]].",
    )
    parser.add_argument("-o", "--output")
    parser.add_argument(
        "-s", "--skip",
        type=int,
        default=0,
        help="Number of labels to skip at start of first sheet",
    )
    parser.add_argument(
        "-t", "--template",
        default=os.getenv("AUTOSIZE_TEMPLATE", "avery5163"),
        help=(
            "Label template identifier (defaults to AUTOSIZE_TEMPLATE or "
            f"avery5163). Available: {', '.join(list_templates())}."
        ),
    )
    parser.add_argument(
        "-d", "--draw-outline",
        action="store_true",
        help="Draw outline around every label",
    )
    parser.add_argument(
        "--template-option",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help=(
            "Provide template customization option (repeatable). For example: "
            "--template-option orientation=vertical"
        ),
    )
    parser.add_argument(
        "--font",
        default=os.getenv("AUTOSIZE_FONT", DEFAULT_FONT_NAME),
        help="Standard PDF font name or path to a .ttf/.otf file (AUTOSIZE_FONT).",
    )
    parser.add_argument(
        "--font-size",
        type=float,
        default=_env_float("AUTOSIZE_FONT_SIZE"),
        help="Starting font size; text never grows past it (AUTOSIZE_FONT_SIZE).",
    )
    parser.add_argument(
        "--min-font-size",
        type=float,
        default=_env_float("AUTOSIZE_MIN_FONT_SIZE"),
        help="Smallest font size text may shrink to (AUTOSIZE_MIN_FONT_SIZE).",
    )
    parser.add_argument(
        "--max-font-size",
        type=float,
        default=_env_float("AUTOSIZE_MAX_FONT_SIZE"),
        help="Largest font size text may grow to (AUTOSIZE_MAX_FONT_SIZE).",
    )
    parser.add_argument(
        "--max-passes",
        type=int,
        default=int(os.getenv("AUTOSIZE_MAX_PASSES", DEFAULT_MAX_PASSES)),
        help=f"Layout passes per text before giving up (default: {DEFAULT_MAX_PASSES}).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for rendering auto-sized labels."""

    args = build_parser().parse_args(argv)

    template_options = _parse_template_options(args.template_option)
    labels = collect_label_contents(args.texts, args.input, template_options)
    if not labels:
        raise SystemExit("No label texts given; pass TEXT arguments or --input FILE.")

    style = build_style(args)
    template = get_template(args.template, style)
    logger.debug("Rendering %d labels with template %s", len(labels), args.template)

    try:
        message = render(
            args.output,
            template,
            labels,
            args.skip,
            args.draw_outline,
        )
    except ValueError as exc:
        raise SystemExit(f"Cannot render labels: {exc}") from exc

    print(message)
    return 0


def run() -> int:
    load_dotenv()
    return main()


if __name__ == "__main__":
    raise SystemExit(run())
