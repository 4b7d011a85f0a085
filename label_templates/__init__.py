"""Template loader for auto-sized label generators."""

from __future__ import annotations

from typing import Iterable
from importlib import import_module

from label_types import LabelStyle
from .base import LabelTemplate

_TEMPLATE_NAMES = {"avery5163", "ptouch"}


def get_template(
    name: str,
    style: LabelStyle | None = None,
) -> LabelTemplate:
    """Instantiate the template implementation for ``name``."""

    key = name.lower()
    if key not in _TEMPLATE_NAMES:
        available = ", ".join(sorted(_TEMPLATE_NAMES))
        raise SystemExit(
            f"Unknown template '{name}'. Available templates: {available}"
        )

    module = import_module(f"{__name__}.{key}")

    template_cls: type[LabelTemplate] | None = getattr(
        module,
        "Template",
        None,
    )
    if not template_cls or not issubclass(template_cls, LabelTemplate):
        raise SystemExit(
            f"Template '{name}' does not export a valid Template class"
        )

    return template_cls(style)


def list_templates() -> Iterable[str]:
    """Return the template identifiers."""

    return sorted(_TEMPLATE_NAMES)
