"""Value types shared by the font-size fitting loop."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

# Multiplicative steps applied per layout pass.
GROWTH_FACTOR = 1.1
SHRINK_FACTOR = 0.9

# Shrinking never goes below this rendered size, even without a minimum.
MIN_FONT_SIZE_FLOOR = 0.5


class BoundMode(StrEnum):
    ABSOLUTE = "absolute"
    LOGICAL = "logical"


def _check_size(name: str, value: float | None) -> None:
    if value is None:
        return
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive number, got {value!r}")


@dataclass(frozen=True)
class FitConfig:
    """Immutable sizing bounds for one label.

    ``base_font_size`` is the starting size; ``None`` means the ambient
    default is used. When ``base_is_specified`` is set the base came from
    the caller (explicitly or through an inherited style) and growth never
    goes past it.

    With ``BoundMode.LOGICAL`` the min/max bounds are scale-independent
    sizes and are compared against the rendered size divided by
    ``font_scale``.
    """

    base_font_size: float | None = None
    min_font_size: float | None = None
    max_font_size: float | None = None
    base_is_specified: bool = False
    bound_mode: BoundMode = BoundMode.ABSOLUTE
    font_scale: float = 1.0

    def __post_init__(self) -> None:
        _check_size("base_font_size", self.base_font_size)
        _check_size("min_font_size", self.min_font_size)
        _check_size("max_font_size", self.max_font_size)
        _check_size("font_scale", self.font_scale)
        if self.base_is_specified and self.base_font_size is None:
            raise ValueError("base_is_specified requires a base_font_size")
        if (
            self.min_font_size is not None
            and self.max_font_size is not None
            and self.min_font_size > self.max_font_size
        ):
            raise ValueError(
                f"min_font_size ({self.min_font_size}) is greater than "
                f"max_font_size ({self.max_font_size})"
            )

    @property
    def specified_font_size(self) -> float | None:
        """Return the size growth must not exceed, if the caller set one."""

        return self.base_font_size if self.base_is_specified else None

    @classmethod
    def logical(
        cls,
        scale_down_until: float | None = None,
        scale_up_until: float | None = None,
        font_scale: float = 1.0,
        base_font_size: float | None = None,
        base_is_specified: bool = False,
    ) -> FitConfig:
        """Build a config whose bounds are expressed as logical sizes."""

        return cls(
            base_font_size=base_font_size,
            min_font_size=scale_down_until,
            max_font_size=scale_up_until,
            base_is_specified=base_is_specified,
            bound_mode=BoundMode.LOGICAL,
            font_scale=font_scale,
        )


@dataclass(frozen=True)
class MeasurementOutcome:
    """Result of laying out the text once at the current size."""

    overflowed: bool
    box_width: float
    intrinsic_width: float | None = None


@dataclass
class FitState:
    current_font_size: float

    @classmethod
    def initial(cls, config: FitConfig, ambient_font_size: float) -> FitState:
        if config.base_font_size is not None:
            return cls(config.base_font_size)
        _check_size("ambient_font_size", ambient_font_size)
        return cls(ambient_font_size)


__all__ = [
    "BoundMode",
    "FitConfig",
    "FitState",
    "GROWTH_FACTOR",
    "MIN_FONT_SIZE_FLOOR",
    "MeasurementOutcome",
    "SHRINK_FACTOR",
]
