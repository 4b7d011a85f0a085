"""Step-wise font size fitting driven by layout measurements."""

from __future__ import annotations

from fit_types import (
    GROWTH_FACTOR,
    MIN_FONT_SIZE_FLOOR,
    SHRINK_FACTOR,
    BoundMode,
    FitConfig,
    FitState,
    MeasurementOutcome,
)
from fonts import DEFAULT_FONT_SIZE
from log_utils import get_logger

logger = get_logger(__name__)


class AbsoluteBounds:
    """Compare min/max bounds directly against the rendered size."""

    def to_bound_units(self, size: float) -> float:
        return size

    def to_rendered(self, bound: float) -> float:
        return bound


class ScaledBounds:
    """Compare logical bounds against the rendered size divided by ``scale``."""

    def __init__(self, scale: float) -> None:
        self.scale = scale

    def to_bound_units(self, size: float) -> float:
        return size / self.scale

    def to_rendered(self, bound: float) -> float:
        return bound * self.scale


def bounds_for(config: FitConfig) -> AbsoluteBounds | ScaledBounds:
    if config.bound_mode is BoundMode.LOGICAL:
        return ScaledBounds(config.font_scale)
    return AbsoluteBounds()


def _min_rendered(config: FitConfig) -> float | None:
    if config.min_font_size is None:
        return None
    return bounds_for(config).to_rendered(config.min_font_size)


def _into_bounds(current: float, config: FitConfig) -> float | None:
    """Return the nearest configured bound when ``current`` lies outside them."""

    bounds = bounds_for(config)
    size = bounds.to_bound_units(current)
    if config.min_font_size is not None and size < config.min_font_size:
        return bounds.to_rendered(config.min_font_size)
    if config.max_font_size is not None and size > config.max_font_size:
        return bounds.to_rendered(config.max_font_size)
    return None


def _specified_ceiling(config: FitConfig) -> float | None:
    # A configured minimum above the specified size takes precedence.
    specified = config.specified_font_size
    minimum = _min_rendered(config)
    if specified is None or minimum is None:
        return specified
    return max(specified, minimum)


def _shrunk(current: float, config: FitConfig) -> float:
    bounds = bounds_for(config)
    floor = MIN_FONT_SIZE_FLOOR
    if config.min_font_size is not None:
        if bounds.to_bound_units(current) <= config.min_font_size:
            return current
        floor = max(floor, bounds.to_rendered(config.min_font_size))
    if current <= floor:
        return current
    return max(current * SHRINK_FACTOR, floor)


def _grown(current: float, config: FitConfig) -> float:
    specified = _specified_ceiling(config)
    if specified is not None and current > specified:
        return specified

    bounds = bounds_for(config)
    ceilings: list[float] = []
    if specified is not None:
        ceilings.append(specified)
    if config.max_font_size is not None:
        if bounds.to_bound_units(current) >= config.max_font_size:
            return current
        ceilings.append(bounds.to_rendered(config.max_font_size))

    candidate = current * GROWTH_FACTOR
    if not ceilings:
        return candidate
    ceiling = min(ceilings)
    if current >= ceiling:
        return current
    return min(candidate, ceiling)


def next_size(
    outcome: MeasurementOutcome,
    state: FitState,
    config: FitConfig,
) -> float:
    """Return the font size to render next after ``outcome``.

    Overflow shrinks by ``SHRINK_FACTOR`` until the floor is reached. A fit
    grows by ``GROWTH_FACTOR`` until the smaller of the specified size and
    ``max_font_size``. A step is clamped so it never crosses a bound, and a
    size equal to a bound counts as already at that bound. A size that
    starts outside ``[min_font_size, max_font_size]`` is first moved onto
    the nearest bound.

    An overflow whose ``intrinsic_width`` fits inside ``box_width`` is
    treated as a stale measurement and leaves the size unchanged.
    """

    current = state.current_font_size
    corrected = _into_bounds(current, config)
    if corrected is not None:
        return corrected
    if outcome.overflowed:
        if (
            outcome.intrinsic_width is not None
            and outcome.intrinsic_width <= outcome.box_width
        ):
            return current
        return _shrunk(current, config)
    return _grown(current, config)


class FitSizeController:
    """Owns the current font size of one label and advances it per pass."""

    def __init__(
        self,
        config: FitConfig,
        ambient_font_size: float = DEFAULT_FONT_SIZE,
    ) -> None:
        self.config = config
        self.ambient_font_size = ambient_font_size
        self.state = FitState.initial(config, ambient_font_size)

    @property
    def current_font_size(self) -> float:
        return self.state.current_font_size

    def step(self, outcome: MeasurementOutcome) -> bool:
        """Apply one decision for ``outcome``; return whether the size changed."""

        previous = self.state.current_font_size
        updated = next_size(outcome, self.state, self.config)
        self.state.current_font_size = updated
        changed = updated != previous
        logger.debug(
            "font size %.3f -> %.3f (overflowed=%s, intrinsic=%s, box=%.3f)",
            previous,
            updated,
            outcome.overflowed,
            outcome.intrinsic_width,
            outcome.box_width,
        )
        return changed

    def reset(self) -> None:
        self.state = FitState.initial(self.config, self.ambient_font_size)


__all__ = [
    "AbsoluteBounds",
    "FitSizeController",
    "ScaledBounds",
    "bounds_for",
    "next_size",
]
