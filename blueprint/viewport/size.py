"""Viewport dimensions with a fallback for failed measurements."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 560.0


@dataclass(frozen=True)
class ViewportSize:
    """Width and height of the drawing surface in pixels."""

    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)


def _as_dimension(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0.0:
        return None
    return number


def resolve_viewport_size(
    width: object,
    height: object,
    *,
    default_width: float = DEFAULT_WIDTH,
    default_height: float = DEFAULT_HEIGHT,
) -> ViewportSize:
    """Build a :class:`ViewportSize` from a possibly failed measurement.

    Missing, non-numeric, non-finite or non-positive dimensions are replaced
    by the defaults so layout can always proceed.

    Args:
        width: Measured container width.
        height: Measured container height.
        default_width: Fallback width.
        default_height: Fallback height.

    Returns:
        ViewportSize: Usable viewport dimensions.
    """

    resolved_width = _as_dimension(width)
    resolved_height = _as_dimension(height)
    if resolved_width is None or resolved_height is None:
        LOGGER.warning(
            "Viewport measurement unavailable (width=%r, height=%r); using %sx%s",
            width,
            height,
            default_width,
            default_height,
        )
        return ViewportSize(width=default_width, height=default_height)
    return ViewportSize(width=resolved_width, height=resolved_height)
