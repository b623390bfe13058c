"""Pan/zoom transform state driven by wheel and pointer events."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from blueprint.config import ViewportConfig
from blueprint.viewport.size import ViewportSize

LOGGER = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Transform:
    """Maps world coordinates to screen coordinates: ``screen = world * k + (x, y)``."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Point) -> Point:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def to_svg(self) -> str:
        return f"translate({self.x:.2f},{self.y:.2f}) scale({self.k:.4f})"


IDENTITY = Transform()


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class ViewportController:
    """Own the :class:`Transform` of one mounted view.

    Each handler reads the current transform and swaps in a complete
    replacement value; readers never observe a half-updated transform.
    """

    def __init__(self, config: ViewportConfig | None = None, *, size: ViewportSize | None = None) -> None:
        self._config = config or ViewportConfig()
        self._transform = IDENTITY
        self._size = size or ViewportSize(self._config.default_width, self._config.default_height)
        self._drag_origin: Optional[Point] = None

    @property
    def transform(self) -> Transform:
        return self._transform

    @property
    def size(self) -> ViewportSize:
        return self._size

    @property
    def is_panning(self) -> bool:
        return self._drag_origin is not None

    def wheel(self, offset_x: float, offset_y: float, delta: float) -> Transform:
        """Zoom around the cursor.

        Scrolling down (positive ``delta``) zooms out, anything else zooms in.
        The world point under ``(offset_x, offset_y)`` stays under the cursor.

        Args:
            offset_x: Cursor x relative to the viewport.
            offset_y: Cursor y relative to the viewport.
            delta: Wheel delta; only its sign matters.

        Returns:
            Transform: The new transform.
        """

        current = self._transform
        factor = self._config.zoom_out_factor if delta > 0 else self._config.zoom_in_factor
        new_k = clamp(current.k * factor, self._config.min_zoom, self._config.max_zoom)
        scale = new_k / current.k
        self._transform = Transform(
            k=new_k,
            x=offset_x - (offset_x - current.x) * scale,
            y=offset_y - (offset_y - current.y) * scale,
        )
        return self._transform

    def pointer_down(self, x: float, y: float) -> None:
        self._drag_origin = (x, y)

    def pointer_move(self, x: float, y: float) -> Transform:
        """Pan by the pointer movement since the previous event while held."""

        if self._drag_origin is None:
            return self._transform
        last_x, last_y = self._drag_origin
        self._drag_origin = (x, y)
        self._transform = replace(
            self._transform,
            x=self._transform.x + (x - last_x),
            y=self._transform.y + (y - last_y),
        )
        return self._transform

    def pointer_up(self) -> None:
        self._drag_origin = None

    def resize(self, size: ViewportSize) -> bool:
        """Record a new container size.

        The transform is left untouched. Returns ``True`` when the size
        differs from the previous one, meaning the layout must be recomputed.
        """

        if size == self._size:
            return False
        LOGGER.debug(
            "Viewport resized from %sx%s to %sx%s",
            self._size.width,
            self._size.height,
            size.width,
            size.height,
        )
        self._size = size
        return True
