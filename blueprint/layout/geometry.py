"""Curved edge geometry derived from node positions."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from blueprint.graph.model import Edge
from blueprint.layout.engine import Position

LOGGER = logging.getLogger(__name__)

DEFAULT_BEND = 30.0
NORMAL_EPSILON = 1e-9
SOLID_MARKER = "arrow-solid"
DASHED_MARKER = "arrow-dashed"


@dataclass(frozen=True)
class EdgeCurve:
    """Quadratic Bezier from ``start`` through ``control`` to ``end``."""

    start: Position
    control: Position
    end: Position
    label_anchor: Position
    marker: str
    dash_pattern: Optional[str] = None

    @property
    def path(self) -> str:
        """SVG path data for the curve."""

        return (
            f"M {_fmt(self.start.x)} {_fmt(self.start.y)} "
            f"Q {_fmt(self.control.x)} {_fmt(self.control.y)} "
            f"{_fmt(self.end.x)} {_fmt(self.end.y)}"
        )

    def point_at(self, t: float) -> Position:
        """Evaluate the curve at parameter ``t`` in ``[0, 1]``."""

        u = 1.0 - t
        return Position(
            x=u * u * self.start.x + 2.0 * u * t * self.control.x + t * t * self.end.x,
            y=u * u * self.start.y + 2.0 * u * t * self.control.y + t * t * self.end.y,
        )


@dataclass(frozen=True)
class EdgeGeometry:
    """Curve for the edge at ``index`` of the normalised edge list."""

    index: int
    edge: Edge
    curve: EdgeCurve


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def build_path(
    source: Position,
    target: Position,
    bend: float = DEFAULT_BEND,
    *,
    dashed: bool = False,
    dash_pattern: str = "6 6",
) -> EdgeCurve:
    """Build a curved path between two node positions.

    The control point sits ``bend`` pixels from the chord midpoint along the
    chord normal ``(dy, -dx)``, so opposite edges between the same pair bow
    to opposite sides.

    Args:
        source: Start position.
        target: End position.
        bend: Offset of the control point from the midpoint.
        dashed: Whether the edge is drawn dashed.
        dash_pattern: Stroke dash pattern used for dashed edges.

    Returns:
        EdgeCurve: Curve, label anchor and end marker for the edge.
    """

    mid_x = (source.x + target.x) / 2.0
    mid_y = (source.y + target.y) / 2.0
    normal_x = target.y - source.y
    normal_y = -(target.x - source.x)
    length = max(math.hypot(normal_x, normal_y), NORMAL_EPSILON)
    control = Position(x=mid_x + normal_x / length * bend, y=mid_y + normal_y / length * bend)
    label_anchor = Position(
        x=0.25 * source.x + 0.5 * control.x + 0.25 * target.x,
        y=0.25 * source.y + 0.5 * control.y + 0.25 * target.y,
    )
    return EdgeCurve(
        start=source,
        control=control,
        end=target,
        label_anchor=label_anchor,
        marker=DASHED_MARKER if dashed else SOLID_MARKER,
        dash_pattern=dash_pattern if dashed else None,
    )


class EdgeGeometryBuilder:
    """Build curves for a list of edges given the current node positions."""

    def __init__(self, *, bend: float = DEFAULT_BEND, dash_pattern: str = "6 6") -> None:
        self._bend = bend
        self._dash_pattern = dash_pattern

    @property
    def bend(self) -> float:
        return self._bend

    def build(self, edges: Sequence[Edge], positions: Mapping[str, Position]) -> List[EdgeGeometry]:
        """Return a curve per edge whose endpoints both have a position.

        Edges with a missing endpoint are skipped rather than drawn as a
        degenerate curve; the returned ``index`` always refers to ``edges``.
        """

        geometries: List[EdgeGeometry] = []
        skipped = 0
        for index, edge in enumerate(edges):
            source = positions.get(edge.source)
            target = positions.get(edge.target)
            if source is None or target is None:
                skipped += 1
                continue
            curve = build_path(
                source,
                target,
                self._bend,
                dashed=edge.is_dashed,
                dash_pattern=self._dash_pattern,
            )
            geometries.append(EdgeGeometry(index=index, edge=edge, curve=curve))
        if skipped:
            LOGGER.debug("Skipped %d edge(s) without positioned endpoints", skipped)
        return geometries
