"""Force-directed layout and edge geometry."""

from blueprint.layout.engine import LayoutEngine, LayoutParameters, Position
from blueprint.layout.geometry import EdgeCurve, EdgeGeometry, EdgeGeometryBuilder, build_path

__all__ = [
    "EdgeCurve",
    "EdgeGeometry",
    "EdgeGeometryBuilder",
    "LayoutEngine",
    "LayoutParameters",
    "Position",
    "build_path",
]
