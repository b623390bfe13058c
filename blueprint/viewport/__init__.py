"""Viewport sizing and pan/zoom state."""

from .controller import IDENTITY, Transform, ViewportController
from .size import ViewportSize, resolve_viewport_size

__all__ = ["IDENTITY", "Transform", "ViewportController", "ViewportSize", "resolve_viewport_size"]
