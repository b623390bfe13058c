"""SVG export for graph scenes."""

from blueprint.export.svg import render_scene_svg

__all__ = ["render_scene_svg"]
