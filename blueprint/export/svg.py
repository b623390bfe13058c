"""Render graph scenes as standalone SVG documents."""

from __future__ import annotations

import html
from typing import Dict, Final, List, Optional, Sequence

from blueprint.ui.service import GraphScene, SceneEdge, SceneNode

EMPTY_MESSAGE: Final[str] = "No data to visualize"

NODE_FILL: Final[str] = "#38bdf8"
NODE_HALO: Final[str] = "#0ea5e9"
NODE_TEXT: Final[str] = "#ffffff"
SOLID_STROKE: Final[str] = "#93c5fd"
DASHED_STROKE: Final[str] = "#60a5fa"
HIGHLIGHT_STROKE: Final[str] = "#f8fafc"
LABEL_FILL: Final[str] = "#bfdbfe"
GROUP_PALETTE: Final[Sequence[str]] = (
    "#38bdf8",
    "#34d399",
    "#f59e0b",
    "#a78bfa",
    "#f472b6",
    "#facc15",
)


def _attr(value: object) -> str:
    return html.escape(str(value), quote=True)


def _num(value: float) -> str:
    return f"{value:.2f}"


def group_colors(nodes: Sequence[SceneNode]) -> Dict[str, str]:
    """Assign palette colours to groups in order of first appearance."""

    colors: Dict[str, str] = {}
    for node in nodes:
        if node.group is None or node.group in colors:
            continue
        colors[node.group] = GROUP_PALETTE[len(colors) % len(GROUP_PALETTE)]
    return colors


def _marker_defs(node_radius: float) -> str:
    ref_x = _num(10.0 + node_radius + 4.0)
    markers = []
    for marker_id, fill in (("arrow-solid", SOLID_STROKE), ("arrow-dashed", DASHED_STROKE)):
        markers.append(
            f'<marker id="{marker_id}" viewBox="0 0 10 10" refX="{ref_x}" refY="5" '
            'markerUnits="userSpaceOnUse" markerWidth="10" markerHeight="10" orient="auto">'
            f'<path d="M 0 0 L 10 5 L 0 10 z" fill="{fill}" /></marker>'
        )
    return "<defs>" + "".join(markers) + "</defs>"


def _render_edge(edge: SceneEdge) -> str:
    dashed = edge.style == "dashed"
    stroke = HIGHLIGHT_STROKE if edge.highlighted else (DASHED_STROKE if dashed else SOLID_STROKE)
    width = "3" if edge.highlighted else "2"
    dash = f' stroke-dasharray="{_attr(edge.curve.dash_pattern)}"' if edge.curve.dash_pattern else ""
    parts: List[str] = [
        f'<g class="edge{" highlighted" if edge.highlighted else ""}" data-index="{edge.index}">',
        f'<path d="{edge.curve.path}" fill="none" stroke="{stroke}" stroke-width="{width}"'
        f'{dash} marker-end="url(#{edge.curve.marker})" />',
    ]
    if edge.label:
        anchor = edge.curve.label_anchor
        parts.append(
            f'<text x="{_num(anchor.x)}" y="{_num(anchor.y)}" dy="-6" text-anchor="middle" '
            f'font-size="12" fill="{LABEL_FILL}">{html.escape(edge.label)}</text>'
        )
    parts.append("</g>")
    return "".join(parts)


def _render_node(node: SceneNode, radius: float, fill: str) -> str:
    x, y = _num(node.x), _num(node.y)
    stroke = f' stroke="{HIGHLIGHT_STROKE}" stroke-width="3"' if node.highlighted else ""
    return (
        f'<g class="node{" highlighted" if node.highlighted else ""}" data-id="{_attr(node.id)}">'
        f'<circle cx="{x}" cy="{y}" r="{_num(radius + 4.0)}" fill="{NODE_HALO}" opacity="0.2" />'
        f'<circle cx="{x}" cy="{y}" r="{_num(radius + 2.0)}" fill="{NODE_HALO}" opacity="0.35" />'
        f'<circle cx="{x}" cy="{y}" r="{_num(radius)}" fill="{fill}"{stroke} />'
        f'<text x="{x}" y="{y}" text-anchor="middle" dominant-baseline="middle" font-size="14" '
        f'font-weight="600" fill="{NODE_TEXT}">{html.escape(node.label)}</text>'
        "</g>"
    )


def render_scene_svg(scene: GraphScene, *, node_radius: float = 24.0, title: Optional[str] = None) -> str:
    """Render ``scene`` as an SVG document.

    Edges are drawn before nodes so node discs cover the curve ends. The
    scene transform is applied to a single group wrapping both layers.

    Args:
        scene: Scene produced by :class:`~blueprint.ui.service.GraphSceneService`.
        node_radius: Radius of the inner node disc in pixels.
        title: Optional accessible title.

    Returns:
        str: SVG markup.
    """

    width = _num(scene.viewport.width)
    height = _num(scene.viewport.height)
    header = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    )
    title_markup = f"<title>{html.escape(title)}</title>" if title else ""
    if scene.is_empty:
        return (
            f"{header}{title_markup}"
            f'<text x="{_num(scene.viewport.width / 2.0)}" y="{_num(scene.viewport.height / 2.0)}" '
            f'text-anchor="middle" font-size="14" fill="{LABEL_FILL}">{EMPTY_MESSAGE}</text>'
            "</svg>"
        )

    colors = group_colors(scene.nodes)
    edges_markup = "".join(_render_edge(edge) for edge in scene.edges)
    nodes_markup = "".join(
        _render_node(node, node_radius, colors.get(node.group or "", NODE_FILL)) for node in scene.nodes
    )
    return (
        f"{header}{title_markup}{_marker_defs(node_radius)}"
        f'<g class="viewport" transform="{scene.transform.to_svg()}">'
        f'<g class="edges">{edges_markup}</g>'
        f'<g class="nodes">{nodes_markup}</g>'
        "</g></svg>"
    )
