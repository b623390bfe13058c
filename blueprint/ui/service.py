"""Assemble renderer-ready scenes from graph snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from blueprint.config import AppConfig
from blueprint.graph.model import EdgeLike, NodeLike, NormalizedGraph, normalize_graph
from blueprint.interaction.state import HoverTarget, InteractionState, describe_hover
from blueprint.layout.engine import LayoutEngine, LayoutParameters, Position
from blueprint.layout.geometry import EdgeCurve, EdgeGeometry, EdgeGeometryBuilder
from blueprint.viewport.controller import IDENTITY, Transform
from blueprint.viewport.size import DEFAULT_HEIGHT, DEFAULT_WIDTH, ViewportSize, resolve_viewport_size

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneNode:
    """Positioned node payload for the renderer."""

    id: str
    label: str
    group: Optional[str]
    x: float
    y: float
    highlighted: bool


@dataclass(frozen=True)
class SceneEdge:
    """Curved edge payload for the renderer."""

    index: int
    source: str
    target: str
    label: Optional[str]
    style: str
    curve: EdgeCurve
    highlighted: bool


@dataclass(frozen=True)
class GraphScene:
    """Everything a renderer needs for one frame."""

    nodes: Tuple[SceneNode, ...]
    edges: Tuple[SceneEdge, ...]
    transform: Transform
    hover: HoverTarget
    viewport: ViewportSize

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def to_dict(self) -> Dict[str, object]:
        """Serialise the scene into JSON-compatible primitives."""

        return {
            "empty": self.is_empty,
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "transform": {"k": self.transform.k, "x": self.transform.x, "y": self.transform.y},
            "hover": describe_hover(self.hover),
            "nodes": [
                {
                    "id": node.id,
                    "label": node.label,
                    "group": node.group,
                    "x": node.x,
                    "y": node.y,
                    "highlighted": node.highlighted,
                }
                for node in self.nodes
            ],
            "edges": [
                {
                    "index": edge.index,
                    "source": edge.source,
                    "target": edge.target,
                    "label": edge.label,
                    "style": edge.style,
                    "highlighted": edge.highlighted,
                    "curve": {
                        "path": edge.curve.path,
                        "start": _point(edge.curve.start),
                        "control": _point(edge.curve.control),
                        "end": _point(edge.curve.end),
                        "label_anchor": _point(edge.curve.label_anchor),
                        "marker": edge.curve.marker,
                        "dash_pattern": edge.curve.dash_pattern,
                    },
                }
                for edge in self.edges
            ],
        }


def _point(position: Position) -> Dict[str, float]:
    return {"x": position.x, "y": position.y}


@dataclass(frozen=True)
class PreparedLayout:
    """Layout output for a snapshot at a given viewport size.

    Positions are immutable once computed; hover and transform changes reuse
    them and only a new snapshot or a new size produces a new instance.
    """

    graph: NormalizedGraph
    viewport: ViewportSize
    positions: Mapping[str, Position] = field(default_factory=dict)
    geometries: Tuple[EdgeGeometry, ...] = ()


class GraphSceneService:
    """Run normalisation, layout and edge geometry, then apply view state."""

    def __init__(
        self,
        layout_engine: LayoutEngine | None = None,
        geometry_builder: EdgeGeometryBuilder | None = None,
        *,
        default_size: ViewportSize | None = None,
    ) -> None:
        self._layout_engine = layout_engine or LayoutEngine()
        self._geometry_builder = geometry_builder or EdgeGeometryBuilder()
        self._default_size = default_size or ViewportSize(DEFAULT_WIDTH, DEFAULT_HEIGHT)

    @classmethod
    def from_config(cls, config: AppConfig) -> "GraphSceneService":
        return cls(
            LayoutEngine(LayoutParameters.from_config(config.layout)),
            EdgeGeometryBuilder(bend=config.edges.bend, dash_pattern=config.edges.dash_pattern),
            default_size=ViewportSize(config.viewport.default_width, config.viewport.default_height),
        )

    @property
    def default_size(self) -> ViewportSize:
        return self._default_size

    def resolve_size(self, width: object, height: object) -> ViewportSize:
        return resolve_viewport_size(
            width,
            height,
            default_width=self._default_size.width,
            default_height=self._default_size.height,
        )

    def prepare(self, graph: NormalizedGraph, viewport: ViewportSize) -> PreparedLayout:
        """Lay out ``graph`` and build its edge curves.

        The "no data" snapshot short-circuits without touching the layout
        engine or the geometry builder.
        """

        if graph.is_empty:
            return PreparedLayout(graph=graph, viewport=viewport)
        positions = self._layout_engine.layout(graph, viewport)
        geometries = self._geometry_builder.build(graph.edges, positions)
        return PreparedLayout(
            graph=graph,
            viewport=viewport,
            positions=positions,
            geometries=tuple(geometries),
        )

    def compose(
        self,
        prepared: PreparedLayout,
        *,
        transform: Transform = IDENTITY,
        interaction: InteractionState | None = None,
    ) -> GraphScene:
        """Combine a prepared layout with the current transform and hover."""

        state = interaction or InteractionState()
        nodes: List[SceneNode] = []
        for node in prepared.graph.nodes:
            position = prepared.positions[node.id]
            nodes.append(
                SceneNode(
                    id=node.id,
                    label=node.label,
                    group=node.group,
                    x=position.x,
                    y=position.y,
                    highlighted=state.is_node_highlighted(node.id),
                )
            )
        edges = [
            SceneEdge(
                index=geometry.index,
                source=geometry.edge.source,
                target=geometry.edge.target,
                label=geometry.edge.label,
                style=geometry.edge.style,
                curve=geometry.curve,
                highlighted=state.is_edge_highlighted(geometry.index, geometry.edge),
            )
            for geometry in prepared.geometries
        ]
        return GraphScene(
            nodes=tuple(nodes),
            edges=tuple(edges),
            transform=transform,
            hover=state.hover,
            viewport=prepared.viewport,
        )

    def build_scene(
        self,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike],
        *,
        width: object = None,
        height: object = None,
    ) -> GraphScene:
        """One-shot scene for a snapshot with the identity transform and no hover."""

        graph = normalize_graph(nodes, edges)
        prepared = self.prepare(graph, self.resolve_size(width, height))
        if graph.is_empty:
            LOGGER.info("Graph snapshot has no nodes; returning empty scene")
        return self.compose(prepared)

