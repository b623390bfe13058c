"""Validation and normalisation of graph snapshots."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from blueprint.contracts import EdgeInput, EdgeStyle, NodeInput

LOGGER = logging.getLogger(__name__)

NodeLike = Union[NodeInput, Mapping[str, object]]
EdgeLike = Union[EdgeInput, Mapping[str, object]]


@dataclass(frozen=True)
class Node:
    """Company entity in a normalised snapshot."""

    id: str
    label: str
    group: Optional[str] = None


@dataclass(frozen=True)
class Edge:
    """Relation whose endpoints are known to exist in the snapshot."""

    source: str
    target: str
    label: Optional[str] = None
    style: EdgeStyle = "solid"

    @property
    def is_dashed(self) -> bool:
        return self.style == "dashed"

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


@dataclass(frozen=True)
class NormalizedGraph:
    """Snapshot with unique node ids and only valid edges.

    ``is_empty`` is the explicit "no data" state: the renderer shows a
    placeholder and no layout is computed.
    """

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    dropped_edges: int = 0
    duplicate_nodes: int = 0
    _index: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def index_of(self, node_id: str) -> Optional[int]:
        """Return the position of ``node_id`` in :attr:`nodes` or ``None``."""

        return self._index.get(node_id)

    def node(self, node_id: str) -> Optional[Node]:
        index = self._index.get(node_id)
        if index is None:
            return None
        return self.nodes[index]


def _coerce_node(raw: NodeLike) -> NodeInput:
    if isinstance(raw, NodeInput):
        return raw
    return NodeInput.model_validate(raw)


def _coerce_edge(raw: EdgeLike) -> EdgeInput:
    if isinstance(raw, EdgeInput):
        return raw
    return EdgeInput.model_validate(raw)


def normalize_graph(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> NormalizedGraph:
    """Normalise raw node and edge lists into a :class:`NormalizedGraph`.

    Node and edge order are preserved; the node order seeds the initial layout
    and the edge order fixes both force accumulation and drawing order.

    Args:
        nodes: Parsed nodes. The first occurrence of an id wins, later
            duplicates are ignored.
        edges: Parsed edges. Edges with a missing, empty or unknown
            endpoint are dropped without raising.

    Returns:
        NormalizedGraph: Snapshot ready for layout and geometry.

    Raises:
        pydantic.ValidationError: If an element does not match the input
            contract (for example a node without ``id``).
    """

    valid_nodes: List[Node] = []
    index: Dict[str, int] = {}
    duplicates = 0
    for raw_node in nodes:
        node = _coerce_node(raw_node)
        if node.id in index:
            duplicates += 1
            continue
        index[node.id] = len(valid_nodes)
        valid_nodes.append(Node(id=node.id, label=node.display_label, group=node.group))

    valid_edges: List[Edge] = []
    dropped = 0
    for raw_edge in edges:
        edge = _coerce_edge(raw_edge)
        if edge.source not in index or edge.target not in index:
            dropped += 1
            continue
        valid_edges.append(Edge(source=edge.source, target=edge.target, label=edge.label, style=edge.style))

    if duplicates or dropped:
        LOGGER.debug(
            "Normalised graph snapshot (nodes=%d, edges=%d, duplicate_nodes=%d, dropped_edges=%d)",
            len(valid_nodes),
            len(valid_edges),
            duplicates,
            dropped,
        )
    return NormalizedGraph(
        nodes=tuple(valid_nodes),
        edges=tuple(valid_edges),
        dropped_edges=dropped,
        duplicate_nodes=duplicates,
        _index=index,
    )


EMPTY_GRAPH = NormalizedGraph(nodes=(), edges=())
