"""Hover tracking and highlight rules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from blueprint.graph.model import Edge


@dataclass(frozen=True)
class NodeHover:
    """Pointer is over the node with ``node_id``."""

    node_id: str


@dataclass(frozen=True)
class EdgeHover:
    """Pointer is over the edge at ``index`` of the normalised edge list."""

    index: int


HoverTarget = Optional[Union[NodeHover, EdgeHover]]


def describe_hover(target: HoverTarget) -> dict[str, object]:
    """Serialise a hover target for JSON clients."""

    if isinstance(target, NodeHover):
        return {"kind": "node", "id": target.node_id}
    if isinstance(target, EdgeHover):
        return {"kind": "edge", "index": target.index}
    return {"kind": "none"}


class InteractionState:
    """Three-state machine over ``None``, ``NodeHover`` and ``EdgeHover``.

    Entering a target replaces the current one in a single assignment. A
    leave event only clears the target it refers to, so a leave that arrives
    after the pointer already entered something else is ignored.
    """

    def __init__(self) -> None:
        self._hover: HoverTarget = None

    @property
    def hover(self) -> HoverTarget:
        return self._hover

    def enter_node(self, node_id: str) -> HoverTarget:
        self._hover = NodeHover(node_id)
        return self._hover

    def leave_node(self, node_id: str) -> HoverTarget:
        if self._hover == NodeHover(node_id):
            self._hover = None
        return self._hover

    def enter_edge(self, index: int) -> HoverTarget:
        self._hover = EdgeHover(index)
        return self._hover

    def leave_edge(self, index: int) -> HoverTarget:
        if self._hover == EdgeHover(index):
            self._hover = None
        return self._hover

    def clear(self) -> None:
        self._hover = None

    def is_node_highlighted(self, node_id: str) -> bool:
        return self._hover == NodeHover(node_id)

    def is_edge_highlighted(self, index: int, edge: Edge) -> bool:
        """Return whether the edge at ``index`` should be drawn highlighted.

        An edge lights up when it is hovered itself or when either of its
        endpoints is the hovered node.
        """

        hover = self._hover
        if isinstance(hover, EdgeHover):
            return hover.index == index
        if isinstance(hover, NodeHover):
            return edge.touches(hover.node_id)
        return False
