"""Tests for hover tracking and highlight derivation."""

from __future__ import annotations

from typing import List

from blueprint.graph.model import Edge
from blueprint.interaction.state import EdgeHover, InteractionState, NodeHover, describe_hover

NODES = ["A", "B", "C", "D"]
EDGES: List[Edge] = [
    Edge(source="A", target="B"),
    Edge(source="B", target="C", style="dashed"),
    Edge(source="C", target="D"),
    Edge(source="D", target="A"),
]


def _edge_flags(state: InteractionState) -> List[bool]:
    return [state.is_edge_highlighted(index, edge) for index, edge in enumerate(EDGES)]


def _node_flags(state: InteractionState) -> List[bool]:
    return [state.is_node_highlighted(node_id) for node_id in NODES]


def test_nothing_highlighted_without_hover() -> None:
    state = InteractionState()

    assert state.hover is None
    assert not any(_edge_flags(state))
    assert not any(_node_flags(state))


def test_hovering_node_highlights_node_and_incident_edges() -> None:
    state = InteractionState()

    state.enter_node("A")

    assert state.hover == NodeHover("A")
    assert _node_flags(state) == [True, False, False, False]
    assert _edge_flags(state) == [True, False, False, True]


def test_moving_to_edge_clears_node_highlight() -> None:
    state = InteractionState()
    state.enter_node("A")

    state.enter_edge(2)

    assert state.hover == EdgeHover(2)
    assert _node_flags(state) == [False, False, False, False]
    assert _edge_flags(state) == [False, False, True, False]


def test_leaving_current_target_returns_to_none() -> None:
    state = InteractionState()
    state.enter_node("B")
    assert state.leave_node("B") is None

    state.enter_edge(1)
    assert state.leave_edge(1) is None
    assert state.hover is None


def test_late_leave_of_previous_target_is_ignored() -> None:
    state = InteractionState()
    state.enter_node("A")
    state.enter_node("C")

    state.leave_node("A")
    state.leave_edge(0)

    assert state.hover == NodeHover("C")


def test_describe_hover() -> None:
    assert describe_hover(None) == {"kind": "none"}
    assert describe_hover(NodeHover("A")) == {"kind": "node", "id": "A"}
    assert describe_hover(EdgeHover(3)) == {"kind": "edge", "index": 3}
