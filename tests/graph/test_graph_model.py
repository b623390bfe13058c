"""Tests for graph snapshot normalisation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from blueprint.contracts import EdgeInput, NodeInput
from blueprint.graph.model import normalize_graph


def test_dangling_edge_is_dropped_without_error() -> None:
    graph = normalize_graph([{"id": "A"}], [{"source": "A", "target": "Z"}])

    assert graph.edges == ()
    assert graph.dropped_edges == 1
    assert [node.id for node in graph.nodes] == ["A"]


def test_duplicate_node_ids_keep_first_occurrence() -> None:
    graph = normalize_graph([{"id": "A", "label": "First"}, {"id": "A", "label": "Second"}], [])

    assert len(graph.nodes) == 1
    assert graph.nodes[0].label == "First"
    assert graph.duplicate_nodes == 1


def test_label_defaults_to_id_and_group_is_kept() -> None:
    graph = normalize_graph([{"id": "A", "group": "HK"}, {"id": "B", "label": ""}], [])

    assert graph.nodes[0].label == "A"
    assert graph.nodes[0].group == "HK"
    assert graph.nodes[1].label == "B"


def test_node_and_edge_order_is_preserved() -> None:
    nodes = [{"id": node_id} for node_id in ("C", "A", "B")]
    edges = [
        {"source": "B", "target": "C"},
        {"source": "A", "target": "missing"},
        {"source": "C", "target": "A", "style": "dashed"},
        {"source": "A", "target": "B"},
    ]

    graph = normalize_graph(nodes, edges)

    assert [node.id for node in graph.nodes] == ["C", "A", "B"]
    assert [(edge.source, edge.target) for edge in graph.edges] == [("B", "C"), ("C", "A"), ("A", "B")]
    assert graph.index_of("A") == 1
    assert graph.index_of("missing") is None
    assert graph.node("B").id == "B"


def test_empty_node_list_is_no_data_state() -> None:
    graph = normalize_graph([], [{"source": "A", "target": "B"}])

    assert graph.is_empty
    assert graph.edges == ()


def test_unknown_style_falls_back_to_solid() -> None:
    graph = normalize_graph(
        [{"id": "A"}, {"id": "B"}],
        [{"source": "A", "target": "B", "style": "dotted"}, {"source": "B", "target": "A", "style": "DASHED"}],
    )

    assert graph.edges[0].style == "solid"
    assert graph.edges[1].is_dashed


def test_accepts_contract_models() -> None:
    graph = normalize_graph(
        [NodeInput(id="A", label="Alpha"), NodeInput(id="B")],
        [EdgeInput(source="A", target="B", label="Kontrakt")],
    )

    assert graph.nodes[0].label == "Alpha"
    assert graph.edges[0].label == "Kontrakt"
    assert graph.edges[0].touches("B")


def test_node_without_id_is_rejected() -> None:
    with pytest.raises(ValidationError):
        normalize_graph([{"label": "Nameless"}], [])


def test_edges_with_missing_or_empty_endpoints_are_dropped() -> None:
    graph = normalize_graph(
        [{"id": "A"}, {"id": "B"}],
        [
            {"source": "A", "target": "B"},
            {"source": "A", "target": ""},
            {"source": "A"},
            {"source": None, "target": "B"},
        ],
    )

    assert [(edge.source, edge.target) for edge in graph.edges] == [("A", "B")]
    assert graph.dropped_edges == 3
