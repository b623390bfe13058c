"""Tests for scene assembly from graph snapshots."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict

import pytest

from blueprint.config import load_config
from blueprint.graph.model import normalize_graph
from blueprint.interaction.state import InteractionState
from blueprint.layout.engine import LayoutEngine
from blueprint.layout.geometry import EdgeGeometryBuilder
from blueprint.ui.service import GraphSceneService
from blueprint.viewport.controller import Transform
from blueprint.viewport.size import DEFAULT_HEIGHT, DEFAULT_WIDTH, ViewportSize

FIXTURE_PATH = Path(__file__).resolve().parents[1] / "fixtures" / "blueprint_payload.json"

SCENARIO_NODES = [{"id": "A"}, {"id": "B"}, {"id": "C"}]
SCENARIO_EDGES = [
    {"source": "A", "target": "B", "style": "solid"},
    {"source": "B", "target": "C", "style": "dashed"},
    {"source": "A", "target": "X"},
]


class _ExplodingLayoutEngine(LayoutEngine):
    def layout(self, graph: Any, viewport: Any) -> Any:  # pragma: no cover - must not run
        raise AssertionError("layout must not run for empty snapshots")


class _ExplodingGeometryBuilder(EdgeGeometryBuilder):
    def build(self, edges: Any, positions: Any) -> Any:  # pragma: no cover - must not run
        raise AssertionError("geometry must not run for empty snapshots")


@pytest.fixture()
def sample_payload() -> Dict[str, Any]:
    with FIXTURE_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def test_end_to_end_scenario() -> None:
    service = GraphSceneService()

    scene = service.build_scene(SCENARIO_NODES, SCENARIO_EDGES, width=800, height=560)

    assert scene.node_count == 3
    assert all(math.isfinite(node.x) and math.isfinite(node.y) for node in scene.nodes)
    assert scene.edge_count == 2
    assert [edge.style for edge in scene.edges] == ["solid", "dashed"]
    assert scene.edges[1].curve.dash_pattern == "6 6"
    assert scene.transform == Transform()
    assert scene.hover is None


def test_empty_snapshot_skips_layout_and_geometry() -> None:
    service = GraphSceneService(_ExplodingLayoutEngine(), _ExplodingGeometryBuilder())

    scene = service.build_scene([], [{"source": "A", "target": "B"}])

    assert scene.is_empty
    assert scene.edges == ()
    assert scene.to_dict()["empty"] is True


def test_missing_viewport_uses_default_size() -> None:
    service = GraphSceneService(default_size=ViewportSize(640.0, 480.0))

    scene = service.build_scene(SCENARIO_NODES, [], width=None, height=None)

    assert scene.viewport == ViewportSize(640.0, 480.0)


def test_unconfigured_service_falls_back_to_measurement_defaults() -> None:
    assert GraphSceneService().default_size == ViewportSize(DEFAULT_WIDTH, DEFAULT_HEIGHT)


def test_compose_applies_hover_without_relayout() -> None:
    service = GraphSceneService()
    prepared = service.prepare(normalize_graph(SCENARIO_NODES, SCENARIO_EDGES), ViewportSize(800.0, 560.0))
    interaction = InteractionState()
    interaction.enter_node("A")

    scene = service.compose(prepared, transform=Transform(k=2.0), interaction=interaction)

    assert [node.highlighted for node in scene.nodes] == [True, False, False]
    assert [edge.highlighted for edge in scene.edges] == [True, False]
    assert scene.transform.k == 2.0
    assert scene.nodes[0].x == prepared.positions["A"].x


def test_fixture_payload_scene(sample_payload: Dict[str, Any]) -> None:
    service = GraphSceneService.from_config(load_config())

    scene = service.build_scene(sample_payload["nodes"], sample_payload["edges"])
    payload = scene.to_dict()

    assert payload["empty"] is False
    assert len(payload["nodes"]) == 6
    # The edge to BANK has no node and is dropped.
    assert len(payload["edges"]) == 4
    assert {node["group"] for node in payload["nodes"]} == {"HK", "US", None}
    first_edge = payload["edges"][0]
    assert first_edge["label"] == "KONTRAKT #1: PERFORMANCE"
    assert first_edge["curve"]["path"].startswith("M ")
    assert first_edge["curve"]["marker"] == "arrow-solid"
    assert payload["hover"] == {"kind": "none"}
    assert payload["viewport"] == {"width": 800.0, "height": 560.0}
    json.dumps(payload)
