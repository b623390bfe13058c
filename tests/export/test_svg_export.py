from __future__ import annotations

from blueprint.export.svg import EMPTY_MESSAGE, GROUP_PALETTE, render_scene_svg
from blueprint.graph.model import normalize_graph
from blueprint.interaction.state import InteractionState
from blueprint.ui.service import GraphSceneService
from blueprint.viewport.controller import Transform
from blueprint.viewport.size import ViewportSize

NODES = [
    {"id": "A", "label": "TONY HK LTD", "group": "HK"},
    {"id": "B", "label": "R&D <US>", "group": "US"},
    {"id": "C"},
]
EDGES = [
    {"source": "A", "target": "B", "label": "KONTRAKT #1"},
    {"source": "B", "target": "C", "label": "Płatność", "style": "dashed"},
]


def _scene(hover_node: str | None = None, transform: Transform = Transform()):
    service = GraphSceneService()
    prepared = service.prepare(normalize_graph(NODES, EDGES), ViewportSize(800.0, 560.0))
    interaction = InteractionState()
    if hover_node is not None:
        interaction.enter_node(hover_node)
    return service.compose(prepared, transform=transform, interaction=interaction)


def test_empty_scene_renders_placeholder() -> None:
    scene = GraphSceneService().build_scene([], [])

    svg = render_scene_svg(scene)

    assert svg.startswith("<svg")
    assert EMPTY_MESSAGE in svg
    assert "<path" not in svg


def test_scene_renders_nodes_edges_and_labels() -> None:
    svg = render_scene_svg(_scene(), title="Blueprint")

    assert "<title>Blueprint</title>" in svg
    assert svg.count("data-id=") == 3
    assert svg.count("data-index=") == 2
    assert "R&amp;D &lt;US&gt;" in svg
    assert "KONTRAKT #1" in svg
    assert 'stroke-dasharray="6 6"' in svg
    assert 'marker-end="url(#arrow-dashed)"' in svg
    assert 'marker-end="url(#arrow-solid)"' in svg
    assert svg.index('class="edges"') < svg.index('class="nodes"')


def test_groups_get_palette_colours() -> None:
    svg = render_scene_svg(_scene())

    assert f'fill="{GROUP_PALETTE[0]}"' in svg
    assert f'fill="{GROUP_PALETTE[1]}"' in svg


def test_hover_and_transform_are_reflected() -> None:
    svg = render_scene_svg(_scene(hover_node="C", transform=Transform(k=2.0, x=5.0, y=-5.0)))

    assert 'transform="translate(5.00,-5.00) scale(2.0000)"' in svg
    assert 'class="node highlighted" data-id="C"' in svg
    assert 'class="edge highlighted" data-index="1"' in svg
    assert 'class="edge" data-index="0"' in svg
