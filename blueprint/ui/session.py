"""Mounted graph views and the in-process registry that holds them."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from blueprint.config import ViewportConfig
from blueprint.graph.model import EMPTY_GRAPH, EdgeLike, NodeLike, NormalizedGraph, normalize_graph
from blueprint.interaction.state import InteractionState
from blueprint.ui.events import (
    EdgeEnterEvent,
    EdgeLeaveEvent,
    NodeEnterEvent,
    NodeLeaveEvent,
    PointerDownEvent,
    PointerMoveEvent,
    PointerUpEvent,
    ResizeEvent,
    ViewEvent,
    WheelEvent,
)
from blueprint.ui.service import GraphScene, GraphSceneService, PreparedLayout
from blueprint.viewport.controller import ViewportController

LOGGER = logging.getLogger(__name__)


class GraphViewSession:
    """State of one mounted graph view.

    The transform starts at identity and survives snapshot loads and
    resizes; only a new session (a remount) resets it. Loading a snapshot or
    changing the viewport size discards the previous positions and lays the
    graph out again from the circular seed.
    """

    def __init__(
        self,
        service: GraphSceneService,
        *,
        viewport_config: ViewportConfig | None = None,
        view_id: Optional[str] = None,
    ) -> None:
        self.view_id = view_id or uuid4().hex
        self._service = service
        self._viewport = ViewportController(viewport_config, size=service.default_size)
        self._interaction = InteractionState()
        self._prepared = PreparedLayout(graph=EMPTY_GRAPH, viewport=self._viewport.size)
        self._layout_runs = 0
        self._lock = RLock()

    @property
    def viewport(self) -> ViewportController:
        return self._viewport

    @property
    def interaction(self) -> InteractionState:
        return self._interaction

    @property
    def graph(self) -> NormalizedGraph:
        return self._prepared.graph

    @property
    def layout_runs(self) -> int:
        """Number of full layouts computed by this view."""

        return self._layout_runs

    def load(self, nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> GraphScene:
        """Replace the current snapshot and lay it out."""

        graph = normalize_graph(nodes, edges)
        with self._lock:
            # Hover indices refer to the previous edge list.
            self._interaction.clear()
            self._relayout(graph)
        LOGGER.info(
            "View %s loaded snapshot (nodes=%d, edges=%d)",
            self.view_id,
            len(graph.nodes),
            len(graph.edges),
        )
        return self.scene()

    def resize(self, width: object, height: object) -> bool:
        """Apply a container resize; returns whether a relayout happened."""

        size = self._service.resolve_size(width, height)
        with self._lock:
            if not self._viewport.resize(size):
                return False
            self._relayout(self._prepared.graph)
            return True

    def dispatch(self, event: ViewEvent) -> GraphScene:
        """Route one event to the state holder that owns it."""

        with self._lock:
            if isinstance(event, WheelEvent):
                self._viewport.wheel(event.offset_x, event.offset_y, event.delta)
            elif isinstance(event, PointerDownEvent):
                self._viewport.pointer_down(event.x, event.y)
            elif isinstance(event, PointerMoveEvent):
                self._viewport.pointer_move(event.x, event.y)
            elif isinstance(event, PointerUpEvent):
                self._viewport.pointer_up()
            elif isinstance(event, NodeEnterEvent):
                self._interaction.enter_node(event.node_id)
            elif isinstance(event, NodeLeaveEvent):
                self._interaction.leave_node(event.node_id)
            elif isinstance(event, EdgeEnterEvent):
                self._interaction.enter_edge(event.index)
            elif isinstance(event, EdgeLeaveEvent):
                self._interaction.leave_edge(event.index)
            elif isinstance(event, ResizeEvent):
                self.resize(event.width, event.height)
            else:
                raise TypeError(f"Unsupported view event: {type(event).__name__}")
            return self.scene()

    def scene(self) -> GraphScene:
        with self._lock:
            return self._service.compose(
                self._prepared,
                transform=self._viewport.transform,
                interaction=self._interaction,
            )

    def _relayout(self, graph: NormalizedGraph) -> None:
        self._prepared = self._service.prepare(graph, self._viewport.size)
        if not graph.is_empty:
            self._layout_runs += 1


class GraphViewRegistry:
    """Thread-safe lookup of mounted views by id."""

    def __init__(self, service: GraphSceneService, *, viewport_config: ViewportConfig | None = None) -> None:
        self._service = service
        self._viewport_config = viewport_config
        self._lock = RLock()
        self._sessions: Dict[str, GraphViewSession] = {}

    def create(self) -> GraphViewSession:
        with self._lock:
            session = GraphViewSession(self._service, viewport_config=self._viewport_config)
            self._sessions[session.view_id] = session
        LOGGER.info("Mounted graph view %s", session.view_id)
        return session

    def get(self, view_id: str) -> Optional[GraphViewSession]:
        with self._lock:
            return self._sessions.get(view_id)

    def remove(self, view_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(view_id, None)
        if removed is not None:
            LOGGER.info("Unmounted graph view %s", view_id)
        return removed is not None

    def list_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._sessions)
