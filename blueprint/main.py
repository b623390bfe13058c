"""FastAPI application factory for the Blueprint graph engine."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from blueprint.config import AppConfig, load_config
from blueprint.contracts import EdgeInput, NodeInput
from blueprint.export.svg import render_scene_svg
from blueprint.ui.events import ViewEvent
from blueprint.ui.service import GraphSceneService
from blueprint.ui.session import GraphViewRegistry, GraphViewSession

LOGGER = logging.getLogger(__name__)


class GraphLayoutRequest(BaseModel):
    """Graph snapshot plus the measured container size."""

    nodes: List[NodeInput] = Field(default_factory=list)
    edges: List[EdgeInput] = Field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None


class GraphSnapshotRequest(BaseModel):
    """Graph snapshot loaded into a mounted view."""

    nodes: List[NodeInput] = Field(default_factory=list)
    edges: List[EdgeInput] = Field(default_factory=list)


class ViewEventsRequest(BaseModel):
    """Ordered batch of events applied to a mounted view."""

    events: List[ViewEvent] = Field(default_factory=list)


class ViewCreatedResponse(BaseModel):
    view_id: str
    scene: Dict[str, object]


class UISettingsResponse(BaseModel):
    """Tunables served to the frontend."""

    layout: Dict[str, object]
    edges: Dict[str, object]
    viewport: Dict[str, object]
    node_radius: float


def _get_registry(request: Request) -> GraphViewRegistry:
    return request.app.state.view_registry


def _require_session(request: Request, view_id: str) -> GraphViewSession:
    session = _get_registry(request).get(view_id)
    if session is None:
        raise HTTPException(status_code=404, detail="View not found")
    return session


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        config: Optional pre-loaded configuration. If omitted, the default
            configuration defined in config.yaml is used.

    Returns:
        FastAPI: Configured FastAPI application.
    """

    resolved_config = config or load_config()
    app = FastAPI(title="Blueprint Imperium API", version=resolved_config.pipeline.version)
    app.state.app_config = resolved_config

    allowed_origins = resolved_config.ui.allowed_origins
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    scene_service = GraphSceneService.from_config(resolved_config)
    app.state.scene_service = scene_service
    app.state.view_registry = GraphViewRegistry(scene_service, viewport_config=resolved_config.viewport)
    node_radius = resolved_config.ui.node_radius

    @app.get("/health", tags=["system"], summary="Service health probe")
    def health() -> dict[str, str]:
        """Return service health information."""

        return {"status": "ok", "version": resolved_config.pipeline.version}

    @app.get("/api/ui/settings", tags=["ui"], summary="Graph view defaults")
    def ui_settings() -> UISettingsResponse:
        """Return layout, edge and viewport defaults sourced from the configuration file."""

        return UISettingsResponse(
            layout=resolved_config.layout.model_dump(),
            edges=resolved_config.edges.model_dump(),
            viewport=resolved_config.viewport.model_dump(),
            node_radius=node_radius,
        )

    @app.post("/api/graph/layout", tags=["graph"], summary="Lay out a graph snapshot")
    def layout_graph(payload: GraphLayoutRequest) -> Dict[str, object]:
        scene = scene_service.build_scene(
            payload.nodes,
            payload.edges,
            width=payload.width,
            height=payload.height,
        )
        return scene.to_dict()

    @app.post("/api/graph/render.svg", tags=["graph"], summary="Render a graph snapshot as SVG")
    def render_graph(payload: GraphLayoutRequest) -> Response:
        scene = scene_service.build_scene(
            payload.nodes,
            payload.edges,
            width=payload.width,
            height=payload.height,
        )
        return Response(content=render_scene_svg(scene, node_radius=node_radius), media_type="image/svg+xml")

    @app.post("/api/views", tags=["views"], summary="Mount a new graph view", status_code=201)
    def create_view(request: Request) -> ViewCreatedResponse:
        session = _get_registry(request).create()
        return ViewCreatedResponse(view_id=session.view_id, scene=session.scene().to_dict())

    @app.delete("/api/views/{view_id}", tags=["views"], summary="Unmount a graph view")
    def delete_view(view_id: str, request: Request) -> dict[str, str]:
        if not _get_registry(request).remove(view_id):
            raise HTTPException(status_code=404, detail="View not found")
        return {"status": "removed"}

    @app.post("/api/views/{view_id}/graph", tags=["views"], summary="Load a snapshot into a view")
    def load_view_graph(view_id: str, payload: GraphSnapshotRequest, request: Request) -> Dict[str, object]:
        session = _require_session(request, view_id)
        return session.load(payload.nodes, payload.edges).to_dict()

    @app.post("/api/views/{view_id}/events", tags=["views"], summary="Apply pointer and resize events")
    def apply_view_events(view_id: str, payload: ViewEventsRequest, request: Request) -> Dict[str, object]:
        session = _require_session(request, view_id)
        scene = session.scene()
        for event in payload.events:
            scene = session.dispatch(event)
        return scene.to_dict()

    @app.get("/api/views/{view_id}/scene", tags=["views"], summary="Current scene of a view")
    def get_view_scene(view_id: str, request: Request) -> Dict[str, object]:
        return _require_session(request, view_id).scene().to_dict()

    @app.get("/api/views/{view_id}/render.svg", tags=["views"], summary="Current scene of a view as SVG")
    def render_view(view_id: str, request: Request) -> Response:
        scene = _require_session(request, view_id).scene()
        return Response(content=render_scene_svg(scene, node_radius=node_radius), media_type="image/svg+xml")

    LOGGER.info("Blueprint API configured (version=%s)", resolved_config.pipeline.version)
    return app
