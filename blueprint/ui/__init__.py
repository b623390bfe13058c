"""Scene assembly and mounted view sessions."""

from .service import GraphScene, GraphSceneService, PreparedLayout, SceneEdge, SceneNode
from .session import GraphViewRegistry, GraphViewSession

__all__ = [
    "GraphScene",
    "GraphSceneService",
    "GraphViewRegistry",
    "GraphViewSession",
    "PreparedLayout",
    "SceneEdge",
    "SceneNode",
]
