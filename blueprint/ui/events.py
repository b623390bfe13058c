"""Pointer and container events accepted by a mounted graph view."""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated, Literal


class _FrozenEvent(BaseModel):
    model_config = ConfigDict(frozen=True)


class WheelEvent(_FrozenEvent):
    type: Literal["wheel"] = "wheel"
    offset_x: float
    offset_y: float
    delta: float


class PointerDownEvent(_FrozenEvent):
    type: Literal["pointer_down"] = "pointer_down"
    x: float
    y: float


class PointerMoveEvent(_FrozenEvent):
    type: Literal["pointer_move"] = "pointer_move"
    x: float
    y: float


class PointerUpEvent(_FrozenEvent):
    type: Literal["pointer_up"] = "pointer_up"


class NodeEnterEvent(_FrozenEvent):
    type: Literal["node_enter"] = "node_enter"
    node_id: str = Field(..., min_length=1)


class NodeLeaveEvent(_FrozenEvent):
    type: Literal["node_leave"] = "node_leave"
    node_id: str = Field(..., min_length=1)


class EdgeEnterEvent(_FrozenEvent):
    type: Literal["edge_enter"] = "edge_enter"
    index: int = Field(..., ge=0)


class EdgeLeaveEvent(_FrozenEvent):
    type: Literal["edge_leave"] = "edge_leave"
    index: int = Field(..., ge=0)


class ResizeEvent(_FrozenEvent):
    """Container resize; ``None`` dimensions mean the measurement failed."""

    type: Literal["resize"] = "resize"
    width: Optional[float] = None
    height: Optional[float] = None


ViewEvent = Annotated[
    Union[
        WheelEvent,
        PointerDownEvent,
        PointerMoveEvent,
        PointerUpEvent,
        NodeEnterEvent,
        NodeLeaveEvent,
        EdgeEnterEvent,
        EdgeLeaveEvent,
        ResizeEvent,
    ],
    Field(discriminator="type"),
]
