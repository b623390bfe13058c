"""Immutable input contracts for graph payloads handed over by the parser."""
from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import Literal

EdgeStyle = Literal["solid", "dashed"]


class GraphPayloadError(ValueError):
    """Raised when a document cannot be interpreted as a graph payload."""


class _FrozenBaseModel(BaseModel):
    """Base model enforcing immutability after creation."""

    model_config = ConfigDict(frozen=True)


class NodeInput(_FrozenBaseModel):
    """Company entity as produced by the graph parser."""

    id: str = Field(..., min_length=1)
    label: Optional[str] = Field(None, description="Display text; falls back to the id.")
    group: Optional[str] = Field(None, description="Classification tag such as a jurisdiction.")

    @property
    def display_label(self) -> str:
        return self.label or self.id


class EdgeInput(_FrozenBaseModel):
    """Directed relation (contract, payment) between two node ids."""

    source: Optional[str] = Field(None, description="Node id; unresolved ids drop the edge.")
    target: Optional[str] = None
    label: Optional[str] = None
    style: EdgeStyle = "solid"

    @field_validator("style", mode="before")
    @classmethod
    def _coerce_style(cls, value: Any) -> str:
        """Treat anything that is not explicitly ``dashed`` as a solid edge.

        Args:
            value: Raw style value from the payload.

        Returns:
            str: Either ``"dashed"`` or ``"solid"``.
        """
        if isinstance(value, str) and value.strip().lower() == "dashed":
            return "dashed"
        return "solid"


class GraphPayload(_FrozenBaseModel):
    """One immutable graph snapshot."""

    nodes: List[NodeInput] = Field(default_factory=list)
    edges: List[EdgeInput] = Field(default_factory=list)


def parse_graph_payload(raw: str | bytes) -> GraphPayload:
    """Parse a JSON document into a :class:`GraphPayload`.

    Args:
        raw: JSON text with ``nodes`` and ``edges`` arrays.

    Returns:
        GraphPayload: Validated payload.

    Raises:
        GraphPayloadError: If the document is not valid JSON or does not match
            the payload contract.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise GraphPayloadError(f"Invalid JSON document: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise GraphPayloadError("Graph payload root must be an object")
    try:
        return GraphPayload(**data)
    except ValidationError as exc:
        raise GraphPayloadError(f"Invalid graph payload: {exc.error_count()} error(s)") from exc
