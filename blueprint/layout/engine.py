"""Force-directed layout for company/contract graphs.

Nodes start evenly spaced on a circle and are then relaxed by a fixed number
of simulation steps combining all-pairs repulsion, edge springs and a weak
pull toward the viewport centre. There is no randomness anywhere, so the
output is a pure function of the snapshot, the viewport size and the
parameters.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Dict

import numpy as np

from blueprint.config import LayoutConfig
from blueprint.graph.model import NormalizedGraph
from blueprint.viewport.size import ViewportSize

LOGGER = logging.getLogger(__name__)

DISTANCE_EPSILON = 0.01
SEED_MARGIN = 80.0
MIN_SPRING_LENGTH = 1.0


@dataclass(frozen=True)
class Position:
    """Final world coordinates of a node."""

    x: float
    y: float


@dataclass(frozen=True)
class LayoutParameters:
    """Tunable constants of the force simulation."""

    repulsion_constant: float = 12000.0
    rest_length: float = 140.0
    stiffness: float = 0.02
    damping: float = 0.85
    center_pull: float = 0.02
    dt: float = 0.02
    iterations: int = 220

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "LayoutParameters":
        return cls(
            repulsion_constant=config.repulsion_constant,
            rest_length=config.rest_length,
            stiffness=config.stiffness,
            damping=config.damping,
            center_pull=config.center_pull,
            dt=config.dt,
            iterations=config.iterations,
        )


def seed_positions(count: int, viewport: ViewportSize) -> np.ndarray:
    """Place ``count`` nodes evenly on a circle centred in the viewport.

    Args:
        count: Number of nodes.
        viewport: Drawing surface size.

    Returns:
        np.ndarray: ``(count, 2)`` array of initial coordinates.
    """

    cx, cy = viewport.center
    radius = min(viewport.width, viewport.height) / 2.0 - SEED_MARGIN
    angles = 2.0 * np.pi * np.arange(count, dtype=float) / max(count, 1)
    return np.column_stack((cx + radius * np.cos(angles), cy + radius * np.sin(angles)))


class LayoutEngine:
    """Run the force simulation for one graph snapshot at a time.

    The engine keeps no state between calls: every call starts again from the
    circular seed, so a resize or a new snapshot always yields a fresh layout.
    """

    def __init__(self, params: LayoutParameters | None = None) -> None:
        self._params = params or LayoutParameters()

    @property
    def params(self) -> LayoutParameters:
        return self._params

    def layout(self, graph: NormalizedGraph, viewport: ViewportSize) -> Dict[str, Position]:
        """Compute a position for every node of ``graph``.

        Args:
            graph: Normalised snapshot; its edges must all be valid.
            viewport: Size of the drawing surface used for seeding and centring.

        Returns:
            Dict[str, Position]: Node id to final coordinates, in node order.
            Empty for the "no data" snapshot.
        """

        if graph.is_empty:
            return {}

        started = perf_counter()
        params = self._params
        seed = seed_positions(len(graph.nodes), viewport)
        positions = seed.copy()
        velocities = np.zeros_like(positions)
        center = np.array(viewport.center, dtype=float)
        sources = np.array([graph.index_of(edge.source) for edge in graph.edges], dtype=np.intp)
        targets = np.array([graph.index_of(edge.target) for edge in graph.edges], dtype=np.intp)

        for _ in range(params.iterations):
            self._apply_repulsion(positions, velocities)
            self._apply_springs(positions, velocities, sources, targets)
            velocities += (center - positions) * params.center_pull
            positions += velocities * params.dt
            velocities *= params.damping

        finite_rows = np.isfinite(positions).all(axis=1)
        if not finite_rows.all():
            LOGGER.warning(
                "Layout produced non-finite coordinates for %d node(s); using seed positions",
                int((~finite_rows).sum()),
            )
            positions[~finite_rows] = seed[~finite_rows]

        LOGGER.debug(
            "Computed layout (nodes=%d, edges=%d, iterations=%d, elapsed_ms=%.2f)",
            len(graph.nodes),
            len(graph.edges),
            params.iterations,
            (perf_counter() - started) * 1000.0,
        )
        return {
            node.id: Position(x=float(positions[index, 0]), y=float(positions[index, 1]))
            for index, node in enumerate(graph.nodes)
        }

    def _apply_repulsion(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        # delta[i, j] = p_i - p_j; the diagonal is zero and contributes nothing.
        delta = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        dist_sq = np.einsum("ijk,ijk->ij", delta, delta) + DISTANCE_EPSILON
        force = self._params.repulsion_constant / dist_sq
        push = delta * (force / np.sqrt(dist_sq))[..., np.newaxis]
        velocities += push.sum(axis=1)

    def _apply_springs(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        sources: np.ndarray,
        targets: np.ndarray,
    ) -> None:
        if sources.size == 0:
            return
        delta = positions[targets] - positions[sources]
        dist = np.maximum(np.hypot(delta[:, 0], delta[:, 1]), MIN_SPRING_LENGTH)
        pull = self._params.stiffness * (dist - self._params.rest_length)
        impulse = delta * (pull / dist)[:, np.newaxis]
        np.add.at(velocities, sources, impulse)
        np.add.at(velocities, targets, -impulse)
