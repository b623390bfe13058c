"""Graph snapshot normalisation."""

from blueprint.graph.model import Edge, Node, NormalizedGraph, normalize_graph

__all__ = ["Edge", "Node", "NormalizedGraph", "normalize_graph"]
