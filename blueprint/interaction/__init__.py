"""Hover state for graph views."""

from .state import EdgeHover, HoverTarget, InteractionState, NodeHover

__all__ = ["EdgeHover", "HoverTarget", "InteractionState", "NodeHover"]
