"""Semantic viewport data models."""

from semantic_viewport.models.graph import AdjacencyIndex, GraphSnapshot, Neighbor
from semantic_viewport.models.node import Edge, Node, NodeKind, Point

__all__ = [
    "Node",
    "NodeKind",
    "Edge",
    "Point",
    "Neighbor",
    "AdjacencyIndex",
    "GraphSnapshot",
]
