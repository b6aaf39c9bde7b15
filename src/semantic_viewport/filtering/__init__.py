"""Hover filtering: spatial proximity combined with semantic similarity."""

from semantic_viewport.filtering.hover import HoverHighlight, compute_hover_highlight
from semantic_viewport.filtering.spatial_semantic import (
    FilterDebug,
    ScreenProjector,
    SpatialSemanticResult,
    TransformProjector,
    build_adjacency_map,
    build_embedding_map,
    collect_embeddings,
    extend_to_neighbors,
    filter_by_similarity,
    find_nodes_in_radius,
    score_nodes,
    spatial_semantic_filter,
)

__all__ = [
    # Combined filter
    "spatial_semantic_filter",
    "SpatialSemanticResult",
    "FilterDebug",
    "ScreenProjector",
    "TransformProjector",
    # Primitives
    "build_adjacency_map",
    "build_embedding_map",
    "find_nodes_in_radius",
    "collect_embeddings",
    "score_nodes",
    "filter_by_similarity",
    "extend_to_neighbors",
    # Hover
    "compute_hover_highlight",
    "HoverHighlight",
]
