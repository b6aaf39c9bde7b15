"""Spatial-semantic filtering for hover highlighting.

Combines spatial proximity to the cursor with semantic similarity:
1. Find nodes within a screen-space radius of the cursor
2. Compute the centroid of their embeddings
3. Score EVERY node in the graph against the centroid
4. Re-admit spatial nodes that neighbour a similarity match, so the thing
   directly under the cursor is never silently dropped
5. Fall back to the spatial set rather than highlight nothing
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from semantic_viewport.embeddings import centroid, embedding_matrix, is_zero_vector
from semantic_viewport.geometry import Transform, screen_to_graph, screen_to_graph_distance
from semantic_viewport.models import AdjacencyIndex, Edge, Node, Point

logger = logging.getLogger(__name__)

EmbeddingLookup = Mapping[str, np.ndarray]


class ScreenProjector(Protocol):
    """Converts a screen point into world coordinates for the active renderer."""

    def screen_to_world(self, point: Point) -> Point: ...


class TransformProjector:
    """ScreenProjector for the 2D renderer's zoom transform."""

    def __init__(self, transform: Transform) -> None:
        self.transform = transform

    def screen_to_world(self, point: Point) -> Point:
        return screen_to_graph(point, self.transform)


@dataclass
class FilterDebug:
    """Counters for tuning the hover threshold."""

    spatial_count: int = 0
    similarity_pass_count: int = 0
    neighbor_add_count: int = 0
    min_similarity: float = 0.0
    max_similarity: float = 0.0


@dataclass
class SpatialSemanticResult:
    """Result of the spatial-semantic filter."""

    highlighted_ids: set[str]
    spatial_ids: set[str]
    centroid: np.ndarray | None = None
    debug: FilterDebug = field(default_factory=FilterDebug)

    @property
    def is_empty_space(self) -> bool:
        return not self.spatial_ids


# ============================================================================
# Graph utilities
# ============================================================================


def build_adjacency_map(edges: Iterable[Edge]) -> AdjacencyIndex:
    """Build an adjacency lookup from edges."""
    return AdjacencyIndex(edges)


def build_embedding_map(nodes: Iterable[Node]) -> dict[str, np.ndarray]:
    """Node id -> embedding for nodes that carry one."""
    return {node.id: node.embedding for node in nodes if node.embedding is not None}


# ============================================================================
# Spatial queries
# ============================================================================


def find_nodes_in_radius(nodes: Iterable[Node], center: Point, radius: float) -> list[Node]:
    """Laid-out nodes within `radius` of `center` (inclusive)."""
    return [
        node
        for node in nodes
        if node.has_position and math.hypot(node.x - center.x, node.y - center.y) <= radius
    ]


# ============================================================================
# Semantic operations
# ============================================================================


def collect_embeddings(node_ids: Iterable[str], embeddings: EmbeddingLookup) -> list[np.ndarray]:
    """
    Usable embeddings for the given ids.

    Missing and zero-magnitude embeddings are skipped; so are embeddings whose
    length differs from the first one collected.
    """
    result: list[np.ndarray] = []
    dimensions: int | None = None
    for node_id in node_ids:
        emb = embeddings.get(node_id)
        if emb is None or is_zero_vector(emb):
            continue
        emb = np.asarray(emb, dtype=np.float64)
        if dimensions is None:
            dimensions = emb.shape[0]
        elif emb.shape[0] != dimensions:
            continue
        result.append(emb)
    return result


def score_nodes(
    nodes: Iterable[Node],
    query: np.ndarray,
    embeddings: EmbeddingLookup,
) -> dict[str, float]:
    """Cosine similarity of every usable node embedding to `query` (unit vector)."""
    ids, matrix = embedding_matrix(
        ((node.id, embeddings.get(node.id)) for node in nodes),
        dimensions=query.shape[0],
    )
    if not ids:
        return {}
    return dict(zip(ids, (matrix @ query).tolist()))


def filter_by_similarity(
    nodes: Iterable[Node],
    query: np.ndarray,
    threshold: float,
    embeddings: EmbeddingLookup,
) -> set[str]:
    """IDs of nodes whose similarity to `query` is at or above threshold."""
    scores = score_nodes(nodes, query, embeddings)
    return {node_id for node_id, score in scores.items() if score >= threshold}


def extend_to_neighbors(
    ids: set[str],
    candidates: Iterable[str],
    adjacency: AdjacencyIndex,
) -> set[str]:
    """Add candidates that are direct neighbours of any id in `ids`."""
    extended = set(ids)
    for candidate_id in candidates:
        if candidate_id in extended:
            continue
        if not adjacency.neighbor_ids(candidate_id).isdisjoint(ids):
            extended.add(candidate_id)
    return extended


# ============================================================================
# Combined filter
# ============================================================================


def spatial_semantic_filter(
    nodes: list[Node],
    screen_center: Point,
    screen_radius: float,
    transform: Transform,
    similarity_threshold: float,
    embeddings: EmbeddingLookup,
    adjacency: AdjacencyIndex,
    projector: ScreenProjector | None = None,
) -> SpatialSemanticResult:
    """
    Highlight set for a cursor circle.

    Args:
        nodes: All nodes in the graph
        screen_center: Cursor position in screen pixels
        screen_radius: Circle radius in screen pixels
        transform: Zoom transform; k converts the radius to world units
        similarity_threshold: Minimum cosine similarity to the centroid
        embeddings: Embedding lookup by node id
        adjacency: Adjacency lookup for neighbour re-admission
        projector: Optional screen -> world conversion (3D renderers)

    Returns:
        SpatialSemanticResult; empty spatial_ids means the cursor is over empty space
    """
    projector = projector or TransformProjector(transform)
    center = projector.screen_to_world(screen_center)
    radius = screen_to_graph_distance(screen_radius, transform.k)

    spatial_nodes = find_nodes_in_radius(nodes, center, radius)
    spatial_ids = {node.id for node in spatial_nodes}

    if not spatial_nodes:
        return SpatialSemanticResult(highlighted_ids=set(), spatial_ids=spatial_ids)

    debug = FilterDebug(spatial_count=len(spatial_nodes))

    spatial_embeddings = collect_embeddings((node.id for node in spatial_nodes), embeddings)
    query = centroid(spatial_embeddings)

    if query is None or is_zero_vector(query):
        # No usable embeddings under the cursor
        return SpatialSemanticResult(
            highlighted_ids=set(spatial_ids), spatial_ids=spatial_ids, debug=debug
        )

    scores = score_nodes(nodes, query, embeddings)
    if not scores:
        return SpatialSemanticResult(
            highlighted_ids=set(spatial_ids), spatial_ids=spatial_ids, centroid=query, debug=debug
        )

    similarity_pass_ids = {
        node_id for node_id, score in scores.items() if score >= similarity_threshold
    }
    debug.min_similarity = min(scores.values())
    debug.max_similarity = max(scores.values())
    debug.similarity_pass_count = len(similarity_pass_ids)

    highlighted_ids = extend_to_neighbors(similarity_pass_ids, spatial_ids, adjacency)
    debug.neighbor_add_count = len(highlighted_ids) - len(similarity_pass_ids)

    if not highlighted_ids:
        highlighted_ids = set(spatial_ids)

    logger.debug(
        f"Spatial-semantic: {debug.spatial_count} spatial, "
        f"{debug.similarity_pass_count} similar, +{debug.neighbor_add_count} neighbours "
        f"(sim {debug.min_similarity:.3f}..{debug.max_similarity:.3f})"
    )

    return SpatialSemanticResult(
        highlighted_ids=highlighted_ids,
        spatial_ids=spatial_ids,
        centroid=query,
        debug=debug,
    )
