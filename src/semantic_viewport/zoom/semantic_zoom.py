"""Semantic zoom: which nodes stay visible at the current zoom level.

Algorithm:
1. Map zoom scale to a similarity threshold (steepness curve)
2. Pick focal nodes near the screen centre (nearest node as fallback)
3. Keep every node similar to ANY focal node (multi-centroid OR, so two
   distinct topics on screen never blend into a phantom average)
4. Extend to all direct graph neighbours, both directions

Also provides position recovery for nodes re-entering visibility and the
caller-held hysteresis that keeps the threshold from chattering.
"""

import logging
import math
import random
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from semantic_viewport.config import settings
from semantic_viewport.embeddings import embedding_matrix, is_zero_vector
from semantic_viewport.geometry import Bounds
from semantic_viewport.models import AdjacencyIndex, GraphSnapshot, Node, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SemanticZoomConfig:
    """Zoom-to-threshold curve parameters."""

    steepness: float = 0.0  # 0 = linear, 1 = cubic
    min_threshold: float = 0.50  # Threshold at or below zoom_floor
    max_threshold: float = 0.80  # Threshold at or above zoom_ceiling
    zoom_floor: float = 0.5
    zoom_ceiling: float = 1.75
    focal_radius: float = 0.1  # Fraction of the viewport diagonal
    hysteresis: float = 1.0  # Zoom-out dead zone before re-thresholding


DEFAULT_SEMANTIC_ZOOM_CONFIG = SemanticZoomConfig()


@dataclass
class SemanticZoomMetrics:
    """Timings and counts for one semantic zoom decision."""

    focal_ms: float = 0.0
    filter_ms: float = 0.0
    total_ms: float = 0.0
    visible_before: int = 0
    visible_after: int = 0


@dataclass
class SemanticZoomResult:
    """Result of one semantic zoom decision cycle."""

    visible_ids: set[str]
    threshold: float
    focal_ids: list[str] = field(default_factory=list)
    metrics: SemanticZoomMetrics = field(default_factory=SemanticZoomMetrics)


# ============================================================================
# Threshold curve
# ============================================================================


def zoom_to_threshold(
    zoom_scale: float,
    config: SemanticZoomConfig = DEFAULT_SEMANTIC_ZOOM_CONFIG,
) -> float:
    """
    Map zoom scale to a similarity threshold.

    - At or below zoom_floor: min_threshold
    - At or above zoom_ceiling: max_threshold
    - In between: min + u^(1 + 2 * steepness) * (max - min)
    """
    if zoom_scale <= config.zoom_floor:
        return config.min_threshold
    if zoom_scale >= config.zoom_ceiling:
        return config.max_threshold

    normalized = (zoom_scale - config.zoom_floor) / (config.zoom_ceiling - config.zoom_floor)
    steepness = min(max(config.steepness, 0.0), 1.0)
    curved = normalized ** (1 + steepness * 2)
    return config.min_threshold + curved * (config.max_threshold - config.min_threshold)


def focal_radius_world(bounds: Bounds, config: SemanticZoomConfig = DEFAULT_SEMANTIC_ZOOM_CONFIG) -> float:
    """Focal radius in world units for the given viewport."""
    return config.focal_radius * bounds.diagonal


# ============================================================================
# Focal nodes and visibility
# ============================================================================


def _has_usable_embedding(node: Node) -> bool:
    return node.embedding is not None and not is_zero_vector(node.embedding)


def compute_focal_nodes(
    nodes: Iterable[Node],
    bounds: Bounds,
    center: Point,
    focal_radius: float,
) -> list[Node]:
    """
    Nodes near the screen centre used as semantic anchors.

    Only laid-out nodes inside the viewport with a usable embedding count.
    If none fall inside the radius, the single nearest one is used.
    """
    candidates = [
        node
        for node in nodes
        if node.has_position and _has_usable_embedding(node) and bounds.contains(node.x, node.y)
    ]
    if not candidates:
        return []

    def distance(node: Node) -> float:
        return math.hypot(node.x - center.x, node.y - center.y)

    focal = [node for node in candidates if distance(node) <= focal_radius]
    if focal:
        return focal
    return [min(candidates, key=distance)]


def compute_visible_set(
    nodes: Iterable[Node],
    focal_embeddings: list[np.ndarray],
    threshold: float,
) -> set[str]:
    """
    IDs of nodes similar to ANY focal embedding at or above threshold.

    Threshold <= 0 makes every node visible. Nodes without a usable
    embedding are left out here; they come back through adjacency.
    """
    nodes = list(nodes)
    if threshold <= 0:
        return {node.id for node in nodes}

    focal_ids, focal_matrix = embedding_matrix(
        (str(i), emb) for i, emb in enumerate(focal_embeddings)
    )
    if not focal_ids:
        return set()

    ids, matrix = embedding_matrix(
        ((node.id, node.embedding) for node in nodes),
        dimensions=focal_matrix.shape[1],
    )
    if not ids:
        return set()

    best = (matrix @ focal_matrix.T).max(axis=1)
    return {node_id for node_id, score in zip(ids, best) if score >= threshold}


def extend_visible_to_connected(visible_ids: set[str], adjacency: AdjacencyIndex) -> set[str]:
    """Add ALL direct neighbours of visible nodes, so keywords bring their content and vice versa."""
    extended = set(visible_ids)
    for node_id in visible_ids:
        extended.update(adjacency.neighbor_ids(node_id))
    return extended


def compute_semantic_zoom(
    snapshot: GraphSnapshot,
    bounds: Bounds,
    zoom_scale: float,
    config: SemanticZoomConfig = DEFAULT_SEMANTIC_ZOOM_CONFIG,
) -> SemanticZoomResult:
    """
    Run one semantic zoom decision cycle.

    Args:
        snapshot: Current nodes and edges
        bounds: Visible world rectangle
        zoom_scale: 2D zoom scale k (use camera_distance_to_scale for 3D)
        config: Threshold curve parameters

    Returns:
        SemanticZoomResult with visible ids, the threshold used and the focal ids
    """
    start_total = time.perf_counter()
    threshold = zoom_to_threshold(zoom_scale, config)
    metrics = SemanticZoomMetrics(visible_before=len(snapshot))

    start_focal = time.perf_counter()
    focal = compute_focal_nodes(
        snapshot.nodes, bounds, bounds.center, focal_radius_world(bounds, config)
    )
    metrics.focal_ms = (time.perf_counter() - start_focal) * 1000

    if not focal:
        # Nothing to anchor on: show everything
        visible = {node.id for node in snapshot.nodes}
    else:
        start_filter = time.perf_counter()
        visible = compute_visible_set(
            snapshot.nodes, [node.embedding for node in focal], threshold
        )
        visible = extend_visible_to_connected(visible, snapshot.adjacency)
        metrics.filter_ms = (time.perf_counter() - start_filter) * 1000

    # Pinned items are always shown
    visible.update(node.id for node in snapshot.nodes if node.is_pinned)

    metrics.visible_after = len(visible)
    metrics.total_ms = (time.perf_counter() - start_total) * 1000

    logger.debug(
        f"Semantic zoom k={zoom_scale:.2f} threshold={threshold:.3f}: "
        f"{len(focal)} focal, {metrics.visible_after}/{metrics.visible_before} visible "
        f"({metrics.total_ms:.1f}ms)"
    )

    return SemanticZoomResult(
        visible_ids=visible,
        threshold=threshold,
        focal_ids=[node.id for node in focal],
        metrics=metrics,
    )


# ============================================================================
# Hysteresis
# ============================================================================


def should_refilter(zoom_scale: float, last_committed: float | None, hysteresis: float) -> bool:
    """
    Whether a new zoom scale warrants re-thresholding.

    Zooming in past the committed level refilters immediately; zooming out
    must drop by at least `hysteresis` first.
    """
    if last_committed is None:
        return True
    if zoom_scale > last_committed:
        return True
    return last_committed - zoom_scale >= hysteresis


class ZoomHysteresis:
    """Caller-held last committed zoom level with a zoom-out dead zone."""

    def __init__(self, hysteresis: float | None = None) -> None:
        self.hysteresis = (
            hysteresis if hysteresis is not None else DEFAULT_SEMANTIC_ZOOM_CONFIG.hysteresis
        )
        self.last_committed: float | None = None

    def should_refilter(self, zoom_scale: float) -> bool:
        return should_refilter(zoom_scale, self.last_committed, self.hysteresis)

    def commit(self, zoom_scale: float) -> None:
        self.last_committed = zoom_scale

    def update(self, zoom_scale: float) -> bool:
        """Commit and return True if the zoom level crossed the dead zone."""
        if not self.should_refilter(zoom_scale):
            return False
        self.commit(zoom_scale)
        return True

    def reset(self) -> None:
        self.last_committed = None


# ============================================================================
# Position recovery
# ============================================================================


class PositionSource(Protocol):
    """Where remembered node positions are read from."""

    def get_position(self, node_id: str) -> Point | None: ...


class StoredPositions:
    """Dict-backed PositionSource, owned and updated by the caller."""

    def __init__(self, positions: dict[str, Point] | None = None) -> None:
        self._positions: dict[str, Point] = dict(positions or {})

    def get_position(self, node_id: str) -> Point | None:
        return self._positions.get(node_id)

    def remember(self, node_id: str, position: Point) -> None:
        self._positions[node_id] = position

    def forget(self, node_id: str) -> None:
        self._positions.pop(node_id, None)

    def __len__(self) -> int:
        return len(self._positions)


class PositionRecovery:
    """
    Places nodes re-entering visibility.

    Priority:
    1. Remembered position from the injected PositionSource
    2. Average of visible neighbours plus small jitter
    3. Graph centroid plus larger jitter
    """

    def __init__(
        self,
        positions: PositionSource,
        neighbor_jitter: float | None = None,
        centroid_jitter: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.positions = positions
        self.neighbor_jitter = (
            neighbor_jitter if neighbor_jitter is not None else settings.restore_neighbor_jitter
        )
        self.centroid_jitter = (
            centroid_jitter if centroid_jitter is not None else settings.restore_centroid_jitter
        )
        self.rng = rng or random.Random()

    def _jitter(self, width: float) -> float:
        return (self.rng.random() - 0.5) * width

    def restore(
        self,
        node_id: str,
        visible_nodes: Iterable[Node],
        adjacency: AdjacencyIndex,
        graph_centroid: Point,
    ) -> Point:
        stored = self.positions.get_position(node_id)
        if stored is not None:
            return stored

        neighbor_ids = adjacency.neighbor_ids(node_id)
        placed = [
            node for node in visible_nodes if node.id in neighbor_ids and node.has_position
        ]
        if placed:
            avg_x = sum(node.x for node in placed) / len(placed)
            avg_y = sum(node.y for node in placed) / len(placed)
            return Point(
                avg_x + self._jitter(self.neighbor_jitter),
                avg_y + self._jitter(self.neighbor_jitter),
            )

        return Point(
            graph_centroid.x + self._jitter(self.centroid_jitter),
            graph_centroid.y + self._jitter(self.centroid_jitter),
        )


def compute_restored_position(
    node_id: str,
    stored_positions: dict[str, Point],
    visible_nodes: Iterable[Node],
    adjacency: AdjacencyIndex,
    graph_centroid: Point,
    rng: random.Random | None = None,
) -> Point:
    """Convenience wrapper around PositionRecovery for a plain dict of positions."""
    recovery = PositionRecovery(StoredPositions(stored_positions), rng=rng)
    return recovery.restore(node_id, visible_nodes, adjacency, graph_centroid)
