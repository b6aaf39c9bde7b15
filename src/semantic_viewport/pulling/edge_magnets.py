"""Edge magnets: pull near-but-off-screen nodes to the viewport edge.

Algorithm:
1. Classify laid-out nodes: interior nodes form the primary set
2. Content-driven nodes (e.g. search hits) reserve slots and bypass
   ranking and anchor validation
3. Cliff and far-off-screen nodes need a direct edge to a primary node;
   chains of off-screen nodes that only reference each other are dropped
4. Survivors are ranked by their strongest edge to a primary node
5. Remaining capacity is filled in rank order
6. Pulled nodes are clamped into pull bounds; the true position is kept
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from semantic_viewport.config import settings
from semantic_viewport.geometry import Bounds, ViewportZones, Zone, classify
from semantic_viewport.models import AdjacencyIndex, Node

logger = logging.getLogger(__name__)


@dataclass
class PulledNode:
    """A node drawn at a clamped display position instead of its real one."""

    id: str
    display_x: float
    display_y: float
    real_x: float
    real_y: float
    connected_primary_ids: list[str] = field(default_factory=list)
    content_driven: bool = False


@dataclass
class PullState:
    """Edge magnet output for one frame."""

    pulled_map: dict[str, PulledNode]
    primary_set: set[str]

    def is_visible(self, node_id: str) -> bool:
        return node_id in self.primary_set or node_id in self.pulled_map


@dataclass
class _Candidate:
    node: Node
    best_weight: float
    connected_primary_ids: list[str]


def make_pulled_node(
    node: Node,
    bounds: Bounds,
    connected_primary_ids: list[str] | None = None,
    content_driven: bool = False,
) -> PulledNode:
    """Clamp a node into `bounds` while recording its untouched position."""
    display = bounds.clamp(node.x, node.y)
    return PulledNode(
        id=node.id,
        display_x=display.x,
        display_y=display.y,
        real_x=node.x,
        real_y=node.y,
        connected_primary_ids=list(connected_primary_ids or []),
        content_driven=content_driven,
    )


def _primary_anchors(
    node_id: str,
    primary_set: set[str],
    adjacency: AdjacencyIndex,
) -> tuple[float, list[str]]:
    """Strongest edge weight to a primary node and the primary ids, strongest first."""
    anchors = sorted(
        (n for n in adjacency.neighbors(node_id) if n.id in primary_set),
        key=lambda n: (-n.weight, n.id),
    )
    if not anchors:
        return float("-inf"), []
    return anchors[0].weight, [n.id for n in anchors]


def compute_pull_state(
    nodes: Iterable[Node],
    adjacency: AdjacencyIndex,
    zones: ViewportZones,
    max_pulled: int | None = None,
    content_driven_ids: Iterable[str] | None = None,
    focused_ids: Iterable[str] | None = None,
) -> PullState:
    """
    Decide which nodes are primary and which are pulled to the edge.

    Args:
        nodes: All nodes in the snapshot (nodes without a position are skipped)
        adjacency: Weighted adjacency index
        zones: Viewport zones for this frame
        max_pulled: Capacity for adjacency-ranked pulls
        content_driven_ids: Nodes whose visibility is demanded externally;
            always primary or pulled, never counted against ranking
        focused_ids: Focus-mode nodes; kept inside the inner focus pull bounds
            and exempt from anchor validation

    Returns:
        PullState with pulled_map (id -> PulledNode) and primary_set
    """
    max_pulled = settings.max_pulled_nodes if max_pulled is None else max(0, max_pulled)
    content_driven = set(content_driven_ids or ())
    focused = set(focused_ids or ())

    placed: dict[str, Node] = {}
    primary_set: set[str] = set()
    off_screen: list[Node] = []

    for node in nodes:
        if not node.has_position:
            continue
        placed[node.id] = node
        if node.id in focused:
            if zones.focus_pull_bounds.contains(node.x, node.y):
                primary_set.add(node.id)
            continue
        if classify(node.x, node.y, zones) == Zone.INTERIOR:
            primary_set.add(node.id)
        else:
            off_screen.append(node)

    pulled_map: dict[str, PulledNode] = {}

    # Focused nodes stay visible in the inner ring regardless of anchors
    for node_id in sorted(focused):
        node = placed.get(node_id)
        if node is None or node_id in primary_set:
            continue
        _, anchors = _primary_anchors(node_id, primary_set, adjacency)
        pulled_map[node_id] = make_pulled_node(
            node, zones.focus_pull_bounds, anchors, content_driven=node_id in content_driven
        )

    # Content-driven nodes reserve slots ahead of ranked candidates
    for node_id in sorted(content_driven):
        node = placed.get(node_id)
        if node is None or node_id in primary_set or node_id in pulled_map:
            continue
        _, anchors = _primary_anchors(node_id, primary_set, adjacency)
        pulled_map[node_id] = make_pulled_node(
            node, zones.pull_bounds, anchors, content_driven=True
        )

    # Anchor validation: only nodes with a direct edge to a primary survive
    candidates: list[_Candidate] = []
    discarded = 0
    for node in off_screen:
        if node.id in pulled_map:
            continue
        best_weight, anchors = _primary_anchors(node.id, primary_set, adjacency)
        if not anchors:
            discarded += 1
            continue
        candidates.append(_Candidate(node, best_weight, anchors))

    candidates.sort(key=lambda c: (-c.best_weight, c.node.id))
    reserved = sum(1 for node_id in pulled_map if pulled_map[node_id].content_driven)
    slots = max(0, max_pulled - reserved)

    for candidate in candidates[:slots]:
        pulled_map[candidate.node.id] = make_pulled_node(
            candidate.node, zones.pull_bounds, candidate.connected_primary_ids
        )

    logger.debug(
        f"Edge magnets: {len(primary_set)} primary, {len(pulled_map)} pulled "
        f"({reserved} content-driven, {len(candidates)} ranked, {discarded} unanchored)"
    )

    return PullState(pulled_map=pulled_map, primary_set=primary_set)
