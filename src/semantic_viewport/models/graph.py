"""Graph snapshot and adjacency index built once per snapshot."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property

import numpy as np

from semantic_viewport.models.node import Edge, Node, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbor:
    """A neighbour entry in the adjacency index."""

    id: str
    weight: float


class AdjacencyIndex:
    """
    Node id -> neighbours with weights.

    Edges are unordered, so each edge is registered in both directions.
    Duplicate edges keep the strongest weight. Read-only after construction.
    """

    def __init__(self, edges: Iterable[Edge] = ()) -> None:
        weights: dict[str, dict[str, float]] = defaultdict(dict)
        for edge in edges:
            if edge.source == edge.target:
                continue
            for a, b in ((edge.source, edge.target), (edge.target, edge.source)):
                if edge.weight > weights[a].get(b, float("-inf")):
                    weights[a][b] = edge.weight
        self._neighbors: dict[str, tuple[Neighbor, ...]] = {
            node_id: tuple(Neighbor(nid, w) for nid, w in targets.items())
            for node_id, targets in weights.items()
        }
        self._neighbor_ids: dict[str, frozenset[str]] = {
            node_id: frozenset(targets) for node_id, targets in weights.items()
        }

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "AdjacencyIndex":
        """Build from unweighted (source, target) pairs (weight 1.0)."""
        return cls(Edge(source, target) for source, target in pairs)

    def neighbors(self, node_id: str) -> tuple[Neighbor, ...]:
        return self._neighbors.get(node_id, ())

    def neighbor_ids(self, node_id: str) -> frozenset[str]:
        return self._neighbor_ids.get(node_id, frozenset())

    def weight(self, a: str, b: str) -> float | None:
        """Edge weight between a and b, or None if not adjacent."""
        for neighbor in self.neighbors(a):
            if neighbor.id == b:
                return neighbor.weight
        return None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._neighbors

    def __len__(self) -> int:
        return len(self._neighbors)


class GraphSnapshot:
    """
    Immutable view of nodes and edges for one or more decision cycles.

    Nodes are addressed by their string id. Filters read from the snapshot
    and write results into their own output structures; nothing mutates
    the nodes held here.
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge] = ()) -> None:
        self.nodes: list[Node] = list(nodes)
        self.edges: list[Edge] = list(edges)
        self.node_by_id: dict[str, Node] = {node.id: node for node in self.nodes}
        if len(self.node_by_id) != len(self.nodes):
            logger.warning(
                f"Snapshot has duplicate node ids: {len(self.nodes)} nodes, "
                f"{len(self.node_by_id)} unique"
            )
        self.adjacency = AdjacencyIndex(self.edges)

    def get(self, node_id: str) -> Node | None:
        return self.node_by_id.get(node_id)

    @cached_property
    def embeddings(self) -> dict[str, np.ndarray]:
        """Node id -> embedding for nodes that carry one."""
        return {
            node.id: node.embedding for node in self.nodes if node.embedding is not None
        }

    @cached_property
    def centroid_position(self) -> Point:
        """Mean position of all laid-out nodes (origin when none are placed)."""
        placed = [node for node in self.nodes if node.has_position]
        if not placed:
            return Point(0.0, 0.0)
        return Point(
            sum(node.x for node in placed) / len(placed),
            sum(node.y for node in placed) / len(placed),
        )

    def __len__(self) -> int:
        return len(self.nodes)
