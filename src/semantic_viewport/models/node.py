"""Node and edge models - the snapshot the engine reads each decision cycle."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class NodeKind(str, Enum):
    """Kind of entity a node represents on the map."""

    KEYWORD = "keyword"  # Summarising keyword
    CONTENT = "content"  # Content fragment (chunk) summarised by keywords
    PINNED = "pinned"  # Pinned item: always shown, never dimmed by hover


@dataclass(frozen=True)
class Point:
    """A 2D point, in either screen pixels or world units depending on context."""

    x: float
    y: float


@dataclass(eq=False)
class Node:
    """
    A node in the semantic map.

    Position is absent until the simulation lays the node out. The embedding
    may or may not be pre-normalised depending on the caller.
    """

    id: str
    x: float | None = None
    y: float | None = None
    embedding: np.ndarray | None = None
    kind: NodeKind = NodeKind.KEYWORD

    # Keyword ids a content node belongs to (empty for keywords)
    parent_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.embedding is not None and not isinstance(self.embedding, np.ndarray):
            self.embedding = np.asarray(self.embedding, dtype=np.float64)

    @property
    def has_position(self) -> bool:
        """True once the simulation has placed the node."""
        return self.x is not None and self.y is not None

    @property
    def position(self) -> Point | None:
        if not self.has_position:
            return None
        return Point(self.x, self.y)

    @property
    def is_pinned(self) -> bool:
        return self.kind == NodeKind.PINNED

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        """Create from a plain dictionary (e.g. a JSON graph export)."""
        return cls(
            id=data["id"],
            x=data.get("x"),
            y=data.get("y"),
            embedding=data.get("embedding"),
            kind=NodeKind(data.get("kind", NodeKind.KEYWORD.value)),
            parent_ids=data.get("parent_ids") or [],
        )


@dataclass(frozen=True)
class Edge:
    """
    An unordered, weighted edge between two nodes.

    The weight is the similarity in [0, 1]; it doubles as a ranking key
    for edge magnets.
    """

    source: str
    target: str
    weight: float = 1.0
