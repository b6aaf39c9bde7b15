"""Unit tests for data models."""

import numpy as np

from semantic_viewport.models import (
    AdjacencyIndex,
    Edge,
    GraphSnapshot,
    Node,
    NodeKind,
    Point,
)


class TestNode:
    """Tests for Node model."""

    def test_create_node(self) -> None:
        """Test creating a keyword node."""
        node = Node(id="docker", x=1.0, y=2.0, embedding=[1.0, 0.0])
        assert node.kind == NodeKind.KEYWORD
        assert node.has_position
        assert node.position == Point(1.0, 2.0)
        assert isinstance(node.embedding, np.ndarray)
        assert not node.is_pinned

    def test_unplaced_node(self) -> None:
        """A node without coordinates has no position."""
        node = Node(id="docker")
        assert not node.has_position
        assert node.position is None

    def test_zero_coordinate_is_placed(self) -> None:
        node = Node(id="origin", x=0.0, y=0.0)
        assert node.has_position

    def test_node_from_dict(self) -> None:
        """Test creating node from dictionary."""
        data = {
            "id": "chunk-1",
            "x": 3,
            "y": 4,
            "kind": "content",
            "parent_ids": ["docker"],
        }
        node = Node.from_dict(data)
        assert node.id == "chunk-1"
        assert node.kind == NodeKind.CONTENT
        assert node.parent_ids == ["docker"]
        assert node.embedding is None

    def test_pinned_node(self) -> None:
        node = Node.from_dict({"id": "proj:1", "kind": "pinned"})
        assert node.is_pinned


class TestAdjacencyIndex:
    """Tests for AdjacencyIndex."""

    def test_bidirectional(self) -> None:
        """Edges are registered in both directions."""
        adjacency = AdjacencyIndex([Edge("a", "b", 0.5)])
        assert adjacency.neighbor_ids("a") == frozenset({"b"})
        assert adjacency.neighbor_ids("b") == frozenset({"a"})
        assert adjacency.weight("b", "a") == 0.5

    def test_duplicate_edges_keep_strongest(self) -> None:
        adjacency = AdjacencyIndex([Edge("a", "b", 0.3), Edge("b", "a", 0.7)])
        assert adjacency.weight("a", "b") == 0.7
        assert len(adjacency.neighbors("a")) == 1

    def test_self_loops_ignored(self) -> None:
        adjacency = AdjacencyIndex([Edge("a", "a")])
        assert "a" not in adjacency
        assert len(adjacency) == 0

    def test_unknown_node(self) -> None:
        adjacency = AdjacencyIndex()
        assert adjacency.neighbors("missing") == ()
        assert adjacency.neighbor_ids("missing") == frozenset()
        assert adjacency.weight("missing", "other") is None

    def test_from_pairs(self) -> None:
        adjacency = AdjacencyIndex.from_pairs([("a", "b"), ("b", "c")])
        assert adjacency.neighbor_ids("b") == frozenset({"a", "c"})
        assert adjacency.weight("a", "b") == 1.0


class TestGraphSnapshot:
    """Tests for GraphSnapshot."""

    def test_lookup(self, topic_graph: GraphSnapshot) -> None:
        assert topic_graph.get("docker").x == 0
        assert topic_graph.get("missing") is None
        assert len(topic_graph) == 8

    def test_embeddings_skip_missing(self, topic_graph: GraphSnapshot) -> None:
        """Nodes without an embedding are left out of the lookup."""
        assert "chunk-docker" not in topic_graph.embeddings
        assert "docker" in topic_graph.embeddings

    def test_centroid_position(self) -> None:
        snapshot = GraphSnapshot([
            Node("a", 0, 0),
            Node("b", 10, 20),
            Node("unplaced"),
        ])
        assert snapshot.centroid_position == Point(5.0, 10.0)

    def test_centroid_position_empty(self) -> None:
        assert GraphSnapshot([]).centroid_position == Point(0.0, 0.0)
