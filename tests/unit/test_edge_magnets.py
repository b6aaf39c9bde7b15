"""Unit tests for edge magnets."""

from semantic_viewport.geometry import Bounds, ViewportZones
from semantic_viewport.models import AdjacencyIndex, Edge, Node, NodeKind
from semantic_viewport.pulling import (
    compute_content_pull_state,
    compute_pull_state,
    make_pulled_node,
)


class TestAnchorValidation:
    """Tests for which off-screen nodes may be pulled."""

    def test_cliff_and_far_nodes_with_primary_edge(self, zones: ViewportZones) -> None:
        nodes = [
            Node("primary", 0, 0),
            Node("cliff", 4.5, 0),
            Node("far", 10, 0),
            Node("orphan", 10, 10),
        ]
        adjacency = AdjacencyIndex([Edge("primary", "cliff", 0.5), Edge("primary", "far", 0.5)])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.primary_set == {"primary"}
        assert set(state.pulled_map) == {"cliff", "far"}
        assert not state.is_visible("orphan")

    def test_off_screen_chains_dropped(self, zones: ViewportZones) -> None:
        """Off-screen nodes that only reference each other are never pulled."""
        nodes = [Node("primary", 0, 0), Node("x", 10, 0), Node("y", 12, 0)]
        adjacency = AdjacencyIndex([Edge("x", "y", 0.9)])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.pulled_map == {}

    def test_primary_never_pulled(self, zones: ViewportZones) -> None:
        nodes = [Node("a", 0, 0), Node("b", 3, 3)]
        adjacency = AdjacencyIndex([Edge("a", "b", 1.0)])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.primary_set == {"a", "b"}
        assert state.pulled_map == {}

    def test_zero_primaries(self, zones: ViewportZones) -> None:
        nodes = [Node("x", 10, 0), Node("y", -10, 0)]
        adjacency = AdjacencyIndex([Edge("x", "y")])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.primary_set == set()
        assert state.pulled_map == {}

    def test_unplaced_nodes_skipped(self, zones: ViewportZones) -> None:
        nodes = [Node("primary", 0, 0), Node("unplaced")]
        adjacency = AdjacencyIndex([Edge("primary", "unplaced")])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.primary_set == {"primary"}
        assert not state.is_visible("unplaced")


class TestPulledPositions:
    """Tests for display clamping and real position fidelity."""

    def test_clamped_into_pull_bounds(self, zones: ViewportZones) -> None:
        nodes = [Node("primary", 0, 0), Node("right", 10, 2), Node("corner", -20, -30)]
        adjacency = AdjacencyIndex([Edge("primary", "right"), Edge("primary", "corner")])

        state = compute_pull_state(nodes, adjacency, zones)

        right = state.pulled_map["right"]
        assert (right.display_x, right.display_y) == (4, 2)
        assert (right.real_x, right.real_y) == (10, 2)
        corner = state.pulled_map["corner"]
        assert (corner.display_x, corner.display_y) == (-4, -4)
        assert (corner.real_x, corner.real_y) == (-20, -30)

    def test_input_nodes_untouched(self, zones: ViewportZones) -> None:
        far = Node("far", 10, 2)
        compute_pull_state(
            [Node("primary", 0, 0), far], AdjacencyIndex([Edge("primary", "far")]), zones
        )
        assert (far.x, far.y) == (10, 2)

    def test_make_pulled_node(self) -> None:
        pulled = make_pulled_node(Node("n", 7, -1), Bounds(-4, 4, -4, 4), ["p"])
        assert (pulled.display_x, pulled.display_y) == (4, -1)
        assert pulled.connected_primary_ids == ["p"]
        assert not pulled.content_driven


class TestCapacity:
    """Tests for ranking under limited capacity."""

    def test_strongest_edges_win(self, zones: ViewportZones) -> None:
        nodes = [Node("primary", 0, 0)]
        edges = []
        for i, weight in enumerate([0.1, 0.5, 0.3, 0.4, 0.2]):
            nodes.append(Node(f"n{i}", 10 + i, 0))
            edges.append(Edge("primary", f"n{i}", weight))

        state = compute_pull_state(nodes, AdjacencyIndex(edges), zones, max_pulled=2)

        assert set(state.pulled_map) == {"n1", "n3"}

    def test_ties_broken_by_id(self, zones: ViewportZones) -> None:
        nodes = [Node("primary", 0, 0), Node("b", 10, 0), Node("a", 12, 0)]
        adjacency = AdjacencyIndex([Edge("primary", "a", 0.5), Edge("primary", "b", 0.5)])

        state = compute_pull_state(nodes, adjacency, zones, max_pulled=1)

        assert set(state.pulled_map) == {"a"}

    def test_connected_primary_ids_strongest_first(self, zones: ViewportZones) -> None:
        nodes = [Node("p1", 0, 0), Node("p2", 1, 1), Node("off", 10, 0)]
        adjacency = AdjacencyIndex([Edge("p1", "off", 0.2), Edge("p2", "off", 0.9)])

        state = compute_pull_state(nodes, adjacency, zones)

        assert state.pulled_map["off"].connected_primary_ids == ["p2", "p1"]

    def test_zero_capacity(self, zones: ViewportZones) -> None:
        """With no capacity only content-driven nodes are pulled."""
        nodes = [Node("primary", 0, 0), Node("ranked", 10, 0), Node("hit", -10, 0)]
        adjacency = AdjacencyIndex([Edge("primary", "ranked", 0.9)])

        state = compute_pull_state(
            nodes, adjacency, zones, max_pulled=0, content_driven_ids=["hit"]
        )

        assert set(state.pulled_map) == {"hit"}


class TestContentDriven:
    """Tests for externally demanded nodes."""

    def test_pulled_in_every_zone(self, zones: ViewportZones) -> None:
        nodes = [
            Node("inside", 1, 1),
            Node("cliff", 4.5, 0),
            Node("far", 50, 50),
        ]
        state = compute_pull_state(
            nodes,
            AdjacencyIndex(),
            zones,
            content_driven_ids=["inside", "cliff", "far"],
        )

        assert state.primary_set == {"inside"}
        assert set(state.pulled_map) == {"cliff", "far"}
        assert all(pulled.content_driven for pulled in state.pulled_map.values())
        assert (state.pulled_map["far"].display_x, state.pulled_map["far"].display_y) == (4, 4)

    def test_reserved_before_ranking(self, zones: ViewportZones) -> None:
        """Content-driven nodes survive a tight capacity and use up its slots."""
        nodes = [
            Node("primary", 0, 0),
            Node("hit-1", 10, 0),
            Node("hit-2", -10, 0),
            Node("ranked", 0, 10),
        ]
        adjacency = AdjacencyIndex([Edge("primary", "ranked", 1.0)])

        state = compute_pull_state(
            nodes, adjacency, zones, max_pulled=1, content_driven_ids=["hit-1", "hit-2"]
        )

        assert set(state.pulled_map) == {"hit-1", "hit-2"}

    def test_remaining_slots_filled(self, zones: ViewportZones) -> None:
        nodes = [Node("primary", 0, 0), Node("hit", 10, 0), Node("ranked", 0, 10)]
        adjacency = AdjacencyIndex([Edge("primary", "ranked", 1.0)])

        state = compute_pull_state(
            nodes, adjacency, zones, max_pulled=2, content_driven_ids=["hit"]
        )

        assert set(state.pulled_map) == {"hit", "ranked"}
        assert not state.pulled_map["ranked"].content_driven


class TestFocusedNodes:
    """Tests for focus-mode pulling."""

    def test_focused_inside_focus_bounds_is_primary(self, zones: ViewportZones) -> None:
        state = compute_pull_state([Node("f", 1, 1)], AdjacencyIndex(), zones, focused_ids=["f"])
        assert state.primary_set == {"f"}

    def test_focused_clamped_to_inner_line(self, zones: ViewportZones) -> None:
        """Focused nodes outside the inner line are drawn on it, anchors or not."""
        nodes = [Node("near", 3, 0), Node("far", 40, -40)]
        state = compute_pull_state(
            nodes, AdjacencyIndex(), zones, focused_ids=["near", "far"]
        )

        assert state.primary_set == set()
        near = state.pulled_map["near"]
        assert (near.display_x, near.display_y) == (2, 0)
        far = state.pulled_map["far"]
        assert (far.display_x, far.display_y) == (2, -2)


class TestContentPull:
    """Tests for content edge magnets."""

    def test_pulled_only_with_primary_parent(self, zones: ViewportZones) -> None:
        content = [
            Node("anchored", 10, 0, kind=NodeKind.CONTENT, parent_ids=["kw"]),
            Node("stray", -10, 0, kind=NodeKind.CONTENT, parent_ids=["other"]),
        ]
        pulled = compute_content_pull_state(content, {"kw"}, zones)

        assert set(pulled) == {"anchored"}
        assert pulled["anchored"].connected_primary_ids == ["kw"]
        assert (pulled["anchored"].display_x, pulled["anchored"].display_y) == (4, 0)

    def test_interior_content_not_pulled(self, zones: ViewportZones) -> None:
        content = [Node("inside", 1, 1, kind=NodeKind.CONTENT, parent_ids=["kw"])]
        assert compute_content_pull_state(content, {"kw"}, zones) == {}

    def test_viewport_edge_content_always_clamped(self, zones: ViewportZones) -> None:
        """Content between the pull line and the screen edge ignores capacity."""
        content = [
            Node("edge", 4.5, 0, kind=NodeKind.CONTENT, parent_ids=["kw"]),
            Node("off", 10, 0, kind=NodeKind.CONTENT, parent_ids=["kw"]),
        ]
        pulled = compute_content_pull_state(content, {"kw"}, zones, max_pulled=0)

        assert set(pulled) == {"edge"}
        assert pulled["edge"].display_x == 4

    def test_off_screen_capacity_in_input_order(self, zones: ViewportZones) -> None:
        content = [
            Node("first", 10, 0, kind=NodeKind.CONTENT, parent_ids=["kw"]),
            Node("second", -10, 0, kind=NodeKind.CONTENT, parent_ids=["kw"]),
            Node("third", 0, 10, kind=NodeKind.CONTENT, parent_ids=["kw"]),
        ]
        pulled = compute_content_pull_state(content, {"kw"}, zones, max_pulled=2)

        assert set(pulled) == {"first", "second"}
