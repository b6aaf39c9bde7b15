"""Pytest configuration and fixtures."""

import pytest

from semantic_viewport.config import Settings, get_test_settings
from semantic_viewport.geometry import Bounds, ViewportZones
from semantic_viewport.models import Edge, GraphSnapshot, Node, NodeKind


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults, ignoring any local .env."""
    return get_test_settings()


@pytest.fixture
def zones() -> ViewportZones:
    """Square viewport [-5, 5] with pull bounds [-4, 4] and overscan to [-6, 6]."""
    return ViewportZones(
        viewport=Bounds(left=-5, right=5, bottom=-5, top=5),
        pull_bounds=Bounds(left=-4, right=4, bottom=-4, top=4),
        focus_pull_bounds=Bounds(left=-2, right=2, bottom=-2, top=2),
        extended_viewport=Bounds(left=-6, right=6, bottom=-6, top=6),
        world_per_px=1 / 100,
    )


@pytest.fixture
def topic_graph() -> GraphSnapshot:
    """
    Two topics laid out side by side plus a pinned item.

    Containers sit around the origin, cooking around x=500 and
    kubernetes (similar to docker) far away at (1000, 1000).
    """
    nodes = [
        Node("docker", 0, 0, [1.0, 0.0, 0.0]),
        Node("container", 10, 0, [0.95, 0.05, 0.0]),
        Node("image", 0, 10, [0.9, 0.1, 0.0]),
        Node("chunk-docker", 5, 5, kind=NodeKind.CONTENT, parent_ids=["docker"]),
        Node("recipe", 500, 0, [0.0, 1.0, 0.0]),
        Node("oven", 510, 0, [0.0, 0.95, 0.05]),
        Node("kubernetes", 1000, 1000, [0.97, 0.0, 0.03]),
        Node("proj:notes", 2, -2, [0.0, 0.0, 1.0], NodeKind.PINNED),
    ]
    edges = [
        Edge("docker", "container", 0.9),
        Edge("docker", "image", 0.8),
        Edge("docker", "chunk-docker", 0.7),
        Edge("recipe", "oven", 0.85),
    ]
    return GraphSnapshot(nodes, edges)
