#!/usr/bin/env python3
"""Visibility engine benchmark CLI.

Builds a synthetic clustered graph and times the per-frame decisions:
- hover highlighting
- semantic zoom
- edge magnets (keywords and content)

Usage:
    python scripts/benchmark_visibility.py --help
    python scripts/benchmark_visibility.py config
    python scripts/benchmark_visibility.py hover --nodes 5000
    python scripts/benchmark_visibility.py all --nodes 2000 --frames 50
"""

import argparse
import logging
import random
import statistics
import sys
import time
from collections.abc import Callable
from pathlib import Path

import numpy as np

# Add src to path for local imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from semantic_viewport.config import settings
from semantic_viewport.filtering import compute_hover_highlight
from semantic_viewport.geometry import ScreenSize, Transform, zones_from_transform
from semantic_viewport.models import Edge, GraphSnapshot, Node, NodeKind, Point
from semantic_viewport.pulling import compute_content_pull_state, compute_pull_state
from semantic_viewport.zoom import calculate_scales, compute_semantic_zoom, zoom_desaturation

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SCREEN = ScreenSize(1600, 1000)


def build_graph(
    num_nodes: int,
    num_clusters: int,
    dimensions: int,
    content_ratio: float,
    seed: int,
) -> GraphSnapshot:
    """Clustered keywords with content chunks hanging off them."""
    rng = random.Random(seed)
    np_rng = np.random.default_rng(seed)

    cluster_centers = [
        (rng.uniform(-2000, 2000), rng.uniform(-2000, 2000)) for _ in range(num_clusters)
    ]
    cluster_directions = np_rng.normal(size=(num_clusters, dimensions))

    num_content = int(num_nodes * content_ratio)
    num_keywords = num_nodes - num_content

    nodes: list[Node] = []
    edges: list[Edge] = []
    members: dict[int, list[str]] = {i: [] for i in range(num_clusters)}

    for i in range(num_keywords):
        cluster = rng.randrange(num_clusters)
        cx, cy = cluster_centers[cluster]
        embedding = cluster_directions[cluster] + np_rng.normal(scale=0.4, size=dimensions)
        node_id = f"kw-{i}"
        nodes.append(Node(node_id, cx + rng.gauss(0, 150), cy + rng.gauss(0, 150), embedding))

        for other in rng.sample(members[cluster], min(3, len(members[cluster]))):
            edges.append(Edge(node_id, other, round(rng.uniform(0.3, 1.0), 3)))
        members[cluster].append(node_id)

    keywords = list(nodes)
    for i in range(num_content):
        parent = rng.choice(keywords)
        chunk_id = f"chunk-{i}"
        nodes.append(Node(
            chunk_id,
            parent.x + rng.gauss(0, 20),
            parent.y + rng.gauss(0, 20),
            kind=NodeKind.CONTENT,
            parent_ids=[parent.id],
        ))
        edges.append(Edge(parent.id, chunk_id, 1.0))

    logger.info(f"Built graph: {num_keywords} keywords, {num_content} chunks, {len(edges)} edges")
    return GraphSnapshot(nodes, edges)


def time_frames(name: str, frames: int, fn: Callable[[int], int]) -> None:
    """Run `fn` per frame and print timing stats; fn returns a result size."""
    durations = []
    sizes = []
    for frame in range(frames):
        start = time.perf_counter()
        sizes.append(fn(frame))
        durations.append((time.perf_counter() - start) * 1000)

    print(f"{name}:")
    print(f"  mean:   {statistics.mean(durations):.2f}ms")
    print(f"  median: {statistics.median(durations):.2f}ms")
    print(f"  max:    {max(durations):.2f}ms")
    print(f"  result: {statistics.mean(sizes):.1f} ids/frame")
    print()


def frame_transform(rng: random.Random) -> Transform:
    """A camera wandering over the graph at varying zoom."""
    k = rng.uniform(0.2, 3.0)
    wx, wy = rng.uniform(-2000, 2000), rng.uniform(-2000, 2000)
    return Transform(k=k, x=SCREEN.width / 2 - wx * k, y=SCREEN.height / 2 - wy * k)


def benchmark_hover(snapshot: GraphSnapshot, frames: int, seed: int) -> None:
    rng = random.Random(seed)
    embeddings = snapshot.embeddings

    def run(frame: int) -> int:
        transform = frame_transform(rng)
        cursor = Point(rng.uniform(0, SCREEN.width), rng.uniform(0, SCREEN.height))
        highlight = compute_hover_highlight(
            snapshot.nodes, cursor, transform, embeddings, snapshot.adjacency
        )
        return len(highlight.highlighted_ids)

    time_frames("Hover highlight", frames, run)


def benchmark_zoom(snapshot: GraphSnapshot, frames: int, seed: int) -> None:
    rng = random.Random(seed)

    def run(frame: int) -> int:
        transform = frame_transform(rng)
        zones = zones_from_transform(transform, SCREEN)
        result = compute_semantic_zoom(snapshot, zones.viewport, transform.k)
        return len(result.visible_ids)

    time_frames("Semantic zoom", frames, run)

    print("Phase curves (camera_z -> desaturation, keyword scale, content scale):")
    for camera_z in (20000, 13961, 5000, 3736, 2052, 500, 50):
        scales = calculate_scales(camera_z)
        print(
            f"  z={camera_z:6d}  desat={zoom_desaturation(camera_z):.3f}  "
            f"kw={scales.keyword_scale:.3f}  content={scales.content_scale:.3f}"
        )
    print()


def benchmark_pull(snapshot: GraphSnapshot, frames: int, seed: int) -> None:
    rng = random.Random(seed)
    keywords = [node for node in snapshot.nodes if node.kind != NodeKind.CONTENT]
    content = [node for node in snapshot.nodes if node.kind == NodeKind.CONTENT]

    def run(frame: int) -> int:
        zones = zones_from_transform(frame_transform(rng), SCREEN)
        state = compute_pull_state(keywords, snapshot.adjacency, zones)
        content_pulled = compute_content_pull_state(content, state.primary_set, zones)
        return len(state.pulled_map) + len(content_pulled)

    time_frames("Edge magnets", frames, run)


def show_config() -> None:
    """Show current engine settings."""
    print("\n=== Current Configuration ===\n")
    for name, value in settings.model_dump().items():
        print(f"  {name}: {value}")
    print()


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Visibility engine benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s config               Show current configuration
  %(prog)s hover                Time hover highlighting
  %(prog)s zoom                 Time semantic zoom and print phase curves
  %(prog)s pull                 Time edge magnets
  %(prog)s all                  Run everything
        """,
    )

    parser.add_argument(
        "command",
        choices=["config", "hover", "zoom", "pull", "all"],
        help="Benchmark to run",
    )
    parser.add_argument("--nodes", type=int, default=2000, help="Total node count")
    parser.add_argument("--clusters", type=int, default=12, help="Topic clusters")
    parser.add_argument("--dimensions", type=int, default=384, help="Embedding dimensions")
    parser.add_argument("--content-ratio", type=float, default=0.3, help="Share of content nodes")
    parser.add_argument("--frames", type=int, default=100, help="Frames per benchmark")
    parser.add_argument("--seed", type=int, default=42)

    args = parser.parse_args()

    if args.command == "config":
        show_config()
        return

    snapshot = build_graph(
        args.nodes, args.clusters, args.dimensions, args.content_ratio, args.seed
    )

    print()
    if args.command in ("hover", "all"):
        benchmark_hover(snapshot, args.frames, args.seed)
    if args.command in ("zoom", "all"):
        benchmark_zoom(snapshot, args.frames, args.seed)
    if args.command in ("pull", "all"):
        benchmark_pull(snapshot, args.frames, args.seed)


if __name__ == "__main__":
    main()
