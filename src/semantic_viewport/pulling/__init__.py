"""Edge magnets: pulling off-screen nodes to the viewport boundary."""

from semantic_viewport.pulling.content_pull import compute_content_pull_state
from semantic_viewport.pulling.edge_magnets import (
    PulledNode,
    PullState,
    compute_pull_state,
    make_pulled_node,
)

__all__ = [
    "PulledNode",
    "PullState",
    "compute_pull_state",
    "make_pulled_node",
    "compute_content_pull_state",
]
