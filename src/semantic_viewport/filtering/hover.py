"""Hover highlight: spatial-semantic filter minus pinned items."""

from dataclasses import dataclass

from semantic_viewport.config import settings
from semantic_viewport.filtering.spatial_semantic import (
    EmbeddingLookup,
    FilterDebug,
    ScreenProjector,
    spatial_semantic_filter,
)
from semantic_viewport.geometry import Transform
from semantic_viewport.models import AdjacencyIndex, Node, Point


@dataclass
class HoverHighlight:
    """What the renderer needs for hover styling."""

    highlighted_ids: set[str]  # Never contains pinned items
    is_empty_space: bool  # True restores full opacity
    spatial_ids: set[str]
    debug: FilterDebug


def compute_hover_highlight(
    nodes: list[Node],
    screen_center: Point,
    transform: Transform,
    embeddings: EmbeddingLookup,
    adjacency: AdjacencyIndex,
    screen_radius: float | None = None,
    similarity_threshold: float | None = None,
    projector: ScreenProjector | None = None,
) -> HoverHighlight:
    """
    Compute highlighted node ids for a cursor position.

    Pinned items are always shown, so they are removed from the highlight
    set rather than dimmed.
    """
    result = spatial_semantic_filter(
        nodes=nodes,
        screen_center=screen_center,
        screen_radius=screen_radius if screen_radius is not None else settings.hover_radius_px,
        transform=transform,
        similarity_threshold=(
            similarity_threshold
            if similarity_threshold is not None
            else settings.hover_similarity_threshold
        ),
        embeddings=embeddings,
        adjacency=adjacency,
        projector=projector,
    )

    pinned_ids = {node.id for node in nodes if node.is_pinned}

    return HoverHighlight(
        highlighted_ids=result.highlighted_ids - pinned_ids,
        is_empty_space=result.is_empty_space,
        spatial_ids=result.spatial_ids,
        debug=result.debug,
    )
