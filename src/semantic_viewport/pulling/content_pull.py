"""Edge magnets for content nodes anchored by their parent keywords."""

import logging
from collections.abc import Iterable

from semantic_viewport.config import settings
from semantic_viewport.geometry import ViewportZones
from semantic_viewport.models import Node
from semantic_viewport.pulling.edge_magnets import PulledNode, make_pulled_node

logger = logging.getLogger(__name__)


def compute_content_pull_state(
    content_nodes: Iterable[Node],
    primary_keyword_ids: set[str],
    zones: ViewportZones,
    max_pulled: int | None = None,
) -> dict[str, PulledNode]:
    """
    Pull content whose parent keyword is primary.

    Content in the cliff zone inside the viewport is always clamped.
    Content outside the viewport fills up to `max_pulled` slots in input order.
    Content with no primary parent is never pulled.
    """
    max_pulled = settings.max_pulled_content_nodes if max_pulled is None else max(0, max_pulled)
    pulled_map: dict[str, PulledNode] = {}
    off_screen: list[tuple[Node, list[str]]] = []

    for node in content_nodes:
        if not node.has_position:
            continue
        parents = [pid for pid in node.parent_ids if pid in primary_keyword_ids]
        if not parents:
            continue

        if zones.viewport.contains(node.x, node.y):
            if not zones.pull_bounds.contains(node.x, node.y):
                pulled_map[node.id] = make_pulled_node(node, zones.pull_bounds, parents)
            continue

        off_screen.append((node, parents))

    for node, parents in off_screen[:max_pulled]:
        pulled_map[node.id] = make_pulled_node(node, zones.pull_bounds, parents)

    logger.debug(
        f"Content magnets: {len(pulled_map)} pulled "
        f"({min(len(off_screen), max_pulled)}/{len(off_screen)} off-screen)"
    )

    return pulled_map
