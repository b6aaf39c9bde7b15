"""Viewport geometry."""

from semantic_viewport.geometry.viewport import (
    Bounds,
    ScreenSize,
    Transform,
    ViewportZones,
    Zone,
    ZoneMargins,
    ZoomRange,
    camera_distance_to_scale,
    classify,
    compute_zones,
    graph_to_screen,
    normalize_zoom,
    scale_to_camera_distance,
    screen_to_graph,
    screen_to_graph_distance,
    viewport_from_transform,
    zones_from_camera,
    zones_from_transform,
)

__all__ = [
    "Bounds",
    "ScreenSize",
    "Transform",
    "ViewportZones",
    "Zone",
    "ZoneMargins",
    "ZoomRange",
    "screen_to_graph",
    "graph_to_screen",
    "screen_to_graph_distance",
    "camera_distance_to_scale",
    "scale_to_camera_distance",
    "viewport_from_transform",
    "compute_zones",
    "zones_from_transform",
    "zones_from_camera",
    "classify",
    "normalize_zoom",
]
