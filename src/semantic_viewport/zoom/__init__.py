"""Zoom phases and semantic zoom filtering."""

from semantic_viewport.zoom.config import (
    BASE_CAMERA_Z,
    CAMERA_Z_MAX,
    CAMERA_Z_MIN,
    DEFAULT_ZOOM_PHASE_CONFIG,
    BlurRange,
    KeywordLabelRange,
    ZoomPhaseConfig,
    ZoomRange,
    sanitize_zoom_phase_config,
)
from semantic_viewport.zoom.phases import (
    ScaleValues,
    blur_radius,
    calculate_scales,
    cluster_label_desaturation,
    keyword_label_opacity,
    zoom_desaturation,
    zoom_desaturation_between,
    zoom_to_edge_opacity,
)
from semantic_viewport.zoom.semantic_zoom import (
    DEFAULT_SEMANTIC_ZOOM_CONFIG,
    PositionRecovery,
    PositionSource,
    SemanticZoomConfig,
    SemanticZoomMetrics,
    SemanticZoomResult,
    StoredPositions,
    ZoomHysteresis,
    compute_focal_nodes,
    compute_restored_position,
    compute_semantic_zoom,
    compute_visible_set,
    extend_visible_to_connected,
    focal_radius_world,
    should_refilter,
    zoom_to_threshold,
)

__all__ = [
    # Phase config
    "BASE_CAMERA_Z",
    "CAMERA_Z_MIN",
    "CAMERA_Z_MAX",
    "ZoomRange",
    "KeywordLabelRange",
    "BlurRange",
    "ZoomPhaseConfig",
    "DEFAULT_ZOOM_PHASE_CONFIG",
    "sanitize_zoom_phase_config",
    # Phase curves
    "ScaleValues",
    "zoom_desaturation",
    "zoom_desaturation_between",
    "cluster_label_desaturation",
    "keyword_label_opacity",
    "blur_radius",
    "calculate_scales",
    "zoom_to_edge_opacity",
    # Semantic zoom
    "SemanticZoomConfig",
    "DEFAULT_SEMANTIC_ZOOM_CONFIG",
    "SemanticZoomMetrics",
    "SemanticZoomResult",
    "zoom_to_threshold",
    "focal_radius_world",
    "compute_focal_nodes",
    "compute_visible_set",
    "extend_visible_to_connected",
    "compute_semantic_zoom",
    "should_refilter",
    "ZoomHysteresis",
    "PositionSource",
    "StoredPositions",
    "PositionRecovery",
    "compute_restored_position",
]
