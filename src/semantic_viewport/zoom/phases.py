"""Zoom phase curves driven by camera distance.

Pure functions of (camera_z, config). Larger camera_z means zoomed out.
Breakpoints, from coarse to fine:
- cluster level   = keyword_labels.start      (~13961)
- keyword level   = content_crossfade.far     (~3736)
- detail level    = content_crossfade.near    (~2052)
"""

from dataclasses import dataclass

from semantic_viewport.geometry import ZoomRange, normalize_zoom
from semantic_viewport.zoom.config import (
    CONTENT_Z_TRANSITION_MAX,
    CONTENT_Z_TRANSITION_MIN,
    DEFAULT_ZOOM_PHASE_CONFIG,
    ZoomPhaseConfig,
)

KEYWORD_LEVEL_DESATURATION = 0.3
DETAIL_LEVEL_DESATURATION = 0.65

MIN_KEYWORD_SCALE = 0.3
KEYWORD_EDGE_MAX_OPACITY = 0.4

DEFAULT_CONTENT_RANGE = ZoomRange(near=CONTENT_Z_TRANSITION_MIN, far=CONTENT_Z_TRANSITION_MAX)


@dataclass(frozen=True)
class ScaleValues:
    """Keyword/content crossfade values for one camera distance."""

    keyword_scale: float  # Linear: MIN_KEYWORD_SCALE (near) -> 1.0 (far)
    content_scale: float  # Quadratic: (1 - t)^2
    content_edge_opacity: float
    keyword_edge_opacity: float
    keyword_label_opacity: float
    content_label_opacity: float


def _lerp_down(z: float, high: float, low: float) -> float:
    """0 at `high`, 1 at `low`, for high > low. Degenerate spans snap to 1."""
    if high <= low:
        return 1.0
    return (high - z) / (high - low)


def zoom_desaturation_between(
    camera_z: float,
    cluster_level: float,
    keyword_level: float,
    detail_level: float,
) -> float:
    """
    Piecewise linear desaturation over explicit breakpoints.

    0.0 at cluster level, 0.3 at keyword level, 0.65 at detail level,
    clamped outside [detail_level, cluster_level].
    """
    z = max(detail_level, min(cluster_level, camera_z))

    if z >= keyword_level:
        t = _lerp_down(z, cluster_level, keyword_level)
        return t * KEYWORD_LEVEL_DESATURATION

    t = _lerp_down(z, keyword_level, detail_level)
    return KEYWORD_LEVEL_DESATURATION + t * (
        DETAIL_LEVEL_DESATURATION - KEYWORD_LEVEL_DESATURATION
    )


def zoom_desaturation(
    camera_z: float,
    config: ZoomPhaseConfig = DEFAULT_ZOOM_PHASE_CONFIG,
) -> float:
    """Zoom-based desaturation for keyword and content colours."""
    return zoom_desaturation_between(
        camera_z,
        cluster_level=config.keyword_labels.start,
        keyword_level=config.content_crossfade.far,
        detail_level=config.content_crossfade.near,
    )


def cluster_label_desaturation(
    camera_z: float,
    config: ZoomPhaseConfig = DEFAULT_ZOOM_PHASE_CONFIG,
) -> float:
    """Cluster labels: 1.0 (grayscale) at cluster level down to 0.0 at keyword level."""
    cluster_level = config.keyword_labels.start
    keyword_level = config.keyword_labels.full
    if cluster_level <= keyword_level:
        return 0.0 if camera_z <= keyword_level else 1.0
    z = max(keyword_level, min(cluster_level, camera_z))
    return (z - keyword_level) / (cluster_level - keyword_level)


def keyword_label_opacity(
    camera_z: float,
    config: ZoomPhaseConfig = DEFAULT_ZOOM_PHASE_CONFIG,
) -> float:
    """Keyword label fade-in: 0.0 at or above start, 1.0 at or below full."""
    return 1.0 - cluster_label_desaturation(camera_z, config)


def blur_radius(
    camera_z: float,
    config: ZoomPhaseConfig = DEFAULT_ZOOM_PHASE_CONFIG,
) -> float:
    """Frosted-glass blur radius: max_radius at blur.near, 0 at blur.far."""
    t = normalize_zoom(camera_z, config.blur)
    return config.blur.max_radius * (1.0 - t)


def calculate_scales(
    camera_z: float,
    zoom_range: ZoomRange = DEFAULT_CONTENT_RANGE,
    content_scale_cap: float = 1.0,
) -> ScaleValues:
    """
    Keyword/content scale and opacity for a camera distance.

    Keywords shrink linearly; content grows as (1 - t)^2 so it pops into
    focus late in the approach. The 3D renderer caps content scale (0.3)
    and lets perspective do the rest.
    """
    t = normalize_zoom(camera_z, zoom_range)
    inv_sq = (1.0 - t) ** 2

    return ScaleValues(
        keyword_scale=MIN_KEYWORD_SCALE + t * (1.0 - MIN_KEYWORD_SCALE),
        content_scale=min(inv_sq, content_scale_cap),
        content_edge_opacity=inv_sq,
        keyword_edge_opacity=KEYWORD_EDGE_MAX_OPACITY * (1.0 - inv_sq),
        keyword_label_opacity=t,
        content_label_opacity=inv_sq,
    )


def zoom_to_edge_opacity(
    zoom_scale: float,
    min_opacity: float = 0.1,
    max_opacity: float = 0.8,
    zoom_floor: float = 0.5,
    zoom_ceiling: float = 4.0,
) -> float:
    """Edge opacity over 2D zoom scale: faint when zoomed out, stronger zoomed in."""
    if zoom_scale <= zoom_floor:
        return min_opacity
    if zoom_scale >= zoom_ceiling:
        return max_opacity
    t = (zoom_scale - zoom_floor) / (zoom_ceiling - zoom_floor)
    return min_opacity + t * (max_opacity - min_opacity)
