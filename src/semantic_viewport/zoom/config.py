"""Zoom phase configuration: named camera-distance ranges for visual crossfades."""

from dataclasses import dataclass, field

from semantic_viewport.geometry import ZoomRange

# All camera distances are relative to this anchor
BASE_CAMERA_Z = 1000.0

CAMERA_Z_MIN = BASE_CAMERA_Z * 0.05  # 50
CAMERA_Z_MAX = BASE_CAMERA_Z * 20.0  # 20000

# Content node transition window used when no crossfade range is given
CONTENT_Z_TRANSITION_MIN = BASE_CAMERA_Z * 0.05
CONTENT_Z_TRANSITION_MAX = BASE_CAMERA_Z * 10.0


@dataclass(frozen=True)
class KeywordLabelRange:
    """Keyword labels take over from cluster labels between start and full."""

    start: float = 13961.0  # At or above: keyword labels hidden
    full: float = 1200.0  # At or below: all keyword labels allowed


@dataclass(frozen=True)
class BlurRange(ZoomRange):
    """Blur window plus the blur radius reached at the near end."""

    max_radius: float = 12.5


@dataclass(frozen=True)
class ZoomPhaseConfig:
    """Per-phase ranges. Treated as immutable input for a decision cycle."""

    keyword_labels: KeywordLabelRange = field(default_factory=KeywordLabelRange)
    content_crossfade: ZoomRange = field(
        default_factory=lambda: ZoomRange(near=2052.0, far=3736.0)
    )
    blur: BlurRange = field(
        default_factory=lambda: BlurRange(near=50.0, far=2456.0, max_radius=12.5)
    )


DEFAULT_ZOOM_PHASE_CONFIG = ZoomPhaseConfig()


def clamp_camera_z(z: float) -> float:
    return max(CAMERA_Z_MIN, min(CAMERA_Z_MAX, z))


def _sanitize_range(zoom_range: ZoomRange) -> tuple[float, float]:
    near = clamp_camera_z(min(zoom_range.near, zoom_range.far))
    far = clamp_camera_z(max(zoom_range.near, zoom_range.far))
    return near, far


def sanitize_zoom_phase_config(config: ZoomPhaseConfig) -> ZoomPhaseConfig:
    """
    Reorder and clamp a config edited by the UI.

    Inverted ranges are swapped rather than rejected, and every bound is
    clamped into [CAMERA_Z_MIN, CAMERA_Z_MAX].
    """
    labels = config.keyword_labels
    start = clamp_camera_z(max(labels.start, labels.full))
    full = clamp_camera_z(min(labels.start, labels.full))

    crossfade_near, crossfade_far = _sanitize_range(config.content_crossfade)
    blur_near, blur_far = _sanitize_range(config.blur)

    return ZoomPhaseConfig(
        keyword_labels=KeywordLabelRange(start=start, full=full),
        content_crossfade=ZoomRange(near=crossfade_near, far=crossfade_far),
        blur=BlurRange(near=blur_near, far=blur_far, max_radius=max(0.0, config.blur.max_radius)),
    )
