"""Viewport geometry: screen/world conversion and edge-magnet zones.

Two camera models are supported:
- 2D zoom transform: screen = world * k + translate
- 3D perspective camera at distance z, convertible to an equivalent k
  via k = camera_z_scale_base / z

All zone rectangles are in world units with bottom <= top.
"""

import math
from dataclasses import dataclass
from enum import Enum

from semantic_viewport.config import settings
from semantic_viewport.models import Point


@dataclass(frozen=True)
class Transform:
    """2D zoom transform (scale k, translation x/y in screen pixels)."""

    k: float
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class ScreenSize:
    """Canvas size in screen pixels."""

    width: float
    height: float


@dataclass(frozen=True)
class ZoomRange:
    """A camera-distance range; near is the full-strength end, far the faded end."""

    near: float
    far: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned world rectangle."""

    left: float
    right: float
    bottom: float
    top: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.bottom + self.top) / 2)

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.bottom <= y <= self.top

    def clamp(self, x: float, y: float) -> Point:
        """Per-axis clamp of a point into the rectangle."""
        return Point(
            min(max(x, self.left), self.right),
            min(max(y, self.bottom), self.top),
        )

    def inset(
        self,
        left: float = 0.0,
        right: float = 0.0,
        bottom: float = 0.0,
        top: float = 0.0,
    ) -> "Bounds":
        """Shrink inward (negative values grow). Collapses to the midline if over-shrunk."""
        new_left, new_right = self.left + left, self.right - right
        new_bottom, new_top = self.bottom + bottom, self.top - top
        if new_left > new_right:
            new_left = new_right = (new_left + new_right) / 2
        if new_bottom > new_top:
            new_bottom = new_top = (new_bottom + new_top) / 2
        return Bounds(new_left, new_right, new_bottom, new_top)

    def expand(self, margin: float) -> "Bounds":
        return Bounds(
            self.left - margin, self.right + margin, self.bottom - margin, self.top + margin
        )


class Zone(str, Enum):
    """Edge-magnet zone of a node relative to the viewport."""

    INTERIOR = "interior"  # Inside pull bounds
    CLIFF = "cliff"  # Between pull bounds and extended viewport
    FAR = "far"  # Beyond the extended viewport


@dataclass(frozen=True)
class ZoneMargins:
    """Screen-pixel margins used to derive the zones."""

    pull_line_px: float = 25.0
    focus_pull_line_px: float = 80.0
    ui_proximity_px: float = 10.0
    overscan_px: float = 40.0

    @classmethod
    def from_settings(cls) -> "ZoneMargins":
        return cls(
            pull_line_px=settings.pull_line_px,
            focus_pull_line_px=settings.focus_pull_line_px,
            ui_proximity_px=settings.ui_proximity_px,
            overscan_px=settings.viewport_overscan_px,
        )


@dataclass(frozen=True)
class ViewportZones:
    """Viewport rectangles for one frame."""

    viewport: Bounds
    pull_bounds: Bounds  # Clamp target for pulled nodes
    focus_pull_bounds: Bounds  # Inner pull line for focused nodes
    extended_viewport: Bounds  # Cliff / far-off-screen boundary
    world_per_px: float

    @property
    def cam_x(self) -> float:
        return self.viewport.center.x

    @property
    def cam_y(self) -> float:
        return self.viewport.center.y


# ============================================================================
# Screen <-> world
# ============================================================================


def screen_to_graph(point: Point, transform: Transform) -> Point:
    """Convert screen coordinates to graph coordinates: (screen - translate) / k."""
    return Point((point.x - transform.x) / transform.k, (point.y - transform.y) / transform.k)


def graph_to_screen(point: Point, transform: Transform) -> Point:
    """Convert graph coordinates to screen coordinates: graph * k + translate."""
    return Point(point.x * transform.k + transform.x, point.y * transform.k + transform.y)


def screen_to_graph_distance(screen_distance: float, k: float) -> float:
    return screen_distance / k


def camera_distance_to_scale(camera_z: float, base: float | None = None) -> float:
    """Equivalent 2D zoom scale for a 3D camera distance."""
    base = base if base is not None else settings.camera_z_scale_base
    return base / camera_z


def scale_to_camera_distance(k: float, base: float | None = None) -> float:
    base = base if base is not None else settings.camera_z_scale_base
    return base / k


# ============================================================================
# Zones
# ============================================================================


def viewport_from_transform(transform: Transform, screen: ScreenSize) -> Bounds:
    """Visible world rectangle for a 2D zoom transform."""
    top_left = screen_to_graph(Point(0.0, 0.0), transform)
    bottom_right = screen_to_graph(Point(screen.width, screen.height), transform)
    return Bounds(
        left=min(top_left.x, bottom_right.x),
        right=max(top_left.x, bottom_right.x),
        bottom=min(top_left.y, bottom_right.y),
        top=max(top_left.y, bottom_right.y),
    )


def compute_zones(
    viewport: Bounds,
    world_per_px: float,
    margins: ZoneMargins | None = None,
    y_up: bool = True,
) -> ViewportZones:
    """
    Derive pull bounds, focus pull bounds and the extended viewport.

    The UI chrome inset applies to the left edge and the screen-top edge,
    which is world `top` when y points up (3D) and world `bottom` otherwise (2D).
    """
    margins = margins or ZoneMargins.from_settings()
    pull = margins.pull_line_px * world_per_px
    focus_pull = margins.focus_pull_line_px * world_per_px
    ui_pad = margins.ui_proximity_px * world_per_px
    overscan = margins.overscan_px * world_per_px

    top_pad, bottom_pad = (ui_pad, 0.0) if y_up else (0.0, ui_pad)

    return ViewportZones(
        viewport=viewport,
        pull_bounds=viewport.inset(
            left=pull + ui_pad, right=pull, bottom=pull + bottom_pad, top=pull + top_pad
        ),
        focus_pull_bounds=viewport.inset(
            left=focus_pull + ui_pad,
            right=focus_pull,
            bottom=focus_pull + bottom_pad,
            top=focus_pull + top_pad,
        ),
        extended_viewport=viewport.expand(overscan),
        world_per_px=world_per_px,
    )


def zones_from_transform(
    transform: Transform,
    screen: ScreenSize,
    margins: ZoneMargins | None = None,
) -> ViewportZones:
    """Zones for the 2D renderer (screen y grows downward)."""
    viewport = viewport_from_transform(transform, screen)
    return compute_zones(viewport, 1.0 / transform.k, margins, y_up=False)


def zones_from_camera(
    cam_x: float,
    cam_y: float,
    camera_z: float,
    screen: ScreenSize,
    fov_degrees: float | None = None,
    margins: ZoneMargins | None = None,
) -> ViewportZones:
    """Zones for a perspective camera looking down -z at the z=0 plane."""
    fov = math.radians(fov_degrees if fov_degrees is not None else settings.camera_fov_degrees)
    visible_height = 2 * camera_z * math.tan(fov / 2)
    visible_width = visible_height * (screen.width / screen.height)
    half_w = visible_width / 2
    half_h = visible_height / 2
    viewport = Bounds(cam_x - half_w, cam_x + half_w, cam_y - half_h, cam_y + half_h)
    return compute_zones(viewport, visible_width / screen.width, margins, y_up=True)


def classify(x: float, y: float, zones: ViewportZones) -> Zone:
    """Classify a world position into interior / cliff / far-off-screen."""
    if zones.pull_bounds.contains(x, y):
        return Zone.INTERIOR
    if zones.extended_viewport.contains(x, y):
        return Zone.CLIFF
    return Zone.FAR


# ============================================================================
# Zoom normalisation
# ============================================================================


def normalize_zoom(camera_z: float, zoom_range: ZoomRange) -> float:
    """Map a camera distance to [0, 1] across the range (0 at near, 1 at far)."""
    near = min(zoom_range.near, zoom_range.far)
    far = max(zoom_range.near, zoom_range.far)
    if camera_z <= near:
        return 0.0
    if camera_z >= far:
        return 1.0
    span = max(far - near, 1.0)
    return (camera_z - near) / span
