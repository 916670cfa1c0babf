"""Viewport - pan offset, zoom scale, and container dimensions.

World space is the projected map at zoom 1 (0..width × 0..height pixels).
The visible world rectangle (view box) is centered on

    (width / 2 + pan_x, height / 2 + pan_y)

with size (width / zoom_scale, height / zoom_scale).

Two-phase initialization:
    1. Constructed with MapConfig.DEFAULT_WIDTH/HEIGHT and layout_known=False
    2. set_layout(width, height) once the host has measured the container

Until step 2 the render pass draws nothing.

Preconditions: pan/zoom deltas are finite numbers. PointerEvent rejects
non-finite positions, so deltas derived from pointer events are always
finite; direct callers are responsible for the same.
"""

import logging
from dataclasses import dataclass

from tradeflow.constants import MapConfig
from tradeflow.model.geo_point import ScreenPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewBox:
    """Visible world-space rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint(x=self.x + self.width / 2, y=self.y + self.height / 2)


@dataclass
class Viewport:
    """Mutable viewport state owned by one map component.

    Attributes:
        width: Container width in pixels
        height: Container height in pixels
        pan_x: World-space horizontal offset of the view center
        pan_y: World-space vertical offset of the view center
        zoom_scale: Magnification, always within [MIN_ZOOM, MAX_ZOOM]
        layout_known: True once the host reported real dimensions
    """

    width: int = MapConfig.DEFAULT_WIDTH
    height: int = MapConfig.DEFAULT_HEIGHT
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom_scale: float = MapConfig.DEFAULT_ZOOM
    layout_known: bool = False

    def __post_init__(self) -> None:
        self.zoom_scale = self._clamp_zoom(self.zoom_scale)

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def set_layout(self, width: int, height: int) -> None:
        """Record measured container dimensions (initial layout or resize).

        Pan and zoom are preserved across resizes; projected positions are
        recomputed from the new size on the next render.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Viewport dimensions must be non-negative, got {width}x{height}")
        if not self.layout_known:
            logger.info(f"[MAP] Layout known: {width}x{height}")
        elif (width, height) != (self.width, self.height):
            logger.debug(f"[MAP] Resize: {self.width}x{self.height} -> {width}x{height}")
        self.width = width
        self.height = height
        self.layout_known = True

    @property
    def is_drawable(self) -> bool:
        """True when layout is known and the viewport has non-zero area."""
        return self.layout_known and self.width > 0 and self.height > 0

    # =========================================================================
    # PAN / ZOOM
    # =========================================================================

    def pan(self, delta_screen_x: float, delta_screen_y: float) -> None:
        """Drag-to-pan: content follows the pointer.

        Screen deltas are converted to world deltas by dividing by zoom_scale
        and subtracted from the pan offset.
        """
        self.pan_x -= delta_screen_x / self.zoom_scale
        self.pan_y -= delta_screen_y / self.zoom_scale

    def zoom(self, delta: float) -> None:
        """Add delta to zoom_scale, clamped to [MIN_ZOOM, MAX_ZOOM]."""
        self.zoom_scale = self._clamp_zoom(self.zoom_scale + delta)

    def reset_view(self) -> None:
        """Restore pan (0, 0) and zoom 1."""
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom_scale = MapConfig.DEFAULT_ZOOM

    @staticmethod
    def _clamp_zoom(value: float) -> float:
        return max(MapConfig.MIN_ZOOM, min(MapConfig.MAX_ZOOM, value))

    # =========================================================================
    # COORDINATE CONVERSION
    # =========================================================================

    def compute_view_box(self) -> ViewBox:
        """Derive the visible world-space rectangle."""
        view_width = self.width / self.zoom_scale
        view_height = self.height / self.zoom_scale
        center_x = self.width / 2 + self.pan_x
        center_y = self.height / 2 + self.pan_y
        return ViewBox(
            x=center_x - view_width / 2,
            y=center_y - view_height / 2,
            width=view_width,
            height=view_height,
        )

    def screen_to_world(self, point: ScreenPoint) -> ScreenPoint:
        """Convert a container-relative pointer position to world space."""
        box = self.compute_view_box()
        return ScreenPoint(
            x=box.x + point.x / self.zoom_scale,
            y=box.y + point.y / self.zoom_scale,
        )

    def world_to_screen(self, point: ScreenPoint) -> ScreenPoint:
        """Convert a world-space position to container-relative pixels."""
        box = self.compute_view_box()
        return ScreenPoint(
            x=(point.x - box.x) * self.zoom_scale,
            y=(point.y - box.y) * self.zoom_scale,
        )
