"""Draw primitives - the render pass output.

A DrawList is renderer-agnostic: positions are in world pixel space, colors
are RGBA tuples (0-255), widths and radii are screen pixels. MapRenderer
turns it into pydeck layers; tests inspect it directly.

Z-order (back to front): grid → curves → particles → markers
"""

from dataclasses import dataclass, field
from typing import Optional

from tradeflow.model.geo_point import ScreenPoint

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class GridLinePrimitive:
    """Graticule line (constant latitude or longitude)."""

    start: ScreenPoint
    end: ScreenPoint
    color: RGBA
    width: float
    dash: Optional[tuple[float, float]]


@dataclass(frozen=True)
class CurvePrimitive:
    """One route arc.

    Attributes:
        route_id: Route this curve belongs to
        points: Sampled polyline along the arc (origin first)
        color: Stroke color
        width: Stroke width in pixels
        dash: (dash, gap) in pixels, None for solid
        selected: Route is in the selection set
        hovered: Route is hovered or focused
    """

    route_id: str
    points: tuple[ScreenPoint, ...]
    color: RGBA
    width: float
    dash: Optional[tuple[float, float]]
    selected: bool = False
    hovered: bool = False


@dataclass(frozen=True)
class ParticlePrimitive:
    """Animated flow particle on a route arc."""

    route_id: str
    position: ScreenPoint
    radius: float
    color: RGBA


@dataclass(frozen=True)
class MarkerPrimitive:
    """Chokepoint marker: filled disc, white ring, optional glow halo."""

    chokepoint_id: str
    center: ScreenPoint
    radius: float
    ring_radius: float
    color: RGBA
    glow: bool
    hovered: bool = False


@dataclass
class DrawList:
    """Everything drawn in one frame, in back-to-front order per category."""

    grid: list[GridLinePrimitive] = field(default_factory=list)
    curves: list[CurvePrimitive] = field(default_factory=list)
    particles: list[ParticlePrimitive] = field(default_factory=list)
    markers: list[MarkerPrimitive] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.grid or self.curves or self.particles or self.markers)

    def particle_route_ids(self) -> list[str]:
        return [p.route_id for p in self.particles]

    def curve_for(self, route_id: str) -> CurvePrimitive | None:
        for curve in self.curves:
            if curve.route_id == route_id:
                return curve
        return None

    def marker_for(self, chokepoint_id: str) -> MarkerPrimitive | None:
        for marker in self.markers:
            if marker.chokepoint_id == chokepoint_id:
                return marker
        return None
