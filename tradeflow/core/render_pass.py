"""Render pass - composes projection, arcs, selection and animation into a DrawList.

Every DrawList sequence is in painter's order (back to front): the renderer
draws items in list order, so later items cover earlier ones. Critical
routes have the highest visual priority and come last.

Per frame:
1. Skip everything if the viewport is not drawable (layout unknown or zero size)
2. Graticule lines
3. One curve per route, ordered by risk severity (low first, critical last,
   so higher-risk arcs layer on top)
4. One particle per eligible route, positioned on its curve at the global
   progress (only when animation is enabled)
5. One marker per chokepoint, after all routes so arcs never cover markers

Projected coordinates are recomputed every call from the current viewport
size; nothing is cached between renders.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tradeflow.constants import ArcConfig, GridConfig, StyleConfig
from tradeflow.core.animation import AnimationScheduler
from tradeflow.core.arc_geometry import build_arc, point_at_progress, sample_curve
from tradeflow.core.projection import project
from tradeflow.core.viewport import Viewport
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.chokepoint import Chokepoint
from tradeflow.model.enums import RiskLevel
from tradeflow.model.geo_point import GeoPoint
from tradeflow.model.primitives import (
    CurvePrimitive,
    DrawList,
    GridLinePrimitive,
    MarkerPrimitive,
    ParticlePrimitive,
)
from tradeflow.model.trade_route import TradeRoute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionSnapshot:
    """Read-only view of selection state for one frame."""

    selected_ids: frozenset[str] = frozenset()
    hovered_id: Optional[str] = None
    focused_id: Optional[str] = None

    def is_emphasized(self, entity_id: str) -> bool:
        """Hovered or keyboard-focused."""
        return entity_id == self.hovered_id or entity_id == self.focused_id


class RenderPass:
    """Builds the DrawList for one frame.

    Example:
        draw_list = RenderPass(catalog=catalog).build(
            viewport=viewport,
            selection=SelectionSnapshot(selected_ids=frozenset({"route-1"})),
            animation=scheduler,
        )
    """

    def __init__(self, catalog: TradeCatalog) -> None:
        self.catalog = catalog

    def build(
        self,
        viewport: Viewport,
        selection: SelectionSnapshot,
        animation: AnimationScheduler,
    ) -> DrawList:
        """Compose the frame.

        Returns:
            DrawList; empty when the viewport is not drawable.
        """
        draw_list = DrawList()
        if not viewport.is_drawable:
            logger.debug("[RENDER] Viewport not drawable, skipping frame")
            return draw_list

        width, height = viewport.width, viewport.height
        draw_list.grid = self._grid_lines(width=width, height=height)

        eligible = set(
            animation.eligible_route_ids(
                routes=self.catalog.routes,
                selected_ids=set(selection.selected_ids),
                hovered_id=selection.hovered_id,
            )
        )

        # Stable sort keeps catalog order within a severity band
        ordered_routes = sorted(self.catalog.routes, key=lambda r: r.risk_level.severity)
        for route in ordered_routes:
            curve_primitive, particle = self._route_primitives(
                route=route,
                width=width,
                height=height,
                selection=selection,
                animated=route.id in eligible,
                progress=animation.progress,
            )
            draw_list.curves.append(curve_primitive)
            if particle is not None:
                draw_list.particles.append(particle)

        draw_list.markers = [
            self._marker(chokepoint=cp, width=width, height=height, selection=selection)
            for cp in self.catalog.chokepoints
        ]
        return draw_list

    # =========================================================================
    # ROUTES
    # =========================================================================

    def _route_primitives(
        self,
        route: TradeRoute,
        width: int,
        height: int,
        selection: SelectionSnapshot,
        animated: bool,
        progress: float,
    ) -> tuple[CurvePrimitive, Optional[ParticlePrimitive]]:
        origin = project(route.origin.location, width, height)
        destination = project(route.destination.location, width, height)
        curve = build_arc(origin=origin, destination=destination, risk_level=route.risk_level)

        is_selected = route.id in selection.selected_ids
        is_hovered = selection.is_emphasized(route.id)

        color = StyleConfig.SELECTED_ROUTE_COLOR if is_selected else StyleConfig.ROUTE_COLORS_RGBA[route.risk_level]
        curve_primitive = CurvePrimitive(
            route_id=route.id,
            points=tuple(sample_curve(curve, ArcConfig.SAMPLE_SEGMENTS)),
            color=color,
            width=route_width(route=route, selected=is_selected, hovered=is_hovered),
            dash=StyleConfig.ROUTE_DASH_PATTERNS[route.status],
            selected=is_selected,
            hovered=is_hovered,
        )

        particle = None
        if animated:
            particle = ParticlePrimitive(
                route_id=route.id,
                position=point_at_progress(curve, progress),
                radius=StyleConfig.PARTICLE_RADIUS_SELECTED if is_selected else StyleConfig.PARTICLE_RADIUS,
                color=StyleConfig.SELECTED_PARTICLE_COLOR
                if is_selected
                else StyleConfig.ROUTE_COLORS_RGBA[route.risk_level],
            )
        return curve_primitive, particle

    # =========================================================================
    # CHOKEPOINTS
    # =========================================================================

    def _marker(
        self,
        chokepoint: Chokepoint,
        width: int,
        height: int,
        selection: SelectionSnapshot,
    ) -> MarkerPrimitive:
        is_hovered = selection.is_emphasized(chokepoint.id)
        radius = marker_radius(chokepoint=chokepoint, hovered=is_hovered)
        return MarkerPrimitive(
            chokepoint_id=chokepoint.id,
            center=project(chokepoint.location, width, height),
            radius=radius,
            ring_radius=radius + StyleConfig.MARKER_RING_OFFSET,
            color=StyleConfig.CHOKEPOINT_COLORS_RGBA[chokepoint.risk_level],
            glow=marker_glows(chokepoint=chokepoint, hovered=is_hovered),
            hovered=is_hovered,
        )

    # =========================================================================
    # GRATICULE
    # =========================================================================

    @staticmethod
    def _grid_lines(width: int, height: int) -> list[GridLinePrimitive]:
        lines = []
        for lat in range(GridConfig.LAT_MIN, GridConfig.LAT_MAX + 1, GridConfig.LAT_STEP):
            lines.append(
                GridLinePrimitive(
                    start=project(GeoPoint(lat=lat, lon=-180), width, height),
                    end=project(GeoPoint(lat=lat, lon=180), width, height),
                    color=GridConfig.COLOR,
                    width=GridConfig.WIDTH,
                    dash=GridConfig.DASH_PATTERN,
                )
            )
        for lon in range(GridConfig.LON_MIN, GridConfig.LON_MAX + 1, GridConfig.LON_STEP):
            lines.append(
                GridLinePrimitive(
                    start=project(GeoPoint(lat=GridConfig.LAT_MIN, lon=lon), width, height),
                    end=project(GeoPoint(lat=GridConfig.LAT_MAX, lon=lon), width, height),
                    color=GridConfig.COLOR,
                    width=GridConfig.WIDTH,
                    dash=GridConfig.DASH_PATTERN,
                )
            )
        return lines


def route_width(route: TradeRoute, selected: bool, hovered: bool) -> float:
    """Stroke width: grows with volume, disrupted routes never thinner than
    ROUTE_WIDTH_DISRUPTED_MIN, plus hover/selection emphasis."""
    width = StyleConfig.ROUTE_WIDTH_BASE + route.volume_usd_billions / StyleConfig.ROUTE_WIDTH_VOLUME_DIVISOR
    width = min(width, StyleConfig.ROUTE_WIDTH_MAX)
    if route.is_disrupted:
        width = max(width, StyleConfig.ROUTE_WIDTH_DISRUPTED_MIN)
    if hovered:
        width += StyleConfig.ROUTE_WIDTH_HOVER_BONUS
    if selected:
        width += StyleConfig.ROUTE_WIDTH_SELECTED_BONUS
    return width


def marker_radius(chokepoint: Chokepoint, hovered: bool) -> float:
    """Marker radius grows with throughput; hover enlarges."""
    radius = StyleConfig.MARKER_RADIUS_BASE + chokepoint.throughput_pct / StyleConfig.MARKER_RADIUS_THROUGHPUT_DIVISOR
    if hovered:
        radius += StyleConfig.MARKER_RADIUS_HOVER_BONUS
    return radius


def marker_glows(chokepoint: Chokepoint, hovered: bool) -> bool:
    """Glow for critical risk, hover, or a high recent incident count."""
    return (
        chokepoint.risk_level is RiskLevel.CRITICAL
        or hovered
        or chokepoint.recent_incidents >= StyleConfig.GLOW_INCIDENT_THRESHOLD
    )
