"""MapRenderer - Pydeck rendering of a DrawList.

The DrawList is already in world pixel space (the projected map at zoom 1),
so the deck uses an OrthographicView instead of a geographic MapView:
- View target = view box center, zoom = log2(zoom_scale)
- y grows downward, matching screen coordinates
- No basemap (map_style=None), the graticule is drawn as a layer

Layer data is prepared as list[dict] with "type" and "id" on every pickable
object so click handling can tell what was picked.

Widths and radii are in screen pixels (width_units / radius_units "pixels").
Dash runs are cut in world space, so dash lengths are divided by the zoom
scale to keep them constant on screen.
"""

import logging
import math
from dataclasses import dataclass, field

import pydeck as pdk

from tradeflow.constants import ClickConfig, StyleConfig
from tradeflow.core.arc_geometry import dash_polyline
from tradeflow.core.viewport import Viewport
from tradeflow.model.geo_point import ScreenPoint
from tradeflow.model.primitives import DrawList, MarkerPrimitive

logger = logging.getLogger(__name__)


@dataclass
class LayerCollection:
    """Manages Pydeck layers with correct z-ordering.

    Z-order (back to front): grid → routes → particles → glow → markers → rings

    Markers are placed AFTER routes so they:
    1. Render visually on top of arcs
    2. Get pick priority over arcs passing through the same pixel
    """

    grid: list[pdk.Layer] = field(default_factory=list)
    routes: list[pdk.Layer] = field(default_factory=list)
    particles: list[pdk.Layer] = field(default_factory=list)
    glow: list[pdk.Layer] = field(default_factory=list)
    markers: list[pdk.Layer] = field(default_factory=list)
    rings: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Return all layers in correct z-order (back to front)."""
        return self.grid + self.routes + self.particles + self.glow + self.markers + self.rings


class MapRenderer:
    """Renders a DrawList on a Pydeck orthographic deck.

    Example:
        renderer = MapRenderer(viewport=component.viewport, names=names)
        deck = renderer.render(draw_list=component.render())
        st_deckgl(deck, key="map", height=600, events=["click"])
    """

    def __init__(self, viewport: Viewport, names: dict[str, str] | None = None) -> None:
        """Initialize map renderer.

        Args:
            viewport: Viewport the DrawList was built for
            names: Entity ID -> display name, shown in tooltips
        """
        self.viewport = viewport
        self.names = names or {}

    def get_view_state(self) -> pdk.ViewState:
        """Create orthographic ViewState from the current view box."""
        center = self.viewport.compute_view_box().center
        return pdk.ViewState(
            target=[center.x, center.y, 0],
            zoom=math.log2(self.viewport.zoom_scale),
            min_zoom=-8,
            max_zoom=8,
        )

    def render(self, draw_list: DrawList) -> pdk.Deck:
        """Render complete map with all layers.

        Returns:
            pdk.Deck object ready for display.
        """
        layer_collection = LayerCollection()

        if draw_list.grid:
            layer_collection.grid.append(self._create_grid_layer(draw_list))
        if draw_list.curves:
            layer_collection.routes.append(self._create_route_layer(draw_list))
        if draw_list.particles:
            layer_collection.particles.append(self._create_particle_layer(draw_list))

        glowing = [m for m in draw_list.markers if m.glow]
        if glowing:
            layer_collection.glow.append(self._create_glow_layer(glowing))
        if draw_list.markers:
            layer_collection.markers.append(self._create_marker_layer(draw_list.markers))
            layer_collection.rings.append(self._create_ring_layer(draw_list.markers))

        logger.debug(
            f"[RENDER] Deck: {len(draw_list.curves)} curves, {len(draw_list.particles)} particles, "
            f"{len(draw_list.markers)} markers"
        )

        return pdk.Deck(
            views=[pdk.View(type="OrthographicView", controller=False)],
            initial_view_state=self.get_view_state(),
            layers=layer_collection.get_ordered_layers(),
            map_style=None,
            map_provider=None,
            tooltip=self._create_tooltip_config(),
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _screen_dash(self, dash: tuple[float, float]) -> tuple[float, float]:
        """Screen-pixel dash pattern -> world-space lengths at the current zoom."""
        return dash[0] / self.viewport.zoom_scale, dash[1] / self.viewport.zoom_scale

    def _dashed_paths(
        self,
        points: tuple[ScreenPoint, ...] | list[ScreenPoint],
        dash: tuple[float, float] | None,
    ) -> list[list[list[float]]]:
        """Polyline as one path (solid) or one path per dash run."""
        if dash is None:
            return [[p.xy for p in points]]
        dash_len, gap_len = self._screen_dash(dash)
        return [[p.xy for p in run] for run in dash_polyline(points, dash=dash_len, gap=gap_len)]

    # =========================================================================
    # GRID LAYER
    # =========================================================================

    def _create_grid_layer(self, draw_list: DrawList) -> pdk.Layer:
        grid_data = []
        for line in draw_list.grid:
            for path in self._dashed_paths((line.start, line.end), line.dash):
                grid_data.append(
                    {
                        "type": ClickConfig.TYPE_GRID,
                        "path": path,
                        "color": list(line.color),
                        "width": line.width,
                    }
                )
        return pdk.Layer(
            "PathLayer",
            grid_data,
            get_path="path",
            get_color="color",
            get_width="width",
            width_units="pixels",
            pickable=False,
            id="grid",
        )

    # =========================================================================
    # ROUTE LAYERS
    # =========================================================================

    def _create_route_layer(self, draw_list: DrawList) -> pdk.Layer:
        """Arcs in DrawList order (higher risk last, so on top)."""
        route_data = []
        for curve in draw_list.curves:
            for path in self._dashed_paths(curve.points, curve.dash):
                route_data.append(
                    {
                        "type": ClickConfig.TYPE_ROUTE,
                        "id": curve.route_id,
                        "name": self.names.get(curve.route_id, curve.route_id),
                        "path": path,
                        "color": list(curve.color),
                        "width": curve.width,
                        "selected": curve.selected,
                    }
                )
        return pdk.Layer(
            "PathLayer",
            route_data,
            get_path="path",
            get_color="color",
            get_width="width",
            width_units="pixels",
            cap_rounded=True,
            joint_rounded=True,
            pickable=True,
            auto_highlight=True,
            highlight_color=[255, 255, 255, 80],
            id="routes",
        )

    def _create_particle_layer(self, draw_list: DrawList) -> pdk.Layer:
        particle_data = [
            {
                "type": ClickConfig.TYPE_PARTICLE,
                "id": particle.route_id,
                "name": self.names.get(particle.route_id, particle.route_id),
                "position": particle.position.xy,
                "radius": particle.radius,
                "color": list(particle.color),
            }
            for particle in draw_list.particles
        ]
        return pdk.Layer(
            "ScatterplotLayer",
            particle_data,
            get_position="position",
            get_radius="radius",
            get_fill_color="color",
            radius_units="pixels",
            pickable=False,
            id="particles",
        )

    # =========================================================================
    # CHOKEPOINT LAYERS
    # =========================================================================

    def _marker_record(self, marker: MarkerPrimitive) -> dict:
        return {
            "type": ClickConfig.TYPE_CHOKEPOINT,
            "id": marker.chokepoint_id,
            "name": self.names.get(marker.chokepoint_id, marker.chokepoint_id),
            "position": marker.center.xy,
            "radius": marker.radius,
            "ring_radius": marker.ring_radius,
            "glow_radius": marker.radius * StyleConfig.GLOW_RADIUS_FACTOR,
            "color": list(marker.color),
            "glow_color": [*marker.color[:3], StyleConfig.GLOW_ALPHA],
        }

    def _create_glow_layer(self, markers: list[MarkerPrimitive]) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            [self._marker_record(m) for m in markers],
            get_position="position",
            get_radius="glow_radius",
            get_fill_color="glow_color",
            radius_units="pixels",
            pickable=False,
            id="chokepoint_glow",
        )

    def _create_marker_layer(self, markers: list[MarkerPrimitive]) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            [self._marker_record(m) for m in markers],
            get_position="position",
            get_radius="radius",
            get_fill_color="color",
            radius_units="pixels",
            pickable=True,
            auto_highlight=True,
            highlight_color=[255, 255, 0, 180],
            id="chokepoints",
        )

    def _create_ring_layer(self, markers: list[MarkerPrimitive]) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            [self._marker_record(m) for m in markers],
            get_position="position",
            get_radius="ring_radius",
            get_line_color=list(StyleConfig.MARKER_RING_COLOR),
            filled=False,
            stroked=True,
            radius_units="pixels",
            line_width_units="pixels",
            get_line_width=1.5,
            pickable=False,
            id="chokepoint_rings",
        )

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Create Pydeck tooltip configuration - name only, details in side panel."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(15, 23, 42, 0.95)",
                "color": "#E2E8F0",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
