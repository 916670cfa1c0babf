"""Map component - the single instance that owns all map interaction state.

One MapComponent per mounted map. It owns:
- Viewport (pan, zoom, container size)
- SelectionStateMachine + SelectionContext (selection, hover, focus)
- AnimationScheduler + FrameLoop (particle progress, per-frame callback)
- RenderPass (DrawList composition)

Nothing here is shared between instances. The frame loop is started in the
constructor and stopped by teardown(). Use the component as a context
manager so teardown runs on every exit path:

    with MapComponent(catalog=catalog, register_frame=host.every_frame) as component:
        component.resize(width=900, height=450)
        draw_list = component.render()

Pointer handling (positions are container-relative screen pixels):
    DOWN        start drag
    MOVE        drag held: pan so content follows the pointer
                otherwise: hover (chokepoint markers first, then route endpoints)
    UP          end drag
    CLICK       hit test route endpoints; modifier toggles membership,
                plain click selects, plain click on empty space dismisses
    LEAVE       clear hover, end drag

A CLICK that ends a drag which actually moved the map is ignored. Every other
CLICK records the geographic position under the pointer (last_click_geo).
"""

import logging
from collections.abc import Callable
from typing import Optional

from tradeflow.constants import HitTestConfig, MapConfig
from tradeflow.core.animation import AnimationScheduler, FrameLoop, RegisterFrameCallback
from tradeflow.core.hit_testing import chokepoint_targets, hit_test, route_targets
from tradeflow.core.projection import unproject
from tradeflow.core.render_pass import RenderPass
from tradeflow.core.viewport import Viewport
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.geo_point import ScreenPoint
from tradeflow.model.pointer_event import PointerEvent, PointerEventKind
from tradeflow.model.primitives import DrawList
from tradeflow.ui.state_machine import RouteSelectCallback, SelectionContext, SelectionStateMachine

logger = logging.getLogger(__name__)


class MapComponent:
    """Interactive trade route map.

    Args:
        catalog: Routes and chokepoints to draw (read-only)
        reduced_motion: Platform reduced-motion preference, read once
        on_route_select: Called with the route ID (or None) when single selection changes
        register_frame: Host hook registering the per-frame callback; returns a cancel function
        on_frame: Called after every animation tick with the new progress
    """

    def __init__(
        self,
        catalog: TradeCatalog,
        reduced_motion: bool = False,
        on_route_select: Optional[RouteSelectCallback] = None,
        register_frame: Optional[RegisterFrameCallback] = None,
        on_frame: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.catalog = catalog
        self.viewport = Viewport()
        self.sm, self.selection = SelectionStateMachine.create(
            entity_ids=catalog.entity_ids,
            on_route_select=on_route_select,
        )
        self.scheduler = AnimationScheduler(reduced_motion=reduced_motion)
        self.frame_loop = FrameLoop(scheduler=self.scheduler, on_frame=on_frame, register=register_frame)
        self.render_pass = RenderPass(catalog=catalog)

        self._drag_last: Optional[ScreenPoint] = None
        self._drag_moved = False
        self._torn_down = False
        self.last_click_geo: Optional[tuple[float, float]] = None

        self.frame_loop.start()
        logger.info(
            f"[MAP] Mounted: {len(catalog.routes)} routes, {len(catalog.chokepoints)} chokepoints, "
            f"animation={'on' if self.scheduler.enabled else 'off'}"
        )

    @property
    def context(self) -> SelectionContext:
        return self.selection

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    # =========================================================================
    # POINTER INPUT
    # =========================================================================

    def handle_pointer(self, event: PointerEvent) -> None:
        """Dispatch one pointer event in host delivery order."""
        if event.kind == PointerEventKind.DOWN:
            self._drag_last = event.position
            self._drag_moved = False
        elif event.kind == PointerEventKind.MOVE:
            if self._drag_last is not None:
                self._drag_to(event.position)
            else:
                self._update_hover(event.position)
        elif event.kind == PointerEventKind.UP:
            self._drag_last = None
        elif event.kind == PointerEventKind.CLICK:
            if self._drag_moved:
                self._drag_moved = False
                logger.debug("[MAP] Click after drag ignored")
                return
            self._click(event.position, modifier=event.modifier)
        elif event.kind == PointerEventKind.LEAVE:
            self._drag_last = None
            self.sm.set_hovered(None)
        else:
            raise RuntimeError(f"Unknown pointer event kind: {event.kind}")

    def _drag_to(self, position: ScreenPoint) -> None:
        delta_x = position.x - self._drag_last.x
        delta_y = position.y - self._drag_last.y
        if delta_x or delta_y:
            self.viewport.pan(delta_screen_x=delta_x, delta_screen_y=delta_y)
            self._drag_moved = True
        self._drag_last = position

    def _update_hover(self, position: ScreenPoint) -> None:
        self.sm.set_hovered(self.entity_at(position))

    def _click(self, position: ScreenPoint, modifier: bool) -> None:
        self.last_click_geo = self.geo_at(position)
        route_id = self.route_at(position)
        if route_id is None:
            if not modifier:
                self.sm.send("dismiss")
            return
        if modifier:
            self.sm.send("modifier_click", entity_id=route_id)
        else:
            self.sm.send("click", entity_id=route_id)

    # =========================================================================
    # HIT TESTING
    # =========================================================================

    def route_at(self, position: ScreenPoint) -> Optional[str]:
        """Route whose projected endpoint is under the screen position."""
        if not self.viewport.is_drawable:
            return None
        world = self.viewport.screen_to_world(position)
        targets = route_targets(self.catalog.routes, self.viewport.width, self.viewport.height)
        return hit_test(world, targets, self._world_radius(HitTestConfig.ROUTE_ENDPOINT_RADIUS_PX))

    def chokepoint_at(self, position: ScreenPoint) -> Optional[str]:
        """Chokepoint whose marker is under the screen position."""
        if not self.viewport.is_drawable:
            return None
        world = self.viewport.screen_to_world(position)
        targets = chokepoint_targets(self.catalog.chokepoints, self.viewport.width, self.viewport.height)
        return hit_test(world, targets, self._world_radius(HitTestConfig.CHOKEPOINT_RADIUS_PX))

    def entity_at(self, position: ScreenPoint) -> Optional[str]:
        """Hover target: chokepoint markers take precedence over route endpoints."""
        return self.chokepoint_at(position) or self.route_at(position)

    def geo_at(self, position: ScreenPoint) -> Optional[tuple[float, float]]:
        """(lat, lon) under a screen position, or None before layout is known."""
        if not self.viewport.is_drawable:
            return None
        world = self.viewport.screen_to_world(position)
        return unproject(world, self.viewport.width, self.viewport.height)

    def _world_radius(self, radius_px: float) -> float:
        return radius_px / self.viewport.zoom_scale

    # =========================================================================
    # KEYBOARD / FOCUS
    # =========================================================================

    def handle_key(self, key: str) -> bool:
        """Handle a key press. Only Escape is bound.

        Returns:
            True if the key was handled.
        """
        if key != "Escape":
            return False
        self.sm.send("escape")
        return True

    def focus(self, entity_id: str) -> None:
        self.sm.set_focused(entity_id)

    def blur(self) -> None:
        self.sm.set_focused(None)

    # =========================================================================
    # VIEWPORT
    # =========================================================================

    def handle_wheel(self, steps: float) -> None:
        """Zoom by wheel notches (positive zooms in)."""
        self.viewport.zoom(steps * MapConfig.ZOOM_STEP)

    def pan_by(self, delta_screen_x: float, delta_screen_y: float) -> None:
        self.viewport.pan(delta_screen_x=delta_screen_x, delta_screen_y=delta_screen_y)

    def zoom_by(self, delta: float) -> None:
        self.viewport.zoom(delta)

    def reset_view(self) -> None:
        self.viewport.reset_view()
        logger.info("[MAP] View reset")

    def resize(self, width: int, height: int) -> None:
        """Container dimensions measured or changed."""
        self.viewport.set_layout(width=width, height=height)

    # =========================================================================
    # FRAME / RENDER
    # =========================================================================

    def advance_frame(self, delta_seconds: Optional[float] = None) -> Optional[float]:
        """Run one animation frame. Returns None when the loop is not running."""
        return self.frame_loop.run_frame(delta_seconds)

    def render(self) -> DrawList:
        """Build the DrawList for the current state."""
        return self.render_pass.build(
            viewport=self.viewport,
            selection=self.sm.snapshot(),
            animation=self.scheduler,
        )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def teardown(self) -> None:
        """Stop the frame loop. Safe to call any number of times."""
        self.frame_loop.stop()
        if not self._torn_down:
            self._torn_down = True
            logger.info("[MAP] Torn down")

    def __enter__(self) -> "MapComponent":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()
