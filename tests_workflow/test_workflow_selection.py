"""Map component workflow tests - pointer, key and lifecycle sequences.

Drives MapComponent through the same event sequences the app produces
(ClickDetector yields MOVE then CLICK; drags are DOWN, MOVE..., UP, CLICK).

Note: Fixtures are defined in conftest.py (360 x 180 layout, screen == world at zoom 1).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.geo_point import ScreenPoint
from tradeflow.model.pointer_event import PointerEvent, PointerEventKind
from tradeflow.ui.map_component import MapComponent

if TYPE_CHECKING:
    from tests_workflow.conftest import FakeFrameHost, RouteSelectRecorder


def click(component: MapComponent, x: float, y: float, modifier: bool = False) -> None:
    """Deliver a click the way the app does: hover move, then click."""
    component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, x, y))
    component.handle_pointer(PointerEvent.at(PointerEventKind.CLICK, x, y, modifier=modifier))


def drag(component: MapComponent, start: tuple[float, float], end: tuple[float, float]) -> None:
    component.handle_pointer(PointerEvent.at(PointerEventKind.DOWN, *start))
    component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, *end))
    component.handle_pointer(PointerEvent.at(PointerEventKind.UP, *end))
    component.handle_pointer(PointerEvent.at(PointerEventKind.CLICK, *end))


# =============================================================================
# CLICK SELECTION
# =============================================================================


class TestClickSelection:
    """Clicks near route endpoints select; elsewhere dismiss."""

    def test_click_near_origin_selects(self, component: MapComponent, route_select: RouteSelectRecorder) -> None:
        click(component, 184, 88)
        assert component.sm.is_single_selected
        assert component.context.selected_ids == {"r1"}
        assert route_select.calls == ["r1"]

    def test_click_near_destination_selects(self, component: MapComponent) -> None:
        click(component, 265, 90)
        assert component.context.selected_ids == {"r1"}

    def test_second_click_deselects(self, component: MapComponent, route_select: RouteSelectRecorder) -> None:
        click(component, 184, 88)
        click(component, 270, 90)
        assert component.sm.is_unselected
        assert route_select.calls == ["r1", None]

    def test_click_on_arc_body_dismisses(self, component: MapComponent) -> None:
        """Midway along r1 is outside both endpoint radii."""
        click(component, 184, 88)
        click(component, 225, 104)
        assert component.sm.is_unselected

    def test_empty_click_keeps_focus(self, component: MapComponent) -> None:
        component.focus("r3")
        click(component, 184, 88)
        click(component, 20, 170)
        assert component.sm.is_unselected
        assert component.context.focused_id == "r3"

    def test_modifier_clicks_build_multi_selection(
        self, component: MapComponent, route_select: RouteSelectRecorder
    ) -> None:
        click(component, 184, 88, modifier=True)
        click(component, 300, 30, modifier=True)
        assert component.sm.is_multi_selected
        assert component.context.selected_ids == {"r1", "r3"}
        assert route_select.calls == []

    def test_modifier_click_on_empty_space_is_noop(self, component: MapComponent) -> None:
        click(component, 184, 88, modifier=True)
        click(component, 20, 170, modifier=True)
        assert component.context.selected_ids == {"r1"}

    def test_click_selects_route_not_chokepoint(self, component: MapComponent) -> None:
        """cp1 sits alone at (200, 150): clicking it hovers but selects nothing."""
        click(component, 200, 150)
        assert component.sm.is_unselected
        assert component.context.hovered_id == "cp1"

    def test_selection_reaches_draw_list(self, component: MapComponent) -> None:
        click(component, 90, 45)
        draw_list = component.render()
        assert draw_list.curve_for("r2").selected is True
        assert draw_list.curve_for("r1").selected is False

    def test_modifier_deselect_then_reselect_reports_each_change(
        self, component: MapComponent, route_select: RouteSelectRecorder
    ) -> None:
        click(component, 184, 88)
        click(component, 184, 88, modifier=True)
        click(component, 184, 88)
        assert component.context.selected_ids == {"r1"}
        assert route_select.calls == ["r1", None, "r1"]

    def test_click_records_geographic_position(self, component: MapComponent) -> None:
        """Screen (180, 90) is the map center: 0°, 0°."""
        assert component.last_click_geo is None
        click(component, 180, 90)
        lat, lon = component.last_click_geo
        assert lat == pytest.approx(0.0)
        assert lon == pytest.approx(0.0)
        click(component, 90, 45)
        lat, lon = component.last_click_geo
        assert lat == pytest.approx(45.0)
        assert lon == pytest.approx(-90.0)


# =============================================================================
# HOVER
# =============================================================================


class TestHover:
    """Pointer moves without a held button."""

    def test_chokepoint_takes_precedence(self, component: MapComponent) -> None:
        """cp2 is 5px from r1's origin; hover picks the chokepoint."""
        component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, 180, 91))
        assert component.context.hovered_id == "cp2"

    def test_route_endpoint_hover(self, component: MapComponent) -> None:
        component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, 330, 58))
        assert component.context.hovered_id == "r3"

    def test_leave_clears_hover(self, component: MapComponent) -> None:
        component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, 330, 58))
        component.handle_pointer(PointerEvent.leave())
        assert component.context.hovered_id is None

    def test_hover_never_changes_selection(self, component: MapComponent) -> None:
        click(component, 184, 88)
        component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, 330, 58))
        assert component.context.selected_ids == {"r1"}


# =============================================================================
# DRAG / ZOOM
# =============================================================================


class TestDragAndZoom:
    """Viewport manipulation and its effect on hit testing."""

    def test_drag_pans_and_swallows_click(self, component: MapComponent) -> None:
        """Release over r1's origin after dragging does not select it."""
        drag(component, start=(130, 90), end=(180, 90))
        assert component.viewport.pan_x == pytest.approx(-50)
        assert component.sm.is_unselected

    def test_click_after_drag_hits_moved_content(self, component: MapComponent) -> None:
        """After panning 50px right, r1's origin is drawn at (230, 90)."""
        drag(component, start=(10, 170), end=(60, 170))
        click(component, 230, 90)
        assert component.context.selected_ids == {"r1"}

    def test_press_without_movement_still_clicks(self, component: MapComponent) -> None:
        component.handle_pointer(PointerEvent.at(PointerEventKind.DOWN, 184, 88))
        component.handle_pointer(PointerEvent.at(PointerEventKind.UP, 184, 88))
        component.handle_pointer(PointerEvent.at(PointerEventKind.CLICK, 184, 88))
        assert component.context.selected_ids == {"r1"}

    def test_leave_ends_drag(self, component: MapComponent) -> None:
        component.handle_pointer(PointerEvent.at(PointerEventKind.DOWN, 10, 170))
        component.handle_pointer(PointerEvent.leave())
        component.handle_pointer(PointerEvent.at(PointerEventKind.MOVE, 100, 100))
        assert component.viewport.pan_x == 0.0

    @pytest.mark.parametrize("wheel_steps", [4, -2])
    def test_hit_radius_is_constant_on_screen(self, component: MapComponent, wheel_steps: int) -> None:
        """At zoom 2 and zoom 0.5, 15 screen px from the origin hits and 25 px misses.

        r1's origin is the world center (180, 90), which stays at screen (180, 90)
        at every zoom while pan is zero.
        """
        component.handle_wheel(wheel_steps)
        assert component.route_at(component.viewport.world_to_screen(ScreenPoint(x=180, y=90))) == "r1"
        assert component.route_at(ScreenPoint(x=180, y=105)) == "r1"
        assert component.route_at(ScreenPoint(x=180, y=65)) is None

    def test_zoom_clamped(self, component: MapComponent) -> None:
        component.handle_wheel(100)
        assert component.viewport.zoom_scale == 3.0

    def test_reset_view(self, component: MapComponent) -> None:
        component.pan_by(40, -10)
        component.zoom_by(1.0)
        component.reset_view()
        assert (component.viewport.pan_x, component.viewport.pan_y, component.viewport.zoom_scale) == (0.0, 0.0, 1.0)


# =============================================================================
# KEYBOARD / FOCUS
# =============================================================================


class TestKeyboard:
    """Escape and focus."""

    def test_escape_clears_selection_and_focus(self, component: MapComponent) -> None:
        component.focus("cp1")
        click(component, 184, 88)
        assert component.handle_key("Escape") is True
        assert component.sm.is_unselected
        assert component.context.focused_id is None

    def test_other_keys_ignored(self, component: MapComponent) -> None:
        click(component, 184, 88)
        assert component.handle_key("Enter") is False
        assert component.context.selected_ids == {"r1"}

    def test_focus_unknown_rejected(self, component: MapComponent) -> None:
        with pytest.raises(ValueError):
            component.focus("missing")

    def test_blur(self, component: MapComponent) -> None:
        component.focus("r2")
        component.blur()
        assert component.context.focused_id is None

    def test_focus_emphasizes_marker(self, component: MapComponent) -> None:
        component.focus("cp2")
        assert component.render().marker_for("cp2").hovered is True


# =============================================================================
# LAYOUT / LIFECYCLE
# =============================================================================


class TestLifecycle:
    """Two-phase layout, frame loop and teardown."""

    def test_unlaid_component_draws_and_hits_nothing(
        self, workflow_catalog: TradeCatalog, frame_host: FakeFrameHost
    ) -> None:
        with MapComponent(catalog=workflow_catalog, register_frame=frame_host.register) as comp:
            assert comp.render().is_empty
            click(comp, 180, 90)
            assert comp.sm.is_unselected
            assert comp.context.hovered_id is None

    def test_frame_loop_registered_on_mount(self, component: MapComponent, frame_host: FakeFrameHost) -> None:
        assert len(frame_host.callbacks) == 1
        assert component.frame_loop.running is True

    def test_host_frames_advance_particles(self, component: MapComponent, frame_host: FakeFrameHost) -> None:
        before = component.render().particles[0].position
        frame_host.callbacks[0](0.1)
        after = component.render().particles[0].position
        assert component.scheduler.progress > 0
        assert after != before

    def test_teardown_cancels_once(self, component: MapComponent, frame_host: FakeFrameHost) -> None:
        component.teardown()
        component.teardown()
        assert frame_host.cancel_count == 1
        assert frame_host.callbacks == []
        assert component.is_torn_down
        assert component.advance_frame() is None

    def test_context_manager_tears_down_on_error(
        self, workflow_catalog: TradeCatalog, frame_host: FakeFrameHost
    ) -> None:
        with pytest.raises(RuntimeError):
            with MapComponent(catalog=workflow_catalog, register_frame=frame_host.register):
                raise RuntimeError("render failed")
        assert frame_host.callbacks == []

    def test_reduced_motion(self, workflow_catalog: TradeCatalog, frame_host: FakeFrameHost) -> None:
        with MapComponent(
            catalog=workflow_catalog, reduced_motion=True, register_frame=frame_host.register
        ) as comp:
            comp.resize(width=360, height=180)
            assert frame_host.callbacks == []
            assert comp.advance_frame() is None
            assert comp.render().particles == []

    def test_instances_are_independent(self, workflow_catalog: TradeCatalog, component: MapComponent) -> None:
        with MapComponent(catalog=workflow_catalog) as other:
            other.resize(width=360, height=180)
            click(component, 184, 88)
            other.pan_by(100, 0)
            assert other.context.selected_ids == set()
            assert component.viewport.pan_x == 0.0

    def test_resize_keeps_pan_and_zoom(self, component: MapComponent) -> None:
        component.pan_by(20, 0)
        component.zoom_by(0.5)
        component.resize(width=720, height=360)
        assert component.viewport.zoom_scale == 1.5
        assert component.viewport.pan_x == pytest.approx(-20)
