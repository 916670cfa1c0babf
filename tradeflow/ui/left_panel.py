"""Sidebar UI renderer for the trade route map.

Renders the left sidebar with:
- Selection status header
- Risk legend
- Pan / zoom / reset view controls
- Multi-select toggle (stands in for holding shift on click)
- Reduced motion preference
- Clear selection (same as pressing Escape)
- Keyboard focus selector

Control presses mutate the map component directly. The sidebar renders
before the map in the script, so the map drawn in the same run already
reflects them.
"""

import logging
from typing import Any

import streamlit as st

from tradeflow.constants import MapConfig, StyleConfig
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.enums import RiskLevel
from tradeflow.ui.infra import bump_map_version
from tradeflow.ui.map_component import MapComponent

logger = logging.getLogger(__name__)

NO_FOCUS_LABEL = "(none)"


def format_lat_lon(lat: float, lon: float) -> str:
    """Hemisphere notation, e.g. 1.3°N, 103.8°E."""
    lat_hemi = "N" if lat >= 0 else "S"
    lon_hemi = "E" if lon >= 0 else "W"
    return f"{abs(lat):.1f}°{lat_hemi}, {abs(lon):.1f}°{lon_hemi}"


class SidebarRenderer:
    """Renders the sidebar UI and returns control flags.

    Encapsulates all sidebar rendering logic including view controls,
    selection controls and the motion preference.
    """

    def __init__(self, component: MapComponent, catalog: TradeCatalog) -> None:
        """Initialize sidebar renderer with required dependencies."""
        self.component = component
        self.catalog = catalog

    def render(self) -> dict[str, Any]:
        """Render complete sidebar and return control flags.

        Returns:
            Dict with keys: multi_select, reduced_motion
        """
        with st.sidebar:
            self._render_selection_header()
            st.divider()
            self._render_legend()
            st.divider()
            self._render_view_controls()
            st.divider()
            flags = self._render_selection_controls()
            st.divider()
            self._render_focus_selector()
            st.divider()
            flags["reduced_motion"] = st.toggle(
                "🐢 Reduce motion",
                key="reduced_motion",
                help="Stop flow particle animation",
            )
            return flags

    def _render_selection_header(self) -> None:
        sm = self.component.sm
        selected = sorted(self.component.context.selected_ids)
        if sm.is_single_selected:
            st.markdown("### 👁️ Viewing Route")
        elif sm.is_multi_selected:
            st.markdown(f"### 📋 {len(selected)} Routes Selected")
        else:
            st.markdown("### 🌍 Trade Overview")
        st.markdown(
            "- 🖱️ Click a route endpoint → select\n"
            "- ➕ Multi-select on → click toggles\n"
            "- 📍 Click a chokepoint → details"
        )

    def _render_legend(self) -> None:
        st.markdown("**Risk level**")
        for risk_level in RiskLevel:
            st.markdown(f"{StyleConfig.RISK_EMOJIS[risk_level]} {risk_level.label}")
        st.caption("Dashed arcs are disrupted routes. Glowing markers are critical or incident-heavy chokepoints.")

    def _render_view_controls(self) -> None:
        """Pan arrows, zoom in/out and reset."""
        step = MapConfig.PAN_STEP_PX
        st.markdown(f"**View** (zoom {self.component.viewport.zoom_scale:.2f}×)")
        if self.component.last_click_geo is not None:
            st.caption(f"📌 Last click: {format_lat_lon(*self.component.last_click_geo)}")

        _, col_up, _ = st.columns(3)
        with col_up:
            if st.button("⬆️", key="pan_up", width="stretch", help="Pan up"):
                self.component.pan_by(0, step)
        col_left, col_reset, col_right = st.columns(3)
        with col_left:
            if st.button("⬅️", key="pan_left", width="stretch", help="Pan left"):
                self.component.pan_by(step, 0)
        with col_reset:
            if st.button("🎯", key="reset_view", width="stretch", help="Reset view"):
                self.component.reset_view()
        with col_right:
            if st.button("➡️", key="pan_right", width="stretch", help="Pan right"):
                self.component.pan_by(-step, 0)
        _, col_down, _ = st.columns(3)
        with col_down:
            if st.button("⬇️", key="pan_down", width="stretch", help="Pan down"):
                self.component.pan_by(0, -step)

        col_out, col_in = st.columns(2)
        with col_out:
            if st.button("➖ Zoom out", key="zoom_out", width="stretch"):
                self.component.handle_wheel(-1)
        with col_in:
            if st.button("➕ Zoom in", key="zoom_in", width="stretch"):
                self.component.handle_wheel(1)

    def _render_selection_controls(self) -> dict[str, Any]:
        multi_select = st.toggle(
            "➕ Multi-select",
            key="multi_select",
            help="Clicks add or remove routes from the selection instead of replacing it",
        )
        has_selection = not self.component.sm.is_unselected
        if st.button(
            "✖️ Clear selection (Esc)",
            width="stretch",
            disabled=not has_selection,
            help="Nothing selected" if not has_selection else "Clear selection and keyboard focus",
        ):
            bump_map_version()  # Clear stale click state
            self.component.handle_key("Escape")
        return {"multi_select": multi_select}

    def _render_focus_selector(self) -> None:
        """Keyboard focus stand-in: highlight one entity without selecting it."""
        labels = {NO_FOCUS_LABEL: None}
        for route in self.catalog.routes:
            labels[f"🛳️ {route.name}"] = route.id
        for chokepoint in self.catalog.chokepoints:
            labels[f"📍 {chokepoint.name}"] = chokepoint.id

        focused_id = self.component.context.focused_id
        options = list(labels.keys())
        current = next((label for label, entity_id in labels.items() if entity_id == focused_id), NO_FOCUS_LABEL)
        choice = st.selectbox("🔎 Focus", options=options, index=options.index(current))

        chosen_id = labels[choice]
        if chosen_id == focused_id:
            return
        if chosen_id is None:
            self.component.blur()
        else:
            self.component.focus(chosen_id)
        logger.info(f"[MAP] Focus: {chosen_id}")
