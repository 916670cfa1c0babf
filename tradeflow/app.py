"""Tradeflow Map - Interactive global trade route dashboard.

Shows maritime trade routes as risk-colored arcs with animated flow
particles, chokepoints as throughput-sized markers, and route details for
the current selection.

Run: streamlit run tradeflow/app.py
"""

import logging
import traceback

import streamlit as st

from tradeflow.constants import AnimationConfig, AppConfig, ChartConfig, MapConfig
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.enums import RiskLevel
from tradeflow.ui import (
    ClickDetector,
    IntelligenceFeedPanel,
    MapComponent,
    MapRenderer,
    SidebarRenderer,
    VolumeChart,
    render_detail_panel,
)
from tradeflow.ui.click_detector import capture_map_click
from tradeflow.ui.infra import (
    bump_map_version,
    has_frame_callbacks,
    register_frame_callback,
    run_frame_callbacks,
    trigger_rerun,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def _on_route_select(route_id: str | None) -> None:
    """Host side of the single-select callback. The route details panel reads it."""
    st.session_state.selected_route_id = route_id


def mount_component(reduced_motion: bool) -> MapComponent:
    """Tear down the current map component (if any) and mount a fresh one.

    The old component's frame loop is cancelled even if building the new
    one fails.
    """
    old: MapComponent | None = st.session_state.get("component")
    try:
        component = MapComponent(
            catalog=st.session_state.catalog,
            reduced_motion=reduced_motion,
            on_route_select=_on_route_select,
            register_frame=register_frame_callback,
        )
    finally:
        if old is not None:
            old.teardown()

    # Second phase of initialization: container size is known once mounted
    component.resize(width=MapConfig.DEFAULT_WIDTH, height=ChartConfig.MAP_HEIGHT)
    st.session_state.component = component
    st.session_state.selected_route_id = None
    return component


def init_session_state() -> None:
    """Initialize session state with catalog and map component."""
    if "catalog" not in st.session_state:
        st.session_state.catalog = TradeCatalog.load_default()

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0

    if "component" not in st.session_state:
        mount_component(reduced_motion=st.session_state.get("reduced_motion", False))


def reset_ui_state() -> None:
    """Reset UI state to initial while preserving the catalog.

    Called when an error occurs to recover gracefully. Remounts the map
    component (the old one is torn down first) and bumps the map version.
    """
    logger.info("Resetting UI state due to error recovery")
    mount_component(reduced_motion=st.session_state.get("reduced_motion", False))
    st.session_state.map_version = st.session_state.get("map_version", 0) + 1
    logger.info("UI state reset complete - catalog preserved")


# =============================================================================
# HEADER
# =============================================================================


def _render_header(catalog: TradeCatalog) -> None:
    """Key metrics computed from the catalog, then the published feed metrics."""
    disrupted = sum(1 for r in catalog.routes if r.is_disrupted)
    critical_chokepoints = sum(1 for c in catalog.chokepoints if c.risk_level is RiskLevel.CRITICAL)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Trade Routes", f"{len(catalog.routes)}")
    with col2:
        st.metric("Total Volume", f"${catalog.total_volume():,.0f}B")
    with col3:
        st.metric("Disrupted Routes", f"{disrupted}")
    with col4:
        st.metric("Critical Chokepoints", f"{critical_chokepoints}")

    metrics = catalog.risk_metrics
    if metrics is None:
        return
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Global Trade", f"${metrics.global_trade_volume_trillions:.1f}T")
    with col2:
        st.metric("Routes at Risk (global)", f"{metrics.routes_at_risk}")
    with col3:
        st.metric("Avg Delay", f"{metrics.average_delay_days:.1f}d")
    with col4:
        st.metric("Est. Losses", f"${metrics.estimated_losses_billions:,.0f}B")


# =============================================================================
# MAP RENDERING
# =============================================================================


def _render_map_section() -> None:
    """Render map and handle clicks. Runs as a fragment while animating."""
    try:
        _render_map_section_inner()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[RENDER] Map error caught: {error_msg}\n{full_traceback}")
        st.error(f"⚠️ [RENDER] Something went wrong: {error_msg}")
        reset_ui_state()
        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _render_map_section_inner() -> None:
    component: MapComponent = st.session_state.component
    catalog: TradeCatalog = st.session_state.catalog

    # Advance animation (no-op when nothing is registered)
    run_frame_callbacks()

    draw_list = component.render()
    names = {r.id: r.name for r in catalog.routes} | {c.id: c.name for c in catalog.chokepoints}
    deck = MapRenderer(viewport=component.viewport, names=names).render(draw_list=draw_list)

    event = capture_map_click(deck=deck, map_version=st.session_state.map_version, height=ChartConfig.MAP_HEIGHT)

    detector = ClickDetector(viewport=component.viewport)
    events = detector.detect(event=event, modifier=st.session_state.get("multi_select", False))
    if not events:
        return

    for pointer_event in events:
        component.handle_pointer(pointer_event)
    logger.info(f"[MAP] Click handled: state={component.sm.get_state_name()}")
    # Fresh deck instance: the next click at the same pixel is a new event
    bump_map_version()
    # Panels outside this fragment show selection; refresh the whole page
    trigger_rerun()


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")
    st.caption(AppConfig.SUBTITLE)

    try:
        _run_app_ui()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")
        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")
        reset_ui_state()
        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    component: MapComponent = st.session_state.component
    catalog: TradeCatalog = st.session_state.catalog
    logger.info(f"[MAIN] Render cycle starting: state={component.sm.get_state_name()}")

    # Sidebar first so control presses are reflected in this run's map
    flags = SidebarRenderer(component=component, catalog=catalog).render()

    # Reduced motion is read once per component; a change remounts it
    if flags["reduced_motion"] == component.scheduler.enabled:
        logger.info(f"[MAP] Reduced motion changed to {flags['reduced_motion']}, remounting")
        component = mount_component(reduced_motion=flags["reduced_motion"])

    _render_header(catalog=catalog)

    col_map, col_panel = st.columns([3, 1])
    with col_map:
        run_every = AnimationConfig.HOST_FRAME_INTERVAL_S if has_frame_callbacks() else None
        st.fragment(_render_map_section, run_every=run_every)()
    with col_panel:
        render_detail_panel(
            component=component,
            catalog=catalog,
            selected_route_id=st.session_state.get("selected_route_id"),
        )
        st.divider()
        IntelligenceFeedPanel(catalog=catalog).render()

    fig = VolumeChart().render(catalog=catalog, selected_ids=component.context.selected_ids)
    st.plotly_chart(fig, width="stretch", key="volume_chart")


if __name__ == "__main__":
    main()
