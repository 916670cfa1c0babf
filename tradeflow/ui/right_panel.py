"""Right panel components for the trade route map.

Centralizes all right-side panel rendering:
- State dispatch to the appropriate renderer
- RouteDetailsPanel: single selected route
- SelectionSummaryPanel: multi-selection totals
- ChokepointPanel: hovered or focused chokepoint
- IntelligenceFeedPanel: risk alerts (severity filter) and opportunities

Design Principles:
- One renderer per selection state
- Raise exception for unknown states (fail-fast)
"""

import logging

import streamlit as st

from tradeflow.constants import FeedConfig, StyleConfig
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.enums import RiskLevel, RouteStatus
from tradeflow.model.intelligence import Opportunity, RiskAlert
from tradeflow.model.trade_route import TradeRoute
from tradeflow.ui.infra import bump_map_version
from tradeflow.ui.map_component import MapComponent

logger = logging.getLogger(__name__)


def _status_badge(status: RouteStatus) -> str:
    if status is RouteStatus.ACTIVE:
        return "🟢 Active"
    elif status is RouteStatus.AT_RISK:
        return "🟠 At risk"
    elif status is RouteStatus.DISRUPTED:
        return "🔴 Disrupted"
    else:
        raise RuntimeError(f"Unknown route status: {status}")


def render_detail_panel(component: MapComponent, catalog: TradeCatalog, selected_route_id: str | None) -> None:
    """Dispatch to the panel for the current selection state.

    Args:
        component: Map component (selection state, hover and focus)
        catalog: Routes and chokepoints
        selected_route_id: Last value the map reported through on_route_select
    """
    sm = component.sm
    ctx = component.context

    if sm.is_single_selected:
        RouteDetailsPanel(catalog=catalog).render(route_id=selected_route_id)
    elif sm.is_multi_selected:
        SelectionSummaryPanel(catalog=catalog).render(route_ids=sorted(ctx.selected_ids))
    elif sm.is_unselected:
        st.markdown("### 🌍 No route selected")
        st.caption("Click near a route's origin or destination to see its details.")
    else:
        raise RuntimeError(f"Unknown selection state: {sm.get_state_name()}")

    # Chokepoint info is orthogonal to selection: hovered (clicked) or focused
    chokepoint_id = next(
        (cid for cid in (ctx.hovered_id, ctx.focused_id) if cid and catalog.get_chokepoint(cid) is not None),
        None,
    )
    if chokepoint_id is not None:
        st.divider()
        ChokepointPanel(catalog=catalog).render(chokepoint_id=chokepoint_id)

    if not sm.is_unselected:
        st.divider()
        if st.button("✖️ Close", key="close_detail_panel", width="stretch", help="Clear the selection"):
            bump_map_version()
            component.sm.send("dismiss")
            st.rerun()


class RouteDetailsPanel:
    """Renders details for one trade route."""

    def __init__(self, catalog: TradeCatalog) -> None:
        self.catalog = catalog

    def render(self, route_id: str) -> None:
        route = self.catalog.get_route(route_id)
        if route is None:
            raise RuntimeError(
                f"Route '{route_id}' not found in catalog - "
                "state machine is single_selected but the route is gone"
            )

        st.subheader(f"🛳️ {route.name}")
        st.caption(route.summary)

        risk_emoji = StyleConfig.RISK_EMOJIS[route.risk_level]
        st.markdown(f"**Risk:** {risk_emoji} {route.risk_level.label} · **Status:** {_status_badge(route.status)}")

        col1, col2 = st.columns(2)
        with col1:
            st.metric("Trade Volume", f"${route.volume_usd_billions:.0f}B")
            st.metric("Alternatives", f"{route.alternative_routes}")
        with col2:
            st.metric("Commodity", route.commodity or "-")
            st.metric("Chokepoints", f"{len(route.chokepoints_passed)}")

        if route.chokepoints_passed:
            st.markdown("**Passes through:** " + ", ".join(route.chokepoints_passed))

        if route.geopolitical_factors:
            with st.expander("⚠️ Geopolitical factors", expanded=route.is_disrupted):
                for factor in route.geopolitical_factors:
                    st.markdown(f"- {factor}")

        alerts = self.catalog.alerts_for_route(route.id)
        if alerts:
            st.markdown("**Active alerts:**")
            for alert in alerts:
                st.markdown(f"- {StyleConfig.RISK_EMOJIS[alert.severity]} {alert.title} ({alert.probability:.0f}%)")
        opportunities = self.catalog.opportunities_for_route(route.id)
        if opportunities:
            st.markdown("**Opportunities:** " + ", ".join(o.title for o in opportunities))


class SelectionSummaryPanel:
    """Renders totals for a multi-selection."""

    def __init__(self, catalog: TradeCatalog) -> None:
        self.catalog = catalog

    def render(self, route_ids: list[str]) -> None:
        routes: list[TradeRoute] = [r for r in self.catalog.routes if r.id in route_ids]
        st.subheader(f"📋 {len(routes)} routes selected")

        total_volume = sum(r.volume_usd_billions for r in routes)
        share = total_volume / self.catalog.total_volume() * 100 if self.catalog.total_volume() > 0 else 0.0
        disrupted = sum(1 for r in routes if r.is_disrupted)

        col1, col2 = st.columns(2)
        with col1:
            st.metric("Combined Volume", f"${total_volume:.0f}B")
            st.metric("Disrupted", f"{disrupted}")
        with col2:
            st.metric("Share of Total", f"{share:.0f}%")
            st.metric("Max Risk", max(routes, key=lambda r: r.risk_level.severity).risk_level.label if routes else "-")

        for route in routes:
            st.markdown(
                f"{StyleConfig.RISK_EMOJIS[route.risk_level]} **{route.name}** "
                f"- ${route.volume_usd_billions:.0f}B, {route.status.label.lower()}"
            )


class ChokepointPanel:
    """Renders the tooltip-style card for a chokepoint."""

    def __init__(self, catalog: TradeCatalog) -> None:
        self.catalog = catalog

    def render(self, chokepoint_id: str) -> None:
        chokepoint = self.catalog.get_chokepoint(chokepoint_id)
        if chokepoint is None:
            raise RuntimeError(f"Chokepoint '{chokepoint_id}' not found in catalog")

        st.markdown(f"#### 📍 {chokepoint.name}")
        st.caption(
            f"{chokepoint.chokepoint_type.value.capitalize()}"
            + (f" · controlled by {chokepoint.controlling_nation}" if chokepoint.controlling_nation else "")
        )
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Throughput", f"{chokepoint.throughput_pct:.0f}%")
        with col2:
            st.metric("Incidents", f"{chokepoint.recent_incidents}")
        with col3:
            st.metric("Risk", f"{StyleConfig.RISK_EMOJIS[chokepoint.risk_level]} {chokepoint.risk_level.label}")


def severity_filter_label(severity: RiskLevel | None) -> str:
    return FeedConfig.ALL_SEVERITIES_LABEL if severity is None else severity.label


class IntelligenceFeedPanel:
    """Risk alerts and opportunities in two tabs.

    The risks tab has a severity filter (all, critical, high, medium). Feed
    entries list the routes they concern by name.
    """

    def __init__(self, catalog: TradeCatalog) -> None:
        self.catalog = catalog

    def render(self) -> None:
        st.markdown("### 🛰️ Intelligence Feed")
        risks_tab, opportunities_tab = st.tabs(
            [
                f"⚠️ Risks ({len(self.catalog.risk_alerts)})",
                f"📈 Opportunities ({len(self.catalog.opportunities)})",
            ]
        )
        with risks_tab:
            severity = st.radio(
                "Severity",
                options=list(FeedConfig.SEVERITY_FILTERS),
                format_func=severity_filter_label,
                horizontal=True,
                key="alert_severity_filter",
            )
            alerts = self.catalog.alerts_with_severity(severity)
            if not alerts:
                st.caption("No alerts at this severity.")
            for alert in alerts:
                self._render_alert(alert)
        with opportunities_tab:
            if not self.catalog.opportunities:
                st.caption("No opportunities in the feed.")
            for opportunity in self.catalog.opportunities:
                self._render_opportunity(opportunity)

    def _route_names(self, route_ids: tuple[str, ...]) -> str:
        return ", ".join(self.catalog.get_route(route_id).name for route_id in route_ids) or "-"

    def _render_alert(self, alert: RiskAlert) -> None:
        with st.container(border=True):
            st.markdown(
                f"{StyleConfig.RISK_EMOJIS[alert.severity]} **{alert.title}** · "
                f"{FeedConfig.CATEGORY_EMOJIS[alert.category]} {alert.category.label}"
            )
            if alert.description:
                st.caption(alert.description)
            st.markdown(f"**Impact:** {alert.impact}")
            st.progress(alert.probability / 100.0, text=f"Probability {alert.probability:.0f}%")
            st.caption(f"⏱️ {alert.timeframe} · Routes: {self._route_names(alert.affected_routes)}")
            if alert.last_updated is not None:
                st.caption(f"Updated {alert.last_updated.isoformat()}")

    def _render_opportunity(self, opportunity: Opportunity) -> None:
        with st.container(border=True):
            st.markdown(
                f"{FeedConfig.OPPORTUNITY_EMOJIS[opportunity.opportunity_type]} **{opportunity.title}** · "
                f"{opportunity.opportunity_type.label}"
            )
            if opportunity.description:
                st.caption(opportunity.description)
            st.markdown(f"**Potential value:** ${opportunity.potential_value_billions:.0f}B")
            st.progress(opportunity.confidence / 100.0, text=f"Confidence {opportunity.confidence:.0f}%")
            st.caption(
                f"🎯 {opportunity.time_to_realize} · Routes: {self._route_names(opportunity.related_routes)}"
            )
