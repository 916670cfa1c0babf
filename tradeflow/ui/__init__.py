"""User interface components for the trade route map.

File Structure (layout-based naming):
- left_panel.py: Sidebar with legend, view controls, selection controls
- center_map.py: Pydeck rendering of the map DrawList
- right_panel.py: Route details, multi-selection summary, chokepoint card, intelligence feed
- bottom_chart.py: Plotly trade volume chart

Core Components:
- state_machine.py: SelectionStateMachine (3 states) + SelectionContext
- map_component.py: MapComponent owning viewport, selection and animation
- click_detector.py: streamlit-deckgl click capture -> pointer events
- infra.py: Streamlit rerun / map version / frame callback helpers
"""

from tradeflow.ui.bottom_chart import VolumeChart
from tradeflow.ui.center_map import MapRenderer
from tradeflow.ui.click_detector import ClickDetector
from tradeflow.ui.left_panel import SidebarRenderer
from tradeflow.ui.map_component import MapComponent
from tradeflow.ui.right_panel import (
    ChokepointPanel,
    IntelligenceFeedPanel,
    RouteDetailsPanel,
    SelectionSummaryPanel,
    render_detail_panel,
)
from tradeflow.ui.state_machine import (
    RouteSelectListener,
    SelectionContext,
    SelectionLoggingListener,
    SelectionStateMachine,
)

__all__ = [
    "SelectionStateMachine",
    "SelectionContext",
    "SelectionLoggingListener",
    "RouteSelectListener",
    "MapComponent",
    "MapRenderer",
    "VolumeChart",
    "SidebarRenderer",
    "RouteDetailsPanel",
    "SelectionSummaryPanel",
    "ChokepointPanel",
    "IntelligenceFeedPanel",
    "ClickDetector",
    "render_detail_panel",
]
