"""Tradeflow Map - Global trade routes, chokepoints and risk on one map.

An interactive trade route dashboard featuring:
- Equirectangular projection with risk-weighted Bezier route arcs
- Pan/zoom viewport with endpoint-based hit testing
- State machine-based selection (single, multi, escape)
- Animated flow particles with a bounded eligibility policy

Modules:
    core: Map geometry and interaction (projection, arcs, viewport, hit testing, animation, render pass)
    model: Data structures (GeoPoint, TradeRoute, Chokepoint, TradeCatalog, draw primitives)
    ui: Streamlit interface components (state machine, map component, renderers, panels)

Example:
    from tradeflow.model import TradeCatalog
    from tradeflow.ui.map_component import MapComponent
"""
