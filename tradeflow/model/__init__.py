"""Data model for Tradeflow Map.

Catalog entities (read-only, supplied externally):
- GeoPoint, RouteEndpoint, TradeRoute, Chokepoint, TradeCatalog
- RiskAlert, Opportunity, RiskMetrics: intelligence feed beside the map

Map-side types:
- ScreenPoint: projected pixel position
- PointerEvent: normalized host input
- DrawList and its primitives: render pass output
"""

from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.chokepoint import Chokepoint
from tradeflow.model.enums import AlertCategory, ChokepointType, OpportunityType, RiskLevel, RouteStatus
from tradeflow.model.geo_point import GeoPoint, ScreenPoint
from tradeflow.model.intelligence import Opportunity, RiskAlert, RiskMetrics
from tradeflow.model.pointer_event import PointerEvent, PointerEventKind
from tradeflow.model.primitives import (
    CurvePrimitive,
    DrawList,
    GridLinePrimitive,
    MarkerPrimitive,
    ParticlePrimitive,
)
from tradeflow.model.trade_route import RouteEndpoint, TradeRoute

__all__ = [
    # Catalog
    "TradeCatalog",
    "TradeRoute",
    "RouteEndpoint",
    "Chokepoint",
    "GeoPoint",
    # Intelligence feed
    "RiskAlert",
    "Opportunity",
    "RiskMetrics",
    # Enums
    "RiskLevel",
    "RouteStatus",
    "ChokepointType",
    "AlertCategory",
    "OpportunityType",
    # Map-side
    "ScreenPoint",
    "PointerEvent",
    "PointerEventKind",
    # Primitives
    "DrawList",
    "CurvePrimitive",
    "ParticlePrimitive",
    "MarkerPrimitive",
    "GridLinePrimitive",
]
