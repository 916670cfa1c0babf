"""TradeCatalog - the read-only entity catalog consumed by the map.

The catalog is supplied from outside the map core and never mutated by it.
IDs are unique across routes AND chokepoints because selection, hover and
focus state share one ID namespace.

JSON format (snake_case keys):
    {
      "routes": [
        {"id": "route-1", "name": "...",
         "origin": {"lat": 1.35, "lon": 103.8, "country": "Singapore"},
         "destination": {...}, "volume_usd_billions": 450,
         "risk_level": "high", "status": "at-risk", "commodity": "...",
         "chokepoints_passed": [...], "alternative_routes": 2,
         "geopolitical_factors": [...]}
      ],
      "chokepoints": [
        {"id": "cp-1", "name": "...", "lat": 26.56, "lon": 56.25,
         "type": "strait", "risk_level": "critical", "throughput_pct": 21,
         "recent_incidents": 8, "controlling_nation": "..."}
      ],
      "risk_alerts": [
        {"id": "alert-1", "title": "...", "severity": "critical",
         "category": "geopolitical", "affected_routes": ["route-1"],
         "impact": "...", "probability": 85, "timeframe": "Ongoing",
         "description": "...", "last_updated": "2025-01-28"}
      ],
      "opportunities": [
        {"id": "opp-1", "title": "...", "type": "new-route",
         "potential_value_billions": 85, "time_to_realize": "2-5 years",
         "confidence": 70, "description": "...", "related_routes": ["route-6"]}
      ],
      "risk_metrics": {"global_trade_volume_trillions": 28.5, "routes_at_risk": 42,
                       "active_disruptions": 7, "critical_chokepoints": 3,
                       "average_delay_days": 4.2, "estimated_losses_billions": 125}
    }

The intelligence feed sections are optional. Feed entries may only
reference route IDs present in the same catalog.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from tradeflow.model.chokepoint import Chokepoint
from tradeflow.model.enums import AlertCategory, ChokepointType, OpportunityType, RiskLevel, RouteStatus
from tradeflow.model.geo_point import GeoPoint
from tradeflow.model.intelligence import Opportunity, RiskAlert, RiskMetrics
from tradeflow.model.trade_route import RouteEndpoint, TradeRoute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeCatalog:
    """Immutable collection of routes, chokepoints and the intelligence feed.

    Iteration order of routes is catalog order; animation eligibility and
    hit testing depend on it.
    """

    routes: tuple[TradeRoute, ...] = field(default_factory=tuple)
    chokepoints: tuple[Chokepoint, ...] = field(default_factory=tuple)
    risk_alerts: tuple[RiskAlert, ...] = field(default_factory=tuple)
    opportunities: tuple[Opportunity, ...] = field(default_factory=tuple)
    risk_metrics: RiskMetrics | None = None

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for entity_id in [r.id for r in self.routes] + [c.id for c in self.chokepoints]:
            if entity_id in seen:
                raise ValueError(f"Duplicate entity id in catalog: {entity_id}")
            seen.add(entity_id)

        feed_ids: set[str] = set()
        route_ids = set(self.route_ids)
        for item_id, referenced in [(a.id, a.affected_routes) for a in self.risk_alerts] + [
            (o.id, o.related_routes) for o in self.opportunities
        ]:
            if item_id in feed_ids:
                raise ValueError(f"Duplicate intelligence feed id in catalog: {item_id}")
            feed_ids.add(item_id)
            unknown = set(referenced) - route_ids
            if unknown:
                raise ValueError(f"Feed entry {item_id} references unknown routes: {sorted(unknown)}")

    @property
    def route_ids(self) -> list[str]:
        return [r.id for r in self.routes]

    @property
    def chokepoint_ids(self) -> list[str]:
        return [c.id for c in self.chokepoints]

    @property
    def entity_ids(self) -> set[str]:
        """All IDs that selection, hover and focus may reference."""
        return set(self.route_ids) | set(self.chokepoint_ids)

    def get_route(self, route_id: str) -> TradeRoute | None:
        for route in self.routes:
            if route.id == route_id:
                return route
        return None

    def get_chokepoint(self, chokepoint_id: str) -> Chokepoint | None:
        for chokepoint in self.chokepoints:
            if chokepoint.id == chokepoint_id:
                return chokepoint
        return None

    def total_volume(self) -> float:
        """Sum of route volumes in billions USD."""
        return sum(r.volume_usd_billions for r in self.routes)

    def alerts_with_severity(self, severity: RiskLevel | None = None) -> list[RiskAlert]:
        """Risk alerts in feed order, optionally only one severity (None = all)."""
        return [a for a in self.risk_alerts if severity is None or a.severity is severity]

    def alerts_for_route(self, route_id: str) -> list[RiskAlert]:
        return [a for a in self.risk_alerts if route_id in a.affected_routes]

    def opportunities_for_route(self, route_id: str) -> list[Opportunity]:
        return [o for o in self.opportunities if route_id in o.related_routes]

    # =========================================================================
    # LOADING
    # =========================================================================

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradeCatalog":
        """Build catalog from parsed JSON data.

        Raises:
            ValueError: On missing keys, unknown enum values, or invalid ranges.
        """
        try:
            routes = tuple(_parse_route(raw) for raw in data.get("routes", []))
            chokepoints = tuple(_parse_chokepoint(raw) for raw in data.get("chokepoints", []))
            risk_alerts = tuple(_parse_risk_alert(raw) for raw in data.get("risk_alerts", []))
            opportunities = tuple(_parse_opportunity(raw) for raw in data.get("opportunities", []))
            risk_metrics = _parse_risk_metrics(data["risk_metrics"]) if "risk_metrics" in data else None
        except KeyError as e:
            raise ValueError(f"Catalog entry missing required field: {e}") from e

        catalog = cls(
            routes=routes,
            chokepoints=chokepoints,
            risk_alerts=risk_alerts,
            opportunities=opportunities,
            risk_metrics=risk_metrics,
        )
        logger.info(
            f"Loaded catalog: {len(routes)} routes, {len(chokepoints)} chokepoints, "
            f"{len(risk_alerts)} alerts, {len(opportunities)} opportunities"
        )
        return catalog

    @classmethod
    def from_json_file(cls, path: Path) -> "TradeCatalog":
        """Load catalog from a JSON file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        return cls.from_dict(data=data)

    @classmethod
    def load_default(cls) -> "TradeCatalog":
        """Load the sample catalog bundled with the package."""
        from tradeflow.constants import DEFAULT_CATALOG_PATH

        return cls.from_json_file(path=DEFAULT_CATALOG_PATH)


def _parse_endpoint(raw: dict[str, Any]) -> RouteEndpoint:
    return RouteEndpoint(
        location=GeoPoint(lat=float(raw["lat"]), lon=float(raw["lon"])),
        country=raw["country"],
    )


def _parse_route(raw: dict[str, Any]) -> TradeRoute:
    return TradeRoute(
        id=raw["id"],
        name=raw["name"],
        origin=_parse_endpoint(raw["origin"]),
        destination=_parse_endpoint(raw["destination"]),
        volume_usd_billions=float(raw["volume_usd_billions"]),
        risk_level=RiskLevel(raw["risk_level"]),
        status=RouteStatus.parse(raw["status"]),
        commodity=raw.get("commodity", ""),
        chokepoints_passed=tuple(raw.get("chokepoints_passed", [])),
        alternative_routes=int(raw.get("alternative_routes", 0)),
        geopolitical_factors=tuple(raw.get("geopolitical_factors", [])),
    )


def _parse_chokepoint(raw: dict[str, Any]) -> Chokepoint:
    return Chokepoint(
        id=raw["id"],
        name=raw["name"],
        location=GeoPoint(lat=float(raw["lat"]), lon=float(raw["lon"])),
        chokepoint_type=ChokepointType(raw.get("type", ChokepointType.STRAIT.value)),
        risk_level=RiskLevel(raw["risk_level"]),
        throughput_pct=float(raw["throughput_pct"]),
        recent_incidents=int(raw["recent_incidents"]),
        controlling_nation=raw.get("controlling_nation", ""),
    )


def _parse_risk_alert(raw: dict[str, Any]) -> RiskAlert:
    last_updated = raw.get("last_updated")
    return RiskAlert(
        id=raw["id"],
        title=raw["title"],
        severity=RiskLevel(raw["severity"]),
        category=AlertCategory(raw["category"]),
        impact=raw["impact"],
        probability=float(raw["probability"]),
        timeframe=raw["timeframe"],
        description=raw.get("description", ""),
        affected_routes=tuple(raw.get("affected_routes", [])),
        last_updated=date.fromisoformat(last_updated) if last_updated else None,
    )


def _parse_opportunity(raw: dict[str, Any]) -> Opportunity:
    return Opportunity(
        id=raw["id"],
        title=raw["title"],
        opportunity_type=OpportunityType.parse(raw["type"]),
        potential_value_billions=float(raw["potential_value_billions"]),
        time_to_realize=raw["time_to_realize"],
        confidence=float(raw["confidence"]),
        description=raw.get("description", ""),
        related_routes=tuple(raw.get("related_routes", [])),
    )


def _parse_risk_metrics(raw: dict[str, Any]) -> RiskMetrics:
    return RiskMetrics(
        global_trade_volume_trillions=float(raw["global_trade_volume_trillions"]),
        routes_at_risk=int(raw["routes_at_risk"]),
        active_disruptions=int(raw["active_disruptions"]),
        critical_chokepoints=int(raw["critical_chokepoints"]),
        average_delay_days=float(raw["average_delay_days"]),
        estimated_losses_billions=float(raw["estimated_losses_billions"]),
    )
