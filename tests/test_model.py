"""Tests for tradeflow data models.

Tests: GeoPoint, ScreenPoint, enums, TradeRoute, Chokepoint, TradeCatalog, intelligence feed, PointerEvent
Focus: Construction-time validation and catalog loading
"""

import json
import math
from datetime import date
from pathlib import Path

import pytest

from factories import make_alert, make_chokepoint, make_opportunity, make_route
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.enums import AlertCategory, OpportunityType, RiskLevel, RouteStatus
from tradeflow.model.geo_point import GeoPoint, ScreenPoint
from tradeflow.model.pointer_event import PointerEvent, PointerEventKind


class TestGeoPoint:
    """Geographic coordinate validation."""

    def test_valid_bounds(self) -> None:
        assert GeoPoint(lat=90, lon=180).lat_lon == (90, 180)
        assert GeoPoint(lat=-90, lon=-180).lat_lon == (-90, -180)

    @pytest.mark.parametrize("lat,lon", [(90.5, 0), (-91, 0), (0, 180.1), (0, -181), (math.nan, 0)])
    def test_out_of_range_rejected(self, lat: float, lon: float) -> None:
        with pytest.raises(ValueError):
            GeoPoint(lat=lat, lon=lon)


class TestScreenPoint:
    def test_distance(self) -> None:
        assert ScreenPoint(x=0, y=0).distance_to(ScreenPoint(x=3, y=4)) == 5.0

    def test_xy_is_deck_order(self) -> None:
        assert ScreenPoint(x=1.5, y=2.5).xy == [1.5, 2.5]


class TestEnums:
    """Risk and status enums."""

    def test_severity_order(self) -> None:
        levels = sorted(RiskLevel, key=lambda r: r.severity)
        assert levels == [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL]

    @pytest.mark.parametrize("raw", ["at-risk", "at_risk"])
    def test_status_parse_accepts_both_spellings(self, raw: str) -> None:
        assert RouteStatus.parse(raw) is RouteStatus.AT_RISK

    def test_status_parse_unknown(self) -> None:
        with pytest.raises(ValueError):
            RouteStatus.parse("closed")

    def test_labels(self) -> None:
        assert RouteStatus.AT_RISK.label == "At risk"
        assert RiskLevel.CRITICAL.label == "Critical"


class TestEntities:
    """TradeRoute and Chokepoint validation."""

    def test_route_summary(self) -> None:
        route = make_route("r", origin=(0, 0), destination=(1, 1))
        assert route.summary == "A → B"
        assert route.is_disrupted is False

    def test_negative_volume_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_route("r", origin=(0, 0), destination=(1, 1), volume=-1.0)

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_route("", origin=(0, 0), destination=(1, 1))

    def test_throughput_range(self) -> None:
        with pytest.raises(ValueError):
            make_chokepoint("c", location=(0, 0), throughput_pct=101.0)

    def test_negative_incidents_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_chokepoint("c", location=(0, 0), recent_incidents=-1)


class TestTradeCatalog:
    """Catalog construction and loading."""

    def test_ids(self, small_catalog: TradeCatalog) -> None:
        assert small_catalog.route_ids == ["r1", "r2", "r3"]
        assert small_catalog.chokepoint_ids == ["cp1", "cp2"]
        assert small_catalog.entity_ids == {"r1", "r2", "r3", "cp1", "cp2"}

    def test_lookup(self, small_catalog: TradeCatalog) -> None:
        assert small_catalog.get_route("r2").risk_level is RiskLevel.CRITICAL
        assert small_catalog.get_route("missing") is None
        assert small_catalog.get_chokepoint("cp1").recent_incidents == 12

    def test_total_volume(self, small_catalog: TradeCatalog) -> None:
        assert small_catalog.total_volume() == 450.0

    def test_duplicate_ids_rejected(self) -> None:
        """Routes and chokepoints share one ID space."""
        with pytest.raises(ValueError, match="Duplicate"):
            TradeCatalog(
                routes=(make_route("x", origin=(0, 0), destination=(1, 1)),),
                chokepoints=(make_chokepoint("x", location=(0, 0)),),
            )

    def test_from_dict(self) -> None:
        catalog = TradeCatalog.from_dict(
            {
                "routes": [
                    {
                        "id": "a",
                        "name": "A",
                        "origin": {"lat": 0, "lon": 0, "country": "X"},
                        "destination": {"lat": 10, "lon": 10, "country": "Y"},
                        "volume_usd_billions": 12,
                        "risk_level": "high",
                        "status": "at-risk",
                    }
                ],
                "chokepoints": [
                    {
                        "id": "c",
                        "name": "C",
                        "lat": 5,
                        "lon": 5,
                        "type": "canal",
                        "risk_level": "low",
                        "throughput_pct": 12,
                        "recent_incidents": 0,
                    }
                ],
            }
        )
        assert catalog.get_route("a").status is RouteStatus.AT_RISK
        assert catalog.get_chokepoint("c").chokepoint_type.value == "canal"

    def test_missing_field_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="missing required field"):
            TradeCatalog.from_dict({"routes": [{"id": "a"}]})

    def test_invalid_coordinate_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            TradeCatalog.from_dict(
                {
                    "chokepoints": [
                        {
                            "id": "c",
                            "name": "C",
                            "lat": 95,
                            "lon": 0,
                            "risk_level": "low",
                            "throughput_pct": 1,
                            "recent_incidents": 0,
                        }
                    ]
                }
            )

    def test_from_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"routes": [], "chokepoints": []}), encoding="utf-8")
        catalog = TradeCatalog.from_json_file(path=path)
        assert catalog.routes == ()

    def test_load_default(self) -> None:
        """Bundled sample: six routes, six chokepoints, unique IDs."""
        catalog = TradeCatalog.load_default()
        assert len(catalog.routes) == 6
        assert len(catalog.chokepoints) == 6
        assert len(catalog.entity_ids) == 12
        assert len(catalog.risk_alerts) == 5
        assert len(catalog.opportunities) == 5
        assert catalog.risk_metrics.average_delay_days == pytest.approx(4.2)


class TestIntelligenceFeed:
    """Risk alerts, opportunities and headline metrics."""

    @pytest.mark.parametrize("probability", [-1.0, 100.5])
    def test_alert_probability_range(self, probability: float) -> None:
        with pytest.raises(ValueError):
            make_alert("a", probability=probability)

    def test_opportunity_confidence_range(self) -> None:
        with pytest.raises(ValueError):
            make_opportunity("o", confidence=120.0)

    @pytest.mark.parametrize("raw", ["trade-agreement", "trade_agreement"])
    def test_opportunity_type_parse(self, raw: str) -> None:
        assert OpportunityType.parse(raw) is OpportunityType.TRADE_AGREEMENT
        assert OpportunityType.TRADE_AGREEMENT.label == "Trade agreement"

    def test_severity_filter(self, feed_catalog: TradeCatalog) -> None:
        assert [a.id for a in feed_catalog.alerts_with_severity()] == ["a1", "a2", "a3"]
        assert [a.id for a in feed_catalog.alerts_with_severity(RiskLevel.CRITICAL)] == ["a1", "a3"]
        assert feed_catalog.alerts_with_severity(RiskLevel.MEDIUM) == []

    def test_lookup_by_route(self, feed_catalog: TradeCatalog) -> None:
        assert [a.id for a in feed_catalog.alerts_for_route("r3")] == ["a2"]
        assert [o.id for o in feed_catalog.opportunities_for_route("r3")] == ["o2"]
        assert feed_catalog.opportunities_for_route("missing") == []

    def test_unknown_route_reference_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown routes"):
            TradeCatalog(
                routes=(make_route("r", origin=(0, 0), destination=(1, 1)),),
                risk_alerts=(make_alert("a", affected_routes=("r", "ghost")),),
            )

    def test_duplicate_feed_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            TradeCatalog(risk_alerts=(make_alert("x"),), opportunities=(make_opportunity("x"),))

    def test_feed_ids_separate_from_entity_ids(self) -> None:
        """A feed entry may share an ID with a route; feed IDs are not selectable."""
        catalog = TradeCatalog(
            routes=(make_route("x", origin=(0, 0), destination=(1, 1)),),
            risk_alerts=(make_alert("x", affected_routes=("x",)),),
        )
        assert catalog.entity_ids == {"x"}

    def test_from_dict(self) -> None:
        catalog = TradeCatalog.from_dict(
            {
                "routes": [
                    {
                        "id": "r",
                        "name": "R",
                        "origin": {"lat": 0, "lon": 0, "country": "X"},
                        "destination": {"lat": 10, "lon": 10, "country": "Y"},
                        "volume_usd_billions": 12,
                        "risk_level": "high",
                        "status": "active",
                    }
                ],
                "risk_alerts": [
                    {
                        "id": "alert-1",
                        "title": "Canal drought",
                        "severity": "high",
                        "category": "environmental",
                        "affected_routes": ["r"],
                        "impact": "Fewer transits",
                        "probability": 90,
                        "timeframe": "Next 6 months",
                        "last_updated": "2025-01-26",
                    }
                ],
                "opportunities": [
                    {
                        "id": "opp-1",
                        "title": "Arctic route",
                        "type": "new-route",
                        "potential_value_billions": 85,
                        "time_to_realize": "2-5 years",
                        "confidence": 70,
                    }
                ],
                "risk_metrics": {
                    "global_trade_volume_trillions": 28.5,
                    "routes_at_risk": 42,
                    "active_disruptions": 7,
                    "critical_chokepoints": 3,
                    "average_delay_days": 4.2,
                    "estimated_losses_billions": 125,
                },
            }
        )
        alert = catalog.risk_alerts[0]
        assert alert.category is AlertCategory.ENVIRONMENTAL
        assert alert.last_updated == date(2025, 1, 26)
        assert catalog.opportunities[0].opportunity_type is OpportunityType.NEW_ROUTE
        assert catalog.risk_metrics.routes_at_risk == 42

    def test_feed_sections_optional(self) -> None:
        catalog = TradeCatalog.from_dict({"routes": [], "chokepoints": []})
        assert catalog.risk_alerts == ()
        assert catalog.risk_metrics is None

    def test_bad_feed_entry_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="missing required field"):
            TradeCatalog.from_dict({"opportunities": [{"id": "o"}]})

    def test_negative_metric_rejected(self) -> None:
        with pytest.raises(ValueError, match="average_delay_days"):
            TradeCatalog.from_dict(
                {
                    "risk_metrics": {
                        "global_trade_volume_trillions": 1,
                        "routes_at_risk": 0,
                        "active_disruptions": 0,
                        "critical_chokepoints": 0,
                        "average_delay_days": -1,
                        "estimated_losses_billions": 0,
                    }
                }
            )

    def test_bundled_feed_references_bundled_routes(self) -> None:
        catalog = TradeCatalog.load_default()
        assert [a.id for a in catalog.alerts_with_severity(RiskLevel.CRITICAL)] == ["alert-1", "alert-2"]
        assert [o.id for o in catalog.opportunities_for_route("route-5")] == ["opp-4", "opp-5"]


class TestPointerEvent:
    """Pointer event validation."""

    def test_leave_has_no_position(self) -> None:
        event = PointerEvent.leave()
        assert event.kind is PointerEventKind.LEAVE
        assert event.position is None

    def test_positioned_event_requires_position(self) -> None:
        with pytest.raises(ValueError):
            PointerEvent(kind=PointerEventKind.CLICK)

    def test_non_finite_position_rejected(self) -> None:
        with pytest.raises(ValueError):
            PointerEvent.at(PointerEventKind.MOVE, math.inf, 0)
