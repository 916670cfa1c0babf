"""Shared pytest fixtures for tradeflow tests.

Provides small hand-built catalogs, with and without an intelligence feed.
All fixtures use explicit values with documented rationale. Entity
factories and the 360 x 180 test viewport live in factories.py.
"""

import dataclasses

import pytest

from factories import make_alert, make_chokepoint, make_opportunity, make_route
from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.enums import RiskLevel, RouteStatus


@pytest.fixture
def small_catalog() -> TradeCatalog:
    """Three well-separated routes and two chokepoints.

    Screen positions at 360 x 180:
        r1: (180, 90) -> (270, 90)   low, active, 100B
        r2: (90, 45)  -> (90, 135)   critical, disrupted, 300B
        r3: (300, 30) -> (330, 60)   medium, at risk, 50B
        cp1: (200, 150)              critical, 12 incidents
        cp2: (30, 20)                low, 0 incidents
    """
    return TradeCatalog(
        routes=(
            make_route("r1", origin=(0, 0), destination=(0, 90), volume=100.0),
            make_route(
                "r2",
                origin=(45, -90),
                destination=(-45, -90),
                volume=300.0,
                risk_level=RiskLevel.CRITICAL,
                status=RouteStatus.DISRUPTED,
            ),
            make_route(
                "r3",
                origin=(60, 120),
                destination=(30, 150),
                volume=50.0,
                risk_level=RiskLevel.MEDIUM,
                status=RouteStatus.AT_RISK,
            ),
        ),
        chokepoints=(
            make_chokepoint("cp1", location=(-60, 20), risk_level=RiskLevel.CRITICAL, recent_incidents=12),
            make_chokepoint("cp2", location=(70, -150), throughput_pct=30.0),
        ),
    )


@pytest.fixture
def critical_catalog_25() -> TradeCatalog:
    """25 critical routes, all animation-eligible, in catalog order c00..c24."""
    routes = tuple(
        make_route(
            f"c{i:02d}",
            origin=(-50 + i * 4, -170 + i * 5),
            destination=(-48 + i * 4, 10 + i * 5),
            volume=float(i + 1),
            risk_level=RiskLevel.CRITICAL,
        )
        for i in range(25)
    )
    return TradeCatalog(routes=routes, chokepoints=())



@pytest.fixture
def feed_catalog(small_catalog: TradeCatalog) -> TradeCatalog:
    """small_catalog plus three alerts and two opportunities.

        a1: critical, r2        a2: high, r1 + r3        a3: critical, no routes
        o1: r1                  o2: r2 + r3
    """
    return dataclasses.replace(
        small_catalog,
        risk_alerts=(
            make_alert("a1", severity=RiskLevel.CRITICAL, affected_routes=("r2",), probability=85.0),
            make_alert("a2", severity=RiskLevel.HIGH, affected_routes=("r1", "r3")),
            make_alert("a3", severity=RiskLevel.CRITICAL),
        ),
        opportunities=(
            make_opportunity("o1", related_routes=("r1",)),
            make_opportunity("o2", related_routes=("r2", "r3")),
        ),
    )
