"""Shared pytest fixtures for tradeflow workflow tests.

Provides a fake frame host, a small catalog and a mounted MapComponent.
Keep this file minimal: workflow tests drive the component through pointer
and key events exactly as the app does.

COORDINATE SYSTEM:
    The component is resized to 360 x 180 so one degree equals one pixel
    at zoom 1 with no pan (screen == world):
        x = lon + 180
        y = 90 - lat
"""

from collections.abc import Callable

import pytest

from tradeflow.model.catalog import TradeCatalog
from tradeflow.model.chokepoint import Chokepoint
from tradeflow.model.enums import ChokepointType, RiskLevel, RouteStatus
from tradeflow.model.geo_point import GeoPoint
from tradeflow.model.trade_route import RouteEndpoint, TradeRoute
from tradeflow.ui.map_component import MapComponent
from tradeflow.ui.state_machine import SelectionContext, SelectionStateMachine

SMAndCtx = tuple[SelectionStateMachine, SelectionContext]

WORKFLOW_WIDTH = 360
WORKFLOW_HEIGHT = 180


class FakeFrameHost:
    """Stands in for the Streamlit frame callback registry."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[float], None]] = []
        self.cancel_count = 0

    def register(self, callback: Callable[[float], None]) -> Callable[[], None]:
        self.callbacks.append(callback)

        def cancel() -> None:
            self.cancel_count += 1
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return cancel


class RouteSelectRecorder:
    """Collects every value passed to on_route_select."""

    def __init__(self) -> None:
        self.calls: list[str | None] = []

    def __call__(self, route_id: str | None) -> None:
        self.calls.append(route_id)


def _route(route_id: str, origin: tuple[float, float], destination: tuple[float, float], **kwargs) -> TradeRoute:
    return TradeRoute(
        id=route_id,
        name=f"Route {route_id}",
        origin=RouteEndpoint(location=GeoPoint(lat=origin[0], lon=origin[1]), country="A"),
        destination=RouteEndpoint(location=GeoPoint(lat=destination[0], lon=destination[1]), country="B"),
        volume_usd_billions=kwargs.get("volume", 100.0),
        risk_level=kwargs.get("risk_level", RiskLevel.LOW),
        status=kwargs.get("status", RouteStatus.ACTIVE),
    )


def _chokepoint(chokepoint_id: str, location: tuple[float, float], **kwargs) -> Chokepoint:
    return Chokepoint(
        id=chokepoint_id,
        name=f"Chokepoint {chokepoint_id}",
        location=GeoPoint(lat=location[0], lon=location[1]),
        risk_level=kwargs.get("risk_level", RiskLevel.LOW),
        throughput_pct=kwargs.get("throughput_pct", 10.0),
        recent_incidents=kwargs.get("recent_incidents", 0),
        chokepoint_type=ChokepointType.STRAIT,
    )


@pytest.fixture
def workflow_catalog() -> TradeCatalog:
    """Screen positions at 360 x 180, zoom 1:
        r1: (180, 90) -> (270, 90)
        r2: (90, 45)  -> (90, 135)   critical, disrupted
        r3: (300, 30) -> (330, 60)
        cp1: (200, 150)
        cp2: (180, 95)  5px below r1's origin (hover precedence)
    """
    return TradeCatalog(
        routes=(
            _route("r1", origin=(0, 0), destination=(0, 90)),
            _route(
                "r2",
                origin=(45, -90),
                destination=(-45, -90),
                risk_level=RiskLevel.CRITICAL,
                status=RouteStatus.DISRUPTED,
            ),
            _route("r3", origin=(60, 120), destination=(30, 150), risk_level=RiskLevel.MEDIUM),
        ),
        chokepoints=(
            _chokepoint("cp1", location=(-60, 20), risk_level=RiskLevel.CRITICAL),
            _chokepoint("cp2", location=(-5, 0)),
        ),
    )


@pytest.fixture
def frame_host() -> FakeFrameHost:
    return FakeFrameHost()


@pytest.fixture
def route_select() -> RouteSelectRecorder:
    return RouteSelectRecorder()


@pytest.fixture
def component(
    workflow_catalog: TradeCatalog, frame_host: FakeFrameHost, route_select: RouteSelectRecorder
) -> MapComponent:
    """Mounted and laid-out component; torn down after the test."""
    comp = MapComponent(
        catalog=workflow_catalog,
        on_route_select=route_select,
        register_frame=frame_host.register,
    )
    comp.resize(width=WORKFLOW_WIDTH, height=WORKFLOW_HEIGHT)
    yield comp
    comp.teardown()


@pytest.fixture
def sm_and_ctx(route_select: RouteSelectRecorder) -> SMAndCtx:
    """Selection state machine with the host callback attached."""
    return SelectionStateMachine.create(
        entity_ids=["r1", "r2", "r3", "cp1", "cp2"],
        on_route_select=route_select,
    )
