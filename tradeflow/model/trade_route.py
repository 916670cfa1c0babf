"""TradeRoute - a shipping lane between two countries.

Routes are read-only catalog entries. The map core only needs the endpoints,
volume, risk level and status; the remaining fields feed the details panel.
"""

from dataclasses import dataclass, field

from tradeflow.model.enums import RiskLevel, RouteStatus
from tradeflow.model.geo_point import GeoPoint


@dataclass(frozen=True)
class RouteEndpoint:
    """Origin or destination of a route."""

    location: GeoPoint
    country: str


@dataclass(frozen=True)
class TradeRoute:
    """A trade route with its risk profile.

    Attributes:
        id: Unique ID, the join key for selection state (e.g., "route-1")
        name: Display name
        origin: Start endpoint
        destination: End endpoint
        volume_usd_billions: Annual trade volume in billions USD (>= 0)
        risk_level: Risk classification
        status: Operational status
        commodity: Main goods carried
        chokepoints_passed: Names of chokepoints along the route
        alternative_routes: Number of known alternatives
        geopolitical_factors: Short risk driver descriptions
    """

    id: str
    name: str
    origin: RouteEndpoint
    destination: RouteEndpoint
    volume_usd_billions: float
    risk_level: RiskLevel
    status: RouteStatus
    commodity: str = ""
    chokepoints_passed: tuple[str, ...] = field(default_factory=tuple)
    alternative_routes: int = 0
    geopolitical_factors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("TradeRoute must have a non-empty id")
        if self.volume_usd_billions < 0:
            raise ValueError(f"Route {self.id} has negative volume {self.volume_usd_billions}")
        if self.alternative_routes < 0:
            raise ValueError(f"Route {self.id} has negative alternative_routes {self.alternative_routes}")

    @property
    def is_disrupted(self) -> bool:
        return self.status is RouteStatus.DISRUPTED

    @property
    def summary(self) -> str:
        """One-line 'Origin → Destination' description."""
        return f"{self.origin.country} → {self.destination.country}"
