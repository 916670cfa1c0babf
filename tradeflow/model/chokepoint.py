"""Chokepoint - a fixed maritime bottleneck (strait, canal, port)."""

from dataclasses import dataclass

from tradeflow.model.enums import ChokepointType, RiskLevel
from tradeflow.model.geo_point import GeoPoint


@dataclass(frozen=True)
class Chokepoint:
    """A chokepoint marker on the map.

    Attributes:
        id: Unique ID (e.g., "cp-1")
        name: Display name
        location: Marker center
        chokepoint_type: Strait, canal or port
        risk_level: Risk classification
        throughput_pct: Share of global trade passing through [0, 100]
        recent_incidents: Incident count (>= 0)
        controlling_nation: Who controls passage
    """

    id: str
    name: str
    location: GeoPoint
    risk_level: RiskLevel
    throughput_pct: float
    recent_incidents: int
    chokepoint_type: ChokepointType = ChokepointType.STRAIT
    controlling_nation: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Chokepoint must have a non-empty id")
        if not 0.0 <= self.throughput_pct <= 100.0:
            raise ValueError(f"Chokepoint {self.id} throughput {self.throughput_pct} outside [0, 100]")
        if self.recent_incidents < 0:
            raise ValueError(f"Chokepoint {self.id} has negative incident count {self.recent_incidents}")
