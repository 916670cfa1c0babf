"""Intelligence feed entries - risk alerts, opportunities and headline metrics.

These are read-only catalog entries shown beside the map. They are not map
entities: they have no position, are never selected, and their IDs live
outside the route/chokepoint namespace. They reference routes by ID.
"""

from dataclasses import dataclass, field
from datetime import date

from tradeflow.model.enums import AlertCategory, OpportunityType, RiskLevel


def _check_percent(owner: str, name: str, value: float) -> None:
    if not 0.0 <= value <= 100.0:
        raise ValueError(f"{owner} {name} {value} outside [0, 100]")


@dataclass(frozen=True)
class RiskAlert:
    """A developing risk affecting one or more routes.

    Attributes:
        id: Unique alert ID (e.g., "alert-1")
        title: Headline
        severity: Risk classification
        category: Driver behind the alert
        affected_routes: IDs of affected routes
        impact: One-line impact statement
        probability: Likelihood in percent [0, 100]
        timeframe: Free text, e.g. "Ongoing" or "1-3 months"
        description: Longer explanation
        last_updated: Date of the latest update
    """

    id: str
    title: str
    severity: RiskLevel
    category: AlertCategory
    impact: str
    probability: float
    timeframe: str
    description: str = ""
    affected_routes: tuple[str, ...] = field(default_factory=tuple)
    last_updated: date | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("RiskAlert must have a non-empty id")
        _check_percent(f"Alert {self.id}", "probability", self.probability)


@dataclass(frozen=True)
class Opportunity:
    """A potential gain for the trade network.

    Attributes:
        id: Unique opportunity ID (e.g., "opp-1")
        title: Headline
        opportunity_type: Kind of opportunity
        potential_value_billions: Estimated value in billions USD (>= 0)
        time_to_realize: Free text, e.g. "2-5 years"
        confidence: Confidence in percent [0, 100]
        description: Longer explanation
        related_routes: IDs of related routes
    """

    id: str
    title: str
    opportunity_type: OpportunityType
    potential_value_billions: float
    time_to_realize: str
    confidence: float
    description: str = ""
    related_routes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Opportunity must have a non-empty id")
        if self.potential_value_billions < 0:
            raise ValueError(f"Opportunity {self.id} has negative value {self.potential_value_billions}")
        _check_percent(f"Opportunity {self.id}", "confidence", self.confidence)


@dataclass(frozen=True)
class RiskMetrics:
    """Headline figures for the whole network, published with the feed."""

    global_trade_volume_trillions: float
    routes_at_risk: int
    active_disruptions: int
    critical_chokepoints: int
    average_delay_days: float
    estimated_losses_billions: float

    def __post_init__(self) -> None:
        for name in (
            "global_trade_volume_trillions",
            "routes_at_risk",
            "active_disruptions",
            "critical_chokepoints",
            "average_delay_days",
            "estimated_losses_billions",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"RiskMetrics.{name} must be >= 0, got {getattr(self, name)}")
