"""Enumerations shared by catalog entities and the map core.

All enums here are closed sets. Style lookups in constants.py assert full
coverage at import time, so adding a member without a color, emoji or dash
pattern fails immediately instead of at render time.
"""

from enum import Enum


class RiskLevel(Enum):
    """Risk classification for routes and chokepoints."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        """Rank for ordering (0 = low ... 3 = critical)."""
        if self is RiskLevel.LOW:
            return 0
        elif self is RiskLevel.MEDIUM:
            return 1
        elif self is RiskLevel.HIGH:
            return 2
        elif self is RiskLevel.CRITICAL:
            return 3
        else:
            raise RuntimeError(f"Unknown risk level: {self}")

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RouteStatus(Enum):
    """Operational status of a trade route."""

    ACTIVE = "active"
    AT_RISK = "at_risk"
    DISRUPTED = "disrupted"

    @classmethod
    def parse(cls, raw: str) -> "RouteStatus":
        """Parse catalog spelling (accepts both 'at-risk' and 'at_risk')."""
        return cls(raw.replace("-", "_"))

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class ChokepointType(Enum):
    """Kind of maritime bottleneck."""

    STRAIT = "strait"
    CANAL = "canal"
    PORT = "port"


class AlertCategory(Enum):
    """Driver behind a risk alert."""

    GEOPOLITICAL = "geopolitical"
    ENVIRONMENTAL = "environmental"
    ECONOMIC = "economic"
    INFRASTRUCTURE = "infrastructure"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class OpportunityType(Enum):
    """Kind of trade opportunity."""

    NEW_ROUTE = "new_route"
    INFRASTRUCTURE = "infrastructure"
    TRADE_AGREEMENT = "trade_agreement"
    TECHNOLOGY = "technology"

    @classmethod
    def parse(cls, raw: str) -> "OpportunityType":
        """Parse catalog spelling (accepts both 'new-route' and 'new_route')."""
        return cls(raw.replace("-", "_"))

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()
