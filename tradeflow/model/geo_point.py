"""GeoPoint and ScreenPoint - the two coordinate atoms of the map.

A GeoPoint is a geographic location (WGS84 decimal degrees) taken from the
catalog. A ScreenPoint is a position in the map's pixel space after
projection. World space and screen space share the ScreenPoint type; the
Viewport converts between them.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A geographic coordinate.

    Attributes:
        lat: Latitude in decimal degrees [-90, 90]
        lon: Longitude in decimal degrees [-180, 180]

    Example:
        singapore = GeoPoint(lat=1.3521, lon=103.8198)
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate range at catalog construction time."""
        if math.isnan(self.lat) or math.isnan(self.lon):
            raise ValueError(f"GeoPoint cannot have NaN coordinates: ({self.lat}, {self.lon})")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude {self.lon} outside [-180, 180]")

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat:.4f}, lon={self.lon:.4f})"


@dataclass(frozen=True)
class ScreenPoint:
    """A position in map pixel space (x right, y down)."""

    x: float
    y: float

    def distance_to(self, other: "ScreenPoint") -> float:
        """Euclidean distance in pixels."""
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def xy(self) -> list[float]:
        """Return [x, y] list - deck.gl position order."""
        return [self.x, self.y]
