"""Hit testing - which entity a pointer position targets.

A HitTarget is an entity ID plus one or more anchor points. A pointer hits a
target when its distance to any anchor is strictly less than the radius.

Routes anchor at their projected origin and destination only. The curve body
is not part of the hit region: pressing midway along an arc selects nothing.

Among several targets within range, the FIRST in iteration order wins. There
is no nearest-anchor tie-break.

All positions (pointer and anchors) are world space. Callers convert screen
radii by dividing by the zoom scale.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from tradeflow.core.projection import project_many
from tradeflow.model.chokepoint import Chokepoint
from tradeflow.model.geo_point import GeoPoint, ScreenPoint
from tradeflow.model.trade_route import TradeRoute


@dataclass(frozen=True)
class HitTarget:
    """Hit region for one entity."""

    entity_id: str
    anchors: tuple[ScreenPoint, ...]

    def is_hit(self, pointer: ScreenPoint, radius: float) -> bool:
        return any(pointer.distance_to(anchor) < radius for anchor in self.anchors)


def _project_locations(locations: Sequence[GeoPoint], width: float, height: float) -> list[ScreenPoint]:
    if not locations:
        return []
    xy = project_many(
        np.array([loc.lat for loc in locations]), np.array([loc.lon for loc in locations]), width, height
    )
    return [ScreenPoint(x=float(x), y=float(y)) for x, y in xy]


def route_targets(routes: Iterable[TradeRoute], width: float, height: float) -> list[HitTarget]:
    """Hit targets anchored at each route's projected endpoints."""
    routes = list(routes)
    origins = _project_locations([route.origin.location for route in routes], width, height)
    destinations = _project_locations([route.destination.location for route in routes], width, height)
    return [
        HitTarget(entity_id=route.id, anchors=(origin, destination))
        for route, origin, destination in zip(routes, origins, destinations)
    ]


def chokepoint_targets(chokepoints: Iterable[Chokepoint], width: float, height: float) -> list[HitTarget]:
    """Hit targets anchored at each chokepoint marker center."""
    chokepoints = list(chokepoints)
    centers = _project_locations([cp.location for cp in chokepoints], width, height)
    return [HitTarget(entity_id=cp.id, anchors=(center,)) for cp, center in zip(chokepoints, centers)]


def hit_test(pointer: ScreenPoint, targets: Sequence[HitTarget], radius: float) -> str | None:
    """Return the first target ID within radius of the pointer, or None."""
    for target in targets:
        if target.is_hit(pointer=pointer, radius=radius):
            return target.entity_id
    return None
