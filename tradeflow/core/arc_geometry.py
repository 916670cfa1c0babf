"""Route arc geometry and curve sampling.

Routes are drawn as quadratic Bezier curves that bow perpendicular to the
straight line between origin and destination:

    mid     = (origin + destination) / 2
    (dx,dy) = destination - origin
    control = mid + (-dy, dx) * curvature

Curvature is ArcConfig.BASE_CURVATURE, plus ArcConfig.CRITICAL_CURVATURE_BONUS
for critical routes. The curve is a pure function of its inputs, so rendering
and hit testing always see the same geometry.

Evaluation (Path Sampler) uses the direct polynomial form:

    B(t) = (1-t)² P0 + 2(1-t)t P1 + t² P2

which returns P0 exactly at t=0 and P2 exactly at t=1.
"""

from dataclasses import dataclass

import numpy as np

from tradeflow.constants import ArcConfig
from tradeflow.model.enums import RiskLevel
from tradeflow.model.geo_point import ScreenPoint


@dataclass(frozen=True)
class CurveDescriptor:
    """Quadratic Bezier curve in world pixel space.

    Attributes:
        start: P0 (route origin)
        control: P1 (off-line control point)
        end: P2 (route destination)
    """

    start: ScreenPoint
    control: ScreenPoint
    end: ScreenPoint


def curvature_for(risk_level: RiskLevel) -> float:
    """Curvature constant for a risk level."""
    if risk_level is RiskLevel.CRITICAL:
        return ArcConfig.BASE_CURVATURE + ArcConfig.CRITICAL_CURVATURE_BONUS
    return ArcConfig.BASE_CURVATURE


def build_arc(origin: ScreenPoint, destination: ScreenPoint, risk_level: RiskLevel) -> CurveDescriptor:
    """Build the curved arc between two projected points.

    Args:
        origin: Projected route origin
        destination: Projected route destination
        risk_level: Route risk (critical bows further)

    Returns:
        CurveDescriptor whose control point is offset from the chord midpoint
        by the chord vector rotated 90° and scaled by curvature.
    """
    curvature = curvature_for(risk_level)
    mid_x = (origin.x + destination.x) / 2
    mid_y = (origin.y + destination.y) / 2
    dx = destination.x - origin.x
    dy = destination.y - origin.y
    control = ScreenPoint(x=mid_x - dy * curvature, y=mid_y + dx * curvature)
    return CurveDescriptor(start=origin, control=control, end=destination)


def point_at_progress(curve: CurveDescriptor, t: float) -> ScreenPoint:
    """Evaluate the curve at parameter t (O(1), called per particle per frame).

    Args:
        curve: Curve to evaluate
        t: Progress in [0, 1]; values outside are clamped

    Returns:
        Point on the curve.
    """
    t = max(0.0, min(1.0, t))
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return ScreenPoint(
        x=a * curve.start.x + b * curve.control.x + c * curve.end.x,
        y=a * curve.start.y + b * curve.control.y + c * curve.end.y,
    )


def sample_curve(curve: CurveDescriptor, segments: int = ArcConfig.SAMPLE_SEGMENTS) -> list[ScreenPoint]:
    """Sample the curve into a polyline of segments + 1 points.

    First and last points are exactly the curve endpoints.
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")

    t = np.linspace(0.0, 1.0, segments + 1)
    u = 1.0 - t
    p0 = np.array([curve.start.x, curve.start.y])
    p1 = np.array([curve.control.x, curve.control.y])
    p2 = np.array([curve.end.x, curve.end.y])
    pts = (u * u)[:, None] * p0 + (2.0 * u * t)[:, None] * p1 + (t * t)[:, None] * p2

    polyline = [ScreenPoint(x=float(x), y=float(y)) for x, y in pts]
    polyline[0] = curve.start
    polyline[-1] = curve.end
    return polyline


def dash_polyline(
    points: list[ScreenPoint] | tuple[ScreenPoint, ...],
    dash: float,
    gap: float,
) -> list[tuple[ScreenPoint, ...]]:
    """Split a polyline into visible dash runs.

    Walks the polyline by arc length, alternating `dash` pixels drawn and
    `gap` pixels skipped, starting with a dash. Dash runs keep the interior
    vertices so curved dashes stay curved.

    Args:
        points: Polyline vertices
        dash: Visible run length in pixels (> 0)
        gap: Hidden run length in pixels (>= 0)

    Returns:
        List of dash runs, each with at least two points.
    """
    if dash <= 0:
        raise ValueError(f"dash must be > 0, got {dash}")
    if gap < 0:
        raise ValueError(f"gap must be >= 0, got {gap}")
    if len(points) < 2:
        return []
    if gap == 0:
        return [tuple(points)]

    runs: list[tuple[ScreenPoint, ...]] = []
    current: list[ScreenPoint] = [points[0]]
    drawing = True
    remaining = dash

    for a, b in zip(points, points[1:]):
        seg_len = a.distance_to(b)
        pos = 0.0
        while seg_len - pos > remaining:
            pos += remaining
            frac = pos / seg_len
            cut = ScreenPoint(x=a.x + (b.x - a.x) * frac, y=a.y + (b.y - a.y) * frac)
            if drawing:
                current.append(cut)
                runs.append(tuple(current))
                current = []
            else:
                current = [cut]
            drawing = not drawing
            remaining = dash if drawing else gap
        remaining -= seg_len - pos
        if drawing:
            current.append(b)

    if drawing and len(current) >= 2:
        runs.append(tuple(current))
    return runs
