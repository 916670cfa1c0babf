"""Equirectangular projection from geographic to map pixel coordinates.

    x = (lon + 180) / 360 * width
    y = (90 - lat) / 180 * height

The whole globe fills the viewport: (-180, 90) maps to the top-left corner,
(180, -90) to the bottom-right, (0, 0) to the center.

Projected positions are never cached across renders. Resizing the viewport
changes width/height, and every render projects again from scratch.
"""

import numpy as np

from tradeflow.model.geo_point import GeoPoint, ScreenPoint


def project(point: GeoPoint, width: float, height: float) -> ScreenPoint:
    """Project a geographic point into viewport pixel space.

    Inputs are assumed valid (catalog-validated). A zero-size viewport
    yields (0, 0) for every point; callers skip drawing until layout is known.

    Args:
        point: Geographic coordinate
        width: Viewport width in pixels
        height: Viewport height in pixels

    Returns:
        ScreenPoint with x in [0, width] and y in [0, height].
    """
    x = (point.lon + 180.0) / 360.0 * width
    y = (90.0 - point.lat) / 180.0 * height
    return ScreenPoint(x=x, y=y)


def project_many(lats: np.ndarray, lons: np.ndarray, width: float, height: float) -> np.ndarray:
    """Vectorised projection.

    Returns:
        Array of shape (n, 2) with [x, y] rows.
    """
    xs = (np.asarray(lons, dtype=float) + 180.0) / 360.0 * width
    ys = (90.0 - np.asarray(lats, dtype=float)) / 180.0 * height
    return np.column_stack([xs, ys])


def unproject(point: ScreenPoint, width: float, height: float) -> tuple[float, float]:
    """Inverse projection: pixel position back to (lat, lon).

    Used for the coordinate readout under the pointer. Positions outside the
    viewport produce out-of-range degrees; no clamping is applied.

    Raises:
        ValueError: If the viewport has zero size (inverse undefined).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot unproject on a zero-size viewport ({width}x{height})")
    lon = point.x / width * 360.0 - 180.0
    lat = 90.0 - point.y / height * 180.0
    return lat, lon
