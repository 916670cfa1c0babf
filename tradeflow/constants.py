"""Configuration constants for Tradeflow Map.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Viewport size and zoom bounds
    GridConfig: Graticule (lat/lon reference lines)
    ArcConfig: Route arc curvature and sampling
    HitTestConfig: Pointer proximity radii
    AnimationConfig: Flow particle timing and eligibility policy
    StyleConfig: Colors, widths, and dash patterns
    ClickConfig: Picked-object type tags for map layers
    ChartConfig: Chart rendering dimensions
    FeedConfig: Intelligence feed filters and badges
"""

from pathlib import Path

from tradeflow.model.enums import AlertCategory, OpportunityType, RiskLevel, RouteStatus

# Package root directory (where tradeflow/ lives)
PACKAGE_DIR = Path(__file__).parent

# Bundled sample data (read-only catalog shipped with the package)
DATA_DIR = PACKAGE_DIR / "data"

DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.json"


class AppConfig:
    """UI application settings."""

    TITLE = "Global Trade Intelligence"
    SUBTITLE = "Trade routes, chokepoints and risk exposure"
    ICON = "🚢"
    LAYOUT = "wide"


class MapConfig:
    """Viewport defaults and zoom bounds."""

    # Size used until the host reports real dimensions (two-phase init)
    DEFAULT_WIDTH = 1200
    DEFAULT_HEIGHT = 600

    # Zoom scale bounds (hard clamp, callers never observe values outside)
    MIN_ZOOM = 0.5
    MAX_ZOOM = 3.0
    DEFAULT_ZOOM = 1.0

    # Sidebar controls
    PAN_STEP_PX = 80  # Screen pixels per pan button press
    ZOOM_STEP = 0.25  # Zoom scale change per zoom button press


class GridConfig:
    """Graticule reference lines drawn beneath routes."""

    LAT_MIN = -60
    LAT_MAX = 60
    LAT_STEP = 30
    LON_MIN = -180
    LON_MAX = 180
    LON_STEP = 60
    DASH_PATTERN = (5.0, 5.0)
    COLOR = (100, 150, 255, 51)
    WIDTH = 1.0


class ArcConfig:
    """Route arc curvature.

    Curvature is a visual emphasis rule only: critical routes bow further
    away from the straight line so they stand out. Tunable, not an invariant.
    """

    BASE_CURVATURE = 0.3
    CRITICAL_CURVATURE_BONUS = 0.1

    # Polyline resolution for drawing a curve
    SAMPLE_SEGMENTS = 48


class HitTestConfig:
    """Pointer proximity radii (screen pixels)."""

    ROUTE_ENDPOINT_RADIUS_PX = 20.0
    CHOKEPOINT_RADIUS_PX = 15.0


class AnimationConfig:
    """Flow particle timing and eligibility policy.

    MAX_ANIMATED bounds per-frame rendering cost. It is a performance policy:
    qualifying routes past the cap simply do not get a particle.
    """

    PROGRESS_PER_FRAME = 0.016  # ~60 Hz cadence crosses a route in ~1 second
    NOMINAL_FRAME_S = 1.0 / 60.0

    TOP_VOLUME_COUNT = 10
    MAX_ANIMATED = 20
    ANIMATED_RISK_LEVELS = frozenset({RiskLevel.HIGH, RiskLevel.CRITICAL})

    # Streamlit cannot redraw at 60 Hz; the fragment reruns at this interval
    HOST_FRAME_INTERVAL_S = 0.25


class StyleConfig:
    """Visual colors and styling (RGBA, 0-255)."""

    ROUTE_COLORS_RGBA = {
        RiskLevel.LOW: (100, 255, 150, 153),
        RiskLevel.MEDIUM: (255, 200, 100, 153),
        RiskLevel.HIGH: (255, 150, 100, 153),
        RiskLevel.CRITICAL: (255, 100, 100, 204),
    }
    assert set(ROUTE_COLORS_RGBA.keys()) == set(RiskLevel)

    CHOKEPOINT_COLORS_RGBA = {
        RiskLevel.LOW: (100, 255, 150, 204),
        RiskLevel.MEDIUM: (255, 200, 100, 204),
        RiskLevel.HIGH: (255, 150, 100, 204),
        RiskLevel.CRITICAL: (255, 100, 100, 255),
    }
    assert set(CHOKEPOINT_COLORS_RGBA.keys()) == set(RiskLevel)

    # Hex versions for Plotly and the legend
    RISK_COLORS_HEX = {
        RiskLevel.LOW: "#64FF96",
        RiskLevel.MEDIUM: "#FFC864",
        RiskLevel.HIGH: "#FF9664",
        RiskLevel.CRITICAL: "#FF6464",
    }
    assert set(RISK_COLORS_HEX.keys()) == set(RiskLevel)

    RISK_EMOJIS = {
        RiskLevel.LOW: "🟢",
        RiskLevel.MEDIUM: "🟡",
        RiskLevel.HIGH: "🟠",
        RiskLevel.CRITICAL: "🔴",
    }
    assert set(RISK_EMOJIS.keys()) == set(RiskLevel)

    # (dash, gap) in pixels, None = solid line
    ROUTE_DASH_PATTERNS = {
        RouteStatus.ACTIVE: None,
        RouteStatus.AT_RISK: None,
        RouteStatus.DISRUPTED: (10.0, 5.0),
    }
    assert set(ROUTE_DASH_PATTERNS.keys()) == set(RouteStatus)

    SELECTED_ROUTE_COLOR = (150, 200, 255, 255)
    SELECTED_PARTICLE_COLOR = (150, 200, 255, 230)

    # Route width: BASE + volume / VOLUME_DIVISOR, capped, plus emphasis
    ROUTE_WIDTH_BASE = 1.0
    ROUTE_WIDTH_VOLUME_DIVISOR = 300.0  # billions USD per extra pixel
    ROUTE_WIDTH_MAX = 3.0
    ROUTE_WIDTH_DISRUPTED_MIN = 2.0
    ROUTE_WIDTH_HOVER_BONUS = 1.0
    ROUTE_WIDTH_SELECTED_BONUS = 1.5

    PARTICLE_RADIUS = 3.0
    PARTICLE_RADIUS_SELECTED = 4.0

    # Chokepoint marker: BASE + throughput / divisor, hover enlarges
    MARKER_RADIUS_BASE = 5.0
    MARKER_RADIUS_THROUGHPUT_DIVISOR = 10.0  # percent per extra pixel
    MARKER_RADIUS_HOVER_BONUS = 2.0
    MARKER_RING_OFFSET = 2.0
    MARKER_RING_COLOR = (255, 255, 255, 230)
    GLOW_INCIDENT_THRESHOLD = 5
    GLOW_RADIUS_FACTOR = 2.2
    GLOW_ALPHA = 90

    BACKGROUND_COLOR = "#0B1220"


class ClickConfig:
    """Type tags attached to every pickable map object."""

    TYPE_ROUTE = "route"
    TYPE_PARTICLE = "particle"
    TYPE_CHOKEPOINT = "chokepoint"
    TYPE_GRID = "grid"


class ChartConfig:
    """Chart rendering dimensions and settings."""

    MAP_HEIGHT = MapConfig.DEFAULT_HEIGHT
    VOLUME_CHART_HEIGHT = 320
    SELECTED_BAR_OUTLINE = "#96C8FF"
    UNSELECTED_BAR_OPACITY = 0.55


class FeedConfig:
    """Intelligence feed (risk alerts and opportunities) settings."""

    # Severity filter buttons, in display order; None = all
    SEVERITY_FILTERS = (None, RiskLevel.CRITICAL, RiskLevel.HIGH, RiskLevel.MEDIUM)
    ALL_SEVERITIES_LABEL = "All"

    CATEGORY_EMOJIS = {
        AlertCategory.GEOPOLITICAL: "🌐",
        AlertCategory.ENVIRONMENTAL: "🌊",
        AlertCategory.ECONOMIC: "💱",
        AlertCategory.INFRASTRUCTURE: "🏗️",
    }
    assert set(CATEGORY_EMOJIS.keys()) == set(AlertCategory)

    OPPORTUNITY_EMOJIS = {
        OpportunityType.NEW_ROUTE: "🧭",
        OpportunityType.INFRASTRUCTURE: "🏗️",
        OpportunityType.TRADE_AGREEMENT: "🤝",
        OpportunityType.TECHNOLOGY: "🤖",
    }
    assert set(OPPORTUNITY_EMOJIS.keys()) == set(OpportunityType)
