"""Map geometry and interaction core.

Pure, host-independent building blocks:
- projection: equirectangular lat/lon → pixel projection
- arc_geometry: route Bezier arcs, point-on-curve sampling, dashing
- viewport: pan/zoom state and view box math
- hit_testing: proximity-based entity picking
- animation: flow particle progress, eligibility policy, frame loop handle
- render_pass: DrawList composition
"""

from tradeflow.core.animation import AnimationScheduler, AnimationState, FrameLoop, eligible_route_ids
from tradeflow.core.arc_geometry import (
    CurveDescriptor,
    build_arc,
    dash_polyline,
    point_at_progress,
    sample_curve,
)
from tradeflow.core.hit_testing import HitTarget, chokepoint_targets, hit_test, route_targets
from tradeflow.core.projection import project, project_many, unproject
from tradeflow.core.render_pass import RenderPass, SelectionSnapshot
from tradeflow.core.viewport import ViewBox, Viewport

__all__ = [
    # Projection
    "project",
    "project_many",
    "unproject",
    # Arc geometry
    "CurveDescriptor",
    "build_arc",
    "point_at_progress",
    "sample_curve",
    "dash_polyline",
    # Viewport
    "Viewport",
    "ViewBox",
    # Hit testing
    "HitTarget",
    "hit_test",
    "route_targets",
    "chokepoint_targets",
    # Animation
    "AnimationScheduler",
    "AnimationState",
    "FrameLoop",
    "eligible_route_ids",
    # Render pass
    "RenderPass",
    "SelectionSnapshot",
]
