"""Flow particle animation: progress scheduler, eligibility, and frame loop.

AnimationScheduler owns a single global progress value in [0, 1) shared by
every animated route. Each tick advances it by a fixed per-frame increment
(AnimationConfig.PROGRESS_PER_FRAME at the nominal 60 Hz cadence) and wraps
modulo 1.0. A host that ticks less often passes the elapsed time so particles
keep the same speed.

The reduced-motion preference is read once at construction. When set, the
scheduler is disabled for the lifetime of the instance: tick() never changes
progress, no route is eligible, and the frame loop never registers.

FrameLoop is the explicit start/stop handle for the recurring per-frame
callback. start() registers with the host, stop() cancels, and stop() is
safe to call any number of times, including when start() never ran.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from tradeflow.constants import AnimationConfig
from tradeflow.model.trade_route import TradeRoute

logger = logging.getLogger(__name__)

# Host hook: register a per-frame callback (receives elapsed seconds),
# returns a cancel function.
FrameCallback = Callable[[float], None]
RegisterFrameCallback = Callable[[FrameCallback], Callable[[], None]]


@dataclass
class AnimationState:
    """Animation state owned by one map component."""

    progress: float = 0.0
    enabled: bool = True


class AnimationScheduler:
    """Advances global particle progress.

    Example:
        scheduler = AnimationScheduler(reduced_motion=False)
        progress = scheduler.tick()
    """

    def __init__(self, reduced_motion: bool = False) -> None:
        self.state = AnimationState(progress=0.0, enabled=not reduced_motion)
        if reduced_motion:
            logger.info("[ANIM] Reduced motion preferred - animation disabled")

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    @property
    def progress(self) -> float:
        return self.state.progress

    def tick(self, delta_seconds: Optional[float] = None) -> float:
        """Advance progress by one frame.

        Args:
            delta_seconds: Elapsed time since the previous tick. None means one
                nominal frame (exactly PROGRESS_PER_FRAME).

        Returns:
            New progress in [0, 1). Unchanged when disabled.
        """
        if not self.state.enabled:
            return self.state.progress

        if delta_seconds is None:
            increment = AnimationConfig.PROGRESS_PER_FRAME
        else:
            frames = max(0.0, delta_seconds) / AnimationConfig.NOMINAL_FRAME_S
            increment = AnimationConfig.PROGRESS_PER_FRAME * frames

        self.state.progress = (self.state.progress + increment) % 1.0
        return self.state.progress

    def eligible_route_ids(
        self,
        routes: Iterable[TradeRoute],
        selected_ids: set[str],
        hovered_id: Optional[str],
    ) -> list[str]:
        """Route IDs that get a flow particle this frame.

        Returns an empty list when animation is disabled.
        """
        if not self.state.enabled:
            return []
        return eligible_route_ids(routes=routes, selected_ids=selected_ids, hovered_id=hovered_id)


def eligible_route_ids(
    routes: Iterable[TradeRoute],
    selected_ids: set[str],
    hovered_id: Optional[str],
    top_volume_count: int = AnimationConfig.TOP_VOLUME_COUNT,
    max_animated: int = AnimationConfig.MAX_ANIMATED,
) -> list[str]:
    """Animation eligibility policy.

    A route qualifies if ANY of:
    - it is among the top `top_volume_count` routes by volume (descending)
    - its risk level is high or critical
    - it is selected or hovered

    Qualifying routes are returned in catalog order, truncated to the first
    `max_animated` even if more qualify.
    """
    routes = list(routes)
    by_volume = sorted(routes, key=lambda r: r.volume_usd_billions, reverse=True)
    top_ids = {r.id for r in by_volume[:top_volume_count]}

    eligible = [
        r.id
        for r in routes
        if r.id in top_ids
        or r.risk_level in AnimationConfig.ANIMATED_RISK_LEVELS
        or r.id in selected_ids
        or r.id == hovered_id
    ]
    if len(eligible) > max_animated:
        logger.debug(f"[ANIM] {len(eligible)} routes qualify, animating first {max_animated}")
    return eligible[:max_animated]


class FrameLoop:
    """Start/stop handle for the recurring per-frame callback.

    Without a `register` hook the host drives frames by calling run_frame()
    directly; start()/stop() then only gate whether frames advance.

    Usage:
        with FrameLoop(scheduler=scheduler, on_frame=redraw, register=host.every_frame):
            ...  # frames run while inside the block, cancelled on any exit
    """

    def __init__(
        self,
        scheduler: AnimationScheduler,
        on_frame: Optional[Callable[[float], None]] = None,
        register: Optional[RegisterFrameCallback] = None,
    ) -> None:
        self.scheduler = scheduler
        self.on_frame = on_frame
        self._register = register
        self._cancel: Optional[Callable[[], None]] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Register the per-frame callback. No-op when disabled or running."""
        if self._running:
            return
        if not self.scheduler.enabled:
            logger.info("[ANIM] Frame loop not started (animation disabled)")
            return
        self._running = True
        if self._register is not None:
            self._cancel = self._register(self.run_frame)
        logger.info("[ANIM] Frame loop started")

    def stop(self) -> None:
        """Cancel the per-frame callback. Safe when not running."""
        cancel = self._cancel
        self._cancel = None
        was_running = self._running
        self._running = False
        if cancel is not None:
            cancel()
        if was_running:
            logger.info("[ANIM] Frame loop stopped")

    def run_frame(self, delta_seconds: Optional[float] = None) -> Optional[float]:
        """Advance one frame, then notify on_frame.

        Returns:
            New progress, or None when the loop is not running.
        """
        if not self._running:
            return None
        progress = self.scheduler.tick(delta_seconds)
        if self.on_frame is not None:
            self.on_frame(progress)
        return progress

    def __enter__(self) -> "FrameLoop":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
