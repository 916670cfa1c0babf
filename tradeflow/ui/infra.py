"""Infrastructure utilities for Streamlit UI operations.

This module abstracts Streamlit-specific infrastructure (st.rerun, st.session_state)
to enable mockability in tests.

Frame callbacks: Streamlit has no per-frame presentation hook. The map's
FrameLoop registers its callback here; a st.fragment(run_every=...) in app.py
calls run_frame_callbacks() on every fragment run. Cancelling removes the
callback so nothing keeps ticking after the component is torn down.
"""

import itertools
import logging
import time
from collections.abc import Callable

import streamlit as st

from tradeflow.core.animation import FrameCallback

logger = logging.getLogger(__name__)

FRAME_CALLBACKS_KEY = "_frame_callbacks"
LAST_FRAME_TIME_KEY = "_last_frame_time"

_callback_ids = itertools.count(1)


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun with optional scope.

    This is a mockable wrapper around st.rerun() for testability.
    In tests, patch 'tradeflow.ui.infra.trigger_rerun' to prevent
    actual reruns (which raise StopExecution).

    Args:
        scope: Rerun scope - "app" for full rerun, "fragment" for partial.
    """
    st.rerun(scope=scope)


def bump_map_version() -> None:
    """Increment map_version to create fresh Pydeck component.

    This eliminates ghost clicks by creating a new component instance
    with no memory of previous click events.
    """
    old_version = st.session_state.get("map_version", 0)
    new_version = old_version + 1
    st.session_state.map_version = new_version
    logger.info(f"[MAP] Bumped map_version: {old_version} -> {new_version}")


def register_frame_callback(callback: FrameCallback) -> Callable[[], None]:
    """Register a per-frame callback, returning its cancel function.

    The cancel function is safe to call more than once.
    """
    callbacks: dict[int, FrameCallback] = st.session_state.setdefault(FRAME_CALLBACKS_KEY, {})
    callback_id = next(_callback_ids)
    callbacks[callback_id] = callback
    logger.debug(f"[ANIM] Registered frame callback {callback_id}")

    def cancel() -> None:
        registered = st.session_state.get(FRAME_CALLBACKS_KEY, {})
        if registered.pop(callback_id, None) is not None:
            logger.debug(f"[ANIM] Cancelled frame callback {callback_id}")

    return cancel


def has_frame_callbacks() -> bool:
    return bool(st.session_state.get(FRAME_CALLBACKS_KEY))


def run_frame_callbacks() -> None:
    """Call every registered frame callback with the elapsed time since the last run."""
    now = time.monotonic()
    last = st.session_state.get(LAST_FRAME_TIME_KEY)
    st.session_state[LAST_FRAME_TIME_KEY] = now
    if last is None:
        return
    delta_seconds = now - last
    for callback in list(st.session_state.get(FRAME_CALLBACKS_KEY, {}).values()):
        callback(delta_seconds)
