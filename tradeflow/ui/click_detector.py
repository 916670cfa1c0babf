"""Map click capture - deck.gl click events to map pointer events.

The deck is shown with st_deckgl from streamlit-deckgl, which reports every
click including clicks on empty map space (st.pydeck_chart only reports
object selections). With an OrthographicView the event coordinate is [x, y]
in world pixel space. The map component works in container-relative screen
pixels, so the coordinate is mapped back through the viewport.

st_deckgl keeps returning its last event on every rerun. Each deck instance
is keyed by the map version: a handled click bumps the version, so the next
deck starts with no event, and a version whose click was already handled
reports nothing. Two clicks at the same pixel are therefore two clicks.

Streamlit only delivers clicks (no hover stream), so one click yields:
    MOVE  - updates hover at the clicked position (chokepoint tooltip)
    CLICK - selection (route endpoints only)

The picked object is informational: selection is decided by the map
component's own hit test, not by what deck.gl picked.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from tradeflow.constants import ChartConfig, ClickConfig
from tradeflow.core.viewport import Viewport
from tradeflow.model.geo_point import ScreenPoint
from tradeflow.model.pointer_event import PointerEvent, PointerEventKind

logger = logging.getLogger(__name__)

HANDLED_VERSION_KEY = "_map_click_handled_version"


def map_key(map_version: int) -> str:
    return f"main_map_{map_version}"


def capture_map_click(deck: pdk.Deck, map_version: int, height: int = ChartConfig.MAP_HEIGHT) -> dict[str, Any] | None:
    """Show the deck and return its click event, at most once per map version.

    Args:
        deck: Configured pydeck.Deck
        map_version: Current st.session_state.map_version
        height: Height in pixels

    Returns:
        The raw st_deckgl event dict, or None when there is no new click.
    """
    # MUST pass events=['click'] to enable click detection!
    event = st_deckgl(deck, key=map_key(map_version), height=height, events=["click"])
    if not event:
        return None
    if st.session_state.get(HANDLED_VERSION_KEY) == map_version:
        logger.debug(f"[MAP] Click on map version {map_version} already handled")
        return None
    st.session_state[HANDLED_VERSION_KEY] = map_version
    return event


@dataclass
class ClickDetector:
    """Converts st_deckgl click events to PointerEvents.

    Attributes:
        viewport: Viewport the deck was rendered with
    """

    viewport: Viewport

    def detect(self, event: dict[str, Any] | None, modifier: bool = False) -> list[PointerEvent]:
        """Build pointer events for a click.

        st_deckgl spreads the picked object's properties into the event:
            empty space: {coordinate: [x, y], eventType: "click"}
            object:      {type: ..., id: ..., coordinate: [x, y], eventType: "click", ...}

        Args:
            event: Raw st_deckgl event, or None
            modifier: Multi-select modifier active

        Returns:
            [MOVE, CLICK] at the screen position, or [] when the click has no usable position.
        """
        if not event:
            return []
        if event.get("type"):
            self._log_object(obj=event)

        coord = event.get("coordinate")
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            return []
        world_x, world_y = float(coord[0]), float(coord[1])
        if not (math.isfinite(world_x) and math.isfinite(world_y)):
            logger.warning(f"Ignoring click with non-finite coordinate: {coord}")
            return []

        screen = self.viewport.world_to_screen(ScreenPoint(x=world_x, y=world_y))
        logger.debug(f"Click at world ({world_x:.1f}, {world_y:.1f}) -> screen ({screen.x:.1f}, {screen.y:.1f})")
        return [
            PointerEvent(kind=PointerEventKind.MOVE, position=screen),
            PointerEvent(kind=PointerEventKind.CLICK, position=screen, modifier=modifier),
        ]

    @staticmethod
    def _log_object(obj: dict[str, Any]) -> None:
        obj_type = obj.get("type")
        if obj_type in (ClickConfig.TYPE_ROUTE, ClickConfig.TYPE_CHOKEPOINT, ClickConfig.TYPE_PARTICLE):
            logger.debug(f"Picked {obj_type} {obj.get('id')}")
        elif obj_type == ClickConfig.TYPE_GRID:
            logger.debug("Picked grid line")
        else:
            logger.warning(f"Unknown object type: {obj_type}")
