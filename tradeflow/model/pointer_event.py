"""Pointer event types - host input normalized before reaching the map core.

STRICT CONTRACT:
- Every kind except LEAVE carries a finite screen position
- NaN/inf positions are rejected here so the Viewport never sees them
- modifier is True when the multi-select modifier (shift) is held
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tradeflow.model.geo_point import ScreenPoint


class PointerEventKind(Enum):
    """What the pointer did."""

    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CLICK = "click"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    """A single pointer event in screen coordinates.

    Attributes:
        kind: Event kind
        position: Screen position relative to the map container (None for LEAVE)
        modifier: Multi-select modifier held (shift)
    """

    kind: PointerEventKind
    position: Optional[ScreenPoint] = None
    modifier: bool = False

    def __post_init__(self) -> None:
        """Validate invariants - fail immediately on malformed input."""
        if self.kind == PointerEventKind.LEAVE:
            return
        if self.position is None:
            raise ValueError(f"{self.kind.value} event must have a position")
        if not (math.isfinite(self.position.x) and math.isfinite(self.position.y)):
            raise ValueError(f"{self.kind.value} event has non-finite position {self.position}")

    @staticmethod
    def at(kind: PointerEventKind, x: float, y: float, modifier: bool = False) -> "PointerEvent":
        """Factory for positioned events."""
        return PointerEvent(kind=kind, position=ScreenPoint(x=x, y=y), modifier=modifier)

    @staticmethod
    def leave() -> "PointerEvent":
        """Factory for pointer-leave."""
        return PointerEvent(kind=PointerEventKind.LEAVE)
