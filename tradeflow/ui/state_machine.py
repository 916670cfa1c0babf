"""Selection state machine for the trade route map.

Uses python-statemachine for selection state management with:
- Clear state definitions
- Guarded transitions (conditions)
- Entry hooks for side effects
- Listeners for logging and for surfacing single-select changes

States (3 states):
    UNSELECTED: Nothing selected (initial)
    SINGLE_SELECTED: Exactly one route selected by a plain click
    MULTI_SELECTED: One or more routes selected by modifier clicks

Transitions:
    click(entity_id):
        sole selection == {entity_id} -> UNSELECTED
        otherwise                     -> SINGLE_SELECTED({entity_id}), replacing any prior selection
    modifier_click(entity_id):
        toggle membership of entity_id
        set becomes empty             -> UNSELECTED
        otherwise                     -> MULTI_SELECTED
    escape():  any state -> UNSELECTED, also clears focused_id
    dismiss(): any state -> UNSELECTED, focus untouched (click on empty map space)

Hover and focus (SelectionContext.hovered_id / focused_id) are orthogonal to
state. They change through set_hovered()/set_focused() and never trigger a
transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from tradeflow.core.render_pass import SelectionSnapshot

logger = logging.getLogger(__name__)

RouteSelectCallback = Callable[[Optional[str]], None]


@dataclass
class SelectionContext:
    """Shared model for the selection state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.

    Attributes:
        selected_ids: Currently selected route IDs
        hovered_id: Entity under the pointer (route or chokepoint)
        focused_id: Entity with keyboard focus (route or chokepoint)
        known_ids: Every entity ID in the current catalog; hover/focus must be one of these
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    selected_ids: set[str] = field(default_factory=set)
    hovered_id: str | None = None
    focused_id: str | None = None
    known_ids: set[str] = field(default_factory=set)

    def clear_selected(self) -> None:
        self.selected_ids = set()

    def single_selected_id(self) -> str | None:
        """The selected ID when exactly one is selected."""
        if len(self.selected_ids) == 1:
            return next(iter(self.selected_ids))
        return None

    def __repr__(self) -> str:
        return (
            f"SelectionContext(state={self.state}, "
            f"selected={sorted(self.selected_ids)}, "
            f"hovered={self.hovered_id}, "
            f"focused={self.focused_id})"
        )


class SelectionLoggingListener:
    """Logs every transition at INFO.

    Usage:
        sm = SelectionStateMachine(context=context)
        sm.add_listener(SelectionLoggingListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")


class RouteSelectListener:
    """Surfaces single-select changes to the host as `route_id | None`.

    The reported value is the single-selected route, or None. A modifier
    toggle that keeps or creates a multi-selection is not reported; one that
    empties the selection reports None like any other deselect. The callback
    fires only when the value differs from the last one reported.
    """

    def __init__(self, on_route_select: RouteSelectCallback) -> None:
        self.callback = on_route_select
        self.last_reported: str | None = None

    def after_transition(self, event: str, machine: SelectionStateMachine) -> None:
        if event == "modifier_click" and machine.multi_selected.is_active:
            return
        route_id = machine.context.single_selected_id() if machine.single_selected.is_active else None
        if route_id == self.last_reported:
            return
        self.last_reported = route_id
        logger.info(f"[STATE] Route selection changed: {route_id}")
        self.callback(route_id)


class SelectionStateMachine(StateMachine):
    """State machine for route selection. See module docstring for transitions.

    States:
        unselected: Nothing selected
        single_selected: One route selected by plain click
        multi_selected: Routes selected by modifier clicks
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    unselected = State("Unselected", initial=True)
    single_selected = State("SingleSelected")
    multi_selected = State("MultiSelected")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    # Plain click: replace the selection, or clear it when clicking the sole selection
    click = (
        unselected.to(single_selected, on="select_only")
        | single_selected.to(unselected, cond="is_sole_selection")
        | single_selected.to.itself(unless="is_sole_selection", on="select_only")
        | multi_selected.to(unselected, cond="is_sole_selection")
        | multi_selected.to(single_selected, unless="is_sole_selection", on="select_only")
    )

    # Modifier click: toggle membership, empty set returns to unselected
    modifier_click = (
        unselected.to(multi_selected, on="toggle_membership")
        | single_selected.to(unselected, cond="is_sole_selection")
        | single_selected.to(multi_selected, unless="is_sole_selection", on="toggle_membership")
        | multi_selected.to(unselected, cond="is_sole_selection")
        | multi_selected.to.itself(unless="is_sole_selection", on="toggle_membership")
    )

    # Escape key: unconditional reset, clears focus as well
    escape = unselected.to.itself() | single_selected.to(unselected) | multi_selected.to(unselected)

    # Click on empty map space: reset selection, keep focus
    dismiss = unselected.to.itself() | single_selected.to(unselected) | multi_selected.to(unselected)

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def is_sole_selection(self, entity_id: str) -> bool:
        """Guard: entity_id is the only selected ID."""
        return self.context.selected_ids == {entity_id}

    # ==========================================================================
    # Transition Actions
    # ==========================================================================

    def select_only(self, entity_id: str) -> None:
        """Action: replace the selection with entity_id."""
        self.context.selected_ids = {entity_id}

    def toggle_membership(self, entity_id: str) -> None:
        """Action: add or remove entity_id from the selection."""
        if entity_id in self.context.selected_ids:
            self.context.selected_ids.discard(entity_id)
        else:
            self.context.selected_ids.add(entity_id)

    def before_escape(self) -> None:
        self.context.focused_id = None

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_unselected(self) -> None:
        """Hook: Entering unselected state always leaves an empty selection."""
        self.context.clear_selected()

    # ==========================================================================
    # Hover / Focus (not state changes, just context updates)
    # ==========================================================================

    def set_hovered(self, entity_id: str | None) -> None:
        """Set or clear the hovered entity.

        Raises:
            ValueError: If entity_id is not a known route or chokepoint ID.
        """
        self._check_known(entity_id)
        if entity_id != self.context.hovered_id:
            logger.debug(f"[STATE] Hover: {entity_id}")
        self.context.hovered_id = entity_id

    def set_focused(self, entity_id: str | None) -> None:
        """Set or clear keyboard focus.

        Raises:
            ValueError: If entity_id is not a known route or chokepoint ID.
        """
        self._check_known(entity_id)
        self.context.focused_id = entity_id

    def _check_known(self, entity_id: str | None) -> None:
        if entity_id is not None and entity_id not in self.context.known_ids:
            raise ValueError(f"Unknown entity ID '{entity_id}'")

    def sync_entities(self, entity_ids: Iterable[str]) -> None:
        """Replace the known entity IDs, dropping stale selection, hover and focus.

        A selection emptied by the sync returns the machine to unselected.
        """
        self.context.known_ids = set(entity_ids)
        stale = self.context.selected_ids - self.context.known_ids
        if stale:
            logger.info(f"[STATE] Dropping stale selection: {sorted(stale)}")
            self.context.selected_ids -= stale
        if self.context.hovered_id not in self.context.known_ids:
            self.context.hovered_id = None
        if self.context.focused_id not in self.context.known_ids:
            self.context.focused_id = None
        if not self.context.selected_ids and not self.unselected.is_active:
            self.send("dismiss")

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_unselected(self) -> bool:
        return self.unselected.is_active

    @property
    def is_single_selected(self) -> bool:
        return self.single_selected.is_active

    @property
    def is_multi_selected(self) -> bool:
        return self.multi_selected.is_active

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: SelectionContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or SelectionContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> SelectionContext:
        """Alias for model."""
        return self.model

    def snapshot(self) -> SelectionSnapshot:
        """Read-only copy for the render pass."""
        return SelectionSnapshot(
            selected_ids=frozenset(self.context.selected_ids),
            hovered_id=self.context.hovered_id,
            focused_id=self.context.focused_id,
        )

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def __repr__(self) -> str:
        return f"SelectionStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(
        entity_ids: Iterable[str] = (),
        on_route_select: RouteSelectCallback | None = None,
    ) -> tuple[SelectionStateMachine, SelectionContext]:
        """Factory method to create state machine with context and listeners.

        Args:
            entity_ids: Known route and chokepoint IDs
            on_route_select: Optional host callback for single-select changes

        Returns:
            Tuple of (SelectionStateMachine, SelectionContext)
        """
        context = SelectionContext(known_ids=set(entity_ids))
        sm = SelectionStateMachine(context=context)
        sm.add_listener(SelectionLoggingListener())
        if on_route_select is not None:
            sm.add_listener(RouteSelectListener(on_route_select=on_route_select))
            logger.info("Created SelectionStateMachine with RouteSelectListener")
        else:
            logger.info("Created SelectionStateMachine without route select listener")
        return sm, context
