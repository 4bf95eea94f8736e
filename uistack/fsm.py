from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class UIState(StrEnum):
    entering = "entering"
    active = "active"
    paused = "paused"
    closing = "closing"
    destroyed = "destroyed"


class LifecycleFSM(StateMachine):
    """Per-instance lifecycle guard.

    entering -> active <-> paused, then any live state -> closing -> destroyed.
    The manager drives the transitions and invokes the hooks; this class only
    rejects illegal moves (e.g. pausing an overlay twice or resuming a closed UI).
    """

    entering = State(UIState.entering.value, value=UIState.entering.value, initial=True)
    active = State(UIState.active.value, value=UIState.active.value)
    paused = State(UIState.paused.value, value=UIState.paused.value)
    closing = State(UIState.closing.value, value=UIState.closing.value)
    destroyed = State(UIState.destroyed.value, value=UIState.destroyed.value, final=True)

    activate = entering.to(active)
    pause = active.to(paused)
    resume = paused.to(active)
    begin_close = entering.to(closing) | active.to(closing) | paused.to(closing)
    destroy = closing.to(destroyed)

    @property
    def ui_state(self) -> UIState:
        return UIState(str(self.current_state.value))

    @property
    def is_live(self) -> bool:
        return self.ui_state in (UIState.entering, UIState.active, UIState.paused)
