from __future__ import annotations

import logging
from collections import deque
from typing import Any

from uistack.config import UISettings
from uistack.core.events import EventType, UIEvent
from uistack.core.handles import UIHandle
from uistack.core.layout_text import LayoutSnapshot, UIEntry
from uistack.errors import InvalidTemplateError, TemplateNotFoundError
from uistack.fsm import UIState
from uistack.layers import MEMBERSHIP_LAYERS, LayerSpec, Membership
from uistack.registry import TemplateRegistry
from uistack.slots import ExclusiveSlot, OverlaySet, PanelStack
from uistack.ui_base import UIBase

logger = logging.getLogger(__name__)


class UIManager:
    """Owns the three presentation groups and every lifecycle transition.

    - exclusive: one full-screen UI, destructively replaced on each open.
    - panels: a stack; only the top is active, everything below is paused.
    - overlays: independent popups with no ordering between them.

    All operations run synchronously to completion. A UI is considered
    destroyed as soon as its ``on_close`` hook returns.
    """

    def __init__(self, *, registry: TemplateRegistry, settings: UISettings | None = None) -> None:
        self._registry = registry
        self._settings = settings or UISettings()
        self._layers = self._settings.layer_specs()
        self._exclusive = ExclusiveSlot()
        self._panels = PanelStack()
        self._overlays = OverlaySet()
        self._history: deque[UIEvent] = deque(maxlen=self._settings.history_limit)

    # Queries.

    @property
    def registry(self) -> TemplateRegistry:
        return self._registry

    @property
    def exclusive(self) -> UIBase | None:
        return self._exclusive.occupant

    @property
    def panels(self) -> tuple[UIBase, ...]:
        """Bottom to top."""

        return self._panels.members()

    @property
    def top_panel(self) -> UIBase | None:
        return self._panels.top

    @property
    def overlays(self) -> tuple[UIBase, ...]:
        return self._overlays.members()

    @property
    def history(self) -> tuple[UIEvent, ...]:
        return tuple(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def layer_for(self, membership: Membership) -> LayerSpec:
        return self._layers[MEMBERSHIP_LAYERS[membership]]

    def find(self, handle: UIHandle) -> UIBase | None:
        ui = self._panels.get(handle)
        if ui is not None:
            return ui
        if self._exclusive.holds(handle):
            return self._exclusive.occupant
        return self._overlays.get(handle)

    def membership_of(self, target: UIBase | UIHandle) -> Membership | None:
        handle = target if isinstance(target, UIHandle) else target.handle
        if handle in self._panels:
            return Membership.panel
        if self._exclusive.holds(handle):
            return Membership.exclusive
        if handle in self._overlays:
            return Membership.overlay
        return None

    def snapshot(self) -> LayoutSnapshot:
        def entry(ui: UIBase) -> UIEntry:
            return UIEntry(handle=ui.handle, type_tag=ui.type_tag, state=ui.state)

        occupant = self._exclusive.occupant
        return LayoutSnapshot(
            layers={m: self.layer_for(m) for m in Membership},
            exclusive=entry(occupant) if occupant is not None else None,
            panels=tuple(entry(ui) for ui in self._panels.members()),
            overlays=tuple(entry(ui) for ui in self._overlays.members()),
        )

    # Exclusive (full screen).

    def open_exclusive(self, type_tag: str, args: Any = None) -> UIBase | None:
        # The previous occupant is gone even if the new one fails to build.
        self.close_exclusive()

        ui = self._construct(type_tag, Membership.exclusive)
        if ui is None:
            return None
        # An on_close hook may have reopened the slot; the latest open wins.
        while self._exclusive.occupant is not None:
            self.close_exclusive()
        self._exclusive.install(ui)
        self._enter(ui, Membership.exclusive, args)
        return ui

    def close_exclusive(self) -> None:
        ui = self._exclusive.clear()
        if ui is None:
            return
        self._destroy(ui)

    # Panels (stack).

    def open_panel(self, type_tag: str, args: Any = None) -> UIBase | None:
        previous_top = self._panels.top
        # A top left paused by an earlier failed open is not paused twice.
        if previous_top is not None and previous_top.state is UIState.active:
            self._pause(previous_top)

        ui = self._construct(type_tag, Membership.panel)
        if ui is None:
            if previous_top is not None:
                # No automatic resume: the caller meant to cover this panel.
                logger.warning("Panel %r failed to open; %r stays paused", type_tag, previous_top)
            return None
        self._panels.push(ui)
        self._enter(ui, Membership.panel, args)
        return ui

    def resume_top_panel(self) -> None:
        """Resume a top panel left paused by a failed `open_panel`. No-op otherwise."""

        top = self._panels.top
        if top is not None and top.state is UIState.paused:
            self._resume(top)

    def close_top_panel(self) -> None:
        top = self._panels.top
        if top is None:
            return
        self.close_panel(top)

    def close_panel(self, target: UIBase | UIHandle | None) -> None:
        ui = self._resolve(target)
        if ui is None:
            return
        if ui.handle not in self._panels:
            # Not ours: fall back to the router's non-panel handling.
            self.close_ui(ui)
            return

        was_top = self._panels.is_top(ui.handle)
        self._panels.remove(ui.handle)
        self._destroy(ui)

        if was_top:
            new_top = self._panels.top
            if new_top is not None and new_top.state is UIState.paused:
                self._resume(new_top)

    def close_all_panels(self, *, resume_exposed: bool = True) -> None:
        """Close every panel, top to bottom.

        With ``resume_exposed`` (the default) each close follows the single
        close procedure, so every panel that becomes the top is briefly resumed
        before it is closed. Pass ``resume_exposed=False`` to skip those
        transient resumes.
        """

        if resume_exposed:
            while len(self._panels):
                self.close_top_panel()
            return

        while len(self._panels):
            ui = self._panels.pop()
            if ui is not None:
                self._destroy(ui)

    # Overlays (popups).

    def open_overlay(self, type_tag: str, args: Any = None) -> UIBase | None:
        ui = self._construct(type_tag, Membership.overlay)
        if ui is None:
            return None
        self._overlays.add(ui)
        self._enter(ui, Membership.overlay, args)
        return ui

    # Router.

    def close_ui(self, target: UIBase | UIHandle | None) -> None:
        """Close any UI, whichever group owns it.

        Resolution order: panel stack, then the exclusive slot, then direct
        teardown (overlays and UIs no group tracks). Only the panel path
        resumes anything.
        """

        ui = self._resolve(target)
        if ui is None:
            return

        if ui.handle in self._panels:
            self.close_panel(ui)
            return

        if self._exclusive.holds(ui.handle):
            self.close_exclusive()
            return

        owner = ui._manager
        if owner is not None and owner is not self:
            owner.close_ui(ui)
            return

        if self._overlays.discard(ui.handle) is None:
            logger.debug("Closing untracked UI %r", ui)
        self._destroy(ui)

    def close_all(self) -> None:
        """Tear down everything: panels, then the full-screen UI, then overlays."""

        self.close_all_panels(resume_exposed=False)
        self.close_exclusive()
        for ui in self._overlays.members():
            self.close_ui(ui)

    # Internals.

    def _resolve(self, target: UIBase | UIHandle | None) -> UIBase | None:
        if target is None:
            return None
        if isinstance(target, UIHandle):
            ui = self.find(target)
            if ui is None:
                logger.warning("Ignoring close for unknown UI handle %s", target)
            return ui
        if not target.is_live:
            logger.warning("Ignoring close for %r: already %s", target, target.state.value)
            return None
        return target

    def _construct(self, type_tag: str, membership: Membership) -> UIBase | None:
        try:
            return self._registry.construct(type_tag, self.layer_for(membership))
        except (TemplateNotFoundError, InvalidTemplateError) as e:
            logger.error("Cannot open %s UI %r: %s", membership.value, type_tag, e)
            self._record("OPEN_FAILED", type_tag=type_tag, membership=membership)
            return None

    def _enter(self, ui: UIBase, membership: Membership, args: Any) -> None:
        ui._attach(self, membership)
        ui.args = args
        ui._lifecycle.activate()
        self._record("OPENED", ui=ui)
        logger.debug("Opened %r as %s", ui, membership.value)
        ui.on_entry(args)

    def _pause(self, ui: UIBase) -> None:
        ui._lifecycle.pause()
        self._record("PAUSED", ui=ui)
        ui.on_pause()

    def _resume(self, ui: UIBase) -> None:
        ui._lifecycle.resume()
        self._record("RESUMED", ui=ui)
        ui.on_resume()

    def _destroy(self, ui: UIBase) -> None:
        # Callers have already removed ui from its collection.
        membership = ui.membership
        ui._lifecycle.begin_close()
        try:
            ui.on_close()
        finally:
            ui._lifecycle.destroy()
            ui._detach()
            self._record("CLOSED", ui=ui, membership=membership)
            logger.debug("Closed %r", ui)

    def _record(
        self,
        type: EventType,
        *,
        ui: UIBase | None = None,
        type_tag: str = "",
        membership: Membership | None = None,
    ) -> None:
        if ui is not None:
            type_tag = ui.type_tag
            membership = membership or ui.membership
        self._history.append(
            UIEvent.now(
                type=type,
                type_tag=type_tag,
                membership=membership,
                handle=ui.handle if ui is not None else None,
            )
        )
