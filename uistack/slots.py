"""Bookkeeping for the three presentation groups.

These containers only track membership by handle. Hooks and lifecycle
transitions are the manager's job.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from uistack.core.handles import UIHandle
from uistack.errors import CollectionError
from uistack.ui_base import UIBase


@dataclass(slots=True)
class ExclusiveSlot:
    """Zero or one full-screen UI."""

    _occupant: UIBase | None = None

    @property
    def occupant(self) -> UIBase | None:
        return self._occupant

    def holds(self, handle: UIHandle) -> bool:
        return self._occupant is not None and self._occupant.handle == handle

    def install(self, ui: UIBase) -> None:
        if self._occupant is not None:
            raise CollectionError(f"Exclusive slot already holds {self._occupant!r}")
        self._occupant = ui

    def clear(self) -> UIBase | None:
        ui, self._occupant = self._occupant, None
        return ui


@dataclass(slots=True)
class PanelStack:
    """LIFO panels, stored bottom first."""

    _order: list[UIHandle] = field(default_factory=list)
    _members: dict[UIHandle, UIBase] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, UIHandle) and item in self._members

    @property
    def top(self) -> UIBase | None:
        if not self._order:
            return None
        return self._members[self._order[-1]]

    def is_top(self, handle: UIHandle) -> bool:
        return bool(self._order) and self._order[-1] == handle

    def get(self, handle: UIHandle) -> UIBase | None:
        return self._members.get(handle)

    def push(self, ui: UIBase) -> None:
        if ui.handle in self._members:
            raise CollectionError(f"{ui!r} is already on the panel stack")
        self._order.append(ui.handle)
        self._members[ui.handle] = ui

    def pop(self) -> UIBase | None:
        if not self._order:
            return None
        return self._members.pop(self._order.pop())

    def remove(self, handle: UIHandle) -> UIBase | None:
        ui = self._members.pop(handle, None)
        if ui is not None:
            self._order.remove(handle)
        return ui

    def members(self) -> tuple[UIBase, ...]:
        return tuple(self._members[h] for h in self._order)


@dataclass(slots=True)
class OverlaySet:
    """Independent popups. Iteration follows open order but carries no meaning."""

    _members: dict[UIHandle, UIBase] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, UIHandle) and item in self._members

    def get(self, handle: UIHandle) -> UIBase | None:
        return self._members.get(handle)

    def add(self, ui: UIBase) -> None:
        if ui.handle in self._members:
            raise CollectionError(f"{ui!r} is already an overlay")
        self._members[ui.handle] = ui

    def discard(self, handle: UIHandle) -> UIBase | None:
        return self._members.pop(handle, None)

    def members(self) -> tuple[UIBase, ...]:
        return tuple(self._members.values())
