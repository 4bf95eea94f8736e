from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from uistack.fsm import UIState
from uistack.layers import LayerSpec, Membership
from uistack.manager import UIManager
from uistack.registry import TemplateRegistry
from uistack.ui_base import UIBase

Call = tuple[str, str]

TEMPLATE_TAGS = (
    "main_menu",
    "settings",
    "hud",
    "inventory",
    "item_detail",
    "a",
    "b",
    "c",
    "toast",
    "confirm",
)


class RecordingUI(UIBase):
    """UI that appends (type_tag, hook) to a shared call log."""

    def __init__(self, layer: LayerSpec | None = None, *, calls: list[Call]) -> None:
        super().__init__(layer)
        self.calls = calls
        self.entry_args: list[Any] = []

    def on_entry(self, args: Any) -> None:
        self.entry_args.append(args)
        self.calls.append((self.type_tag, "entry"))

    def on_pause(self) -> None:
        self.calls.append((self.type_tag, "pause"))

    def on_resume(self) -> None:
        self.calls.append((self.type_tag, "resume"))

    def on_close(self) -> None:
        self.calls.append((self.type_tag, "close"))
        super().on_close()


@pytest.fixture()
def calls() -> list[Call]:
    return []


@pytest.fixture()
def registry(calls: list[Call]) -> TemplateRegistry:
    def _factory(layer: LayerSpec) -> RecordingUI:
        return RecordingUI(layer, calls=calls)

    return TemplateRegistry.from_table({tag: _factory for tag in TEMPLATE_TAGS})


@pytest.fixture()
def manager(registry: TemplateRegistry) -> UIManager:
    return UIManager(registry=registry)


@pytest.fixture()
def check_invariants() -> Callable[..., None]:
    """Assert the layer-stack invariants hold for a manager."""

    def _check(m: UIManager, *, expect_paused_top: bool = False) -> None:
        seen: set = set()
        tracked: list[tuple[UIBase, Membership]] = []
        if m.exclusive is not None:
            tracked.append((m.exclusive, Membership.exclusive))
        tracked.extend((ui, Membership.panel) for ui in m.panels)
        tracked.extend((ui, Membership.overlay) for ui in m.overlays)

        for ui, membership in tracked:
            assert ui.handle not in seen, f"{ui!r} is in two groups"
            seen.add(ui.handle)
            assert ui.membership == membership
            assert m.membership_of(ui) == membership
            assert ui.state is not UIState.destroyed

        if m.exclusive is not None:
            assert m.exclusive.state is UIState.active
        for ui in m.overlays:
            assert ui.state is UIState.active

        panels = m.panels
        if panels:
            top_state = UIState.paused if expect_paused_top else UIState.active
            assert panels[-1].state is top_state
            for ui in panels[:-1]:
                assert ui.state is UIState.paused

    return _check
