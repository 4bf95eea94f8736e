from __future__ import annotations

from uistack.fsm import UIState
from uistack.layers import Layer, Membership
from uistack.manager import UIManager
from uistack.registry import TemplateRegistry
from uistack.ui_base import UIBase


def test_open_exclusive_installs_and_enters(manager: UIManager, calls, check_invariants) -> None:
    ui = manager.open_exclusive("hud", {"hp": 10})

    assert ui is not None
    assert manager.exclusive is ui
    assert ui.state is UIState.active
    assert ui.membership is Membership.exclusive
    assert ui.layer is not None and ui.layer.layer is Layer.full_screen
    assert ui.entry_args == [{"hp": 10}]
    assert calls == [("hud", "entry")]
    check_invariants(manager)


def test_replacing_closes_previous_before_entering_new(manager: UIManager, calls, check_invariants) -> None:
    main_menu = manager.open_exclusive("main_menu")
    settings = manager.open_exclusive("settings")

    assert calls == [("main_menu", "entry"), ("main_menu", "close"), ("settings", "entry")]
    assert manager.exclusive is settings
    assert main_menu is not None and main_menu.state is UIState.destroyed
    assert main_menu.membership is None
    check_invariants(manager)


def test_failed_open_leaves_slot_empty(manager: UIManager, calls, check_invariants) -> None:
    main_menu = manager.open_exclusive("main_menu")

    assert manager.open_exclusive("missing") is None

    assert manager.exclusive is None
    assert main_menu is not None and main_menu.state is UIState.destroyed
    assert calls == [("main_menu", "entry"), ("main_menu", "close")]
    check_invariants(manager)


def test_close_exclusive(manager: UIManager, calls) -> None:
    manager.close_exclusive()
    assert calls == []

    ui = manager.open_exclusive("hud")
    manager.close_exclusive()
    manager.close_exclusive()

    assert manager.exclusive is None
    assert ui is not None and ui.state is UIState.destroyed
    assert calls == [("hud", "entry"), ("hud", "close")]


def test_exclusive_is_independent_of_panels(manager: UIManager, calls, check_invariants) -> None:
    inventory = manager.open_panel("inventory")
    manager.open_exclusive("main_menu")
    manager.open_exclusive("settings")

    assert inventory is not None and inventory.state is UIState.active
    assert ("inventory", "pause") not in calls
    check_invariants(manager)


def test_close_hook_that_reopens_the_slot_loses_to_the_latest_open(
    manager: UIManager, registry: TemplateRegistry, calls, check_invariants
) -> None:
    class GameOver(UIBase):
        def on_close(self) -> None:
            calls.append(("game_over", "close"))
            manager.open_exclusive("main_menu")
            super().on_close()

    registry.register("game_over", GameOver)
    manager.open_exclusive("game_over")
    calls.clear()

    settings = manager.open_exclusive("settings")

    assert calls == [
        ("game_over", "close"),
        ("main_menu", "entry"),
        ("main_menu", "close"),
        ("settings", "entry"),
    ]
    assert manager.exclusive is settings
    assert settings is not None and settings.state is UIState.active
    check_invariants(manager)
