from __future__ import annotations

import logging

import pytest

from uistack.config import UISettings
from uistack.context import create_context
from uistack.startup import init_ui_context
from uistack.ui_base import UIBase


class MainMenu(UIBase):
    pass


def test_create_context_wires_one_registry() -> None:
    ctx = create_context()

    ctx.registry.register("main_menu", MainMenu)
    ui = ctx.ui.open_exclusive("main_menu")

    assert isinstance(ui, MainMenu)
    assert ctx.ui.registry is ctx.registry
    assert isinstance(ctx.settings, UISettings)


def test_contexts_do_not_share_state() -> None:
    first = create_context()
    second = create_context()
    first.registry.register("main_menu", MainMenu)

    assert second.ui.open_exclusive("main_menu") is None
    assert second.ui.exclusive is None


def test_init_ui_context_from_env() -> None:
    ctx = init_ui_context(
        templates={"main_menu": MainMenu},
        env={"UISTACK_HISTORY_LIMIT": "5", "UISTACK_LOG_LEVEL": "warning"},
    )

    assert ctx.settings.history_limit == 5
    assert ctx.settings.log_level == "WARNING"
    assert ctx.registry.type_tags() == ("main_menu",)


def test_registry_miss_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    ctx = create_context()

    with caplog.at_level(logging.ERROR, logger="uistack.manager"):
        assert ctx.ui.open_panel("credits") is None

    assert "credits" in caplog.text
