from __future__ import annotations

from collections.abc import Mapping

from uistack.config import load_settings
from uistack.context import UIContext, configure_logging, create_context
from uistack.registry import TemplateRegistry, UIFactory


def init_ui_context(*, templates: Mapping[str, UIFactory], env: Mapping[str, str] | None = None) -> UIContext:
    """Read settings from the environment, set up logging and build the UI context.

    Call once at startup with the full template table, e.g.
    ``init_ui_context(templates={"main_menu": MainMenu, "inventory": InventoryPanel})``.
    """

    settings = load_settings(env)
    configure_logging(settings.log_level)
    return create_context(registry=TemplateRegistry.from_table(templates), settings=settings)
