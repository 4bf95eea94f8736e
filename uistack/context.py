from __future__ import annotations

import logging
from dataclasses import dataclass

from uistack.config import UISettings
from uistack.manager import UIManager
from uistack.registry import TemplateRegistry

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@dataclass(frozen=True, slots=True)
class UIContext:
    """Services built once at startup and passed to whoever needs the UI layer.

    Game states, input handlers and UIs receive this explicitly; there is no
    process-wide accessor.
    """

    settings: UISettings
    registry: TemplateRegistry
    ui: UIManager


def create_context(
    *,
    registry: TemplateRegistry | None = None,
    settings: UISettings | None = None,
) -> UIContext:
    settings = settings or UISettings()
    registry = registry if registry is not None else TemplateRegistry()
    return UIContext(settings=settings, registry=registry, ui=UIManager(registry=registry, settings=settings))
