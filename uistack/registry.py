from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from uistack.errors import DuplicateTemplateError, InvalidTemplateError, TemplateNotFoundError
from uistack.fsm import UIState
from uistack.layers import LayerSpec
from uistack.ui_base import UIBase

logger = logging.getLogger(__name__)

UIFactory = Callable[[LayerSpec], UIBase]


def _norm_key(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip().casefold()


@dataclass(frozen=True, slots=True)
class Template:
    type_tag: str
    factory: UIFactory


class TemplateRegistry:
    """Explicit table of type tag -> UI factory.

    Populated at startup. Tags are canonical as registered; lookups are
    forgiving about case and whitespace.
    """

    def __init__(self) -> None:
        self._templates: dict[str, Template] = {}

    @staticmethod
    def from_table(table: Mapping[str, UIFactory]) -> "TemplateRegistry":
        registry = TemplateRegistry()
        for type_tag, factory in table.items():
            registry.register(type_tag, factory)
        return registry

    def register(self, type_tag: str, factory: UIFactory) -> None:
        key = _norm_key(type_tag)
        if not key:
            raise ValueError("type_tag must be a non-empty string")
        if key in self._templates:
            raise DuplicateTemplateError(f"Duplicate UI template: {type_tag}")
        self._templates[key] = Template(type_tag=type_tag.strip(), factory=factory)
        logger.debug("Registered UI template %r", type_tag)

    def unregister(self, type_tag: str) -> bool:
        return self._templates.pop(_norm_key(type_tag), None) is not None

    def get(self, type_tag: str) -> Template | None:
        return self._templates.get(_norm_key(type_tag))

    def type_tags(self) -> tuple[str, ...]:
        return tuple(sorted(t.type_tag for t in self._templates.values()))

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and _norm_key(item) in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def construct(self, type_tag: str, layer: LayerSpec) -> UIBase:
        """Build a fresh UI for ``type_tag`` under ``layer``.

        Raises TemplateNotFoundError if nothing is registered for the tag, and
        InvalidTemplateError if the factory returns something other than an
        unopened UIBase. Exceptions raised by the factory itself propagate.
        """

        template = self.get(type_tag)
        if template is None:
            raise TemplateNotFoundError(f"No UI template registered for: {type_tag!r}")

        ui = template.factory(layer)
        if not isinstance(ui, UIBase):
            raise InvalidTemplateError(
                f"Factory for {template.type_tag!r} returned {type(ui).__name__}, expected a UIBase"
            )
        if ui.state is not UIState.entering or ui.membership is not None:
            raise InvalidTemplateError(f"Factory for {template.type_tag!r} returned a UI that was already opened")

        ui.type_tag = template.type_tag
        ui.layer = layer
        return ui
