from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from uistack.layers import Layer, LayerSpec, build_layer_specs

ENV_PREFIX = "UISTACK_"


class UISettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Parent layer draw order, back to front.
    full_screen_sort_order: int = 0
    panel_sort_order: int = 100
    popup_sort_order: int = 200

    # Lifecycle events kept in UIManager.history; 0 disables recording.
    history_limit: int = Field(256, ge=0)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def _increasing_sort_orders(self) -> "UISettings":
        self.layer_specs()
        return self

    def layer_specs(self) -> dict[Layer, LayerSpec]:
        return build_layer_specs(
            full_screen=self.full_screen_sort_order,
            panel=self.panel_sort_order,
            popup=self.popup_sort_order,
        )


def load_settings(env: Mapping[str, str] | None = None) -> UISettings:
    """Build settings from ``UISTACK_*`` environment variables.

    Unset variables keep their defaults, e.g. ``UISTACK_HISTORY_LIMIT=0``
    turns off the lifecycle history.
    """

    source = os.environ if env is None else env
    values: dict[str, str] = {}
    for name in UISettings.model_fields:
        raw = source.get(f"{ENV_PREFIX}{name.upper()}", "").strip()
        if raw:
            values[name] = raw
    return UISettings.model_validate(values)
