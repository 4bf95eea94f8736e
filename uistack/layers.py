from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Layer(StrEnum):
    """Parent layers a UI's content attaches to, back to front."""

    full_screen = "full_screen"
    panel = "panel"
    popup = "popup"


class Membership(StrEnum):
    """Which presentation group owns an instance."""

    exclusive = "exclusive"
    panel = "panel"
    overlay = "overlay"


# Each presentation group renders on exactly one parent layer.
MEMBERSHIP_LAYERS: dict[Membership, Layer] = {
    Membership.exclusive: Layer.full_screen,
    Membership.panel: Layer.panel,
    Membership.overlay: Layer.popup,
}


@dataclass(frozen=True, slots=True)
class LayerSpec:
    """A parent layer plus the sort order it draws with.

    Factories receive this so a concrete UI knows where to attach its content.
    """

    layer: Layer
    sort_order: int

    @property
    def name(self) -> str:
        return f"Layer_{self.layer.value}"


def build_layer_specs(*, full_screen: int, panel: int, popup: int) -> dict[Layer, LayerSpec]:
    if not full_screen < panel < popup:
        raise ValueError(
            f"Layer sort orders must be strictly increasing (got full_screen={full_screen}, panel={panel}, popup={popup})"
        )
    return {
        Layer.full_screen: LayerSpec(Layer.full_screen, full_screen),
        Layer.panel: LayerSpec(Layer.panel, panel),
        Layer.popup: LayerSpec(Layer.popup, popup),
    }
