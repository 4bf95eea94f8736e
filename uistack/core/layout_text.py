from __future__ import annotations

from dataclasses import dataclass

from uistack.core.handles import UIHandle
from uistack.fsm import UIState
from uistack.layers import LayerSpec, Membership


@dataclass(frozen=True, slots=True)
class UIEntry:
    handle: UIHandle
    type_tag: str
    state: UIState


@dataclass(frozen=True, slots=True)
class LayoutSnapshot:
    """Point-in-time copy of the three presentation groups."""

    layers: dict[Membership, LayerSpec]
    exclusive: UIEntry | None
    panels: tuple[UIEntry, ...]
    overlays: tuple[UIEntry, ...]

    @property
    def is_empty(self) -> bool:
        return self.exclusive is None and not self.panels and not self.overlays

    def entries(self) -> tuple[UIEntry, ...]:
        """Back-to-front draw order."""

        head = (self.exclusive,) if self.exclusive is not None else ()
        return (*head, *self.panels, *self.overlays)


@dataclass(frozen=True, slots=True)
class LayoutTextOptions:
    show_handles: bool = True


def _format_entry(entry: UIEntry, *, options: LayoutTextOptions) -> str:
    line = f"- {entry.type_tag} [{entry.state.value}]"
    if options.show_handles:
        line += f" #{entry.handle.short}"
    return line


def _section(title: str, entries: tuple[UIEntry, ...], *, options: LayoutTextOptions) -> str:
    lines = [title]
    if entries:
        lines.extend(_format_entry(e, options=options) for e in entries)
    else:
        lines.append("- (none)")
    return "\n".join(lines)


def render_layout(snapshot: LayoutSnapshot, *, options: LayoutTextOptions | None = None) -> str:
    """Human-readable dump of the current layout, for logs and debugging.

    Panels are listed bottom to top, so the last panel line is the active one.
    """

    options = options or LayoutTextOptions()
    layers = snapshot.layers
    exclusive = (snapshot.exclusive,) if snapshot.exclusive is not None else ()

    parts = [
        _section(
            f"FULL SCREEN (sort order {layers[Membership.exclusive].sort_order}):",
            exclusive,
            options=options,
        ),
        _section(
            f"PANELS (sort order {layers[Membership.panel].sort_order}, bottom -> top):",
            snapshot.panels,
            options=options,
        ),
        _section(
            f"OVERLAYS (sort order {layers[Membership.overlay].sort_order}):",
            snapshot.overlays,
            options=options,
        ),
    ]
    return "\n\n".join(parts)
