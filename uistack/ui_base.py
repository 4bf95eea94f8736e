from __future__ import annotations

import logging
from contextlib import AbstractContextManager, ExitStack
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from uistack.core.handles import UIHandle
from uistack.fsm import LifecycleFSM, UIState
from uistack.layers import LayerSpec, Membership

if TYPE_CHECKING:
    from uistack.manager import UIManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UIBase:
    """One live, addressable piece of UI.

    Subclasses override the four lifecycle hooks; the manager is the only caller
    of those hooks and the only owner of ``membership`` and ``state``. A UI that
    wants to go away calls :meth:`close`, which routes through the manager.

    Resources handed to :meth:`own` or :meth:`defer` are released by the default
    :meth:`on_close`; subclasses overriding it should call ``super().on_close()``.
    """

    def __init__(self, layer: LayerSpec | None = None) -> None:
        self.handle = UIHandle.new()
        self.type_tag = ""
        self.layer = layer
        self.args: Any = None
        self._membership: Membership | None = None
        self._manager: UIManager | None = None
        self._lifecycle = LifecycleFSM()
        self._resources = ExitStack()

    def __repr__(self) -> str:
        tag = self.type_tag or "?"
        return f"{type(self).__name__}({tag!r}, {self.handle.short}, {self.state.value})"

    @property
    def state(self) -> UIState:
        return self._lifecycle.ui_state

    @property
    def membership(self) -> Membership | None:
        return self._membership

    @property
    def is_live(self) -> bool:
        return self._lifecycle.is_live

    # Lifecycle hooks.

    def on_entry(self, args: Any) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_resume(self) -> None:
        pass

    def on_close(self) -> None:
        self.release()

    # Resources.

    def own(self, resource: AbstractContextManager[T]) -> T:
        """Enter a context manager now and exit it when this UI is released."""

        return self._resources.enter_context(resource)

    def defer(self, callback: Callable[..., Any], /, *args: Any, **kwargs: Any) -> None:
        self._resources.callback(callback, *args, **kwargs)

    def release(self) -> None:
        self._resources.close()

    # Self-dismissal.

    def close(self) -> None:
        """Ask the owning manager to dismiss this UI."""

        if self._manager is None:
            logger.warning("%r is not managed; ignoring close request", self)
            return
        self._manager.close_ui(self)

    # Manager-side bookkeeping; not part of the public surface.

    def _attach(self, manager: UIManager, membership: Membership) -> None:
        self._manager = manager
        self._membership = membership

    def _detach(self) -> None:
        self._membership = None
