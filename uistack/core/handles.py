from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class UIHandle:
    """Opaque identity of one live UI instance.

    Compared by value; the layer collections key on this and never on object identity.
    """

    value: UUID

    @staticmethod
    def new() -> "UIHandle":
        return UIHandle(value=uuid4())

    @property
    def short(self) -> str:
        return self.value.hex[:8]

    def __str__(self) -> str:
        return self.short
