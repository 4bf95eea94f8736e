from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from uistack.core.handles import UIHandle
from uistack.layers import Membership

EventType = Literal[
    "OPENED",
    "PAUSED",
    "RESUMED",
    "CLOSED",
    "OPEN_FAILED",
]


@dataclass(frozen=True, slots=True)
class UIEvent:
    type: EventType
    type_tag: str
    membership: Membership | None
    handle: UIHandle | None
    ts: datetime

    @staticmethod
    def now(
        *,
        type: EventType,
        type_tag: str,
        membership: Membership | None,
        handle: UIHandle | None = None,
    ) -> "UIEvent":
        return UIEvent(
            type=type,
            type_tag=type_tag,
            membership=membership,
            handle=handle,
            ts=datetime.now(timezone.utc),
        )
