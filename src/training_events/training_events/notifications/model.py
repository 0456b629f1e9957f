from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.enums import NotificationKind


@dataclass(frozen=True)
class NotificationPayload:
    actor_id: int
    related_user_id: int
    object_id: int
    company_id: int
    course_id: int
    course_module_id: int = 0
    other: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    payload: NotificationPayload
