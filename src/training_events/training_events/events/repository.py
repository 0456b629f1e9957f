from __future__ import annotations

from typing import Optional, Protocol

from .model import TrainingEvent


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[TrainingEvent]:
        raise NotImplementedError

    def get_course_module_id(self, event_id: int) -> Optional[int]:
        """Course module hosting the event, or None when it is not linked."""

        raise NotImplementedError
