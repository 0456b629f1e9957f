from __future__ import annotations

import logging
from typing import Callable, Protocol

from blinker import Namespace

from ..core.enums import NotificationKind
from .model import NotificationPayload

logger = logging.getLogger(__name__)

Subscriber = Callable[[NotificationKind, NotificationPayload], None]


class NotificationBus(Protocol):
    def emit(self, kind: NotificationKind, payload: NotificationPayload) -> None:
        raise NotImplementedError


class SignalNotificationBus(NotificationBus):
    """Fire-and-forget bus: one blinker signal per notification kind."""

    def __init__(self):
        self._signals = Namespace()

    def signal(self, kind: NotificationKind):
        return self._signals.signal(NotificationKind(kind).value)

    def subscribe(self, subscriber: Subscriber, *kinds: NotificationKind) -> None:
        def receiver(sender, payload):
            subscriber(NotificationKind(sender), payload)

        for kind in kinds or tuple(NotificationKind):
            self.signal(kind).connect(receiver, weak=False)

    def emit(self, kind: NotificationKind, payload: NotificationPayload) -> None:
        kind = NotificationKind(kind)
        logger.debug("Emitting %s for user %s on event %s", kind.value, payload.related_user_id, payload.object_id)
        self.signal(kind).send(kind.value, payload=payload)


def log_notification(kind: NotificationKind, payload: NotificationPayload) -> None:
    logger.info(
        "%s: actor=%s user=%s event=%s company=%s course=%s",
        kind.value,
        payload.actor_id,
        payload.related_user_id,
        payload.object_id,
        payload.company_id,
        payload.course_id,
    )
