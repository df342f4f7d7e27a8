# forum/services/notification/broadcaster.py
"""
Pushes forum events to connected websocket clients through the channel layer.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction

from .events import ForumEvent

logger = logging.getLogger(__name__)


class EventBroadcaster:
    """
    Sends events to every client in the forum group.

    Emission never raises: a missing or failing channel layer is logged
    and the already-committed mutation stands.
    """

    MESSAGE_TYPE = "forum.event"

    def __init__(self, channel_layer=None, group: str | None = None):
        self._channel_layer = channel_layer
        self.group = group or getattr(settings, "FORUM_EVENTS_GROUP", "forum")

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    def emit(self, event: ForumEvent) -> bool:
        """Send one event now. Returns True if the layer accepted it."""
        try:
            layer = self.channel_layer
            if layer is None:
                logger.warning(f"No channel layer configured; dropped {event.kind}")
                return False
            async_to_sync(layer.group_send)(
                self.group, {"type": self.MESSAGE_TYPE, **event.to_message()}
            )
            logger.debug(f"Emitted {event.kind} to group {self.group}")
            return True
        except Exception as e:
            logger.error(f"Failed to emit {event.kind} event: {e}")
            return False

    def emit_on_commit(self, *events: ForumEvent) -> None:
        """Emit the events once the surrounding transaction commits."""
        for event in events:
            transaction.on_commit(lambda event=event: self.emit(event))
