# forum/consumers.py
"""
Websocket consumer for live forum events.

Clients connect to ``ws/events/?username=<viewer>`` and receive the events
broadcast to the forum group as ``{"event": kind, "payload": {...}}``.
flagNotification reaches only the flagger, and commentUpdate trees are
filtered for the viewer.
"""

import logging
from urllib.parse import parse_qs

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from forum.services.notification import CommentUpdate, FlagNotification
from forum.services.visibility import filter_post_tree

logger = logging.getLogger(__name__)


class ForumEventsConsumer(AsyncJsonWebsocketConsumer):
    """Relays group events to one client, filtered for that client's viewer."""

    async def connect(self):
        self.group_name = getattr(settings, "FORUM_EVENTS_GROUP", "forum")
        self.viewer = self._get_viewer()
        self.moderators = frozenset(getattr(settings, "MODERATOR_USERNAMES", []))

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Websocket connected for viewer {self.viewer!r}")

    async def disconnect(self, code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)
        logger.info(f"Websocket for viewer {self.viewer!r} closed ({code})")

    async def receive_json(self, content, **kwargs):
        # Clients only listen
        pass

    async def forum_event(self, message):
        event = message["event"]
        payload = message["payload"]

        if event == FlagNotification.kind:
            # Only the flagger learns about their own flag
            if not self.viewer or payload.get("flaggedBy") != self.viewer:
                return
        elif event == CommentUpdate.kind:
            result = payload.get("result")
            if result:
                result = filter_post_tree(result, self.viewer, self.moderators)
            if not result:
                return
            payload = {**payload, "result": result}

        await self.send_json({"event": event, "payload": payload})

    def _get_viewer(self) -> str | None:
        query = parse_qs(self.scope.get("query_string", b"").decode())
        values = query.get("username")
        return values[0] if values else None
