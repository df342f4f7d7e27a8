# forum/services/notification/__init__.py
"""
Notification fan-out package.

Provides the typed event set and the channel-layer broadcaster.
"""

from .broadcaster import EventBroadcaster
from .events import (
    EVENT_TYPES,
    CollectionUpdate,
    CommentUpdate,
    ContentRemoved,
    DeletePostNotification,
    FlagNotification,
    ForumEvent,
    UserBanned,
    event_from_message,
)

__all__ = [
    "EVENT_TYPES",
    "CollectionUpdate",
    "CommentUpdate",
    "ContentRemoved",
    "DeletePostNotification",
    "EventBroadcaster",
    "FlagNotification",
    "ForumEvent",
    "UserBanned",
    "event_from_message",
]
