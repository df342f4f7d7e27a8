# forum/services/notification/events.py
"""
Real-time event types.

Each event name maps to exactly one frozen dataclass. ``kind`` is the wire
name the browser client listens for; ``payload()`` is the JSON body.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class ForumEvent:
    """Base class for events pushed to connected clients."""

    kind: ClassVar[str] = ""

    def payload(self) -> dict[str, Any]:
        return asdict(self)

    def to_message(self) -> dict[str, Any]:
        return {"event": self.kind, "payload": self.payload()}


@dataclass(frozen=True)
class ContentRemoved(ForumEvent):
    kind: ClassVar[str] = "contentRemoved"

    contentId: int
    contentType: str


@dataclass(frozen=True)
class UserBanned(ForumEvent):
    kind: ClassVar[str] = "userBanned"

    username: str


@dataclass(frozen=True)
class FlagNotification(ForumEvent):
    kind: ClassVar[str] = "flagNotification"

    flaggedBy: str
    postId: int
    postType: str
    reason: str
    message: str = (
        "The flagged post has been removed from your collections and activity history."
    )


@dataclass(frozen=True)
class DeletePostNotification(ForumEvent):
    kind: ClassVar[str] = "deletePostNotification"

    postId: int
    postType: str
    message: str = (
        "A post has been deleted by a moderator and removed from your "
        "collections and activity history."
    )


@dataclass(frozen=True)
class CommentUpdate(ForumEvent):
    """New answer or comment; ``result`` is the serialised question tree."""

    kind: ClassVar[str] = "commentUpdate"

    result: dict[str, Any] = field(default_factory=dict)
    type: str = "question"


@dataclass(frozen=True)
class CollectionUpdate(ForumEvent):
    kind: ClassVar[str] = "collectionUpdate"

    collectionId: int
    action: str
    postId: int | None = None
    postType: str | None = None


EVENT_TYPES: dict[str, type[ForumEvent]] = {
    cls.kind: cls
    for cls in (
        ContentRemoved,
        UserBanned,
        FlagNotification,
        DeletePostNotification,
        CommentUpdate,
        CollectionUpdate,
    )
}


def event_from_message(message: dict[str, Any]) -> ForumEvent:
    """
    Rebuild an event from its wire form.

    Raises:
        ValueError: Unknown event name or payload fields that do not match.
    """
    kind = message.get("event")
    event_cls = EVENT_TYPES.get(kind)
    if event_cls is None:
        raise ValueError(f"Unknown event type: {kind!r}")
    try:
        return event_cls(**message.get("payload", {}))
    except TypeError as e:
        raise ValueError(f"Malformed {kind} payload: {e}") from e
