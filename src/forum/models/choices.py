# forum/models/choices.py
"""
Choice field definitions for model enums.

Centralized choice definitions make it easier to:
- Keep API input and stored values in sync
- Reject unrecognized values at the boundary
- Document valid choices
"""

from collections.abc import Sequence as SequenceType
from enum import Enum


class ForumChoice(str, Enum):
    """Base for closed string enumerations stored in CharFields."""

    @classmethod
    def choices(cls) -> SequenceType[tuple[str, str]]:
        return [(item.value, item.name.replace("_", " ").title()) for item in cls]

    @classmethod
    def values(cls) -> SequenceType[str]:
        return [item.value for item in cls]

    @classmethod
    def parse(cls, value):
        """Return the member for ``value`` or raise ValueError."""
        if isinstance(value, cls):
            return value
        for item in cls:
            if item.value == value:
                return item
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class PostType(ForumChoice):
    """Kinds of post that can be flagged, saved or removed."""

    QUESTION = "question"
    ANSWER = "answer"
    COMMENT = "comment"


class FlagReason(ForumChoice):
    """Reasons a user may give when flagging a post."""

    SPAM = "spam"
    OFFENSIVE_LANGUAGE = "offensive language"
    IRRELEVANT_CONTENT = "irrelevant content"
    OTHER = "other"


class FlagStatus(ForumChoice):
    """Lifecycle states of a flag."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    REJECTED = "rejected"

    @classmethod
    def resolved_statuses(cls) -> list[str]:
        return [cls.REVIEWED.value, cls.REJECTED.value]


class ModeratorAction(ForumChoice):
    """Disposition recorded on a flag when a moderator resolves it."""

    ALLOWED = "allowed"
    REMOVED = "removed"
    USER_BANNED = "userBanned"
    USER_SHADOW_BANNED = "userShadowBanned"


class CascadeStatus(ForumChoice):
    """State of a consistency propagation run."""

    PENDING = "pending"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class QuestionOrder(ForumChoice):
    """Orderings supported by the question listing."""

    NEWEST = "newest"
    UNANSWERED = "unanswered"
    ACTIVE = "active"
    MOST_VIEWED = "mostViewed"
