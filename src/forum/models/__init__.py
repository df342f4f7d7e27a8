# forum/models/__init__.py
"""
Models package for the forum application.

Models are organized by domain:
- Base model classes
- Users and activity history
- Questions, answers and comments
- Flags and propagation runs
- Bookmark collections
"""

from .base import BaseModel, TimeStampedModel
from .bookmarks import BookmarkCollection, SavedPost
from .choices import (
    CascadeStatus,
    FlagReason,
    FlagStatus,
    ModeratorAction,
    PostType,
    QuestionOrder,
)
from .content import POST_MODELS, Answer, Comment, ForumPost, Question, get_post_model
from .moderation import CascadeRun, Flag
from .user import ActivityEntry, User, UserManager

__all__ = [
    "POST_MODELS",
    "ActivityEntry",
    "Answer",
    # Base models
    "BaseModel",
    # Bookmarks
    "BookmarkCollection",
    "CascadeRun",
    # Choices/Enums
    "CascadeStatus",
    "Comment",
    # Moderation
    "Flag",
    "FlagReason",
    "FlagStatus",
    # Content
    "ForumPost",
    "ModeratorAction",
    "PostType",
    "Question",
    "QuestionOrder",
    "SavedPost",
    "TimeStampedModel",
    # Users
    "User",
    "UserManager",
    "get_post_model",
]
