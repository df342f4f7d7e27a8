"""
pytest configuration and shared fixtures for the forum backend tests.

The fixtures build the scenario used throughout the suite: moderator
``mod1``, regular users ``user123`` and ``user456``, a question with an
answer and a comment, and ``user123``'s bookmark collection ``c1``.
"""

import os
import sys
from pathlib import Path

import django
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
os.environ.setdefault("DJANGO_ENV", "test")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

django.setup()


@pytest.fixture(autouse=True)
def enable_db_access(db):
    """Enable database access for all tests."""
    pass


@pytest.fixture
def api_client():
    """API client for testing endpoints."""
    from rest_framework.test import APIClient

    return APIClient()


# =============================================================================
# USERS
# =============================================================================


@pytest.fixture
def moderator():
    """The moderator account named in MODERATOR_USERNAMES."""
    from forum.models import User

    return User.objects.create_user(username="mod1", password="modpass123")


@pytest.fixture
def user123():
    from forum.models import User

    return User.objects.create_user(username="user123", password="testpass123")


@pytest.fixture
def user456():
    from forum.models import User

    return User.objects.create_user(username="user456", password="testpass123")


@pytest.fixture
def banned_user():
    from forum.models import User

    return User.objects.create_user(
        username="banned1", password="testpass123", is_banned=True
    )


@pytest.fixture
def shadow_user():
    from forum.models import User

    return User.objects.create_user(
        username="shadowy", password="testpass123", is_shadow_banned=True
    )


# =============================================================================
# CONTENT
# =============================================================================


@pytest.fixture
def question(user456):
    """A question asked by user456, with an activity entry."""
    from forum.models import ActivityEntry, Question

    q = Question.objects.create(
        title="How do I reverse a list?",
        text="I have a list and want it backwards.",
        author=user456,
        created_by=user456.username,
    )
    ActivityEntry.objects.create(
        user=user456, post_id=q.pk, post_type="question", q_title=q.title
    )
    return q


@pytest.fixture
def answer(question, user123):
    """user123's answer to the question."""
    from forum.models import ActivityEntry, Answer

    a = Answer.objects.create(
        question=question,
        text="Use reversed() or slice with [::-1].",
        author=user123,
        created_by=user123.username,
    )
    ActivityEntry.objects.create(
        user=user123, post_id=a.pk, post_type="answer", q_title=question.title
    )
    return a


@pytest.fixture
def comment(answer, user456):
    """user456's comment on user123's answer."""
    from forum.models import Comment

    return Comment.objects.create(
        answer=answer,
        text="Thanks, slicing worked.",
        author=user456,
        created_by=user456.username,
    )


@pytest.fixture
def collection(user123, question):
    """Public collection c1 owned by user123 holding the question."""
    from forum.models import BookmarkCollection, SavedPost

    c1 = BookmarkCollection.objects.create(
        title="c1", owner=user123, is_public=True, created_by=user123.username
    )
    SavedPost.objects.create(
        collection=c1,
        post_id=question.pk,
        post_type="question",
        q_title=question.title,
    )
    return c1


@pytest.fixture
def pending_flag(question, user123):
    """A pending spam flag by user123 on the question."""
    from forum.models import Flag

    return Flag.objects.create(
        post_id=question.pk,
        post_type="question",
        flagged_by=user123,
        reason="spam",
        post_text=question.text,
        flagged_user=question.author.username,
    )


# =============================================================================
# SERVICES
# =============================================================================


class RecordingBroadcaster:
    """Broadcaster stand-in that keeps emitted events in memory."""

    def __init__(self):
        self.events = []

    def emit(self, event):
        self.events.append(event)
        return True

    def emit_on_commit(self, *events):
        from django.db import transaction

        for event in events:
            transaction.on_commit(lambda event=event: self.emit(event))

    def kinds(self):
        return [event.kind for event in self.events]


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def engine(broadcaster):
    """ModerationService with mod1 as the only moderator."""
    from forum.services.moderation_service import ModerationService

    return ModerationService(moderators=["mod1"], broadcaster=broadcaster)


@pytest.fixture
def content_service(broadcaster):
    from forum.services.content_service import ContentService

    return ContentService(moderators=["mod1"], broadcaster=broadcaster)


@pytest.fixture
def bookmark_service(broadcaster):
    from forum.services.bookmark_service import BookmarkService

    return BookmarkService(broadcaster=broadcaster)
