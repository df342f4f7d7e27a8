"""
Unit tests for forum models and choice enums.
"""

import pytest
from django.db import IntegrityError, transaction


@pytest.mark.unit
class TestChoices:
    """Tests for the closed string enumerations."""

    def test_flag_reasons_match_wire_values(self):
        from forum.models import FlagReason

        assert FlagReason.values() == [
            "spam",
            "offensive language",
            "irrelevant content",
            "other",
        ]

    def test_parse_accepts_value_and_member(self):
        from forum.models import PostType

        assert PostType.parse("answer") is PostType.ANSWER
        assert PostType.parse(PostType.COMMENT) is PostType.COMMENT

    def test_parse_rejects_unknown_value(self):
        from forum.models import ModeratorAction

        with pytest.raises(ValueError):
            ModeratorAction.parse("deleted")

    def test_choices_are_value_label_pairs(self):
        from forum.models import CascadeStatus

        assert ("incomplete", "Incomplete") in CascadeStatus.choices()


@pytest.mark.unit
class TestUserModel:
    """Tests for the User model."""

    def test_create_user(self):
        from forum.models import User

        user = User.objects.create_user(username="alice", password="secret123")
        assert user.username == "alice"
        assert user.check_password("secret123")
        assert user.is_banned is False
        assert user.is_shadow_banned is False
        assert user.is_deleted == 0

    def test_create_user_requires_username(self):
        from forum.models import User

        with pytest.raises(ValueError):
            User.objects.create_user(username="", password="secret123")

    def test_create_superuser(self):
        from forum.models import User

        admin = User.objects.create_superuser(username="root", password="secret123")
        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.has_perm("forum.view_flag")

    def test_active_excludes_soft_deleted(self, user123, user456):
        from forum.models import User

        user456.soft_delete()
        usernames = list(User.objects.active().values_list("username", flat=True))
        assert "user123" in usernames
        assert "user456" not in usernames

    def test_str(self, user123):
        assert str(user123) == "user123"


@pytest.mark.unit
class TestContentModels:
    """Tests for questions, answers and comments."""

    def test_post_type_and_id(self, question, answer, comment):
        from forum.models import PostType

        assert question.post_type is PostType.QUESTION
        assert answer.post_type is PostType.ANSWER
        assert comment.post_type is PostType.COMMENT
        assert question.post_id == question.question_id

    def test_question_title_follows_parents(self, question, answer, comment):
        assert question.question_title() == question.title
        assert answer.question_title() == question.title
        assert comment.question_title() == question.title

    def test_detached_answer_has_no_title(self, answer):
        answer.question = None
        answer.save()
        assert answer.question_title() == ""

    def test_get_post_model(self):
        from forum.models import Answer, get_post_model

        assert get_post_model("answer") is Answer

    def test_get_post_model_unknown_type(self):
        from forum.models import get_post_model

        with pytest.raises(ValueError):
            get_post_model("poll")

    def test_flags_property_lists_flags_for_post(self, question, pending_flag):
        assert list(question.flags) == [pending_flag]


@pytest.mark.unit
class TestFlagModel:
    """Tests for the Flag ledger."""

    def test_defaults_to_pending(self, pending_flag):
        assert pending_flag.status == "pending"
        assert pending_flag.is_pending
        assert pending_flag.date_flagged is not None

    def test_one_pending_flag_per_user_and_post(self, pending_flag, user123, question):
        from forum.models import Flag

        with pytest.raises(IntegrityError), transaction.atomic():
            Flag.objects.create(
                post_id=question.pk,
                post_type="question",
                flagged_by=user123,
                reason="other",
            )

    def test_resolved_flag_allows_new_flag(self, pending_flag, user123, question):
        from forum.models import Flag

        pending_flag.status = "reviewed"
        pending_flag.save()

        again = Flag.objects.create(
            post_id=question.pk,
            post_type="question",
            flagged_by=user123,
            reason="other",
        )
        assert again.is_pending

    def test_pending_queryset(self, pending_flag, question, user456):
        from forum.models import Flag

        Flag.objects.create(
            post_id=question.pk,
            post_type="question",
            flagged_by=user456,
            reason="spam",
            status="rejected",
        )
        assert list(Flag.objects.pending()) == [pending_flag]


@pytest.mark.unit
class TestBookmarkModels:
    """Tests for bookmark collections."""

    def test_saved_post_unique_per_collection(self, collection, question):
        from forum.models import SavedPost

        with pytest.raises(IntegrityError), transaction.atomic():
            SavedPost.objects.create(
                collection=collection, post_id=question.pk, post_type="question"
            )

    def test_followers(self, collection, user456):
        collection.followers.add(user456)
        assert list(user456.followed_bookmark_collections.all()) == [collection]


@pytest.mark.unit
class TestCascadeRunModel:
    def test_defaults(self, question):
        from forum.models import CascadeRun

        run = CascadeRun.objects.create(post_id=question.pk, post_type="question")
        assert run.status == "pending"
        assert run.completed_steps == []
        assert run.attempts == 0
