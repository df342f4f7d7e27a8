"""
API endpoint tests for the forum backend.
"""

import pytest
from django.urls import reverse
from rest_framework import status


# =============================================================================
# FLAGGING
# =============================================================================


@pytest.mark.unit
class TestFlagPostAPI:
    """Tests for the flag submission endpoint."""

    def test_flag_post(self, api_client, question, user123):
        response = api_client.post(
            reverse("flag_post"),
            {"id": question.pk, "type": "question", "reason": "spam", "flaggedBy": "user123"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Post flagged successfully"
        assert response.data["data"]["status"] == "pending"
        assert response.data["data"]["flaggedBy"] == "user123"
        assert response.data["data"]["flaggedUser"] == "user456"

    def test_duplicate_flag(self, api_client, pending_flag, question):
        response = api_client.post(
            reverse("flag_post"),
            {"id": question.pk, "type": "question", "reason": "other", "flaggedBy": "user123"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"error": "You have already flagged this post."}

    def test_banned_user_cannot_flag(self, api_client, question, banned_user):
        response = api_client.post(
            reverse("flag_post"),
            {"id": question.pk, "type": "question", "reason": "spam", "flaggedBy": "banned1"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_fields(self, api_client):
        response = api_client.post(reverse("flag_post"), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "error" in response.data

    def test_flagged_post_hidden_from_flagger(self, api_client, question, user123):
        api_client.post(
            reverse("flag_post"),
            {"id": question.pk, "type": "question", "reason": "spam", "flaggedBy": "user123"},
            format="json",
        )

        mine = api_client.get(reverse("get_questions"), {"viewer": "user123"})
        theirs = api_client.get(reverse("get_questions"), {"viewer": "user456"})

        assert question.pk not in [q["id"] for q in mine.data]
        assert question.pk in [q["id"] for q in theirs.data]


# =============================================================================
# MODERATOR QUEUE
# =============================================================================


@pytest.mark.unit
class TestModeratorFlagAPI:
    """Tests for the moderator flag endpoints."""

    def test_pending_flags(self, api_client, pending_flag):
        response = api_client.get(reverse("pending_flags"), {"username": "mod1"})

        assert response.status_code == status.HTTP_200_OK
        assert [f["id"] for f in response.data] == [pending_flag.pk]
        assert response.data[0]["reason"] == "spam"

    def test_pending_flags_non_moderator(self, api_client, pending_flag):
        response = api_client.get(reverse("pending_flags"), {"username": "user456"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {"error": "User is not authorized to perform this action"}

    def test_get_flag(self, api_client, pending_flag):
        response = api_client.get(
            reverse("get_flag", kwargs={"fid": pending_flag.pk}), {"username": "mod1"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["postId"] == pending_flag.post_id

    def test_get_missing_flag(self, api_client):
        response = api_client.get(
            reverse("get_flag", kwargs={"fid": 9999}), {"username": "mod1"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_review_flag(self, api_client, pending_flag):
        response = api_client.post(
            reverse("review_flag"),
            {"flagId": pending_flag.pk, "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Flag marked as reviewed"
        pending_flag.refresh_from_db()
        assert pending_flag.status == "reviewed"

    def test_review_flag_twice(self, api_client, pending_flag):
        payload = {"flagId": pending_flag.pk, "moderatorUsername": "mod1"}
        api_client.post(reverse("review_flag"), payload, format="json")

        response = api_client.post(reverse("review_flag"), payload, format="json")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_resolve_flag_removed(self, api_client, pending_flag, question):
        response = api_client.post(
            reverse("resolve_flag"),
            {
                "flagId": pending_flag.pk,
                "action": "removed",
                "moderatorUsername": "mod1",
                "comment": "spam",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Flag resolved as removed"
        assert response.data["data"]["status"] == "rejected"
        assert response.data["data"]["moderatorComment"] == "spam"
        question.refresh_from_db()
        assert question.is_removed is True

    def test_resolve_flag_unknown_action(self, api_client, pending_flag):
        response = api_client.post(
            reverse("resolve_flag"),
            {"flagId": pending_flag.pk, "action": "ignore", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# POST TAKEDOWN
# =============================================================================


@pytest.mark.unit
class TestDeletePostAPI:
    """Tests for the delete post endpoint."""

    def test_moderator_deletes_question(self, api_client, question, collection, user456):
        from forum.models import ActivityEntry

        response = api_client.post(
            reverse("delete_post"),
            {"id": question.pk, "type": "question", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Post deleted successfully"
        assert response.data["data"]["status"] == "completed"
        assert not collection.saved_posts.exists()
        assert not ActivityEntry.objects.filter(user=user456, post_id=question.pk).exists()

        listed = api_client.get(reverse("get_questions"), {"viewer": "user123"})
        assert question.pk not in [q["id"] for q in listed.data]

    def test_non_moderator_cannot_delete(self, api_client, question, collection):
        response = api_client.post(
            reverse("delete_post"),
            {"id": question.pk, "type": "question", "moderatorUsername": "user456"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error"] == "User is not authorized to perform this action"
        question.refresh_from_db()
        assert question.is_removed is False
        assert collection.saved_posts.count() == 1

    def test_delete_twice(self, api_client, answer):
        payload = {"id": answer.pk, "type": "answer", "moderatorUsername": "mod1"}
        api_client.post(reverse("delete_post"), payload, format="json")

        response = api_client.post(reverse("delete_post"), payload, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_deleted_answer_gone_from_question(self, api_client, question, answer):
        api_client.post(
            reverse("delete_post"),
            {"id": answer.pk, "type": "answer", "moderatorUsername": "mod1"},
            format="json",
        )

        response = api_client.get(
            reverse("get_question_by_id", kwargs={"qid": question.pk}),
            {"viewer": "user456"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["answers"] == []

    def test_failed_propagation_reports_step(self, api_client, question, monkeypatch):
        from forum.models import CascadeRun
        from forum.services.propagation_service import PropagationService

        def broken(self, *args, **kwargs):
            raise RuntimeError("collections store offline")

        monkeypatch.setattr(PropagationService, "remove_post_from_collections", broken)

        response = api_client.post(
            reverse("delete_post"),
            {"id": question.pk, "type": "question", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data["step"] == "remove_post_from_collections"
        question.refresh_from_db()
        assert question.is_removed is True
        assert CascadeRun.objects.get(post_id=question.pk).status == "incomplete"

    def test_cascade_runs(self, api_client, question):
        api_client.post(
            reverse("delete_post"),
            {"id": question.pk, "type": "question", "moderatorUsername": "mod1"},
            format="json",
        )

        response = api_client.get(
            reverse("cascade_runs"), {"username": "mod1", "status": "completed"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert [r["postId"] for r in response.data] == [question.pk]


# =============================================================================
# USER MODERATION
# =============================================================================


@pytest.mark.unit
class TestUserModerationAPI:
    """Tests for ban and shadow-ban endpoints."""

    def test_ban_user(self, api_client, user123):
        response = api_client.post(
            reverse("ban_user"),
            {"username": "user123", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User user123 has been banned"

        banned = api_client.get(reverse("is_user_banned", kwargs={"username": "user123"}))
        assert banned.data is True

    def test_banned_user_cannot_ask(self, api_client, banned_user):
        response = api_client.post(
            reverse("add_question"),
            {"title": "Hi", "text": "Let me in", "askedBy": "banned1"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unban_user(self, api_client, banned_user):
        response = api_client.post(
            reverse("unban_user"),
            {"username": "banned1", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User banned1 has been unbanned"

    def test_non_moderator_cannot_ban(self, api_client, user123):
        response = api_client.post(
            reverse("ban_user"),
            {"username": "user123", "moderatorUsername": "user456"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        user123.refresh_from_db()
        assert user123.is_banned is False

    def test_ban_unknown_user(self, api_client):
        response = api_client.post(
            reverse("ban_user"),
            {"username": "ghost", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_shadow_ban_hides_posts(self, api_client, question, user456):
        response = api_client.post(
            reverse("shadow_ban_user"),
            {"username": "user456", "moderatorUsername": "mod1"},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User user456 has been shadow banned"

        others = api_client.get(reverse("get_questions"), {"viewer": "user123"})
        own = api_client.get(reverse("get_questions"), {"viewer": "user456"})
        moderator = api_client.get(reverse("get_questions"), {"viewer": "mod1"})

        assert others.data == []
        assert [q["id"] for q in own.data] == [question.pk]
        assert [q["id"] for q in moderator.data] == [question.pk]

    def test_unshadow_ban(self, api_client, shadow_user):
        response = api_client.post(
            reverse("unshadow_ban_user"),
            {"username": "shadowy", "moderatorUsername": "mod1"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User shadowy has been un-shadow banned"
        shadow_user.refresh_from_db()
        assert shadow_user.is_shadow_banned is False

    def test_is_banned_unknown_user(self, api_client):
        response = api_client.get(reverse("is_user_banned", kwargs={"username": "ghost"}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data is False

    def test_add_user_bio(self, api_client, user123):
        response = api_client.post(
            reverse("add_user_bio"),
            {"username": "user123", "bio": "Hello there"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"] == {"username": "user123", "bio": "Hello there"}

    def test_shadow_banned_user_cannot_edit_bio(self, api_client, shadow_user):
        response = api_client.post(
            reverse("add_user_bio"),
            {"username": "shadowy", "bio": "Hello there"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "community guidelines" in response.data["error"]


# =============================================================================
# CONTENT
# =============================================================================


@pytest.mark.unit
class TestContentAPI:
    """Tests for question, answer and comment endpoints."""

    def test_add_question(self, api_client, user123):
        response = api_client.post(
            reverse("add_question"),
            {"title": "New question", "text": "Body text", "askedBy": "user123"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["title"] == "New question"
        assert response.data["author"] == "user123"
        assert response.data["answers"] == []

    def test_add_question_profanity(self, api_client, user123):
        response = api_client.post(
            reverse("add_question"),
            {"title": "New question", "text": "What the heck", "askedBy": "user123"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["censored"] == "What the ****"

    def test_add_answer(self, api_client, question, user123):
        response = api_client.post(
            reverse("add_answer"),
            {"qid": question.pk, "ans": {"text": "Try this", "ansBy": "user123"}},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["type"] == "answer"
        assert question.answers.count() == 1

    def test_add_answer_unknown_question(self, api_client, user123):
        response = api_client.post(
            reverse("add_answer"),
            {"qid": 9999, "ans": {"text": "Try this", "ansBy": "user123"}},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_add_comment(self, api_client, question, user123):
        response = api_client.post(
            reverse("add_comment"),
            {
                "id": question.pk,
                "type": "question",
                "comment": {"text": "Good question", "commentBy": "user123"},
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["type"] == "comment"

    def test_comment_on_comment(self, api_client, comment, user123):
        response = api_client.post(
            reverse("add_comment"),
            {
                "id": comment.pk,
                "type": "comment",
                "comment": {"text": "Nested", "commentBy": "user123"},
            },
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_questions_unknown_order(self, api_client):
        response = api_client.get(reverse("get_questions"), {"order": "random"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_question_by_id(self, api_client, question, answer, comment):
        response = api_client.get(
            reverse("get_question_by_id", kwargs={"qid": question.pk})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["views"] == 1
        assert response.data["answers"][0]["comments"][0]["id"] == comment.pk

    def test_get_missing_question(self, api_client):
        response = api_client.get(reverse("get_question_by_id", kwargs={"qid": 9999}))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# BOOKMARKS
# =============================================================================


@pytest.mark.unit
class TestBookmarkAPI:
    """Tests for bookmark collection endpoints."""

    def test_create_collection(self, api_client, user123):
        response = api_client.post(
            reverse("create_collection"),
            {"username": "user123", "title": "Later", "isPublic": True},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["owner"] == "user123"
        assert response.data["isPublic"] is True
        assert response.data["savedPosts"] == []

    def test_save_and_remove_post(self, api_client, collection, answer):
        payload = {
            "collectionId": collection.pk,
            "postId": answer.pk,
            "postType": "answer",
            "username": "user123",
        }

        saved = api_client.post(reverse("save_post"), payload, format="json")
        assert saved.status_code == status.HTTP_200_OK
        assert saved.data["message"] == "Post saved to collection"

        removed = api_client.post(reverse("remove_post"), payload, format="json")
        assert removed.status_code == status.HTTP_200_OK
        assert removed.data["message"] == "Post removed from collection"

    def test_save_post_not_owner(self, api_client, collection, answer, user456):
        response = api_client.post(
            reverse("save_post"),
            {
                "collectionId": collection.pk,
                "postId": answer.pk,
                "postType": "answer",
                "username": "user456",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_follow_and_unfollow(self, api_client, collection, user456):
        payload = {"collectionId": collection.pk, "username": "user456"}

        followed = api_client.post(reverse("follow_collection"), payload, format="json")
        assert followed.status_code == status.HTTP_200_OK
        assert followed.data["data"]["followers"] == ["user456"]

        unfollowed = api_client.post(reverse("unfollow_collection"), payload, format="json")
        assert unfollowed.data["data"]["followers"] == []

    def test_get_user_collections(self, api_client, collection, user456):
        response = api_client.get(
            reverse("get_user_collections", kwargs={"owner": "user123"}),
            {"viewer": "user456"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.data] == [collection.pk]
        assert response.data[0]["savedPosts"][0]["postType"] == "question"

    def test_get_private_collection(self, api_client, user123, user456):
        from forum.models import BookmarkCollection

        private = BookmarkCollection.objects.create(title="Mine", owner=user123)
        url = reverse("get_collection_by_id", kwargs={"collection_id": private.pk})

        assert api_client.get(url, {"viewer": "user123"}).status_code == status.HTTP_200_OK
        assert api_client.get(url, {"viewer": "user456"}).status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# DOCUMENTATION
# =============================================================================


@pytest.mark.unit
class TestSchemaEndpoints:
    def test_swagger_schema(self, api_client):
        response = api_client.get("/swagger.json")

        assert response.status_code == status.HTTP_200_OK

    def test_root_redirects_to_swagger(self, api_client):
        response = api_client.get("/")

        assert response.status_code == status.HTTP_302_FOUND
