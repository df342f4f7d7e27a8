from rest_framework import serializers

from forum.models import (
    Answer,
    BookmarkCollection,
    CascadeRun,
    Comment,
    Flag,
    Question,
    SavedPost,
)


class FlagSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="flag_id", read_only=True)
    postId = serializers.IntegerField(source="post_id")
    postType = serializers.CharField(source="post_type")
    flaggedBy = serializers.CharField(source="flagged_by.username")
    dateFlagged = serializers.DateTimeField(source="date_flagged")
    reviewedBy = serializers.CharField(source="reviewed_by", allow_null=True)
    reviewedAt = serializers.DateTimeField(source="reviewed_at", allow_null=True)
    moderatorAction = serializers.CharField(source="moderator_action", allow_null=True)
    moderatorComment = serializers.CharField(
        source="moderator_comment", allow_null=True
    )
    postText = serializers.CharField(source="post_text")
    flaggedUser = serializers.CharField(source="flagged_user")

    class Meta:
        model = Flag
        fields = [
            "id",
            "postId",
            "postType",
            "flaggedBy",
            "reason",
            "status",
            "dateFlagged",
            "reviewedBy",
            "reviewedAt",
            "moderatorAction",
            "moderatorComment",
            "postText",
            "flaggedUser",
        ]
        read_only_fields = fields


class EmbeddedFlagSerializer(serializers.ModelSerializer):
    """Flag as embedded in a post; enough for the visibility filter."""

    id = serializers.IntegerField(source="flag_id", read_only=True)
    flaggedBy = serializers.CharField(source="flagged_by.username")
    dateFlagged = serializers.DateTimeField(source="date_flagged")

    class Meta:
        model = Flag
        fields = ["id", "flaggedBy", "reason", "status", "dateFlagged"]
        read_only_fields = fields


class PostSerializer(serializers.ModelSerializer):
    """Fields shared by every post type."""

    id = serializers.IntegerField(source="pk", read_only=True)
    type = serializers.SerializerMethodField()
    author = serializers.CharField(source="author.username")
    authorShadowBanned = serializers.BooleanField(source="author.is_shadow_banned")
    isRemoved = serializers.BooleanField(source="is_removed")
    createdAt = serializers.DateTimeField(source="created_at")
    flags = serializers.SerializerMethodField()

    common_fields = [
        "id",
        "type",
        "text",
        "author",
        "authorShadowBanned",
        "isRemoved",
        "createdAt",
        "flags",
    ]

    def get_type(self, obj) -> str:
        return obj.post_type.value

    def get_flags(self, obj) -> list:
        return EmbeddedFlagSerializer(obj.flags, many=True).data


class CommentSerializer(PostSerializer):
    class Meta:
        model = Comment
        fields = PostSerializer.common_fields
        read_only_fields = fields


class AnswerSerializer(PostSerializer):
    comments = serializers.SerializerMethodField()

    class Meta:
        model = Answer
        fields = [*PostSerializer.common_fields, "comments"]
        read_only_fields = fields

    def get_comments(self, obj) -> list:
        return CommentSerializer(obj.comments.all(), many=True).data


class QuestionSerializer(PostSerializer):
    answers = serializers.SerializerMethodField()
    comments = serializers.SerializerMethodField()
    lastActivityAt = serializers.DateTimeField(source="last_activity_at")

    class Meta:
        model = Question
        fields = [
            *PostSerializer.common_fields,
            "title",
            "views",
            "lastActivityAt",
            "answers",
            "comments",
        ]
        read_only_fields = fields

    def get_answers(self, obj) -> list:
        return AnswerSerializer(obj.answers.all(), many=True).data

    def get_comments(self, obj) -> list:
        return CommentSerializer(obj.comments.all(), many=True).data


POST_SERIALIZERS = {
    Question: QuestionSerializer,
    Answer: AnswerSerializer,
    Comment: CommentSerializer,
}


def serialize_post(post) -> dict:
    """Serialise a question, answer or comment with its children."""
    return dict(POST_SERIALIZERS[type(post)](post).data)


class SavedPostSerializer(serializers.ModelSerializer):
    postId = serializers.IntegerField(source="post_id")
    postType = serializers.CharField(source="post_type")
    qTitle = serializers.CharField(source="q_title")
    savedAt = serializers.DateTimeField(source="saved_at")

    class Meta:
        model = SavedPost
        fields = ["postId", "postType", "qTitle", "savedAt"]
        read_only_fields = fields


class BookmarkCollectionSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="collection_id", read_only=True)
    owner = serializers.CharField(source="owner.username")
    isPublic = serializers.BooleanField(source="is_public")
    followers = serializers.SlugRelatedField(
        many=True, read_only=True, slug_field="username"
    )
    savedPosts = SavedPostSerializer(source="saved_posts", many=True, read_only=True)

    class Meta:
        model = BookmarkCollection
        fields = ["id", "title", "owner", "isPublic", "followers", "savedPosts"]
        read_only_fields = fields


class CascadeRunSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="cascade_run_id", read_only=True)
    postId = serializers.IntegerField(source="post_id")
    postType = serializers.CharField(source="post_type")
    completedSteps = serializers.JSONField(source="completed_steps")
    failedStep = serializers.CharField(source="failed_step", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")

    class Meta:
        model = CascadeRun
        fields = [
            "id",
            "postId",
            "postType",
            "status",
            "completedSteps",
            "failedStep",
            "error",
            "attempts",
            "createdAt",
        ]
        read_only_fields = fields
