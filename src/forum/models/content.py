# forum/models/content.py
"""
Forum content models.

Provides:
- ForumPost: Abstract base for any post that can be flagged and removed
- Question: Top-level post with a title
- Answer: Reply to a question
- Comment: Remark attached to a question or an answer
"""

from django.db import models
from django.utils import timezone

from .base import BaseModel
from .choices import PostType


class ForumPost(BaseModel):
    """
    Abstract base model for flaggable content.

    Removal is a marker, not a row delete: removed posts stay in storage
    for the audit trail and are filtered out on the read path.
    """

    post_type: PostType

    text = models.TextField(
        db_column="Text",
        help_text="Body of the post",
    )
    is_removed = models.BooleanField(
        db_column="IsRemoved",
        default=False,
        help_text="Set when a moderator takes the post down",
    )
    removed_at = models.DateTimeField(
        db_column="RemovedAt",
        blank=True,
        null=True,
        help_text="When the post was taken down",
    )
    removed_by = models.CharField(
        db_column="RemovedBy",
        max_length=150,
        blank=True,
        null=True,
        help_text="Moderator who took the post down",
    )

    class Meta:
        abstract = True

    @property
    def post_id(self) -> int:
        return self.pk

    @property
    def flags(self):
        """Ledger entries targeting this post, oldest first."""
        from .moderation import Flag

        return Flag.objects.for_post(self.post_type, self.pk)

    def question_title(self) -> str:
        """Title of the question this post lives under, if it is still attached."""
        return ""


class Question(ForumPost):
    """Top-level forum question."""

    post_type = PostType.QUESTION

    question_id = models.AutoField(
        db_column="QuestionID",
        primary_key=True,
        help_text="Unique identifier for the question",
    )
    title = models.CharField(
        db_column="Title",
        max_length=500,
        help_text="Question title",
    )
    author = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="AskedBy",
        related_name="questions",
        help_text="User who asked the question",
    )
    views = models.IntegerField(
        db_column="Views",
        default=0,
        help_text="Number of times the question was fetched",
    )
    last_activity_at = models.DateTimeField(
        db_column="LastActivityAt",
        default=timezone.now,
        help_text="Time of the latest answer, or of asking",
    )

    class Meta:
        managed = True
        db_table = "Questions"
        verbose_name = "Question"
        verbose_name_plural = "Questions"
        indexes = [
            models.Index(
                fields=["is_removed", "created_at"], name="Questions_IsRemov_0f4b71_idx"
            ),
            models.Index(fields=["author", "is_removed"], name="Questions_AskedBy_9d21c3_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "forum"

    def __str__(self):
        return f"Question #{self.question_id}: {self.title[:50]}"

    def question_title(self) -> str:
        return self.title


class Answer(ForumPost):
    """Answer to a question."""

    post_type = PostType.ANSWER

    answer_id = models.AutoField(
        db_column="AnswerID",
        primary_key=True,
        help_text="Unique identifier for the answer",
    )
    question = models.ForeignKey(
        Question,
        models.SET_NULL,
        db_column="QuestionID",
        blank=True,
        null=True,
        related_name="answers",
        help_text="Question this answer belongs to; cleared when detached",
    )
    author = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="AnsweredBy",
        related_name="answers",
        help_text="User who wrote the answer",
    )

    class Meta:
        managed = True
        db_table = "Answers"
        verbose_name = "Answer"
        verbose_name_plural = "Answers"
        indexes = [
            models.Index(fields=["question", "is_removed"], name="Answers_Questio_4c8e02_idx"),
            models.Index(fields=["author", "is_removed"], name="Answers_Answere_b7a913_idx"),
        ]
        ordering = ["created_at"]
        app_label = "forum"

    def __str__(self):
        return f"Answer #{self.answer_id} on Question #{self.question_id}"

    def question_title(self) -> str:
        return self.question.title if self.question_id else ""


class Comment(ForumPost):
    """
    Comment on a question or an answer.

    Exactly one of ``question`` / ``answer`` is set while the comment is
    attached; both are cleared when a moderator removes it.
    """

    post_type = PostType.COMMENT

    comment_id = models.AutoField(
        db_column="CommentID",
        primary_key=True,
        help_text="Unique identifier for the comment",
    )
    question = models.ForeignKey(
        Question,
        models.SET_NULL,
        db_column="QuestionID",
        blank=True,
        null=True,
        related_name="comments",
        help_text="Question this comment is attached to",
    )
    answer = models.ForeignKey(
        Answer,
        models.SET_NULL,
        db_column="AnswerID",
        blank=True,
        null=True,
        related_name="comments",
        help_text="Answer this comment is attached to",
    )
    author = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="CommentBy",
        related_name="comments",
        help_text="User who wrote the comment",
    )

    class Meta:
        managed = True
        db_table = "Comments"
        verbose_name = "Comment"
        verbose_name_plural = "Comments"
        indexes = [
            models.Index(fields=["question", "is_removed"], name="Comments_Questio_5e31aa_idx"),
            models.Index(fields=["answer", "is_removed"], name="Comments_AnswerI_27d0c4_idx"),
            models.Index(fields=["author", "is_removed"], name="Comments_Comment_e64f18_idx"),
        ]
        ordering = ["created_at"]
        app_label = "forum"

    def __str__(self):
        return f"Comment #{self.comment_id}"

    def question_title(self) -> str:
        if self.question_id:
            return self.question.title
        if self.answer_id and self.answer.question_id:
            return self.answer.question.title
        return ""


POST_MODELS = {
    PostType.QUESTION: Question,
    PostType.ANSWER: Answer,
    PostType.COMMENT: Comment,
}


def get_post_model(post_type):
    """Model class for a PostType (or its string value)."""
    return POST_MODELS[PostType.parse(post_type)]
