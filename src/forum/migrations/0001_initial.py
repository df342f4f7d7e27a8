# Initial schema for the forum moderation backend.

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

POST_TYPE_CHOICES = [
    ("question", "Question"),
    ("answer", "Answer"),
    ("comment", "Comment"),
]


def audit_fields():
    return [
        (
            "is_active",
            models.IntegerField(
                blank=True,
                db_column="IsActive",
                default=1,
                help_text="Flag indicating if the record is active (1=active, 0=inactive)",
                null=True,
            ),
        ),
        (
            "is_deleted",
            models.IntegerField(
                blank=True,
                db_column="IsDeleted",
                default=0,
                help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
                null=True,
            ),
        ),
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_column="CreatedAt",
                help_text="Timestamp when the record was created",
                null=True,
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                db_column="UpdatedAt",
                help_text="Timestamp when the record was last updated",
                null=True,
            ),
        ),
        (
            "created_by",
            models.CharField(
                blank=True,
                db_column="CreatedBy",
                help_text="Username of the account that created this record",
                max_length=150,
                null=True,
            ),
        ),
        (
            "updated_by",
            models.CharField(
                blank=True,
                db_column="UpdatedBy",
                help_text="Username of the account that last updated this record",
                max_length=150,
                null=True,
            ),
        ),
    ]


def post_fields():
    return [
        ("text", models.TextField(db_column="Text", help_text="Body of the post")),
        (
            "is_removed",
            models.BooleanField(
                db_column="IsRemoved",
                default=False,
                help_text="Set when a moderator takes the post down",
            ),
        ),
        (
            "removed_at",
            models.DateTimeField(
                blank=True,
                db_column="RemovedAt",
                help_text="When the post was taken down",
                null=True,
            ),
        ),
        (
            "removed_by",
            models.CharField(
                blank=True,
                db_column="RemovedBy",
                help_text="Moderator who took the post down",
                max_length=150,
                null=True,
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        # =====================================================================
        # Users
        # =====================================================================
        migrations.CreateModel(
            name="User",
            fields=[
                *audit_fields(),
                (
                    "user_id",
                    models.AutoField(
                        db_column="UserID",
                        help_text="Unique identifier for the user",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        db_column="Username",
                        help_text="Public handle, also used to identify the user in API calls",
                        max_length=150,
                        unique=True,
                    ),
                ),
                (
                    "password",
                    models.CharField(
                        db_column="PasswordHash",
                        help_text="Hashed password",
                        max_length=255,
                    ),
                ),
                (
                    "bio",
                    models.TextField(
                        blank=True,
                        db_column="Bio",
                        default="",
                        help_text="Short profile biography",
                    ),
                ),
                (
                    "is_banned",
                    models.BooleanField(
                        db_column="IsBanned",
                        default=False,
                        help_text="Banned users cannot post, comment or flag",
                    ),
                ),
                (
                    "is_shadow_banned",
                    models.BooleanField(
                        db_column="IsShadowBanned",
                        default=False,
                        help_text="Shadow-banned users' content is hidden from everyone else",
                    ),
                ),
                (
                    "follow_update_notifications",
                    models.BooleanField(
                        db_column="FollowUpdateNotifications",
                        default=True,
                        help_text="Receive live updates for followed bookmark collections",
                    ),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into the admin site.",
                    ),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions.",
                    ),
                ),
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True,
                        db_column="LastLogin",
                        help_text="Last login timestamp",
                        null=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "User",
                "verbose_name_plural": "Users",
                "db_table": "Users",
                "managed": True,
                "indexes": [
                    models.Index(fields=["is_banned"], name="Users_IsBanne_5e0c1a_idx"),
                    models.Index(
                        fields=["is_shadow_banned"], name="Users_IsShado_8b2d4f_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ActivityEntry",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="Timestamp when the record was created",
                        null=True,
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        db_column="UpdatedAt",
                        help_text="Timestamp when the record was last updated",
                        null=True,
                    ),
                ),
                (
                    "activity_entry_id",
                    models.AutoField(
                        db_column="ActivityEntryID", primary_key=True, serialize=False
                    ),
                ),
                (
                    "post_id",
                    models.IntegerField(
                        db_column="PostID", help_text="ID of the referenced post"
                    ),
                ),
                (
                    "post_type",
                    models.CharField(
                        choices=POST_TYPE_CHOICES,
                        db_column="PostType",
                        help_text="Kind of the referenced post",
                        max_length=20,
                    ),
                ),
                (
                    "q_title",
                    models.CharField(
                        blank=True,
                        db_column="QuestionTitle",
                        default="",
                        help_text="Title of the question the post belongs to",
                        max_length=500,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Owner of the history",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activity_history",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Activity Entry",
                "verbose_name_plural": "Activity History",
                "db_table": "ActivityHistory",
                "ordering": ["-created_at", "-activity_entry_id"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["post_type", "post_id"], name="ActivityHis_PostTyp_1a7e20_idx"
                    ),
                    models.Index(
                        fields=["user", "created_at"], name="ActivityHis_UserID_c39f55_idx"
                    ),
                ],
            },
        ),
        # =====================================================================
        # Content
        # =====================================================================
        migrations.CreateModel(
            name="Question",
            fields=[
                *audit_fields(),
                *post_fields(),
                (
                    "question_id",
                    models.AutoField(
                        db_column="QuestionID",
                        help_text="Unique identifier for the question",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        db_column="Title", help_text="Question title", max_length=500
                    ),
                ),
                (
                    "views",
                    models.IntegerField(
                        db_column="Views",
                        default=0,
                        help_text="Number of times the question was fetched",
                    ),
                ),
                (
                    "last_activity_at",
                    models.DateTimeField(
                        db_column="LastActivityAt",
                        default=django.utils.timezone.now,
                        help_text="Time of the latest answer, or of asking",
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        db_column="AskedBy",
                        help_text="User who asked the question",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Question",
                "verbose_name_plural": "Questions",
                "db_table": "Questions",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["is_removed", "created_at"], name="Questions_IsRemov_0f4b71_idx"
                    ),
                    models.Index(
                        fields=["author", "is_removed"], name="Questions_AskedBy_9d21c3_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                *audit_fields(),
                *post_fields(),
                (
                    "answer_id",
                    models.AutoField(
                        db_column="AnswerID",
                        help_text="Unique identifier for the answer",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        blank=True,
                        db_column="QuestionID",
                        help_text="Question this answer belongs to; cleared when detached",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="answers",
                        to="forum.question",
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        db_column="AnsweredBy",
                        help_text="User who wrote the answer",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Answer",
                "verbose_name_plural": "Answers",
                "db_table": "Answers",
                "ordering": ["created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["question", "is_removed"], name="Answers_Questio_4c8e02_idx"
                    ),
                    models.Index(
                        fields=["author", "is_removed"], name="Answers_Answere_b7a913_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                *audit_fields(),
                *post_fields(),
                (
                    "comment_id",
                    models.AutoField(
                        db_column="CommentID",
                        help_text="Unique identifier for the comment",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        blank=True,
                        db_column="QuestionID",
                        help_text="Question this comment is attached to",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="comments",
                        to="forum.question",
                    ),
                ),
                (
                    "answer",
                    models.ForeignKey(
                        blank=True,
                        db_column="AnswerID",
                        help_text="Answer this comment is attached to",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="comments",
                        to="forum.answer",
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        db_column="CommentBy",
                        help_text="User who wrote the comment",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="comments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Comment",
                "verbose_name_plural": "Comments",
                "db_table": "Comments",
                "ordering": ["created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["question", "is_removed"], name="Comments_Questio_5e31aa_idx"
                    ),
                    models.Index(
                        fields=["answer", "is_removed"], name="Comments_AnswerI_27d0c4_idx"
                    ),
                    models.Index(
                        fields=["author", "is_removed"], name="Comments_Comment_e64f18_idx"
                    ),
                ],
            },
        ),
        # =====================================================================
        # Moderation
        # =====================================================================
        migrations.CreateModel(
            name="Flag",
            fields=[
                *audit_fields(),
                (
                    "flag_id",
                    models.AutoField(
                        db_column="FlagID",
                        help_text="Unique identifier for the flag",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "post_id",
                    models.IntegerField(db_column="PostID", help_text="ID of the flagged post"),
                ),
                (
                    "post_type",
                    models.CharField(
                        choices=POST_TYPE_CHOICES,
                        db_column="PostType",
                        help_text="Kind of the flagged post",
                        max_length=20,
                    ),
                ),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("spam", "Spam"),
                            ("offensive language", "Offensive Language"),
                            ("irrelevant content", "Irrelevant Content"),
                            ("other", "Other"),
                        ],
                        db_column="Reason",
                        help_text="Reason given by the flagger",
                        max_length=30,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("reviewed", "Reviewed"),
                            ("rejected", "Rejected"),
                        ],
                        db_column="Status",
                        default="pending",
                        help_text="Lifecycle state of the flag",
                        max_length=20,
                    ),
                ),
                (
                    "date_flagged",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="DateFlagged",
                        help_text="When the flag was raised",
                    ),
                ),
                (
                    "reviewed_by",
                    models.CharField(
                        blank=True,
                        db_column="ReviewedBy",
                        help_text="Moderator who resolved the flag",
                        max_length=150,
                        null=True,
                    ),
                ),
                (
                    "reviewed_at",
                    models.DateTimeField(
                        blank=True,
                        db_column="ReviewedAt",
                        help_text="When the flag was resolved",
                        null=True,
                    ),
                ),
                (
                    "moderator_action",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("allowed", "Allowed"),
                            ("removed", "Removed"),
                            ("userBanned", "User Banned"),
                            ("userShadowBanned", "User Shadow Banned"),
                        ],
                        db_column="ModeratorAction",
                        help_text="Action taken when the flag was resolved",
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "moderator_comment",
                    models.TextField(
                        blank=True,
                        db_column="ModeratorComment",
                        help_text="Optional note from the moderator",
                        null=True,
                    ),
                ),
                (
                    "post_text",
                    models.TextField(
                        blank=True,
                        db_column="PostText",
                        default="",
                        help_text="Snapshot of the post body when it was flagged",
                    ),
                ),
                (
                    "flagged_user",
                    models.CharField(
                        blank=True,
                        db_column="FlaggedUser",
                        default="",
                        help_text="Author of the post when it was flagged",
                        max_length=150,
                    ),
                ),
                (
                    "flagged_by",
                    models.ForeignKey(
                        db_column="FlaggedBy",
                        help_text="User who raised the flag",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="flags_raised",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Flag",
                "verbose_name_plural": "Flags",
                "db_table": "Flags",
                "ordering": ["date_flagged", "flag_id"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["status", "date_flagged"], name="Flags_Status_3b9f1e_idx"
                    ),
                    models.Index(
                        fields=["post_type", "post_id"], name="Flags_PostTyp_70c2d8_idx"
                    ),
                    models.Index(
                        fields=["flagged_user", "status"], name="Flags_Flagged_a4e6b5_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "pending")),
                        fields=("flagged_by", "post_type", "post_id"),
                        name="unique_pending_flag_per_user_and_post",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CascadeRun",
            fields=[
                *audit_fields(),
                (
                    "cascade_run_id",
                    models.AutoField(
                        db_column="CascadeRunID", primary_key=True, serialize=False
                    ),
                ),
                (
                    "post_id",
                    models.IntegerField(db_column="PostID", help_text="ID of the removed post"),
                ),
                (
                    "post_type",
                    models.CharField(
                        choices=POST_TYPE_CHOICES,
                        db_column="PostType",
                        help_text="Kind of the removed post",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("incomplete", "Incomplete"),
                        ],
                        db_column="Status",
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "completed_steps",
                    models.JSONField(blank=True, db_column="CompletedSteps", default=list),
                ),
                (
                    "failed_step",
                    models.CharField(
                        blank=True, db_column="FailedStep", max_length=60, null=True
                    ),
                ),
                ("error", models.TextField(blank=True, db_column="Error", null=True)),
                ("attempts", models.IntegerField(db_column="Attempts", default=0)),
            ],
            options={
                "verbose_name": "Cascade Run",
                "verbose_name_plural": "Cascade Runs",
                "db_table": "CascadeRuns",
                "ordering": ["-created_at", "-cascade_run_id"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["status", "created_at"], name="CascadeRuns_Status_6f0a3c_idx"
                    ),
                    models.Index(
                        fields=["post_type", "post_id"], name="CascadeRuns_PostTyp_d18b47_idx"
                    ),
                ],
            },
        ),
        # =====================================================================
        # Bookmarks
        # =====================================================================
        migrations.CreateModel(
            name="BookmarkCollection",
            fields=[
                *audit_fields(),
                (
                    "collection_id",
                    models.AutoField(
                        db_column="CollectionID", primary_key=True, serialize=False
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        db_column="Title",
                        help_text="Collection name shown to the owner and followers",
                        max_length=255,
                    ),
                ),
                (
                    "is_public",
                    models.BooleanField(
                        db_column="IsPublic",
                        default=False,
                        help_text="Public collections can be viewed and followed by anyone",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        db_column="OwnerID",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookmark_collections",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "followers",
                    models.ManyToManyField(
                        blank=True,
                        db_table="BookmarkCollectionFollowers",
                        related_name="followed_bookmark_collections",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Bookmark Collection",
                "verbose_name_plural": "Bookmark Collections",
                "db_table": "BookmarkCollections",
                "ordering": ["created_at", "collection_id"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["owner", "is_public"], name="BookmarkCol_OwnerID_2a95e7_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SavedPost",
            fields=[
                (
                    "saved_post_id",
                    models.AutoField(
                        db_column="SavedPostID", primary_key=True, serialize=False
                    ),
                ),
                ("post_id", models.IntegerField(db_column="PostID")),
                (
                    "post_type",
                    models.CharField(
                        choices=POST_TYPE_CHOICES,
                        db_column="PostType",
                        default="question",
                        max_length=20,
                    ),
                ),
                (
                    "q_title",
                    models.CharField(
                        blank=True, db_column="QuestionTitle", default="", max_length=500
                    ),
                ),
                ("saved_at", models.DateTimeField(auto_now_add=True, db_column="SavedAt")),
                (
                    "collection",
                    models.ForeignKey(
                        db_column="CollectionID",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="saved_posts",
                        to="forum.bookmarkcollection",
                    ),
                ),
            ],
            options={
                "db_table": "SavedPosts",
                "ordering": ["saved_at", "saved_post_id"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["post_type", "post_id"], name="SavedPosts_PostTyp_8c7d52_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("collection", "post_type", "post_id"),
                        name="unique_saved_post_per_collection",
                    )
                ],
            },
        ),
    ]
