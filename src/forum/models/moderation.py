# forum/models/moderation.py
"""
Moderation models.

Provides:
- Flag: Ledger of user objections to posts and their moderator disposition
- CascadeRun: Record of one consistency propagation after a takedown
"""

from django.db import models

from .base import BaseModel
from .choices import CascadeStatus, FlagReason, FlagStatus, ModeratorAction, PostType


class FlagQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=FlagStatus.PENDING.value, is_deleted=0)

    def for_post(self, post_type, post_id):
        return self.filter(
            post_type=PostType.parse(post_type).value, post_id=post_id, is_deleted=0
        ).order_by("date_flagged", "flag_id")


class Flag(BaseModel):
    """
    One user's objection to a post.

    Flags leave ``pending`` exactly once and are never deleted, so the
    table doubles as the moderation audit trail.
    """

    flag_id = models.AutoField(
        db_column="FlagID",
        primary_key=True,
        help_text="Unique identifier for the flag",
    )
    post_id = models.IntegerField(
        db_column="PostID",
        help_text="ID of the flagged post",
    )
    post_type = models.CharField(
        db_column="PostType",
        max_length=20,
        choices=PostType.choices(),
        help_text="Kind of the flagged post",
    )
    flagged_by = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="FlaggedBy",
        related_name="flags_raised",
        help_text="User who raised the flag",
    )
    reason = models.CharField(
        db_column="Reason",
        max_length=30,
        choices=FlagReason.choices(),
        help_text="Reason given by the flagger",
    )
    status = models.CharField(
        db_column="Status",
        max_length=20,
        choices=FlagStatus.choices(),
        default=FlagStatus.PENDING.value,
        help_text="Lifecycle state of the flag",
    )
    date_flagged = models.DateTimeField(
        db_column="DateFlagged",
        auto_now_add=True,
        help_text="When the flag was raised",
    )
    reviewed_by = models.CharField(
        db_column="ReviewedBy",
        max_length=150,
        blank=True,
        null=True,
        help_text="Moderator who resolved the flag",
    )
    reviewed_at = models.DateTimeField(
        db_column="ReviewedAt",
        blank=True,
        null=True,
        help_text="When the flag was resolved",
    )
    moderator_action = models.CharField(
        db_column="ModeratorAction",
        max_length=20,
        choices=ModeratorAction.choices(),
        blank=True,
        null=True,
        help_text="Action taken when the flag was resolved",
    )
    moderator_comment = models.TextField(
        db_column="ModeratorComment",
        blank=True,
        null=True,
        help_text="Optional note from the moderator",
    )
    post_text = models.TextField(
        db_column="PostText",
        blank=True,
        default="",
        help_text="Snapshot of the post body when it was flagged",
    )
    flagged_user = models.CharField(
        db_column="FlaggedUser",
        max_length=150,
        blank=True,
        default="",
        help_text="Author of the post when it was flagged",
    )

    objects = FlagQuerySet.as_manager()

    class Meta:
        managed = True
        db_table = "Flags"
        verbose_name = "Flag"
        verbose_name_plural = "Flags"
        indexes = [
            models.Index(fields=["status", "date_flagged"], name="Flags_Status_3b9f1e_idx"),
            models.Index(fields=["post_type", "post_id"], name="Flags_PostTyp_70c2d8_idx"),
            models.Index(fields=["flagged_user", "status"], name="Flags_Flagged_a4e6b5_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["flagged_by", "post_type", "post_id"],
                condition=models.Q(status="pending"),
                name="unique_pending_flag_per_user_and_post",
            )
        ]
        ordering = ["date_flagged", "flag_id"]
        app_label = "forum"

    def __str__(self):
        return f"Flag #{self.flag_id} - {self.post_type}:{self.post_id} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == FlagStatus.PENDING.value


class CascadeRun(BaseModel):
    """
    Progress of one propagation saga.

    ``completed_steps`` lists step names already applied so a retry
    only runs what is left.
    """

    cascade_run_id = models.AutoField(
        db_column="CascadeRunID",
        primary_key=True,
    )
    post_id = models.IntegerField(
        db_column="PostID",
        help_text="ID of the removed post",
    )
    post_type = models.CharField(
        db_column="PostType",
        max_length=20,
        choices=PostType.choices(),
        help_text="Kind of the removed post",
    )
    status = models.CharField(
        db_column="Status",
        max_length=20,
        choices=CascadeStatus.choices(),
        default=CascadeStatus.PENDING.value,
    )
    completed_steps = models.JSONField(
        db_column="CompletedSteps",
        default=list,
        blank=True,
    )
    failed_step = models.CharField(
        db_column="FailedStep",
        max_length=60,
        blank=True,
        null=True,
    )
    error = models.TextField(
        db_column="Error",
        blank=True,
        null=True,
    )
    attempts = models.IntegerField(
        db_column="Attempts",
        default=0,
    )

    class Meta:
        managed = True
        db_table = "CascadeRuns"
        verbose_name = "Cascade Run"
        verbose_name_plural = "Cascade Runs"
        indexes = [
            models.Index(
                fields=["status", "created_at"], name="CascadeRuns_Status_6f0a3c_idx"
            ),
            models.Index(
                fields=["post_type", "post_id"], name="CascadeRuns_PostTyp_d18b47_idx"
            ),
        ]
        ordering = ["-created_at", "-cascade_run_id"]
        app_label = "forum"

    def __str__(self):
        return f"CascadeRun #{self.cascade_run_id} - {self.post_type}:{self.post_id} ({self.status})"
