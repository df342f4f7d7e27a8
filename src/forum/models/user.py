# forum/models/user.py
"""
User and activity models.

This module contains:
- UserManager: Custom manager for creating forum accounts
- User: Forum account keyed by username, carrying ban and shadow-ban state
- ActivityEntry: Ordered history of the posts a user has written or touched
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models

from .base import BaseModel, TimeStampedModel
from .choices import PostType


class UserManager(BaseUserManager):
    """
    Custom manager for User model.

    Provides create_user() and create_superuser() methods
    compatible with Django's auth system.
    """

    def create_user(self, username, password=None, **extra_fields):
        """
        Create and return a regular forum account.
        """
        if not username:
            raise ValueError("The Username field must be set")
        extra_fields.setdefault("is_active", 1)
        extra_fields.setdefault("is_deleted", 0)
        extra_fields.setdefault("is_staff", False)

        user = self.model(username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        """
        Create and return a superuser with admin site access.
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(username, password, **extra_fields)

    def active(self):
        return self.filter(is_deleted=0)


class User(AbstractBaseUser, BaseModel):
    """
    Forum account.

    Moderators are not a role on this model; they are the usernames listed in
    the MODERATOR_USERNAMES setting.
    """

    user_id = models.AutoField(
        db_column="UserID",
        primary_key=True,
        help_text="Unique identifier for the user",
    )
    username = models.CharField(
        db_column="Username",
        unique=True,
        max_length=150,
        help_text="Public handle, also used to identify the user in API calls",
    )
    password = models.CharField(
        db_column="PasswordHash",
        max_length=255,
        help_text="Hashed password",
    )
    bio = models.TextField(
        db_column="Bio",
        blank=True,
        default="",
        help_text="Short profile biography",
    )
    is_banned = models.BooleanField(
        db_column="IsBanned",
        default=False,
        help_text="Banned users cannot post, comment or flag",
    )
    is_shadow_banned = models.BooleanField(
        db_column="IsShadowBanned",
        default=False,
        help_text="Shadow-banned users' content is hidden from everyone else",
    )
    follow_update_notifications = models.BooleanField(
        db_column="FollowUpdateNotifications",
        default=True,
        help_text="Receive live updates for followed bookmark collections",
    )

    # Django auth integration fields
    is_staff = models.BooleanField(
        default=False,
        help_text="Designates whether the user can log into the admin site.",
    )
    is_superuser = models.BooleanField(
        default=False,
        help_text="Designates that this user has all permissions.",
    )
    last_login = models.DateTimeField(
        db_column="LastLogin",
        blank=True,
        null=True,
        help_text="Last login timestamp",
    )

    objects = UserManager()

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS = []

    class Meta:
        managed = True
        db_table = "Users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["is_banned"], name="Users_IsBanne_5e0c1a_idx"),
            models.Index(fields=["is_shadow_banned"], name="Users_IsShado_8b2d4f_idx"),
        ]
        app_label = "forum"

    def __str__(self) -> str:
        return self.username

    @property
    def id(self) -> int:
        """Alias for user_id to support generic access patterns."""
        return self.user_id

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_superuser

    def has_module_perms(self, app_label) -> bool:
        return self.is_superuser


class ActivityEntry(TimeStampedModel):
    """
    One post in a user's activity history.

    Rows are removed by the consistency propagator when the post is
    taken down, so the history never points at removed content.
    """

    activity_entry_id = models.AutoField(
        db_column="ActivityEntryID",
        primary_key=True,
    )
    user = models.ForeignKey(
        User,
        models.CASCADE,
        db_column="UserID",
        related_name="activity_history",
        help_text="Owner of the history",
    )
    post_id = models.IntegerField(
        db_column="PostID",
        help_text="ID of the referenced post",
    )
    post_type = models.CharField(
        db_column="PostType",
        max_length=20,
        choices=PostType.choices(),
        help_text="Kind of the referenced post",
    )
    q_title = models.CharField(
        db_column="QuestionTitle",
        max_length=500,
        blank=True,
        default="",
        help_text="Title of the question the post belongs to",
    )

    class Meta:
        managed = True
        db_table = "ActivityHistory"
        verbose_name = "Activity Entry"
        verbose_name_plural = "Activity History"
        indexes = [
            models.Index(
                fields=["post_type", "post_id"], name="ActivityHis_PostTyp_1a7e20_idx"
            ),
            models.Index(fields=["user", "created_at"], name="ActivityHis_UserID_c39f55_idx"),
        ]
        ordering = ["-created_at", "-activity_entry_id"]
        app_label = "forum"

    def __str__(self):
        return f"{self.user_id}: {self.post_type} #{self.post_id}"
