# forum/models/bookmarks.py
"""
Bookmark collection models.

Provides:
- BookmarkCollection: Named, optionally public list of saved posts
- SavedPost: One post saved in a collection
"""

from django.db import models

from .base import BaseModel
from .choices import PostType


class BookmarkCollection(BaseModel):
    """User-owned collection of saved posts that other users may follow."""

    collection_id = models.AutoField(
        db_column="CollectionID",
        primary_key=True,
    )
    title = models.CharField(
        db_column="Title",
        max_length=255,
        help_text="Collection name shown to the owner and followers",
    )
    owner = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="OwnerID",
        related_name="bookmark_collections",
    )
    is_public = models.BooleanField(
        db_column="IsPublic",
        default=False,
        help_text="Public collections can be viewed and followed by anyone",
    )
    followers = models.ManyToManyField(
        "User",
        db_table="BookmarkCollectionFollowers",
        related_name="followed_bookmark_collections",
        blank=True,
    )

    class Meta:
        managed = True
        db_table = "BookmarkCollections"
        verbose_name = "Bookmark Collection"
        verbose_name_plural = "Bookmark Collections"
        indexes = [
            models.Index(fields=["owner", "is_public"], name="BookmarkCol_OwnerID_2a95e7_idx"),
        ]
        ordering = ["created_at", "collection_id"]
        app_label = "forum"

    def __str__(self):
        return f"{self.title} ({self.owner_id})"


class SavedPost(models.Model):
    """A post reference inside a collection, kept in save order."""

    saved_post_id = models.AutoField(
        db_column="SavedPostID",
        primary_key=True,
    )
    collection = models.ForeignKey(
        BookmarkCollection,
        models.CASCADE,
        db_column="CollectionID",
        related_name="saved_posts",
    )
    post_id = models.IntegerField(
        db_column="PostID",
    )
    post_type = models.CharField(
        db_column="PostType",
        max_length=20,
        choices=PostType.choices(),
        default=PostType.QUESTION.value,
    )
    q_title = models.CharField(
        db_column="QuestionTitle",
        max_length=500,
        blank=True,
        default="",
    )
    saved_at = models.DateTimeField(
        db_column="SavedAt",
        auto_now_add=True,
    )

    class Meta:
        managed = True
        db_table = "SavedPosts"
        constraints = [
            models.UniqueConstraint(
                fields=["collection", "post_type", "post_id"],
                name="unique_saved_post_per_collection",
            )
        ]
        indexes = [
            models.Index(fields=["post_type", "post_id"], name="SavedPosts_PostTyp_8c7d52_idx"),
        ]
        ordering = ["saved_at", "saved_post_id"]
        app_label = "forum"

    def __str__(self):
        return f"{self.post_type} #{self.post_id} in {self.collection_id}"
