# forum/models/base.py
"""
Base model classes providing common functionality for forum models.

This module provides:
- BaseModel: Audit fields and soft-delete flags shared by every table
- TimeStampedModel: Creation/update timestamps for lightweight link rows
"""

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model with common fields for all models.

    Provides:
    - is_active: Active status flag
    - is_deleted: Soft delete flag
    - created_at: Auto-populated creation timestamp
    - updated_at: Auto-populated update timestamp
    - created_by: Username that created the record
    - updated_by: Username that last updated the record
    """

    is_active = models.IntegerField(
        db_column="IsActive",
        blank=True,
        null=True,
        default=1,
        help_text="Flag indicating if the record is active (1=active, 0=inactive)",
    )
    is_deleted = models.IntegerField(
        db_column="IsDeleted",
        blank=True,
        null=True,
        default=0,
        help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        null=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        null=True,
        help_text="Timestamp when the record was last updated",
    )
    created_by = models.CharField(
        db_column="CreatedBy",
        max_length=150,
        blank=True,
        null=True,
        help_text="Username of the account that created this record",
    )
    updated_by = models.CharField(
        db_column="UpdatedBy",
        max_length=150,
        blank=True,
        null=True,
        help_text="Username of the account that last updated this record",
    )

    class Meta:
        abstract = True
        get_latest_by = "created_at"

    def soft_delete(self) -> None:
        """Mark the record as deleted without actually removing it from the database."""
        self.is_deleted = 1
        self.is_active = 0
        self.save(update_fields=["is_deleted", "is_active", "updated_at"])


class TimeStampedModel(models.Model):
    """
    Abstract base model providing timestamp fields.
    """

    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        null=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        null=True,
        help_text="Timestamp when the record was last updated",
    )

    class Meta:
        abstract = True
        get_latest_by = "created_at"
