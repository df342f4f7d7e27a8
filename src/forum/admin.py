from django.contrib import admin
from django.utils.html import format_html

from .models import (
    ActivityEntry,
    Answer,
    BookmarkCollection,
    CascadeRun,
    Comment,
    Flag,
    Question,
    SavedPost,
    User,
)

# =============================================================================
# USERS
# =============================================================================


class ActivityEntryInline(admin.TabularInline):
    model = ActivityEntry
    extra = 0
    readonly_fields = ("post_id", "post_type", "q_title", "created_at")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = (
        "user_id",
        "username",
        "moderation_status",
        "follow_update_notifications",
        "created_at",
    )
    list_filter = ("is_banned", "is_shadow_banned", "is_active", "is_deleted")
    search_fields = ("username", "bio")
    readonly_fields = ("user_id", "created_at", "updated_at", "password", "last_login")
    inlines = [ActivityEntryInline]

    fieldsets = (
        ("Profile", {"fields": ("username", "bio", "password")}),
        (
            "Moderation",
            {"fields": ("is_banned", "is_shadow_banned")},
        ),
        (
            "System Fields",
            {
                "fields": (
                    "is_staff",
                    "is_superuser",
                    "is_active",
                    "is_deleted",
                    "created_by",
                    "updated_by",
                    "created_at",
                    "updated_at",
                    "last_login",
                ),
                "classes": ("collapse",),
            },
        ),
    )

    def moderation_status(self, obj):
        if obj.is_banned:
            return format_html('<span style="color: red;">Banned</span>')
        if obj.is_shadow_banned:
            return format_html('<span style="color: orange;">Shadow banned</span>')
        return format_html('<span style="color: green;">Active</span>')

    moderation_status.short_description = "Status"


# =============================================================================
# CONTENT
# =============================================================================


class ForumPostAdmin(admin.ModelAdmin):
    list_filter = ("is_removed", "created_at")
    search_fields = ("text", "author__username")
    readonly_fields = ("removed_at", "removed_by", "created_at", "updated_at")
    raw_id_fields = ("author",)


@admin.register(Question)
class QuestionAdmin(ForumPostAdmin):
    list_display = ("question_id", "title", "author", "views", "is_removed", "created_at")
    search_fields = ("title", "text", "author__username")


@admin.register(Answer)
class AnswerAdmin(ForumPostAdmin):
    list_display = ("answer_id", "question", "author", "is_removed", "created_at")
    raw_id_fields = ("author", "question")


@admin.register(Comment)
class CommentAdmin(ForumPostAdmin):
    list_display = ("comment_id", "question", "answer", "author", "is_removed", "created_at")
    raw_id_fields = ("author", "question", "answer")


# =============================================================================
# MODERATION
# =============================================================================


@admin.register(Flag)
class FlagAdmin(admin.ModelAdmin):
    list_display = (
        "flag_id",
        "post_type",
        "post_id",
        "reason",
        "get_flagged_by",
        "flagged_user",
        "status",
        "moderator_action",
        "date_flagged",
    )
    list_filter = ("status", "reason", "post_type", "moderator_action", "date_flagged")
    search_fields = ("flagged_by__username", "flagged_user", "post_text", "reviewed_by")
    readonly_fields = ("flag_id", "date_flagged", "reviewed_at", "created_at", "updated_at")
    raw_id_fields = ("flagged_by",)

    def get_flagged_by(self, obj):
        return obj.flagged_by.username if obj.flagged_by else "N/A"

    get_flagged_by.short_description = "Flagged By"


@admin.register(CascadeRun)
class CascadeRunAdmin(admin.ModelAdmin):
    list_display = (
        "cascade_run_id",
        "post_type",
        "post_id",
        "status",
        "failed_step",
        "attempts",
        "created_at",
    )
    list_filter = ("status", "post_type", "failed_step")
    readonly_fields = ("cascade_run_id", "completed_steps", "error", "created_at", "updated_at")


# =============================================================================
# BOOKMARKS
# =============================================================================


class SavedPostInline(admin.TabularInline):
    model = SavedPost
    extra = 0
    readonly_fields = ("saved_at",)


@admin.register(BookmarkCollection)
class BookmarkCollectionAdmin(admin.ModelAdmin):
    list_display = ("collection_id", "title", "owner", "is_public", "created_at")
    list_filter = ("is_public",)
    search_fields = ("title", "owner__username")
    raw_id_fields = ("owner",)
    filter_horizontal = ("followers",)
    inlines = [SavedPostInline]
