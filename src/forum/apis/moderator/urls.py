from django.urls import path

from .apis import (
    BanUserAPI,
    CascadeRunsAPI,
    DeletePostAPI,
    GetFlagAPI,
    PendingFlagsAPI,
    ResolveFlagAPI,
    ReviewFlagAPI,
    ShadowBanUserAPI,
    UnbanUserAPI,
    UnshadowBanUserAPI,
)

urlpatterns = [
    # Flags
    path("pendingFlags", PendingFlagsAPI.as_view(), name="pending_flags"),
    path("getFlag/<int:fid>", GetFlagAPI.as_view(), name="get_flag"),
    path("reviewFlag", ReviewFlagAPI.as_view(), name="review_flag"),
    path("resolveFlag", ResolveFlagAPI.as_view(), name="resolve_flag"),
    # Posts
    path("deletePost", DeletePostAPI.as_view(), name="delete_post"),
    # Users
    path("banUser", BanUserAPI.as_view(), name="ban_user"),
    path("unbanUser", UnbanUserAPI.as_view(), name="unban_user"),
    path("shadowBanUser", ShadowBanUserAPI.as_view(), name="shadow_ban_user"),
    path("unshadowBanUser", UnshadowBanUserAPI.as_view(), name="unshadow_ban_user"),
    # Operations
    path("cascadeRuns", CascadeRunsAPI.as_view(), name="cascade_runs"),
]
