from django.urls import path

from .apis import (
    CreateCollectionAPI,
    FollowCollectionAPI,
    GetCollectionByIdAPI,
    GetUserCollectionsAPI,
    RemovePostAPI,
    SavePostAPI,
    UnfollowCollectionAPI,
)

urlpatterns = [
    path("create", CreateCollectionAPI.as_view(), name="create_collection"),
    path("savePost", SavePostAPI.as_view(), name="save_post"),
    path("removePost", RemovePostAPI.as_view(), name="remove_post"),
    path("follow", FollowCollectionAPI.as_view(), name="follow_collection"),
    path("unfollow", UnfollowCollectionAPI.as_view(), name="unfollow_collection"),
    path(
        "getUserCollections/<str:owner>",
        GetUserCollectionsAPI.as_view(),
        name="get_user_collections",
    ),
    path(
        "getCollectionById/<int:collection_id>",
        GetCollectionByIdAPI.as_view(),
        name="get_collection_by_id",
    ),
]
