from django.urls import path

from .apis import AddUserBioAPI, IsUserBannedAPI

urlpatterns = [
    path("isBanned/<str:username>", IsUserBannedAPI.as_view(), name="is_user_banned"),
    path("addUserBio", AddUserBioAPI.as_view(), name="add_user_bio"),
]
