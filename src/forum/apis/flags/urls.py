from django.urls import path

from .apis import FlagPostAPI

urlpatterns = [
    path("flagPost", FlagPostAPI.as_view(), name="flag_post"),
]
