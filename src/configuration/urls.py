"""
URL configuration for the forum backend.

Every REST endpoint lives under ``/api/``; the websocket route is wired in
``configuration.asgi`` from ``forum.routing``.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.urls import include, path, re_path
from django.views.generic import RedirectView
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

# Define URL patterns first, without Swagger URLs
api_urlpatterns = [
    path("api/moderator/", include("forum.apis.moderator.urls")),
    path("api/flag/", include("forum.apis.flags.urls")),
    path("api/user/", include("forum.apis.users.urls")),
    path("api/collection/", include("forum.apis.bookmarks.urls")),
    path("api/", include("forum.apis.content.urls")),
]

# Then create schema view with the API patterns
schema_view = get_schema_view(
    openapi.Info(
        title="Forum Moderation API",
        default_version="v1",
        description=(
            "Flagging, moderator review, bans and shadow bans, post takedowns "
            "and the question, answer, comment and bookmark surfaces they act on."
        ),
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
    patterns=api_urlpatterns,
)

urlpatterns = [
    *api_urlpatterns,
    re_path(
        r"^swagger(?P<format>\.json|\.yaml)$",
        schema_view.without_ui(cache_timeout=0),
        name="schema-json",
    ),
    path(
        "swagger/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    path("", RedirectView.as_view(url="/swagger/", permanent=False)),
]

urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
