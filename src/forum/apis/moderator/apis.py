# forum/apis/moderator/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from forum.models import CascadeStatus, ModeratorAction, PostType
from forum.serializers.forum_serializers import CascadeRunSerializer, FlagSerializer
from forum.services.moderation_service import ModerationService
from forumutils.log_helpers import log_api_view

logger = logging.getLogger(__name__)

username_param = openapi.Parameter(
    name="username",
    in_=openapi.IN_QUERY,
    type=openapi.TYPE_STRING,
    description="Username of the moderator making the request",
    required=True,
)

user_action_body = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "username": openapi.Schema(
            type=openapi.TYPE_STRING, description="Target user"
        ),
        "moderatorUsername": openapi.Schema(
            type=openapi.TYPE_STRING, description="Acting moderator"
        ),
    },
    required=["username", "moderatorUsername"],
)


# ─── Flag queue ──────────────────────────────────────────────


class PendingFlagsAPI(APIView):
    """Pending flags, oldest first."""

    @swagger_auto_schema(
        operation_description="List all flags waiting for moderator review.",
        manual_parameters=[username_param],
        responses={200: "List of pending flags", 403: "Not a moderator"},
    )
    @log_api_view
    def get(self, request):
        flags = ModerationService().get_pending_flags(
            request.query_params.get("username")
        )
        return Response(FlagSerializer(flags, many=True).data)


class GetFlagAPI(APIView):
    """A single flag by id."""

    @swagger_auto_schema(
        operation_description="Get one flag by its id.",
        manual_parameters=[username_param],
        responses={200: "Flag", 403: "Not a moderator", 404: "Flag not found"},
    )
    @log_api_view
    def get(self, request, fid):
        flag = ModerationService().get_flag(fid, request.query_params.get("username"))
        return Response(FlagSerializer(flag).data)


class ReviewFlagAPI(APIView):
    """Mark a flag reviewed with no action on the post."""

    @swagger_auto_schema(
        operation_description="Mark a pending flag as reviewed.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "flagId": openapi.Schema(type=openapi.TYPE_INTEGER),
                "moderatorUsername": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["flagId", "moderatorUsername"],
        ),
        responses={
            200: "Flag marked as reviewed",
            403: "Not a moderator",
            404: "Flag not found",
            409: "Flag already resolved",
        },
    )
    @log_api_view
    def post(self, request):
        ModerationService().review_flag(
            request.data.get("flagId"), request.data.get("moderatorUsername")
        )
        return Response({"message": "Flag marked as reviewed"})


class ResolveFlagAPI(APIView):
    """Resolve a flag with an explicit moderator decision."""

    @swagger_auto_schema(
        operation_description=(
            "Resolve a pending flag. 'removed' takes the post down, "
            "'userBanned' also bans its author, 'userShadowBanned' hides "
            "the author's posts from other users."
        ),
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "flagId": openapi.Schema(type=openapi.TYPE_INTEGER),
                "action": openapi.Schema(
                    type=openapi.TYPE_STRING, enum=ModeratorAction.values()
                ),
                "moderatorUsername": openapi.Schema(type=openapi.TYPE_STRING),
                "comment": openapi.Schema(
                    type=openapi.TYPE_STRING,
                    description="Optional note stored on the flag",
                ),
            },
            required=["flagId", "action", "moderatorUsername"],
        ),
        responses={
            200: "Flag resolved",
            403: "Not a moderator",
            404: "Flag not found",
            409: "Flag already resolved",
        },
    )
    @log_api_view
    def post(self, request):
        flag = ModerationService().resolve_flag(
            request.data.get("flagId"),
            request.data.get("action"),
            request.data.get("moderatorUsername"),
            comment=request.data.get("comment"),
        )
        return Response(
            {
                "message": f"Flag resolved as {flag.moderator_action}",
                "data": FlagSerializer(flag).data,
            }
        )


# ─── Posts ───────────────────────────────────────────────────


class DeletePostAPI(APIView):
    """Take a post down and cascade the removal."""

    @swagger_auto_schema(
        operation_description="Remove a question, answer or comment.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "type": openapi.Schema(
                    type=openapi.TYPE_STRING, enum=PostType.values()
                ),
                "moderatorUsername": openapi.Schema(type=openapi.TYPE_STRING),
                "comment": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["id", "type", "moderatorUsername"],
        ),
        responses={
            200: "Post deleted successfully",
            403: "Not a moderator",
            404: "Post not found",
            500: "Propagation incomplete",
        },
    )
    @log_api_view
    def post(self, request):
        cascade = ModerationService().delete_post(
            request.data.get("id"),
            request.data.get("type"),
            request.data.get("moderatorUsername"),
            comment=request.data.get("comment"),
        )
        return Response(
            {
                "message": "Post deleted successfully",
                "data": CascadeRunSerializer(cascade).data,
            }
        )


# ─── Users ───────────────────────────────────────────────────


class BanUserAPI(APIView):
    @swagger_auto_schema(
        operation_description="Ban a user from creating content and flagging.",
        request_body=user_action_body,
        responses={200: "User banned", 403: "Not a moderator", 404: "User not found"},
    )
    @log_api_view
    def post(self, request):
        user = ModerationService().ban_user(
            request.data.get("username"), request.data.get("moderatorUsername")
        )
        return Response({"message": f"User {user.username} has been banned"})


class UnbanUserAPI(APIView):
    @swagger_auto_schema(
        operation_description="Lift a user's ban.",
        request_body=user_action_body,
        responses={200: "User unbanned", 403: "Not a moderator", 404: "User not found"},
    )
    @log_api_view
    def post(self, request):
        user = ModerationService().unban_user(
            request.data.get("username"), request.data.get("moderatorUsername")
        )
        return Response({"message": f"User {user.username} has been unbanned"})


class ShadowBanUserAPI(APIView):
    @swagger_auto_schema(
        operation_description=(
            "Shadow-ban a user: their posts stay visible to themselves "
            "and moderators only."
        ),
        request_body=user_action_body,
        responses={
            200: "User shadow banned",
            403: "Not a moderator",
            404: "User not found",
        },
    )
    @log_api_view
    def post(self, request):
        user = ModerationService().shadow_ban_user(
            request.data.get("username"), request.data.get("moderatorUsername")
        )
        return Response({"message": f"User {user.username} has been shadow banned"})


class UnshadowBanUserAPI(APIView):
    @swagger_auto_schema(
        operation_description="Lift a user's shadow ban.",
        request_body=user_action_body,
        responses={
            200: "User un-shadow banned",
            403: "Not a moderator",
            404: "User not found",
        },
    )
    @log_api_view
    def post(self, request):
        user = ModerationService().unshadow_ban_user(
            request.data.get("username"), request.data.get("moderatorUsername")
        )
        return Response(
            {"message": f"User {user.username} has been un-shadow banned"}
        )


# ─── Operations ──────────────────────────────────────────────


class CascadeRunsAPI(APIView):
    """Propagation runs, so moderators can spot incomplete cleanups."""

    @swagger_auto_schema(
        operation_description="List consistency propagation runs.",
        manual_parameters=[
            username_param,
            openapi.Parameter(
                name="status",
                in_=openapi.IN_QUERY,
                type=openapi.TYPE_STRING,
                enum=CascadeStatus.values(),
                required=False,
            ),
        ],
        responses={200: "List of cascade runs", 403: "Not a moderator"},
    )
    @log_api_view
    def get(self, request):
        runs = ModerationService().get_cascade_runs(
            request.query_params.get("username"),
            status=request.query_params.get("status"),
        )
        return Response(CascadeRunSerializer(runs, many=True).data)
