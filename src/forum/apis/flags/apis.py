# forum/apis/flags/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from forum.models import FlagReason, PostType
from forum.serializers.forum_serializers import FlagSerializer
from forum.services.moderation_service import ModerationService
from forumutils.log_helpers import log_api_view

logger = logging.getLogger(__name__)


class FlagPostAPI(APIView):
    """Any active user can flag a question, answer or comment."""

    @swagger_auto_schema(
        operation_description=(
            "Flag a post for moderator review. The post disappears from the "
            "flagger's own views, collections and activity history."
        ),
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "id": openapi.Schema(
                    type=openapi.TYPE_INTEGER, description="ID of the post"
                ),
                "type": openapi.Schema(
                    type=openapi.TYPE_STRING, enum=PostType.values()
                ),
                "reason": openapi.Schema(
                    type=openapi.TYPE_STRING, enum=FlagReason.values()
                ),
                "flaggedBy": openapi.Schema(
                    type=openapi.TYPE_STRING, description="Username of the flagger"
                ),
            },
            required=["id", "type", "reason", "flaggedBy"],
        ),
        responses={
            200: "Post flagged successfully",
            400: "Invalid request or duplicate flag",
            403: "Flagger is banned",
            404: "Post or user not found",
        },
    )
    @log_api_view
    def post(self, request):
        flag = ModerationService().submit_flag(
            request.data.get("id"),
            request.data.get("type"),
            request.data.get("reason"),
            request.data.get("flaggedBy"),
        )
        return Response(
            {"message": "Post flagged successfully", "data": FlagSerializer(flag).data}
        )
