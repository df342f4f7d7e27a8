# forum/apis/users/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from forum.services.user_service import UserService
from forumutils.log_helpers import log_api_view

logger = logging.getLogger(__name__)


class IsUserBannedAPI(APIView):
    @swagger_auto_schema(
        operation_description="Whether a user is banned. Unknown users are not.",
        responses={200: "true or false"},
    )
    def get(self, request, username):
        return Response(UserService.is_user_banned(username))


class AddUserBioAPI(APIView):
    @swagger_auto_schema(
        operation_description="Set the bio shown on a user's public profile.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "username": openapi.Schema(type=openapi.TYPE_STRING),
                "bio": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["username"],
        ),
        responses={
            200: "Bio updated successfully",
            403: "User is banned or shadow banned",
            404: "User not found",
        },
    )
    @log_api_view
    def post(self, request):
        user = UserService().update_bio(
            request.data.get("username"), request.data.get("bio", "")
        )
        return Response(
            {
                "message": "Bio updated successfully",
                "data": {"username": user.username, "bio": user.bio},
            }
        )
