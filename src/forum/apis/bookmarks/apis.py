# forum/apis/bookmarks/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from forum.models import PostType
from forum.serializers.forum_serializers import (
    BookmarkCollectionSerializer,
    SavedPostSerializer,
)
from forum.services.bookmark_service import BookmarkService
from forumutils.log_helpers import log_api_view

logger = logging.getLogger(__name__)

saved_post_body = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "collectionId": openapi.Schema(type=openapi.TYPE_INTEGER),
        "postId": openapi.Schema(type=openapi.TYPE_INTEGER),
        "postType": openapi.Schema(
            type=openapi.TYPE_STRING,
            enum=PostType.values(),
            description="Kind of post (default: question)",
        ),
        "username": openapi.Schema(
            type=openapi.TYPE_STRING, description="Owner of the collection"
        ),
    },
    required=["collectionId", "postId", "username"],
)

follow_body = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "collectionId": openapi.Schema(type=openapi.TYPE_INTEGER),
        "username": openapi.Schema(type=openapi.TYPE_STRING),
    },
    required=["collectionId", "username"],
)


class CreateCollectionAPI(APIView):
    @swagger_auto_schema(
        operation_description="Create a bookmark collection.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "username": openapi.Schema(type=openapi.TYPE_STRING),
                "title": openapi.Schema(type=openapi.TYPE_STRING),
                "isPublic": openapi.Schema(type=openapi.TYPE_BOOLEAN),
            },
            required=["username", "title"],
        ),
        responses={200: "Created collection", 400: "Invalid request"},
    )
    @log_api_view
    def post(self, request):
        collection = BookmarkService().create_collection(
            request.data.get("title"),
            request.data.get("username"),
            is_public=request.data.get("isPublic", False),
        )
        return Response(BookmarkCollectionSerializer(collection).data)


class SavePostAPI(APIView):
    @swagger_auto_schema(
        operation_description="Save a post into one of your collections.",
        request_body=saved_post_body,
        responses={
            200: "Post saved",
            400: "Invalid request or already saved",
            403: "Not the owner",
            404: "Collection or post not found",
        },
    )
    @log_api_view
    def post(self, request):
        saved = BookmarkService().save_post(
            request.data.get("collectionId"),
            request.data.get("postId"),
            request.data.get("postType"),
            request.data.get("username"),
        )
        return Response(
            {"message": "Post saved to collection", "data": SavedPostSerializer(saved).data}
        )


class RemovePostAPI(APIView):
    @swagger_auto_schema(
        operation_description="Remove a post from one of your collections.",
        request_body=saved_post_body,
        responses={
            200: "Post removed",
            403: "Not the owner",
            404: "Collection or saved post not found",
        },
    )
    @log_api_view
    def post(self, request):
        BookmarkService().remove_post(
            request.data.get("collectionId"),
            request.data.get("postId"),
            request.data.get("postType"),
            request.data.get("username"),
        )
        return Response({"message": "Post removed from collection"})


class FollowCollectionAPI(APIView):
    @swagger_auto_schema(
        operation_description="Follow a public collection.",
        request_body=follow_body,
        responses={200: "Collection followed", 403: "Private collection"},
    )
    @log_api_view
    def post(self, request):
        collection = BookmarkService().follow(
            request.data.get("collectionId"), request.data.get("username")
        )
        return Response(
            {
                "message": "Collection followed",
                "data": BookmarkCollectionSerializer(collection).data,
            }
        )


class UnfollowCollectionAPI(APIView):
    @swagger_auto_schema(
        operation_description="Stop following a collection.",
        request_body=follow_body,
        responses={200: "Collection unfollowed"},
    )
    @log_api_view
    def post(self, request):
        collection = BookmarkService().unfollow(
            request.data.get("collectionId"), request.data.get("username")
        )
        return Response(
            {
                "message": "Collection unfollowed",
                "data": BookmarkCollectionSerializer(collection).data,
            }
        )


class GetUserCollectionsAPI(APIView):
    @swagger_auto_schema(
        operation_description=(
            "Collections owned by a user. Private collections are only "
            "returned when the viewer is the owner."
        ),
        manual_parameters=[
            openapi.Parameter(
                name="viewer",
                in_=openapi.IN_QUERY,
                type=openapi.TYPE_STRING,
                required=False,
            )
        ],
        responses={200: "List of collections", 404: "User not found"},
    )
    def get(self, request, owner):
        collections = BookmarkService().get_user_collections(
            owner, request.query_params.get("viewer")
        )
        return Response(BookmarkCollectionSerializer(collections, many=True).data)


class GetCollectionByIdAPI(APIView):
    @swagger_auto_schema(
        operation_description="Fetch one collection with its saved posts.",
        manual_parameters=[
            openapi.Parameter(
                name="viewer",
                in_=openapi.IN_QUERY,
                type=openapi.TYPE_STRING,
                required=False,
            )
        ],
        responses={
            200: "Collection",
            403: "Private collection",
            404: "Collection not found",
        },
    )
    def get(self, request, collection_id):
        collection = BookmarkService().get_visible_collection(
            collection_id, request.query_params.get("viewer")
        )
        return Response(BookmarkCollectionSerializer(collection).data)
