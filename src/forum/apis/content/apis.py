# forum/apis/content/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from forum.models import QuestionOrder
from forum.serializers.forum_serializers import serialize_post
from forum.services.content_service import ContentService
from forumutils.log_helpers import log_api_view

logger = logging.getLogger(__name__)

viewer_param = openapi.Parameter(
    name="viewer",
    in_=openapi.IN_QUERY,
    type=openapi.TYPE_STRING,
    description="Username of the person viewing; drives visibility filtering",
    required=False,
)


# ─── Question APIs ───────────────────────────────────────────


class GetQuestionsAPI(APIView):
    @swagger_auto_schema(
        operation_description="List questions in the requested order.",
        manual_parameters=[
            openapi.Parameter(
                name="order",
                in_=openapi.IN_QUERY,
                type=openapi.TYPE_STRING,
                enum=QuestionOrder.values(),
                description="Sort order (default: newest)",
                required=False,
            ),
            viewer_param,
        ],
        responses={200: "List of questions", 400: "Unknown order"},
    )
    def get(self, request):
        questions = ContentService().get_questions_by_order(
            request.query_params.get("order", QuestionOrder.NEWEST.value),
            request.query_params.get("viewer"),
        )
        return Response(questions)


class GetQuestionByIdAPI(APIView):
    @swagger_auto_schema(
        operation_description="Fetch one question with its answers and comments.",
        manual_parameters=[viewer_param],
        responses={200: "Question", 404: "Question not found"},
    )
    def get(self, request, qid):
        return Response(
            ContentService().get_question(qid, request.query_params.get("viewer"))
        )


class AddQuestionAPI(APIView):
    @swagger_auto_schema(
        operation_description="Ask a new question.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "title": openapi.Schema(type=openapi.TYPE_STRING),
                "text": openapi.Schema(type=openapi.TYPE_STRING),
                "askedBy": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["title", "text", "askedBy"],
        ),
        responses={
            200: "Created question",
            400: "Invalid request or profanity",
            403: "Author is banned",
        },
    )
    @log_api_view
    def post(self, request):
        question = ContentService().add_question(
            request.data.get("title"),
            request.data.get("text"),
            request.data.get("askedBy"),
        )
        return Response(serialize_post(question))


# ─── Answer APIs ─────────────────────────────────────────────


class AddAnswerAPI(APIView):
    @swagger_auto_schema(
        operation_description="Answer an existing question.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "qid": openapi.Schema(type=openapi.TYPE_INTEGER),
                "ans": openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "text": openapi.Schema(type=openapi.TYPE_STRING),
                        "ansBy": openapi.Schema(type=openapi.TYPE_STRING),
                    },
                ),
            },
            required=["qid", "ans"],
        ),
        responses={
            200: "Created answer",
            400: "Invalid request or profanity",
            403: "Author is banned",
            404: "Question not found",
        },
    )
    @log_api_view
    def post(self, request):
        ans = request.data.get("ans") or {}
        answer = ContentService().add_answer(
            request.data.get("qid"), ans.get("text"), ans.get("ansBy")
        )
        return Response(serialize_post(answer))


# ─── Comment APIs ────────────────────────────────────────────


class AddCommentAPI(APIView):
    @swagger_auto_schema(
        operation_description="Comment on a question or an answer.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "id": openapi.Schema(
                    type=openapi.TYPE_INTEGER, description="ID of the parent post"
                ),
                "type": openapi.Schema(
                    type=openapi.TYPE_STRING, enum=["question", "answer"]
                ),
                "comment": openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        "text": openapi.Schema(type=openapi.TYPE_STRING),
                        "commentBy": openapi.Schema(type=openapi.TYPE_STRING),
                    },
                ),
            },
            required=["id", "type", "comment"],
        ),
        responses={
            200: "Created comment",
            400: "Invalid request or profanity",
            403: "Author is banned",
            404: "Parent not found",
        },
    )
    @log_api_view
    def post(self, request):
        comment = request.data.get("comment") or {}
        created = ContentService().add_comment(
            request.data.get("id"),
            request.data.get("type"),
            comment.get("text"),
            comment.get("commentBy"),
        )
        return Response(serialize_post(created))
