from django.urls import path

from .apis import (
    AddAnswerAPI,
    AddCommentAPI,
    AddQuestionAPI,
    GetQuestionByIdAPI,
    GetQuestionsAPI,
)

urlpatterns = [
    # Questions
    path("question/getQuestion", GetQuestionsAPI.as_view(), name="get_questions"),
    path(
        "question/getQuestionById/<int:qid>",
        GetQuestionByIdAPI.as_view(),
        name="get_question_by_id",
    ),
    path("question/addQuestion", AddQuestionAPI.as_view(), name="add_question"),
    # Answers
    path("answer/addAnswer", AddAnswerAPI.as_view(), name="add_answer"),
    # Comments
    path("comment/addComment", AddCommentAPI.as_view(), name="add_comment"),
]
