# content_service.py

import logging
from collections.abc import Iterable

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from forum.exceptions import (
    NotFoundError,
    ProfanityError,
    UserBannedError,
    ValidationError,
)
from forum.models import (
    ActivityEntry,
    Answer,
    Comment,
    PostType,
    Question,
    QuestionOrder,
    User,
)
from forum.serializers.forum_serializers import serialize_post
from forum.services.moderation_service import (
    parse_choice,
    parse_id,
    require_fields,
)
from forum.services.notification import CommentUpdate, EventBroadcaster
from forum.services.profanity_service import ProfanityService
from forum.services.visibility import filter_post_list, filter_post_tree

logger = logging.getLogger(__name__)


class ContentService:
    """
    Creation and retrieval of questions, answers and comments.

    New content is refused for banned authors and for profane text. Shadow
    banned authors can still post; the visibility filter hides their
    content from everyone but themselves and moderators.
    """

    def __init__(
        self,
        moderators: Iterable[str] | None = None,
        profanity: ProfanityService | None = None,
        broadcaster: EventBroadcaster | None = None,
    ):
        if moderators is None:
            moderators = getattr(settings, "MODERATOR_USERNAMES", [])
        self.moderators = frozenset(moderators)
        self.profanity = profanity or ProfanityService()
        self.broadcaster = broadcaster or EventBroadcaster()

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def _get_author(self, username: str) -> User:
        try:
            author = User.objects.active().get(username=username)
        except User.DoesNotExist:
            raise NotFoundError(f"User {username} not found") from None
        if author.is_banned:
            logger.info(f"Refused new content from banned user {username}")
            raise UserBannedError()
        return author

    def _check_text(self, *texts: str) -> None:
        for text in texts:
            result = self.profanity.check(text)
            if result.has_profanity:
                raise ProfanityError(
                    censored_text=result.censored_text,
                    message=f"Profanity detected in text: {result.censored_text}",
                )

    @staticmethod
    def _record_activity(author: User, post, q_title: str) -> None:
        ActivityEntry.objects.create(
            user=author,
            post_id=post.pk,
            post_type=post.post_type.value,
            q_title=q_title,
        )

    def add_question(self, title: str, text: str, asked_by: str) -> Question:
        require_fields(title=title, text=text, askedBy=asked_by)
        author = self._get_author(asked_by)
        self._check_text(title, text)

        with transaction.atomic():
            question = Question.objects.create(
                title=title,
                text=text,
                author=author,
                created_by=author.username,
            )
            self._record_activity(author, question, question.title)

        logger.info(f"User {author.username} asked question {question.pk}")
        return question

    def add_answer(self, qid, text: str, ans_by: str) -> Answer:
        require_fields(qid=qid, text=text, ansBy=ans_by)
        author = self._get_author(ans_by)
        question = self._get_live_post(Question, parse_id(qid, "qid"))
        self._check_text(text)

        with transaction.atomic():
            answer = Answer.objects.create(
                question=question,
                text=text,
                author=author,
                created_by=author.username,
            )
            Question.objects.filter(pk=question.pk).update(
                last_activity_at=timezone.now()
            )
            self._record_activity(author, answer, question.title)

        self._emit_tree(question)
        logger.info(f"User {author.username} answered question {question.pk}")
        return answer

    def add_comment(self, parent_id, parent_type, text: str, comment_by: str) -> Comment:
        """
        Attach a comment to a question or an answer.

        Raises:
            ValidationError: The parent type is not question or answer
            NotFoundError: The parent does not exist or was removed
        """
        require_fields(id=parent_id, type=parent_type, text=text, commentBy=comment_by)
        parent_type = parse_choice(PostType, parent_type, "parent type")
        if parent_type == PostType.COMMENT:
            raise ValidationError("Invalid parent type: comment")
        author = self._get_author(comment_by)
        parent_id = parse_id(parent_id)

        if parent_type == PostType.QUESTION:
            parent = self._get_live_post(Question, parent_id)
            question = parent
        else:
            parent = self._get_live_post(Answer, parent_id)
            question = parent.question
        self._check_text(text)

        with transaction.atomic():
            comment = Comment.objects.create(
                question=parent if parent_type == PostType.QUESTION else None,
                answer=parent if parent_type == PostType.ANSWER else None,
                text=text,
                author=author,
                created_by=author.username,
            )
            self._record_activity(author, comment, question.title if question else "")

        if question is not None:
            self._emit_tree(question)
        logger.info(
            f"User {author.username} commented on {parent_type.value} {parent_id}"
        )
        return comment

    @staticmethod
    def _get_live_post(model, pk: int):
        post = model.objects.filter(pk=pk, is_removed=False).first()
        if post is None:
            raise NotFoundError(f"{model.post_type.value.capitalize()} {pk} not found")
        return post

    def _emit_tree(self, question: Question) -> None:
        question.refresh_from_db()
        self.broadcaster.emit_on_commit(
            CommentUpdate(result=serialize_post(question), type="question")
        )

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    def get_questions_by_order(
        self, order: str = QuestionOrder.NEWEST.value, viewer: str | None = None
    ) -> list[dict]:
        """
        Questions in the requested order, filtered for ``viewer``.

        Removed questions are only returned to moderators.
        """
        order = parse_choice(QuestionOrder, order or QuestionOrder.NEWEST.value, "order")
        questions = Question.objects.filter(is_deleted=0).select_related("author")

        if order == QuestionOrder.ACTIVE:
            questions = questions.order_by("-last_activity_at", "-created_at")
        elif order == QuestionOrder.MOST_VIEWED:
            questions = questions.order_by("-views", "-created_at")
        else:
            questions = questions.order_by("-created_at", "-question_id")

        trees = filter_post_list(
            [serialize_post(q) for q in questions], viewer, self.moderators
        )
        if order == QuestionOrder.UNANSWERED:
            # Answers hidden from this viewer do not count
            trees = [
                tree
                for tree in trees
                if not any(not a.get("isRemoved") for a in tree.get("answers") or [])
            ]
        return trees

    def get_question(self, qid, viewer: str | None = None) -> dict:
        """
        One question tree, filtered for ``viewer``.

        The view count only goes up for viewers allowed to see the question.

        Raises:
            NotFoundError: Unknown question, or hidden from this viewer
        """
        qid = parse_id(qid, "qid")
        try:
            question = Question.objects.select_related("author").get(pk=qid, is_deleted=0)
        except Question.DoesNotExist:
            raise NotFoundError(f"Question {qid} not found") from None

        tree = filter_post_tree(serialize_post(question), viewer, self.moderators)
        if tree is None:
            raise NotFoundError(f"Question {qid} not found")

        Question.objects.filter(pk=qid).update(views=F("views") + 1)
        question.refresh_from_db(fields=["views"])
        tree["views"] = question.views
        return tree
