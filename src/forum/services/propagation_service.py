# propagation_service.py

import logging

from django.db import transaction

from forum.exceptions import PropagationError
from forum.models import (
    ActivityEntry,
    Answer,
    CascadeRun,
    CascadeStatus,
    Comment,
    PostType,
    SavedPost,
)
from forum.services.notification import DeletePostNotification, EventBroadcaster

logger = logging.getLogger(__name__)


class PropagationService:
    """
    Keeps collections, activity histories and parent links consistent after
    a post is taken down.

    The cascade is a saga: three idempotent steps, each in its own
    transaction, with progress stored on a CascadeRun. A failed step marks
    the run incomplete and raises PropagationError naming the step; the
    takedown itself is not rolled back. ``resume`` picks up where the last
    attempt stopped.
    """

    STEP_COLLECTIONS = "remove_post_from_collections"
    STEP_ACTIVITY = "remove_post_from_activity_history"
    STEP_DETACH = "detach_from_parent"

    STEPS = (STEP_COLLECTIONS, STEP_ACTIVITY, STEP_DETACH)

    def __init__(self, broadcaster: EventBroadcaster | None = None):
        self.broadcaster = broadcaster or EventBroadcaster()

    def remove_post_from_collections(self, post_type, post_id: int, owner=None) -> int:
        """
        Delete saved references to the post.

        Args:
            post_type: PostType or its value
            post_id: ID of the post
            owner: Limit the cleanup to this user's collections

        Returns:
            Number of saved references removed
        """
        saved = SavedPost.objects.filter(
            post_type=PostType.parse(post_type).value, post_id=post_id
        )
        if owner is not None:
            saved = saved.filter(collection__owner=owner)
        deleted, _ = saved.delete()
        return deleted

    def remove_post_from_activity_history(
        self, post_type, post_id: int, user=None
    ) -> int:
        """Delete activity entries pointing at the post, optionally for one user."""
        entries = ActivityEntry.objects.filter(
            post_type=PostType.parse(post_type).value, post_id=post_id
        )
        if user is not None:
            entries = entries.filter(user=user)
        deleted, _ = entries.delete()
        return deleted

    def detach_from_parent(self, post_type, post_id: int) -> int:
        """Clear the parent link of an answer or comment. Questions have none."""
        post_type = PostType.parse(post_type)
        if post_type == PostType.ANSWER:
            return Answer.objects.filter(pk=post_id, question__isnull=False).update(
                question=None
            )
        if post_type == PostType.COMMENT:
            return Comment.objects.filter(pk=post_id).update(question=None, answer=None)
        return 0

    def run(self, post_type, post_id: int, moderator: str | None = None) -> CascadeRun:
        """Start a new cascade for a removed post and execute every step."""
        cascade = CascadeRun.objects.create(
            post_type=PostType.parse(post_type).value,
            post_id=post_id,
            status=CascadeStatus.PENDING.value,
            completed_steps=[],
            created_by=moderator,
        )
        return self._execute(cascade)

    def resume(self, cascade: CascadeRun) -> CascadeRun:
        """
        Run the steps an earlier attempt did not complete.

        A run that completes here sends the deletePostNotification the first
        attempt could not.
        """
        if cascade.status == CascadeStatus.COMPLETED.value:
            return cascade
        cascade = self._execute(cascade)
        self.broadcaster.emit_on_commit(
            DeletePostNotification(postId=cascade.post_id, postType=cascade.post_type)
        )
        logger.info(f"Cascade {cascade.cascade_run_id} completed on resume")
        return cascade

    def clean_up_for_user(self, user, post_type, post_id: int) -> None:
        """
        Remove a post from one user's collections and activity history.

        Used when a user flags a post so it stops showing up in their own lists.
        """
        for step, action in (
            (self.STEP_COLLECTIONS, self.remove_post_from_collections),
            (self.STEP_ACTIVITY, self.remove_post_from_activity_history),
        ):
            try:
                with transaction.atomic():
                    action(post_type, post_id, user)
            except Exception as e:
                logger.error(
                    f"Cleanup step {step} failed for {post_type} {post_id} "
                    f"and user {user.username}: {e}"
                )
                raise PropagationError(step, e) from e

    def _execute(self, cascade: CascadeRun) -> CascadeRun:
        steps = {
            self.STEP_COLLECTIONS: self.remove_post_from_collections,
            self.STEP_ACTIVITY: self.remove_post_from_activity_history,
            self.STEP_DETACH: self.detach_from_parent,
        }
        completed = list(cascade.completed_steps or [])
        cascade.attempts += 1

        for step in self.STEPS:
            if step in completed:
                continue
            try:
                with transaction.atomic():
                    affected = steps[step](cascade.post_type, cascade.post_id)
            except Exception as e:
                cascade.completed_steps = completed
                cascade.status = CascadeStatus.INCOMPLETE.value
                cascade.failed_step = step
                cascade.error = str(e)
                cascade.save()
                logger.error(
                    f"Cascade {cascade.cascade_run_id} for {cascade.post_type} "
                    f"{cascade.post_id} failed at {step}: {e}"
                )
                raise PropagationError(step, e, run_id=cascade.cascade_run_id) from e

            completed.append(step)
            logger.info(
                f"Cascade {cascade.cascade_run_id}: {step} touched {affected} rows"
            )

        cascade.completed_steps = completed
        cascade.status = CascadeStatus.COMPLETED.value
        cascade.failed_step = None
        cascade.error = None
        cascade.save()
        return cascade
