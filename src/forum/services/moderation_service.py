# moderation_service.py

import logging
from collections.abc import Iterable

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from forum.exceptions import (
    AuthorizationError,
    FlagAlreadyResolvedError,
    NotFoundError,
    UserBannedError,
    ValidationError,
)
from forum.models import (
    CascadeRun,
    CascadeStatus,
    Flag,
    FlagReason,
    FlagStatus,
    ModeratorAction,
    PostType,
    User,
    get_post_model,
)
from forum.services.notification import (
    ContentRemoved,
    DeletePostNotification,
    EventBroadcaster,
    FlagNotification,
    UserBanned,
)
from forum.services.propagation_service import PropagationService
from forumutils.log_helpers import log_moderation_event

logger = logging.getLogger(__name__)


def require_fields(**fields) -> None:
    """Raise ValidationError naming every empty field."""
    missing = [name for name, value in fields.items() if value in (None, "")]
    if missing:
        raise ValidationError(f"Invalid request: missing {', '.join(missing)}")


def parse_id(value, name: str = "id") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid request: {name} must be an integer") from None


def parse_choice(enum_cls, value, name: str):
    try:
        return enum_cls.parse(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value}") from None


class ModerationService:
    """
    Flag lifecycle and moderator actions.

    Features:
    - Flag submission with duplicate-pending protection
    - Pending flag queue for moderators
    - Review / resolve transitions guarded by conditional updates
    - Ban, unban, shadow-ban and un-shadow-ban
    - Post takedown with consistency propagation and live events

    Every moderator operation checks the caller against the injected
    moderator set before touching the database.
    """

    def __init__(
        self,
        moderators: Iterable[str] | None = None,
        propagator: PropagationService | None = None,
        broadcaster: EventBroadcaster | None = None,
    ):
        if moderators is None:
            moderators = getattr(settings, "MODERATOR_USERNAMES", [])
        self.moderators = frozenset(moderators)
        self.broadcaster = broadcaster or EventBroadcaster()
        self.propagator = propagator or PropagationService(broadcaster=self.broadcaster)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def is_moderator(self, username: str | None) -> bool:
        return bool(username) and username in self.moderators

    def authorize(self, username: str | None) -> None:
        """Raise AuthorizationError unless ``username`` is a moderator."""
        if not self.is_moderator(username):
            logger.warning(f"Rejected moderator action by {username!r}")
            raise AuthorizationError()

    @staticmethod
    def get_user(username: str) -> User:
        try:
            return User.objects.active().get(username=username)
        except User.DoesNotExist:
            raise NotFoundError(f"User {username} not found") from None

    @staticmethod
    def get_post(post_type, post_id):
        post_type = parse_choice(PostType, post_type, "post type")
        post_id = parse_id(post_id)
        model = get_post_model(post_type)
        try:
            return model.objects.select_related("author").get(pk=post_id)
        except model.DoesNotExist:
            raise NotFoundError(f"{post_type.value.capitalize()} {post_id} not found") from None

    def is_user_banned(self, username: str) -> bool:
        return User.objects.filter(username=username, is_banned=True).exists()

    def is_user_shadow_banned(self, username: str) -> bool:
        return User.objects.filter(username=username, is_shadow_banned=True).exists()

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------

    def submit_flag(self, post_id, post_type, reason, flagged_by: str) -> Flag:
        """
        Record a user's flag on a post.

        Args:
            post_id: ID of the post being flagged
            post_type: question, answer or comment
            reason: One of FlagReason
            flagged_by: Username of the flagger

        Returns:
            The new pending Flag

        Raises:
            ValidationError: Missing field, unknown type/reason, or the user
                already has a pending flag on this post
            UserBannedError: The flagger is banned
            NotFoundError: Unknown user or post, or the post was removed
            PropagationError: The flag was stored but the flagger's own
                collections/history could not be cleaned up
        """
        require_fields(id=post_id, type=post_type, reason=reason, flaggedBy=flagged_by)
        reason = parse_choice(FlagReason, reason, "flag reason")
        post = self.get_post(post_type, post_id)
        user = self.get_user(flagged_by)

        if user.is_banned:
            raise UserBannedError()
        if post.is_removed:
            raise NotFoundError(f"{post.post_type.value.capitalize()} {post.pk} not found")

        try:
            with transaction.atomic():
                if Flag.objects.for_post(post.post_type, post.pk).pending().filter(
                    flagged_by=user
                ).exists():
                    raise ValidationError("You have already flagged this post.")
                flag = Flag.objects.create(
                    post_id=post.pk,
                    post_type=post.post_type.value,
                    flagged_by=user,
                    reason=reason.value,
                    status=FlagStatus.PENDING.value,
                    post_text=post.text,
                    flagged_user=post.author.username,
                    created_by=user.username,
                )
        except IntegrityError:
            raise ValidationError("You have already flagged this post.") from None

        logger.info(
            f"User {user.username} flagged {post.post_type.value} {post.pk} for {reason.value}"
        )

        self.propagator.clean_up_for_user(user, post.post_type, post.pk)
        self.broadcaster.emit_on_commit(
            FlagNotification(
                flaggedBy=user.username,
                postId=post.pk,
                postType=post.post_type.value,
                reason=reason.value,
            )
        )
        return flag

    def get_pending_flags(self, username: str) -> list[Flag]:
        """Pending flags, oldest first, for a moderator."""
        self.authorize(username)
        return list(
            Flag.objects.pending()
            .select_related("flagged_by")
            .order_by("date_flagged", "flag_id")
        )

    def get_flag(self, flag_id, username: str) -> Flag:
        self.authorize(username)
        flag_id = parse_id(flag_id, "flag id")
        try:
            return Flag.objects.select_related("flagged_by").get(pk=flag_id, is_deleted=0)
        except Flag.DoesNotExist:
            raise NotFoundError(f"Flag {flag_id} not found") from None

    def review_flag(self, flag_id, moderator_username: str) -> Flag:
        """
        Mark a flag reviewed with no further action.

        Raises:
            FlagAlreadyResolvedError: Another call already resolved the flag
        """
        require_fields(flagId=flag_id, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        flag_id = parse_id(flag_id, "flag id")

        flag = self._transition_flag(
            flag_id,
            moderator_username,
            FlagStatus.REVIEWED,
            ModeratorAction.ALLOWED,
        )
        log_moderation_event("flag_reviewed", moderator_username, flag_id=flag_id)
        return flag

    def resolve_flag(
        self, flag_id, action, moderator_username: str, comment: str | None = None
    ) -> Flag:
        """
        Resolve a flag with an explicit moderator action.

        - allowed: same as review_flag
        - removed: take the flagged post down
        - userBanned: take the post down and ban its author
        - userShadowBanned: shadow-ban the post's author
        """
        require_fields(
            flagId=flag_id, action=action, moderatorUsername=moderator_username
        )
        self.authorize(moderator_username)
        flag_id = parse_id(flag_id, "flag id")
        action = parse_choice(ModeratorAction, action, "moderator action")

        status = (
            FlagStatus.REVIEWED
            if action == ModeratorAction.ALLOWED
            else FlagStatus.REJECTED
        )
        flag = self._transition_flag(
            flag_id, moderator_username, status, action, comment
        )

        # Ban first; a failed cascade step must not leave the author active.
        if action == ModeratorAction.USER_BANNED and flag.flagged_user:
            self._set_user_state(flag.flagged_user, moderator_username, is_banned=True)
        if action == ModeratorAction.USER_SHADOW_BANNED and flag.flagged_user:
            self._set_user_state(
                flag.flagged_user, moderator_username, is_shadow_banned=True
            )

        log_moderation_event(
            "flag_resolved",
            moderator_username,
            target=flag.flagged_user,
            flag_id=flag_id,
            moderator_action=action.value,
        )

        if action in (ModeratorAction.REMOVED, ModeratorAction.USER_BANNED):
            self._take_down(
                flag.post_type,
                flag.post_id,
                moderator_username,
                ModeratorAction.REMOVED,
                comment,
                missing_ok=True,
            )
        return flag

    def _transition_flag(
        self,
        flag_id: int,
        moderator_username: str,
        status: FlagStatus,
        action: ModeratorAction,
        comment: str | None = None,
    ) -> Flag:
        now = timezone.now()
        with transaction.atomic():
            updated = Flag.objects.filter(
                pk=flag_id, status=FlagStatus.PENDING.value, is_deleted=0
            ).update(
                status=status.value,
                reviewed_by=moderator_username,
                reviewed_at=now,
                moderator_action=action.value,
                moderator_comment=comment,
                updated_by=moderator_username,
                updated_at=now,
            )
        if not updated:
            if Flag.objects.filter(pk=flag_id, is_deleted=0).exists():
                raise FlagAlreadyResolvedError(
                    f"Flag {flag_id} has already been resolved"
                )
            raise NotFoundError(f"Flag {flag_id} not found")

        logger.info(f"Flag {flag_id} moved to {status.value} by {moderator_username}")
        return Flag.objects.select_related("flagged_by").get(pk=flag_id)

    def _reject_pending_flags(self, moderator_username: str, action, comment=None, **filters) -> int:
        now = timezone.now()
        return (
            Flag.objects.pending()
            .filter(**filters)
            .update(
                status=FlagStatus.REJECTED.value,
                reviewed_by=moderator_username,
                reviewed_at=now,
                moderator_action=action.value,
                moderator_comment=comment,
                updated_by=moderator_username,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def ban_user(self, username: str, moderator_username: str) -> User:
        require_fields(username=username, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        user = self._set_user_state(username, moderator_username, is_banned=True)
        log_moderation_event("user_banned", moderator_username, target=username)
        return user

    def unban_user(self, username: str, moderator_username: str) -> User:
        require_fields(username=username, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        user = self._set_user_state(username, moderator_username, is_banned=False)
        log_moderation_event("user_unbanned", moderator_username, target=username)
        return user

    def shadow_ban_user(self, username: str, moderator_username: str) -> User:
        require_fields(username=username, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        user = self._set_user_state(username, moderator_username, is_shadow_banned=True)
        log_moderation_event("user_shadow_banned", moderator_username, target=username)
        return user

    def unshadow_ban_user(self, username: str, moderator_username: str) -> User:
        require_fields(username=username, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        user = self._set_user_state(username, moderator_username, is_shadow_banned=False)
        log_moderation_event(
            "user_unshadow_banned", moderator_username, target=username
        )
        return user

    def _set_user_state(self, username: str, moderator_username: str, **state: bool) -> User:
        """
        Apply ban state to a user.

        Pending flags against the user's posts stay in the queue: a ban does
        not take content down, so those posts still need a decision.
        """
        user = self.get_user(username)
        User.objects.filter(pk=user.pk).update(
            updated_by=moderator_username, updated_at=timezone.now(), **state
        )

        if state.get("is_banned"):
            self.broadcaster.emit_on_commit(UserBanned(username=username))

        user.refresh_from_db()
        logger.info(f"Moderator {moderator_username} set {state} on user {username}")
        return user

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    def delete_post(
        self, post_id, post_type, moderator_username: str, comment: str | None = None
    ) -> CascadeRun:
        """
        Take a post down and cascade the removal.

        The post is marked removed with a conditional update, so a post that
        is already gone is reported as not found rather than removed twice.

        Returns:
            The completed CascadeRun

        Raises:
            NotFoundError: Unknown or already removed post
            PropagationError: The post is removed but a cascade step failed
        """
        require_fields(id=post_id, type=post_type, moderatorUsername=moderator_username)
        self.authorize(moderator_username)
        post_type = parse_choice(PostType, post_type, "post type")
        post_id = parse_id(post_id)

        cascade = self._take_down(
            post_type, post_id, moderator_username, ModeratorAction.REMOVED, comment
        )
        log_moderation_event(
            "post_deleted",
            moderator_username,
            post_id=post_id,
            post_type=post_type.value,
        )
        return cascade

    def _take_down(
        self,
        post_type,
        post_id: int,
        moderator_username: str,
        action: ModeratorAction,
        comment: str | None = None,
        missing_ok: bool = False,
    ) -> CascadeRun | None:
        post_type = PostType.parse(post_type)
        model = get_post_model(post_type)
        now = timezone.now()

        with transaction.atomic():
            updated = model.objects.filter(pk=post_id, is_removed=False).update(
                is_removed=True,
                removed_at=now,
                removed_by=moderator_username,
                updated_by=moderator_username,
                updated_at=now,
            )
            if not updated:
                if missing_ok:
                    return None
                if model.objects.filter(pk=post_id).exists():
                    raise NotFoundError(
                        f"{post_type.value.capitalize()} {post_id} has already been removed"
                    )
                raise NotFoundError(f"{post_type.value.capitalize()} {post_id} not found")

            self._reject_pending_flags(
                moderator_username,
                action,
                comment,
                post_type=post_type.value,
                post_id=post_id,
            )

        self.broadcaster.emit_on_commit(
            ContentRemoved(contentId=post_id, contentType=post_type.value)
        )
        cascade = self.propagator.run(post_type, post_id, moderator_username)
        self.broadcaster.emit_on_commit(
            DeletePostNotification(postId=post_id, postType=post_type.value)
        )
        logger.info(f"{post_type.value} {post_id} removed by {moderator_username}")
        return cascade

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def get_cascade_runs(self, username: str, status: str | None = None) -> list[CascadeRun]:
        """Propagation runs, newest first, optionally filtered by status."""
        self.authorize(username)
        runs = CascadeRun.objects.filter(is_deleted=0)
        if status:
            runs = runs.filter(status=parse_choice(CascadeStatus, status, "status").value)
        return list(runs)
