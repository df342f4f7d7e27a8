# user_service.py

import logging

from django.db import transaction

from forum.exceptions import NotFoundError, ShadowBannedError, UserBannedError
from forum.models import User
from forum.services.moderation_service import require_fields

logger = logging.getLogger(__name__)


class UserService:
    """Account lookups and profile edits."""

    @staticmethod
    def get_user(username: str) -> User:
        try:
            return User.objects.active().get(username=username)
        except User.DoesNotExist:
            raise NotFoundError(f"User {username} not found") from None

    @staticmethod
    def is_user_banned(username: str) -> bool:
        """True if the account exists and is banned; unknown users are not banned."""
        return User.objects.filter(username=username, is_banned=True).exists()

    def update_bio(self, username: str, bio: str) -> User:
        """
        Change a user's profile bio.

        Profile text is public and not covered by the post visibility
        filter, so both banned and shadow-banned accounts are refused.
        """
        require_fields(username=username)
        user = self.get_user(username)
        if user.is_banned:
            raise UserBannedError()
        if user.is_shadow_banned:
            raise ShadowBannedError()

        with transaction.atomic():
            user.bio = bio or ""
            user.updated_by = username
            user.save(update_fields=["bio", "updated_by", "updated_at"])

        logger.info(f"User {username} updated their bio")
        return user
