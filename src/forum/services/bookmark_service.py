# bookmark_service.py

import logging

from django.db import IntegrityError, transaction

from forum.exceptions import AuthorizationError, NotFoundError, ValidationError
from forum.models import BookmarkCollection, PostType, SavedPost, User, get_post_model
from forum.services.moderation_service import (
    parse_choice,
    parse_id,
    require_fields,
)
from forum.services.notification import CollectionUpdate, EventBroadcaster

logger = logging.getLogger(__name__)


class BookmarkService:
    """
    Bookmark collections: create, save and remove posts, follow.

    Only the owner can change a collection's contents. Removed posts
    cannot be saved.
    """

    def __init__(self, broadcaster: EventBroadcaster | None = None):
        self.broadcaster = broadcaster or EventBroadcaster()

    @staticmethod
    def _get_user(username: str) -> User:
        try:
            return User.objects.active().get(username=username)
        except User.DoesNotExist:
            raise NotFoundError(f"User {username} not found") from None

    @staticmethod
    def get_collection(collection_id) -> BookmarkCollection:
        collection_id = parse_id(collection_id, "collection id")
        try:
            return BookmarkCollection.objects.select_related("owner").get(
                pk=collection_id, is_deleted=0
            )
        except BookmarkCollection.DoesNotExist:
            raise NotFoundError(f"Collection {collection_id} not found") from None

    def get_visible_collection(self, collection_id, viewer: str | None = None) -> BookmarkCollection:
        """A collection as ``viewer`` may see it; private ones only for the owner."""
        collection = self.get_collection(collection_id)
        if not collection.is_public and collection.owner.username != viewer:
            raise AuthorizationError()
        return collection

    def _get_owned_collection(self, collection_id, username: str) -> BookmarkCollection:
        collection = self.get_collection(collection_id)
        if collection.owner.username != username:
            raise AuthorizationError()
        return collection

    def create_collection(
        self, title: str, owner: str, is_public: bool = False
    ) -> BookmarkCollection:
        require_fields(title=title, owner=owner)
        user = self._get_user(owner)
        collection = BookmarkCollection.objects.create(
            title=title,
            owner=user,
            is_public=bool(is_public),
            created_by=owner,
        )
        logger.info(f"User {owner} created collection {collection.pk}")
        return collection

    def save_post(self, collection_id, post_id, post_type, username: str) -> SavedPost:
        require_fields(
            collectionId=collection_id, postId=post_id, username=username
        )
        collection = self._get_owned_collection(collection_id, username)
        post_type = parse_choice(PostType, post_type or PostType.QUESTION.value, "post type")
        post_id = parse_id(post_id, "post id")

        model = get_post_model(post_type)
        post = model.objects.filter(pk=post_id, is_removed=False).first()
        if post is None:
            raise NotFoundError(f"{post_type.value.capitalize()} {post_id} not found")

        try:
            with transaction.atomic():
                saved = SavedPost.objects.create(
                    collection=collection,
                    post_id=post_id,
                    post_type=post_type.value,
                    q_title=post.question_title(),
                )
        except IntegrityError:
            raise ValidationError("Post is already saved in this collection") from None

        self.broadcaster.emit_on_commit(
            CollectionUpdate(
                collectionId=collection.pk,
                action="postSaved",
                postId=post_id,
                postType=post_type.value,
            )
        )
        return saved

    def remove_post(self, collection_id, post_id, post_type, username: str) -> None:
        require_fields(
            collectionId=collection_id, postId=post_id, username=username
        )
        collection = self._get_owned_collection(collection_id, username)
        post_type = parse_choice(PostType, post_type or PostType.QUESTION.value, "post type")
        post_id = parse_id(post_id, "post id")

        deleted, _ = SavedPost.objects.filter(
            collection=collection, post_id=post_id, post_type=post_type.value
        ).delete()
        if not deleted:
            raise NotFoundError("Post is not saved in this collection")

        self.broadcaster.emit_on_commit(
            CollectionUpdate(
                collectionId=collection.pk,
                action="postRemoved",
                postId=post_id,
                postType=post_type.value,
            )
        )

    def follow(self, collection_id, username: str) -> BookmarkCollection:
        require_fields(collectionId=collection_id, username=username)
        collection = self.get_collection(collection_id)
        user = self._get_user(username)
        if not collection.is_public and collection.owner_id != user.pk:
            raise AuthorizationError()
        collection.followers.add(user)
        self.broadcaster.emit_on_commit(
            CollectionUpdate(collectionId=collection.pk, action="followed")
        )
        return collection

    def unfollow(self, collection_id, username: str) -> BookmarkCollection:
        require_fields(collectionId=collection_id, username=username)
        collection = self.get_collection(collection_id)
        user = self._get_user(username)
        collection.followers.remove(user)
        self.broadcaster.emit_on_commit(
            CollectionUpdate(collectionId=collection.pk, action="unfollowed")
        )
        return collection

    def get_user_collections(self, owner: str, viewer: str | None = None) -> list[BookmarkCollection]:
        """Collections owned by ``owner``; private ones only for the owner."""
        user = self._get_user(owner)
        collections = BookmarkCollection.objects.filter(owner=user, is_deleted=0)
        if viewer != owner:
            collections = collections.filter(is_public=True)
        return list(collections.prefetch_related("followers", "saved_posts"))
