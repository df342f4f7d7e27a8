# visibility.py
"""
Read-path visibility rules for serialised post trees.

Everything here is pure: the functions take a serialised post (as built by
``forum.serializers.forum_serializers``), the viewer's username and the
moderator set, and return a filtered copy. The same rules run on HTTP
fetches and on live ``commentUpdate`` events.
"""

from collections.abc import Iterable
from typing import Any

CHILD_KEYS = ("answers", "comments")


def flagged_by_viewer(post: dict[str, Any], viewer: str | None) -> bool:
    if not viewer:
        return False
    return any(flag.get("flaggedBy") == viewer for flag in post.get("flags") or [])


def is_visible(
    post: dict[str, Any], viewer: str | None, moderators: Iterable[str]
) -> bool:
    """
    Decide whether a single post (ignoring its children) may be shown.

    Rules:
    - posts the viewer flagged are hidden from that viewer
    - removed posts are hidden from non-moderators
    - shadow-banned authors are visible only to themselves and moderators
    """
    is_moderator = bool(viewer) and viewer in moderators

    if flagged_by_viewer(post, viewer):
        return False
    if post.get("isRemoved") and not is_moderator:
        return False
    if post.get("authorShadowBanned"):
        return is_moderator or post.get("author") == viewer
    return True


def filter_post_tree(
    post: dict[str, Any], viewer: str | None, moderators: Iterable[str]
) -> dict[str, Any] | None:
    """
    Return a filtered copy of ``post`` and its descendants.

    Returns None when the post itself is not visible; hidden children are
    dropped from their parent's lists. The input is not modified.
    """
    moderators = frozenset(moderators)
    if not is_visible(post, viewer, moderators):
        return None

    filtered = dict(post)
    for key in CHILD_KEYS:
        if key not in post:
            continue
        children = []
        for child in post.get(key) or []:
            kept = filter_post_tree(child, viewer, moderators)
            if kept is not None:
                children.append(kept)
        filtered[key] = children
    return filtered


def filter_post_list(
    posts: Iterable[dict[str, Any]], viewer: str | None, moderators: Iterable[str]
) -> list[dict[str, Any]]:
    """Filter a list of post trees, dropping the ones the viewer may not see."""
    moderators = frozenset(moderators)
    result = []
    for post in posts:
        kept = filter_post_tree(post, viewer, moderators)
        if kept is not None:
            result.append(kept)
    return result
