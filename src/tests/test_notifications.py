"""
Tests for live events: event types, the channel-layer broadcaster and the
websocket consumer.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from asgiref.sync import async_to_sync


@pytest.mark.unit
class TestForumEvents:
    """Tests for the event dataclasses and their wire form."""

    def test_to_message(self):
        from forum.services.notification import ContentRemoved

        event = ContentRemoved(contentId=7, contentType="answer")

        assert event.to_message() == {
            "event": "contentRemoved",
            "payload": {"contentId": 7, "contentType": "answer"},
        }

    def test_flag_notification_carries_default_message(self):
        from forum.services.notification import FlagNotification

        payload = FlagNotification(
            flaggedBy="user123", postId=1, postType="question", reason="spam"
        ).payload()

        assert "removed from your collections" in payload["message"]

    def test_event_from_message(self):
        from forum.services.notification import CollectionUpdate, event_from_message

        event = event_from_message(
            {
                "event": "collectionUpdate",
                "payload": {"collectionId": 3, "action": "followed"},
            }
        )

        assert event == CollectionUpdate(collectionId=3, action="followed")

    def test_unknown_event_rejected(self):
        from forum.services.notification import event_from_message

        with pytest.raises(ValueError):
            event_from_message({"event": "somethingElse", "payload": {}})

    def test_malformed_payload_rejected(self):
        from forum.services.notification import event_from_message

        with pytest.raises(ValueError):
            event_from_message({"event": "userBanned", "payload": {"user": "x"}})

    def test_every_kind_is_registered(self):
        from forum.services.notification import EVENT_TYPES

        assert set(EVENT_TYPES) == {
            "contentRemoved",
            "userBanned",
            "flagNotification",
            "deletePostNotification",
            "commentUpdate",
            "collectionUpdate",
        }


@pytest.mark.unit
class TestEventBroadcaster:
    """Tests for EventBroadcaster."""

    def test_emit_sends_to_group(self):
        from forum.services.notification import EventBroadcaster, UserBanned

        layer = MagicMock()
        layer.group_send = AsyncMock()

        sent = EventBroadcaster(channel_layer=layer).emit(UserBanned(username="user123"))

        assert sent is True
        layer.group_send.assert_awaited_once_with(
            "forum",
            {
                "type": "forum.event",
                "event": "userBanned",
                "payload": {"username": "user123"},
            },
        )

    def test_emit_failure_is_logged_not_raised(self):
        from forum.services.notification import EventBroadcaster, UserBanned

        layer = MagicMock()
        layer.group_send = AsyncMock(side_effect=RuntimeError("redis down"))

        with patch("forum.services.notification.broadcaster.logger") as mock_logger:
            sent = EventBroadcaster(channel_layer=layer).emit(
                UserBanned(username="user123")
            )

        assert sent is False
        assert "Failed to emit userBanned" in mock_logger.error.call_args.args[0]

    def test_emit_without_layer(self):
        from forum.services.notification import EventBroadcaster, UserBanned

        with patch(
            "forum.services.notification.broadcaster.get_channel_layer",
            return_value=None,
        ):
            assert EventBroadcaster().emit(UserBanned(username="user123")) is False

    def test_emit_on_commit_waits_for_commit(self, django_capture_on_commit_callbacks):
        from forum.services.notification import ContentRemoved, EventBroadcaster

        layer = MagicMock()
        layer.group_send = AsyncMock()
        broadcaster = EventBroadcaster(channel_layer=layer)

        with django_capture_on_commit_callbacks() as callbacks:
            broadcaster.emit_on_commit(ContentRemoved(contentId=1, contentType="question"))
            layer.group_send.assert_not_awaited()

        assert len(callbacks) == 1
        callbacks[0]()
        layer.group_send.assert_awaited_once()

    def test_emit_through_in_memory_layer(self):
        from channels.layers import InMemoryChannelLayer

        from forum.services.notification import ContentRemoved, EventBroadcaster

        layer = InMemoryChannelLayer()
        channel = async_to_sync(layer.new_channel)()
        async_to_sync(layer.group_add)("forum", channel)

        EventBroadcaster(channel_layer=layer).emit(
            ContentRemoved(contentId=5, contentType="comment")
        )
        message = async_to_sync(layer.receive)(channel)

        assert message["type"] == "forum.event"
        assert message["event"] == "contentRemoved"
        assert message["payload"] == {"contentId": 5, "contentType": "comment"}


def tree(author="user456", shadow_banned=False):
    return {
        "id": 1,
        "type": "question",
        "title": "Question",
        "author": author,
        "authorShadowBanned": shadow_banned,
        "isRemoved": False,
        "flags": [],
        "answers": [
            {
                "id": 2,
                "type": "answer",
                "author": "shadowy",
                "authorShadowBanned": True,
                "isRemoved": False,
                "flags": [],
                "comments": [],
            }
        ],
        "comments": [],
    }


@pytest.mark.unit
class TestForumEventsConsumer:
    """Tests for the websocket consumer."""

    @staticmethod
    def run(viewer, *messages):
        """Connect as ``viewer``, push messages to the group and collect output."""
        from channels.layers import get_channel_layer
        from channels.routing import URLRouter
        from channels.testing import WebsocketCommunicator

        from forum.routing import websocket_urlpatterns

        async def scenario():
            communicator = WebsocketCommunicator(
                URLRouter(websocket_urlpatterns), f"/ws/events/?username={viewer}"
            )
            connected, _ = await communicator.connect()
            assert connected

            layer = get_channel_layer()
            received = []
            for message in messages:
                await layer.group_send("forum", {"type": "forum.event", **message})
                if await communicator.receive_nothing(timeout=0.1):
                    received.append(None)
                else:
                    received.append(await communicator.receive_json_from())

            await communicator.disconnect()
            await layer.flush()
            return received

        return async_to_sync(scenario)()

    def test_relays_events(self):
        from forum.services.notification import UserBanned

        received = self.run("user123", UserBanned(username="user456").to_message())

        assert received == [{"event": "userBanned", "payload": {"username": "user456"}}]

    def test_comment_update_filtered_for_viewer(self):
        from forum.services.notification import CommentUpdate

        message = CommentUpdate(result=tree(), type="question").to_message()

        (for_user,) = self.run("user123", message)
        (for_author,) = self.run("shadowy", message)
        (for_moderator,) = self.run("mod1", message)

        assert for_user["payload"]["result"]["answers"] == []
        assert [a["id"] for a in for_author["payload"]["result"]["answers"]] == [2]
        assert [a["id"] for a in for_moderator["payload"]["result"]["answers"]] == [2]

    def test_hidden_comment_update_not_sent(self):
        from forum.services.notification import CommentUpdate, UserBanned

        hidden = CommentUpdate(result=tree(author="shadowy", shadow_banned=True))

        received = self.run(
            "user123", hidden.to_message(), UserBanned(username="x").to_message()
        )

        assert received[0] is None
        assert received[1]["event"] == "userBanned"

    def test_flag_notification_only_reaches_flagger(self):
        from forum.services.notification import FlagNotification

        message = FlagNotification(
            flaggedBy="user123", postId=1, postType="question", reason="spam"
        ).to_message()

        (for_flagger,) = self.run("user123", message)
        (for_author,) = self.run("user456", message)
        (for_moderator,) = self.run("mod1", message)
        (for_anonymous,) = self.run("", message)

        assert for_flagger["event"] == "flagNotification"
        assert for_flagger["payload"]["flaggedBy"] == "user123"
        assert for_author is None
        assert for_moderator is None
        assert for_anonymous is None
