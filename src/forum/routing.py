# forum/routing.py
"""
WebSocket URL routing for live forum events.
"""

from django.urls import re_path

from forum import consumers

websocket_urlpatterns = [
    re_path(r"^ws/events/?$", consumers.ForumEventsConsumer.as_asgi()),
]
