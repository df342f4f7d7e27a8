# middleware.py
"""
Request logging middleware.

Logs every HTTP request with method, path, status, duration, client IP and
the acting forum username when the request names one.
"""

import time
from typing import Any

from django.http import HttpRequest

from forumutils.log_helpers import log_api_request


class RequestLoggingMiddleware:
    """
    Logs all HTTP requests and responses with timing.

    The forum has no session login. The acting username travels in the
    request and is read from the query string under the field names the
    API uses for callers.
    """

    ACTING_USER_FIELDS = ("moderatorUsername", "flaggedBy", "askedBy", "username")

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> Any:
        start_time = time.time()
        response = self.get_response(request)

        log_api_request(
            request,
            response=response,
            duration=time.time() - start_time,
            request_id=getattr(request, "request_id", None),
            acting_user=self._get_acting_user(request),
            user_agent=request.META.get("HTTP_USER_AGENT", "")[:200],
        )
        return response

    def _get_acting_user(self, request: HttpRequest) -> str | None:
        for field in self.ACTING_USER_FIELDS:
            value = request.GET.get(field)
            if value:
                return value
        return None
