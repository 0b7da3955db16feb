"""HTTP handlers of the timeline service."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping, Protocol

from werkzeug.wrappers import Request, Response

from chirpnet.timeline.service import Post
from chirpnet.web import ErrorFormat, error_response, json_response

_ERRORS = ErrorFormat.NUMERIC


def timeline_response(posts: list[Post] | None) -> dict[str, Any]:
    """Build the JSON body of a timeline: a status and the posts shown."""
    return {
        "status": "OK",
        "Post": [
            {
                "user_id": post.user_id,
                "text": post.text,
                "created_at": post.created_at,
            }
            for post in posts or []
        ],
    }


class _TimelineService(Protocol):
    def get_user_timeline(self, user_id: str) -> list[Post]: ...


class GetTimelineHandler:
    """Handles ``GET /api/v1/users/<userID>/timeline``."""

    def __init__(self, service: _TimelineService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str] | None) -> Response:
        if params is None:
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error getting request params", _ERRORS
            )
        if "userID" not in params:
            return error_response(
                HTTPStatus.BAD_REQUEST, "User ID not found is required", _ERRORS
            )
        user_id = params["userID"]

        try:
            posts = self.service.get_user_timeline(user_id)
        except Exception:
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error getting user timeline", _ERRORS
            )
        return json_response(HTTPStatus.OK, timeline_response(posts))