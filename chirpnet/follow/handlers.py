"""HTTP handlers of the follow service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from http import HTTPStatus
from typing import Any, Mapping, Protocol

from werkzeug.wrappers import Request, Response

from chirpnet.follow.service import (
    AlreadyFollowingError,
    CannotFollowSelfError,
    FollowerIdRequiredError,
    FollowingIdRequiredError,
)
from chirpnet.web import ErrorFormat, error_response, json_response

_error = partial(error_response, error_format=ErrorFormat.NUMERIC)

_STATUS_BY_ERROR = (
    ((CannotFollowSelfError, AlreadyFollowingError), HTTPStatus.CONFLICT),
    ((FollowerIdRequiredError, FollowingIdRequiredError), HTTPStatus.BAD_REQUEST),
)


@dataclass(frozen=True)
class FollowRequest:
    """Body of a request to follow a user."""

    user_id_to_follow: str = ""


def parse_follow_request(body: bytes | str) -> FollowRequest:
    """Decode the first JSON value of ``body`` into a :class:`FollowRequest`.

    Raises ``ValueError`` when the body is not a JSON object of the expected shape.
    """
    source = body if isinstance(body, str) else body.decode("utf-8")
    document, _ = json.JSONDecoder().raw_decode(source.lstrip())
    if document is not None and not isinstance(document, dict):
        raise ValueError("request body must be a JSON object")
    target = (document or {}).get("user_id_to_follow")
    if target is not None and not isinstance(target, str):
        raise ValueError("user_id_to_follow must be a string")
    return FollowRequest(user_id_to_follow=target or "")


def follow_response(followers: list[str] | None) -> dict[str, Any]:
    """Build the JSON body listing followed user ids."""
    return {"followers": followers}


class _FollowService(Protocol):
    def follow(self, follower_id: str, following_id: str) -> None: ...


class _GetFollowService(Protocol):
    def get_following(self, user_id: str) -> list[str]: ...


class FollowUserHandler:
    """Handles ``POST /api/v1/users/<followerID>/follow``."""

    def __init__(self, service: _FollowService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        try:
            body = parse_follow_request(request.get_data())
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "body is invalid")

        try:
            self.service.follow(params.get("followerID", ""), body.user_id_to_follow)
        except Exception as exc:
            for kinds, status in _STATUS_BY_ERROR:
                if isinstance(exc, kinds):
                    return _error(status, str(exc))
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "error while following user")
        return json_response(HTTPStatus.ACCEPTED, None)


class GetFollowingHandler:
    """Handles ``GET /api/v1/users/<userID>/following``."""

    def __init__(self, service: _GetFollowService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        try:
            following = self.service.get_following(params.get("userID", ""))
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Error getting following")
        return json_response(HTTPStatus.OK, follow_response(following))