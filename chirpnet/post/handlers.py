"""HTTP handlers of the post service."""

from __future__ import annotations

import contextlib
import json
from dataclasses import dataclass, fields
from functools import partial
from http import HTTPStatus
from typing import Any, Mapping, Protocol

from werkzeug.wrappers import Request, Response

from chirpnet.post.service import MAX_POST_LENGTH, Post
from chirpnet.web import ErrorFormat, error_response, json_response

_error = partial(error_response, error_format=ErrorFormat.MESSAGE_ONLY)


@dataclass(frozen=True)
class CreatePostRequest:
    """Body of a request to publish a post."""

    user_id: str = ""
    text: str = ""

    def validate(self) -> tuple[bool, str]:
        """Return whether the request is valid and, if not, why."""
        if not self.user_id.strip():
            return False, "user id is required"
        if not self.text.strip():
            return False, "text is required"
        if len(self.text.encode("utf-8")) > MAX_POST_LENGTH:
            return False, "text is too long, not exceed 280 characters"
        return True, ""

    def to_domain(self) -> Post:
        """Build the domain post this request describes."""
        return Post(user_id=self.user_id, text=self.text)


def parse_create_post_request(body: bytes | str) -> CreatePostRequest:
    """Decode the first JSON value of ``body`` into a :class:`CreatePostRequest`.

    Raises ``ValueError`` when the body is not a JSON object of the expected shape.
    """
    raw = body.decode("utf-8") if isinstance(body, bytes) else body
    payload, _ = json.JSONDecoder().raw_decode(raw.lstrip())
    payload = {} if payload is None else payload
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")

    values: dict[str, str] = {}
    for spec in fields(CreatePostRequest):
        found = payload.get(spec.name)
        if found is not None and not isinstance(found, str):
            raise ValueError(f"{spec.name} must be a string")
        values[spec.name] = found or ""
    return CreatePostRequest(**values)


def post_response(post: Post) -> dict[str, Any]:
    """Build the JSON body describing ``post``."""
    return {
        "id": post.id,
        "user_id": post.user_id,
        "text": post.text,
        "created_at": post.created_at,
    }


class _PostCreateService(Protocol):
    def create_post(self, post: Post) -> Post: ...


class _GetPostService(Protocol):
    def get_posts_by_users(self, user_ids: list[str]) -> list[Post]: ...


class CreatePostHandler:
    """Handles ``POST /api/v1/posts/``."""

    def __init__(self, service: _PostCreateService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        try:
            body = parse_create_post_request(request.get_data())
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Cuerpo de la petición inválido")

        valid, cause = body.validate()

        # The post is handed over even when invalid, and failures are not
        # reported back: processing is asynchronous from the caller's view.
        with contextlib.suppress(Exception):
            self.service.create_post(body.to_domain())

        if not valid:
            return _error(HTTPStatus.BAD_REQUEST, cause)
        return json_response(
            HTTPStatus.ACCEPTED, {"status": "post accepted for processing"}
        )


class GetPostsHandler:
    """Handles ``GET /api/v1/posts/?user_ids=a,b``."""

    def __init__(self, service: _GetPostService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        query = request.args.get("user_ids", "")
        if not query:
            return _error(HTTPStatus.BAD_REQUEST, "Query parameter 'user_ids' is required")

        try:
            posts = self.service.get_posts_by_users(query.split(","))
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Error getting posts")

        return json_response(HTTPStatus.OK, [post_response(post) for post in posts or []])