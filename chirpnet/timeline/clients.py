"""HTTP clients for the follow and post services."""

from __future__ import annotations

import json
from typing import Any

import httpx

from chirpnet.timeline.service import ZERO_TIME, Followers, Post
from chirpnet.web import parse_timestamp


class ServiceCallError(Exception):
    """A call to another service failed."""


def _first_json_value(text: str) -> Any:
    value, _ = json.JSONDecoder().raw_decode(text.lstrip())
    return value


def _fetch(client: httpx.Client, url: str, service: str) -> httpx.Response:
    try:
        request = client.build_request("GET", url)
    except httpx.InvalidURL as exc:
        raise ServiceCallError(f"failed to create request to {service}: {exc}") from exc
    try:
        response = client.send(request, follow_redirects=True)
    except httpx.HTTPError as exc:
        raise ServiceCallError(f"failed to call {service}: {exc}") from exc
    if response.status_code != 200:
        raise ServiceCallError(
            f"{service} returned non-200 status: {response.status_code}"
        )
    return response


def _string(value: dict[str, Any], key: str) -> str:
    item = value.get(key)
    if item is None:
        return ""
    if not isinstance(item, str):
        raise ValueError(f"{key} must be a string")
    return item


def _followers_from_json(value: Any) -> Followers:
    if value is None:
        return Followers()
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    ids = value.get("followers")
    if ids is None:
        return Followers()
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise ValueError("followers must be a list of strings")
    return Followers(followers=list(ids))


def _post_from_json(value: Any) -> Post:
    if value is None:
        return Post()
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    created = value.get("created_at")
    if created is None:
        created_at = ZERO_TIME
    elif isinstance(created, str):
        created_at = parse_timestamp(created)
    else:
        raise ValueError("created_at must be a timestamp string")
    return Post(
        id=_string(value, "id"),
        user_id=_string(value, "user_id"),
        text=_string(value, "text"),
        created_at=created_at,
    )


def _posts_from_json(value: Any) -> list[Post]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("expected a JSON array")
    return [_post_from_json(item) for item in value]


class HttpFollowClient:
    """Asks the follow service whom a user follows."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def get_following(self, user_id: str) -> Followers:
        """Return the users ``user_id`` follows."""
        url = f"{self.base_url}/api/v1/users/{user_id}/following"
        response = _fetch(self.client, url, "follow-service")
        try:
            return _followers_from_json(_first_json_value(response.text))
        except ValueError as exc:
            raise ServiceCallError(
                f"failed to decode response from follow-service: {exc}"
            ) from exc


class HttpPostClient:
    """Asks the post service for the posts of a set of users."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def get_posts_by_users(self, user_ids: list[str]) -> list[Post]:
        """Return the posts written by ``user_ids``."""
        url = f"{self.base_url}/api/v1/posts?user_ids={','.join(user_ids)}"
        response = _fetch(self.client, url, "post-service")
        try:
            return _posts_from_json(_first_json_value(response.text))
        except ValueError as exc:
            raise ServiceCallError(
                f"failed to decode response from post-service: {exc}"
            ) from exc