"""Domain model and rules of the timeline service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

log = logging.getLogger(__name__)

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Post:
    """A post as shown in a timeline."""

    id: str = ""
    user_id: str = ""
    text: str = ""
    created_at: datetime = ZERO_TIME


@dataclass
class Followers:
    """The ids of the users someone follows."""

    followers: list[str] = field(default_factory=list)


class TimelineError(Exception):
    """Base class of errors raised by the timeline service."""

    default_message = "timeline error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class FollowingLookupError(TimelineError):
    default_message = "error getting following list for user"


class PostLookupError(TimelineError):
    default_message = "error getting post by user"


class FollowClient(Protocol):
    """Looks up whom a user follows."""

    def get_following(self, user_id: str) -> Followers:
        ...


class PostClient(Protocol):
    """Looks up the posts of a set of users."""

    def get_posts_by_users(self, user_ids: list[str]) -> list[Post]:
        ...


class TimelineService:
    """Assembles a user's timeline from the posts of the users they follow."""

    def __init__(self, follow_client: FollowClient, post_client: PostClient) -> None:
        self.follow_client = follow_client
        self.post_client = post_client

    def get_user_timeline(self, user_id: str) -> list[Post]:
        """Return the posts of the users ``user_id`` follows."""
        try:
            following = self.follow_client.get_following(user_id)
        except Exception as exc:
            log.error("Error getting following list for user %s: %s", user_id, exc)
            raise FollowingLookupError() from exc

        if not following.followers:
            return []

        try:
            return self.post_client.get_posts_by_users(following.followers)
        except Exception as exc:
            log.error("Error getting posts for users: %s", exc)
            raise PostLookupError() from exc