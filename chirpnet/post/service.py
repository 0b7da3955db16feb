"""Domain model and rules of the post service."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

log = logging.getLogger(__name__)

MAX_POST_LENGTH = 280
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Post:
    """A short message written by a user."""

    id: str = ""
    user_id: str = ""
    text: str = ""
    created_at: datetime = ZERO_TIME


@dataclass
class Event:
    """A domain event handed to a notifier."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)


class PostError(Exception):
    """Base class of errors raised by the post service."""

    default_message = "post error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class UserIdRequiredError(PostError):
    default_message = "el userID es requerido"


class TextRequiredError(PostError):
    default_message = "el texto del post es requerido"


class TextTooLongError(PostError):
    default_message = "el texto del post excede los 280 caracteres"


class PostPersistenceError(PostError):
    default_message = "persistence error"


class Notifier(Protocol):
    """Publishes domain events."""

    def send(self, event: Event) -> None:
        ...


class PostRepository(Protocol):
    """Storage of posts."""

    def save(self, post: Post) -> None:
        ...

    def find_by_user_ids(self, user_ids: list[str]) -> list[Post]:
        ...


def _created_key(post: Post) -> datetime:
    created = post.created_at
    if created is None:
        return ZERO_TIME
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


class PostService:
    """Stores posts, announces new ones and lists them newest first."""

    def __init__(self, repository: PostRepository, notifier: Notifier) -> None:
        self.repository = repository
        self.notifier = notifier

    def create_post(self, post: Post) -> Post:
        """Save ``post`` and announce it in the background."""
        try:
            self.repository.save(post)
        except Exception as exc:
            log.error("Error creating post: %s", exc)
            raise PostPersistenceError() from exc

        event = Event(
            name="PostCreated",
            payload={"post_id": post.id, "user_id": post.user_id},
        )
        threading.Thread(target=self._notify, args=(event,), daemon=True).start()
        return post

    def _notify(self, event: Event) -> None:
        try:
            self.notifier.send(event)
        except Exception as exc:
            log.error("notifier.send: %s", exc)

    def get_posts_by_users(self, user_ids: list[str]) -> list[Post]:
        """Return the posts of the given users, most recent first."""
        try:
            posts = self.repository.find_by_user_ids(user_ids)
        except Exception as exc:
            log.error("Error finding posts by users: %s", exc)
            raise PostPersistenceError() from exc
        return sorted(posts or [], key=_created_key, reverse=True)