"""Domain rules for following users."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

log = logging.getLogger(__name__)


class FollowError(Exception):
    """Base class of errors raised by the follow service."""

    default_message = "follow error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CannotFollowSelfError(FollowError):
    default_message = "an user cannot follow a self"


class AlreadyFollowingError(FollowError):
    default_message = "is already following"


class FollowerIdRequiredError(FollowError):
    default_message = "id follower is required"


class FollowingIdRequiredError(FollowError):
    default_message = "id to follow is required"


class FollowPersistenceError(FollowError):
    default_message = "persistence error"


class FollowRepository(Protocol):
    """Storage of follow relationships."""

    def follow(self, follower_id: str, following_id: str) -> None:
        """Record that ``follower_id`` follows ``following_id``."""

    def get_following(self, user_id: str) -> list[str]:
        """Return the ids of the users ``user_id`` follows."""

    def is_following(self, follower_id: str, following_id: str) -> bool:
        """Tell whether the relationship already exists."""


@contextmanager
def _storage(action: str) -> Iterator[None]:
    """Turn any storage failure into a :class:`FollowPersistenceError`."""
    try:
        yield
    except Exception as exc:
        log.error("Error %s: %s", action, exc)
        raise FollowPersistenceError() from exc


class FollowService:
    """Validates and records follow relationships."""

    def __init__(self, repository: FollowRepository) -> None:
        self.repository = repository

    def follow(self, follower_id: str, following_id: str) -> None:
        """Make ``follower_id`` follow ``following_id``."""
        if not follower_id:
            raise FollowerIdRequiredError()
        if not following_id:
            raise FollowingIdRequiredError()
        if follower_id == following_id:
            raise CannotFollowSelfError()

        with _storage("checking if already following"):
            already = self.repository.is_following(follower_id, following_id)
        if already:
            raise AlreadyFollowingError()

        with _storage(f"following {following_id} by {follower_id}"):
            self.repository.follow(follower_id, following_id)

    def get_following(self, user_id: str) -> list[str]:
        """Return the ids of the users ``user_id`` follows."""
        if not user_id:
            raise FollowerIdRequiredError()
        return self.repository.get_following(user_id)