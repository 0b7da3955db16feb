"""In-memory storage of follow relationships."""

from __future__ import annotations

import threading


class InMemoryFollowRepository:
    """Keeps, for each follower, the ids it follows, in the order first followed."""

    def __init__(self) -> None:
        # follower id -> ordered set (dict keys) of followed ids
        self._follows: dict[str, dict[str, None]] = {}
        self._lock = threading.Lock()

    def follow(self, follower_id: str, following_id: str) -> None:
        """Record that ``follower_id`` follows ``following_id``."""
        with self._lock:
            self._follows.setdefault(follower_id, {})[following_id] = None

    def get_following(self, user_id: str) -> list[str]:
        """Return the ids ``user_id`` follows; empty if none."""
        with self._lock:
            return list(self._follows.get(user_id, ()))

    def is_following(self, follower_id: str, following_id: str) -> bool:
        """Tell whether ``follower_id`` already follows ``following_id``."""
        with self._lock:
            return following_id in self._follows.get(follower_id, ())