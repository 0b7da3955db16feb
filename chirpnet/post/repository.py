"""In-memory storage of posts."""

from __future__ import annotations

import threading

from chirpnet.post.service import Post


class InMemoryPostRepository:
    """Keeps posts in the order they were saved."""

    def __init__(self) -> None:
        self._posts: list[Post] = []
        self._lock = threading.Lock()

    def save(self, post: Post) -> None:
        """Store ``post``."""
        with self._lock:
            self._posts.append(post)

    def find_by_user_ids(self, user_ids: list[str]) -> list[Post]:
        """Return the posts written by any of ``user_ids``, in save order."""
        wanted = set(user_ids)
        with self._lock:
            return [post for post in self._posts if post.user_id in wanted]