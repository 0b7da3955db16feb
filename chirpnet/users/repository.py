"""Storage of users: in memory, and in an SQL database."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from chirpnet.users.service import StorageError, StoredUserNotFoundError, User
from chirpnet.web import format_timestamp, parse_timestamp


class InMemoryUserRepository:
    """Keeps users in a dictionary keyed by id."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def save(self, user: User) -> User:
        """Store ``user``, replacing any user with the same id."""
        with self._lock:
            self._users[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> User:
        """Return the user with id ``user_id``; raises ``StorageError`` if absent."""
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise StorageError()
        return user

    def find_by_email(self, email: str) -> User:
        """Return a user with this e-mail; raises ``StoredUserNotFoundError`` if none."""
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        raise StoredUserNotFoundError()


def _to_column(value: datetime | None) -> str | None:
    return None if value is None else format_timestamp(value)


def _from_column(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return parse_timestamp(str(value))


class SqlUserRepository:
    """Stores users in a ``users`` table through a DB-API connection (qmark style)."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def save(self, user: User) -> User:
        """Insert ``user``; returns an empty user, as the insert yields no row."""
        query = "INSERT INTO users (id, username, email, created_at) VALUES (?, ?, ?, ?)"
        try:
            cursor = self.connection.cursor()
            cursor.execute(
                query, (user.id, user.username, user.email, _to_column(user.created_at))
            )
            self.connection.commit()
        except Exception as exc:
            raise StorageError() from exc
        return User()

    def find_by_id(self, user_id: str) -> User:
        """Return the user with id ``user_id``."""
        query = "SELECT id, username, email, created_at FROM users WHERE id = ?"
        try:
            cursor = self.connection.cursor()
            cursor.execute(query, (user_id,))
            row = cursor.fetchone()
        except Exception as exc:
            raise StorageError() from exc
        if row is None:
            raise StoredUserNotFoundError()
        found_id, username, email, created = row
        try:
            created_at = _from_column(created)
        except ValueError as exc:
            raise StorageError() from exc
        return User(id=found_id, username=username, email=email, created_at=created_at)