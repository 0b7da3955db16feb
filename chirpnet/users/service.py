"""Domain model and rules of the user service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

log = logging.getLogger(__name__)


@dataclass
class User:
    """A registered user."""

    id: str = ""
    username: str = ""
    email: str = ""
    created_at: datetime | None = None


class UserError(Exception):
    """Base class of errors raised by the user service."""

    default_message = "user error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class UserNotFoundError(UserError):
    default_message = "user not found"


class MailAlreadyExistsError(UserError):
    default_message = "mail already exists"


class UserPersistenceError(UserError):
    default_message = "persistence error"


class StorageError(Exception):
    """Raised by user storage when it cannot complete an operation."""

    default_message = "persistence error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class StoredUserNotFoundError(StorageError):
    default_message = "usuario no encontrado"


class StoredEmailExistsError(StorageError):
    default_message = "email already exists"


class UserRepository(Protocol):
    """Storage of users."""

    def save(self, user: User) -> User:
        ...

    def find_by_id(self, user_id: str) -> User:
        ...

    def find_by_email(self, email: str) -> User | None:
        ...


class UserService:
    """Registers users and looks them up."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def create(self, user: User) -> User:
        """Register ``user``, stamping its creation time; e-mails must be unique."""
        try:
            existing = self.repository.find_by_email(user.email)
        except StoredUserNotFoundError:
            existing = None
        except Exception as exc:
            log.error("Error finding user by email: %s", exc)
            raise UserPersistenceError() from exc
        if existing is not None:
            raise MailAlreadyExistsError()

        user.created_at = datetime.now(timezone.utc)

        try:
            return self.repository.save(user)
        except Exception as exc:
            log.error("Error saving user: %s", exc)
            raise UserPersistenceError() from exc

    def get_by_id(self, user_id: str) -> User:
        """Return the user with id ``user_id``."""
        try:
            return self.repository.find_by_id(user_id)
        except StoredUserNotFoundError as exc:
            log.error("Error finding user by id: %s", exc)
            raise UserNotFoundError() from exc
        except Exception as exc:
            log.error("Error finding user by id: %s", exc)
            raise UserPersistenceError() from exc