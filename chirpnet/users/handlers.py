"""HTTP handlers of the user service."""

from __future__ import annotations

import json
import re
import uuid
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping, Protocol

from werkzeug.wrappers import Request, Response

from chirpnet.users.service import MailAlreadyExistsError, User, UserNotFoundError
from chirpnet.web import ErrorFormat, error_response, json_response

_ERRORS = ErrorFormat.STATUS_TEXT

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


@dataclass(frozen=True)
class CreateRequest:
    """Body of a request to register a user."""

    username: str = ""
    email: str = ""

    def validate(self) -> tuple[bool, str]:
        """Return whether the request is valid and, if not, why."""
        if not self.username:
            return False, "User name is required"
        if not self.email:
            return False, "Email is required"
        if _EMAIL_RE.fullmatch(self.email) is None:
            return False, "Email is invalid"
        return True, ""


def _string_field(value: dict[str, Any], key: str) -> str:
    item = value.get(key)
    if item is None:
        return ""
    if not isinstance(item, str):
        raise ValueError(f"{key} must be a string")
    return item


def parse_create_request(body: bytes | str) -> CreateRequest:
    """Decode the first JSON value of ``body`` into a :class:`CreateRequest`.

    Raises ``ValueError`` when the body is not a JSON object of the expected shape.
    """
    text = body.decode("utf-8") if isinstance(body, bytes) else body
    value, _ = json.JSONDecoder().raw_decode(text.lstrip())
    if value is None:
        return CreateRequest()
    if not isinstance(value, dict):
        raise ValueError("request body must be a JSON object")
    return CreateRequest(
        username=_string_field(value, "username"),
        email=_string_field(value, "email"),
    )


def user_response(user: User) -> dict[str, Any]:
    """Build the JSON body describing ``user``."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "created_at": user.created_at,
    }


class _UserCreateService(Protocol):
    def create(self, user: User) -> User: ...


class _UserGetService(Protocol):
    def get_by_id(self, user_id: str) -> User: ...


class CreateUserHandler:
    """Handles ``POST /api/v1/users/``."""

    def __init__(self, service: _UserCreateService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str] | None) -> Response:
        try:
            body = parse_create_request(request.get_data())
        except ValueError:
            return error_response(HTTPStatus.BAD_REQUEST, "Invalid request body", _ERRORS)

        valid, cause = body.validate()
        if not valid:
            return error_response(HTTPStatus.BAD_REQUEST, cause, _ERRORS)

        user = User(id=str(uuid.uuid4()), username=body.username, email=body.email)
        try:
            created = self.service.create(user)
        except MailAlreadyExistsError as exc:
            return error_response(HTTPStatus.CONFLICT, str(exc), _ERRORS)
        except Exception:
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error al crear el usuario", _ERRORS
            )
        return json_response(HTTPStatus.CREATED, user_response(created))


class GetUserHandler:
    """Handles ``GET /api/v1/users/<userID>``."""

    def __init__(self, service: _UserGetService) -> None:
        self.service = service

    def handle(self, request: Request, params: Mapping[str, str] | None) -> Response:
        if params is None:
            return error_response(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                "Error trying to parse url parameters",
                _ERRORS,
            )
        if "userID" not in params:
            return error_response(HTTPStatus.BAD_REQUEST, "Missing user id ", _ERRORS)

        try:
            user = self.service.get_by_id(params["userID"])
        except UserNotFoundError as exc:
            return error_response(HTTPStatus.NOT_FOUND, str(exc), _ERRORS)
        except Exception:
            return json_response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error al buscar el usuario"
            )
        return json_response(HTTPStatus.OK, user_response(user))