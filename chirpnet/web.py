"""HTTP plumbing shared by the services: JSON responses, timestamps, routing and serving."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any, Iterable, Mapping, Protocol

from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound
from werkzeug.routing import Map, Rule
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

JSON_CONTENT_TYPE = "application/json"
_NOT_FOUND_BODY = "404 page not found"

_TIMESTAMP_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"([Zz]|[+-]\d{2}:\d{2})"
)


def _status_text(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class ErrorFormat(enum.Enum):
    """The shape a service gives to the JSON body of an error response."""

    NUMERIC = "numeric"
    MESSAGE_ONLY = "message_only"
    STATUS_TEXT = "status_text"

    def body(self, status: int, message: str) -> dict[str, Any]:
        """Build the error body for ``status`` and ``message``."""
        if self is ErrorFormat.MESSAGE_ONLY:
            return {"message": message}
        if self is ErrorFormat.STATUS_TEXT:
            return {"status": _status_text(status), "message": message}
        return {"status": status, "message": message}


def format_timestamp(value: datetime) -> str:
    """Render a datetime as RFC 3339 with trailing fractional zeros removed.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    if minutes == 0:
        return text + "Z"
    sign = "+" if minutes > 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Fractions finer than a microsecond are truncated.
    """
    match = _TIMESTAMP_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, mins = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=mins))
    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )


def _encode_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def json_response(status: int, data: Any) -> Response:
    """Build a JSON response; ``None`` data yields an empty body."""
    if data is None:
        body = ""
    else:
        body = json.dumps(
            data, default=_encode_default, ensure_ascii=False, separators=(",", ":")
        ) + "\n"
    return Response(body, status=status, content_type=JSON_CONTENT_TYPE)


def error_response(status: int, message: str, error_format: ErrorFormat) -> Response:
    """Build a JSON error response in the given format."""
    return json_response(status, error_format.body(status, message))


class Handler(Protocol):
    """Something that answers a request, given the path parameters of its route."""

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        ...


@dataclass(frozen=True)
class Route:
    """A method and path pattern (``<name>`` marks a parameter) bound to a handler."""

    method: str
    path: str
    handler: Handler


class Server:
    """A WSGI application dispatching requests to the handlers of its routes."""

    def __init__(self, address: str, routes: Iterable[Route]) -> None:
        self.address = address
        self.routes = tuple(routes)
        self._url_map = Map(
            [
                Rule(route.path, endpoint=index, methods=[route.method])
                for index, route in enumerate(self.routes)
            ]
        )

    def __call__(self, environ, start_response):
        request = Request(environ)
        adapter = self._url_map.bind_to_environ(environ)
        try:
            index, params = adapter.match()
        except (NotFound, MethodNotAllowed):
            response = Response(_NOT_FOUND_BODY, status=404, content_type="text/plain")
        except HTTPException as exc:
            response = exc.get_response(environ)
        else:
            handler = self.routes[index].handler
            response = handler.handle(request, {k: str(v) for k, v in params.items()})
        return response(environ, start_response)

    def start(self) -> None:
        """Serve on the configured address until interrupted."""
        host, _, port = self.address.rpartition(":")
        run_simple(host or "0.0.0.0", int(port), self)


class HealthHandler:
    """Reports that the service is up."""

    def handle(self, request: Request, params: Mapping[str, str]) -> Response:
        return json_response(HTTPStatus.OK, {"status": "ok"})