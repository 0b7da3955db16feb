"""API gateway: a reverse proxy routing requests to the backend services."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Callable, Iterable

import httpx
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from chirpnet.web import json_response

log = logging.getLogger(__name__)

_HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-connection",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)
_NOT_FORWARDED = _HOP_BY_HOP | {"host", "content-length"}
_NOT_RETURNED = _HOP_BY_HOP | {"content-length", "content-encoding"}


def _join_path(base: str, path: str) -> str:
    base_slash = base.endswith("/")
    path_slash = path.startswith("/")
    if base_slash and path_slash:
        return base + path[1:]
    if not base_slash and not path_slash:
        return base + "/" + path
    return base + path


class Target:
    """A backend service that requests can be forwarded to."""

    def __init__(self, name: str, url: str, client: httpx.Client | None = None) -> None:
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise ValueError(f"cannot parse the URL of service {name}: {exc}") from exc
        if not parsed.scheme or not parsed.host:
            raise ValueError(f"cannot parse the URL of service {name}: {url!r}")
        self.name = name
        self.url = parsed
        self.client = client if client is not None else httpx.Client()

    def _upstream_url(self, request: Request) -> httpx.URL:
        path = _join_path(self.url.path, request.path)
        if request.query_string:
            return self.url.copy_with(path=path, query=request.query_string)
        return self.url.copy_with(path=path)

    def forward(self, request: Request) -> Response:
        """Send ``request`` to this service and relay its answer."""
        headers = [
            (key, value)
            for key, value in request.headers.items()
            if key.lower() not in _NOT_FORWARDED and key.lower() != "x-forwarded-for"
        ]
        if request.remote_addr:
            prior = request.headers.get("X-Forwarded-For")
            forwarded = f"{prior}, {request.remote_addr}" if prior else request.remote_addr
            headers.append(("X-Forwarded-For", forwarded))

        try:
            upstream = self.client.request(
                request.method,
                self._upstream_url(request),
                headers=headers,
                content=request.get_data(),
                follow_redirects=False,
            )
        except httpx.HTTPError as exc:
            log.error("Gateway: error reaching %s: %s", self.name, exc)
            return Response(status=HTTPStatus.BAD_GATEWAY)

        out_headers = [
            (key, value)
            for key, value in upstream.headers.multi_items()
            if key.lower() not in _NOT_RETURNED
        ]
        return Response(upstream.content, status=upstream.status_code, headers=out_headers)


@dataclass(frozen=True)
class ProxyRoute:
    """A test on the request path bound to the target it selects."""

    matcher: Callable[[str], bool]
    target: Target


def health_response() -> Response:
    """Answer the gateway's own health check."""
    return json_response(HTTPStatus.OK, {"status": "ok"})


class Gateway:
    """A WSGI application that forwards each request to the first matching target."""

    def __init__(self, routes: Iterable[ProxyRoute], default_target: Target) -> None:
        self.routes = tuple(routes)
        self.default_target = default_target

    def select_target(self, path: str) -> Target:
        """Return the target that serves ``path``."""
        for route in self.routes:
            if route.matcher(path):
                return route.target
        return self.default_target

    def __call__(self, environ, start_response):
        request = Request(environ)
        if request.path == "/health":
            response = health_response()
        else:
            target = self.select_target(request.path)
            suffix = " (default)" if target is self.default_target else ""
            log.info("Gateway: forwarding %s to %s%s", request.path, target.name, suffix)
            response = target.forward(request)
        return response(environ, start_response)


def build_gateway(client: httpx.Client | None = None) -> Gateway:
    """Build the gateway with the routes of the deployed services."""
    http = client if client is not None else httpx.Client()
    user_service = Target("user-service", "http://user-service:8080", http)
    follow_service = Target("follow-service", "http://follow-service:8080", http)
    post_service = Target("post-service", "http://post-service:8080", http)
    timeline_service = Target("timeline-service", "http://timeline-service:8080", http)

    routes = [
        ProxyRoute(lambda path: "/timeline" in path, timeline_service),
        ProxyRoute(lambda path: "/follow" in path or "/following" in path, follow_service),
        ProxyRoute(lambda path: path.startswith("/api/v1/posts"), post_service),
    ]
    return Gateway(routes, user_service)


def main(argv: list[str] | None = None) -> int:
    """Run the gateway on port 8000 until interrupted."""
    argparse.ArgumentParser(
        prog="chirpnet-gateway", description="Run the API gateway."
    ).parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    log.info("API gateway listening on port :8000")
    try:
        run_simple("0.0.0.0", 8000, build_gateway())
    except OSError as exc:
        log.error("Could not start the API gateway: %s", exc)
        return 1
    return 0