"""Wiring and entry point of the timeline service."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

import httpx

from chirpnet.timeline.clients import HttpFollowClient, HttpPostClient
from chirpnet.timeline.handlers import GetTimelineHandler
from chirpnet.timeline.service import FollowClient, PostClient, TimelineService
from chirpnet.web import Route, Server

log = logging.getLogger(__name__)


@dataclass
class Config:
    """Settings of the timeline service."""

    server_port: str = ":8080"
    follow_service_url: str = "http://follow-service:8080"
    post_service_url: str = "http://post-service:8080"


def load_config() -> Config:
    """Return the service configuration."""
    return Config(
        server_port=":8080",
        follow_service_url="http://follow-service:8080",
        post_service_url="http://post-service:8080",
    )


class Container:
    """Builds each dependency once, on first use."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._server: Server | None = None
        self._timeline_handler: GetTimelineHandler | None = None
        self._timeline_service: TimelineService | None = None
        self._follow_client: FollowClient | None = None
        self._post_client: PostClient | None = None
        self._http: httpx.Client | None = None

    def server(self) -> Server:
        if self._server is None:
            self._server = Server(
                self.config.server_port,
                [Route("GET", "/api/v1/users/<userID>/timeline", self.timeline_handler())],
            )
        return self._server

    def timeline_handler(self) -> GetTimelineHandler:
        if self._timeline_handler is None:
            self._timeline_handler = GetTimelineHandler(self.timeline_service())
        return self._timeline_handler

    def timeline_service(self) -> TimelineService:
        if self._timeline_service is None:
            self._timeline_service = TimelineService(self.follow_client(), self.post_client())
        return self._timeline_service

    def follow_client(self) -> FollowClient:
        if self._follow_client is None:
            self._follow_client = HttpFollowClient(
                self._http_client(), self.config.follow_service_url
            )
        return self._follow_client

    def post_client(self) -> PostClient:
        if self._post_client is None:
            self._post_client = HttpPostClient(
                self._http_client(), self.config.post_service_url
            )
        return self._post_client

    def _http_client(self) -> httpx.Client:
        if self._http is None:
            self._http = httpx.Client()
        return self._http


def main(argv: list[str] | None = None) -> int:
    """Run the timeline service until interrupted."""
    argparse.ArgumentParser(
        prog="chirpnet-timeline", description="Run the timeline service."
    ).parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    log.info("Starting timeline service...")

    config = load_config()
    server = Container(config).server()
    log.info("Server listening on port %s", config.server_port)
    try:
        server.start()
    except OSError as exc:
        log.error("Could not start the server: %s", exc)
        return 1
    return 0