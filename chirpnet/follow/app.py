"""Wiring and entry point of the follow service."""

from __future__ import annotations

import argparse
import functools
import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from chirpnet.follow.handlers import FollowUserHandler, GetFollowingHandler
from chirpnet.follow.repository import InMemoryFollowRepository
from chirpnet.follow.service import FollowRepository, FollowService
from chirpnet.web import Route, Server

log = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass
class Config:
    """Settings of the follow service."""

    server_port: str = ":8080"


def load_config() -> Config:
    """Return the service configuration."""
    return Config(server_port=":8080")


def _once(build: Callable[["Container"], _T]) -> Callable[["Container"], _T]:
    """Cache what ``build`` returns on the container, building it on first call."""

    @functools.wraps(build)
    def cached(self: "Container") -> _T:
        if build.__name__ not in self._built:
            self._built[build.__name__] = build(self)
        return self._built[build.__name__]

    return cached


class Container:
    """Builds each dependency once, on first use."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._built: dict[str, object] = {}

    @_once
    def server(self) -> Server:
        return Server(
            self.config.server_port,
            [
                Route("POST", "/api/v1/users/<followerID>/follow", self.follow_user_handler()),
                Route("GET", "/api/v1/users/<userID>/following", self.following_handler()),
            ],
        )

    @_once
    def follow_user_handler(self) -> FollowUserHandler:
        return FollowUserHandler(self.follow_service())

    @_once
    def following_handler(self) -> GetFollowingHandler:
        return GetFollowingHandler(self.follow_service())

    @_once
    def follow_service(self) -> FollowService:
        return FollowService(self.follow_repository())

    @_once
    def follow_repository(self) -> FollowRepository:
        return InMemoryFollowRepository()


def main(argv: list[str] | None = None) -> int:
    """Run the follow service until interrupted."""
    argparse.ArgumentParser(
        prog="chirpnet-follow", description="Run the follow service (in-memory storage)."
    ).parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    log.info("Starting follow service (in-memory mode)...")

    config = load_config()
    server = Container(config).server()
    log.info("Server listening on port %s", config.server_port)
    try:
        server.start()
    except OSError as exc:
        log.error("Could not start the server: %s", exc)
        return 1
    return 0