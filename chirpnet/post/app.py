"""Wiring and entry point of the post service."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from chirpnet.post.handlers import CreatePostHandler, GetPostsHandler
from chirpnet.post.notifier import LoggingNotifier
from chirpnet.post.repository import InMemoryPostRepository
from chirpnet.post.service import Notifier, PostRepository, PostService
from chirpnet.web import Route, Server

log = logging.getLogger(__name__)


@dataclass
class Config:
    """Settings of the post service."""

    server_port: str = ":8080"


def load_config() -> Config:
    """Return the service configuration."""
    return Config(server_port=":8080")


class Container:
    """Builds each dependency once, on first use."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._server: Server | None = None
        self._create_post_handler: CreatePostHandler | None = None
        self._get_posts_handler: GetPostsHandler | None = None
        self._post_service: PostService | None = None
        self._post_repository: PostRepository | None = None
        self._notifier: Notifier | None = None

    def server(self) -> Server:
        if self._server is None:
            self._server = Server(
                self.config.server_port,
                [
                    Route("POST", "/api/v1/posts/", self.create_post_handler()),
                    Route("GET", "/api/v1/posts/", self.get_posts_handler()),
                ],
            )
        return self._server

    def create_post_handler(self) -> CreatePostHandler:
        if self._create_post_handler is None:
            self._create_post_handler = CreatePostHandler(self.post_service())
        return self._create_post_handler

    def get_posts_handler(self) -> GetPostsHandler:
        if self._get_posts_handler is None:
            self._get_posts_handler = GetPostsHandler(self.post_service())
        return self._get_posts_handler

    def post_service(self) -> PostService:
        if self._post_service is None:
            self._post_service = PostService(self.post_repository(), self.post_notifier())
        return self._post_service

    def post_repository(self) -> PostRepository:
        if self._post_repository is None:
            self._post_repository = InMemoryPostRepository()
        return self._post_repository

    def post_notifier(self) -> Notifier:
        if self._notifier is None:
            self._notifier = LoggingNotifier()
        return self._notifier


def main(argv: list[str] | None = None) -> int:
    """Run the post service until interrupted."""
    argparse.ArgumentParser(
        prog="chirpnet-post", description="Run the post service (in-memory storage)."
    ).parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    log.info("Starting post service (in-memory mode)...")

    config = load_config()
    server = Container(config).server()
    log.info("Server listening on port %s", config.server_port)
    try:
        server.start()
    except OSError as exc:
        log.error("Could not start the server: %s", exc)
        return 1
    return 0