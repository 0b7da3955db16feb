"""Wiring and entry point of the user service."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from chirpnet.users.handlers import CreateUserHandler, GetUserHandler
from chirpnet.users.repository import InMemoryUserRepository
from chirpnet.users.service import UserRepository, UserService
from chirpnet.web import HealthHandler, Route, Server

log = logging.getLogger(__name__)

_DEFAULT_SQL_URL = "user:password@tcp(localhost:3306)/users_db?parseTime=true"


@dataclass
class Config:
    """Settings of the user service."""

    server_port: str = ":8080"
    sql_url: str = _DEFAULT_SQL_URL


def load_config() -> Config:
    """Return the service configuration."""
    return Config(server_port=":8080", sql_url=_DEFAULT_SQL_URL)


class Container:
    """Builds each dependency once, on first use."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._server: Server | None = None
        self._create_user_handler: CreateUserHandler | None = None
        self._get_user_handler: GetUserHandler | None = None
        self._health_handler: HealthHandler | None = None
        self._user_service: UserService | None = None
        self._user_repository: UserRepository | None = None

    def server(self) -> Server:
        if self._server is None:
            self._server = Server(
                self.config.server_port,
                [
                    Route("GET", "/health", self.health_handler()),
                    Route("POST", "/api/v1/users/", self.create_user_handler()),
                    Route("GET", "/api/v1/users/<userID>", self.get_user_handler()),
                ],
            )
        return self._server

    def create_user_handler(self) -> CreateUserHandler:
        if self._create_user_handler is None:
            self._create_user_handler = CreateUserHandler(self.user_service())
        return self._create_user_handler

    def get_user_handler(self) -> GetUserHandler:
        if self._get_user_handler is None:
            self._get_user_handler = GetUserHandler(self.user_service())
        return self._get_user_handler

    def health_handler(self) -> HealthHandler:
        if self._health_handler is None:
            self._health_handler = HealthHandler()
        return self._health_handler

    def user_service(self) -> UserService:
        if self._user_service is None:
            self._user_service = UserService(self.user_repository())
        return self._user_service

    def user_repository(self) -> UserRepository:
        if self._user_repository is None:
            self._user_repository = InMemoryUserRepository()
        return self._user_repository


def main(argv: list[str] | None = None) -> int:
    """Run the user service until interrupted."""
    argparse.ArgumentParser(
        prog="chirpnet-users", description="Run the user service."
    ).parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    log.info("Starting user service...")

    config = load_config()
    server = Container(config).server()
    log.info("Server listening on port %s", config.server_port)
    try:
        server.start()
    except OSError as exc:
        log.error("Could not start the server: %s", exc)
        return 1
    return 0