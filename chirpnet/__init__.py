"""Microblogging backend: user, follow, post and timeline services and an API gateway."""

__version__ = "0.1.0"