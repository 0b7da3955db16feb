"""A notifier that only writes events to the log."""

from __future__ import annotations

import logging

from chirpnet.post.service import Event

log = logging.getLogger(__name__)


class LoggingNotifier:
    """Logs each event instead of publishing it to a queue."""

    def send(self, event: Event) -> None:
        log.info("[DUMMY NOTIFIER] Send Event: Name=%s, Payload=%s", event.name, event.payload)