import logging

from chirpnet.post.notifier import LoggingNotifier
from chirpnet.post.service import Event


def test_send_logs_event_name_and_payload(caplog):
    caplog.set_level(logging.INFO, logger="chirpnet.post.notifier")
    event = Event(name="PostCreated", payload={"post_id": "p1", "user_id": "u1"})
    LoggingNotifier().send(event)
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 1
    assert "[DUMMY NOTIFIER]" in messages[0]
    assert "Name=PostCreated" in messages[0]
    assert "'post_id': 'p1'" in messages[0]
    assert "'user_id': 'u1'" in messages[0]


def test_send_logs_at_info_level(caplog):
    caplog.set_level(logging.INFO, logger="chirpnet.post.notifier")
    LoggingNotifier().send(Event(name="Other"))
    assert [record.levelno for record in caplog.records] == [logging.INFO]
    assert "Payload={}" in caplog.records[0].getMessage()