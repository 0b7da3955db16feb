import json
from datetime import datetime, timezone

import pytest
from werkzeug.wrappers import Request

from chirpnet.timeline.handlers import GetTimelineHandler, timeline_response
from chirpnet.timeline.service import Post

FIXED_TIME = datetime(2025, 8, 7, 10, 0, 0, tzinfo=timezone.utc)


class FakeTimelineService:
    def __init__(self, timeline=None, error=None):
        self.timeline = timeline
        self.error = error
        self.calls = []

    def get_user_timeline(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return self.timeline


def _request(user_id):
    return Request.from_values(path=f"/api/v1/users/{user_id}/timeline", method="GET")


def _body(response):
    return json.loads(response.get_data(as_text=True))


MOCK_TIMELINE = [
    Post(id="post-1", user_id="user-abc", text="Post de otro usuario", created_at=FIXED_TIME)
]


@pytest.mark.parametrize(
    "user_id, timeline, error, status",
    [
        ("user-123", MOCK_TIMELINE, None, 200),
        ("user-456", [], None, 200),
        ("user-123", None, RuntimeError("internal service error"), 500),
    ],
    ids=["success", "empty-timeline", "service-fails"],
)
def test_handle_cases(user_id, timeline, error, status):
    service = FakeTimelineService(timeline=timeline, error=error)
    handler = GetTimelineHandler(service)

    response = handler.handle(_request(user_id), {"userID": user_id})

    assert response.status_code == status
    assert service.calls == [user_id]
    if status == 200:
        body = _body(response)
        assert len(body["Post"]) == len(timeline)
        assert body["status"] == "OK"


def test_service_error_body():
    handler = GetTimelineHandler(FakeTimelineService(error=RuntimeError("boom")))
    response = handler.handle(_request("u"), {"userID": "u"})
    assert _body(response) == {"status": 500, "message": "Error getting user timeline"}
    assert response.content_type == "application/json"


def test_missing_user_id_is_bad_request():
    service = FakeTimelineService(timeline=[])
    response = GetTimelineHandler(service).handle(_request("x"), {})
    assert response.status_code == 400
    assert _body(response)["message"] == "User ID not found is required"
    assert service.calls == []


def test_missing_params_is_server_error():
    service = FakeTimelineService(timeline=[])
    response = GetTimelineHandler(service).handle(_request("x"), None)
    assert response.status_code == 500
    assert _body(response)["message"] == "Error getting request params"
    assert service.calls == []


def test_timeline_response_shape():
    body = timeline_response(MOCK_TIMELINE)
    assert body["status"] == "OK"
    assert body["Post"] == [
        {"user_id": "user-abc", "text": "Post de otro usuario", "created_at": FIXED_TIME}
    ]


def test_timeline_response_empty_for_none():
    assert timeline_response(None) == {"status": "OK", "Post": []}


def test_handle_serialises_timestamps():
    handler = GetTimelineHandler(FakeTimelineService(timeline=MOCK_TIMELINE))
    body = _body(handler.handle(_request("user-123"), {"userID": "user-123"}))
    assert body["Post"][0]["created_at"] == "2025-08-07T10:00:00Z"
    assert "id" not in body["Post"][0]