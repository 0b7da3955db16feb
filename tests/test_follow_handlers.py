import json

import pytest
from werkzeug.test import EnvironBuilder

from chirpnet.follow.handlers import (
    FollowRequest,
    FollowUserHandler,
    GetFollowingHandler,
    follow_response,
    parse_follow_request,
)
from chirpnet.follow.service import (
    AlreadyFollowingError,
    CannotFollowSelfError,
    FollowerIdRequiredError,
    FollowingIdRequiredError,
    FollowPersistenceError,
)

VALID_BODY = '{"user_id_to_follow":"u2"}'


class FakeService:
    def __init__(self, followers=None, error=None):
        self.followers = followers
        self.error = error
        self.calls = []

    def _record(self, *args):
        self.calls.append(args[0] if len(args) == 1 else args)
        if self.error is not None:
            raise self.error

    def get_following(self, user_id):
        self._record(user_id)
        return self.followers

    def follow(self, follower_id, following_id):
        self._record(follower_id, following_id)


def get_following(service, user_id="1"):
    request = EnvironBuilder(method="GET", path=f"/api/v1/users/{user_id}/following").get_request()
    return GetFollowingHandler(service).handle(request, {"userID": user_id})


def post_follow(service, body=VALID_BODY, params=None):
    request = EnvironBuilder(method="POST", path="/api/v1/users/u1/follow", data=body).get_request()
    return FollowUserHandler(service).handle(
        request, {"followerID": "u1"} if params is None else params
    )


def body_of(response):
    return json.loads(response.get_data(as_text=True))


def test_get_following_ok():
    service = FakeService(followers=["1", "2"])
    response = get_following(service)
    assert response.status_code == 200
    assert response.mimetype == "application/json"
    assert body_of(response)["followers"] == ["1", "2"]
    assert service.calls == ["1"]


def test_get_following_fail_storage():
    service = FakeService(error=RuntimeError("some error"))
    response = get_following(service)
    assert response.status_code == 500
    assert body_of(response) == {"status": 500, "message": "Error getting following"}
    assert service.calls == ["1"]


def test_get_following_empty_list():
    assert body_of(get_following(FakeService(followers=[]))) == {"followers": []}


def test_follow_user_accepted_with_empty_body():
    service = FakeService()
    response = post_follow(service)
    assert response.status_code == 202
    assert response.get_data() == b""
    assert service.calls == [("u1", "u2")]


def test_follow_user_invalid_body():
    service = FakeService()
    response = post_follow(service, body='{"user_id_to_follow":}')
    assert response.status_code == 400
    assert body_of(response) == {"status": 400, "message": "body is invalid"}
    assert service.calls == []


@pytest.mark.parametrize(
    "error, status, message",
    [
        (CannotFollowSelfError(), 409, "an user cannot follow a self"),
        (AlreadyFollowingError(), 409, "is already following"),
        (FollowerIdRequiredError(), 400, "id follower is required"),
        (FollowingIdRequiredError(), 400, "id to follow is required"),
        (FollowPersistenceError(), 500, "error while following user"),
        (RuntimeError("boom"), 500, "error while following user"),
    ],
)
def test_follow_user_error_mapping(error, status, message):
    response = post_follow(FakeService(error=error))
    assert response.status_code == status
    assert body_of(response) == {"status": status, "message": message}


def test_follow_user_missing_param_passes_empty_id():
    service = FakeService()
    post_follow(service, params={})
    assert service.calls == [("", "u2")]


@pytest.mark.parametrize(
    "body, expected",
    [(VALID_BODY.encode(), FollowRequest("u2")), ('{"other":1}', FollowRequest(""))],
)
def test_parse_follow_request(body, expected):
    assert parse_follow_request(body) == expected


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b'{"user_id_to_follow": 5}'])
def test_parse_follow_request_rejects_bad_bodies(body):
    with pytest.raises(ValueError):
        parse_follow_request(body)


def test_follow_response_shape():
    assert follow_response(["a", "b"]) == {"followers": ["a", "b"]}