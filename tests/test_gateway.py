import httpx
import pytest
from werkzeug.test import Client

from chirpnet.gateway import Gateway, ProxyRoute, Target, build_gateway, health_response


def _recording_client(seen, status=200, reply=b"{}", headers=None):
    def handler(request):
        seen.append(request)
        return httpx.Response(status, content=reply, headers=headers or {})

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    "path, name",
    [
        ("/api/v1/users/1/timeline", "timeline-service"),
        ("/api/v1/users/1/follow", "follow-service"),
        ("/api/v1/users/1/following", "follow-service"),
        ("/api/v1/posts", "post-service"),
        ("/api/v1/posts/", "post-service"),
        ("/api/v1/users/1", "user-service"),
        ("/api/v1/users/", "user-service"),
    ],
)
def test_select_target(path, name):
    gateway = build_gateway(_recording_client([]))
    assert gateway.select_target(path).name == name


def test_health_response_body():
    response = health_response()
    assert response.status_code == 200
    assert response.get_data() == b'{"status":"ok"}\n'


def test_health_is_answered_by_gateway():
    seen = []
    client = Client(build_gateway(_recording_client(seen)))
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json == {"status": "ok"}
    assert seen == []


def test_request_forwarded_to_matching_service():
    seen = []
    http = _recording_client(seen, status=202, reply=b'{"ok":true}', headers={"X-Upstream": "yes"})
    client = Client(build_gateway(http))
    response = client.post(
        "/api/v1/posts/", data=b'{"user_id":"u"}', content_type="application/json"
    )
    assert response.status_code == 202
    assert response.get_data() == b'{"ok":true}'
    assert response.headers["X-Upstream"] == "yes"
    assert len(seen) == 1
    forwarded = seen[0]
    assert forwarded.method == "POST"
    assert forwarded.url.host == "post-service"
    assert forwarded.url.path == "/api/v1/posts/"
    assert forwarded.content == b'{"user_id":"u"}'


def test_query_string_is_kept():
    seen = []
    client = Client(build_gateway(_recording_client(seen)))
    client.get("/api/v1/posts?user_ids=a,b")
    assert seen[0].url.params["user_ids"] == "a,b"


def test_unmatched_request_goes_to_default():
    seen = []
    client = Client(build_gateway(_recording_client(seen)))
    client.get("/api/v1/users/42")
    assert seen[0].url.host == "user-service"
    assert seen[0].url.path == "/api/v1/users/42"


def test_unreachable_service_gives_bad_gateway():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(handler))
    target = Target("down", "http://down.example.com", http)
    client = Client(Gateway([], target))
    response = client.get("/anything")
    assert response.status_code == 502


def test_custom_routes_are_tried_in_order():
    http = _recording_client([])
    first = Target("first", "http://first.example.com", http)
    second = Target("second", "http://second.example.com", http)
    fallback = Target("fallback", "http://fallback.example.com", http)
    gateway = Gateway(
        [ProxyRoute(lambda p: "x" in p, first), ProxyRoute(lambda p: "x" in p, second)],
        fallback,
    )
    assert gateway.select_target("/x") is first
    assert gateway.select_target("/y") is fallback


def test_target_rejects_url_without_scheme():
    with pytest.raises(ValueError):
        Target("broken", "not a url", httpx.Client())