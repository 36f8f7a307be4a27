"""Tests for restroute.http.request — Request factories and body helpers."""

from restroute.http.request import Request


class TestFromUri:
    def test_path_and_query(self) -> None:
        request = Request.from_uri("get", "/api/items/1?expand=owner&tag=a&tag=b")
        assert request.method == "GET"
        assert request.path == "/api/items/1"
        assert request.query.get("expand") == "owner"
        assert request.query.get_list("tag") == ["a", "b"]
        assert request.url == "/api/items/1?expand=owner&tag=a&tag=b"

    def test_empty_uri(self) -> None:
        assert Request.from_uri("GET", "").path == "/"

    def test_headers(self) -> None:
        request = Request.from_uri("POST", "/api", headers={"Content-Type": "application/json"})
        assert request.content_type == "application/json"

    def test_json_body(self) -> None:
        request = Request.from_uri("POST", "/api", body=b'{"a": 1}')
        assert request.json() == {"a": 1}
        assert request.text() == '{"a": 1}'

    def test_empty_json_body(self) -> None:
        assert Request.from_uri("POST", "/api").json() is None


class TestFromAsgi:
    def test_scope(self) -> None:
        scope = {
            "type": "http",
            "method": "put",
            "path": "/api/items/3",
            "query_string": b"dry=1",
            "headers": [(b"authorization", b"Bearer t0k")],
            "client": ("127.0.0.1", 5000),
        }
        request = Request.from_asgi(scope, b"body")

        assert request.method == "PUT"
        assert request.path == "/api/items/3"
        assert request.query.get("dry") == "1"
        assert request.headers.bearer_token() == "t0k"
        assert request.client == ("127.0.0.1", 5000)
        assert request.body == b"body"

    def test_url_without_query(self) -> None:
        request = Request.from_asgi({"method": "GET", "path": "/api"})
        assert request.url == "/api"
        assert request.client is None
