"""Tests for restroute.http.response — immutable Response and json_response."""

import pytest

from restroute.http.response import Response, json_response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.headers == ()

    def test_chainable(self) -> None:
        original = Response("ok")
        changed = original.with_status(201).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert original.status == 200
        assert changed.status == 201
        assert changed.headers == (("X-A", "1"), ("X-B", "2"))

    def test_content_type(self) -> None:
        assert Response("x").with_content_type("text/csv").content_type == "text/csv"

    def test_body_helpers(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"abc").text == "abc"


class TestJsonResponse:
    def test_payload(self) -> None:
        response = json_response({"message": "Not found!", "status": 404}, status=404)
        assert response.status == 404
        assert response.content_type == "application/json"
        assert response.json() == {"message": "Not found!", "status": 404}

    def test_not_serializable(self) -> None:
        with pytest.raises(TypeError):
            json_response({"when": object()})
