"""Tests for restroute.server.sender response emission rules."""

import pytest

from restroute.http.response import Response
from restroute.server.sender import send_response


async def _collect(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_start_and_body(self) -> None:
        messages = await _collect(Response('{"ok": true}', content_type="application/json"))

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"content-length"] == b"12"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b'{"ok": true}'

    @pytest.mark.asyncio
    async def test_extra_headers_are_lowercased(self) -> None:
        messages = await _collect(Response("ok").with_header("X-Request-Id", "abc"))
        assert (b"x-request-id", b"abc") in messages[0]["headers"]


class TestSendResponseNoBodyStatuses:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 304])
    async def test_drops_body_and_sets_zero_content_length(self, status: int) -> None:
        # Even if a handler attaches body content, no-body statuses stay empty.
        messages = await _collect(Response("unexpected-body").with_status(status))

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""
