"""Immutable HTTP request.

Frozen metadata plus the already-received body. The ASGI adapter drains
the body before dispatch, so handlers running in a worker thread can read
it synchronously.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from restroute.http.headers import Headers
from restroute.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers
    query: QueryParams
    body: bytes = b""
    client: tuple[str, int] | None = None

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    def json(self) -> Any:
        """Parse the body as JSON. An empty body is ``None``."""
        if not self.body:
            return None
        return json_module.loads(self.body)

    def text(self) -> str:
        return self.body.decode("utf-8")

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI scope and the drained body."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            client=tuple(client) if client else None,
        )

    @classmethod
    def from_uri(
        cls,
        method: str,
        uri: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Request:
        """Create a Request from a raw method and request URI.

        For hosts that are not ASGI: CGI-style ``REQUEST_URI`` values,
        WSGI ``PATH_INFO`` + ``QUERY_STRING``, or tests.
        """
        parts = urlsplit(uri)
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            headers=Headers.from_dict(headers),
            query=QueryParams(parts.query),
            body=body,
        )
