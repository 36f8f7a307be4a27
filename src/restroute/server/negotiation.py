"""Return-value negotiation — maps handler results to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from restroute.errors import HTTPError
from restroute.http.response import Response, json_response


def negotiate(value: Any, *, ensure_ascii: bool = False) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``HTTPError``           -> JSON ``{"message", "status"}`` with its status
    3. ``None``                -> 204, empty body
    4. ``str``                 -> 200, text/plain
    5. ``bytes``               -> 200, application/octet-stream
    6. ``dict`` / ``list``     -> 200, application/json
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case HTTPError():
            return error_response(value, ensure_ascii=ensure_ascii)
        case None:
            return Response(status=204)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str, ensure_ascii=ensure_ascii),
                content_type="application/json",
            )
        case (inner, int() as status):
            return negotiate(inner, ensure_ascii=ensure_ascii).with_status(status)
        case (inner, int() as status, dict() as headers):
            response = negotiate(inner, ensure_ascii=ensure_ascii)
            return response.with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                "Return str, dict, list, bytes, None, Response, or a (value, status) tuple."
            )
            raise TypeError(msg)


def error_response(exc: HTTPError, *, ensure_ascii: bool = False) -> Response:
    """The structured JSON body for an HTTPError, with its headers."""
    response = json_response(exc.to_payload(), status=exc.status, ensure_ascii=ensure_ascii)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response
