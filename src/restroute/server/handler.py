"""ASGI handler — translates ASGI scope/messages to restroute types.

The only component that touches raw ASGI directly. Converts scope dicts
to Request objects, runs dispatch in a worker thread, and sends the
Response back through ASGI send().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from anyio import to_thread

from restroute._internal.asgi import ASGIApp, Receive, Scope, Send, read_body
from restroute._internal.invoke import resolve
from restroute.errors import HTTPError
from restroute.http.request import Request
from restroute.http.response import Response, json_response
from restroute.routing.dispatcher import DispatchResult, Matched
from restroute.security.identity import User
from restroute.server.negotiation import error_response, negotiate
from restroute.server.sender import send_response

if TYPE_CHECKING:
    from restroute.app import RestApp

logger = logging.getLogger("restroute.server")


async def handle_request(
    app: RestApp,
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    fallback: ASGIApp | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if not app.is_routable(scope["path"]):
        if fallback is not None:
            await fallback(scope, receive, send)
            return
        await send_response(Response(body="Not Found", status=404), send)
        return

    body = await read_body(receive)
    request = Request.from_asgi(dict(scope), body)

    try:
        user: User | None = await resolve(app.identify(request))
        result: DispatchResult = await to_thread.run_sync(
            _dispatch, app, request, user
        )
        response = await _build_response(app, result)
    except HTTPError as exc:
        response = error_response(exc, ensure_ascii=app.config.json_ensure_ascii)
    except Exception as exc:
        response = _internal_error(app, request, exc)

    if response is None:
        response = Response(body="Not Found", status=404)
    await send_response(response, send)


def _dispatch(app: RestApp, request: Request, user: User | None) -> DispatchResult:
    return app.dispatch(request.method, request.path, user=user, request=request)


async def _build_response(app: RestApp, result: DispatchResult) -> Response | None:
    """Settle an async handler's result on the event loop, then negotiate."""
    if isinstance(result, Matched):
        try:
            value = await resolve(result.value)
        except HTTPError as exc:
            value = exc
        return negotiate(value, ensure_ascii=app.config.json_ensure_ascii)
    return app.build_response(result)


def _internal_error(app: RestApp, request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    message = "Internal Server Error"
    if app.config.debug:
        message = f"{type(exc).__name__}: {exc}"
    return json_response(
        {"message": message, "status": 500},
        status=500,
        ensure_ascii=app.config.json_ensure_ascii,
    )


async def handle_lifespan(app: RestApp, receive: Receive, send: Send) -> None:
    """Run the ASGI lifespan protocol.

    Freezes the app at startup (before the first HTTP request), so a bad
    base-route hook fails startup instead of the first request.
    """
    while True:
        message = await receive()
        msg_type = message["type"]

        if msg_type == "lifespan.startup":
            try:
                app._ensure_frozen()
            except Exception as exc:
                await send({"type": "lifespan.startup.failed", "message": str(exc)})
                return
            await send({"type": "lifespan.startup.complete"})

        elif msg_type == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
