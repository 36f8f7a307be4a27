"""restroute application class.

Mutable during setup (route registration, base-route hooks).
Frozen at runtime when ``dispatch()``, ``handle_routes()`` or ``__call__()``
is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from restroute._internal.asgi import ASGIApp, Receive, Scope, Send
from restroute.config import RestConfig
from restroute.errors import ConfigurationError
from restroute.http.request import Request
from restroute.http.response import Response
from restroute.routing.dispatcher import (
    DispatchResult,
    Dispatcher,
    Matched,
    NotApplicable,
    ParamReader,
    read_path_param,
)
from restroute.routing.pattern import is_segment_value
from restroute.routing.registry import RouteRegistry
from restroute.routing.route import RequestContext, Route
from restroute.security.identity import User
from restroute.server.negotiation import error_response, negotiate

logger = logging.getLogger("restroute.app")

# Identity provider: (request) -> the current caller, or None when anonymous
IdentityProvider: TypeAlias = Callable[[Request], User | None]

# Response sink for non-ASGI hosts: receives the response to emit
ResponseSink: TypeAlias = Callable[[Response], None]


def read_path_or_query_param(context: RequestContext, name: str) -> Any:
    """Reader that falls back to the query string when no path value exists."""
    value = read_path_param(context, name)
    if value is None and isinstance(context.request, Request):
        value = context.request.query.get(name)
    return value


class RestApp:
    """The restroute application: one registry, one dispatcher.

    Usage::

        from restroute import RestApp, RestConfig

        app = RestApp(RestConfig(base_route="api"))

        @app.route("items/{id}", methods=["GET"], validations={"id": "int"})
        def show_item(ctx):
            return {"id": ctx.param("id", "int")}

    ``app`` is an ASGI application. Hosts that are not ASGI call
    ``handle_routes(method, uri, sink)`` once per request instead.

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread resolves the base route
        and freezes the registry, even if several workers receive their
        first request at once. After that the registry is read-only.
    """

    __slots__ = (
        "_base_route",
        "_base_route_hooks",
        "_dispatcher",
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_identity",
        "config",
        "registry",
    )

    def __init__(
        self,
        config: RestConfig | None = None,
        *,
        identity: IdentityProvider | None = None,
        fallback: ASGIApp | None = None,
    ) -> None:
        self.config: RestConfig = config or RestConfig()
        self.registry = RouteRegistry()
        self._dispatcher = Dispatcher(
            self.registry, not_found_message=self.config.not_found_message
        )
        self._identity = identity
        self._fallback = fallback
        self._base_route_hooks: list[Callable[[str], str]] = []
        self._base_route: str = self.config.normalized_base_route
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def register_route(self, args: Mapping[str, Any] | None = None, **kwargs: Any) -> Route:
        """Declare one route from a mapping and/or keyword arguments.

        Keys: ``route``, ``methods``, ``callback`` (or ``handler``),
        ``permission``, ``validations``, ``name``::

            app.register_route({
                "route": "items/{id}",
                "methods": ["GET"],
                "callback": show_item,
                "validations": {"id": "int"},
            })

        Raises ``ConfigurationError`` if the declaration is invalid; the
        route is not added in that case.
        """
        self._check_not_frozen()
        route = Route.from_args({**(args or {}), **kwargs})
        self.registry.register(route)
        return route

    def route(
        self,
        path: str,
        *,
        methods: list[str] | tuple[str, ...] = ("GET",),
        permission: str = "",
        validations: Mapping[str, str] | None = None,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register the decorated function as the handler of a route."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register_route(
                route=path,
                methods=list(methods),
                callback=func,
                permission=permission,
                validations=dict(validations or {}),
                name=name,
            )
            return func

        return decorator

    def base_route_hook(self, func: Callable[[str], str]) -> Callable[[str], str]:
        """Register a hook that may rewrite the base route at freeze time.

        Hooks run in registration order; each receives the current value
        and returns the new one::

            @app.base_route_hook
            def versioned(base: str) -> str:
                return "api-v2" if settings.v2 else base
        """
        self._check_not_frozen()
        self._base_route_hooks.append(func)
        return func

    @property
    def base_route(self) -> str:
        """The effective base route (final once the app is frozen)."""
        return self._base_route

    @property
    def routes(self) -> tuple[Route, ...]:
        return self.registry.all()

    # -- Dispatch --

    def dispatch(
        self,
        method: str,
        path: str,
        *,
        user: User | None = None,
        request: Request | None = None,
    ) -> DispatchResult:
        """Dispatch one request through the registry. Handlers run here."""
        self._ensure_frozen()
        return self._dispatcher.dispatch(
            self._base_route,
            method,
            path,
            self._param_reader(),
            user=user,
            request=request,
        )

    def handle_routes(
        self,
        method: str,
        uri: str,
        sink: ResponseSink,
        *,
        user: User | None = None,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> DispatchResult:
        """Entry point for non-ASGI hosts, called once per request.

        Gates on the base route, dispatches, and emits the response through
        *sink*. Nothing is emitted for ``NotApplicable``; the host should
        fall through to its own handling. For any other result the request
        is answered and the host should stop processing it.

        Exceptions raised by a handler (other than ``HTTPError``) propagate
        to the host.
        """
        request = Request.from_uri(method, uri, headers=headers, body=body)
        if user is None and self.is_routable(request.path):
            user = self.identify(request)

        result = self.dispatch(request.method, request.path, user=user, request=request)
        response = self.build_response(result)
        if response is not None:
            sink(response)
        return result

    def build_response(self, result: DispatchResult) -> Response | None:
        """Turn a dispatch result into the response to emit.

        Returns ``None`` for ``NotApplicable``.
        """
        match result:
            case NotApplicable():
                return None
            case Matched(value=value):
                if inspect.isawaitable(value):
                    if inspect.iscoroutine(value):
                        value.close()
                    msg = (
                        f"Handler {result.route.handler_name} returned an awaitable. "
                        "Async handlers need the ASGI entry point."
                    )
                    raise ConfigurationError(msg)
                return negotiate(value, ensure_ascii=self.config.json_ensure_ascii)
            case _:
                return error_response(result.error, ensure_ascii=self.config.json_ensure_ascii)

    def identify(self, request: Request) -> User | None:
        """Resolve the current caller with the configured identity provider."""
        if self._identity is None:
            return None
        return self._identity(request)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, then delegates HTTP scopes to the
        request handler. Paths outside the base route go to ``fallback``.
        """
        from restroute.server.handler import handle_lifespan, handle_request

        if scope["type"] == "lifespan":
            if self._fallback is not None:
                self._ensure_frozen()
                await self._fallback(scope, receive, send)
                return
            await handle_lifespan(self, receive, send)
            return

        if scope["type"] != "http":
            if self._fallback is not None:
                await self._fallback(scope, receive, send)
            return

        self._ensure_frozen()
        await handle_request(self, scope, receive, send, fallback=self._fallback)

    def is_routable(self, path: str) -> bool:
        """Whether *path* falls under the base route."""
        self._ensure_frozen()
        return self._dispatcher.applies(self._base_route, path)

    # -- Internal --

    def _param_reader(self) -> ParamReader:
        if self.config.validate_query_params:
            return read_path_or_query_param
        return read_path_param

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Resolve the base route and freeze the registry.

        MUST only be called while holding _freeze_lock.
        """
        base_route = self.config.normalized_base_route
        for hook in self._base_route_hooks:
            base_route = hook(base_route)
            if not isinstance(base_route, str):
                msg = f"Base route hook {hook!r} returned {type(base_route).__name__}, not str"
                raise ConfigurationError(msg)
            base_route = base_route.strip("/")
        if "/" in base_route:
            msg = f"Base route {base_route!r} must be a single path segment"
            raise ConfigurationError(msg)
        if base_route and not is_segment_value(base_route):
            msg = (
                f"Base route {base_route!r} may only contain letters, digits, '_' and '-'"
            )
            raise ConfigurationError(msg)

        self._base_route = base_route
        self.registry.freeze()
        self._frozen = True

        if base_route:
            logger.debug("Routing %d route(s) under /%s", len(self.registry), base_route)
        else:
            logger.debug("Base route is empty; routing is disabled")

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started handling requests. "
                "Register routes and hooks before the first dispatch."
            )
            raise ConfigurationError(msg)


