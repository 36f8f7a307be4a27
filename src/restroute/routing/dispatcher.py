"""Request dispatch — ordered matching, validation, and handler invocation.

The dispatcher walks the registry in registration order, selects the
first route whose full path (base route + template) structurally matches
the request, then runs a fixed validation pipeline:

    1. method      -> MethodNotAllowed (403)
    2. permission  -> Forbidden (403)
    3. param types -> BadRequest (400)

The first failure ends dispatch. On success the handler runs exactly once.
Nothing here raises for a failed match or a failed validation; every
outcome is a ``DispatchResult`` the host turns into a response.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, TypeAlias

from restroute.errors import BadRequest, Forbidden, HTTPError, MethodNotAllowed, NotFound
from restroute.routing.params import validate_param
from restroute.routing.pattern import PathPattern
from restroute.routing.registry import RouteRegistry
from restroute.routing.route import RequestContext, Route
from restroute.security.identity import User, check_permission

logger = logging.getLogger("restroute.routing")

# Reads a parameter for the type check: (context, name) -> value or None
ParamReader: TypeAlias = Callable[[RequestContext, str], Any]


def read_path_param(context: RequestContext, name: str) -> Any:
    """Default reader: the value extracted from the request path."""
    return context.path_params.get(name)


# -- Results --


@dataclass(frozen=True, slots=True)
class Matched:
    """A route was selected, validated, and its handler ran."""

    route: Route
    context: RequestContext
    value: Any = None


@dataclass(frozen=True, slots=True)
class Rejected:
    """A route was selected but failed validation. No handler ran."""

    route: Route
    error: HTTPError

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def payload(self) -> dict[str, Any]:
        return self.error.to_payload()


@dataclass(frozen=True, slots=True)
class RouteNotFound:
    """The path was routable but no registered route matched it."""

    error: HTTPError = field(default_factory=NotFound)

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def payload(self) -> dict[str, Any]:
        return self.error.to_payload()


@dataclass(frozen=True, slots=True)
class NotApplicable:
    """Routing is disabled or the path is outside the base route."""

    reason: str = ""


DispatchResult: TypeAlias = Matched | Rejected | RouteNotFound | NotApplicable


# -- Path helpers --


def current_path(path: str) -> str:
    """Normalize a request path for matching: no surrounding slashes."""
    return path.strip("/")


@lru_cache(maxsize=1024)
def _full_pattern(pattern: PathPattern, base_route: str) -> PathPattern:
    return pattern.join(base_route)


def match_route(route: Route, base_route: str, path: str) -> dict[str, str] | None:
    """Return the extracted params if *route* structurally matches *path*.

    A template without placeholders matches only by exact equality of
    the full path.
    """
    pattern = _full_pattern(route.pattern, base_route)
    if pattern.template == path:
        return {}
    if pattern.is_static:
        return None
    return pattern.match(path)


# -- Dispatcher --


class Dispatcher:
    """Match requests against a ``RouteRegistry`` and run the winner.

    The registry is only read. Concurrent dispatches are safe as long as
    registration finished before the first one.

    Usage::

        dispatcher = Dispatcher(registry)
        result = dispatcher.dispatch("api", "GET", "/api/items/42")
        match result:
            case Matched(value=value): ...
            case Rejected() | RouteNotFound(): send(result.payload, result.status)
            case NotApplicable(): fall_through()
    """

    __slots__ = ("not_found_message", "registry")

    def __init__(
        self, registry: RouteRegistry, *, not_found_message: str = "Not found!"
    ) -> None:
        self.registry = registry
        self.not_found_message = not_found_message

    def dispatch(
        self,
        base_route: str,
        method: str,
        path: str,
        read_param: ParamReader | None = None,
        *,
        user: User | None = None,
        request: Any = None,
    ) -> DispatchResult:
        """Dispatch one request. See the module docstring for the pipeline."""
        base_route = base_route.strip("/")
        if not base_route:
            return NotApplicable("routing disabled")
        if not self.applies(base_route, path):
            return NotApplicable(f"outside base route {base_route!r}")

        path = current_path(path)
        selected = self.select(base_route, path)
        if selected is None:
            logger.debug("404 %s /%s: no route matched", method, path)
            return RouteNotFound(NotFound(self.not_found_message))

        route, params = selected
        context = RequestContext(
            route=route,
            path_params=params,
            method=method.upper(),
            path=path,
            user=user,
            request=request,
        )

        error = self.validate(route, context, read_param or read_path_param)
        if error is not None:
            logger.debug("%d %s /%s: %s", error.status, context.method, path, error.detail)
            return Rejected(route=route, error=error)

        logger.debug("%s /%s -> %s", context.method, path, route.handler_name)
        try:
            value = route.invoke(context)
        except HTTPError as exc:
            # The handler answered with an error of its own
            value = exc
        return Matched(route=route, context=context, value=value)

    @staticmethod
    def applies(base_route: str, path: str) -> bool:
        """Whether the first segment of *path* is *base_route*.

        An empty base route never applies.
        """
        base_route = base_route.strip("/")
        if not base_route:
            return False
        return current_path(path).split("/", 1)[0] == base_route

    def select(self, base_route: str, path: str) -> tuple[Route, dict[str, str]] | None:
        """Return the first route structurally matching *path*, with its params."""
        for route in self.registry:
            params = match_route(route, base_route, path)
            if params is not None:
                return route, params
        return None

    def validate(
        self,
        route: Route,
        context: RequestContext,
        read_param: ParamReader,
    ) -> HTTPError | None:
        """Run the validation pipeline; return the first failure, if any."""
        if context.method not in route.methods:
            return MethodNotAllowed(context.method)

        if not check_permission(context.user, route.permission, request=context.request):
            return Forbidden()

        for name, param_type in route.validations.items():
            value = read_param(context, name)
            if value is None:
                continue
            if not validate_param(param_type, value):
                return BadRequest(name)

        return None
