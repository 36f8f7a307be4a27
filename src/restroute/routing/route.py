"""Route and RequestContext frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from restroute.errors import ConfigurationError
from restroute.routing.params import VALIDATORS, cast_param
from restroute.routing.pattern import PathPattern

if TYPE_CHECKING:
    from restroute.http.response import Response
    from restroute.security.identity import User

ALLOWED_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE"})


@runtime_checkable
class RouteHandler(Protocol):
    """Object-style handler: anything with a ``handle(context)`` method."""

    def handle(self, context: RequestContext) -> Any: ...


def resolve_handler(handler: Any) -> Callable[[RequestContext], Any]:
    """Return the callable to invoke for *handler*.

    Accepts a plain callable or an object exposing a callable ``handle``.
    Raises ``ConfigurationError`` for anything else.
    """
    is_object = not isinstance(handler, type)
    if is_object and isinstance(handler, RouteHandler) and callable(handler.handle):
        return handler.handle
    if callable(handler):
        return handler
    msg = f"Callback {handler!r} is not callable!"
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route declaration.

    Created at registration time and owned by a ``RouteRegistry``::

        Route(
            path="items/{id}",
            methods=frozenset({"GET"}),
            handler=show_item,
            permission="items[]",
            validations={"id": "int"},
        )

    Construction fails with ``ConfigurationError`` when the path is missing,
    the methods are empty or contain a verb outside GET/POST/PUT/DELETE,
    the handler is not invocable, or a validation names an unknown type.
    """

    path: str
    methods: frozenset[str]
    handler: Any
    permission: str = ""
    validations: Mapping[str, str] = field(default_factory=dict)
    name: str | None = None
    pattern: PathPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path, str):
            msg = "Route must be defined"
            raise ConfigurationError(msg)

        if isinstance(self.methods, str):
            object.__setattr__(self, "methods", frozenset({self.methods}))
        if not self.methods:
            msg = "At least one method must be defined"
            raise ConfigurationError(msg)
        for method in self.methods:
            if method not in ALLOWED_METHODS:
                msg = f'Method "{method}" not allowed!'
                raise ConfigurationError(msg)

        if self.handler is None or self.handler == "":
            msg = "A callback must be defined"
            raise ConfigurationError(msg)
        resolve_handler(self.handler)

        if self.validations is None:
            object.__setattr__(self, "validations", {})
        for param_name, param_type in self.validations.items():
            if param_type not in VALIDATORS:
                msg = (
                    f'Unknown validation type "{param_type}" for "{param_name}". '
                    f"Expected one of: {', '.join(sorted(VALIDATORS))}"
                )
                raise ConfigurationError(msg)

        object.__setattr__(self, "path", self.path.strip("/"))
        object.__setattr__(self, "methods", frozenset(self.methods))
        object.__setattr__(self, "permission", self.permission or "")
        object.__setattr__(self, "validations", dict(self.validations))
        object.__setattr__(self, "pattern", PathPattern.compile(self.path))

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> Route:
        """Build a Route from a declaration mapping.

        Recognized keys: ``route``, ``methods``, ``callback`` (or
        ``handler``), ``permission``, ``validations``, ``name``.
        """
        if not args:
            msg = "Route arguments must not be empty"
            raise ConfigurationError(msg)
        if "route" not in args or args["route"] is None:
            msg = "Route must be defined"
            raise ConfigurationError(msg)

        handler = args.get("callback", args.get("handler"))
        methods = args.get("methods") or ()
        return cls(
            path=args["route"],
            methods=frozenset({methods} if isinstance(methods, str) else methods),
            handler=handler,
            permission=args.get("permission") or "",
            validations=args.get("validations") or {},
            name=args.get("name"),
        )

    def invoke(self, context: RequestContext) -> Any:
        """Call the handler once with *context*."""
        return resolve_handler(self.handler)(context)

    @property
    def handler_name(self) -> str:
        target = self.handler
        return getattr(target, "__qualname__", None) or type(target).__name__


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Everything a handler learns about the request it is serving.

    Created fresh per dispatch and discarded afterwards.
    """

    route: Route
    path_params: dict[str, str]
    method: str
    path: str
    user: User | None = None
    request: Any = None

    @property
    def params(self) -> dict[str, str]:
        """A copy of the extracted path parameters."""
        return dict(self.path_params)

    def param(self, key: str, param_type: str = "", default: Any = None) -> Any:
        """Return the path parameter *key*, cast to *param_type*.

        Returns *default* when the parameter was not extracted.
        """
        if key not in self.path_params:
            return default
        return cast_param(self.path_params[key], param_type)

    def send_content(self, content: Any, status: int = 200) -> Response:
        """Build a JSON response for *content*."""
        from restroute.http.response import json_response

        return json_response(content, status=status)

    def send_error(self, message: str, status: int) -> Response:
        """Build a JSON ``{"message", "status"}`` error response."""
        from restroute.http.response import json_response

        return json_response({"message": message, "status": status}, status=status)
