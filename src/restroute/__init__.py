"""restroute — a route registry and dispatcher for JSON APIs.

Declare routes with a path template, allowed methods, a permission tag and
parameter-type constraints. Each request is matched against the routes in
registration order; the first structural match is validated and its
handler runs exactly once.

Basic usage::

    from restroute import RestApp, RestConfig

    app = RestApp(RestConfig(base_route="api"))

    @app.route("items/{id}", methods=["GET"], validations={"id": "int"})
    def show_item(ctx):
        return {"id": ctx.param("id", "int")}

``app`` is an ASGI application; non-ASGI hosts call
``app.handle_routes(method, uri, sink)`` per request.
"""

__version__ = "0.1.0"
__all__ = [
    "BadRequest",
    "ConfigurationError",
    "DispatchResult",
    "Dispatcher",
    "Forbidden",
    "HTTPError",
    "Matched",
    "MethodNotAllowed",
    "NotApplicable",
    "NotFound",
    "PathPattern",
    "PatternError",
    "Rejected",
    "RequestContext",
    "Response",
    "RestApp",
    "RestConfig",
    "RestRouteError",
    "Route",
    "RouteNotFound",
    "RouteRegistry",
]

_LAZY_IMPORTS: dict[str, str] = {
    "RestApp": "restroute.app",
    "RestConfig": "restroute.config",
    "Response": "restroute.http.response",
    "PathPattern": "restroute.routing.pattern",
    "Route": "restroute.routing.route",
    "RequestContext": "restroute.routing.route",
    "RouteRegistry": "restroute.routing.registry",
    "Dispatcher": "restroute.routing.dispatcher",
    "DispatchResult": "restroute.routing.dispatcher",
    "Matched": "restroute.routing.dispatcher",
    "Rejected": "restroute.routing.dispatcher",
    "RouteNotFound": "restroute.routing.dispatcher",
    "NotApplicable": "restroute.routing.dispatcher",
    "RestRouteError": "restroute.errors",
    "ConfigurationError": "restroute.errors",
    "PatternError": "restroute.errors",
    "HTTPError": "restroute.errors",
    "NotFound": "restroute.errors",
    "MethodNotAllowed": "restroute.errors",
    "Forbidden": "restroute.errors",
    "BadRequest": "restroute.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import restroute`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
