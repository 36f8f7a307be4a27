"""Tests for restroute.routing.registry — ordered route registry."""

import pytest

from restroute.errors import ConfigurationError
from restroute.routing.registry import RouteRegistry
from restroute.routing.route import Route


def _handler(ctx: object) -> str:
    return "ok"


def _route(path: str) -> Route:
    return Route(path=path, methods=frozenset({"GET"}), handler=_handler)


class TestRouteRegistry:
    def test_empty(self) -> None:
        registry = RouteRegistry()
        assert len(registry) == 0
        assert registry.all() == ()
        assert registry.frozen is False

    def test_preserves_registration_order(self) -> None:
        registry = RouteRegistry()
        routes = [_route("b"), _route("a"), _route("c")]
        for route in routes:
            registry.register(route)
        assert [r.path for r in registry] == ["b", "a", "c"]
        assert registry.all() == tuple(routes)

    def test_keeps_duplicates(self) -> None:
        registry = RouteRegistry()
        first, second = _route("items/{id}"), _route("items/{id}")
        registry.register(first)
        registry.register(second)
        assert len(registry) == 2
        assert registry.all()[0] is first

    def test_register_after_freeze(self) -> None:
        registry = RouteRegistry()
        registry.freeze()
        with pytest.raises(ConfigurationError, match="after dispatch has started"):
            registry.register(_route("items"))

    def test_freeze_is_idempotent(self) -> None:
        registry = RouteRegistry()
        registry.freeze()
        registry.freeze()
        assert registry.frozen is True

    def test_all_returns_snapshot(self) -> None:
        registry = RouteRegistry()
        snapshot = registry.all()
        registry.register(_route("items"))
        assert snapshot == ()

    def test_repr(self) -> None:
        registry = RouteRegistry()
        registry.register(_route("items"))
        assert repr(registry) == "<RouteRegistry routes=1 frozen=False>"
