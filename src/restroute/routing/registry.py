"""Ordered route registry.

Routes are registered during setup and frozen before the first dispatch.
Order is significant: the dispatcher takes the first structural match.
"""

import logging
from collections.abc import Iterator

from restroute.errors import ConfigurationError
from restroute.routing.route import Route

logger = logging.getLogger("restroute.routing")


class RouteRegistry:
    """Insertion-ordered collection of routes.

    No deduplication and no conflict detection: two routes with the same
    template are both kept, and the one registered first wins at dispatch.
    Register more specific routes first when templates overlap.

    Usage::

        registry = RouteRegistry()
        registry.register(Route("items/{id}", frozenset({"GET"}), show_item))
        registry.freeze()
        for route in registry:
            ...
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    def register(self, route: Route) -> None:
        """Append *route*. Must be called before ``freeze()``."""
        if self._frozen:
            msg = f"Cannot register route {route.path!r} after dispatch has started."
            raise ConfigurationError(msg)
        self._routes.append(route)
        logger.debug(
            "Registered route %s [%s]", route.path or "/", ", ".join(sorted(route.methods))
        )

    def all(self) -> tuple[Route, ...]:
        """Return the routes in registration order."""
        return tuple(self._routes)

    def freeze(self) -> None:
        """Forbid further registration. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __iter__(self) -> Iterator[Route]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteRegistry routes={len(self._routes)} frozen={self._frozen}>"
