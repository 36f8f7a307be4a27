"""restroute exception hierarchy.

Shared across Route, RouteRegistry, Dispatcher, and the app so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class RestRouteError(Exception):
    """Base for all restroute-specific errors."""


class ConfigurationError(RestRouteError):
    """Raised when a route declaration or app configuration is invalid.

    Surfaces at registration time and should halt initialization.
    """


class PatternError(ConfigurationError):
    """Raised when a path template has a malformed placeholder."""


@dataclass(frozen=True, slots=True)
class HTTPError(RestRouteError):
    """An error that maps directly to an HTTP status code.

    Produced by the validation pipeline, or raised by handlers. The app
    turns these into a JSON ``{"message": ..., "status": ...}`` payload.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

    def to_payload(self) -> dict[str, Any]:
        """The structured body sent to the client."""
        return {"message": self.detail or f"Error {self.status}", "status": self.status}


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not found!") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """403 — the route matched but does not accept the request method.

    Sent as 403 rather than 405, and without an ``Allow`` header: the
    allowed verbs of a protected route are not advertised.
    """

    def __init__(self, method: str, detail: str = "") -> None:
        super().__init__(status=403, detail=detail or f'Method "{method}" not allowed!')


class Forbidden(HTTPError):  # noqa: N818
    """403 — the caller is anonymous or lacks the route's permission."""

    def __init__(self, detail: str = "Only authenticated users can access the REST API") -> None:
        super().__init__(status=403, detail=detail)


class BadRequest(HTTPError):  # noqa: N818
    """400 — a path parameter failed its declared type check."""

    def __init__(self, param: str, detail: str = "") -> None:
        super().__init__(status=400, detail=detail or f'Invalid parameter type for "{param}"!')
