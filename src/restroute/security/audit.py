"""Authorization audit events.

Every denial made by the permission check is reported here. Install a sink
to forward them to logs, metrics, or SIEM; with no sink installed they are
only logged at DEBUG.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from time import time
from typing import Any, TypeAlias

_log = logging.getLogger("restroute.security")

UNAUTHENTICATED = "authz.unauthenticated"
PERMISSION_DENIED = "authz.permission.denied"


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """One denied access to a permission-guarded route."""

    name: str
    permission: str
    user_id: str | None = None
    method: str | None = None
    path: str | None = None
    timestamp: float = field(default_factory=time)

    def as_dict(self) -> dict[str, Any]:
        """Plain-dict form, for JSON log lines."""
        return asdict(self)


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> SecurityEventSink | None:
    """Install the process-wide sink and return the one it replaces.

    Pass ``None`` to stop delivery::

        previous = set_security_event_sink(events.append)
        try:
            ...
        finally:
            set_security_event_sink(previous)
    """
    global _sink
    with _sink_lock:
        previous, _sink = _sink, sink
    return previous


def emit_security_event(
    name: str,
    permission: str,
    *,
    request: Any | None = None,
    user_id: str | None = None,
) -> SecurityEvent:
    """Record a denial and hand it to the sink, if one is installed.

    *request* is anything with ``method`` and ``path`` attributes; the
    dispatcher passes the ``Request`` it is serving, or ``None``.
    """
    event = SecurityEvent(
        name=name,
        permission=permission,
        user_id=user_id,
        method=getattr(request, "method", None),
        path=getattr(request, "path", None),
    )
    _log.debug("%s permission=%s user=%s", name, permission, user_id or "-")

    with _sink_lock:
        sink = _sink
    if sink is not None:
        sink(event)
    return event
