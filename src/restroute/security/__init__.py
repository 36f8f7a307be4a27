"""Caller identity, permission checks, and authorization audit events."""

from restroute.security.audit import (
    PERMISSION_DENIED,
    UNAUTHENTICATED,
    SecurityEvent,
    emit_security_event,
    set_security_event_sink,
)
from restroute.security.identity import (
    ADMIN_PERMISSION,
    ANONYMOUS,
    AnonymousUser,
    StaticUser,
    User,
    check_permission,
)

__all__ = [
    "ADMIN_PERMISSION",
    "ANONYMOUS",
    "PERMISSION_DENIED",
    "UNAUTHENTICATED",
    "AnonymousUser",
    "SecurityEvent",
    "StaticUser",
    "User",
    "check_permission",
    "emit_security_event",
    "set_security_event_sink",
]
