"""Caller identity and permission checks.

restroute does not authenticate anyone. The host supplies the current
caller as any object satisfying ``User``; the dispatcher only asks whether
it is authenticated and whether it holds a route's permission tag.

Usage::

    from restroute.security import StaticUser

    def identify(request):
        token = request.headers.get("authorization")
        return StaticUser(id="42", permissions=frozenset({"items[]"})) if token else None

    app = RestApp(RestConfig(base_route="api"), identity=identify)
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from restroute.security.audit import PERMISSION_DENIED, UNAUTHENTICATED, emit_security_event

_log = logging.getLogger("restroute.security")

# Permission tag that is satisfied by administrators only
ADMIN_PERMISSION = "admin"


@runtime_checkable
class User(Protocol):
    """Minimal caller protocol.

    Developers bring their own user model (ORM class, dataclass, ...).
    """

    @property
    def id(self) -> str: ...

    @property
    def is_authenticated(self) -> bool: ...

    @property
    def is_admin(self) -> bool: ...

    def has_perm(self, permission: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class AnonymousUser:
    """Sentinel for unauthenticated requests. Holds no permissions."""

    id: str = ""
    is_authenticated: bool = False
    is_admin: bool = False

    def has_perm(self, permission: str) -> bool:  # noqa: ARG002
        return False


@dataclass(frozen=True, slots=True)
class StaticUser:
    """An authenticated caller with a fixed permission set.

    Administrators hold every permission.
    """

    id: str
    permissions: frozenset[str] = frozenset()
    is_admin: bool = False
    is_authenticated: bool = True

    def has_perm(self, permission: str) -> bool:
        return self.is_admin or permission in self.permissions


ANONYMOUS = AnonymousUser()


def check_permission(user: User | None, permission: str, *, request: Any = None) -> bool:
    """Return whether *user* may access a route guarded by *permission*.

    An empty permission means the route is public. Otherwise the caller
    must be authenticated and hold the tag; the reserved ``admin`` tag
    requires ``user.is_admin``.
    """
    if not permission:
        return True

    if user is None or not user.is_authenticated:
        emit_security_event(UNAUTHENTICATED, permission, request=request)
        return False

    if permission == ADMIN_PERMISSION:
        allowed = bool(user.is_admin)
    else:
        allowed = bool(user.has_perm(permission))

    if not allowed:
        _log.warning("User %s missing permission: %s", user.id, permission)
        emit_security_event(PERMISSION_DENIED, permission, request=request, user_id=user.id)
    return allowed
