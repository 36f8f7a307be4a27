"""Tests for restroute.security — permission checks and audit events."""

from collections.abc import Iterator

import pytest

from restroute.http.request import Request
from restroute.security import (
    ANONYMOUS,
    PERMISSION_DENIED,
    UNAUTHENTICATED,
    SecurityEvent,
    StaticUser,
    User,
    check_permission,
    emit_security_event,
    set_security_event_sink,
)


@pytest.fixture
def events() -> Iterator[list[SecurityEvent]]:
    collected: list[SecurityEvent] = []
    previous = set_security_event_sink(collected.append)
    yield collected
    set_security_event_sink(previous)


class TestUsers:
    def test_anonymous(self) -> None:
        assert ANONYMOUS.is_authenticated is False
        assert ANONYMOUS.has_perm("items[]") is False

    def test_static_user(self) -> None:
        user = StaticUser(id="1", permissions=frozenset({"items[]"}))
        assert user.is_authenticated is True
        assert user.has_perm("items[]") is True
        assert user.has_perm("users[]") is False

    def test_admin_holds_every_permission(self) -> None:
        assert StaticUser(id="1", is_admin=True).has_perm("anything") is True

    def test_protocol(self) -> None:
        assert isinstance(StaticUser(id="1"), User)
        assert isinstance(ANONYMOUS, User)


class TestCheckPermission:
    def test_empty_permission_is_public(self) -> None:
        assert check_permission(None, "") is True

    def test_no_user(self) -> None:
        assert check_permission(None, "items[]") is False

    def test_anonymous(self) -> None:
        assert check_permission(ANONYMOUS, "items[]") is False

    def test_granted(self) -> None:
        user = StaticUser(id="1", permissions=frozenset({"items[]"}))
        assert check_permission(user, "items[]") is True

    def test_admin_tag(self) -> None:
        assert check_permission(StaticUser(id="1", is_admin=True), "admin") is True
        assert check_permission(StaticUser(id="1", permissions=frozenset({"admin"})), "admin") is False

    def test_denial_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="restroute.security"):
            check_permission(StaticUser(id="7"), "items[]")
        assert "User 7 missing permission: items[]" in caplog.text


class TestSecurityEvents:
    def test_emit_without_sink(self) -> None:
        previous = set_security_event_sink(None)
        try:
            event = emit_security_event(UNAUTHENTICATED, "items[]")
        finally:
            set_security_event_sink(previous)
        assert event.name == UNAUTHENTICATED
        assert event.path is None

    def test_set_sink_returns_previous(self) -> None:
        first: list[SecurityEvent] = []
        original = set_security_event_sink(first.append)
        try:
            assert set_security_event_sink(None) == first.append
        finally:
            set_security_event_sink(original)

    def test_unauthenticated_event(self, events: list[SecurityEvent]) -> None:
        request = Request.from_uri("GET", "/api/items/1")

        check_permission(None, "items[]", request=request)

        assert [e.name for e in events] == [UNAUTHENTICATED]
        assert events[0].path == "/api/items/1"
        assert events[0].method == "GET"
        assert events[0].permission == "items[]"
        assert events[0].user_id is None

    def test_permission_denied_event(self, events: list[SecurityEvent]) -> None:
        check_permission(StaticUser(id="9"), "items[]")

        assert [e.name for e in events] == [PERMISSION_DENIED]
        assert events[0].user_id == "9"
        assert events[0].as_dict()["permission"] == "items[]"

    def test_granted_emits_nothing(self, events: list[SecurityEvent]) -> None:
        check_permission(StaticUser(id="1", is_admin=True), "items[]")
        assert events == []
