"""Tests for restroute.cli._resolve — RestApp import resolution."""

import sys
import types

import pytest

from restroute.app import RestApp
from restroute.cli._resolve import resolve_app


def _factory() -> RestApp:
    return RestApp()


def _failing_factory() -> RestApp:
    msg = "no config"
    raise RuntimeError(msg)


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a RestApp on sys.modules."""
    mod = types.ModuleType("_fake_resolve_app")
    mod.app = RestApp()  # type: ignore[attr-defined]
    mod.custom = RestApp()  # type: ignore[attr-defined]
    mod.create_app = _factory  # type: ignore[attr-defined]
    mod.failing = _failing_factory  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_resolve_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_resolve_app:app"), RestApp)

    def test_custom_attribute(self) -> None:
        app = resolve_app("_fake_resolve_app:custom")
        assert app is sys.modules["_fake_resolve_app"].custom

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        app = resolve_app("_fake_resolve_app")
        assert app is sys.modules["_fake_resolve_app"].app

    def test_factory(self) -> None:
        assert isinstance(resolve_app("_fake_resolve_app:create_app"), RestApp)

    def test_failing_factory(self) -> None:
        with pytest.raises(TypeError, match="raised an error: no config"):
            resolve_app("_fake_resolve_app:failing")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_resolve_app:does_not_exist")

    def test_not_an_app(self) -> None:
        with pytest.raises(TypeError, match="not a restroute.RestApp"):
            resolve_app("_fake_resolve_app:not_an_app")
