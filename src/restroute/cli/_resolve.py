"""App import resolution — resolves ``"module:attribute"`` strings to RestApp instances."""

import importlib

from restroute.app import RestApp


def resolve_app(import_string: str) -> RestApp:
    """Resolve an import string to a RestApp instance.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"app"`` (``"myapp"`` resolves to ``myapp.app``).
    A callable that is not a RestApp is treated as a factory and called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a RestApp.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, RestApp):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, RestApp):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a restroute.RestApp"
        raise TypeError(msg)

    return obj
