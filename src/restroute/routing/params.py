"""Parameter type checks and casting.

Built-in validators for route constraints like ``validations={"id": "int"}``.
"""

import re
from collections.abc import Callable
from typing import Any

_INT_RE = re.compile(r"\s*[+-]?(?:0|[1-9][0-9]*)\s*")
_NUMBER_RE = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")

BOOL_TOKENS = frozenset({"true", "false", "1", "0"})


def is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and _INT_RE.fullmatch(value) is not None


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and _NUMBER_RE.fullmatch(value) is not None


def is_string(value: Any) -> bool:  # noqa: ARG001
    return True


def is_bool(value: Any) -> bool:
    return isinstance(value, bool) or (isinstance(value, str) and value in BOOL_TOKENS)


# Declared type name -> check. "boolean" is accepted as an alias of "bool".
VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "int": is_int,
    "number": is_number,
    "string": is_string,
    "bool": is_bool,
    "boolean": is_bool,
}


def validate_param(param_type: str, value: Any) -> bool:
    """Return whether *value* satisfies *param_type*.

    Unknown types never validate. ``Route`` rejects them at registration,
    so this only matters for callers using the function directly.
    """
    check = VALIDATORS.get(param_type)
    if check is None:
        return False
    return check(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


_CASTS: dict[str, Callable[[Any], Any]] = {
    "int": int,
    "number": float,
    "float": float,
    "string": str,
    "str": str,
    "bool": _to_bool,
    "boolean": _to_bool,
}


def cast_param(value: Any, param_type: str = "") -> Any:
    """Cast a raw parameter to *param_type*.

    An empty type returns the value unchanged. Raises ``ValueError`` if the
    value cannot be converted and ``KeyError`` for an unknown type.
    """
    if not param_type:
        return value
    return _CASTS[param_type](value)
