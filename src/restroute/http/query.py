"""Query string parameters.

Used by the dispatcher when ``RestConfig.validate_query_params`` is on, and
by handlers through ``context.request.query``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Parsed query string. ``params[key]`` is the first value for *key*.

    Blank values are kept (``?flag=`` gives ``""``); ``get_list`` returns
    every value of a repeated key.
    """

    __slots__ = ("_values", "raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, str):
            query_string = query_string.encode("latin-1")
        self.raw: bytes = query_string
        self._values: dict[str, list[str]] = parse_qs(
            query_string.decode("latin-1"), keep_blank_values=True
        )

    def __getitem__(self, key: str) -> str:
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(key, ()))
