"""Immutable, case-insensitive request headers.

Raw ASGI byte pairs are decoded once, with names lowercased; lookups and
``bearer_token`` read the decoded pairs.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    A repeated header keeps every value in ``pairs``; ``headers[name]``
    and ``get`` return the first one.
    """

    __slots__ = ("pairs",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self.pairs: tuple[tuple[str, str], ...] = tuple(
            (name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw
        )

    @classmethod
    def from_dict(cls, headers: Mapping[str, str] | None) -> Headers:
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls(
            tuple(
                (name.encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            )
        )

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self.pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self.pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self.pairs))

    def bearer_token(self, scheme: str = "Bearer") -> str | None:
        """Return the credential of an ``Authorization: <scheme> <token>`` header."""
        value = self.get("authorization")
        if not value:
            return None
        given, _, token = value.partition(" ")
        if given.lower() != scheme.lower() or not token.strip():
            return None
        return token.strip()
