"""Immutable, case-insensitive HTTP headers.

Built from ASGI byte pairs or a plain dict. Names and values are
decoded once (latin-1, per RFC 9110) and indexed by lowercase name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def _text(value: str | bytes) -> str:
    return value.decode("latin-1") if isinstance(value, bytes) else value


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive header mapping.

    Lookup returns the first value; ``get_list`` returns every value
    for repeated headers (``Accept``, ``Cookie``, ...).
    """

    __slots__ = ("_index", "_pairs")

    def __init__(self, pairs: Iterable[tuple[str | bytes, str | bytes]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple(
            (_text(name).lower(), _text(value)) for name, value in pairs
        )
        index: dict[str, list[str]] = {}
        for name, value in self._pairs:
            index.setdefault(name, []).append(value)
        self._index = index

    @classmethod
    def from_dict(cls, headers: Mapping[str, str] | None) -> Headers:
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls((headers or {}).items())

    def __getitem__(self, key: str) -> str:
        values = self._index.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({dict((k, v[0]) for k, v in self._index.items())!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* in arrival order."""
        return list(self._index.get(key.lower(), ()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Header pairs re-encoded to the ASGI byte form."""
        return tuple((n.encode("latin-1"), v.encode("latin-1")) for n, v in self._pairs)
