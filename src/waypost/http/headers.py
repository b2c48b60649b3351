"""Immutable, case-insensitive HTTP request headers.

Stores the raw byte pairs from the ASGI scope and decodes on access.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only view over ASGI header pairs.

    ``headers["accept-language"]`` returns the first value;
    ``get_list`` returns every value sent under that name.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    def _values(self, key: str) -> Iterator[str]:
        wanted = key.lower().encode("latin-1")
        return (value.decode("latin-1") for name, value in self._raw if name.lower() == wanted)

    def __getitem__(self, key: str) -> str:
        for value in self._values(key):
            return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name.decode("latin-1").lower() for name, _ in self._raw))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values(key))

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``{name: value}`` mapping (tests, tools)."""
        return cls(
            tuple(
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Raw header byte pairs, as received from ASGI."""
        return self._raw
