"""Immutable query string parameters.

Two views of the same query string:

- a ``Mapping[str, str]`` of decoded values (first value wins), and
- ``raw_items()``: the ``&``-separated items in received order, each
  keeping its unparsed text. Route hints compare against the raw text,
  because that is what a route's static query literal is written as.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import parse_qs, unquote_plus


@dataclass(frozen=True, slots=True)
class QueryItem:
    """One ``key=value`` item of a query string.

    ``key`` and ``value`` are percent-decoded; ``raw`` is the item exactly
    as it appeared between ``&`` separators.
    """

    key: str
    value: str
    raw: str


def split_query(query_string: str) -> tuple[QueryItem, ...]:
    """Split a raw query string into ``QueryItem`` objects.

    Empty items (``a=1&&b=2``) are skipped. An item without ``=`` has an
    empty value.
    """
    items: list[QueryItem] = []
    for raw in query_string.split("&"):
        if not raw:
            continue
        key, _, value = raw.partition("=")
        items.append(QueryItem(key=unquote_plus(key), value=unquote_plus(value), raw=raw))
    return tuple(items)


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    @property
    def string(self) -> str:
        """The query string as received, without the leading ``?``."""
        return self._raw.decode("latin-1")

    def raw_items(self) -> tuple[QueryItem, ...] | None:
        """Return the unparsed query items, or ``None`` without a query string."""
        if not self._raw:
            return None
        return split_query(self.string)
