"""Media types and content negotiation.

A ``MediaType`` is the ``top/sub`` pair of a ``Content-Type`` or
``Accept`` entry. Parameters (``charset``, ``q``) are parsed but never
take part in comparisons. Either part may be the wildcard ``*``.

The negotiated format of a request follows the method: payload methods
describe what they send (``Content-Type``), the others describe what
they want back (the preferred ``Accept`` entry).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routehint.http.headers import Headers

WILDCARD = "*"

# Methods whose request carries a body described by Content-Type
PAYLOAD_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

# Shorthand names accepted by ``@app.route(..., format="json")``
_SHORTHANDS: dict[str, str] = {
    "any": "*/*",
    "binary": "application/octet-stream",
    "css": "text/css",
    "form": "application/x-www-form-urlencoded",
    "html": "text/html",
    "javascript": "application/javascript",
    "json": "application/json",
    "msgpack": "application/msgpack",
    "plain": "text/plain",
    "text": "text/plain",
    "xml": "text/xml",
}


@dataclass(frozen=True, slots=True)
class MediaType:
    """A ``top/sub`` media type with optional parameters."""

    top: str
    sub: str
    params: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.top}/{self.sub}"

    @property
    def is_specific(self) -> bool:
        """True if neither part is a wildcard."""
        return self.top != WILDCARD and self.sub != WILDCARD

    def param(self, name: str) -> str | None:
        """Return the value of parameter *name* (case-insensitive), if present."""
        wanted = name.lower()
        for key, value in self.params:
            if key.lower() == wanted:
                return value
        return None

    def collides_with(self, other: MediaType) -> bool:
        """True if the two types can describe the same content.

        Parts are compared case-insensitively; a wildcard on either side
        matches anything.
        """
        return _part_collides(self.top, other.top) and _part_collides(self.sub, other.sub)

    @classmethod
    def parse(cls, text: str) -> MediaType | None:
        """Parse ``"text/html; charset=utf-8"``. Returns None when malformed."""
        essence, *raw_params = text.split(";")
        top, sep, sub = essence.strip().partition("/")
        top, sub = top.strip(), sub.strip()
        if not sep or not top or not sub or "/" in sub:
            return None
        params: list[tuple[str, str]] = []
        for raw in raw_params:
            key, _, value = raw.partition("=")
            key = key.strip()
            if key:
                params.append((key, value.strip().strip('"')))
        return cls(top=top, sub=sub, params=tuple(params))

    @classmethod
    def from_format(cls, fmt: str) -> MediaType:
        """Build the media type declared by a route's ``format=`` argument.

        Accepts a full ``top/sub`` string or a shorthand such as ``"json"``.

        Raises:
            ValueError: If *fmt* is neither a media type nor a known shorthand.
        """
        text = _SHORTHANDS.get(fmt.strip().lower(), fmt)
        media_type = cls.parse(text)
        if media_type is None:
            msg = f"Unknown media type or format shorthand: {fmt!r}"
            raise ValueError(msg)
        return media_type


def _part_collides(a: str, b: str) -> bool:
    return a == WILDCARD or b == WILDCARD or a.lower() == b.lower()


def _quality(media_type: MediaType) -> float:
    raw = media_type.param("q")
    if raw is None:
        return 1.0
    try:
        return float(raw)
    except ValueError:
        return 1.0


def parse_accept(value: str) -> list[MediaType]:
    """Parse an ``Accept`` header into its media types, in header order.

    Malformed entries are skipped.
    """
    result: list[MediaType] = []
    for entry in value.split(","):
        if not entry.strip():
            continue
        media_type = MediaType.parse(entry)
        if media_type is not None:
            result.append(media_type)
    return result


def preferred_accept(value: str) -> MediaType | None:
    """Return the preferred media type of an ``Accept`` header.

    Highest ``q`` wins; ties keep header order. Entries with ``q=0``
    are refusals and never preferred.
    """
    best: MediaType | None = None
    best_q = 0.0
    for media_type in parse_accept(value):
        q = _quality(media_type)
        if q > best_q:
            best, best_q = media_type, q
    return best


def negotiated_media_type(method: str, headers: Headers) -> MediaType | None:
    """The request's format: Content-Type for payload methods, else preferred Accept."""
    if method.upper() in PAYLOAD_METHODS:
        content_type = headers.get("content-type")
        return MediaType.parse(content_type) if content_type else None
    accept = headers.get("accept")
    return preferred_accept(accept) if accept else None
