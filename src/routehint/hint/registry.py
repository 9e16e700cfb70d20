"""Route registry — gathered once at startup, read on every miss.

Two phases, two types:

- ``RegistryBuilder`` accepts routes while the host attaches. ``publish()``
  ends that phase; the builder refuses further routes afterwards.
- ``RegistrySnapshot`` is what request handling sees: an immutable tuple,
  so any number of concurrent readers share it without a lock.

``on_startup`` keeps the builder private, so nothing outside this module
can reach it once the snapshot exists.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from routehint.hint.diff import DiffRecord, RequestShape, build
from routehint.hint.render import RenderedLine, render
from routehint.routing.route import Route


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """The published, read-only route collection."""

    routes: tuple[Route, ...] = ()

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self.routes)


class RegistryBuilder:
    """Collects routes during attach, then publishes a snapshot exactly once."""

    __slots__ = ("_published", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._published = False

    def add(self, route: Route) -> None:
        if self._published:
            msg = "Cannot add routes after the registry snapshot is published."
            raise RuntimeError(msg)
        self._routes.append(route)

    def publish(self) -> RegistrySnapshot:
        if self._published:
            msg = "The registry snapshot has already been published."
            raise RuntimeError(msg)
        self._published = True
        return RegistrySnapshot(tuple(self._routes))


@dataclass(frozen=True, slots=True)
class Hint:
    """One route's diff and its two rendered lines."""

    route: Route
    record: DiffRecord
    route_line: RenderedLine
    request_line: RenderedLine


@dataclass(frozen=True, slots=True)
class HintReport:
    """Every route's hint for one request, in registration order."""

    target: str
    method: str
    hints: tuple[Hint, ...]

    def __iter__(self) -> Iterator[Hint]:
        return iter(self.hints)

    def __len__(self) -> int:
        return len(self.hints)


def on_startup(routes: Iterable[Route]) -> RegistrySnapshot:
    """Gather the host's routes and publish the snapshot."""
    builder = RegistryBuilder()
    for route in routes:
        builder.add(route)
    return builder.publish()


def on_unmatched_request(snapshot: RegistrySnapshot, request: RequestShape) -> HintReport:
    """Diff and render *request* against every route in *snapshot*.

    No route is skipped, including one that matches completely.
    """
    hints: list[Hint] = []
    for route in snapshot:
        record = build(route, request)
        route_line, request_line = render(record)
        hints.append(Hint(route, record, route_line, request_line))
    return HintReport(target=request.target, method=request.method, hints=tuple(hints))
