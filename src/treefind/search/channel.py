"""One-way handoff of finished searches to a single consumer."""

from __future__ import annotations

import queue
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from treefind.search.scanner import SearchResult

if TYPE_CHECKING:
    from treefind.search.task import SearchRequest


@dataclass(frozen=True, slots=True)
class SearchCompleted:
    request: "SearchRequest"
    result: SearchResult
    kind: Literal["result"] = "result"


@dataclass(frozen=True, slots=True)
class SearchFailed:
    request: "SearchRequest"
    error: str
    kind: Literal["error"] = "error"


SearchOutcome = SearchCompleted | SearchFailed


class DeliveryChannel:
    """Many-producer, single-consumer queue of search outcomes.

    Outcomes are tagged by completion, not by issue order. ``on_delivery`` runs
    on the producing thread after every put and must be thread-safe; the UI
    uses it to wake its own loop, which then calls ``drain``.
    """

    def __init__(self, on_delivery: Callable[[], None] | None = None) -> None:
        self._queue: queue.SimpleQueue[SearchOutcome] = queue.SimpleQueue()
        self.on_delivery = on_delivery

    def put(self, outcome: SearchOutcome) -> None:
        self._queue.put(outcome)
        if self.on_delivery is not None:
            self.on_delivery()

    def get(self, timeout: float | None = None) -> SearchOutcome:
        return self._queue.get(timeout=timeout)

    def drain(self) -> list[SearchOutcome]:
        outcomes: list[SearchOutcome] = []
        while True:
            try:
                outcomes.append(self._queue.get_nowait())
            except queue.Empty:
                return outcomes

    def pending(self) -> bool:
        return not self._queue.empty()
