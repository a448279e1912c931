"""Asynchronous name-search engine."""

from treefind.search.channel import DeliveryChannel, SearchCompleted, SearchFailed, SearchOutcome
from treefind.search.pattern import CompiledPattern, compile_pattern, matches
from treefind.search.scanner import SearchResult, scan
from treefind.search.task import SearchEngine, SearchRequest, SearchTask
from treefind.search.walker import ChildEntry, list_children

__all__ = [
    "ChildEntry",
    "CompiledPattern",
    "DeliveryChannel",
    "SearchCompleted",
    "SearchEngine",
    "SearchFailed",
    "SearchOutcome",
    "SearchRequest",
    "SearchResult",
    "SearchTask",
    "compile_pattern",
    "list_children",
    "matches",
    "scan",
]
