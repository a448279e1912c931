"""Textual message objects for panel/app coordination."""

from __future__ import annotations

from textual.message import Message


class SearchRequested(Message):
    def __init__(self, *, root_path: str, pattern: str) -> None:
        self.root_path = root_path
        self.pattern = pattern
        super().__init__()


class SearchResultsReady(Message):
    """Posted from a search worker thread once an outcome is on the channel."""


class OpenMatch(Message):
    def __init__(self, *, path: str) -> None:
        self.path = path
        super().__init__()


class ChooseDirectory(Message):
    def __init__(self, *, start_path: str) -> None:
        self.start_path = start_path
        super().__init__()
