"""Search inputs, status line and result list."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, ListItem, ListView, Static

from treefind.messages import ChooseDirectory, OpenMatch, SearchRequested
from treefind.runtime_logging import get_runtime_logger
from treefind.search.scanner import SearchResult


class MatchItem(ListItem):
    def __init__(self, match_path: str) -> None:
        self.match_path = match_path
        super().__init__(Static(match_path, markup=False))


class SearchPanel(Vertical):
    DEFAULT_CSS = """
    SearchPanel {
        height: 1fr;
        padding: 0 1;
    }

    #search-controls {
        height: auto;
    }

    #search-controls Button {
        margin-right: 1;
    }

    SearchPanel Input {
        margin-top: 1;
    }

    #status {
        height: 1;
        margin-top: 1;
        color: $text-muted;
    }

    #results {
        height: 1fr;
        border: round $surface-lighten-2;
    }
    """

    def __init__(self, *, root_path: str, pattern: str = "", max_rendered_results: int = 2000) -> None:
        self.initial_root = root_path
        self.initial_pattern = pattern
        self.max_rendered_results = max_rendered_results
        self.displayed: tuple[str, ...] = ()
        self.status_text = ""
        self.logger = get_runtime_logger()
        super().__init__()

    def compose(self) -> ComposeResult:
        with Horizontal(id="search-controls"):
            yield Button("Choose Directory", id="choose-dir")
            yield Button("Search", id="search", variant="primary")
        yield Input(value=self.initial_root, placeholder="Enter directory path", id="root-path")
        yield Input(value=self.initial_pattern, placeholder="Enter search term", id="pattern")
        yield Static("", id="status", markup=False)
        yield ListView(id="results")

    @property
    def root_path(self) -> str:
        return self.query_one("#root-path", Input).value.strip()

    @property
    def pattern(self) -> str:
        return self.query_one("#pattern", Input).value

    def request_search(self) -> None:
        # Copy the field values now; later edits must not reach the worker.
        self.post_message(SearchRequested(root_path=self.root_path, pattern=self.pattern))

    def set_root(self, path: str) -> None:
        self.query_one("#root-path", Input).value = path

    def show_status(self, text: str) -> None:
        self.status_text = text
        self.query_one("#status", Static).update(text)

    async def show_results(self, result: SearchResult) -> int:
        """Replace the list with ``result``; return the number of rows rendered."""
        rows = result.entries[: self.max_rendered_results]
        results = self.query_one("#results", ListView)
        await results.clear()
        await results.extend(MatchItem(path) for path in rows)
        self.displayed = result.entries

        if not result.root_readable:
            self.show_status(f"Not a readable directory: {result.root}")
        elif len(rows) < len(result):
            self.show_status(f"{len(result)} matches (showing first {len(rows)})")
        else:
            noun = "match" if len(result) == 1 else "matches"
            self.show_status(f"{len(result)} {noun} in {result.elapsed_s:.2f}s")
        self.logger.debug("search_panel.rendered", rows=len(rows), total=len(result))
        return len(rows)

    async def clear_results(self) -> None:
        await self.query_one("#results", ListView).clear()
        self.displayed = ()
        self.show_status("")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search":
            self.request_search()
        elif event.button.id == "choose-dir":
            self.post_message(ChooseDirectory(start_path=self.root_path))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in {"root-path", "pattern"}:
            self.request_search()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, MatchItem):
            self.post_message(OpenMatch(path=event.item.match_path))
