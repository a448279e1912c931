"""treefind Textual application shell."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Input

from treefind.config.store import SettingsStore
from treefind.errors import CompileError, LaunchError
from treefind.launcher import open_path
from treefind.messages import ChooseDirectory, OpenMatch, SearchRequested, SearchResultsReady
from treefind.runtime_logging import configure_runtime_logging
from treefind.screens.modals import DirectoryPickerModal
from treefind.search.channel import DeliveryChannel, SearchFailed, SearchOutcome
from treefind.search.task import SearchEngine
from treefind.widgets.search_panel import SearchPanel


class TreeFindApp(App[None]):
    TITLE = "treefind"
    SUB_TITLE = "Find files and folders by name"

    BINDINGS = [
        ("ctrl+d", "choose_directory", "Choose Directory"),
        ("ctrl+f", "focus_pattern", "Pattern"),
        ("ctrl+l", "clear_results", "Clear"),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    def __init__(
        self,
        *,
        root: Path | None = None,
        initial_pattern: str | None = None,
        settings_store: SettingsStore | None = None,
        launcher: Callable[..., Any] = open_path,
        log_level: str | None = None,
        log_file: str | Path | None = None,
    ) -> None:
        self.logger = configure_runtime_logging(level=log_level, log_file=log_file)
        self.settings_store = settings_store or SettingsStore()
        self.settings = self.settings_store.load()
        if root is not None:
            self.initial_root = str(root.expanduser().absolute())
        else:
            self.initial_root = self.settings.search.default_root
        self.initial_pattern = initial_pattern
        self.launcher = launcher

        self.channel = DeliveryChannel(on_delivery=self._wake_for_results)
        self.engine = SearchEngine(
            self.channel,
            max_workers=self.settings.search.max_workers,
            follow_symlinks=self.settings.search.follow_symlinks,
        )
        self._last_applied_id = 0
        self.search_panel: SearchPanel | None = None

        self.logger.info(
            "app.initialized",
            root=self.initial_root,
            max_workers=self.settings.search.max_workers,
            discard_stale_results=self.settings.search.discard_stale_results,
        )
        super().__init__()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self.search_panel = SearchPanel(
            root_path=self.initial_root,
            pattern=self.initial_pattern or "",
            max_rendered_results=self.settings.search.max_rendered_results,
        )
        yield self.search_panel
        yield Footer()

    def on_mount(self) -> None:
        self.theme = self.settings.appearance.theme
        self.logger.info("app.mounted", theme=self.theme)
        self.action_focus_pattern()
        if self.initial_pattern is not None:
            self.panel.request_search()

    def on_unmount(self) -> None:
        self.engine.close()
        self.logger.info("app.exit")

    @property
    def panel(self) -> SearchPanel:
        assert self.search_panel is not None
        return self.search_panel

    def _wake_for_results(self) -> None:
        # Runs on a search worker thread.
        self.post_message(SearchResultsReady())

    def on_search_requested(self, message: SearchRequested) -> None:
        request = self.engine.new_request(message.root_path, message.pattern)
        try:
            self.engine.spawn(request)
        except CompileError as exc:
            self.panel.show_status(f"Invalid pattern: {exc.reason}")
            self.notify(str(exc), title="Search rejected", severity="error")
            return
        label = request.root_path or "(no directory)"
        self.panel.show_status(f"Searching {label} for {request.pattern!r}...")

    async def on_search_results_ready(self, _message: SearchResultsReady) -> None:
        for outcome in self.channel.drain():
            await self._apply_outcome(outcome)

    async def _apply_outcome(self, outcome: SearchOutcome) -> None:
        request_id = outcome.request.request_id
        if self.settings.search.discard_stale_results and request_id <= self._last_applied_id:
            self.logger.debug(
                "app.search.stale_discarded",
                request_id=request_id,
                last_applied_id=self._last_applied_id,
            )
            return

        if isinstance(outcome, SearchFailed):
            self.panel.show_status(f"Search failed: {outcome.error}")
            self.notify(f"Search failed: {outcome.error}", title="treefind", severity="error")
            self.logger.warning("app.search.failed", request_id=request_id, error=outcome.error)
            return

        self._last_applied_id = request_id
        rendered = await self.panel.show_results(outcome.result)
        self.logger.info(
            "app.search.applied",
            request_id=request_id,
            match_count=len(outcome.result),
            rendered=rendered,
        )
        if not outcome.result.root_readable:
            self.notify(f"Not a readable directory: {outcome.result.root}", severity="warning")

    def on_open_match(self, message: OpenMatch) -> None:
        try:
            self.launcher(message.path, backend=self.settings.launcher.backend)
        except LaunchError as exc:
            self.notify(str(exc), title="Open failed", severity="warning")
            self.logger.warning("app.open.failed", path=message.path, reason=exc.reason)

    def on_choose_directory(self, message: ChooseDirectory) -> None:
        self._open_directory_picker(message.start_path)

    def action_choose_directory(self) -> None:
        self._open_directory_picker(self.panel.root_path)

    def action_focus_pattern(self) -> None:
        self.panel.query_one("#pattern", Input).focus()

    async def action_clear_results(self) -> None:
        await self.panel.clear_results()

    def _open_directory_picker(self, start: str) -> None:
        start_path = Path(start).expanduser() if start else Path.home()
        if not start_path.is_dir():
            start_path = Path.home()

        def _on_close(result: str | None) -> None:
            if result is None:
                return
            self.panel.set_root(result)
            # Matches from the previous root no longer apply.
            self.call_later(self.panel.clear_results)
            self.logger.debug("app.directory_chosen", path=result)

        self.push_screen(DirectoryPickerModal(start_path.resolve()), callback=_on_close)
