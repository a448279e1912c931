"""Directory picker modal."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Static


class FolderTree(DirectoryTree):
    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [path for path in paths if path.is_dir()]


class DirectoryPickerModal(ModalScreen[str | None]):
    DEFAULT_CSS = """
    DirectoryPickerModal {
        align: center middle;
    }

    DirectoryPickerModal > Vertical {
        width: 100;
        height: 80%;
        border: round $primary;
        background: $surface;
        padding: 1;
    }

    DirectoryPickerModal FolderTree {
        height: 1fr;
    }

    DirectoryPickerModal Horizontal {
        height: auto;
    }

    DirectoryPickerModal Button {
        width: 1fr;
        margin: 1 0;
    }
    """

    def __init__(self, start_path: Path) -> None:
        self.start_path = start_path
        self.selected = start_path
        super().__init__()

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("[b]Choose Directory[/b]", markup=True)
            yield Static(str(self.selected), id="picker-selection", markup=False)
            yield FolderTree(str(self.start_path), id="picker-tree")
            with Horizontal():
                yield Button("Use Directory", id="use", variant="success")
                yield Button("Cancel", id="cancel")

    def on_directory_tree_directory_selected(self, event: DirectoryTree.DirectorySelected) -> None:
        self.selected = Path(event.path)
        self.query_one("#picker-selection", Static).update(str(self.selected))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "use":
            self.dismiss(str(self.selected))
        else:
            self.dismiss(None)
