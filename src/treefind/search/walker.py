"""Single-level directory listing."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from treefind.errors import ReadError


@dataclass(frozen=True, slots=True)
class ChildEntry:
    name: str
    path: Path
    is_dir: bool


def list_children(directory: Path, *, follow_symlinks: bool = False) -> list[ChildEntry]:
    """Return the direct children of ``directory`` in enumeration order.

    Raises ``ReadError`` when the directory cannot be opened or read.
    """
    children: list[ChildEntry] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                except OSError:
                    is_dir = False
                children.append(ChildEntry(name=entry.name, path=Path(entry.path), is_dir=is_dir))
    except OSError as exc:
        raise ReadError(Path(directory), exc.strerror or str(exc)) from exc
    return children
