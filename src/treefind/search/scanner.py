"""Recursive name scan over a directory tree."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from treefind.errors import ReadError
from treefind.runtime_logging import get_runtime_logger
from treefind.search.pattern import CompiledPattern
from treefind.search.walker import ChildEntry, list_children

ListChildren = Callable[..., list[ChildEntry]]


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Matches of one scan, in discovery order.

    Discovery order follows the filesystem's enumeration order and is not
    portable across filesystems.
    """

    root: str
    pattern: str
    entries: tuple[str, ...] = ()
    directories_visited: int = 0
    unreadable_directories: int = 0
    root_readable: bool = True
    elapsed_s: float = 0.0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


def scan(
    root: str | Path,
    matcher: CompiledPattern,
    *,
    follow_symlinks: bool = False,
    list_children: ListChildren = list_children,
) -> SearchResult:
    """Walk ``root`` depth-first and collect every entry whose name matches.

    Directories are both match candidates and always descended into.
    Unreadable subdirectories are skipped; an unreadable root yields an
    empty result with ``root_readable`` unset.
    """
    logger = get_runtime_logger()
    started = time.monotonic()

    if isinstance(root, str) and not root.strip():
        logger.warning("scan.root_unreadable", root=root, reason="empty path")
        return SearchResult(root=root, pattern=matcher.source, root_readable=False)

    # Keep the root as given so matches stay under it even through symlinks.
    root_path = Path(root).expanduser().absolute()
    try:
        top = list_children(root_path, follow_symlinks=follow_symlinks)
    except ReadError as exc:
        logger.warning("scan.root_unreadable", root=str(root_path), reason=exc.reason)
        return SearchResult(
            root=str(root_path),
            pattern=matcher.source,
            root_readable=False,
            elapsed_s=time.monotonic() - started,
        )

    found: list[str] = []
    visited = 1
    unreadable = 0
    stack: list[Iterator[ChildEntry]] = [iter(top)]

    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue

        if matcher.matches(child.name):
            found.append(str(child.path))

        if not child.is_dir:
            continue
        try:
            grandchildren = list_children(child.path, follow_symlinks=follow_symlinks)
        except ReadError as exc:
            unreadable += 1
            logger.debug("scan.branch_skipped", path=str(child.path), reason=exc.reason)
            continue
        visited += 1
        stack.append(iter(grandchildren))

    result = SearchResult(
        root=str(root_path),
        pattern=matcher.source,
        entries=tuple(found),
        directories_visited=visited,
        unreadable_directories=unreadable,
        elapsed_s=time.monotonic() - started,
    )
    logger.debug(
        "scan.completed",
        root=result.root,
        pattern=result.pattern,
        match_count=len(result),
        directories_visited=visited,
        unreadable_directories=unreadable,
        elapsed_s=round(result.elapsed_s, 4),
    )
    return result
