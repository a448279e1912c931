"""Open a path with the operating system's default handler."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys

from treefind.config.models import LauncherBackend
from treefind.errors import LaunchError
from treefind.runtime_logging import get_runtime_logger


def platform_name() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "darwin"
    if os.name == "nt":
        return "windows"
    return "default"


def opener_candidates(path: str, backend: LauncherBackend = "auto", platform: str | None = None) -> list[list[str]]:
    """Commands to try, in order, for opening ``path``."""
    platform = platform or platform_name()
    xdg = [["xdg-open", path]]
    gio = [["gio", "open", path]]
    mac = [["open", path]]

    if backend == "xdg-open":
        return xdg
    if backend == "gio":
        return gio
    if backend == "open":
        return mac
    if platform == "darwin":
        return mac
    return xdg + gio


def open_path(path: str, *, backend: LauncherBackend = "auto") -> None:
    """Start the platform opener for ``path`` without waiting on it.

    Raises ``LaunchError`` if no opener is available or it fails to start.
    """
    logger = get_runtime_logger()
    if not os.path.exists(path):
        raise LaunchError(path, "path no longer exists")

    if backend == "auto" and platform_name() == "windows":
        try:
            os.startfile(path)  # type: ignore[attr-defined]
        except OSError as exc:
            raise LaunchError(path, str(exc)) from exc
        logger.info("launcher.opened", path=path, command="startfile")
        return

    for command in opener_candidates(path, backend):
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.warning("launcher.start_failed", path=path, command=command[0], error=str(exc))
            continue
        logger.info("launcher.opened", path=path, command=command[0])
        return

    raise LaunchError(path, f"no opener available for backend {backend!r}")
