from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from treefind.errors import LaunchError
from treefind.launcher import open_path, opener_candidates
from treefind.runtime_logging import configure_runtime_logging


class OpenerCandidateTests(unittest.TestCase):
    def test_auto_on_linux_prefers_xdg_then_gio(self) -> None:
        commands = opener_candidates("/tmp/x", "auto", platform="linux")
        self.assertEqual(commands, [["xdg-open", "/tmp/x"], ["gio", "open", "/tmp/x"]])

    def test_auto_on_darwin_uses_open(self) -> None:
        self.assertEqual(opener_candidates("/tmp/x", "auto", platform="darwin"), [["open", "/tmp/x"]])

    def test_explicit_backend_wins(self) -> None:
        self.assertEqual(opener_candidates("/p q", "gio", platform="darwin"), [["gio", "open", "/p q"]])


class OpenPathTests(unittest.TestCase):
    def setUp(self) -> None:
        configure_runtime_logging(level="off")
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "doc with spaces.txt"
        self.path.write_text("x", encoding="utf-8")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_starts_first_available_opener_detached(self) -> None:
        with (
            patch("treefind.launcher.platform_name", return_value="linux"),
            patch("treefind.launcher.shutil.which", side_effect=lambda name: None if name == "xdg-open" else f"/usr/bin/{name}"),
            patch("treefind.launcher.subprocess.Popen") as popen_mock,
        ):
            open_path(str(self.path))

        popen_mock.assert_called_once()
        args, kwargs = popen_mock.call_args
        self.assertEqual(args[0], ["gio", "open", str(self.path)])
        self.assertTrue(kwargs["start_new_session"])
        self.assertEqual(kwargs["stdout"], subprocess.DEVNULL)

    def test_no_opener_raises_launch_error(self) -> None:
        with (
            patch("treefind.launcher.platform_name", return_value="linux"),
            patch("treefind.launcher.shutil.which", return_value=None),
        ):
            with self.assertRaises(LaunchError) as ctx:
                open_path(str(self.path))
        self.assertEqual(ctx.exception.path, str(self.path))

    def test_spawn_failure_raises_launch_error(self) -> None:
        with (
            patch("treefind.launcher.platform_name", return_value="linux"),
            patch("treefind.launcher.shutil.which", return_value="/usr/bin/xdg-open"),
            patch("treefind.launcher.subprocess.Popen", side_effect=OSError("exec format error")),
        ):
            with self.assertRaises(LaunchError):
                open_path(str(self.path), backend="xdg-open")

    def test_missing_path_raises_launch_error(self) -> None:
        with self.assertRaises(LaunchError) as ctx:
            open_path(str(Path(self.tmp.name) / "vanished"))
        self.assertIn("no longer exists", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
