"""CLI startup-path, exit-status, and logging behavior tests.

Verifies how ``rmtk.cli.main`` chooses the startup directory, which
failures abort with a diagnostic, and that viewer handoff exits cleanly.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rmtk import cli
from rmtk.errors import TerminalInitError, ViewerLaunchError


class FakeTerminal:
    stdin_fd = 0
    stdout_fd = 1

    def size(self) -> os.terminal_size:
        return os.terminal_size((80, 12))

    @contextlib.contextmanager
    def raw_mode(self):
        yield


class FakeReader:
    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)

    def read_key(self, timeout_ms: int | None = None) -> str:
        return self.keys.pop(0) if self.keys else "q"


class CliStartupPathTests(unittest.TestCase):
    def test_explicit_path_argument_wins(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "rmtk.cli.config.load_default_path"
        ) as load_default:
            self.assertEqual(cli.resolve_start_path(tmp), Path(tmp))
        load_default.assert_not_called()

    def test_configured_default_used_without_argument(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "rmtk.cli.config.load_default_path", return_value=Path(tmp)
        ):
            self.assertEqual(cli.resolve_start_path(None), Path(tmp))

    def test_falls_back_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            previous_cwd = Path.cwd()
            try:
                os.chdir(tmp)
                with mock.patch("rmtk.cli.config.load_default_path", return_value=None):
                    resolved = cli.resolve_start_path(None)
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(resolved.resolve(), Path(tmp).resolve())

    def test_main_starts_browser_in_requested_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "rmtk.cli.TerminalController.from_stdio", return_value=FakeTerminal()
        ), mock.patch("rmtk.cli.run_browser") as run_browser:
            cli.main([tmp])

        run_browser.assert_called_once()
        navigator = run_browser.call_args.args[0]
        self.assertEqual(navigator.directory, Path(os.path.abspath(tmp)))
        self.assertEqual(navigator.cursor, 0)
        self.assertFalse(navigator.search_active)


class CliExitStatusTests(unittest.TestCase):
    def test_unlistable_startup_directory_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch("rmtk.cli.TerminalController.from_stdio") as terminal:
            missing = Path(tmp) / "missing"
            with self.assertRaises(SystemExit) as raised:
                cli.main([str(missing)])

        self.assertIn("cannot open directory", str(raised.exception.code))
        terminal.assert_not_called()

    def test_terminal_init_failure_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "rmtk.cli.TerminalController.from_stdio", side_effect=TerminalInitError("stdin is not a terminal")
        ), mock.patch("rmtk.cli.run_browser") as run_browser:
            with self.assertRaises(SystemExit) as raised:
                cli.main([tmp])

        self.assertIn("cannot initialize terminal", str(raised.exception.code))
        run_browser.assert_not_called()

    def test_selecting_document_hands_off_and_returns_normally(self) -> None:
        launcher = mock.Mock()
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "report.pdf").write_text("%PDF", encoding="utf-8")
            with mock.patch("rmtk.cli.TerminalController.from_stdio", return_value=FakeTerminal()), mock.patch(
                "rmtk.cli.KeyReader", return_value=FakeReader(["j", "ENTER"])
            ), mock.patch("rmtk.cli.ViewerLauncher", return_value=launcher), mock.patch(
                "rmtk.render.os.write"
            ):
                cli.main([tmp])

        launcher.launch.assert_called_once_with(Path(os.path.abspath(tmp)) / "report.pdf")

    def test_viewer_failure_still_returns_normally(self) -> None:
        launcher = mock.Mock()
        launcher.launch.side_effect = ViewerLaunchError(["zathura", "x.pdf"], "not found")
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "report.pdf").write_text("%PDF", encoding="utf-8")
            with mock.patch("rmtk.cli.TerminalController.from_stdio", return_value=FakeTerminal()), mock.patch(
                "rmtk.cli.KeyReader", return_value=FakeReader(["j", "ENTER"])
            ), mock.patch("rmtk.cli.ViewerLauncher", return_value=launcher), mock.patch(
                "rmtk.render.os.write"
            ), mock.patch("sys.stderr") as stderr:
                cli.main([tmp])

        launcher.launch.assert_called_once()
        stderr.write.assert_called()

    def test_viewer_command_comes_from_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "rmtk.cli.TerminalController.from_stdio", return_value=FakeTerminal()
        ), mock.patch("rmtk.cli.run_browser"), mock.patch(
            "rmtk.cli.config.load_viewer_command", return_value=("evince", "swallow")
        ), mock.patch("rmtk.cli.ViewerLauncher") as launcher_cls:
            cli.main([tmp])

        launcher_cls.assert_called_once_with("evince", "swallow")


class CliLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        package_logger = logging.getLogger("rmtk")
        for handler in list(package_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                package_logger.removeHandler(handler)
                handler.close()
        package_logger.setLevel(logging.NOTSET)

    def test_log_file_option_records_startup(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "rmtk.log"
            with mock.patch("rmtk.cli.TerminalController.from_stdio", return_value=FakeTerminal()), mock.patch(
                "rmtk.cli.run_browser"
            ):
                cli.main(["--log-file", str(log_path), tmp])
            for handler in logging.getLogger("rmtk").handlers:
                handler.flush()

            contents = log_path.read_text(encoding="utf-8")

        self.assertIn("rmtk.navigator", contents)
        self.assertIn("listed", contents)

    def test_no_log_file_adds_no_handler(self) -> None:
        before = list(logging.getLogger("rmtk").handlers)

        cli.configure_logging(None)

        self.assertEqual(logging.getLogger("rmtk").handlers, before)


if __name__ == "__main__":
    unittest.main()
