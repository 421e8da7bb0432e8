"""CLI argument, config merging and dump-mode tests."""

from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mdpager import cli
from mdpager.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        patches = [
            mock.patch("mdpager.cli.load_max_table_width", return_value=None),
            mock.patch("mdpager.cli.load_theme_name", return_value=None),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def _write(self, tmp: str, text: str) -> Path:
        path = Path(tmp) / "doc.md"
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_path_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(Path(tmp) / "nope.md")])
        self.assertIn("Path not found", str(ctx.exception.code))

    def test_directory_path_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([tmp])
        self.assertIn("Not a file", str(ctx.exception.code))

    def test_non_positive_widths_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "x\n")
            with mock.patch("sys.stderr", new_callable=io.StringIO):
                with self.assertRaises(SystemExit):
                    cli.main([str(path), "--table-width", "0"])
                with self.assertRaises(SystemExit):
                    cli.main([str(path), "--max-cols", "abc"])

    def test_dump_prints_rendered_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "# Title\n\nbody\n\n---\n")
            stdout = io.StringIO()
            with mock.patch("sys.stdout", stdout), mock.patch("mdpager.cli.run_viewer") as run_viewer:
                cli.main([str(path), "--dump", "--max-cols", "12", "--no-color"])

        run_viewer.assert_not_called()
        lines = stdout.getvalue().split("\n")
        self.assertEqual(lines[0], "Title")
        self.assertIn("body", lines)
        self.assertIn("─" * 12, lines)

    def test_dump_of_empty_file_shows_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "")
            stdout = io.StringIO()
            with mock.patch("sys.stdout", stdout):
                cli.main([str(path), "--dump", "--no-color"])
        self.assertEqual(stdout.getvalue(), "(file is empty)\n")

    def test_viewer_receives_theme_and_table_width(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "x\n")
            with mock.patch("mdpager.cli.run_viewer") as run_viewer:
                cli.main([str(path), "--theme", "ocean", "--table-width", "40"])

        run_viewer.assert_called_once_with(path, OCEAN_THEME, 40)

    def test_config_values_fill_missing_flags(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "x\n")
            with mock.patch("mdpager.cli.load_max_table_width", return_value=55), mock.patch(
                "mdpager.cli.load_theme_name", return_value="unknown"
            ), mock.patch("mdpager.cli.run_viewer") as run_viewer:
                cli.main([str(path)])

        run_viewer.assert_called_once_with(path, DEFAULT_THEME, 55)

    def test_no_color_selects_plain_theme(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "x\n")
            with mock.patch("mdpager.cli.run_viewer") as run_viewer:
                cli.main([str(path), "--no-color", "--theme", "ocean"])

        self.assertIs(run_viewer.call_args.args[1], PLAIN_THEME)

    def test_read_failure_becomes_system_exit(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "x\n")
            with mock.patch("mdpager.cli.run_viewer", side_effect=PermissionError("denied")):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main([str(path)])
        self.assertIn("denied", str(ctx.exception.code))

    def test_log_file_receives_package_records(self) -> None:
        package_logger = logging.getLogger("mdpager")
        saved_handlers = list(package_logger.handlers)
        saved_level = package_logger.level
        try:
            with tempfile.TemporaryDirectory() as tmp:
                log_path = Path(tmp) / "mdpager.log"
                cli.configure_logging(log_path)
                logging.getLogger("mdpager.runtime.state").warning("reload of %s failed", "x.md")
                for handler in package_logger.handlers:
                    handler.flush()
                self.assertIn("reload of x.md failed", log_path.read_text(encoding="utf-8"))
                for handler in package_logger.handlers:
                    if handler not in saved_handlers:
                        handler.close()
        finally:
            package_logger.handlers = saved_handlers
            package_logger.setLevel(saved_level)


if __name__ == "__main__":
    unittest.main()
