"""Viewer state tests: atomic reload, resize recompilation and scrolling."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mdpager.runtime.state import (
    DEFAULT_STATUS,
    EMPTY_DOCUMENT_PLACEHOLDER,
    RELOADED_STATUS,
    ViewerState,
    effective_table_width,
)

TABLE_SOURCE = "| name | description |\n|---|---|\n| a | some words that wrap when narrow |\n"


class ViewerStateLoadTests(unittest.TestCase):
    def test_load_compiles_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            path.write_text("# Title\n\nbody\n", encoding="utf-8")
            state = ViewerState.load(path, viewport_width=40, viewport_height=10)

        self.assertEqual(state.rendered.plain_lines()[0], "Title")
        self.assertEqual(state.status, DEFAULT_STATUS)
        self.assertEqual(state.row_map.line_count, len(state.rendered.lines))

    def test_empty_file_shows_placeholder(self) -> None:
        state = ViewerState.from_source(Path("empty.md"), "")
        self.assertEqual(state.rendered.plain_lines(), [EMPTY_DOCUMENT_PLACEHOLDER])

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                ViewerState.load(Path(tmp) / "missing.md")

    def test_effective_table_width(self) -> None:
        self.assertEqual(effective_table_width(80, None), 80)
        self.assertEqual(effective_table_width(80, 40), 40)
        self.assertEqual(effective_table_width(30, 40), 30)
        self.assertEqual(effective_table_width(0, None), 1)


class ViewerStateReloadTests(unittest.TestCase):
    def test_failed_reload_keeps_document_overlays_and_scroll(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            path.write_text("# A\n\n" + "line\n\n" * 30, encoding="utf-8")
            state = ViewerState.load(path, viewport_width=40, viewport_height=5)
            state.scroll_down(7)
            before = (state.rendered, state.row_map, state.scroll)

            with mock.patch("mdpager.runtime.state.read_text", side_effect=OSError("disk gone")):
                self.assertFalse(state.reload())

        self.assertIs(state.rendered, before[0])
        self.assertIs(state.row_map, before[1])
        self.assertEqual(state.scroll, 7)
        self.assertEqual(state.status, "Reload failed: disk gone")

    def test_successful_reload_replaces_content_and_resets_scroll(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "doc.md"
            path.write_text("old\n\n" * 30, encoding="utf-8")
            state = ViewerState.load(path, viewport_width=40, viewport_height=5)
            state.scroll_down(4)

            path.write_text("# New\n", encoding="utf-8")
            self.assertTrue(state.reload())

        self.assertEqual(state.rendered.plain_lines()[0], "New")
        self.assertEqual(len(state.rendered.headings), 1)
        self.assertEqual(state.row_map.line_count, len(state.rendered.lines))
        self.assertEqual(state.scroll, 0)
        self.assertEqual(state.status, RELOADED_STATUS)


class ViewerStateGeometryTests(unittest.TestCase):
    def test_resize_recompiles_tables(self) -> None:
        state = ViewerState.from_source(Path("t.md"), TABLE_SOURCE, viewport_width=80, viewport_height=10)
        wide = state.rendered
        state.resize(24, 10)

        self.assertIsNot(state.rendered, wide)
        self.assertEqual(state.rendered.lines[0].width(), 24)
        self.assertEqual(state.row_map.width, 24)

    def test_resize_without_tables_only_rebuilds_row_map(self) -> None:
        state = ViewerState.from_source(Path("t.md"), "x" * 50 + "\n", viewport_width=80, viewport_height=10)
        rendered = state.rendered
        state.resize(10, 10)

        self.assertIs(state.rendered, rendered)
        self.assertEqual(state.row_map.total_rows, 5 + 1)

    def test_configured_table_width_caps_tables(self) -> None:
        state = ViewerState.from_source(
            Path("t.md"), TABLE_SOURCE, viewport_width=80, viewport_height=10, max_table_width=30
        )
        self.assertEqual(state.rendered.lines[0].width(), 30)

    def test_resize_clamps_scroll(self) -> None:
        state = ViewerState.from_source(Path("t.md"), "a\n\n" * 20, viewport_width=20, viewport_height=5)
        state.scroll_to_end()
        state.resize(20, 40)
        self.assertEqual(state.scroll, 0)


class ViewerStateScrollTests(unittest.TestCase):
    def setUp(self) -> None:
        source = "".join(f"para {i}\n\n" for i in range(20))
        self.state = ViewerState.from_source(Path("s.md"), source, viewport_width=20, viewport_height=5)

    def test_scroll_is_clamped(self) -> None:
        self.state.scroll_up(3)
        self.assertEqual(self.state.scroll, 0)
        self.state.scroll_down(10_000)
        self.assertEqual(self.state.scroll, self.state.max_scroll())
        self.assertEqual(self.state.max_scroll(), self.state.total_rows() - 5)

    def test_paging_moves_by_viewport_height(self) -> None:
        self.state.page_down()
        self.assertEqual(self.state.scroll, 5)
        self.state.page_up()
        self.assertEqual(self.state.scroll, 0)

    def test_scroll_to_end_and_top(self) -> None:
        self.state.scroll_to_end()
        self.assertEqual(self.state.scroll, self.state.max_scroll())
        self.state.scroll_to(0)
        self.assertEqual(self.state.scroll, 0)

    def test_toggle_help_marks_dirty(self) -> None:
        self.state.dirty = False
        self.state.toggle_help()
        self.assertTrue(self.state.show_help)
        self.assertTrue(self.state.dirty)


if __name__ == "__main__":
    unittest.main()
