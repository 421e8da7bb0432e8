"""Table grid layout tests: width fitting, wrapping, borders and alignment."""

from __future__ import annotations

import unittest

from mdpager.markdown.events import ALIGN_CENTER, ALIGN_NONE, ALIGN_RIGHT
from mdpager.markdown.table import (
    TableBuilder,
    TableCell,
    align_text,
    fit_column_widths,
    layout_table,
    wrap_words,
)


def _cells(*texts: str) -> list[TableCell]:
    return [TableCell((text,)) for text in texts]


class FitColumnWidthsTests(unittest.TestCase):
    def test_natural_widths_kept_when_grid_fits(self) -> None:
        self.assertEqual(fit_column_widths([4, 4], 100), [4, 4])
        self.assertEqual(fit_column_widths([40, 40], None), [40, 40])

    def test_proportional_scaling(self) -> None:
        # overhead 7, available 10
        self.assertEqual(fit_column_widths([10, 10], 17), [5, 5])

    def test_excess_removed_from_widest_column(self) -> None:
        # floors push the scaled total above the 12 available columns
        self.assertEqual(fit_column_widths([3, 3, 20], 22), [3, 3, 6])

    def test_slack_added_round_robin_from_first_column(self) -> None:
        self.assertEqual(fit_column_widths([7, 7, 7], 30), [7, 7, 6])

    def test_columns_collapse_to_minimum_when_floor_exceeds_budget(self) -> None:
        self.assertEqual(fit_column_widths([10, 10, 10], 15), [3, 3, 3])

    def test_no_columns(self) -> None:
        self.assertEqual(fit_column_widths([], 10), [])


class WrapWordsTests(unittest.TestCase):
    def test_greedy_break_on_whitespace(self) -> None:
        self.assertEqual(wrap_words("hello world foo", 7), ["hello", "world", "foo"])
        self.assertEqual(wrap_words("a b c", 3), ["a b", "c"])

    def test_overlong_word_is_force_broken(self) -> None:
        self.assertEqual(wrap_words("abcdefghij", 4), ["abcd", "efgh", "ij"])

    def test_empty_text_is_one_blank_line(self) -> None:
        self.assertEqual(wrap_words("", 5), [""])
        self.assertEqual(wrap_words("   ", 5), [""])

    def test_wide_glyphs_never_exceed_width(self) -> None:
        lines = wrap_words("你好世界", 5)
        self.assertEqual(lines, ["你好", "世界"])


class AlignTextTests(unittest.TestCase):
    def test_alignment_modes(self) -> None:
        self.assertEqual(align_text("ab", 5, ALIGN_RIGHT), "   ab")
        self.assertEqual(align_text("ab", 5, ALIGN_CENTER), " ab  ")
        self.assertEqual(align_text("ab", 5, "left"), "ab   ")


class LayoutTableTests(unittest.TestCase):
    def test_borders_and_header_separator(self) -> None:
        lines = layout_table(_cells("A", "B"), [_cells("1", "2"), _cells("3", "4")], [], None)
        texts = [line.plain_text() for line in lines]

        self.assertEqual(
            texts,
            [
                "┌─────┬─────┐",
                "│ A   │ B   │",
                "╞═════╪═════╡",
                "│ 1   │ 2   │",
                "├─────┼─────┤",
                "│ 3   │ 4   │",
                "└─────┴─────┘",
            ],
        )

    def test_header_only_table_still_has_header_separator(self) -> None:
        texts = [line.plain_text() for line in layout_table(_cells("A"), [], [], None)]
        self.assertEqual(texts, ["┌─────┐", "│ A   │", "╞═════╡", "└─────┘"])

    def test_zero_columns_yields_nothing(self) -> None:
        self.assertEqual(layout_table(None, [], [], 40), [])

    def test_column_count_covers_ragged_rows_and_alignments(self) -> None:
        lines = layout_table(_cells("A"), [_cells("1", "2", "3")], [ALIGN_NONE, ALIGN_RIGHT], None)
        self.assertEqual(lines[0].plain_text().count("┬"), 2)

    def test_narrowed_table_rows_match_border_width_with_wide_glyphs(self) -> None:
        header = _cells("Name", "Description")
        rows = [
            _cells("你好世界你好世界", "a fairly long description that must wrap"),
            _cells("ascii", "短い説明文です"),
        ]
        lines = layout_table(header, rows, [], 24)

        border_width = lines[0].width()
        self.assertEqual(border_width, 24)
        for line in lines:
            self.assertEqual(line.width(), border_width, line.plain_text())

    def test_cells_render_in_lockstep_with_padding(self) -> None:
        lines = layout_table(None, [_cells("one two three", "x")], [], 17)
        body = [line.plain_text() for line in lines[1:-1]]

        self.assertGreater(len(body), 1)
        self.assertTrue(all(text.startswith("│") and text.endswith("│") for text in body))
        self.assertIn("x", body[0])

    def test_explicit_sub_lines_wrap_independently(self) -> None:
        lines = layout_table(None, [[TableCell(("top", "bottom"))]], [], None)
        body = [line.plain_text() for line in lines[1:-1]]
        self.assertEqual(body, ["│ top    │", "│ bottom │"])


class TableBuilderTests(unittest.TestCase):
    def test_builder_collects_header_rows_and_breaks(self) -> None:
        builder = TableBuilder(alignments=[ALIGN_NONE])
        builder.start_head()
        builder.start_row()
        builder.start_cell()
        builder.push_text("Head")
        builder.end_cell()
        builder.end_row()
        builder.end_head()
        builder.start_row()
        builder.start_cell()
        builder.push_text("x")
        builder.push_html("<br>")
        builder.push_code("y")
        builder.end_cell()
        builder.end_row()

        self.assertEqual(builder.header, [TableCell(("Head",))])
        self.assertEqual(builder.rows, [[TableCell(("x", "`y`"))]])
        texts = [line.plain_text() for line in builder.into_lines()]
        self.assertIn("│ x    │", texts)
        self.assertIn("│ `y`  │", texts)

    def test_text_outside_cells_is_ignored(self) -> None:
        builder = TableBuilder()
        builder.push_text("stray")
        self.assertEqual(builder.into_lines(), [])


if __name__ == "__main__":
    unittest.main()
