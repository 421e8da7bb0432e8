"""Theme lookup tests."""

from __future__ import annotations

import unittest

from mdpager.ui_theme import (
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    available_theme_names,
    next_theme,
    normalize_theme_name,
    resolve_theme,
)


class ThemeResolutionTests(unittest.TestCase):
    def test_names_normalize_and_fall_back(self) -> None:
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("nope"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_no_color_wins_over_name(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertFalse(PLAIN_THEME.document_color)

    def test_resolve_known_themes(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_next_theme_wraps_around(self) -> None:
        self.assertIs(next_theme(DEFAULT_THEME), OCEAN_THEME)
        self.assertIs(next_theme(OCEAN_THEME), DEFAULT_THEME)
        self.assertIs(next_theme(PLAIN_THEME), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()
