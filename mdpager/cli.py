"""Command-line front door for mdpager.

Parses CLI options, merges them with persisted config, and either prints a
static render (``--dump``) or launches the interactive viewer.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .markdown import CompileOptions, markdown_to_render
from .render.dump import render_dump
from .runtime import run_viewer
from .runtime.config import load_max_table_width, load_theme_name
from .runtime.state import ensure_non_empty, effective_table_width
from .source import read_text
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def configure_logging(log_file: Path | None) -> None:
    """Send package log records to ``log_file``; without one they are dropped."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("mdpager")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def render_dump_view(path: Path, width: int, table_width: int | None, color: bool) -> str:
    """Compile ``path`` and return its static ANSI rendering."""
    options = CompileOptions(max_table_width=effective_table_width(width, table_width))
    rendered = ensure_non_empty(markdown_to_render(read_text(path), options))
    return render_dump(rendered, width, color=color)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="View a markdown file in the terminal with styled headings, code blocks and tables."
    )
    parser.add_argument("path", help="Markdown file to view.")
    parser.add_argument("--dump", action="store_true", help="Print the rendered document and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --dump output (default: terminal width).",
    )
    parser.add_argument(
        "--table-width",
        type=_positive_int,
        default=None,
        help="Maximum table width in columns (default: viewport width).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to this file.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and view the requested markdown file."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if path.is_dir():
        raise SystemExit(f"Not a file: {path}")

    table_width = args.table_width if args.table_width is not None else load_max_table_width()
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)

    try:
        if args.dump:
            width = args.max_cols if args.max_cols is not None else _default_render_width()
            sys.stdout.write(render_dump_view(path, width, table_width, color=theme.document_color))
            return
        run_viewer(path, theme, table_width)
    except OSError as exc:
        logger.error("cannot read %s: %s", path, exc)
        raise SystemExit(f"Cannot read {path}: {exc}") from exc


if __name__ == "__main__":
    main()
