"""Viewport geometry: row mapping and overlay painting."""

from __future__ import annotations

from .overlays import CellOverride, paint_overlays
from .rows import RowMap, line_row_span

__all__ = ["CellOverride", "RowMap", "line_row_span", "paint_overlays"]
