"""Public runtime orchestration entry points.

Groups the viewer bootstrap (`run_viewer`), the event loop, and the state
object the loop drives.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import the viewer entrypoint to keep package imports light."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_main_loop", "run_viewer"]
