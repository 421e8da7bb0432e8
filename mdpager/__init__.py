"""Public package surface for mdpager.

Exports ``main`` for programmatic CLI invocation and ``markdown_to_render``
for callers that only need the compiled document.
"""

from __future__ import annotations

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def markdown_to_render(*args, **kwargs):
    """Lazily import the markdown pipeline."""
    from .markdown import markdown_to_render as _markdown_to_render

    return _markdown_to_render(*args, **kwargs)


__all__ = ["main", "markdown_to_render"]
