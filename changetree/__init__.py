"""Public package surface for changetree.

Exports ``main`` for programmatic CLI invocation.
Tree building lives in ``changetree.change_tree_model``; hosts use
``changetree.provider``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
