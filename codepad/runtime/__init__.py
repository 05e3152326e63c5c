"""Public runtime entry points.

This package groups the Qt application bootstrap (``run_editor``) and the
persisted preferences it reads at startup.
"""

from __future__ import annotations


def run_editor(*args, **kwargs):
    """Lazily import the Qt bootstrap so importing config stays widget-free."""
    from .app import run_editor as _run_editor

    return _run_editor(*args, **kwargs)


__all__ = ["run_editor"]
