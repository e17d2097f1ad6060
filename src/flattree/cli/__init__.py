"""
Command-line interface for flattree.

The ``app`` object is the Typer application behind the ``flattree``
console script and ``python -m flattree``.
"""

from .typer_app import app, main

__all__ = ["app", "main"]
