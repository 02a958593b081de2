"""Tiny runtime injector: fetch and lay out minimal runtime distributions."""

__version__ = "1.1.0"
