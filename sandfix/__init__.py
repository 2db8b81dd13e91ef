"""Sandfix - repair the package databases of a relocated sandbox."""

__version__ = "0.1.0"
