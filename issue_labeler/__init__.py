"""Applies or removes GitHub issue labels based on regular expression rules."""

__version__ = "0.1.0"
