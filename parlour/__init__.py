"""Parlour: a small chess rules engine with an alpha-beta opponent."""

__version__ = "1.0.0"
