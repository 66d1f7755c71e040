"""Buddy Face - an idle text-mode character."""

__version__ = "0.1.0"
