"""Textual front-end for interactive play."""

from .app import MemoryApp, run_textual_app

__all__ = ["MemoryApp", "run_textual_app"]
