"""Top-level package for the memory game engine."""

from . import deck, engine, errors, scheduler, scoring, session, shuffle, timer

__all__ = [
    "deck",
    "engine",
    "errors",
    "scheduler",
    "scoring",
    "session",
    "shuffle",
    "timer",
]
