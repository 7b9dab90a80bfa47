"""Efficiency score awarded when a session completes."""

from __future__ import annotations

from typing import Final

__all__ = ["DEFAULT_PENALTY_PER_EXTRA_MOVE", "MAX_SCORE", "ideal_moves", "score"]

MAX_SCORE: Final[int] = 100
DEFAULT_PENALTY_PER_EXTRA_MOVE: Final[int] = 5


def ideal_moves(deck_length: int, group_size: int) -> int:
    """Return the minimum number of moves, one per group."""

    if group_size < 1:
        raise ValueError("group_size must be positive")
    return deck_length // group_size


def score(
    move_count: int,
    deck_length: int,
    group_size: int,
    penalty_per_extra_move: int = DEFAULT_PENALTY_PER_EXTRA_MOVE,
) -> int:
    """Return a score in ``[0, 100]`` penalising every move beyond the ideal."""

    extra = move_count - ideal_moves(deck_length, group_size)
    raw = MAX_SCORE - extra * penalty_per_extra_move
    return max(0, min(MAX_SCORE, raw))
