"""Grid configuration and deck construction."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Final, Hashable, Sequence

from .errors import ConfigurationError
from .shuffle import shuffle

__all__ = [
    "Deck",
    "Difficulty",
    "GameConfig",
    "DEFAULT_CONFIG",
    "GRID_SIZE_CHOICES",
    "MIN_GRID_SIZE",
    "MIN_GROUP_SIZE",
    "build_deck",
    "token_counts",
]

MIN_GRID_SIZE: Final[int] = 2
MIN_GROUP_SIZE: Final[int] = 2
GRID_SIZE_CHOICES: Final[tuple[int, ...]] = (4, 5, 6, 7)

Deck = tuple[Hashable, ...]


class Difficulty(str, Enum):
    """Named group sizes offered to players."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def group_size(self) -> int:
        return _DIFFICULTY_GROUP_SIZES[self]

    @property
    def label(self) -> str:
        return _DIFFICULTY_LABELS[self]

    @classmethod
    def from_group_size(cls, group_size: int) -> "Difficulty | None":
        for difficulty, size in _DIFFICULTY_GROUP_SIZES.items():
            if size == group_size:
                return difficulty
        return None


_DIFFICULTY_GROUP_SIZES: Final[dict[Difficulty, int]] = {
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 4,
}

_DIFFICULTY_LABELS: Final[dict[Difficulty, str]] = {
    Difficulty.EASY: "Easy (Pairs)",
    Difficulty.MEDIUM: "Medium (Triples)",
    Difficulty.HARD: "Hard (Quadruples)",
}


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board shape for a single session.

    ``grid_size`` is the side length of the square grid and ``group_size`` is
    how many identical tokens make up one matching group.
    """

    grid_size: int = 4
    group_size: int = 2

    @classmethod
    def from_difficulty(cls, grid_size: int, difficulty: Difficulty | str) -> "GameConfig":
        """Build a configuration from one of the named difficulty presets."""

        try:
            preset = Difficulty(difficulty)
        except ValueError as exc:
            raise ConfigurationError(f"unknown difficulty '{difficulty}'") from exc
        return cls(grid_size=grid_size, group_size=preset.group_size)

    @property
    def total_cells(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def usable_cells(self) -> int:
        """Largest multiple of ``group_size`` that fits on the grid.

        Cells past this count stay empty; a 4x4 grid played in triples uses
        15 of its 16 cells.
        """

        return self.total_cells - (self.total_cells % self.group_size)

    @property
    def unused_cells(self) -> int:
        return self.total_cells - self.usable_cells

    @property
    def unique_needed(self) -> int:
        return self.usable_cells // self.group_size

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the grid or group size is out of range."""

        for name, value, minimum in (
            ("grid_size", self.grid_size, MIN_GRID_SIZE),
            ("group_size", self.group_size, MIN_GROUP_SIZE),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < minimum:
                raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")

    def require_pool(self, pool_size: int) -> None:
        """Raise ``ConfigurationError`` unless ``pool_size`` symbols cover the grid."""

        self.validate()
        if pool_size < self.unique_needed:
            raise ConfigurationError(
                f"{self.grid_size}x{self.grid_size} grid with groups of {self.group_size} "
                f"needs {self.unique_needed} unique symbols, pool has {pool_size}"
            )


DEFAULT_CONFIG: Final[GameConfig] = GameConfig()


def build_deck(
    pool: Sequence[Hashable],
    grid_size: int,
    group_size: int,
    rng: random.Random | None = None,
) -> Deck:
    """Return a shuffled deck filling the usable cells of the grid.

    A random selection of ``unique_needed`` symbols is taken from ``pool`` and
    each symbol is repeated ``group_size`` times before the final shuffle.
    """

    config = GameConfig(grid_size=grid_size, group_size=group_size)
    config.require_pool(len(pool))

    selected = shuffle(pool, rng)[: config.unique_needed]
    cards: list[Hashable] = []
    for token in selected:
        cards.extend([token] * group_size)
    return tuple(shuffle(cards, rng))


def token_counts(deck: Sequence[Hashable]) -> dict[Hashable, int]:
    """Return how many times each token occurs in ``deck``."""

    return dict(Counter(deck))
