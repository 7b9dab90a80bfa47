from __future__ import annotations

import random
import string

import pytest

from memory_game.deck import Difficulty, GameConfig, build_deck, token_counts
from memory_game.errors import ConfigurationError

POOL = tuple(string.ascii_letters)


@pytest.mark.parametrize(
    ("grid_size", "group_size"),
    [(2, 2), (3, 2), (4, 2), (4, 3), (4, 4), (5, 2), (5, 3), (6, 4), (7, 2), (7, 3)],
)
def test_build_deck_fills_largest_multiple_of_group(grid_size: int, group_size: int) -> None:
    deck = build_deck(POOL, grid_size, group_size, random.Random(0))

    total = grid_size * grid_size
    assert len(deck) == total - total % group_size
    assert set(token_counts(deck).values()) == {group_size}


def test_pairs_on_four_by_four_use_eight_tokens() -> None:
    pool = tuple("abcdefgh")

    deck = build_deck(pool, 4, 2, random.Random(1))

    counts = token_counts(deck)
    assert len(deck) == 16
    assert len(counts) == 8
    assert set(counts) == set(pool)
    assert all(count == 2 for count in counts.values())


def test_triples_on_four_by_four_leave_one_cell_unused() -> None:
    config = GameConfig(grid_size=4, group_size=3)

    deck = build_deck(tuple("vwxyz"), 4, 3, random.Random(2))

    assert config.usable_cells == 15
    assert config.unused_cells == 1
    assert len(deck) == 15
    assert len(token_counts(deck)) == 5


def test_insufficient_pool_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        build_deck(("a", "b", "c"), 4, 2)


@pytest.mark.parametrize(("grid_size", "group_size"), [(1, 2), (4, 1), (0, 2), (4, 0)])
def test_out_of_range_sizes_are_rejected(grid_size: int, group_size: int) -> None:
    with pytest.raises(ConfigurationError):
        build_deck(POOL, grid_size, group_size)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        GameConfig(grid_size=4, group_size=1).validate()


def test_non_integer_sizes_are_rejected() -> None:
    with pytest.raises(ConfigurationError):
        GameConfig(grid_size=4.0, group_size=2).validate()  # type: ignore[arg-type]


def test_deck_draws_only_from_pool() -> None:
    deck = build_deck(POOL, 5, 3, random.Random(5))

    assert set(deck) <= set(POOL)


def test_pool_exactly_large_enough_is_accepted() -> None:
    config = GameConfig(grid_size=5, group_size=2)

    deck = build_deck(POOL[: config.unique_needed], 5, 2)

    assert len(deck) == 24


def test_build_deck_varies_between_calls() -> None:
    rng = random.Random(11)

    decks = {build_deck(POOL, 4, 2, rng) for _ in range(5)}

    assert len(decks) > 1


def test_difficulty_presets_map_to_group_sizes() -> None:
    assert Difficulty.EASY.group_size == 2
    assert Difficulty.MEDIUM.group_size == 3
    assert Difficulty.HARD.group_size == 4
    assert Difficulty.from_group_size(3) is Difficulty.MEDIUM
    assert Difficulty.from_group_size(5) is None


def test_config_from_difficulty_accepts_names() -> None:
    config = GameConfig.from_difficulty(6, "hard")

    assert config == GameConfig(grid_size=6, group_size=4)
    assert config.unique_needed == 9


def test_config_from_unknown_difficulty_raises() -> None:
    with pytest.raises(ConfigurationError):
        GameConfig.from_difficulty(4, "impossible")
