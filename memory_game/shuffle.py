"""Random permutation helper shared by deck construction."""

from __future__ import annotations

import random
from typing import Iterable, TypeVar

__all__ = ["shuffle"]

T = TypeVar("T")


def shuffle(sequence: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of ``sequence``.

    The input is never mutated. Passing a seeded ``random.Random`` makes the
    permutation reproducible; otherwise the module-level generator is used.
    """

    items = list(sequence)
    source = rng if rng is not None else random
    source.shuffle(items)
    return items
