"""Bundled symbol pool used when no other vocabulary is supplied."""

from __future__ import annotations

from typing import Final, Iterable

__all__ = ["DEFAULT_SYMBOLS", "unique_symbols"]

DEFAULT_SYMBOLS: Final[tuple[str, ...]] = (
    "🍎", "🍌", "🍇", "🍉", "🍒", "🍓", "🍍", "🥝",
    "🥕", "🌽", "🍄", "🥑", "🍋", "🍑", "🍐", "🥥",
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼",
    "🐨", "🐯", "🦁", "🐮", "🐷", "🐸", "🐵", "🐔",
    "🐧", "🐦", "🐤", "🦆", "🦉", "🐺", "🐗", "🐴",
    "🦄", "🐝", "🐛", "🦋", "🐌", "🐞", "🐢", "🐍",
    "🐙", "🦀", "🐠", "🐬", "🐳", "🦈", "🐊", "🦒",
    "🌵", "🌲", "🌻", "🌹", "🍀", "🌙", "🌈", "🔥",
)


def unique_symbols(values: Iterable[str]) -> tuple[str, ...]:
    """Keep the first occurrence of every single-character, non-blank symbol."""

    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if len(value) != 1 or value.isspace() or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return tuple(result)
