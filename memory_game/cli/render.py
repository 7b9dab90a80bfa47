"""Rich renderables built from session snapshots."""

from __future__ import annotations

from typing import Hashable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..session import SessionSnapshot, SessionStatus, TileView, TileVisibility
from ..timer import format_elapsed

HIDDEN_FACE = "❓"

_TILE_STYLES = {
    TileVisibility.HIDDEN: "dim",
    TileVisibility.REVEALED: "bold yellow",
    TileVisibility.MATCHED: "green",
}


def tile_label(tile: TileView) -> str:
    """Return the face shown for ``tile``."""

    if tile.visibility is TileVisibility.HIDDEN:
        return HIDDEN_FACE
    return str(tile.token)


def stats_line(snapshot: SessionSnapshot) -> str:
    """Return the ``Time | Moves`` line, with the score once complete."""

    line = f"🕒 Time: {format_elapsed(snapshot.elapsed)} | 🔁 Moves: {snapshot.move_count}"
    if snapshot.is_complete and snapshot.score is not None:
        line += f" | 🏅 Score: {snapshot.score}/100"
    return line


def render_board(snapshot: SessionSnapshot, grid_size: int) -> RenderableType:
    """Lay the tiles out row by row; cells past the deck stay blank."""

    table = Table.grid(padding=(0, 2))
    for _ in range(grid_size):
        table.add_column(justify="center")
    tiles = list(snapshot.tiles)
    for row in range(grid_size):
        cells: list[RenderableType] = []
        for column in range(grid_size):
            index = row * grid_size + column
            if index < len(tiles):
                tile = tiles[index]
                cells.append(Text(tile_label(tile), style=_TILE_STYLES[tile.visibility]))
            else:
                cells.append(Text(" "))
        table.add_row(*cells)
    return table


def render_state(snapshot: SessionSnapshot, grid_size: int, *, title: str = "Memory") -> RenderableType:
    """Return a panel with the board and the stats line."""

    if snapshot.status is SessionStatus.IDLE:
        body: RenderableType = Text("Waiting for symbols…", style="dim")
    else:
        parts: list[RenderableType] = [render_board(snapshot, grid_size), Text(stats_line(snapshot))]
        if snapshot.is_complete:
            parts.append(
                Text(
                    f"🎉 All matched in {snapshot.move_count} moves and {format_elapsed(snapshot.elapsed)}!",
                    style="bold green",
                )
            )
        body = Group(*parts)
    return Panel(body, title=title, border_style="cyan", box=box.ROUNDED)


def render_deck(deck: Sequence[Hashable], grid_size: int) -> RenderableType:
    """Render a deck face-up, used by the ``deal`` command."""

    table = Table(box=box.SIMPLE, show_header=False)
    for _ in range(grid_size):
        table.add_column(justify="center")
    for row in range(grid_size):
        start = row * grid_size
        chunk = [str(token) for token in deck[start : start + grid_size]]
        chunk.extend("·" for _ in range(grid_size - len(chunk)))
        table.add_row(*chunk)
    return table
