"""Textual-powered interactive memory board."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Hashable, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Grid
from textual.timer import Timer
from textual.widgets import Button, Footer, Header, Static

from ...deck import GRID_SIZE_CHOICES, Difficulty, GameConfig
from ...engine import EngineSettings, MemoryGame
from ...errors import ConfigurationError
from ...session import SessionSnapshot, SessionStatus, TileView, TileVisibility
from ...symbols import DEFAULT_SYMBOLS
from ..render import stats_line, tile_label

logger = logging.getLogger(__name__)

_TILE_VARIANTS = {
    TileVisibility.HIDDEN: "default",
    TileVisibility.REVEALED: "warning",
    TileVisibility.MATCHED: "success",
}


@dataclass(slots=True)
class _TimerCall:
    timer: Timer

    def cancel(self) -> None:
        self.timer.stop()


class TextualScheduler:
    """Runs engine callbacks on the app's event loop via ``set_timer``."""

    def __init__(self, app: App) -> None:
        self.app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerCall:
        return _TimerCall(self.app.set_timer(delay, callback))


class TileButton(Button):
    """Button bound to one grid cell."""

    def __init__(self, tile: TileView) -> None:
        super().__init__(tile_label(tile), variant=_TILE_VARIANTS[tile.visibility])
        self.tile_index = tile.index

    def update_tile(self, tile: TileView) -> None:
        self.label = tile_label(tile)
        self.variant = _TILE_VARIANTS[tile.visibility]


class MemoryApp(App):
    """Grid of tiles with restart and configuration shortcuts."""

    TITLE = "Memory Matching Game"

    CSS = """
    Screen {
        layout: vertical;
        align-horizontal: center;
    }

    #status {
        height: auto;
        content-align: center middle;
    }

    #board {
        grid-gutter: 1 2;
        width: auto;
        height: auto;
        padding: 1 2;
    }

    TileButton {
        min-width: 8;
        width: 8;
        height: 3;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "restart", "Play again"),
        Binding("g", "cycle_grid", "Grid size"),
        Binding("d", "cycle_difficulty", "Difficulty"),
    ]

    def __init__(
        self,
        *,
        config: GameConfig,
        settings: EngineSettings,
        seed: int | None = None,
        symbols: Sequence[Hashable] = DEFAULT_SYMBOLS,
    ) -> None:
        super().__init__()
        self.symbols = tuple(symbols)
        self.engine = MemoryGame(
            TextualScheduler(self),
            clock=time.monotonic,
            config=config,
            settings=settings,
            rng=random.Random(seed) if seed is not None else None,
        )
        self.status_bar: Static | None = None
        self.board: Grid | None = None
        self._buttons: list[TileButton] = []
        self._rendered_generation: int | None = None
        self._message = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_bar = Static("", id="status")
        yield self.status_bar
        self.board = Grid(id="board")
        yield self.board
        yield Footer()

    def on_mount(self) -> None:
        self.engine.subscribe(self._render)
        try:
            self.engine.set_symbol_pool(self.symbols)
        except ConfigurationError as exc:
            self._message = f"[red]{exc}[/red]"
            self._render(self.engine.snapshot())

    def on_unmount(self) -> None:
        self.engine.close()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, TileButton):
            event.stop()
            self.engine.reveal(event.button.tile_index)

    def action_restart(self) -> None:
        self._message = ""
        self.engine.restart()

    def action_cycle_grid(self) -> None:
        current = self.engine.config
        choices = list(GRID_SIZE_CHOICES)
        position = choices.index(current.grid_size) if current.grid_size in choices else -1
        next_size = choices[(position + 1) % len(choices)]
        self._apply(GameConfig(grid_size=next_size, group_size=current.group_size))

    def action_cycle_difficulty(self) -> None:
        current = self.engine.config
        presets = list(Difficulty)
        difficulty = Difficulty.from_group_size(current.group_size)
        position = presets.index(difficulty) if difficulty is not None else -1
        preset = presets[(position + 1) % len(presets)]
        self._apply(GameConfig.from_difficulty(current.grid_size, preset))

    def _apply(self, config: GameConfig) -> None:
        try:
            self.engine.set_configuration(config)
        except ConfigurationError as exc:
            self._message = f"[red]{exc}[/red]"
            self._render(self.engine.snapshot())
            return
        self._message = ""

    def _headline(self) -> str:
        config = self.engine.config
        difficulty = Difficulty.from_group_size(config.group_size)
        label = difficulty.label if difficulty is not None else f"Groups of {config.group_size}"
        return f"Grid {config.grid_size}x{config.grid_size} • {label}"

    def _render(self, snapshot: SessionSnapshot) -> None:
        if self.status_bar is None or self.board is None:
            return
        lines = [self._headline()]
        if snapshot.status is SessionStatus.IDLE:
            lines.append("[dim]Waiting for symbols…[/dim]")
        else:
            lines.append(stats_line(snapshot))
        if snapshot.is_complete:
            lines.append("[bold green]🎉 All matched! Press R to play again.[/bold green]")
        if self._message:
            lines.append(self._message)
        self.status_bar.update("\n".join(lines))

        if snapshot.generation != self._rendered_generation:
            self._rebuild_board(snapshot)
            return
        for button, tile in zip(self._buttons, snapshot.tiles):
            button.update_tile(tile)

    def _rebuild_board(self, snapshot: SessionSnapshot) -> None:
        assert self.board is not None
        self._rendered_generation = snapshot.generation
        self.board.styles.grid_size_columns = self.engine.config.grid_size
        self.board.remove_children()
        self._buttons = [TileButton(tile) for tile in snapshot.tiles]
        if self._buttons:
            self.board.mount_all(self._buttons)
        logger.debug("board rebuilt for session %d", snapshot.generation)


def run_textual_app(
    *,
    config: GameConfig,
    settings: EngineSettings,
    seed: int | None,
) -> None:
    """Launch the Textual UI."""

    app = MemoryApp(config=config, settings=settings, seed=seed)
    app.run()
