"""Typer entry-point wiring for the memory game CLI."""

from __future__ import annotations

import logging
import random
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import benchmark
from ..deck import Difficulty, GameConfig, build_deck
from ..engine import EngineSettings
from ..errors import ConfigurationError
from ..symbols import DEFAULT_SYMBOLS
from .render import render_deck
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(level: str, log_file: Path | None) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"unknown log level '{level}'", param_hint="--log-level")
    handlers: list[logging.Handler] = []
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    else:
        handlers.append(logging.NullHandler())
    logging.basicConfig(level=numeric, format=LOG_FORMAT, handlers=handlers)


def _game_config(grid_size: int, difficulty: Difficulty) -> GameConfig:
    try:
        config = GameConfig.from_difficulty(grid_size, difficulty)
        config.require_pool(len(DEFAULT_SYMBOLS))
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return config


@app.callback()
def main_options(
    log_level: str = typer.Option("WARNING", envvar="MEMORY_GAME_LOG_LEVEL", help="Logging level."),
    log_file: Path | None = typer.Option(None, envvar="MEMORY_GAME_LOG_FILE", help="Write logs to this file."),
) -> None:
    """Tile-matching memory game."""

    _configure_logging(log_level, log_file)


@app.command()
def play(
    grid_size: int = typer.Option(4, min=2, envvar="MEMORY_GAME_GRID_SIZE", help="Side length of the grid."),
    difficulty: Difficulty = typer.Option(
        Difficulty.EASY,
        envvar="MEMORY_GAME_DIFFICULTY",
        help="easy = pairs, medium = triples, hard = quadruples.",
    ),
    delay: float = typer.Option(1.0, min=0.0, envvar="MEMORY_GAME_DELAY", help="Seconds a full group stays visible."),
    seed: int | None = typer.Option(None, envvar="MEMORY_GAME_SEED", help="Random seed for reproducible decks."),
) -> None:
    """Play interactively in the terminal."""

    config = _game_config(grid_size, difficulty)
    run_textual_app(config=config, settings=EngineSettings(resolution_delay=delay), seed=seed)


@app.command()
def deal(
    grid_size: int = typer.Option(4, min=2, help="Side length of the grid."),
    difficulty: Difficulty = typer.Option(Difficulty.EASY, help="Group size preset."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible decks."),
) -> None:
    """Print a freshly built deck face-up."""

    config = _game_config(grid_size, difficulty)
    rng = random.Random(seed) if seed is not None else None
    deck = build_deck(DEFAULT_SYMBOLS, config.grid_size, config.group_size, rng)
    console.print(render_deck(deck, config.grid_size))
    console.print(
        f"[cyan]{len(deck)} tiles[/cyan], {config.unique_needed} symbols x {config.group_size}, "
        f"{config.unused_cells} unused cell(s)"
    )


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(20, min=1, help="Number of simulated games per player."),
    grid_size: int = typer.Option(4, min=2, help="Side length of the grid."),
    difficulty: Difficulty = typer.Option(Difficulty.EASY, help="Group size preset."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    max_moves: int = typer.Option(5000, min=1, help="Give up on a game after this many moves."),
) -> None:
    """Compare the random and perfect-memory players."""

    config = benchmark.BenchmarkConfig(
        game=_game_config(grid_size, difficulty),
        games=games,
        seed=seed,
        max_moves=max_moves,
    )

    table = Table(title="Simulated Players", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Completed", justify="right")
    table.add_column("Moves (mean ± std)", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Score (mean)", justify="right")

    for name in benchmark.PLAYERS:
        report = benchmark.run_benchmark(name, config)
        moves = report.summary("move_count")
        table.add_row(
            name,
            f"{report.completed}/{games}",
            f"{moves['mean']:.1f} ± {moves['std']:.1f}",
            f"{moves['min']:.0f}",
            f"{report.mean_score:.1f}",
        )

    console.print(table)


def main() -> None:
    """Entry-point for ``python -m memory_game.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
