"""Benchmark harness that plays complete sessions with simulated players."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Hashable, Protocol, Sequence

import numpy as np

from .deck import DEFAULT_CONFIG, GameConfig
from .engine import EngineSettings, MemoryGame
from .scheduler import ManualScheduler
from .session import RevealOutcome, SessionSnapshot, TileVisibility
from .symbols import DEFAULT_SYMBOLS

__all__ = [
    "BenchmarkConfig",
    "BenchmarkReport",
    "GameResult",
    "MemoryPlayer",
    "Player",
    "RandomPlayer",
    "PLAYERS",
    "play_game",
    "run_benchmark",
]


class Player(Protocol):
    name: str

    def reset(self) -> None: ...

    def choose(self, snapshot: SessionSnapshot, rng: random.Random) -> int: ...

    def observe(self, snapshot: SessionSnapshot) -> None: ...


def _hidden(snapshot: SessionSnapshot) -> list[int]:
    return [tile.index for tile in snapshot.tiles if tile.visibility is TileVisibility.HIDDEN]


@dataclass(slots=True)
class RandomPlayer:
    """Flips hidden tiles uniformly at random and remembers nothing."""

    name: str = "random"

    def reset(self) -> None:
        return None

    def choose(self, snapshot: SessionSnapshot, rng: random.Random) -> int:
        return rng.choice(_hidden(snapshot))

    def observe(self, snapshot: SessionSnapshot) -> None:
        return None


@dataclass(slots=True)
class MemoryPlayer:
    """Remembers every token it has seen and completes known groups first."""

    name: str = "memory"
    seen: dict[int, Hashable] = field(default_factory=dict)

    def reset(self) -> None:
        self.seen.clear()

    def observe(self, snapshot: SessionSnapshot) -> None:
        for tile in snapshot.tiles:
            if tile.visibility is TileVisibility.MATCHED:
                self.seen.pop(tile.index, None)
            elif tile.visibility is TileVisibility.REVEALED:
                self.seen[tile.index] = tile.token

    def choose(self, snapshot: SessionSnapshot, rng: random.Random) -> int:
        hidden = _hidden(snapshot)
        revealed_tokens = {
            tile.token for tile in snapshot.tiles if tile.visibility is TileVisibility.REVEALED
        }
        unknown = [index for index in hidden if index not in self.seen]

        if len(revealed_tokens) == 1:
            (target,) = revealed_tokens
            for index in hidden:
                if self.seen.get(index) == target:
                    return index
        elif not revealed_tokens:
            positions: dict[Hashable, list[int]] = {}
            for index in hidden:
                if index in self.seen:
                    positions.setdefault(self.seen[index], []).append(index)
            for indices in positions.values():
                if len(indices) >= snapshot.group_size:
                    return indices[0]

        if unknown:
            return rng.choice(unknown)
        return rng.choice(hidden)


PLAYERS: dict[str, type[RandomPlayer] | type[MemoryPlayer]] = {
    "random": RandomPlayer,
    "memory": MemoryPlayer,
}


@dataclass(frozen=True, slots=True)
class BenchmarkConfig:
    """Parameters shared by every simulated game."""

    game: GameConfig = DEFAULT_CONFIG
    games: int = 20
    seed: int = 123
    resolution_delay: float = 1.0
    seconds_per_reveal: float = 0.5
    max_moves: int = 5000


@dataclass(frozen=True, slots=True)
class GameResult:
    completed: bool
    move_count: int
    score: int | None
    elapsed: float


@dataclass(frozen=True, slots=True)
class BenchmarkReport:
    """Per-game results plus summary statistics."""

    player: str
    config: BenchmarkConfig
    results: tuple[GameResult, ...]

    @property
    def completed(self) -> int:
        return sum(1 for result in self.results if result.completed)

    def _values(self, attribute: str) -> np.ndarray:
        values = [getattr(result, attribute) for result in self.results if result.completed]
        return np.asarray(values, dtype=np.float64)

    def summary(self, attribute: str) -> dict[str, float]:
        """Return mean/std/min/max of ``attribute`` over completed games."""

        values = self._values(attribute)
        if values.size == 0:
            return {"mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0}
        return {
            "mean": float(np.mean(values)),
            "std": float(np.std(values)),
            "min": float(np.min(values)),
            "max": float(np.max(values)),
        }

    @property
    def mean_moves(self) -> float:
        return self.summary("move_count")["mean"]

    @property
    def mean_score(self) -> float:
        return self.summary("score")["mean"]


def play_game(
    player: Player,
    config: BenchmarkConfig,
    rng: random.Random,
    pool: Sequence[Hashable] = DEFAULT_SYMBOLS,
) -> GameResult:
    """Play one session to completion (or ``max_moves``) on virtual time."""

    scheduler = ManualScheduler()
    engine = MemoryGame(
        scheduler,
        clock=scheduler.now,
        config=config.game,
        settings=EngineSettings(resolution_delay=config.resolution_delay, tick_interval=None),
        rng=rng,
    )
    engine.set_symbol_pool(pool)
    player.reset()

    try:
        snapshot = engine.snapshot()
        while not snapshot.is_complete and snapshot.move_count < config.max_moves:
            index = player.choose(snapshot, rng)
            scheduler.advance(config.seconds_per_reveal)
            outcome = engine.reveal(index)
            player.observe(engine.snapshot())
            if outcome is RevealOutcome.GROUP_COMPLETE:
                scheduler.advance(config.resolution_delay)
            snapshot = engine.snapshot()
    finally:
        engine.close()

    return GameResult(
        completed=snapshot.is_complete,
        move_count=snapshot.move_count,
        score=snapshot.score,
        elapsed=snapshot.elapsed,
    )


def run_benchmark(player_name: str, config: BenchmarkConfig) -> BenchmarkReport:
    """Play ``config.games`` seeded sessions with the named player."""

    if config.games <= 0:
        raise ValueError("games must be positive")
    try:
        player_cls = PLAYERS[player_name]
    except KeyError as exc:
        raise ValueError(f"unknown player '{player_name}'") from exc

    rng = random.Random(config.seed)
    player = player_cls()
    results = tuple(play_game(player, config, rng) for _ in range(config.games))
    return BenchmarkReport(player=player_name, config=config, results=results)
