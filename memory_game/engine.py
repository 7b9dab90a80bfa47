"""Adapter-facing game controller.

``MemoryGame`` owns the current :class:`~memory_game.session.Session`, the
symbol pool and the configuration. Every session carries a generation id;
scheduled resolutions and timer ticks capture the id they were created for and
do nothing once a newer session has replaced it.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Hashable, Sequence

from . import scoring
from .deck import DEFAULT_CONFIG, GameConfig, build_deck
from .errors import ConfigurationError
from .scheduler import ScheduledCall, Scheduler
from .session import ResolveOutcome, RevealOutcome, Session, SessionSnapshot, SessionStatus

__all__ = ["EngineSettings", "Listener", "MemoryGame"]

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Timing and scoring knobs for the engine."""

    resolution_delay: float = 1.0
    penalty_per_extra_move: int = scoring.DEFAULT_PENALTY_PER_EXTRA_MOVE
    tick_interval: float | None = 1.0

    def validate(self) -> None:
        if self.resolution_delay < 0:
            raise ConfigurationError("resolution_delay must be non-negative")
        if self.penalty_per_extra_move < 0:
            raise ConfigurationError("penalty_per_extra_move must be non-negative")
        if self.tick_interval is not None and self.tick_interval <= 0:
            raise ConfigurationError("tick_interval must be positive when set")


class MemoryGame:
    """Single-player memory game bound to a scheduler and a clock."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        clock: Callable[[], float] | None = None,
        config: GameConfig = DEFAULT_CONFIG,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        settings = settings or EngineSettings()
        settings.validate()
        config.validate()
        self.scheduler = scheduler
        self.clock = clock or time.monotonic
        self.settings = settings
        self.rng = rng
        self._config = config
        self._pool: tuple[Hashable, ...] = ()
        self._generation = 0
        self._session: Session | None = None
        self._resolution: ScheduledCall | None = None
        self._tick: ScheduledCall | None = None
        self._listeners: list[Listener] = []

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def pool(self) -> tuple[Hashable, ...]:
        return self._pool

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def status(self) -> SessionStatus:
        if self._session is None:
            return SessionStatus.IDLE
        return self._session.status

    # ------------------------------------------------------------------ inputs

    def set_symbol_pool(self, pool: Sequence[Hashable]) -> None:
        """Replace the symbol pool and deal a fresh session when possible.

        An empty pool leaves the engine idle. A pool that is too small for the
        current configuration raises ``ConfigurationError`` and also leaves the
        engine idle until a smaller grid is requested.
        """

        self._pool = tuple(pool)
        self._discard_session()
        if not self._pool:
            logger.debug("symbol pool empty; staying idle")
            self._notify()
            return
        try:
            self._start_session()
        except ConfigurationError as exc:
            logger.warning("symbol pool rejected: %s", exc)
            self._notify()
            raise

    def set_configuration(self, config: GameConfig) -> None:
        """Switch grid/group size; invalid requests leave the current game untouched."""

        try:
            if self._pool:
                config.require_pool(len(self._pool))
            else:
                config.validate()
        except ConfigurationError as exc:
            logger.warning("configuration %s rejected: %s", config, exc)
            raise
        self._config = config
        if self._pool:
            self._start_session()

    def restart(self) -> None:
        """Deal a new deck with the current configuration; no-op while idle."""

        if not self._pool:
            return
        self._start_session()

    def reveal(self, index: int) -> RevealOutcome:
        if self._session is None:
            return RevealOutcome.IGNORED
        outcome = self._session.reveal(index)
        if outcome is RevealOutcome.IGNORED:
            logger.debug("reveal %d ignored", index)
            return outcome
        if outcome is RevealOutcome.GROUP_COMPLETE:
            generation = self._session.generation
            self._resolution = self.scheduler.call_later(
                self.settings.resolution_delay,
                lambda: self._resolve(generation),
            )
        self._notify()
        return outcome

    def resolve_now(self) -> ResolveOutcome | None:
        """Resolve a pending group immediately instead of waiting for the delay."""

        if self._session is None or not self._session.locked:
            return None
        self._cancel(self._resolution)
        self._resolution = None
        return self._resolve(self._session.generation)

    def close(self) -> None:
        """Cancel outstanding callbacks and drop the current session."""

        self._discard_session()

    # ---------------------------------------------------------------- outputs

    def snapshot(self) -> SessionSnapshot:
        if self._session is None:
            return Session(group_size=self._config.group_size, generation=self._generation).snapshot(
                self.clock()
            )
        return self._session.snapshot(self.clock())

    def elapsed(self) -> float:
        if self._session is None:
            return 0.0
        return self._session.timer.elapsed(self.clock())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe function."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # --------------------------------------------------------------- internals

    def _start_session(self) -> None:
        config = self._config
        deck = build_deck(self._pool, config.grid_size, config.group_size, self.rng)
        self._discard_session()
        self._generation += 1
        session = Session(
            group_size=config.group_size,
            penalty_per_extra_move=self.settings.penalty_per_extra_move,
            generation=self._generation,
        )
        session.start(deck, self.clock())
        self._session = session
        logger.info(
            "session %d started: %dx%d grid, groups of %d, %d tiles (%d unused)",
            self._generation,
            config.grid_size,
            config.grid_size,
            config.group_size,
            len(deck),
            config.unused_cells,
        )
        self._schedule_tick(self._generation)
        self._notify()

    def _discard_session(self) -> None:
        self._cancel(self._resolution)
        self._cancel(self._tick)
        self._resolution = None
        self._tick = None
        self._session = None

    def _is_current(self, generation: int) -> bool:
        return self._session is not None and self._session.generation == generation

    def _resolve(self, generation: int) -> ResolveOutcome | None:
        if not self._is_current(generation):
            logger.debug("stale resolution for session %d dropped", generation)
            return None
        session = self._session
        assert session is not None
        self._resolution = None
        outcome = session.resolve(self.clock())
        if outcome is None:
            return None
        logger.debug("session %d resolved group: %s", generation, outcome.value)
        if session.is_complete:
            self._cancel(self._tick)
            self._tick = None
        self._notify()
        return outcome

    def _schedule_tick(self, generation: int) -> None:
        interval = self.settings.tick_interval
        if interval is None:
            return
        self._tick = self.scheduler.call_later(interval, lambda: self._on_tick(generation))

    def _on_tick(self, generation: int) -> None:
        if not self._is_current(generation):
            logger.debug("stale tick for session %d dropped", generation)
            return
        session = self._session
        assert session is not None
        self._tick = None
        if session.status is not SessionStatus.IN_PROGRESS:
            return
        self._notify()
        self._schedule_tick(generation)

    @staticmethod
    def _cancel(call: ScheduledCall | None) -> None:
        if call is not None:
            call.cancel()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
