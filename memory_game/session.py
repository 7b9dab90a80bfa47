"""Session state machine driving reveals, resolutions and completion."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Sequence

from . import scoring
from .timer import SessionTimer

__all__ = [
    "RevealOutcome",
    "ResolveOutcome",
    "Session",
    "SessionSnapshot",
    "SessionStatus",
    "TileView",
    "TileVisibility",
]

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    """Lifecycle of a session."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class TileVisibility(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


class RevealOutcome(str, Enum):
    """Result of a single reveal intent."""

    IGNORED = "ignored"
    REVEALED = "revealed"
    GROUP_COMPLETE = "group_complete"


class ResolveOutcome(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass(frozen=True, slots=True)
class TileView:
    """Visible state of one grid cell; ``token`` is ``None`` while face-down."""

    index: int
    visibility: TileVisibility
    token: Hashable | None


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view handed to presentation adapters."""

    status: SessionStatus
    generation: int
    group_size: int
    tiles: tuple[TileView, ...]
    move_count: int
    elapsed: float
    locked: bool
    score: int | None

    @property
    def is_complete(self) -> bool:
        return self.status is SessionStatus.COMPLETE

    @property
    def matched_count(self) -> int:
        return sum(1 for tile in self.tiles if tile.visibility is TileVisibility.MATCHED)


@dataclass(slots=True)
class Session:
    """Mutable game state for one deck.

    ``revealed`` holds face-up cells that are not yet committed; ``matched``
    only ever grows and its size is always a multiple of ``group_size``.
    ``locked`` is set while a full group waits for resolution.
    """

    group_size: int = 2
    penalty_per_extra_move: int = scoring.DEFAULT_PENALTY_PER_EXTRA_MOVE
    generation: int = 0
    deck: tuple[Hashable, ...] = ()
    revealed: set[int] = field(default_factory=set)
    matched: set[int] = field(default_factory=set)
    locked: bool = False
    move_count: int = 0
    timer: SessionTimer = field(default_factory=SessionTimer)
    score: int | None = None
    status: SessionStatus = SessionStatus.IDLE

    def __post_init__(self) -> None:
        if self.group_size < 2:
            raise ValueError("group_size must be at least 2")

    @property
    def started_at(self) -> float | None:
        return self.timer.started_at

    @property
    def completed_at(self) -> float | None:
        return self.timer.completed_at

    @property
    def is_complete(self) -> bool:
        return self.status is SessionStatus.COMPLETE

    def start(self, deck: Sequence[Hashable], now: float) -> None:
        """Load ``deck`` and reset every counter; valid from any state."""

        if len(deck) % self.group_size:
            raise ValueError("deck length must be a multiple of group_size")
        self.deck = tuple(deck)
        self.revealed = set()
        self.matched = set()
        self.locked = False
        self.move_count = 0
        self.score = None
        self.timer.start(now)
        self.status = SessionStatus.IN_PROGRESS if self.deck else SessionStatus.IDLE

    def reveal(self, index: int) -> RevealOutcome:
        """Flip ``index`` face-up, locking once a full group is showing."""

        if self.status is not SessionStatus.IN_PROGRESS:
            return RevealOutcome.IGNORED
        if index < 0 or index >= len(self.deck):
            raise IndexError(f"tile index {index} outside deck of {len(self.deck)}")
        if self.locked or index in self.revealed or index in self.matched:
            return RevealOutcome.IGNORED

        self.revealed.add(index)
        if len(self.revealed) < self.group_size:
            return RevealOutcome.REVEALED

        self.locked = True
        self.move_count += 1
        return RevealOutcome.GROUP_COMPLETE

    def resolve(self, now: float) -> ResolveOutcome | None:
        """Evaluate the locked group; returns ``None`` when nothing is pending."""

        if not self.locked:
            return None

        tokens = {self.deck[index] for index in self.revealed}
        if len(tokens) == 1:
            self.matched.update(self.revealed)
            outcome = ResolveOutcome.MATCH
        else:
            outcome = ResolveOutcome.MISMATCH
        self.revealed = set()
        self.locked = False

        if len(self.matched) == len(self.deck):
            self._complete(now)
        return outcome

    def _complete(self, now: float) -> None:
        self.status = SessionStatus.COMPLETE
        self.timer.stop(now)
        self.score = scoring.score(
            self.move_count,
            len(self.deck),
            self.group_size,
            self.penalty_per_extra_move,
        )
        logger.info(
            "session %d complete: moves=%d score=%d elapsed=%.1fs",
            self.generation,
            self.move_count,
            self.score,
            self.timer.elapsed(now),
        )

    def visibility(self, index: int) -> TileVisibility:
        if index in self.matched:
            return TileVisibility.MATCHED
        if index in self.revealed:
            return TileVisibility.REVEALED
        return TileVisibility.HIDDEN

    def snapshot(self, now: float) -> SessionSnapshot:
        """Return an immutable copy of the observable state at ``now``."""

        tiles = []
        for index, token in enumerate(self.deck):
            visibility = self.visibility(index)
            tiles.append(
                TileView(
                    index=index,
                    visibility=visibility,
                    token=None if visibility is TileVisibility.HIDDEN else token,
                )
            )
        return SessionSnapshot(
            status=self.status,
            generation=self.generation,
            group_size=self.group_size,
            tiles=tuple(tiles),
            move_count=self.move_count,
            elapsed=self.timer.elapsed(now),
            locked=self.locked,
            score=self.score,
        )
