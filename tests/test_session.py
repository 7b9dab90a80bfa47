from __future__ import annotations

import pytest

from memory_game.session import (
    ResolveOutcome,
    RevealOutcome,
    Session,
    SessionStatus,
    TileVisibility,
)

PAIRS_DECK = ("a", "b", "a", "b")
TRIPLES_DECK = ("x", "y", "x", "y", "x", "y")


def _started(deck: tuple[str, ...] = PAIRS_DECK, group_size: int = 2, now: float = 0.0) -> Session:
    session = Session(group_size=group_size)
    session.start(deck, now)
    return session


def _indices_of(deck: tuple[str, ...], token: str) -> list[int]:
    return [index for index, value in enumerate(deck) if value == token]


def test_new_session_is_idle_and_ignores_reveals() -> None:
    session = Session()

    assert session.status is SessionStatus.IDLE
    assert session.reveal(0) is RevealOutcome.IGNORED
    assert session.resolve(1.0) is None


def test_start_resets_state() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(1)
    session.resolve(1.0)

    session.start(PAIRS_DECK, 5.0)

    assert session.status is SessionStatus.IN_PROGRESS
    assert session.revealed == set()
    assert session.matched == set()
    assert session.move_count == 0
    assert not session.locked
    assert session.started_at == 5.0
    assert session.completed_at is None


def test_partial_reveal_does_not_count_a_move() -> None:
    session = _started(TRIPLES_DECK, group_size=3)

    assert session.reveal(0) is RevealOutcome.REVEALED
    assert session.reveal(2) is RevealOutcome.REVEALED

    assert session.move_count == 0
    assert not session.locked


def test_completing_group_locks_and_counts_move() -> None:
    session = _started()
    session.reveal(0)

    assert session.reveal(2) is RevealOutcome.GROUP_COMPLETE
    assert session.locked
    assert session.move_count == 1


def test_matching_group_moves_into_matched() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(2)

    assert session.resolve(1.0) is ResolveOutcome.MATCH
    assert session.matched == {0, 2}
    assert session.revealed == set()
    assert not session.locked


def test_mismatched_group_flips_back() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(1)

    assert session.resolve(1.0) is ResolveOutcome.MISMATCH
    assert session.matched == set()
    assert session.revealed == set()
    assert session.move_count == 1


def test_mismatch_in_triples_is_only_checked_when_group_is_full() -> None:
    session = _started(TRIPLES_DECK, group_size=3)
    session.reveal(0)

    assert session.reveal(1) is RevealOutcome.REVEALED
    assert session.revealed == {0, 1}
    assert session.reveal(3) is RevealOutcome.GROUP_COMPLETE
    assert session.resolve(1.0) is ResolveOutcome.MISMATCH


@pytest.mark.parametrize("scenario", ["revealed", "matched", "locked"])
def test_ignored_reveals_leave_state_unchanged(scenario: str) -> None:
    session = _started()
    if scenario == "revealed":
        session.reveal(0)
        target = 0
    elif scenario == "matched":
        session.reveal(0)
        session.reveal(2)
        session.resolve(1.0)
        target = 2
    else:
        session.reveal(0)
        session.reveal(1)
        target = 3

    before = (set(session.revealed), set(session.matched), session.locked, session.move_count)

    assert session.reveal(target) is RevealOutcome.IGNORED
    assert before == (session.revealed, session.matched, session.locked, session.move_count)


def test_out_of_range_index_raises() -> None:
    session = _started()

    with pytest.raises(IndexError):
        session.reveal(4)
    with pytest.raises(IndexError):
        session.reveal(-1)


def test_session_completes_when_everything_matches() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(2)
    session.resolve(1.0)
    session.reveal(1)
    session.reveal(3)
    session.resolve(3.0)

    assert session.status is SessionStatus.COMPLETE
    assert session.completed_at == 3.0
    assert session.move_count == 2
    assert session.score == 100
    assert session.timer.elapsed(50.0) == pytest.approx(3.0)


def test_complete_session_ignores_reveals() -> None:
    session = _started()
    for token in ("a", "b"):
        first, second = _indices_of(PAIRS_DECK, token)
        session.reveal(first)
        session.reveal(second)
        session.resolve(1.0)

    assert session.is_complete
    assert session.reveal(0) is RevealOutcome.IGNORED
    assert session.move_count == 2


def test_extra_moves_lower_the_score() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(1)
    session.resolve(1.0)
    for token in ("a", "b"):
        first, second = _indices_of(PAIRS_DECK, token)
        session.reveal(first)
        session.reveal(second)
        session.resolve(2.0)

    assert session.move_count == 3
    assert session.score == 95


def test_matched_count_stays_multiple_of_group_size() -> None:
    session = _started(TRIPLES_DECK, group_size=3)
    for index in _indices_of(TRIPLES_DECK, "x"):
        session.reveal(index)
    session.resolve(1.0)

    assert len(session.matched) % 3 == 0
    assert session.status is SessionStatus.IN_PROGRESS


def test_snapshot_hides_face_down_tokens() -> None:
    session = _started()
    session.reveal(0)
    session.reveal(2)
    session.resolve(1.0)
    session.reveal(1)

    snapshot = session.snapshot(2.0)

    visibilities = [tile.visibility for tile in snapshot.tiles]
    assert visibilities == [
        TileVisibility.MATCHED,
        TileVisibility.REVEALED,
        TileVisibility.MATCHED,
        TileVisibility.HIDDEN,
    ]
    assert [tile.token for tile in snapshot.tiles] == ["a", "b", "a", None]
    assert snapshot.matched_count == 2
    assert snapshot.elapsed == pytest.approx(2.0)
    assert snapshot.score is None


def test_start_rejects_deck_not_divisible_by_group() -> None:
    session = Session(group_size=3)

    with pytest.raises(ValueError):
        session.start(("a", "a"), 0.0)


def test_group_size_below_two_is_rejected() -> None:
    with pytest.raises(ValueError):
        Session(group_size=1)
