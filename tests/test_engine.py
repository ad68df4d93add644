from __future__ import annotations

import threading

import pytest

from cubefour.config import EngineConfig
from cubefour.engine import GameEngine, check_resumable_state, new_game_state
from cubefour.errors import CellOccupied, GameAlreadyDrawn, GameAlreadyWon, GameBusy, LevelLocked, OutOfBounds
from cubefour.models import CellStatus, Coord, GamePhase, MoveOutcome, MoveResult, Occupancy, RejectionReason


def test_fresh_engine_state(engine: GameEngine) -> None:
    assert engine.active_player == Occupancy.player_a
    assert engine.active_level == 4
    assert engine.winner is None
    assert engine.phase == GamePhase.in_progress
    assert engine.occupancy_at(2, 4, 2) == Occupancy.empty


def test_bottom_layer_is_locked_on_a_fresh_engine(engine: GameEngine) -> None:
    before = engine.state

    result = engine.attempt_move(2, 0, 2)

    assert result.outcome == MoveOutcome.rejected
    assert result.reason == RejectionReason.level_locked
    assert engine.state == before

    with pytest.raises(LevelLocked):
        engine.apply_move(2, 0, 2)


def test_every_cell_below_the_active_level_is_locked(engine: GameEngine) -> None:
    before = engine.state
    for x in range(5):
        for y in range(4):
            for z in range(5):
                result = engine.attempt_move(x, y, z)
                assert result.reason == RejectionReason.level_locked
    assert engine.state == before


def test_replaying_an_accepted_move_is_cell_occupied(engine: GameEngine) -> None:
    assert engine.attempt_move(1, 4, 1).outcome == MoveOutcome.accepted
    before = engine.state

    result = engine.attempt_move(1, 4, 1)

    assert result.reason == RejectionReason.cell_occupied
    assert result.active_player == Occupancy.player_b
    assert engine.state == before
    with pytest.raises(CellOccupied):
        engine.apply_move(1, 4, 1)


def test_players_alternate_on_accepted_moves_only(engine: GameEngine) -> None:
    seen: list[Occupancy] = []
    for x, y, z in [(0, 4, 0), (0, 0, 0), (4, 4, 4), (4, 4, 4), (2, 4, 3)]:
        result = engine.attempt_move(x, y, z)
        if result.is_accepted:
            seen.append(result.player)

    assert seen == [Occupancy.player_a, Occupancy.player_b, Occupancy.player_a]
    assert engine.active_player == Occupancy.player_b


def test_four_in_a_row_on_the_top_layer_wins(engine: GameEngine) -> None:
    moves = [(0, 4, 0), (0, 4, 4), (1, 4, 0), (1, 4, 4), (2, 4, 0), (2, 4, 4)]
    for move in moves:
        assert engine.attempt_move(*move).outcome == MoveOutcome.accepted

    result = engine.attempt_move(3, 4, 0)

    assert result.outcome == MoveOutcome.won
    assert result.winner == Occupancy.player_a
    assert result.is_game_over
    assert [c.as_tuple() for c in result.winning_line] == [(0, 4, 0), (1, 4, 0), (2, 4, 0), (3, 4, 0)]
    assert engine.phase == GamePhase.won
    assert engine.winner == Occupancy.player_a
    # The winner keeps the turn; nothing else advances.
    assert engine.active_player == Occupancy.player_a


def test_moves_after_a_win_are_rejected(engine: GameEngine) -> None:
    for move in [(0, 4, 0), (0, 4, 4), (1, 4, 0), (1, 4, 4), (2, 4, 0), (2, 4, 4), (3, 4, 0)]:
        engine.attempt_move(*move)
    before = engine.state

    result = engine.attempt_move(4, 4, 4)

    assert result.reason == RejectionReason.game_already_won
    assert result.winner == Occupancy.player_a
    assert engine.state == before
    with pytest.raises(GameAlreadyWon) as e:
        engine.apply_move(4, 0, 4)
    assert "player_a" in str(e.value)


def test_winning_move_placed_in_the_middle(engine: GameEngine) -> None:
    moves = [(0, 4, 1), (4, 4, 4), (1, 4, 2), (4, 4, 3), (3, 4, 4), (4, 4, 0)]
    for move in moves:
        engine.attempt_move(*move)

    result = engine.attempt_move(2, 4, 3)

    assert result.outcome == MoveOutcome.won
    assert {c.as_tuple() for c in result.winning_line} == {(0, 4, 1), (1, 4, 2), (2, 4, 3), (3, 4, 4)}


def test_full_top_layer_unlocks_the_next_level(engine: GameEngine, top_layer_order: list[tuple[int, int, int]]) -> None:
    order = top_layer_order
    assert len(order) == 25

    results = [engine.attempt_move(*move) for move in order]

    assert all(r.outcome == MoveOutcome.accepted for r in results)
    assert [r.level_unlocked for r in results].count(True) == 1
    assert results[-1].level_unlocked
    assert results[-2].active_level == 4
    assert engine.is_layer_full(4)
    assert engine.active_level == 3
    # 25 moves, A moved last.
    assert engine.active_player == Occupancy.player_b

    assert engine.attempt_move(2, 2, 2).reason == RejectionReason.level_locked
    assert engine.attempt_move(0, 4, 0).reason == RejectionReason.cell_occupied

    result = engine.attempt_move(2, 3, 2)
    assert result.outcome == MoveOutcome.accepted
    assert result.player == Occupancy.player_b


def test_full_board_without_a_run_is_a_draw() -> None:
    # Lines on a 3-cube are only three long, so no run of four is possible.
    engine = GameEngine(EngineConfig(size=3))
    levels: list[int] = []
    result = None
    for y in (2, 1, 0):
        for x in range(3):
            for z in range(3):
                result = engine.attempt_move(x, y, z)
                assert result.is_accepted
                levels.append(result.active_level)

    assert result is not None
    assert result.outcome == MoveOutcome.drawn
    assert result.is_game_over
    assert result.winner is None
    assert engine.phase == GamePhase.drawn
    assert engine.active_level == 0
    assert min(levels) == 0
    # Level only ever steps down by one.
    assert all(a - b in {0, 1} for a, b in zip(levels, levels[1:]))

    with pytest.raises(GameAlreadyDrawn):
        engine.apply_move(0, 0, 0)


def test_out_of_bounds_is_rejected(engine: GameEngine) -> None:
    result = engine.attempt_move(5, 4, 0)
    assert result.reason == RejectionReason.out_of_bounds
    with pytest.raises(OutOfBounds):
        engine.apply_move(0, 4, -1)


def test_state_snapshot_is_detached(engine: GameEngine) -> None:
    snapshot = engine.state
    snapshot.cells[0] = Occupancy.player_b
    snapshot.active_level = 0

    assert engine.occupancy_at(0, 0, 0) == Occupancy.empty
    assert engine.active_level == 4


def test_engine_resumes_from_a_state() -> None:
    state = new_game_state(4)
    first = GameEngine(EngineConfig(size=4), state=state)
    first.attempt_move(0, 3, 0)

    resumed = GameEngine(EngineConfig(size=4), state=first.state)
    assert resumed.occupancy_at(0, 3, 0) == Occupancy.player_a
    assert resumed.active_player == Occupancy.player_b

    with pytest.raises(ValueError):
        GameEngine(EngineConfig(size=5), state=new_game_state(4))


def test_cell_status_for_renderers(engine: GameEngine) -> None:
    engine.attempt_move(0, 4, 0)

    assert engine.cell_status(0, 4, 0) == CellStatus.claimed
    assert engine.cell_status(1, 4, 0) == CellStatus.active
    assert engine.cell_status(1, 3, 0) == CellStatus.locked


def test_busy_engine_fails_fast_when_non_blocking() -> None:
    engine = GameEngine(EngineConfig(size=5), blocking=False)
    engine._lock.acquire()
    try:
        with pytest.raises(GameBusy):
            engine.attempt_move(0, 4, 0)
    finally:
        engine._lock.release()

    assert engine.attempt_move(0, 4, 0).is_accepted


def test_concurrent_callers_are_serialized_one_turn_at_a_time(engine: GameEngine) -> None:
    cells = [(x, 4, z) for x in range(5) for z in range(5)]
    # Three callers race for every top-layer cell.
    targets = [cell for cell in cells for _ in range(3)]
    start = threading.Barrier(len(targets))
    results: list[MoveResult] = []
    results_lock = threading.Lock()

    def _play(cell: tuple[int, int, int]) -> None:
        start.wait()
        result = engine.attempt_move(*cell)
        with results_lock:
            results.append(result)

    threads = [threading.Thread(target=_play, args=(cell,)) for cell in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not any(t.is_alive() for t in threads)
    assert len(results) == len(targets)

    accepted = [r for r in results if r.is_accepted]
    accepted_cells = [r.cell.as_tuple() for r in accepted]
    assert len(accepted_cells) == len(set(accepted_cells))

    state = engine.state
    assert len(state.moves) == len(accepted)
    assert {m.as_tuple() for m in state.moves} == set(accepted_cells)

    # Play order strictly alternates, starting with player A.
    for i, move in enumerate(state.moves):
        expected = Occupancy.player_a if i % 2 == 0 else Occupancy.player_b
        assert engine.occupancy_at(move.x, move.y, move.z) == expected

    if state.phase == GamePhase.won:
        assert state.winner == (Occupancy.player_a if len(accepted) % 2 == 1 else Occupancy.player_b)
        assert state.active_player == state.winner
    else:
        assert state.active_player == (Occupancy.player_a if len(accepted) % 2 == 0 else Occupancy.player_b)

    for r in results:
        if not r.is_accepted:
            assert r.reason in {RejectionReason.cell_occupied, RejectionReason.game_already_won}


def test_resumed_state_is_checked() -> None:
    engine = GameEngine(EngineConfig(size=4))
    engine.attempt_move(0, 3, 0)
    good = engine.state
    check_resumable_state(good)

    bad_level = good.model_copy(deep=True)
    bad_level.active_level = 4
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=bad_level)
    assert "active_level 4" in str(e.value)

    phantom_winner = good.model_copy(deep=True)
    phantom_winner.winner = Occupancy.player_a
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=phantom_winner)
    assert "cannot carry a winner" in str(e.value)

    won_without_winner = good.model_copy(deep=True)
    won_without_winner.phase = GamePhase.won
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=won_without_winner)
    assert "needs a winner" in str(e.value)

    lost_move = good.model_copy(deep=True)
    lost_move.moves = []
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=lost_move)
    assert "0 moves recorded but 1 cells claimed" in str(e.value)

    wrong_move = good.model_copy(deep=True)
    wrong_move.moves = [Coord(x=1, y=3, z=1)]
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=wrong_move)
    assert "does not match a claimed cell" in str(e.value)

    skipped_level = good.model_copy(deep=True)
    skipped_level.active_level = 2
    with pytest.raises(ValueError) as e:
        GameEngine(EngineConfig(size=4), state=skipped_level)
    assert "Level 3 is above the active level but not full" in str(e.value)
