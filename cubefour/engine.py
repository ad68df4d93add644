from __future__ import annotations

import logging
import threading

from cubefour.config import EngineConfig
from cubefour.errors import MoveRejected
from cubefour.fsm import GameFSM
from cubefour.lattice import Lattice
from cubefour.lock import game_lock
from cubefour.models import (
    CellStatus,
    Coord,
    GamePhase,
    GameState,
    MoveOutcome,
    MoveResult,
    Occupancy,
    other_player,
)
from cubefour.turn_processing.validators import DEFAULT_MOVE_PIPELINE, MoveContext, ValidatorPipeline
from cubefour.win_detection import find_winning_run

logger = logging.getLogger(__name__)


def new_game_state(size: int) -> GameState:
    """Empty lattice, player A to move, only the top layer unlocked."""

    return GameState(
        size=size,
        cells=[Occupancy.empty] * size**3,
        active_player=Occupancy.player_a,
        active_level=size - 1,
        phase=GamePhase.in_progress,
    )


def check_resumable_state(state: GameState) -> None:
    """Raise ValueError unless `state` could have been reached by legal play.

    Checked: cell count, active player and level, phase against winner, the move
    log against claimed cells, and that every layer above the active one is full.
    """

    n = state.size
    if len(state.cells) != n**3:
        raise ValueError(f"Expected {n**3} cells for size {n}, got {len(state.cells)}")
    if state.active_player == Occupancy.empty:
        raise ValueError("active_player must be a player")
    if not 0 <= state.active_level < n:
        raise ValueError(f"active_level {state.active_level} is outside [0, {n})")

    if state.phase == GamePhase.won:
        if state.winner is None or state.winner == Occupancy.empty:
            raise ValueError("A won game needs a winner")
        if not state.winning_line:
            raise ValueError("A won game needs its winning line")
    elif state.winner is not None or state.winning_line:
        raise ValueError(f"Phase {state.phase.value} cannot carry a winner")

    lattice = Lattice(n, state.cells)
    claimed = sum(1 for c in state.cells if c != Occupancy.empty)
    if len(state.moves) != claimed:
        raise ValueError(f"{len(state.moves)} moves recorded but {claimed} cells claimed")
    if len({m.as_tuple() for m in state.moves}) != len(state.moves):
        raise ValueError("Move log repeats a cell")
    for m in state.moves:
        if not lattice.in_bounds(m.x, m.y, m.z) or lattice.occupancy_at(m.x, m.y, m.z) == Occupancy.empty:
            raise ValueError(f"Move {m.as_tuple()} does not match a claimed cell")

    for y in range(state.active_level + 1, n):
        if not lattice.is_layer_full(y):
            raise ValueError(f"Level {y} is above the active level but not full")
    if state.phase == GamePhase.drawn and not lattice.is_full():
        raise ValueError("A drawn game needs a full board")


class GameEngine:
    """Owns one game session and is the only thing that mutates it.

    `attempt_move` is the inbound entry point for input collaborators. Renderers
    read `occupancy_at`, `is_layer_full`, `cell_status` and the turn fields, or
    re-derive their view from each `MoveResult`.

    A `state` passed in is checked with `check_resumable_state` and then owned by
    the engine; later changes to it from outside are not detected.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        state: GameState | None = None,
        pipeline: ValidatorPipeline = DEFAULT_MOVE_PIPELINE,
        blocking: bool = True,
    ) -> None:
        self.config = config or EngineConfig()
        if state is None:
            state = new_game_state(self.config.size)
        elif state.size != self.config.size:
            raise ValueError(f"State size {state.size} does not match configured size {self.config.size}")
        else:
            check_resumable_state(state)
        self._state = state
        self._lattice = Lattice(state.size, state.cells)
        self._pipeline = pipeline
        self._blocking = blocking
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        return self._state.size

    @property
    def state(self) -> GameState:
        """Detached snapshot; mutating it does not affect the engine."""

        return self._state.model_copy(deep=True)

    @property
    def active_player(self) -> Occupancy:
        return self._state.active_player

    @property
    def active_level(self) -> int:
        return self._state.active_level

    @property
    def winner(self) -> Occupancy | None:
        return self._state.winner

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    def occupancy_at(self, x: int, y: int, z: int) -> Occupancy:
        return self._lattice.occupancy_at(x, y, z)

    def is_layer_full(self, y: int) -> bool:
        return self._lattice.is_layer_full(y)

    def cell_status(self, x: int, y: int, z: int) -> CellStatus:
        if self._lattice.occupancy_at(x, y, z) != Occupancy.empty:
            return CellStatus.claimed
        if self._state.phase == GamePhase.in_progress and y == self._state.active_level:
            return CellStatus.active
        return CellStatus.locked

    def attempt_move(self, x: int, y: int, z: int) -> MoveResult:
        """Play the active player's piece at (x, y, z).

        Rejections come back as a `rejected` result with a reason; state is untouched.
        """

        try:
            return self.apply_move(x, y, z)
        except MoveRejected as e:
            return MoveResult(
                outcome=MoveOutcome.rejected,
                cell=Coord(x=x, y=y, z=z),
                active_player=self._state.active_player,
                active_level=self._state.active_level,
                winner=self._state.winner,
                reason=e.reason,
            )

    def apply_move(self, x: int, y: int, z: int) -> MoveResult:
        """Like `attempt_move`, but raises the `MoveRejected` subclass on rejection."""

        with game_lock(self._lock, blocking=self._blocking):
            state = self._state
            player = state.active_player
            ctx = MoveContext(x=x, y=y, z=z, player=player)

            try:
                self._pipeline.validate(ctx=ctx, state=state, lattice=self._lattice)
            except MoveRejected as e:
                logger.debug("move rejected: %s (%s)", ctx, e.reason.value)
                raise

            cell = Coord(x=x, y=y, z=z)
            self._lattice.set_occupancy(x, y, z, player)
            state.moves.append(cell)

            fsm = GameFSM(state)

            run = find_winning_run(self._lattice, cell, player, threshold=self.config.win_threshold)
            if run is not None:
                fsm.run_completed()
                fsm.commit_phase()
                state.winner = player
                state.winning_line = run
                logger.info("%s wins at %s along %s", player.value, cell.as_tuple(), [c.as_tuple() for c in run])
                return MoveResult(
                    outcome=MoveOutcome.won,
                    cell=cell,
                    player=player,
                    active_player=state.active_player,
                    active_level=state.active_level,
                    winner=player,
                    winning_line=list(run),
                )

            state.active_player = other_player(player)

            outcome = MoveOutcome.accepted
            level_unlocked = False
            if self._lattice.is_layer_full(state.active_level):
                if state.active_level == 0:
                    fsm.board_filled()
                    fsm.commit_phase()
                    outcome = MoveOutcome.drawn
                    logger.info("board full after %d moves, game drawn", len(state.moves))
                else:
                    state.active_level -= 1
                    level_unlocked = True
                    logger.info("level %d full, unlocking level %d", state.active_level + 1, state.active_level)

            logger.info("%s claimed %s", player.value, cell.as_tuple())
            return MoveResult(
                outcome=outcome,
                cell=cell,
                player=player,
                active_player=state.active_player,
                active_level=state.active_level,
                level_unlocked=level_unlocked,
            )
