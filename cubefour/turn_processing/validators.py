from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from cubefour.errors import CellOccupied, GameAlreadyDrawn, GameAlreadyWon, LevelLocked, OutOfBounds
from cubefour.lattice import Lattice
from cubefour.models import GamePhase, GameState, Occupancy


@dataclass(frozen=True, slots=True)
class MoveContext:
    """Inputs available to validators.

    Keep this tight so it can be logged as-is.
    """

    x: int
    y: int
    z: int
    player: Occupancy


class MoveValidator(ABC):
    """A small, composable validation unit for an incoming move."""

    @abstractmethod
    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class CompletedGameValidator(MoveValidator):
    """Deny every move once the game has a winner or the board is full."""

    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        if state.phase == GamePhase.won:
            winner = state.winner.value if state.winner else "unknown"
            raise GameAlreadyWon(f"Game is already won by {winner}")
        if state.phase == GamePhase.drawn:
            raise GameAlreadyDrawn("Game ended in a draw")


@dataclass(frozen=True, slots=True)
class BoundsValidator(MoveValidator):
    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        if not lattice.in_bounds(ctx.x, ctx.y, ctx.z):
            raise OutOfBounds(f"({ctx.x}, {ctx.y}, {ctx.z}) is outside the lattice")


@dataclass(frozen=True, slots=True)
class LevelValidator(MoveValidator):
    """Only the active level is playable; layers below it are still locked.

    Layers above the active level are full, so moves there fall through to the
    occupancy check.
    """

    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        if ctx.y < state.active_level:
            raise LevelLocked(f"Level {ctx.y} is locked (active level is {state.active_level})")


@dataclass(frozen=True, slots=True)
class EmptyCellValidator(MoveValidator):
    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        if lattice.occupancy_at(ctx.x, ctx.y, ctx.z) != Occupancy.empty:
            raise CellOccupied(f"Cell ({ctx.x}, {ctx.y}, {ctx.z}) is already claimed")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[MoveValidator, ...]

    def validate(self, *, ctx: MoveContext, state: GameState, lattice: Lattice) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state, lattice=lattice)


# Order matters: a finished game reports that before anything about the cell.
DEFAULT_MOVE_PIPELINE = ValidatorPipeline(
    validators=(
        CompletedGameValidator(),
        BoundsValidator(),
        LevelValidator(),
        EmptyCellValidator(),
    )
)
