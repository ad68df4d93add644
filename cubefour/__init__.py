"""Game-state engine for a two-player 3D lattice game.

Players alternately claim cells of an N x N x N cube, one level at a time from
the top down; four in a row along any of the 13 lattice lines wins. Rendering
and input mapping live outside this package.
"""

from cubefour.config import EngineConfig, load_config
from cubefour.engine import GameEngine, new_game_state
from cubefour.errors import (
    AlreadyOccupied,
    CellOccupied,
    CoordinateOutOfBounds,
    CubeFourError,
    GameAlreadyDrawn,
    GameAlreadyWon,
    GameBusy,
    LevelLocked,
    MoveRejected,
    OutOfBounds,
)
from cubefour.lattice import Lattice
from cubefour.models import Coord, GamePhase, GameState, MoveOutcome, MoveResult, Occupancy, RejectionReason

__all__ = [
    "AlreadyOccupied",
    "CellOccupied",
    "Coord",
    "CoordinateOutOfBounds",
    "CubeFourError",
    "EngineConfig",
    "GameAlreadyDrawn",
    "GameAlreadyWon",
    "GameBusy",
    "GameEngine",
    "GamePhase",
    "GameState",
    "Lattice",
    "LevelLocked",
    "MoveOutcome",
    "MoveRejected",
    "MoveResult",
    "Occupancy",
    "OutOfBounds",
    "RejectionReason",
    "load_config",
    "new_game_state",
]
