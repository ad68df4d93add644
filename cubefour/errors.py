from __future__ import annotations

from cubefour.models import RejectionReason


class CubeFourError(ValueError):
    """Base class for every error raised by the engine."""


class CoordinateOutOfBounds(CubeFourError):
    def __init__(self, x: int, y: int, z: int, size: int) -> None:
        super().__init__(f"Coordinate ({x}, {y}, {z}) is outside the {size}x{size}x{size} lattice")
        self.coord = (x, y, z)
        self.size = size


class AlreadyOccupied(CubeFourError):
    def __init__(self, x: int, y: int, z: int) -> None:
        super().__init__(f"Cell ({x}, {y}, {z}) is already occupied")
        self.coord = (x, y, z)


class GameBusy(CubeFourError):
    """Another caller holds the game's move lock."""


class MoveRejected(CubeFourError):
    reason: RejectionReason

    def __init__(self, message: str) -> None:
        super().__init__(message)


class CellOccupied(MoveRejected):
    reason = RejectionReason.cell_occupied


class LevelLocked(MoveRejected):
    reason = RejectionReason.level_locked


class GameAlreadyWon(MoveRejected):
    reason = RejectionReason.game_already_won


class GameAlreadyDrawn(MoveRejected):
    reason = RejectionReason.game_already_drawn


class OutOfBounds(MoveRejected):
    reason = RejectionReason.out_of_bounds
