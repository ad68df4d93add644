from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Occupancy(StrEnum):
    empty = "empty"
    player_a = "player_a"
    player_b = "player_b"


def other_player(player: Occupancy) -> Occupancy:
    if player == Occupancy.player_a:
        return Occupancy.player_b
    if player == Occupancy.player_b:
        return Occupancy.player_a
    raise ValueError(f"Not a player: {player}")


class Coord(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    z: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)


class GamePhase(StrEnum):
    in_progress = "in_progress"
    won = "won"
    drawn = "drawn"


class MoveOutcome(StrEnum):
    accepted = "accepted"
    won = "won"
    drawn = "drawn"
    rejected = "rejected"


class RejectionReason(StrEnum):
    cell_occupied = "cell_occupied"
    level_locked = "level_locked"
    game_already_won = "game_already_won"
    game_already_drawn = "game_already_drawn"
    out_of_bounds = "out_of_bounds"


class CellStatus(StrEnum):
    """What a renderer needs to know to color a cell."""

    locked = "locked"
    active = "active"
    claimed = "claimed"


class GameState(BaseModel):
    size: int = Field(..., ge=1)

    # Flat occupancy, addressed by `Lattice.index_of`.
    cells: list[Occupancy]

    active_player: Occupancy = Occupancy.player_a
    active_level: int

    phase: GamePhase = GamePhase.in_progress

    # When won.
    winner: Occupancy | None = None
    winning_line: list[Coord] = Field(default_factory=list)

    # Accepted moves, in play order.
    moves: list[Coord] = Field(default_factory=list)


class MoveResult(BaseModel):
    """Outcome of a single move attempt.

    - `cell`: the targeted coordinate, claimed unless `outcome` is `rejected`.
    - `active_player` / `active_level`: state after the move (unchanged on rejection).
    - `reason`: set only for rejections.
    """

    outcome: MoveOutcome
    cell: Coord
    player: Occupancy | None = None
    active_player: Occupancy
    active_level: int
    winner: Occupancy | None = None
    winning_line: list[Coord] = Field(default_factory=list)
    level_unlocked: bool = False
    reason: RejectionReason | None = None

    @property
    def is_accepted(self) -> bool:
        return self.outcome != MoveOutcome.rejected

    @property
    def is_game_over(self) -> bool:
        return self.outcome in {MoveOutcome.won, MoveOutcome.drawn}
