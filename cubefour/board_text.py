from __future__ import annotations

from dataclasses import dataclass

from cubefour.lattice import Lattice
from cubefour.models import GamePhase, GameState, Occupancy


@dataclass(frozen=True, slots=True)
class BoardTextOptions:
    empty_active: str = "."
    empty_locked: str = "#"
    player_a: str = "A"
    player_b: str = "B"


def _player_label(player: Occupancy | None) -> str:
    if player == Occupancy.player_a:
        return "Player A"
    if player == Occupancy.player_b:
        return "Player B"
    return "nobody"


def _cell_char(*, state: GameState, occupancy: Occupancy, y: int, opts: BoardTextOptions) -> str:
    if occupancy == Occupancy.player_a:
        return opts.player_a
    if occupancy == Occupancy.player_b:
        return opts.player_b
    if state.phase == GamePhase.in_progress and y == state.active_level:
        return opts.empty_active
    return opts.empty_locked


def layer_to_text(*, state: GameState, y: int, opts: BoardTextOptions | None = None) -> str:
    """One y-layer as a grid: rows are x, columns are z.

    Winning cells are wrapped in brackets so a terminal can show the line.
    """

    opts = opts or BoardTextOptions()
    lattice = Lattice(state.size, state.cells)
    winning = {c.as_tuple() for c in state.winning_line}

    marker = "  <- active" if state.phase == GamePhase.in_progress and y == state.active_level else ""
    lines: list[str] = [f"LEVEL y={y}{marker}"]
    lines.append("    " + " ".join(f"{z:>3}" for z in range(state.size)))
    for x in range(state.size):
        row: list[str] = []
        for z in range(state.size):
            ch = _cell_char(state=state, occupancy=lattice.occupancy_at(x, y, z), y=y, opts=opts)
            row.append(f"[{ch}]" if (x, y, z) in winning else f" {ch} ")
        lines.append(f"{x:>3} " + " ".join(row))
    return "\n".join(lines)


def status_line(*, state: GameState) -> str:
    if state.phase == GamePhase.won:
        return f"{_player_label(state.winner)} wins!"
    if state.phase == GamePhase.drawn:
        return "Board full: draw."
    return f"{_player_label(state.active_player)} to move on level y={state.active_level}"


def board_to_text(*, state: GameState, opts: BoardTextOptions | None = None) -> str:
    """Every layer, top (y = N-1) first, followed by a status line."""

    layers = [layer_to_text(state=state, y=y, opts=opts) for y in reversed(range(state.size))]
    return "\n\n".join([*layers, status_line(state=state)])
