"""Local run detection around a just-claimed cell.

Only cells on the 13 lines through the placed cell are inspected, so the cost
is bounded by `threshold * len(LINE_DIRECTIONS)` whatever the lattice size.
"""

from __future__ import annotations

from itertools import product

from cubefour.config import WIN_THRESHOLD
from cubefour.lattice import Lattice
from cubefour.models import Coord, Occupancy

Direction = tuple[int, int, int]


def canonical_directions() -> tuple[Direction, ...]:
    """All nonzero vectors of {-1, 0, 1}^3 modulo sign.

    Keeps the representative whose first nonzero component is positive, so `d`
    and `-d` appear once.
    """

    dirs: list[Direction] = []
    for vec in product((-1, 0, 1), repeat=3):
        first = next((c for c in vec if c != 0), 0)
        if first > 0:
            dirs.append(vec)
    return tuple(dirs)


LINE_DIRECTIONS: tuple[Direction, ...] = canonical_directions()


def _walk(
    lattice: Lattice,
    start: Coord,
    step: Direction,
    color: Occupancy,
    limit: int | None = None,
) -> list[Coord]:
    out: list[Coord] = []
    dx, dy, dz = step
    x, y, z = start.x + dx, start.y + dy, start.z + dz
    while limit is None or len(out) < limit:
        if not lattice.in_bounds(x, y, z) or lattice.occupancy_at(x, y, z) != color:
            break
        out.append(Coord(x=x, y=y, z=z))
        x, y, z = x + dx, y + dy, z + dz
    return out


def _reverse(direction: Direction) -> Direction:
    return (-direction[0], -direction[1], -direction[2])


def run_through(lattice: Lattice, cell: Coord, direction: Direction, color: Occupancy) -> list[Coord]:
    """Contiguous same-color run along `direction` containing `cell`, ordered along +direction."""

    back = _walk(lattice, cell, _reverse(direction), color)
    forward = _walk(lattice, cell, direction, color)
    return list(reversed(back)) + [cell] + forward


def run_length_at_least(
    lattice: Lattice,
    cell: Coord,
    direction: Direction,
    color: Occupancy,
    threshold: int = WIN_THRESHOLD,
) -> bool:
    """Whether the run through `cell` reaches `threshold`, looking at most `threshold - 1` cells each way."""

    limit = threshold - 1
    forward = _walk(lattice, cell, direction, color, limit=limit)
    if 1 + len(forward) >= threshold:
        return True
    back = _walk(lattice, cell, _reverse(direction), color, limit=limit - len(forward))
    return 1 + len(forward) + len(back) >= threshold


def find_winning_run(
    lattice: Lattice,
    cell: Coord,
    color: Occupancy,
    threshold: int = WIN_THRESHOLD,
) -> list[Coord] | None:
    """Return the full run through `cell` along the first line reaching `threshold`, or None.

    Lines are probed with bounded walks; only the winning line is walked to its ends.
    """

    if color == Occupancy.empty:
        raise ValueError("Win detection needs a player color")

    for direction in LINE_DIRECTIONS:
        if run_length_at_least(lattice, cell, direction, color, threshold):
            return run_through(lattice, cell, direction, color)
    return None
