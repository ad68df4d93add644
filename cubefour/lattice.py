from __future__ import annotations

from collections.abc import Iterator

from cubefour.errors import AlreadyOccupied, CoordinateOutOfBounds
from cubefour.models import Coord, Occupancy


class Lattice:
    """N x N x N grid of cells addressed by `(x, y, z)`.

    Occupancy is stored flat at `x*N*N + y*N + z`. The backing list may be shared
    with a `GameState` so that writes through the lattice show up in the state.
    """

    def __init__(self, size: int, cells: list[Occupancy] | None = None) -> None:
        if size < 1:
            raise ValueError("Lattice size must be at least 1")
        count = size**3
        if cells is None:
            cells = [Occupancy.empty] * count
        elif len(cells) != count:
            raise ValueError(f"Expected {count} cells for size {size}, got {len(cells)}")
        self.size = size
        self.cells = cells

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        n = self.size
        return 0 <= x < n and 0 <= y < n and 0 <= z < n

    def index_of(self, x: int, y: int, z: int) -> int:
        if not self.in_bounds(x, y, z):
            raise CoordinateOutOfBounds(x, y, z, self.size)
        n = self.size
        return x * n * n + y * n + z

    def coord_of(self, index: int) -> Coord:
        n = self.size
        if not 0 <= index < n**3:
            raise IndexError(f"Cell index {index} out of range")
        x, rest = divmod(index, n * n)
        y, z = divmod(rest, n)
        return Coord(x=x, y=y, z=z)

    def occupancy_at(self, x: int, y: int, z: int) -> Occupancy:
        return self.cells[self.index_of(x, y, z)]

    def set_occupancy(self, x: int, y: int, z: int, player: Occupancy) -> None:
        if player == Occupancy.empty:
            raise ValueError("Cells can only be claimed by a player")
        idx = self.index_of(x, y, z)
        if self.cells[idx] != Occupancy.empty:
            raise AlreadyOccupied(x, y, z)
        self.cells[idx] = player

    def layer(self, y: int) -> Iterator[Coord]:
        """Coordinates of one y-layer, in index order."""

        if not 0 <= y < self.size:
            raise CoordinateOutOfBounds(0, y, 0, self.size)
        for x in range(self.size):
            for z in range(self.size):
                yield Coord(x=x, y=y, z=z)

    def is_layer_full(self, y: int) -> bool:
        return all(self.occupancy_at(c.x, y, c.z) != Occupancy.empty for c in self.layer(y))

    def is_full(self) -> bool:
        return Occupancy.empty not in self.cells
