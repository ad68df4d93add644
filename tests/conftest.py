from __future__ import annotations

import pytest

from cubefour.config import EngineConfig
from cubefour.engine import GameEngine


def _top_layer_fill_without_run(size: int) -> list[tuple[int, int, int]]:
    """Play order that fills the top layer with alternating players and no run of four.

    Colors follow `(x + 2z) % 4 < 2`: rows alternate, columns and diagonals change
    color every two cells. Player A gets the first list, B the second.
    """

    y = size - 1
    a_cells = [(x, y, z) for z in range(size) for x in range(size) if (x + 2 * z) % 4 < 2]
    b_cells = [(x, y, z) for z in range(size) for x in range(size) if (x + 2 * z) % 4 >= 2]
    assert len(a_cells) - len(b_cells) in {0, 1}

    order: list[tuple[int, int, int]] = []
    for i, a in enumerate(a_cells):
        order.append(a)
        if i < len(b_cells):
            order.append(b_cells[i])
    return order


@pytest.fixture()
def engine() -> GameEngine:
    return GameEngine(EngineConfig(size=5))


@pytest.fixture()
def top_layer_order() -> list[tuple[int, int, int]]:
    """Top-layer fill for a 5-cube that never completes a run."""

    return _top_layer_fill_without_run(5)
