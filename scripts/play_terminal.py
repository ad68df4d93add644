"""Play a hot-seat game in the terminal.

Contract
- Input: one move per line as `x y z` (or `x,y,z`); `q` quits.
- Output: the board, top level first, after every accepted move, plus the
  rejection reason for ignored input and a final win/draw notice.

Usage:
    uv run python scripts/play_terminal.py
    CUBEFOUR_LATTICE_SIZE=4 uv run python scripts/play_terminal.py
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TextIO

from cubefour.board_text import board_to_text, status_line
from cubefour.config import load_config
from cubefour.engine import GameEngine
from cubefour.models import MoveOutcome

logger = logging.getLogger(__name__)

_MOVE_RE = re.compile(r"^\s*(-?\d+)[\s,]+(-?\d+)[\s,]+(-?\d+)\s*$")


def parse_move(line: str) -> tuple[int, int, int] | None:
    m = _MOVE_RE.match(line)
    if m is None:
        return None
    x, y, z = (int(g) for g in m.groups())
    return x, y, z


def play(*, engine: GameEngine, stdin: TextIO, stdout: TextIO) -> int:
    print(board_to_text(state=engine.state), file=stdout)

    for line in stdin:
        if line.strip().lower() in {"q", "quit", "exit"}:
            return 1

        move = parse_move(line)
        if move is None:
            print("Enter a move as: x y z", file=stdout)
            continue

        result = engine.attempt_move(*move)
        if result.outcome == MoveOutcome.rejected:
            reason = result.reason.value if result.reason else "rejected"
            print(f"Ignored {move}: {reason.replace('_', ' ')}", file=stdout)
            continue

        print(board_to_text(state=engine.state), file=stdout)
        if result.is_game_over:
            return 0

    print(status_line(state=engine.state), file=stdout)
    return 1


def main() -> int:
    logging.basicConfig(level=logging.WARNING)
    config = load_config()
    logger.info("starting game with lattice size %d", config.size)
    return play(engine=GameEngine(config), stdin=sys.stdin, stdout=sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())
