from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from cubefour.errors import GameBusy


@contextmanager
def game_lock(lock: threading.Lock, *, blocking: bool = True, timeout: float = -1) -> Iterator[None]:
    """Hold a game's move lock for one logical turn.

    With `blocking=False` a held lock fails fast with `GameBusy` instead of queueing.
    """

    acquired = lock.acquire(blocking, timeout) if blocking else lock.acquire(False)
    if not acquired:
        raise GameBusy("Game is busy")
    try:
        yield
    finally:
        lock.release()
