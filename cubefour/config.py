from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_LATTICE_SIZE = 5
WIN_THRESHOLD = 4

LATTICE_SIZE_ENV = "CUBEFOUR_LATTICE_SIZE"


class EngineConfig(BaseModel):
    size: int = Field(DEFAULT_LATTICE_SIZE, ge=1, le=64)
    # Fixed by the rules; present so callers can read it off the config.
    win_threshold: Literal[4] = WIN_THRESHOLD


def get_lattice_size() -> int:
    raw = os.environ.get(LATTICE_SIZE_ENV, "").strip()
    if not raw:
        return DEFAULT_LATTICE_SIZE
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{LATTICE_SIZE_ENV} must be an integer, got {raw!r}") from e


def load_config() -> EngineConfig:
    return EngineConfig(size=get_lattice_size())
