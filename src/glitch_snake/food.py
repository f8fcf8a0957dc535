"""Random food placement."""

from __future__ import annotations

import random

from .config import GRID_SIZE
from .grid import Coordinate


def place_food(rng: random.Random, size: int = GRID_SIZE) -> Coordinate:
    """Sample a cell uniformly over the board.

    The snake's body is not consulted, so food can land under a segment.
    """
    return (rng.randrange(size), rng.randrange(size))
