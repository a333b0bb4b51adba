import random
from typing import List, Optional, Sequence

from .scoring import BOARD_SIZE

CELL_COUNT = BOARD_SIZE * BOARD_SIZE


def generate_board(items: Sequence[str], rng: Optional[random.Random] = None) -> List[List[str]]:
    """Shuffle a private copy of the room's 25 items into a row-major 5x5 grid.

    ``items`` is never mutated. Two players may still end up with the same
    board; that is not prevented.
    """
    if len(items) != CELL_COUNT:
        raise ValueError(f'Expected {CELL_COUNT} items, got {len(items)}')
    shuffled = list(items)
    (rng or random).shuffle(shuffled)
    return [shuffled[i:i + BOARD_SIZE] for i in range(0, CELL_COUNT, BOARD_SIZE)]


def empty_marks() -> List[List[bool]]:
    return [[False] * BOARD_SIZE for _ in range(BOARD_SIZE)]
