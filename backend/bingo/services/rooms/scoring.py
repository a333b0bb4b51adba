from typing import Sequence

BOARD_SIZE = 5
MAX_LINES = 2 * BOARD_SIZE + 2


def count_lines(marks: Sequence[Sequence[bool]]) -> int:
    """Count completed lines on a 5x5 mark grid.

    Rows, columns and both diagonals each count once, so the result is in
    [0, 12]. Always a full recount; there is no incremental state.
    """
    count = 0
    for r in range(BOARD_SIZE):
        if all(marks[r][c] for c in range(BOARD_SIZE)):
            count += 1
    for c in range(BOARD_SIZE):
        if all(marks[r][c] for r in range(BOARD_SIZE)):
            count += 1
    if all(marks[i][i] for i in range(BOARD_SIZE)):
        count += 1
    if all(marks[i][BOARD_SIZE - 1 - i] for i in range(BOARD_SIZE)):
        count += 1
    return count
