import threading
import time
from typing import Dict, List, Optional

from bingo.services.rooms.board import empty_marks
from bingo.services.rooms.scoring import BOARD_SIZE, count_lines


def now_ms() -> int:
    return int(time.time() * 1000)


class Player:
    """One connection's live state within a room.

    ``marks`` is only ever changed through :meth:`toggle`, which recomputes
    ``line_count`` before returning, so the cached score never drifts.
    """

    def __init__(self, id: str, name: str, board: List[List[str]], joined_at: Optional[int] = None):
        self.id = id
        self.name = name
        self.board = board
        self._marks = empty_marks()
        self.line_count = count_lines(self._marks)
        self.joined_at = now_ms() if joined_at is None else joined_at

    @property
    def marks(self) -> List[List[bool]]:
        return [list(row) for row in self._marks]

    def toggle(self, r: int, c: int) -> int:
        self._marks[r][c] = not self._marks[r][c]
        self.line_count = count_lines(self._marks)
        return self.line_count

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'board': [list(row) for row in self.board],
            'marks': self.marks,
            'lineCount': self.line_count,
            'joinedAt': self.joined_at,
        }

    def ranking_entry(self):
        return {
            'name': self.name,
            'lineCount': self.line_count,
            'joinedAt': self.joined_at,
        }


class Room:
    """An isolated bingo session: 25 shared prompts plus the players in it.

    ``lock`` serializes every join/toggle/disconnect and the broadcast that
    follows it. Rooms never share a lock.
    """

    def __init__(self, id: str, title: str, items: List[str], created_at: Optional[int] = None):
        if len(items) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f'A room needs exactly {BOARD_SIZE * BOARD_SIZE} items')
        self.id = id
        self.title = title
        self.items = tuple(items)
        self.created_at = now_ms() if created_at is None else created_at
        self.last_active_at = self.created_at
        self.players: Dict[str, Player] = {}
        self.closed = False
        self.lock = threading.RLock()

    def touch(self, at: Optional[int] = None) -> None:
        self.last_active_at = now_ms() if at is None else at

    def to_dict(self):
        return {
            'roomId': self.id,
            'title': self.title,
            'items': list(self.items),
            'createdAt': self.created_at,
            'playerCount': len(self.players),
        }
