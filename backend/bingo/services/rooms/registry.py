import logging
import random
import string
import threading
from typing import Dict, Iterable, List, Optional, Union

from bingo.errors import BingoError, ValidationError
from bingo.models import Room, now_ms
from .board import CELL_COUNT

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def normalize_room_id(room_id) -> str:
    return str(room_id or '').strip().upper()


def parse_items(raw: Union[str, Iterable[str], None], max_length: int = 100) -> List[str]:
    """Turn the host's pasted prompts into exactly 25 trimmed, truncated items.

    Accepts newline-separated text or a list of strings. Blank entries are
    dropped before counting.
    """
    if raw is None:
        lines = []
    elif isinstance(raw, str):
        lines = raw.splitlines()
    elif isinstance(raw, (list, tuple)):
        lines = [str(x) for x in raw if x is not None]
    else:
        raise ValidationError('Items must be text with one entry per line.')
    items = [line.strip() for line in lines]
    items = [item for item in items if item]
    if len(items) != CELL_COUNT:
        raise ValidationError(f'Provide exactly {CELL_COUNT} items, one per line (got {len(items)}).')
    return [item[:max_length] for item in items]


def join_url(origin: str, room_id: str) -> str:
    return f"{origin.rstrip('/')}/play?room={room_id}"


def board_url(origin: str, room_id: str) -> str:
    return f"{origin.rstrip('/')}/board?room={room_id}"


class RoomRegistry:
    """Process-wide table of live rooms.

    Starts empty, gains rooms through :meth:`create`. With ``idle_ttl_sec``
    set, empty rooms that have been idle longer than the TTL are dropped at
    the start of each creation.
    """

    def __init__(self, code_length: int = 6, item_max_length: int = 100, default_title: str = 'Bingo',
                 idle_ttl_sec: int = 0, rng: Optional[random.Random] = None, max_code_attempts: int = 100):
        self.code_length = code_length
        self.item_max_length = item_max_length
        self.default_title = default_title
        self.idle_ttl_sec = idle_ttl_sec
        self.max_code_attempts = max_code_attempts
        self._rng = rng or random.Random()
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id):
        return self.get(room_id) is not None

    def create(self, title, items) -> Room:
        """Validate the prompts and register a new room.

        Raises ValidationError before anything is registered when the item
        count is wrong.
        """
        parsed = parse_items(items, self.item_max_length)
        title = str(title or '').strip() or self.default_title
        if self.idle_ttl_sec > 0:
            self.reap_idle()
        with self._lock:
            room_id = self._fresh_code()
            room = Room(room_id, title, parsed)
            self._rooms[room_id] = room
        logger.info(f"[room-create] room={room_id} items={len(parsed)}")
        return room

    def get(self, room_id) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(normalize_room_id(room_id))

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def reap_idle(self, now: Optional[int] = None) -> List[str]:
        """Drop empty rooms whose last activity is older than the idle TTL."""
        if self.idle_ttl_sec <= 0:
            return []
        now = now_ms() if now is None else now
        cutoff = now - self.idle_ttl_sec * 1000
        reaped = []
        for room in self.rooms():
            with room.lock:
                if room.players or room.last_active_at > cutoff:
                    continue
                room.closed = True
                with self._lock:
                    if self._rooms.get(room.id) is room:
                        del self._rooms[room.id]
                        reaped.append(room.id)
        if reaped:
            logger.info(f"[room-reap] rooms={','.join(reaped)} ttl={self.idle_ttl_sec}s")
        return reaped

    def _fresh_code(self) -> str:
        # Caller holds self._lock
        for _ in range(self.max_code_attempts):
            code = ''.join(self._rng.choices(ROOM_CODE_ALPHABET, k=self.code_length))
            if code not in self._rooms:
                return code
            logger.warning(f"[room-code-collision] code={code}")
        raise BingoError('Could not allocate a room code, try again later.')
