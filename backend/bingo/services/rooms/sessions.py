import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from bingo.errors import BingoError, RoomNotFoundError
from bingo.models import Player
from .board import generate_board
from .leaderboard import LEADERBOARD_EVENT, room_group
from .scoring import BOARD_SIZE

logger = logging.getLogger(__name__)

UNJOINED = 'unjoined'
JOINING = 'joining'
JOINED = 'joined'
DISCONNECTED = 'disconnected'

BOARD_EVENT = 'player:board'
ERROR_EVENT = 'player:error'


@dataclass
class SessionState:
    """Where one connection stands: unjoined, joining, joined (room_id, player_id) or disconnected."""
    status: str = UNJOINED
    room_id: Optional[str] = None
    player_id: Optional[str] = None
    # Spectators subscribe to a room's leaderboard without becoming players
    watching: Optional[str] = None


def sanitize_name(name, default: str = 'Player', max_length: int = 40) -> str:
    n = str(name or '').strip()
    return n[:max_length] if n else default


def _cell_index(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 0 <= value < BOARD_SIZE else None


class SessionCoordinator:
    """Applies join/toggle/disconnect events from connections to rooms.

    Board pushes go to the acting connection only; leaderboard pushes go to
    the room's group. Each room's mutations and the broadcast after them run
    under that room's lock.
    """

    def __init__(self, registry, channel, broadcaster, default_name: str = 'Player',
                 name_max_length: int = 40, rng: Optional[random.Random] = None):
        self.registry = registry
        self.channel = channel
        self.broadcaster = broadcaster
        self.default_name = default_name
        self.name_max_length = name_max_length
        self._rng = rng
        self._sessions: Dict[str, SessionState] = {}
        self._lock = threading.Lock()

    def connect(self, connection_id: str) -> SessionState:
        with self._lock:
            return self._sessions.setdefault(connection_id, SessionState())

    def state(self, connection_id: str) -> SessionState:
        with self._lock:
            return self._sessions.get(connection_id) or SessionState()

    def join(self, connection_id: str, room_id, name) -> Optional[Player]:
        # Claim the session before touching any room so a concurrent join or
        # disconnect for the same connection sees JOINING
        with self._lock:
            session = self._sessions.setdefault(connection_id, SessionState())
            previous = session.status
            if previous == UNJOINED:
                session.status = JOINING
        if previous in (JOINING, JOINED):
            self.channel.send(connection_id, ERROR_EVENT, {'message': 'You have already joined a room.'})
            return None
        if previous != UNJOINED:
            return None
        room = self.registry.get(room_id)
        try:
            if room is None:
                raise RoomNotFoundError(room_id)
            with room.lock:
                if room.closed:
                    raise RoomNotFoundError(room_id)
                player = Player(
                    connection_id,
                    sanitize_name(name, self.default_name, self.name_max_length),
                    generate_board(room.items, self._rng),
                )
                with self._lock:
                    # Disconnected while joining: register nothing
                    if self._sessions.get(connection_id) is not session:
                        logger.info(f"[join-abandoned] room={room.id} sid={connection_id}")
                        return None
                    session.status = JOINED
                    session.room_id = room.id
                    session.player_id = player.id
                room.players[connection_id] = player
                room.touch()
                self.channel.subscribe(connection_id, room_group(room.id))
                self.channel.send(connection_id, BOARD_EVENT, self._board_payload(room, player))
                self.broadcaster.publish(room.id)
        except BingoError as exc:
            with self._lock:
                if session.status == JOINING:
                    session.status = UNJOINED
            logger.info(f"[join-rejected] sid={connection_id} reason={exc.message!r}")
            self.channel.send(connection_id, ERROR_EVENT, {'message': exc.message})
            return None
        logger.info(f"[join] room={room.id} sid={connection_id} name={player.name!r} players={len(room.players)}")
        return player

    def toggle(self, connection_id: str, r, c) -> Optional[Player]:
        session = self.state(connection_id)
        if session.status != JOINED:
            return None
        r, c = _cell_index(r), _cell_index(c)
        if r is None or c is None:
            return None
        room = self.registry.get(session.room_id)
        if room is None:
            return None
        with room.lock:
            player = room.players.get(connection_id)
            if player is None:
                return None
            player.toggle(r, c)
            room.touch()
            self.channel.send(connection_id, BOARD_EVENT, self._board_payload(room, player))
            self.broadcaster.publish(room.id)
        logger.debug(f"[toggle] room={room.id} sid={connection_id} cell=({r},{c}) lines={player.line_count}")
        return player

    def watch(self, connection_id: str, room_id) -> bool:
        """Subscribe a display-only connection to a room's leaderboard."""
        session = self.connect(connection_id)
        room = self.registry.get(room_id)
        if room is None or room.closed:
            self.channel.send(connection_id, ERROR_EVENT, {'message': RoomNotFoundError(room_id).message})
            return False
        with room.lock:
            with self._lock:
                if self._sessions.get(connection_id) is not session:
                    return False
                previous = session.watching
                session.watching = room.id
                own_room = session.room_id
            # A player's own room group stays subscribed
            if previous and previous != room.id and previous != own_room:
                self.channel.unsubscribe(connection_id, room_group(previous))
            self.channel.subscribe(connection_id, room_group(room.id))
            self.channel.send(connection_id, LEADERBOARD_EVENT, self.broadcaster.snapshot(room))
        logger.info(f"[watch] room={room.id} sid={connection_id}")
        return True

    def disconnect(self, connection_id: str) -> SessionState:
        with self._lock:
            session = self._sessions.pop(connection_id, None) or SessionState()
            previous = session.status
            session.status = DISCONNECTED
        if session.watching and session.watching != session.room_id:
            self.channel.unsubscribe(connection_id, room_group(session.watching))
        if previous != JOINED:
            return session
        room = self.registry.get(session.room_id)
        if room is None:
            return session
        with room.lock:
            room.players.pop(connection_id, None)
            room.touch()
            self.channel.unsubscribe(connection_id, room_group(room.id))
            self.broadcaster.publish(room.id)
        logger.info(f"[disconnect] room={room.id} sid={connection_id} players={len(room.players)}")
        return session

    def _board_payload(self, room, player: Player) -> dict:
        return {
            'title': room.title,
            'name': player.name,
            'board': [list(row) for row in player.board],
            'marks': player.marks,
            'lineCount': player.line_count,
        }
