import logging
from typing import Iterable, List

from bingo.models import Player, now_ms

logger = logging.getLogger(__name__)

LEADERBOARD_EVENT = 'leaderboard:update'


def room_group(room_id: str) -> str:
    return f"room:{room_id}"


def rank_players(players: Iterable[Player]) -> List[dict]:
    """Most lines first; equal scores go to whoever joined earlier.

    ``sorted`` is stable, so players tied on both keys keep join order.
    """
    ranked = sorted(players, key=lambda p: (-p.line_count, p.joined_at))
    return [p.ranking_entry() for p in ranked]


class LeaderboardBroadcaster:
    def __init__(self, registry, channel):
        self.registry = registry
        self.channel = channel

    def snapshot(self, room) -> dict:
        with room.lock:
            return {'players': rank_players(room.players.values()), 'timestamp': now_ms()}

    def publish(self, room_id: str) -> None:
        """Push the full ranking to every subscriber of the room.

        A room that vanished in the meantime is skipped silently.
        """
        room = self.registry.get(room_id)
        if room is None:
            return
        payload = self.snapshot(room)
        self.channel.publish(room_group(room.id), LEADERBOARD_EVENT, payload)
        logger.debug(f"[leaderboard] room={room.id} players={len(payload['players'])}")
