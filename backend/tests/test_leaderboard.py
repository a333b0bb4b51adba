from bingo.models import Player
from bingo.services.rooms.board import generate_board
from bingo.services.rooms.leaderboard import LeaderboardBroadcaster, rank_players, room_group


def _player(items, sid, name, lines, joined_at):
    player = Player(sid, name, generate_board(items), joined_at=joined_at)
    player.line_count = lines
    return player


def test_ranks_by_lines_then_join_time(items):
    players = [
        _player(items, 'a', 'three', 3, 1),
        _player(items, 'b', 'five-early', 5, 2),
        _player(items, 'c', 'five-late', 5, 3),
        _player(items, 'd', 'one', 1, 4),
    ]
    ranked = rank_players(players)
    assert [p['name'] for p in ranked] == ['five-early', 'five-late', 'three', 'one']
    assert ranked[0] == {'name': 'five-early', 'lineCount': 5, 'joinedAt': 2}


def test_full_ties_keep_insertion_order(items):
    players = [_player(items, sid, sid, 0, 100) for sid in ('x', 'y', 'z')]
    assert [p['name'] for p in rank_players(players)] == ['x', 'y', 'z']


def test_publish_sends_full_ranking_to_room_group(registry, channel, items):
    room = registry.create('t', items)
    room.players['a'] = _player(items, 'a', 'Ann', 0, 10)
    room.players['b'] = _player(items, 'b', 'Bob', 2, 20)

    LeaderboardBroadcaster(registry, channel).publish(room.id)

    assert len(channel.published) == 1
    group, event, payload = channel.published[0]
    assert group == room_group(room.id) == f"room:{room.id}"
    assert event == 'leaderboard:update'
    assert [p['name'] for p in payload['players']] == ['Bob', 'Ann']
    assert isinstance(payload['timestamp'], int)


def test_publish_for_vanished_room_is_a_no_op(registry, channel):
    LeaderboardBroadcaster(registry, channel).publish('GONE00')
    assert channel.published == []
