from flask import current_app, request
from flask_socketio import emit
from bingo import socketio


def _sessions():
    return current_app.extensions['bingo']['sessions']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def handle_connect(auth=None):
    _sessions().connect(_get_sid())
    emit('connected', {'message': 'Connected'})


def handle_disconnect(reason=None):
    sid = _get_sid()
    session = _sessions().disconnect(sid)
    current_app.logger.debug(f"[socket-disconnect] sid={sid} room={session.room_id} reason={reason}")


def handle_player_join(data):
    data = _payload(data)
    _sessions().join(_get_sid(), data.get('roomId'), data.get('name'))


def handle_player_toggle(data):
    data = _payload(data)
    _sessions().toggle(_get_sid(), data.get('r'), data.get('c'))


def handle_leaderboard_watch(data):
    data = _payload(data)
    _sessions().watch(_get_sid(), data.get('roomId'))


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('player:join', handle_player_join, namespace=namespace)
    socketio.on_event('player:toggle', handle_player_toggle, namespace=namespace)
    socketio.on_event('leaderboard:watch', handle_leaderboard_watch, namespace=namespace)
