from flask import Blueprint, current_app, jsonify, request
from bingo.errors import BingoError, RoomNotFoundError, ValidationError
from bingo.services.rooms.registry import board_url, join_url


rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['bingo']['registry']


def _origin() -> str:
    base = current_app.config.get('PUBLIC_BASE_URL')
    if base:
        return base
    proto = request.headers.get('X-Forwarded-Proto') or request.scheme
    host = request.headers.get('X-Forwarded-Host') or request.host
    return f"{proto}://{host}"


def _room_or_404(room_id):
    room = _registry().get(room_id)
    if room is None:
        raise RoomNotFoundError(room_id)
    return room


@rooms.errorhandler(ValidationError)
def handle_validation_error(exc):
    return jsonify({'ok': False, 'error': exc.message}), 400


@rooms.errorhandler(RoomNotFoundError)
def handle_not_found(exc):
    return jsonify({'ok': False, 'error': exc.message}), 404


@rooms.errorhandler(BingoError)
def handle_bingo_error(exc):
    current_app.logger.warning(f"[room-error] {exc.message}")
    return jsonify({'ok': False, 'error': exc.message}), 503


@rooms.route('/create', methods=['POST'])
def create_room():
    """
    Creates a room from a title and 25 newline-separated prompts.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    room = _registry().create(data.get('title'), data.get('items'))
    origin = _origin()
    return jsonify({
        'ok': True,
        'roomId': room.id,
        'joinUrl': join_url(origin, room.id),
        'boardUrl': board_url(origin, room.id),
        'title': room.title,
    }), 201


@rooms.route('/rooms/<string:room_id>', methods=['GET'])
def get_room(room_id):
    room = _room_or_404(room_id)
    with room.lock:
        payload = room.to_dict()
    payload['ok'] = True
    return jsonify(payload)


@rooms.route('/rooms/<string:room_id>/leaderboard', methods=['GET'])
def get_leaderboard(room_id):
    room = _room_or_404(room_id)
    broadcaster = current_app.extensions['bingo']['broadcaster']
    payload = broadcaster.snapshot(room)
    payload['ok'] = True
    return jsonify(payload)
