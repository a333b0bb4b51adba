from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room state lives for the lifetime of this app object; handlers reach it
    # through flask_app.extensions rather than module globals
    from bingo.realtime import SocketIOChannel
    from bingo.services.rooms.registry import RoomRegistry
    from bingo.services.rooms.leaderboard import LeaderboardBroadcaster
    from bingo.services.rooms.sessions import SessionCoordinator

    cfg = flask_app.config
    namespace = cfg.get('SOCKETIO_NAMESPACE', '/ws')
    registry = RoomRegistry(
        code_length=cfg.get('ROOM_CODE_LENGTH', 6),
        item_max_length=cfg.get('ITEM_MAX_LENGTH', 100),
        default_title=cfg.get('DEFAULT_TITLE', 'Bingo'),
        idle_ttl_sec=cfg.get('ROOM_IDLE_TTL_SEC', 0),
    )
    channel = SocketIOChannel(socketio, namespace=namespace)
    broadcaster = LeaderboardBroadcaster(registry, channel)
    sessions = SessionCoordinator(
        registry,
        channel,
        broadcaster,
        default_name=cfg.get('DEFAULT_PLAYER_NAME', 'Player'),
        name_max_length=cfg.get('NAME_MAX_LENGTH', 40),
    )
    flask_app.extensions['bingo'] = {
        'registry': registry,
        'broadcaster': broadcaster,
        'sessions': sessions,
    }

    # Import and register blueprints here
    from bingo.main import main
    flask_app.register_blueprint(main)

    from bingo.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api')

    # Register Socket.IO event handlers on the freshly initialized server
    from bingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    flask_app.logger.info(f"[startup] namespace={namespace} idle_ttl={registry.idle_ttl_sec}s")
    return flask_app
