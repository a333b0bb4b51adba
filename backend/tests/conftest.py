import os
import random
import sys
import pytest

# Ensure the backend root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bingo import create_app, socketio
from bingo.services.rooms.leaderboard import LeaderboardBroadcaster
from bingo.services.rooms.registry import RoomRegistry
from bingo.services.rooms.sessions import SessionCoordinator


NAMESPACE = '/ws'
ITEMS = [f"Prompt {i}" for i in range(1, 26)]


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = NAMESPACE
    PUBLIC_BASE_URL = ''
    ROOM_CODE_LENGTH = 6
    ITEM_MAX_LENGTH = 100
    NAME_MAX_LENGTH = 40
    DEFAULT_TITLE = 'Bingo'
    DEFAULT_PLAYER_NAME = 'Player'
    ROOM_IDLE_TTL_SEC = 0
    LOG_LEVEL = 'DEBUG'


class RecordingChannel:
    """In-memory channel: remembers every message and group membership."""

    def __init__(self):
        self.sent = []        # (connection_id, event, payload)
        self.published = []   # (group, event, payload)
        self.groups = {}

    def send(self, connection_id, event, payload):
        self.sent.append((connection_id, event, payload))

    def publish(self, group, event, payload):
        self.published.append((group, event, payload))

    def subscribe(self, connection_id, group):
        self.groups.setdefault(group, set()).add(connection_id)

    def unsubscribe(self, connection_id, group):
        self.groups.get(group, set()).discard(connection_id)

    def sent_to(self, connection_id, event=None):
        return [p for sid, ev, p in self.sent if sid == connection_id and (event is None or ev == event)]

    def last_leaderboard(self, group):
        updates = [p for g, ev, p in self.published if g == group and ev == 'leaderboard:update']
        return updates[-1] if updates else None


@pytest.fixture()
def items():
    return list(ITEMS)


@pytest.fixture()
def channel():
    return RecordingChannel()


@pytest.fixture()
def registry():
    return RoomRegistry(rng=random.Random(7))


@pytest.fixture()
def sessions(registry, channel):
    broadcaster = LeaderboardBroadcaster(registry, channel)
    return SessionCoordinator(registry, channel, broadcaster, rng=random.Random(11))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield make
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except RuntimeError:
            pass


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()
