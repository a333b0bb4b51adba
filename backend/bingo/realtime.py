from flask_socketio import SocketIO


class SocketIOChannel:
    """Fire-and-forget pub/sub over Flask-SocketIO.

    Connection ids are Socket.IO session ids and groups are Socket.IO rooms,
    all on a single namespace.
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, connection_id: str, event: str, payload: dict) -> None:
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def publish(self, group: str, event: str, payload: dict) -> None:
        self.socketio.emit(event, payload, to=group, namespace=self.namespace)

    def subscribe(self, connection_id: str, group: str) -> None:
        self.socketio.server.enter_room(connection_id, group, namespace=self.namespace)

    def unsubscribe(self, connection_id: str, group: str) -> None:
        self.socketio.server.leave_room(connection_id, group, namespace=self.namespace)
