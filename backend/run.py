import os

import click
from bingo import create_app, socketio

app = create_app()


@click.command()
@click.option('--host', default=lambda: os.environ.get('HOST', '0.0.0.0'), show_default='0.0.0.0')
@click.option('--port', default=lambda: int(os.environ.get('PORT', '3000')), type=int, show_default='3000')
@click.option('--debug/--no-debug', default=False)
def serve(host, port, debug):
    """Serve the bingo rooms over HTTP and Socket.IO."""
    # Use SocketIO server to enable websockets in dev
    app.logger.info(f"[serve] http://{host}:{port}")
    socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    serve()
