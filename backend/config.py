import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated origin list; '*' allows any origin (players join from phones on the LAN)
    _cors = os.environ.get('CORS_ORIGINS', '*').strip()
    CORS_ORIGINS = '*' if _cors == '*' else [o.strip() for o in _cors.split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Origin used for join/board links. Empty derives it from the request.
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL', '').rstrip('/')
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '6'))
    ITEM_MAX_LENGTH = int(os.environ.get('ITEM_MAX_LENGTH', '100'))
    NAME_MAX_LENGTH = int(os.environ.get('NAME_MAX_LENGTH', '40'))
    DEFAULT_TITLE = os.environ.get('DEFAULT_TITLE', 'Bingo')
    DEFAULT_PLAYER_NAME = os.environ.get('DEFAULT_PLAYER_NAME', 'Player')
    # Empty rooms idle longer than this are dropped on the next room creation. 0 disables.
    ROOM_IDLE_TTL_SEC = int(os.environ.get('ROOM_IDLE_TTL_SEC', '0'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
