from markupsafe import escape


class BingoError(Exception):
    """Base for errors surfaced to room creators and players."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BingoError):
    pass


class RoomNotFoundError(BingoError):
    def __init__(self, room_id):
        code = str(room_id or '').strip()
        if code:
            # Room ids come straight from the client; never echo them unescaped
            message = f"Room {escape(code)} does not exist or has been closed."
        else:
            message = 'That room does not exist or has been closed.'
        super().__init__(message)
        self.room_id = room_id
