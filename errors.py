# errors.py


class GameError(Exception):
    """Base class for room and move failures. `message` is safe to show to clients."""

    message = "Game error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class RoomNotFound(GameError):
    message = "Room not found"


class RoomFull(GameError):
    message = "Room is full"


class NotHost(GameError):
    message = "Only the host can select a game"


class UnknownGameType(GameError):
    message = "Unknown game type"


class IllegalMove(GameError):
    message = "Illegal move"


class RoomNotReady(GameError):
    message = "Waiting for an opponent"
