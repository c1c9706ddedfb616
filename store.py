# store.py
import threading
from typing import Dict, Optional

from models import GameState


class GameStateStore:
    """One GameState per room code, and the lock that serializes work on that room.

    Socket.IO handlers and timer callbacks run on separate threads. Anything
    that reads-then-writes a room's state or timer must hold `lock(code)`.
    """

    def __init__(self):
        self._states: Dict[str, GameState] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock(self, code: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(code)
            if lock is None:
                lock = self._locks[code] = threading.RLock()
            return lock

    def get(self, code: str) -> Optional[GameState]:
        return self._states.get(code)

    def set(self, code: str, gs: GameState):
        self._states[code] = gs

    def delete(self, code: str) -> Optional[GameState]:
        with self._guard:
            self._locks.pop(code, None)
            return self._states.pop(code, None)

    def __contains__(self, code) -> bool:
        return isinstance(code, str) and code in self._states

    def __len__(self) -> int:
        return len(self._states)

    def items(self):
        return list(self._states.items())
