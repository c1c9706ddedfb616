# registry.py
import logging
import threading
from typing import Dict, Iterator, List, Optional, Tuple

from errors import NotHost, RoomFull, RoomNotFound, RoomNotReady
from handlers import get_handler
from models import Player, Room
from utils import generate_room_code

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Active rooms keyed by code, plus their membership."""

    def __init__(self, code_length: int = 6):
        self.code_length = code_length
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        with self._lock:
            return iter(list(self._rooms.values()))

    def __contains__(self, code) -> bool:
        return isinstance(code, str) and code in self._rooms

    def get(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def require(self, code: str) -> Room:
        room = self._rooms.get(code) if isinstance(code, str) else None
        if room is None:
            raise RoomNotFound()
        return room

    def create_room(self, player_id: str, player_name: str) -> Room:
        with self._lock:
            code = generate_room_code(self._rooms, self.code_length)
            room = Room(code=code, host_id=player_id, players=[Player(player_id, player_name)])
            self._rooms[code] = room
        logger.info("Room %s created by %s (%s)", code, player_name, player_id)
        return room

    def join_room(self, code: str, player_id: str, player_name: str) -> Room:
        with self._lock:
            room = self.require(code)
            if room.has_player(player_id):
                return room
            if room.is_full:
                raise RoomFull()
            room.players.append(Player(player_id, player_name))
        logger.info("%s (%s) joined room %s (%d players)", player_name, player_id, code, len(room.players))
        return room

    def rooms_for(self, player_id: str) -> List[Room]:
        with self._lock:
            return [room for room in self._rooms.values() if room.has_player(player_id)]

    def leave(self, player_id: str) -> List[Tuple[Room, bool]]:
        """Remove `player_id` from every room it is in.

        Returns `(room, closed)` pairs. A room closes when it empties or when
        its host leaves; closed rooms are already deleted.
        """
        changed = []
        with self._lock:
            for code, room in list(self._rooms.items()):
                if not room.has_player(player_id):
                    continue
                room.players = [p for p in room.players if p.sid != player_id]
                closed = room.is_empty or room.host_id == player_id
                if closed:
                    del self._rooms[code]
                    logger.info("Room %s deleted (%s)", code, "empty" if room.is_empty else "host left")
                else:
                    logger.info("%s left room %s", player_id, code)
                changed.append((room, closed))
        return changed

    def select_game(self, code: str, game_type: str, requester_id: str) -> Room:
        room = self.require(code)
        if room.host_id != requester_id:
            raise NotHost()
        if not room.is_full:
            raise RoomNotReady()
        get_handler(game_type)
        room.selected_game = game_type
        logger.info("Room %s selected %s", code, game_type)
        return room
