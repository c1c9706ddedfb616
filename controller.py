# controller.py
import logging
from typing import Any, Callable, Dict, Optional

from errors import GameError, RoomFull, RoomNotFound, RoomNotReady
from handlers import get_handler
from handlers.base_handler import GameHandler
from handlers.minichess_handler import get_valid_moves
from models import Room
from registry import RoomRegistry
from scheduler import TurnScheduler, TurnTimer
from store import GameStateStore

logger = logging.getLogger(__name__)


class SessionController:
    """Entry point for every client action.

    Each public method takes the acting connection id (`sid`) and sends its
    results through `emitter.emit(event, data, to=...)`, addressed either to
    that sid or to the room code. `subscribe(room_code)` lets the transport put
    the connection into the broadcast group before the room is notified.
    """

    def __init__(self, emitter, registry: RoomRegistry = None, store: GameStateStore = None,
                 scheduler: TurnScheduler = None):
        self.emitter = emitter
        # Compare with None: an empty registry/store/scheduler has len() 0 and is falsy
        self.registry = registry if registry is not None else RoomRegistry()
        self.store = store if store is not None else GameStateStore()
        self.scheduler = scheduler if scheduler is not None else TurnScheduler(emitter)
        # Handler chosen at selectGame time, kept next to the room's state
        self._handlers: Dict[str, GameHandler] = {}

    # --- rooms ---

    def create_room(self, sid: str, player_name: str, subscribe: Callable = None) -> str:
        room = self.registry.create_room(sid, player_name)
        if subscribe is not None:
            subscribe(room.code)
        self.emitter.emit("roomCreated", {"roomCode": room.code, "isHost": True}, to=sid)
        self.emitter.emit("playerJoined", {"players": room.serialize_players(), "roomCode": room.code}, to=sid)
        return room.code

    def join_room(self, sid: str, room_code: str, player_name: str, subscribe: Callable = None) -> Optional[Room]:
        try:
            room = self.registry.join_room(room_code, sid, player_name)
        except (RoomNotFound, RoomFull) as e:
            logger.info("Join %s by %s refused: %s", room_code, sid, e.message)
            self.emitter.emit("error", e.message, to=sid)
            return None
        if subscribe is not None:
            subscribe(room.code)
        self.emitter.emit("roomJoined", {"roomCode": room.code, "isHost": False}, to=sid)
        self.emitter.emit("playerJoined", {"players": room.serialize_players(), "roomCode": room.code}, to=room.code)
        return room

    def select_game(self, sid: str, room_code: str, game_type: str) -> bool:
        if room_code not in self.registry:
            logger.warning("selectGame for unknown room %s by %s", room_code, sid)
            return False
        with self.store.lock(room_code):
            try:
                room = self.registry.select_game(room_code, game_type, sid)
            except RoomNotReady as e:
                logger.info("selectGame %s in %s by %s refused: %s", game_type, room_code, sid, e.message)
                self.emitter.emit("error", e.message, to=sid)
                return False
            except GameError as e:
                logger.warning("selectGame %s in %s by %s ignored: %s", game_type, room_code, sid, e.message)
                return False

            handler = get_handler(game_type)
            self.scheduler.cancel(room_code)
            self._handlers[room_code] = handler
            self.store.set(room_code, handler.create_state(room.players))

        self.emitter.emit("gameSelected", {"gameType": game_type}, to=room_code)
        return True

    def disconnect(self, sid: str):
        for room, closed in self.registry.leave(sid):
            if not room.is_empty:
                self.emitter.emit("playerLeft", {"players": room.serialize_players()}, to=room.code)
            if closed:
                self.release_room(room.code)

    def release_room(self, room_code: str):
        with self.store.lock(room_code):
            self.scheduler.cancel(room_code)
            self._handlers.pop(room_code, None)
            self.store.delete(room_code)

    # --- game ---

    def make_move(self, sid: str, room_code: str, move: Any, game_type: str = None) -> Optional[Dict[str, Any]]:
        if room_code not in self.store:
            return None
        with self.store.lock(room_code):
            gs = self.store.get(room_code)
            handler = self._handlers.get(room_code)
            if gs is None or handler is None:
                return None

            if game_type is not None and game_type != handler.game_type:
                result = {"valid": False}
            else:
                result = handler.process(gs, move, sid)

            if result["valid"]:
                # An expiry queued behind this lock finds its timer gone and does nothing
                self._cancel_timer(room_code, gs)
                if not gs.is_over and gs.first_move_made and handler.timer_seconds:
                    self._start_timer(room_code, gs, handler.timer_seconds)

            payload = {"gameState": gs.to_dict()}
            payload.update(result)

        self.emitter.emit("gameUpdate", payload, to=room_code)
        return payload

    def request_game_state(self, sid: str, room_code: str) -> Optional[Dict[str, Any]]:
        if room_code not in self.store:
            return None
        with self.store.lock(room_code):
            gs = self.store.get(room_code)
            if gs is None:
                return None
            payload = {"gameState": gs.to_dict(), "valid": True}
        self.emitter.emit("gameUpdate", payload, to=sid)
        return payload

    @staticmethod
    def valid_moves(board, row: int, col: int):
        return get_valid_moves(board, row, col)

    # --- timers ---

    def _start_timer(self, room_code: str, gs, duration: int):
        gs.timer = self.scheduler.start(room_code, duration, self.handle_timer_expired)

    def _cancel_timer(self, room_code: str, gs):
        self.scheduler.cancel(room_code)
        gs.timer = None

    def handle_timer_expired(self, room_code: str, timer: TurnTimer):
        with self.store.lock(room_code):
            if not self.scheduler.is_current(room_code, timer):
                return
            self.scheduler.discard(room_code, timer)
            gs = self.store.get(room_code)
            handler = self._handlers.get(room_code)
            if gs is None or handler is None or gs.is_over:
                return
            gs.timer = None

            skipped = gs.current_player_id
            gs.switch_turn()
            handler.on_turn_skipped(gs)
            logger.info("[%s] turn of %s skipped after %ss", room_code, skipped, timer.duration)

            if handler.timer_seconds:
                self._start_timer(room_code, gs, handler.timer_seconds)
            payload = {"gameState": gs.to_dict(), "valid": True, "turnSkipped": True}

        self.emitter.emit("gameUpdate", payload, to=room_code)
