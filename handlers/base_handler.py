import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from errors import IllegalMove
from models import GameState, Player
from utils import player_key

logger = logging.getLogger(__name__)


class GameHandler(ABC):
    """Rules for one game type.

    A handler is stateless; everything it mutates lives on the GameState it
    is handed. `apply_move` must raise IllegalMove *before* touching the
    state, so a rejected move leaves the state exactly as it was.
    """

    game_type: str = ""
    # Seconds per turn; None disables the turn timer for this game
    timer_seconds: Optional[int] = None
    rng = random

    @abstractmethod
    def initial_board(self, players: List[Player]) -> Any:
        pass

    @abstractmethod
    def apply_move(self, gs: GameState, move: Dict[str, Any], player_id: str) -> Dict[str, Any]:
        pass

    def initial_phase(self) -> Optional[str]:
        return None

    def on_turn_skipped(self, gs: GameState):
        """Called after the turn timer forced a turn switch."""
        pass

    def create_state(self, players: List[Player]) -> GameState:
        players = list(players)
        return GameState(
            game_type=self.game_type,
            current_player_id=players[0].sid,
            players=players,
            board=self.initial_board(players),
            phase=self.initial_phase(),
        )

    def process(self, gs: GameState, move: Any, player_id: str) -> Dict[str, Any]:
        if not isinstance(move, dict):
            return {"valid": False}
        try:
            extra = self.apply_move(gs, move, player_id)
        except IllegalMove as e:
            logger.debug("[%s] rejected move from %s: %s", self.game_type, player_id, e)
            return {"valid": False}
        result = {"valid": True}
        result.update(extra or {})
        return result

    # --- shared rule helpers ---

    def require_turn(self, gs: GameState, player_id: str):
        if gs.is_over:
            raise IllegalMove("Game is over")
        if gs.current_player_id != player_id:
            raise IllegalMove("Not your turn")

    @staticmethod
    def int_field(move: Dict[str, Any], key: str) -> int:
        value = move.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise IllegalMove(f"'{key}' must be an integer")
        return value

    @staticmethod
    def finish(gs: GameState, winner_id: Optional[str] = None, draw: bool = False):
        gs.is_over = True
        gs.winner_id = winner_id
        gs.is_draw = draw

    @staticmethod
    def finish_by_score(gs: GameState, scores: Dict[str, int]):
        """End the game in favour of the higher score; equal scores draw."""
        p1 = scores.get(player_key(0), 0)
        p2 = scores.get(player_key(1), 0)
        gs.is_over = True
        if p1 > p2:
            gs.winner_id = gs.players[0].sid
        elif p2 > p1:
            gs.winner_id = gs.players[1].sid
        else:
            gs.is_draw = True
