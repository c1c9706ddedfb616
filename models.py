# models.py
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Any, Dict

GameType = Literal[
    "tictactoe",
    "connect4",
    "checkers",
    "gomoku",
    "minichess",
    "dotsandboxes",
    "ludo",
    "memorymatch",
    "minesweeper",
    "battleship",
]

MAX_PLAYERS = 2


@dataclass
class Player:
    sid: str
    name: str
    ready: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.sid, "name": self.name, "ready": self.ready}


@dataclass
class Room:
    code: str
    host_id: str
    players: List[Player] = field(default_factory=list)
    selected_game: Optional[GameType] = None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    @property
    def is_empty(self) -> bool:
        return not self.players

    def has_player(self, sid: str) -> bool:
        return any(p.sid == sid for p in self.players)

    def serialize_players(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.players]


@dataclass
class GameState:
    game_type: GameType
    current_player_id: str
    players: List[Player]
    board: Any = None
    winner_id: Optional[str] = None
    is_draw: bool = False
    is_over: bool = False
    first_move_made: bool = False
    phase: Optional[str] = None
    # Owned by TurnScheduler; only referenced here
    timer: Optional[Any] = field(default=None, repr=False, compare=False)

    @property
    def player_ids(self) -> List[str]:
        return [p.sid for p in self.players]

    def player_index(self, sid: str) -> int:
        """Seat of `sid` (0 or 1), or -1 when it is not playing."""
        for i, p in enumerate(self.players):
            if p.sid == sid:
                return i
        return -1

    def other_player_id(self, sid: str) -> str:
        idx = self.player_index(sid)
        return self.players[1 - idx].sid if idx != -1 else self.players[0].sid

    def switch_turn(self):
        self.current_player_id = self.other_player_id(self.current_player_id)

    def to_dict(self) -> Dict[str, Any]:
        state = {
            "gameType": self.game_type,
            "currentPlayer": self.current_player_id,
            "players": [p.to_dict() for p in self.players],
            "board": copy.deepcopy(self.board),
            "winner": self.winner_id,
            "draw": self.is_draw,
            "gameOver": self.is_over,
            "firstMoveMade": self.first_move_made,
            "timerStarted": self.timer is not None,
            "timeLeft": self.timer.remaining if self.timer is not None else None,
        }
        if self.phase is not None:
            state["phase"] = self.phase
        return state
