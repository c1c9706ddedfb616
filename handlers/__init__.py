"""Game catalog: one rules handler per supported game type."""
from typing import Dict

from errors import UnknownGameType
from handlers.base_handler import GameHandler
from handlers.battleship_handler import BattleshipHandler
from handlers.checkers_handler import CheckersHandler
from handlers.connect4_handler import Connect4Handler
from handlers.dotsandboxes_handler import DotsAndBoxesHandler
from handlers.gomoku_handler import GomokuHandler
from handlers.ludo_handler import LudoHandler
from handlers.memorymatch_handler import MemoryMatchHandler
from handlers.minesweeper_handler import MinesweeperHandler
from handlers.minichess_handler import MiniChessHandler
from handlers.tictactoe_handler import TicTacToeHandler

HANDLERS: Dict[str, GameHandler] = {
    handler.game_type: handler
    for handler in (
        TicTacToeHandler(),
        Connect4Handler(),
        CheckersHandler(),
        GomokuHandler(),
        MiniChessHandler(),
        DotsAndBoxesHandler(),
        LudoHandler(),
        MemoryMatchHandler(),
        MinesweeperHandler(),
        BattleshipHandler(),
    )
}

GAME_TYPES = tuple(HANDLERS)


def get_handler(game_type: str) -> GameHandler:
    try:
        return HANDLERS[game_type]
    except (KeyError, TypeError):
        raise UnknownGameType(f"Unknown game type: {game_type!r}") from None
