from handlers.base_handler import GameHandler
from errors import IllegalMove

WIN_PATTERNS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
]
SYMBOLS = ("X", "O")


class TicTacToeHandler(GameHandler):
    game_type = "tictactoe"
    timer_seconds = 4

    def initial_board(self, players):
        return [None] * 9

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        index = self.int_field(move, "index")
        if not 0 <= index < 9:
            raise IllegalMove("Invalid position")
        if gs.board[index] is not None:
            raise IllegalMove("Position already taken")

        symbol = SYMBOLS[gs.player_index(player_id)]
        gs.board[index] = symbol
        gs.first_move_made = True

        if self.check_win(gs.board, symbol):
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id}
        if all(cell is not None for cell in gs.board):
            self.finish(gs, draw=True)
            return {"draw": True}

        gs.switch_turn()
        return {}

    @staticmethod
    def check_win(board, symbol) -> bool:
        return any(all(board[i] == symbol for i in pattern) for pattern in WIN_PATTERNS)
