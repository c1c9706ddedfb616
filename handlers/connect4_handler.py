from handlers.base_handler import GameHandler
from errors import IllegalMove

ROWS = 6
COLS = 7
CONNECT = 4
SYMBOLS = ("R", "Y")
DIRECTIONS = [
    (0, 1),  # Horizontal
    (1, 0),  # Vertical
    (1, 1),  # Diagonal \
    (1, -1),  # Diagonal /
]


class Connect4Handler(GameHandler):
    game_type = "connect4"
    # No turn timer: this game has never had a per-move countdown
    timer_seconds = None

    def initial_board(self, players):
        return [[None for _ in range(COLS)] for _ in range(ROWS)]

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        col = self.int_field(move, "column")
        if not 0 <= col < COLS:
            raise IllegalMove("Invalid column")

        row = self.drop_row(gs.board, col)
        if row == -1:
            raise IllegalMove("Column is full")

        symbol = SYMBOLS[gs.player_index(player_id)]
        gs.board[row][col] = symbol
        gs.first_move_made = True

        if self.check_win(gs.board, row, col, symbol):
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id, "row": row, "column": col}
        if all(cell is not None for cell in gs.board[0]):
            self.finish(gs, draw=True)
            return {"draw": True, "row": row, "column": col}

        gs.switch_turn()
        return {"row": row, "column": col}

    @staticmethod
    def drop_row(board, col) -> int:
        """Lowest empty row in `col`, or -1 when the column is full."""
        for r in range(ROWS - 1, -1, -1):
            if board[r][col] is None:
                return r
        return -1

    @staticmethod
    def check_win(board, row, col, symbol) -> bool:
        for dr, dc in DIRECTIONS:
            count = 1
            for sign in (1, -1):
                r, c = row + sign * dr, col + sign * dc
                while 0 <= r < ROWS and 0 <= c < COLS and board[r][c] == symbol:
                    count += 1
                    r += sign * dr
                    c += sign * dc
            if count >= CONNECT:
                return True
        return False
