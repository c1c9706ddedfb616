from handlers.base_handler import GameHandler
from errors import IllegalMove

BOARD_SIZE = 15
WIN_LENGTH = 5
SYMBOLS = ("●", "○")  # Player 0: Black, Player 1: White
DIRECTIONS = [
    (0, 1),  # Horizontal
    (1, 0),  # Vertical
    (1, 1),  # Diagonal \
    (1, -1),  # Diagonal /
]


class GomokuHandler(GameHandler):
    game_type = "gomoku"
    timer_seconds = 5

    def initial_board(self, players):
        return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        row, col = self._target(move)
        if gs.board[row][col] is not None:
            raise IllegalMove("Position already taken")

        symbol = SYMBOLS[gs.player_index(player_id)]
        gs.board[row][col] = symbol
        gs.first_move_made = True

        winning_line = self.find_winning_line(gs.board, row, col, symbol)
        if winning_line:
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id, "winningLine": winning_line}

        if all(cell is not None for line in gs.board for cell in line):
            self.finish(gs, draw=True)
            return {"draw": True}

        gs.switch_turn()
        return {}

    def _target(self, move):
        # Clients send a flat cell index; a row/col pair is accepted as well
        if "index" in move:
            index = self.int_field(move, "index")
            if not 0 <= index < BOARD_SIZE * BOARD_SIZE:
                raise IllegalMove("Invalid position")
            return divmod(index, BOARD_SIZE)
        row = self.int_field(move, "row")
        col = self.int_field(move, "col")
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IllegalMove("Invalid position")
        return row, col

    @staticmethod
    def _walk(board, row, col, dr, dc, symbol):
        stones = []
        r, c = row + dr, col + dc
        while (len(stones) < WIN_LENGTH - 1 and 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE
               and board[r][c] == symbol):
            stones.append({"row": r, "col": c})
            r += dr
            c += dc
        return stones

    @classmethod
    def find_winning_line(cls, board, row, col, symbol):
        """Exactly five coordinates through (row, col), or [] when there is no five."""
        for dr, dc in DIRECTIONS:
            backward = cls._walk(board, row, col, -dr, -dc, symbol)
            forward = cls._walk(board, row, col, dr, dc, symbol)
            line = list(reversed(backward)) + [{"row": row, "col": col}] + forward
            if len(line) >= WIN_LENGTH:
                return line[:WIN_LENGTH]
        return []
