from handlers.base_handler import GameHandler
from errors import IllegalMove
from utils import flatten

SIZE = 8
COLORS = ("red", "black")  # Player 0: red (moves up), Player 1: black (moves down)
KING_SUFFIX = "-king"


def piece_color(piece):
    return piece.split("-")[0] if piece else None


def is_king(piece) -> bool:
    return bool(piece) and piece.endswith(KING_SUFFIX)


class CheckersHandler(GameHandler):
    game_type = "checkers"
    timer_seconds = 5

    def initial_board(self, players):
        board = [[None] * SIZE for _ in range(SIZE)]
        for row in range(SIZE):
            for col in range(SIZE):
                if (row + col) % 2 != 1:
                    continue
                if row < 3:
                    board[row][col] = "black"
                elif row >= SIZE - 3:
                    board[row][col] = "red"
        return board

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        from_row = self.int_field(move, "fromRow")
        from_col = self.int_field(move, "fromCol")
        to_row = self.int_field(move, "toRow")
        to_col = self.int_field(move, "toCol")
        for v in (from_row, from_col, to_row, to_col):
            if not 0 <= v < SIZE:
                raise IllegalMove("Out of bounds")

        board = gs.board
        color = COLORS[gs.player_index(player_id)]
        piece = board[from_row][from_col]
        if piece_color(piece) != color:
            raise IllegalMove("Not your piece")
        if not self.is_valid_move(board, from_row, from_col, to_row, to_col, color):
            raise IllegalMove("Illegal checkers move")

        board[to_row][to_col] = piece
        board[from_row][from_col] = None
        gs.first_move_made = True

        captured = None
        if abs(to_row - from_row) == 2:
            mid_row = (from_row + to_row) // 2
            mid_col = (from_col + to_col) // 2
            captured = {"row": mid_row, "col": mid_col, "piece": board[mid_row][mid_col]}
            board[mid_row][mid_col] = None

        far_rank = 0 if color == "red" else SIZE - 1
        if to_row == far_rank and not is_king(piece):
            board[to_row][to_col] = color + KING_SUFFIX

        opponent = COLORS[1 - COLORS.index(color)]
        if not any(piece_color(cell) == opponent for cell in flatten(board)):
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id, "captured": captured}

        gs.switch_turn()
        return {"captured": captured}

    @staticmethod
    def is_valid_move(board, from_row, from_col, to_row, to_col, color) -> bool:
        d_row = to_row - from_row
        d_col = to_col - from_col
        if abs(d_row) != abs(d_col) or abs(d_row) not in (1, 2):
            return False
        if board[to_row][to_col] is not None:
            return False

        # Men only move forward; kings go both ways
        if not is_king(board[from_row][from_col]):
            if color == "red" and d_row > 0:
                return False
            if color == "black" and d_row < 0:
                return False

        if abs(d_row) == 1:
            return True

        jumped = board[from_row + d_row // 2][from_col + d_col // 2]
        return jumped is not None and piece_color(jumped) != color
