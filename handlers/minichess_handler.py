"""5x5 mini chess with rooks, knights, a king and pawns.

Uppercase pieces belong to the first player and start on rows 3-4; lowercase
pieces start on rows 0-1. Pawns move toward the opposing back rank and never
promote. Capturing the opposing king wins.
"""
from handlers.base_handler import GameHandler
from errors import IllegalMove

SIZE = 5
KING = "k"


def is_upper_side(piece: str) -> bool:
    return piece == piece.upper()


def in_board(row, col) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def is_path_clear(board, from_row, from_col, to_row, to_col) -> bool:
    step_row = (to_row > from_row) - (to_row < from_row)
    step_col = (to_col > from_col) - (to_col < from_col)
    r, c = from_row + step_row, from_col + step_col
    while (r, c) != (to_row, to_col):
        if board[r][c] is not None:
            return False
        r += step_row
        c += step_col
    return True


def is_valid_chess_move(board, from_row, from_col, to_row, to_col) -> bool:
    piece = board[from_row][from_col]
    if not piece or (from_row, from_col) == (to_row, to_col):
        return False
    target = board[to_row][to_col]
    if target and is_upper_side(target) == is_upper_side(piece):
        return False

    d_row = to_row - from_row
    d_col = to_col - from_col
    kind = piece.lower()

    if kind == "p":
        forward = -1 if is_upper_side(piece) else 1
        if d_col == 0 and not target:
            return d_row == forward
        if abs(d_col) == 1 and target:
            return d_row == forward
        return False
    if kind == "r":
        if d_row == 0 or d_col == 0:
            return is_path_clear(board, from_row, from_col, to_row, to_col)
        return False
    if kind == "n":
        return (abs(d_row), abs(d_col)) in ((2, 1), (1, 2))
    if kind == KING:
        return abs(d_row) <= 1 and abs(d_col) <= 1
    return False


def get_valid_moves(board, row, col):
    """Every legal destination for the piece at (row, col)."""
    if not in_board(row, col) or not board[row][col]:
        return []
    return [
        {"row": to_row, "col": to_col}
        for to_row in range(SIZE)
        for to_col in range(SIZE)
        if is_valid_chess_move(board, row, col, to_row, to_col)
    ]


class MiniChessHandler(GameHandler):
    game_type = "minichess"
    timer_seconds = 10

    def initial_board(self, players):
        board = [[None] * SIZE for _ in range(SIZE)]
        board[0] = ["r", "n", "k", "n", "r"]
        board[1] = ["p"] * SIZE
        board[3] = ["P"] * SIZE
        board[4] = ["R", "N", "K", "N", "R"]
        return board

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        from_row = self.int_field(move, "fromRow")
        from_col = self.int_field(move, "fromCol")
        to_row = self.int_field(move, "toRow")
        to_col = self.int_field(move, "toCol")
        if not (in_board(from_row, from_col) and in_board(to_row, to_col)):
            raise IllegalMove("Out of bounds")

        board = gs.board
        piece = board[from_row][from_col]
        if not piece:
            raise IllegalMove("No piece there")
        if is_upper_side(piece) != (gs.player_index(player_id) == 0):
            raise IllegalMove("Not your piece")
        if not is_valid_chess_move(board, from_row, from_col, to_row, to_col):
            raise IllegalMove("Illegal move for piece")

        target = board[to_row][to_col]
        board[to_row][to_col] = piece
        board[from_row][from_col] = None
        gs.first_move_made = True

        if target and target.lower() == KING:
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id, "captured": target}

        gs.switch_turn()
        return {"captured": target} if target else {}
