from handlers.base_handler import GameHandler
from errors import IllegalMove
from utils import flatten, player_key

SIZE = 8
MINES = 10
SAFE_CELLS = SIZE * SIZE - MINES


class MinesweeperHandler(GameHandler):
    """Players alternate revealing cells; a mine loses, otherwise most safe cells wins."""

    game_type = "minesweeper"
    timer_seconds = 5

    def initial_board(self, players):
        board = [
            [
                {"isMine": False, "isRevealed": False, "neighborCount": 0, "revealedBy": None}
                for _ in range(SIZE)
            ]
            for _ in range(SIZE)
        ]
        for cell_index in self.rng.sample(range(SIZE * SIZE), MINES):
            row, col = divmod(cell_index, SIZE)
            board[row][col]["isMine"] = True
        return {"board": board, "scores": {"player1": 0, "player2": 0}}

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        row = self.int_field(move, "row")
        col = self.int_field(move, "col")
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise IllegalMove("Out of bounds")

        grid = gs.board["board"]
        cell = grid[row][col]
        if cell["isRevealed"]:
            raise IllegalMove("Cell already revealed")

        cell["isRevealed"] = True
        cell["revealedBy"] = player_id
        gs.first_move_made = True

        if cell["isMine"]:
            winner = gs.other_player_id(player_id)
            self.finish(gs, winner_id=winner)
            return {"hitMine": True, "winner": winner}

        cell["neighborCount"] = self.count_neighbor_mines(grid, row, col)
        scores = gs.board["scores"]
        scores[player_key(gs.player_index(player_id))] += 1

        revealed_safe = sum(1 for c in flatten(grid) if c["isRevealed"] and not c["isMine"])
        if revealed_safe == SAFE_CELLS:
            self.finish_by_score(gs, scores)
            return {"winner": gs.winner_id, "draw": gs.is_draw}

        gs.switch_turn()
        return {}

    @staticmethod
    def count_neighbor_mines(grid, row, col) -> int:
        count = 0
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = row + dr, col + dc
                if 0 <= r < SIZE and 0 <= c < SIZE and grid[r][c]["isMine"]:
                    count += 1
        return count
