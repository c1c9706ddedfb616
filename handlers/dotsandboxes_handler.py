from handlers.base_handler import GameHandler
from errors import IllegalMove
from utils import player_key

GRID_SIZE = 4  # 4x4 dots = 3x3 boxes
BOXES = GRID_SIZE - 1
BOX_OWNERS = ("P1", "P2")


class DotsAndBoxesHandler(GameHandler):
    game_type = "dotsandboxes"
    timer_seconds = 5

    def initial_board(self, players):
        return {
            "gridSize": GRID_SIZE,
            "horizontalLines": [[False] * BOXES for _ in range(GRID_SIZE)],
            "verticalLines": [[False] * GRID_SIZE for _ in range(BOXES)],
            "boxes": [[None] * BOXES for _ in range(BOXES)],
            "scores": {"player1": 0, "player2": 0},
            "completedBoxes": 0,
            "totalBoxes": BOXES * BOXES,
        }

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        board = gs.board

        line_type = move.get("type")
        if line_type == "horizontal":
            lines = board["horizontalLines"]
        elif line_type == "vertical":
            lines = board["verticalLines"]
        else:
            raise IllegalMove("Unknown line type")

        row = self.int_field(move, "row")
        col = self.int_field(move, "col")
        if not (0 <= row < len(lines) and 0 <= col < len(lines[row])):
            raise IllegalMove("Invalid line")
        if lines[row][col]:
            raise IllegalMove("Line already drawn")

        lines[row][col] = True
        gs.first_move_made = True

        idx = gs.player_index(player_id)
        completed = self.claim_boxes(board, BOX_OWNERS[idx])
        if completed:
            # Completing a box earns another turn
            board["scores"][player_key(idx)] += len(completed)
            board["completedBoxes"] += len(completed)
        else:
            gs.switch_turn()

        if board["completedBoxes"] >= board["totalBoxes"]:
            self.finish_by_score(gs, board["scores"])

        return {
            "completedBoxes": completed,
            "boxesCompleted": bool(completed),
            "winner": gs.winner_id,
            "draw": gs.is_draw,
        }

    @staticmethod
    def claim_boxes(board, owner):
        """Claim every unowned box whose four sides are now drawn."""
        h = board["horizontalLines"]
        v = board["verticalLines"]
        completed = []
        for row in range(BOXES):
            for col in range(BOXES):
                if board["boxes"][row][col] is not None:
                    continue
                if h[row][col] and h[row + 1][col] and v[row][col] and v[row][col + 1]:
                    board["boxes"][row][col] = owner
                    completed.append({"row": row, "col": col})
        return completed
