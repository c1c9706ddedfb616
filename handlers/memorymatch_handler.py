from handlers.base_handler import GameHandler
from errors import IllegalMove
from utils import player_key, shuffle

PAIRS = 8


class MemoryMatchHandler(GameHandler):
    """Flip two cards per attempt; a match scores and keeps the turn.

    A mismatched pair stays face-up until the client resolves it with
    `{"action": "resolveMismatch"}` after its reveal animation, or until the
    turn timer skips the player. Resolving flips both cards back and passes
    the turn.
    """

    game_type = "memorymatch"
    timer_seconds = 5

    def initial_board(self, players):
        values = [v for v in range(1, PAIRS + 1) for _ in range(2)]
        return {
            "cards": [
                {"value": v, "flipped": False, "matched": False}
                for v in shuffle(values, self.rng)
            ],
            "flippedCards": [],
            "scores": {"player1": 0, "player2": 0},
        }

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        if move.get("action") == "resolveMismatch":
            return self._resolve_mismatch(gs)
        return self._flip(gs, move, player_id)

    def _flip(self, gs, move, player_id):
        board = gs.board
        if len(board["flippedCards"]) >= 2:
            raise IllegalMove("Pending pair must be resolved first")

        card_index = self.int_field(move, "cardIndex")
        if not 0 <= card_index < len(board["cards"]):
            raise IllegalMove("Invalid card")
        card = board["cards"][card_index]
        if card["flipped"] or card["matched"]:
            raise IllegalMove("Card already face-up")

        card["flipped"] = True
        board["flippedCards"].append(card_index)
        gs.first_move_made = True

        if len(board["flippedCards"]) < 2:
            return {}

        first, second = (board["cards"][i] for i in board["flippedCards"])
        if first["value"] != second["value"]:
            return {"noMatch": True}

        first["matched"] = True
        second["matched"] = True
        board["scores"][player_key(gs.player_index(player_id))] += 1
        board["flippedCards"] = []

        if all(c["matched"] for c in board["cards"]):
            self.finish_by_score(gs, board["scores"])
            return {"matched": True, "winner": gs.winner_id, "draw": gs.is_draw}
        return {"matched": True}

    def _resolve_mismatch(self, gs):
        if len(gs.board["flippedCards"]) != 2:
            raise IllegalMove("No pending pair")
        self._flip_back(gs.board)
        gs.switch_turn()
        return {"resolved": True}

    @staticmethod
    def _flip_back(board):
        for i in board["flippedCards"]:
            board["cards"][i]["flipped"] = False
        board["flippedCards"] = []

    def on_turn_skipped(self, gs):
        self._flip_back(gs.board)
