from handlers.base_handler import GameHandler
from errors import IllegalMove
from utils import player_key

HOME = 0
START = 1
FINISH = 57
PIECES_PER_PLAYER = 2
ENTRY_ROLL = 6


def can_player_move(board, key: str, dice_value: int) -> bool:
    """Whether any of `key`'s pieces has a legal move for `dice_value`."""
    for position in board["players"][key]["pieces"]:
        if position == HOME and dice_value == ENTRY_ROLL:
            return True
        if HOME < position < FINISH and position + dice_value <= FINISH:
            return True
    return False


class LudoHandler(GameHandler):
    game_type = "ludo"
    timer_seconds = 6

    def initial_board(self, players):
        return {
            "players": {
                player_key(i): {"pieces": [HOME] * PIECES_PER_PLAYER, "home": 0}
                for i in range(2)
            },
            "diceValue": 0,
            "diceRolled": False,
        }

    def apply_move(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        action = move.get("action")
        key = player_key(gs.player_index(player_id))
        if action == "rollDice":
            return self._roll_dice(gs, key)
        if action == "movePiece":
            return self._move_piece(gs, move, player_id, key)
        raise IllegalMove("Unknown action")

    def _roll_dice(self, gs, key):
        board = gs.board
        if board["diceRolled"]:
            raise IllegalMove("Dice already rolled")

        board["diceValue"] = self.rng.randint(1, 6)
        board["diceRolled"] = True
        gs.first_move_made = True

        if not can_player_move(board, key, board["diceValue"]):
            # Nothing playable with this roll: the turn is forfeited
            board["diceRolled"] = False
            gs.switch_turn()
            return {"diceValue": board["diceValue"], "turnForfeited": True}
        return {"diceValue": board["diceValue"]}

    def _move_piece(self, gs, move, player_id, key):
        board = gs.board
        if not board["diceRolled"]:
            raise IllegalMove("Roll the dice first")

        player = board["players"][key]
        pieces = player["pieces"]
        piece_index = self.int_field(move, "pieceIndex")
        if not 0 <= piece_index < len(pieces):
            raise IllegalMove("Invalid piece")

        dice = board["diceValue"]
        position = pieces[piece_index]
        if position == FINISH:
            raise IllegalMove("Piece already finished")
        if position == HOME:
            if dice != ENTRY_ROLL:
                raise IllegalMove("A piece can only leave home on a six")
            new_position = START
        else:
            new_position = position + dice

        if new_position >= FINISH:
            new_position = FINISH
            player["home"] += 1

        pieces[piece_index] = new_position
        board["diceRolled"] = False

        if player["home"] >= PIECES_PER_PLAYER:
            self.finish(gs, winner_id=player_id)
            return {"winner": player_id}

        # A six earns another turn
        if dice != ENTRY_ROLL:
            gs.switch_turn()
        return {}

    def on_turn_skipped(self, gs):
        gs.board["diceRolled"] = False
