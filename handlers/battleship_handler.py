import copy

from handlers.base_handler import GameHandler
from errors import IllegalMove

GRID = 10
FLEET_SIZES = [5, 4, 3, 3, 2]
SETUP = "setup"
PLAYING = "playing"


class BattleshipHandler(GameHandler):
    """Two phases: both players place a fleet ("setup"), then trade shots ("playing").

    Fleet placement needs no turn order. Shots are recorded on the shooter's
    own 100-cell `shots` list as "hit" or "miss".
    """

    game_type = "battleship"
    timer_seconds = 8

    def initial_board(self, players):
        return {p.sid: {"ships": [], "shots": [None] * (GRID * GRID)} for p in players}

    def initial_phase(self):
        return SETUP

    def apply_move(self, gs, move, player_id):
        if gs.phase == SETUP:
            return self._place_fleet(gs, move, player_id)
        return self._shoot(gs, move, player_id)

    def _place_fleet(self, gs, move, player_id):
        if gs.is_over:
            raise IllegalMove("Game is over")
        player_board = gs.board.get(player_id)
        if player_board is None:
            raise IllegalMove("Not a player in this game")

        player_board["ships"] = self.validate_fleet(move.get("ships"))

        if all(gs.board[sid]["ships"] for sid in gs.player_ids):
            gs.phase = PLAYING
            gs.first_move_made = True
        return {"phase": gs.phase}

    def _shoot(self, gs, move, player_id):
        self.require_turn(gs, player_id)
        row = self.int_field(move, "row")
        col = self.int_field(move, "col")
        if not (0 <= row < GRID and 0 <= col < GRID):
            raise IllegalMove("Out of bounds")

        shots = gs.board[player_id]["shots"]
        shot_index = row * GRID + col
        if shots[shot_index] is not None:
            raise IllegalMove("Already fired there")

        opponent_id = gs.other_player_id(player_id)
        opponent_ships = gs.board[opponent_id]["ships"]
        hit_ship = next(
            (ship for ship in opponent_ships
             if any(pos["row"] == row and pos["col"] == col for pos in ship["positions"])),
            None,
        )
        shots[shot_index] = "hit" if hit_ship else "miss"

        sunk = None
        if hit_ship and self._is_sunk(hit_ship, shots):
            hit_ship["sunk"] = True
            sunk = copy.deepcopy(hit_ship)

        if hit_ship and all(self._is_sunk(ship, shots) for ship in opponent_ships):
            self.finish(gs, winner_id=player_id)
            return {"hit": True, "sunk": sunk, "winner": player_id}

        gs.switch_turn()
        return {"hit": hit_ship is not None, "sunk": sunk}

    @staticmethod
    def _is_sunk(ship, shots) -> bool:
        return all(shots[pos["row"] * GRID + pos["col"]] == "hit" for pos in ship["positions"])

    @staticmethod
    def validate_fleet(ships):
        """Normalized copy of a submitted fleet; raises IllegalMove when the fleet is malformed."""
        if not isinstance(ships, list) or len(ships) != len(FLEET_SIZES):
            raise IllegalMove("A fleet has exactly five ships")

        fleet = []
        occupied = set()
        for ship in ships:
            positions = ship.get("positions") if isinstance(ship, dict) else None
            if not isinstance(positions, list) or not positions:
                raise IllegalMove("Ship without positions")
            cells = []
            for pos in positions:
                if not isinstance(pos, dict):
                    raise IllegalMove("Malformed position")
                row = GameHandler.int_field(pos, "row")
                col = GameHandler.int_field(pos, "col")
                if not (0 <= row < GRID and 0 <= col < GRID):
                    raise IllegalMove("Ship out of bounds")
                if (row, col) in occupied:
                    raise IllegalMove("Ships overlap")
                occupied.add((row, col))
                cells.append({"row": row, "col": col})
            fleet.append({"positions": cells, "sunk": False})

        sizes = sorted((len(ship["positions"]) for ship in fleet), reverse=True)
        if sizes != FLEET_SIZES:
            raise IllegalMove("Fleet must be sized 5, 4, 3, 3, 2")
        return fleet
