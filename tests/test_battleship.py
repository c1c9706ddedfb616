import pytest

from handlers import get_handler

A, B = "sid-a", "sid-b"
SIZES = [5, 4, 3, 3, 2]


def fleet(row_offset=0):
    """One horizontal ship per row, anchored at column 0."""
    return [
        {"positions": [{"row": row_offset + i, "col": c} for c in range(size)]}
        for i, size in enumerate(SIZES)
    ]


@pytest.fixture()
def battleship():
    return get_handler("battleship")


@pytest.fixture()
def playing(battleship, state_for):
    gs = state_for("battleship")
    battleship.process(gs, {"ships": fleet()}, A)
    battleship.process(gs, {"ships": fleet(5)}, B)
    return gs


def test_setup_phase_is_turn_free(battleship, state_for):
    gs = state_for("battleship")
    assert gs.phase == "setup"
    assert battleship.process(gs, {"ships": fleet()}, B) == {"valid": True, "phase": "setup"}
    assert not gs.first_move_made
    assert battleship.process(gs, {"ships": fleet(3)}, B)["valid"]
    assert gs.board[B]["ships"][0]["positions"][0] == {"row": 3, "col": 0}

    assert battleship.process(gs, {"ships": fleet()}, A) == {"valid": True, "phase": "playing"}
    assert gs.phase == "playing"
    assert gs.first_move_made
    assert gs.to_dict()["phase"] == "playing"


@pytest.mark.parametrize("ships", [
    None,
    fleet()[:4],
    fleet() + [{"positions": [{"row": 9, "col": 9}]}],
    [{"positions": [{"row": 0, "col": c} for c in range(5)]}] * 5,
    [{"positions": [{"row": 0, "col": 6 + c} for c in range(5)]}] + fleet()[1:],
    [{"positions": [{"row": 9, "col": c} for c in range(4)]}] + fleet()[1:],
    [{"positions": []}] + fleet()[1:],
])
def test_malformed_fleets_rejected(battleship, state_for, ships):
    gs = state_for("battleship")
    assert battleship.process(gs, {"ships": ships}, A) == {"valid": False}
    assert gs.board[A]["ships"] == []


def test_shots_record_hit_and_miss(battleship, playing):
    result = battleship.process(playing, {"row": 5, "col": 0}, A)
    assert result == {"valid": True, "hit": True, "sunk": None}
    assert playing.board[A]["shots"][50] == "hit"
    assert playing.current_player_id == B

    result = battleship.process(playing, {"row": 9, "col": 9}, B)
    assert result == {"valid": True, "hit": False, "sunk": None}
    assert playing.board[B]["shots"][99] == "miss"


def test_repeat_shot_and_wrong_turn_rejected(battleship, playing):
    battleship.process(playing, {"row": 0, "col": 9}, A)
    assert battleship.process(playing, {"row": 0, "col": 0}, A) == {"valid": False}
    battleship.process(playing, {"row": 0, "col": 0}, B)
    assert battleship.process(playing, {"row": 0, "col": 9}, A) == {"valid": False}
    assert battleship.process(playing, {"row": 10, "col": 0}, A) == {"valid": False}


def test_sinking_reports_ship_and_last_ship_wins(battleship, playing):
    # A's fleet sits on rows 0-4, so B misses anywhere below
    misses = iter([(r, c) for r in range(5, 10) for c in range(10)])

    def answer():
        row, col = next(misses)
        assert battleship.process(playing, {"row": row, "col": col}, B)["valid"]

    # B's two-cell destroyer sits on row 9
    result = None
    for col in range(2):
        result = battleship.process(playing, {"row": 9, "col": col}, A)
        answer()
    assert result["sunk"]["positions"] == [{"row": 9, "col": 0}, {"row": 9, "col": 1}]
    assert result["sunk"]["sunk"] is True
    assert playing.board[B]["ships"][4]["sunk"] is True

    targets = [(r, c) for r in range(5, 9) for c in range(SIZES[r - 5])]
    for row, col in targets[:-1]:
        assert battleship.process(playing, {"row": row, "col": col}, A)["valid"]
        answer()

    row, col = targets[-1]
    result = battleship.process(playing, {"row": row, "col": col}, A)
    assert result["winner"] == A
    assert result["hit"] is True
    assert playing.is_over and playing.winner_id == A
