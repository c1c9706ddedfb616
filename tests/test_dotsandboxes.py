from handlers import get_handler

A, B = "sid-a", "sid-b"


def line(kind, row, col):
    return {"type": kind, "row": row, "col": col}


def test_initial_board_shape(state_for):
    board = state_for("dotsandboxes").board
    assert len(board["horizontalLines"]) == 4 and len(board["horizontalLines"][0]) == 3
    assert len(board["verticalLines"]) == 3 and len(board["verticalLines"][0]) == 4
    assert board["boxes"] == [[None] * 3 for _ in range(3)]
    assert board["scores"] == {"player1": 0, "player2": 0}


def test_completing_a_box_scores_and_keeps_turn(state_for):
    handler = get_handler("dotsandboxes")
    gs = state_for("dotsandboxes")

    assert handler.process(gs, line("horizontal", 0, 0), A)["valid"]
    assert handler.process(gs, line("horizontal", 1, 0), B)["valid"]
    assert handler.process(gs, line("vertical", 0, 0), A)["valid"]
    assert gs.current_player_id == B

    result = handler.process(gs, line("vertical", 0, 1), B)
    assert result["valid"]
    assert result["boxesCompleted"] is True
    assert result["completedBoxes"] == [{"row": 0, "col": 0}]
    assert gs.board["scores"] == {"player1": 0, "player2": 1}
    assert gs.board["boxes"][0][0] == "P2"
    assert gs.current_player_id == B


def test_plain_line_switches_turn(state_for):
    handler = get_handler("dotsandboxes")
    gs = state_for("dotsandboxes")
    result = handler.process(gs, line("vertical", 2, 3), A)
    assert result["boxesCompleted"] is False
    assert gs.current_player_id == B


def test_rejections(state_for):
    handler = get_handler("dotsandboxes")
    gs = state_for("dotsandboxes")
    handler.process(gs, line("horizontal", 0, 0), A)
    assert handler.process(gs, line("horizontal", 0, 0), B) == {"valid": False}
    assert handler.process(gs, line("horizontal", 4, 0), B) == {"valid": False}
    assert handler.process(gs, line("vertical", 0, 4), B) == {"valid": False}
    assert handler.process(gs, line("diagonal", 0, 0), B) == {"valid": False}


def test_last_box_ends_game_on_score(state_for):
    handler = get_handler("dotsandboxes")
    gs = state_for("dotsandboxes")
    board = gs.board
    # Every edge except the right side of the bottom-right box is drawn;
    # eight boxes already belong to player 1.
    for row in board["horizontalLines"]:
        row[:] = [True] * 3
    for row in board["verticalLines"]:
        row[:] = [True] * 4
    board["verticalLines"][2][3] = False
    for r in range(3):
        for c in range(3):
            board["boxes"][r][c] = "P1"
    board["boxes"][2][2] = None
    board["scores"] = {"player1": 8, "player2": 0}
    board["completedBoxes"] = 8
    gs.current_player_id = B

    result = handler.process(gs, line("vertical", 2, 3), B)
    assert result["valid"]
    assert result["winner"] == A
    assert gs.is_over
    assert board["scores"] == {"player1": 8, "player2": 1}
