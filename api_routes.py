"""Stateless HTTP helpers used by the game clients"""

from flask import Blueprint, jsonify, request

from handlers.minichess_handler import SIZE
from state import controller

api_bp = Blueprint('api', __name__)


def _is_minichess_board(board) -> bool:
    return (
        isinstance(board, list)
        and len(board) == SIZE
        and all(isinstance(row, list) and len(row) == SIZE for row in board)
        and all(cell is None or (isinstance(cell, str) and len(cell) == 1) for row in board for cell in row)
    )


@api_bp.route('/valid-moves', methods=['POST'])
def valid_moves():
    """Legal destinations for the mini chess piece at (row, col) on the posted board."""
    data = request.get_json(silent=True) or {}
    board = data.get('board')
    row = data.get('row')
    col = data.get('col')

    if not _is_minichess_board(board):
        return jsonify({"error": "board must be a 5x5 grid"}), 400
    if not isinstance(row, int) or not isinstance(col, int) or isinstance(row, bool) or isinstance(col, bool):
        return jsonify({"error": "row and col must be integers"}), 400

    return jsonify(controller.valid_moves(board, row, col))
