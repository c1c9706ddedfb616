# game_events.py
from flask import request

from extensions import socketio
from state import controller


@socketio.on("makeMove")
def on_make_move(data):
    data = data or {}
    controller.make_move(request.sid, data.get("roomCode"), data.get("move"), data.get("gameType"))


@socketio.on("requestGameState")
def on_request_game_state(data):
    data = data or {}
    controller.request_game_state(request.sid, data.get("roomCode"))
