# lobby_events.py
import logging

from flask import request
from flask_socketio import join_room

from extensions import socketio
from state import controller

logger = logging.getLogger(__name__)


def _player_name(data, sid):
    # Older clients send the bare name instead of an object
    if isinstance(data, str):
        name = data
    else:
        name = (data or {}).get("playerName")
    return name or f"Player_{sid[:4]}"


@socketio.on("createRoom")
def on_create_room(data=None):
    sid = request.sid
    code = controller.create_room(sid, _player_name(data, sid), subscribe=join_room)
    logger.debug("createRoom -> %s", code)


@socketio.on("joinRoom")
def on_join_room(data):
    sid = request.sid
    data = data or {}
    room_code = data.get("roomCode")
    if isinstance(room_code, str):
        room_code = room_code.strip().upper()
    controller.join_room(sid, room_code, _player_name(data, sid), subscribe=join_room)


@socketio.on("selectGame")
def on_select_game(data):
    data = data or {}
    controller.select_game(request.sid, data.get("roomCode"), data.get("gameType"))
