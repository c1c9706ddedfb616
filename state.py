# state.py
from config import Config
from controller import SessionController
from extensions import socketio
from registry import RoomRegistry
from scheduler import TurnScheduler
from store import GameStateStore

# Process-wide instances shared by the socket handlers and HTTP routes
registry = RoomRegistry(code_length=Config.ROOM_CODE_LENGTH)
game_states = GameStateStore()
scheduler = TurnScheduler(socketio)
controller = SessionController(socketio, registry=registry, store=game_states, scheduler=scheduler)
