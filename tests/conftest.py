import os
import sys
import pytest

# Ensure the project root (containing the flat modules) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from controller import SessionController  # noqa: E402
from handlers import get_handler  # noqa: E402
from models import Player  # noqa: E402
from scheduler import TurnScheduler  # noqa: E402


class FakeEmitter:
    """Records Flask-SocketIO style emits."""

    def __init__(self):
        self.sent = []

    def emit(self, event, data=None, to=None, **kwargs):
        self.sent.append((event, data, to))

    def events(self, name, to=None):
        return [data for event, data, target in self.sent
                if event == name and (to is None or target == to)]

    def clear(self):
        self.sent = []


class ManualTimer:
    def __init__(self, clock, delay, fn):
        self.clock = clock
        self.delay = delay
        self.fn = fn
        self.due = None
        self.cancelled = False
        self.daemon = False

    def start(self):
        self.due = self.clock.now + self.delay
        self.clock.seq += 1
        self.seq = self.clock.seq
        self.clock.pending.append(self)

    def cancel(self):
        self.cancelled = True


class ManualClock:
    """Drop-in for threading.Timer that only fires when advanced."""

    def __init__(self):
        self.now = 0.0
        self.seq = 0
        self.pending = []

    def timer(self, delay, fn):
        return ManualTimer(self, delay, fn)

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if not t.cancelled and t.due <= target]
            if not due:
                break
            t = min(due, key=lambda timer: (timer.due, timer.seq))
            self.pending.remove(t)
            self.now = t.due
            t.fn()
        self.now = target


@pytest.fixture()
def players():
    return [Player("sid-a", "Alice"), Player("sid-b", "Bob")]


@pytest.fixture()
def state_for(players):
    def _make(game_type):
        return get_handler(game_type).create_state(players)
    return _make


@pytest.fixture()
def emitter():
    return FakeEmitter()


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def controller(emitter, clock):
    scheduler = TurnScheduler(emitter, timer_factory=clock.timer)
    return SessionController(emitter, scheduler=scheduler)


@pytest.fixture()
def room_code(controller, emitter):
    """A full room hosted by sid-a with sid-b joined."""
    code = controller.create_room("sid-a", "Alice")
    controller.join_room("sid-b", code, "Bob")
    emitter.clear()
    return code


@pytest.fixture()
def flask_app():
    from config import TestConfig
    from main import create_app
    application = create_app(TestConfig)
    yield application
    from state import scheduler
    scheduler.cancel_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    from extensions import socketio
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for c in clients:
        if c.is_connected():
            c.disconnect()
