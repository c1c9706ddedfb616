# scheduler.py
import logging
import threading
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

TICK_SECONDS = 1


class TurnTimer:
    """Countdown for one room: a repeating 1s tick plus a one-shot expiry."""

    def __init__(self, room_code: str, duration: int, on_tick: Callable, on_expire: Callable,
                 timer_factory=threading.Timer):
        self.room_code = room_code
        self.duration = duration
        self.remaining = duration
        self.cancelled = False
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._timer_factory = timer_factory
        self._tick_handle = None
        self._expiry_handle = None

    def start(self):
        self._expiry_handle = self._arm(self.duration, self._expire)
        self._tick_handle = self._arm(TICK_SECONDS, self._tick)

    def cancel(self):
        self.cancelled = True
        for handle in (self._tick_handle, self._expiry_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._expiry_handle = None

    def _arm(self, delay, fn):
        handle = self._timer_factory(delay, fn)
        handle.daemon = True
        handle.start()
        return handle

    def _tick(self):
        if self.cancelled:
            return
        self.remaining -= TICK_SECONDS
        self._on_tick(self)
        if self.remaining > 0 and not self.cancelled:
            self._tick_handle = self._arm(TICK_SECONDS, self._tick)
        else:
            self._tick_handle = None

    def _expire(self):
        if self.cancelled:
            return
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        self._expiry_handle = None
        self._on_expire(self.room_code, self)
        # Spent; a tick that re-armed before the cancel above must stay quiet
        self.cancelled = True


class TurnScheduler:
    """Owns at most one live TurnTimer per room code.

    `emitter` is anything with a Flask-SocketIO style `emit(event, data, to=...)`.
    Expiry is delegated to the `on_expire(room_code, timer)` callback given to
    `start`; that callback must check `is_current` under the room lock before
    acting, since a move may have cancelled the timer in the meantime.
    """

    def __init__(self, emitter, timer_factory=threading.Timer):
        self.emitter = emitter
        self.timer_factory = timer_factory
        self._timers: Dict[str, TurnTimer] = {}
        self._lock = threading.Lock()

    def start(self, room_code: str, duration: int, on_expire: Callable) -> TurnTimer:
        timer = TurnTimer(room_code, duration, self._broadcast_tick, on_expire, self.timer_factory)
        with self._lock:
            previous = self._timers.pop(room_code, None)
            if previous is not None:
                previous.cancel()
            self._timers[room_code] = timer
        timer.start()
        logger.debug("[%s] turn timer started (%ss)", room_code, duration)
        return timer

    def cancel(self, room_code: str):
        with self._lock:
            timer = self._timers.pop(room_code, None)
        if timer is not None:
            timer.cancel()
            logger.debug("[%s] turn timer cancelled", room_code)

    def cancel_all(self):
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def get(self, room_code: str) -> Optional[TurnTimer]:
        return self._timers.get(room_code)

    def is_current(self, room_code: str, timer: TurnTimer) -> bool:
        return not timer.cancelled and self._timers.get(room_code) is timer

    def discard(self, room_code: str, timer: TurnTimer):
        """Forget an expired timer without touching whatever replaced it."""
        with self._lock:
            if self._timers.get(room_code) is timer:
                del self._timers[room_code]

    def __len__(self) -> int:
        return len(self._timers)

    def _broadcast_tick(self, timer: TurnTimer):
        if not self.is_current(timer.room_code, timer):
            return
        self.emitter.emit("timerUpdate", {"timeLeft": timer.remaining}, to=timer.room_code)
