# extensions.py
import logging

from flask_socketio import SocketIO

from config import Config

logger = logging.getLogger(__name__)

# Threading mode: turn timers are plain threading.Timer threads.
# With REDIS_URL set, emits go through the Redis message queue so several
# instances can share Socket.IO rooms (game state itself stays per-process).
if Config.REDIS_URL:
    logger.info("Using Redis message queue: %s", Config.REDIS_URL)
    socketio = SocketIO(async_mode='threading', message_queue=Config.REDIS_URL)
else:
    socketio = SocketIO(async_mode='threading')
