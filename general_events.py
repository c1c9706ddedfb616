# general_events.py
import logging

from flask import request

from extensions import socketio
from state import controller

logger = logging.getLogger(__name__)


@socketio.on("connect")
def on_connect():
    logger.info("connect: %s", request.sid)


@socketio.on("disconnect")
def on_disconnect(reason=None):
    logger.info("disconnect: %s%s", request.sid, f" ({reason})" if reason else "")
    controller.disconnect(request.sid)
