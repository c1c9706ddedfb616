"""Gunicorn configuration for Flask-SocketIO (threading mode)"""

import logging
import os

# Worker class - threading async mode needs a threaded worker
worker_class = 'gthread'

# Rooms, game state and turn timers live in process memory
workers = 1
threads = int(os.environ.get('GUNICORN_THREADS', '100'))

# Binding
bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()

timeout = 120
graceful_timeout = 30
keepalive = 5

reload = False
preload_app = False

logger = logging.getLogger("gunicorn.error")


def when_ready(server):
    """Called just after the server is started."""
    logger.info("Gunicorn server ready to accept connections")


def worker_abort(worker):
    """Called when a worker receives the SIGABRT signal (timeout)."""
    logger.error("Worker %s aborted (timeout)", worker.pid)


def worker_exit(server, worker):
    """Stop every pending turn timer before the worker goes away."""
    from state import scheduler
    scheduler.cancel_all()
