"""WSGI entry point for production deployment"""

from main import app, socketio
from config import Config

if __name__ == "__main__":
    socketio.run(app, host=Config.HOST, port=Config.PORT)
