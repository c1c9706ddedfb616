# main.py
import logging

from flask import Flask

from config import Config
from extensions import socketio

# --- event handlers ---
# Importing these modules registers their @socketio.on handlers.
import general_events  # noqa: F401
import lobby_events  # noqa: F401
import game_events  # noqa: F401
# ----------------------

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    logging.basicConfig(
        level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = Flask(__name__)
    app.config.from_object(config_class)

    from api_routes import api_bp
    from health_check import health_bp
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(health_bp)

    @app.route("/")
    def index():
        return "Real-time game backend is running"

    origins = config_class.CORS_ORIGINS
    socketio.init_app(app, cors_allowed_origins="*" if origins == "*" else origins.split(","))
    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server running on http://%s:%s", Config.HOST, Config.PORT)
    # allow_unsafe_werkzeug: the dev server is fine for local play
    socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                 allow_unsafe_werkzeug=True, use_reloader=False)
